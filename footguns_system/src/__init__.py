"""Footguns System source package."""
