"""
Custom Exceptions for the Footguns System

Provides clear, actionable error messages and a small error hierarchy.
Load errors are fatal (the catalog is never partially built); lookup
errors are recoverable and left to the caller.
"""


class FootgunsException(Exception):
    """Base exception for all Footguns System errors."""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self):
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }


# Catalog Load Errors

class CatalogLoadError(FootgunsException):
    """Raised when a catalog definition cannot be loaded."""
    pass


class MalformedRecordError(CatalogLoadError):
    """Raised when a record is missing a required field or a field is invalid."""

    def __init__(self, record_index: int, field: str, reason: str):
        super().__init__(
            f"Malformed record at position {record_index}: '{field}' {reason}",
            {"record_index": record_index, "field": field, "reason": reason}
        )


class DuplicateIdError(CatalogLoadError):
    """Raised when two records in a definition share an id."""

    def __init__(self, footgun_id: int):
        super().__init__(
            f"Duplicate footgun id: {footgun_id}",
            {"footgun_id": footgun_id}
        )


# Lookup Errors

class NotFoundError(FootgunsException):
    """Raised when a footgun cannot be found by id."""

    def __init__(self, footgun_id):
        super().__init__(
            f"Footgun not found: {footgun_id}",
            {"footgun_id": footgun_id}
        )


# Lifecycle Errors

class InvalidStatusTransitionError(FootgunsException):
    """Raised when a record's status cannot move to the requested status."""

    def __init__(self, footgun_id: int, current_status: str, requested_status: str, reason: str = None):
        message = f"Footgun {footgun_id} cannot move from '{current_status}' to '{requested_status}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message,
            {
                "footgun_id": footgun_id,
                "current_status": current_status,
                "requested_status": requested_status,
                "reason": reason
            }
        )


# Configuration Errors

class ConfigurationError(FootgunsException):
    """Raised when configuration is invalid."""
    pass
