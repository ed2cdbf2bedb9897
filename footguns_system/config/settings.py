#!/usr/bin/env python3
"""
Configuration Settings
Centralized configuration for the Footguns System.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

DEFAULT_DATA_PATH = Path(__file__).parent.parent / "src" / "catalog" / "data" / "footguns.json"


def _env_int(key: str, default: str) -> int:
    value = os.getenv(key, default)
    try:
        return int(value)
    except ValueError:
        from src.exceptions import ConfigurationError
        raise ConfigurationError(
            f"Invalid integer for {key}: {value!r}",
            {"config_key": key, "value": value}
        )


@dataclass
class CatalogConfig:
    """Footgun definition source."""
    data_path: str = field(
        default_factory=lambda: os.getenv("FOOTGUNS_DATA_PATH", str(DEFAULT_DATA_PATH))
    )


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = field(default_factory=lambda: os.getenv("FOOTGUNS_LOG_LEVEL", "INFO"))
    format: str = field(default_factory=lambda: os.getenv(
        "FOOTGUNS_LOG_FORMAT",
        "%(asctime)s %(levelname)s %(name)s: %(message)s"
    ))

    def configure(self) -> None:
        """Apply this configuration to the root logger."""
        level = logging.getLevelName(self.level.upper())
        if not isinstance(level, int):
            level = logging.INFO
        logging.basicConfig(level=level, format=self.format)


@dataclass
class APIConfig:
    """API configuration."""
    host: str = field(default_factory=lambda: os.getenv("API_HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: _env_int("API_PORT", "8000"))
    debug: bool = field(default_factory=lambda: os.getenv("API_DEBUG", "false").lower() == "true")
    cors_origins: list = None

    def __post_init__(self):
        origins = os.getenv("CORS_ORIGINS", "*")
        self.cors_origins = origins.split(",") if origins else ["*"]


@dataclass
class SearchConfig:
    """Search configuration."""
    default_limit: int = field(default_factory=lambda: _env_int("SEARCH_DEFAULT_LIMIT", "10"))


class Settings:
    """Main settings container."""

    def __init__(self):
        self.catalog = CatalogConfig()
        self.logging = LoggingConfig()
        self.api = APIConfig()
        self.search = SearchConfig()

    @classmethod
    def from_env(cls, env_file: str = ".env") -> "Settings":
        """Load settings from environment file."""
        load_dotenv(env_file, override=True)
        return cls()


settings = Settings()
