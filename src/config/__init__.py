"""Configuration package."""

from src.config.settings import Settings, get_settings
from src.config.logging import configure_logging

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
]
