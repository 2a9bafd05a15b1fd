"""Application configuration utilities."""

from .logging import setup_logging
from .settings import DEFAULT_STORAGE_KEY, Settings, get_settings

__all__ = [
    "DEFAULT_STORAGE_KEY",
    "Settings",
    "get_settings",
    "setup_logging",
]
