"""Configuration module for unibidi."""

from unibidi.config.base import Settings
from unibidi.config.loader import get_settings

__all__ = ["Settings", "get_settings"]
