"""Configuration module for the Noor archive."""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
