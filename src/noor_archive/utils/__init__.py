"""Shared utilities for the Noor archive."""

from .logging import setup_logging

__all__ = ["setup_logging"]
