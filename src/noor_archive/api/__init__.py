"""Remote store integration."""

from .client import RemoteStoreClient

__all__ = ["RemoteStoreClient"]
