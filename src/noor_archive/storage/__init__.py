"""Local persistence for Noor submissions."""

from .key_value import FileKeyValueStorage, KeyValueStorage, MemoryKeyValueStorage
from .local_store import LocalSubmissionStore

__all__ = [
    "FileKeyValueStorage",
    "KeyValueStorage",
    "LocalSubmissionStore",
    "MemoryKeyValueStorage",
]
