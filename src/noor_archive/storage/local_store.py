"""Durable local copy of the submission collection."""

import json
from typing import List, Sequence

from loguru import logger

from ..models.submission import SubmissionRecord, dump_submissions, parse_submission_rows
from .key_value import KeyValueStorage

DEFAULT_STORAGE_KEY = "noorSubmissions"


class LocalSubmissionStore:
    """
    The whole submission collection stored as one JSON array under one key.

    Every write rewrites the full collection (read-modify-write). There is no
    locking: two writers sharing the same storage can overwrite each other's
    additions.
    """

    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_STORAGE_KEY):
        """
        Initialize the store.

        Args:
            storage: Backend holding the serialized collection
            key: Well-known key the collection lives under
        """
        self.storage = storage
        self.key = key

    def load(self) -> List[SubmissionRecord]:
        """
        Load the persisted collection in insertion order.

        Missing data, invalid JSON or a value that is not an array yields an
        empty list instead of an error. Inside an array, rows that fail
        validation are skipped and the rest are kept.
        """
        try:
            blob = self.storage.get_item(self.key)
        except UnicodeDecodeError as e:
            logger.warning(f"Local store key '{self.key}' is not valid UTF-8, treating as empty: {e}")
            return []

        if not blob:
            return []

        try:
            rows = json.loads(blob)
        except ValueError as e:
            logger.warning(f"Local store key '{self.key}' holds invalid JSON, treating as empty: {e}")
            return []

        if not isinstance(rows, list):
            logger.warning(
                f"Local store key '{self.key}' holds {type(rows).__name__} instead of a list, "
                "treating as empty"
            )
            return []

        records, skipped = parse_submission_rows(rows)
        if skipped:
            logger.warning(
                f"Skipped {skipped} malformed submissions in local store key '{self.key}', "
                f"kept {len(records)}"
            )
        return records

    def save(self, records: Sequence[SubmissionRecord]) -> None:
        """Serialize and overwrite the persisted collection."""
        self.storage.set_item(self.key, dump_submissions(records))
        logger.debug(f"Saved {len(records)} submissions under '{self.key}'")
