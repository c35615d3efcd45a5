"""Shared pytest fixtures for the Noor archive tests."""

import pytest
from loguru import logger

from noor_archive.config import get_settings
from noor_archive.models.submission import SubmissionRecord, SubmissionType
from noor_archive.storage.key_value import MemoryKeyValueStorage
from noor_archive.storage.local_store import LocalSubmissionStore


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Run each test in an empty directory with no NOOR_* configuration."""
    monkeypatch.chdir(tmp_path)
    for name in ("NOOR_SUBMIT_ENDPOINT", "NOOR_FETCH_ENDPOINT", "NOOR_DATA_DIR",
                 "NOOR_CONFIG_FILE", "NOOR_LOG_LEVEL", "NOOR_LOG_FORMAT", "NOOR_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    logger.remove()


@pytest.fixture
def local_store():
    """Local store backed by memory."""
    return LocalSubmissionStore(MemoryKeyValueStorage())


def make_record(timestamp, display=True, anonymous=False, name="Ada", pseudonym="",
                submission_type=SubmissionType.TEXT, content=None, email="ada@umn.edu"):
    """Build a record with sensible defaults for tests."""
    return SubmissionRecord(
        email=email,
        name=name,
        pseudonym=pseudonym,
        anonymous=anonymous,
        display=display,
        type=submission_type,
        content=content if content is not None else f"<p>entry {timestamp}</p>",
        timestamp=timestamp,
    )


@pytest.fixture
def record_factory():
    """Expose ``make_record`` to tests."""
    return make_record
