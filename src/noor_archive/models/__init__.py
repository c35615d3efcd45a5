"""Data models for Noor submissions."""

from .submission import (
    ANONYMOUS_FALLBACK,
    UNKNOWN_AUTHOR,
    SubmissionDraft,
    SubmissionRecord,
    SubmissionType,
    ViewScope,
    dump_submissions,
    parse_submission_rows,
    parse_submissions,
)

__all__ = [
    "ANONYMOUS_FALLBACK",
    "UNKNOWN_AUTHOR",
    "SubmissionDraft",
    "SubmissionRecord",
    "SubmissionType",
    "ViewScope",
    "dump_submissions",
    "parse_submission_rows",
    "parse_submissions",
]
