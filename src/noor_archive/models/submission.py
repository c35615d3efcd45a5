"""
Pydantic models for Noor submissions.

A ``SubmissionRecord`` is the immutable unit shared by the local store, the
remote store and the views. Its JSON form (eight fields, no id) is the wire
format for both the persisted collection and the remote endpoints.
"""

from enum import Enum
from typing import Any, Dict, List, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError, field_validator

from ..exceptions import EmptyContentError, SubmissionValidationError

ANONYMOUS_FALLBACK = "Anonymous"
UNKNOWN_AUTHOR = "Unknown"


class SubmissionType(str, Enum):
    """Kind of content an author submitted."""
    TEXT = "text"
    DRAWING = "drawing"


class ViewScope(str, Enum):
    """Which records a listing should include."""
    ALL = "all"
    PUBLISHED = "published"


def _none_as_empty(value: Any) -> Any:
    return "" if value is None else value


class SubmissionDraft(BaseModel):
    """
    Author-supplied payload before a pseudonym and timestamp are assigned.

    Text content is trimmed of surrounding whitespace, mirroring how the
    submission form reads its editor.
    """
    email: str = ""
    name: str = ""
    anonymous: bool = False
    display: bool = False
    type: SubmissionType = SubmissionType.TEXT  # noqa: A003
    content: str = ""

    @field_validator("email", "name", mode="before")
    @classmethod
    def _strip_contact(cls, value: Any) -> Any:
        value = _none_as_empty(value)
        return value.strip() if isinstance(value, str) else value

    @field_validator("content", mode="before")
    @classmethod
    def _content_not_none(cls, value: Any) -> Any:
        return _none_as_empty(value)

    @property
    def normalized_content(self) -> str:
        """Content as it will be stored."""
        if self.type is SubmissionType.TEXT:
            return self.content.strip()
        return self.content


class SubmissionRecord(BaseModel):
    """
    One persisted submission.

    Records are frozen: nothing in the system updates or deletes them. The
    timestamp (epoch milliseconds) doubles as the sort key and the only
    identity a record has.

    Parsing stays lenient so rows written elsewhere (the remote sheet, older
    local data) still load; new records go through ``create``, which also
    enforces the content and pseudonym rules.
    """
    email: str = ""
    name: str = ""
    pseudonym: str = ""
    anonymous: bool = False
    display: bool = False
    type: SubmissionType  # noqa: A003
    content: str
    timestamp: int

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("email", "name", "pseudonym", mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> Any:
        return _none_as_empty(value)

    @classmethod
    def create(cls, **fields: Any) -> "SubmissionRecord":
        """
        Build a new record, enforcing the rules for locally created entries.

        Raises:
            EmptyContentError: If the content is blank
            SubmissionValidationError: If the pseudonym is set for a named
                record or missing for an anonymous one
        """
        record = cls(**fields)
        if not record.content.strip():
            raise EmptyContentError("Submission content must not be empty.")
        if record.anonymous != bool(record.pseudonym):
            raise SubmissionValidationError(
                "A pseudonym is required for anonymous submissions and not allowed otherwise."
            )
        return record

    @property
    def display_name(self) -> str:
        """Name shown to viewers: the pseudonym when anonymous, else the name."""
        if self.anonymous:
            return self.pseudonym or ANONYMOUS_FALLBACK
        return self.name or UNKNOWN_AUTHOR

    def to_wire(self) -> Dict[str, Any]:
        """JSON-ready dict sent to the remote store."""
        return self.model_dump(mode="json")


_SUBMISSION_LIST = TypeAdapter(List[SubmissionRecord])


def parse_submissions(data: Any) -> List[SubmissionRecord]:
    """
    Validate a serialized submission list.

    Accepts either a JSON string/bytes or already-decoded Python data.

    Raises:
        pydantic.ValidationError: If the data is not a list of submissions
    """
    if isinstance(data, (str, bytes, bytearray)):
        return _SUBMISSION_LIST.validate_json(data)
    return _SUBMISSION_LIST.validate_python(data)


def dump_submissions(records: Sequence[SubmissionRecord]) -> str:
    """Serialize records to a compact, deterministic JSON array."""
    return _SUBMISSION_LIST.dump_json(list(records)).decode("utf-8")


def parse_submission_rows(rows: Sequence[Any]) -> Tuple[List[SubmissionRecord], int]:
    """
    Validate decoded rows one at a time.

    Returns:
        The valid records in their original order, and how many rows were skipped
    """
    records = []
    skipped = 0
    for row in rows:
        try:
            records.append(SubmissionRecord.model_validate(row))
        except ValidationError:
            skipped += 1
    return records, skipped
