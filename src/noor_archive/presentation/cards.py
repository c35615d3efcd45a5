"""
Card view models for the archive and admin views.

The core resolves who a submission is attributed to and when it was posted;
turning cards into markup is left to the renderer.
"""

from datetime import datetime, tzinfo
from enum import Enum
from typing import Iterable, List, Optional

from pydantic import BaseModel

from ..models.submission import SubmissionRecord, SubmissionType

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
PUBLISHED_LABEL = "Published"
PRIVATE_LABEL = "Private"


class ViewerRole(str, Enum):
    """Who is looking at the cards."""
    PUBLIC = "public"
    ADMIN = "admin"


class SubmissionCard(BaseModel):
    """One rendered-ready submission."""
    author: str
    posted_at: str
    type: SubmissionType  # noqa: A003
    content: str
    timestamp: int
    # Admin-only fields
    status: Optional[str] = None
    email: Optional[str] = None

    def meta_line(self) -> str:
        """Author and date, plus the publication status for admins."""
        parts = [self.author, self.posted_at]
        if self.status is not None:
            parts.append(self.status)
        return " — ".join(parts)


def format_timestamp(timestamp: int, tz: Optional[tzinfo] = None) -> str:
    """
    Render epoch milliseconds as a readable date.

    Args:
        timestamp: Epoch milliseconds
        tz: Target timezone; local time when omitted
    """
    try:
        return datetime.fromtimestamp(timestamp / 1000, tz=tz).strftime(TIMESTAMP_FORMAT)
    except (OverflowError, OSError, ValueError):
        return str(timestamp)


def build_cards(
    records: Iterable[SubmissionRecord],
    role: ViewerRole = ViewerRole.PUBLIC,
    tz: Optional[tzinfo] = None,
) -> List[SubmissionCard]:
    """
    Turn an ordered listing into cards for ``role``, keeping the order.

    Admins additionally see the publication status and the contact email.
    """
    role = ViewerRole(role)
    is_admin = role is ViewerRole.ADMIN

    cards = []
    for record in records:
        cards.append(SubmissionCard(
            author=record.display_name,
            posted_at=format_timestamp(record.timestamp, tz=tz),
            type=record.type,
            content=record.content,
            timestamp=record.timestamp,
            status=(PUBLISHED_LABEL if record.display else PRIVATE_LABEL) if is_admin else None,
            email=record.email if is_admin else None,
        ))
    return cards
