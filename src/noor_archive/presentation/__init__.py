"""View models handed to whatever renders submissions."""

from .cards import SubmissionCard, ViewerRole, build_cards, format_timestamp

__all__ = ["SubmissionCard", "ViewerRole", "build_cards", "format_timestamp"]
