"""Exception hierarchy for the Noor archive."""


class NoorArchiveError(Exception):
    """Base class for all errors raised by the Noor archive."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class SubmissionValidationError(NoorArchiveError):
    """A draft was rejected before anything was persisted."""


class EmptyContentError(SubmissionValidationError):
    """A draft carried no text or drawing content."""


class RemoteStoreUnavailable(NoorArchiveError):
    """The remote store could not supply a usable submission list."""
