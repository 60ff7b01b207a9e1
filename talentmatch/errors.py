"""Error types raised by the matching core."""


class MatchingError(Exception):
    """Base class for errors surfaced to callers of the matching core."""

    pass


class ValidationError(MatchingError):
    """Raised when the caller can correct the input (e.g. add skills to a profile)."""

    pass


class NotFoundError(MatchingError):
    """Raised when a required record (candidate, active job, recommendation) is missing."""

    pass
