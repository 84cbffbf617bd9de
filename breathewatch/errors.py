"""Error kinds shared by the directory, the classifier, the stores and the API.

Every failure the core reports carries one of three kinds. The API maps them to
HTTP status codes; the comparison engine turns them into per-name results.
"""

from enum import Enum


class ErrorKind(Enum):
    INVALID_ARGUMENT = "invalid_argument"
    NOT_FOUND = "not_found"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"


class BreatheWatchError(Exception):
    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InvalidArgument(BreatheWatchError):
    """Bad or missing input shape."""
    kind = ErrorKind.INVALID_ARGUMENT


class NotFound(BreatheWatchError):
    """Unknown neighborhood, or no stored reading for it."""
    kind = ErrorKind.NOT_FOUND


class UpstreamUnavailable(BreatheWatchError):
    """Record store or directory source could not be read."""
    kind = ErrorKind.UPSTREAM_UNAVAILABLE
