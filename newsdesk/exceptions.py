# newsdesk/exceptions.py


class NewsdeskError(Exception):
    """Base error for the publication pipeline."""


class ValidationError(NewsdeskError):
    """Raised when a draft is missing title, content or PIN."""


class AuthenticationError(NewsdeskError):
    """Raised when a PIN matches no configured role digest."""


class QuotaExceededError(NewsdeskError):
    """Raised when a role has already published its allowed number of items."""

    def __init__(self, current: int, limit: int):
        self.current = current
        self.limit = limit
        super().__init__(
            f"User limit reached! You have already published {current}/{limit} items."
        )


class TransportError(NewsdeskError):
    """Raised when the remote store answers with a non-2xx status or is unreachable."""

    def __init__(self, message: str, *, status: int | None = None, body: str = ""):
        self.status = status
        self.body = body
        super().__init__(message)


class UploadError(TransportError):
    """Raised when a single media upload fails."""
