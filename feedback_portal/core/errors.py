"""Error taxonomy for the feedback portal."""

from __future__ import annotations


class FeedbackPortalError(Exception):
    """Base class for portal errors carrying a user-facing message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(FeedbackPortalError):
    """Raised for local input problems before any request is sent."""


class RequestError(FeedbackPortalError):
    """Raised when the feedback service is unreachable or answers non-2xx."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"RequestError(message={self.message!r}, status_code={self.status_code!r})"


__all__ = ["FeedbackPortalError", "RequestError", "ValidationError"]
