from typing import Optional


class TranslationError(Exception):
    """Base class for every failure surfaced by the translation provider."""

    def __init__(self, message: str, detail: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class AuthenticationError(TranslationError):
    """Credentials are missing, unreadable, or did not yield a token."""


class ServiceCallError(TranslationError):
    """The remote service answered with a non-success HTTP status."""

    def __init__(self, message: str, status_code: int, body: Optional[str] = None) -> None:
        super().__init__(message, detail=body)
        self.status_code = status_code
        self.body = body


class ServiceUnavailableError(TranslationError):
    """The remote service could not be reached."""


class ResponseParseError(TranslationError):
    """The remote service answered with a body that could not be understood."""
