"""Exceptions raised by linear-shorthand."""


class LinearShorthandError(Exception):
    """Base class for all user-facing failures."""


class ConfigurationError(LinearShorthandError):
    """Raised when a required setting, such as the API token, is missing."""


class ValidationError(LinearShorthandError):
    """Raised when the issue title is missing or not descriptive enough."""


class TransportError(LinearShorthandError):
    """Raised when a request to Linear fails or returns a non-2xx response."""

    def __init__(self, message: str, status: int | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class RemoteError(LinearShorthandError):
    """Raised when Linear answers with a GraphQL error payload."""


class CacheError(LinearShorthandError):
    """Raised when the preference file cannot be read or parsed."""
