"""Exceptions raised by the location resolver."""


class LocationResolverError(Exception):
    """Base class for all location resolution failures."""


class ConfigurationError(LocationResolverError, ValueError):
    """Raised for a missing API key or a blank place description."""


class ProviderError(LocationResolverError):
    """Raised when Google answers with a status the resolver does not accept."""

    def __init__(self, status: str, error_message: str | None = None):
        self.status = status
        self.error_message = error_message
        detail = f"{status}: {error_message}" if error_message else status
        super().__init__(f"Provider returned status {detail}")


class TransportError(LocationResolverError):
    """Raised when the HTTP request itself fails."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class ResolverTimeoutError(TransportError):
    """Raised when a request exceeds its timeout."""


class MalformedResponseError(LocationResolverError):
    """Raised when a response body is not the JSON shape Google documents."""
