"""Library exceptions."""

from __future__ import annotations


class PyEvChargeFinderError(Exception):
    """Base exception for the library."""

    error_type = "unknown"
    default_code: str | None = None

    def __init__(
        self,
        message: str | None = None,
        *,
        error_code: str | None = None,
        detail: str | None = None,
        user_message: str | None = None,
    ) -> None:
        text = message if message is not None else (detail or "")
        super().__init__(text)
        self.error_code = error_code or self.default_code
        self.detail = detail if detail is not None else text
        self.user_message = user_message


class ValidationError(PyEvChargeFinderError):
    """Raised when inputs fail validation."""

    error_type = "validation"
    default_code = "validation_error"


class InvalidQueryError(ValidationError):
    """Raised when a station query is malformed or out of range."""

    default_code = "invalid_query"


class SourceUnavailableError(PyEvChargeFinderError):
    """Raised when the station catalog cannot be reached."""

    error_type = "source"
    default_code = "source_unavailable"


class NetworkError(SourceUnavailableError):
    """Raised when network communication fails."""

    error_type = "network"
    default_code = "network_error"


class FetchTimeoutError(SourceUnavailableError):
    """Raised when a catalog fetch does not finish in time."""

    error_type = "network"
    default_code = "timeout"


class NotFoundError(PyEvChargeFinderError):
    """Raised when a station or record does not exist."""

    error_type = "not_found"
    default_code = "not_found"


class ProviderError(PyEvChargeFinderError):
    """Raised when a provider returns an error or is misconfigured."""

    error_type = "provider"
    default_code = "provider_error"


class ConfigError(PyEvChargeFinderError):
    """Raised when configuration values are invalid."""

    error_type = "config"
    default_code = "config_error"
