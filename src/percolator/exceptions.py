from __future__ import annotations


class PercolatorError(Exception):
    """Base error for everything raised or reported by the client."""


class ConfigurationError(PercolatorError, ValueError):
    """Raised when request parameters or options fail client-side validation."""


class HttpError(PercolatorError):
    """Base API HTTP error."""

    def __init__(self, status_code: int, response_text: str) -> None:
        self.status_code = status_code
        self.response_text = response_text
        super().__init__(f"HTTP {status_code}: {response_text}")


class BadRequestError(HttpError):
    """Raised for HTTP 400."""


class UnauthorizedError(HttpError):
    """Raised for HTTP 401."""


class ForbiddenError(HttpError):
    """Raised for HTTP 403."""


class NotFoundError(HttpError):
    """Raised for HTTP 404."""


class ServerError(HttpError):
    """Raised for HTTP 5xx."""


class ClientUnavailableError(PercolatorError, RuntimeError):
    """Raised when no HTTP backend is installed."""


class AsyncClientUnavailableError(ClientUnavailableError):
    """Raised when async methods are used without httpx installed."""


class TransportError(PercolatorError, RuntimeError):
    """Raised when HTTP client transport fails."""


class RequestTimeoutError(TransportError):
    """Raised when HTTP request exceeds timeout."""


class ResponseParseError(PercolatorError, ValueError):
    """Raised when API JSON response cannot be parsed."""


class SerializationError(PercolatorError, ValueError):
    """Raised when a request body cannot be encoded as JSON."""


__all__ = [
    "PercolatorError",
    "ConfigurationError",
    "HttpError",
    "BadRequestError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ServerError",
    "ClientUnavailableError",
    "AsyncClientUnavailableError",
    "TransportError",
    "RequestTimeoutError",
    "ResponseParseError",
    "SerializationError",
]
