from __future__ import annotations

from .api import ACCEPTED_QUERYSTRING, SNAKE_CASE, build_percolate, prepare_percolate
from .client import Client
from .exceptions import (
    AsyncClientUnavailableError,
    BadRequestError,
    ClientUnavailableError,
    ConfigurationError,
    ForbiddenError,
    HttpError,
    NotFoundError,
    PercolatorError,
    RequestTimeoutError,
    ResponseParseError,
    SerializationError,
    ServerError,
    TransportError,
    UnauthorizedError,
)
from .structures import DEFAULT_RESULT, Request, RequestOptions, Result
from .transport import Transport, httpx, requests

__all__ = [
    "Client",
    "Transport",
    "build_percolate",
    "prepare_percolate",
    "ACCEPTED_QUERYSTRING",
    "SNAKE_CASE",
    "Request",
    "RequestOptions",
    "Result",
    "DEFAULT_RESULT",
    "httpx",
    "requests",
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
