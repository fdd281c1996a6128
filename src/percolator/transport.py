from __future__ import annotations

import io
import json
import logging
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .exceptions import (
    AsyncClientUnavailableError,
    BadRequestError,
    ClientUnavailableError,
    ForbiddenError,
    HttpError,
    NotFoundError,
    PercolatorError,
    RequestTimeoutError,
    ResponseParseError,
    ServerError,
    TransportError,
    UnauthorizedError,
)
from .structures import Result
from .utils import build_querystring, gzip_body, merge_warnings, serialize_body, warning_headers

try:
    import httpx
except ImportError:  # pragma: no cover - depends on installed extra
    httpx = None  # type: ignore[assignment]

try:
    import requests
except ImportError:  # pragma: no cover - depends on installed extra
    requests = None  # type: ignore[assignment]

logger = logging.getLogger(__name__)


@dataclass
class Transport:
    """Sends prepared requests to a search node and turns responses into results.

    ``request`` follows the dispatcher contract used by the endpoint bindings:
    it never raises client errors, it reports them through the callback.
    """

    base_url: str
    request_timeout: float = 30.0
    max_retries: int = 3
    headers: Optional[Dict[str, str]] = None
    compression: bool = False

    def _build_url(
        self,
        path: str,
        querystring: Optional[Mapping[str, Any]] = None,
        extra: Optional[Mapping[str, Any]] = None,
    ) -> str:
        if not isinstance(path, str):
            raise TypeError("path must be str")
        path = "/" + path.lstrip("/")
        base = self.base_url.rstrip("/")
        query = build_querystring(querystring, extra)
        if not query:
            return f"{base}{path}"
        return f"{base}{path}?{query}"

    @staticmethod
    def _raise_for_status(response: Any, ignore: Optional[List[int]] = None) -> None:
        status_code = int(response.status_code)
        if ignore and status_code in ignore:
            return
        response_text = response.text

        if status_code == HTTPStatus.BAD_REQUEST:
            raise BadRequestError(status_code, response_text)
        if status_code == HTTPStatus.UNAUTHORIZED:
            raise UnauthorizedError(status_code, response_text)
        if status_code == HTTPStatus.FORBIDDEN:
            raise ForbiddenError(status_code, response_text)
        if status_code == HTTPStatus.NOT_FOUND:
            raise NotFoundError(status_code, response_text)
        if HTTPStatus.INTERNAL_SERVER_ERROR <= status_code <= 599:
            raise ServerError(status_code, response_text)
        if status_code >= HTTPStatus.BAD_REQUEST:
            raise HttpError(status_code, response_text)

    @staticmethod
    def _ensure_sync_backend() -> None:
        if httpx is None and requests is None:
            raise ClientUnavailableError(
                "No HTTP client is installed. Install percolator-client[httpx] or percolator-client[requests]."
            )

    def _prepare(
        self, request: Mapping[str, Any], options: Mapping[str, Any]
    ) -> Tuple[str, Optional[bytes], Dict[str, str], float, int]:
        url = self._build_url(request["path"], request.get("querystring"), options.get("querystring"))

        headers: Dict[str, str] = dict(self.headers or {})
        headers.update(options.get("headers") or {})

        content = serialize_body(request.get("body"))
        if content is not None:
            headers.setdefault("Content-Type", "application/json")
        if options.get("compression") or self.compression:
            headers["Accept-Encoding"] = "gzip,deflate"
            if content is not None:
                content = gzip_body(content)
                headers["Content-Encoding"] = "gzip"

        timeout = options.get("requestTimeout")
        if timeout is None:
            timeout = self.request_timeout
        retries = options.get("maxRetries")
        if retries is None:
            retries = self.max_retries
        return url, content, headers, timeout, retries

    @staticmethod
    def _log_client_warnings(options: Mapping[str, Any]) -> None:
        for warning in options.get("warnings") or ():
            logger.warning(warning)

    @staticmethod
    def _decode_body(response: Any, as_stream: bool) -> Any:
        if as_stream:
            return io.BytesIO(response.content)
        text = response.text
        if not text.strip():
            return None
        if "json" not in response.headers.get("content-type", ""):
            return text
        try:
            return json.loads(text)
        except ValueError as exc:
            raise ResponseParseError("Failed to parse API JSON response.") from exc

    def _to_result(self, response: Any, options: Mapping[str, Any]) -> Result:
        logger.debug("Received HTTP %s from %s", response.status_code, self.base_url)
        self._raise_for_status(response, options.get("ignore"))
        return Result(
            body=self._decode_body(response, bool(options.get("asStream"))),
            status_code=int(response.status_code),
            headers=dict(response.headers),
            warnings=merge_warnings(options.get("warnings"), warning_headers(response.headers)),
        )

    def _send(self, method: str, url: str, content: Optional[bytes], headers: Dict[str, str], timeout: float) -> Any:
        if httpx is not None:
            try:
                with httpx.Client(timeout=timeout) as client:
                    return client.request(method, url, content=content, headers=headers)
            except httpx.TimeoutException as exc:
                raise RequestTimeoutError("HTTP request timeout exceeded.") from exc
            except httpx.HTTPError as exc:
                raise TransportError("HTTP transport error in httpx client.") from exc
        try:
            with requests.Session() as session:  # type: ignore[union-attr]
                return session.request(method, url, data=content, headers=headers, timeout=timeout)
        except requests.Timeout as exc:  # type: ignore[union-attr]
            raise RequestTimeoutError("HTTP request timeout exceeded.") from exc
        except requests.RequestException as exc:  # type: ignore[union-attr]
            raise TransportError("HTTP transport error in requests client.") from exc

    async def _send_async(
        self, method: str, url: str, content: Optional[bytes], headers: Dict[str, str], timeout: float
    ) -> Any:
        try:
            async with httpx.AsyncClient(timeout=timeout) as client:
                return await client.request(method, url, content=content, headers=headers)
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError("HTTP request timeout exceeded.") from exc
        except httpx.HTTPError as exc:
            raise TransportError("HTTP transport error in httpx client.") from exc

    @staticmethod
    def _next_attempt(exc: TransportError, attempt: int, retries: int, method: str, url: str) -> int:
        if attempt >= retries:
            raise exc
        attempt += 1
        logger.warning("Retrying %s %s (%d/%d) after error: %s", method, url, attempt, retries, exc)
        return attempt

    def perform(self, request: Mapping[str, Any], options: Mapping[str, Any]) -> Result:
        """Send ``request`` and return its result, raising on any failure."""

        self._ensure_sync_backend()
        url, content, headers, timeout, retries = self._prepare(request, options)
        self._log_client_warnings(options)

        attempt = 0
        while True:
            try:
                response = self._send(request["method"], url, content, headers, timeout)
            except TransportError as exc:
                attempt = self._next_attempt(exc, attempt, retries, request["method"], url)
                continue
            return self._to_result(response, options)

    async def perform_async(self, request: Mapping[str, Any], options: Mapping[str, Any]) -> Result:
        if httpx is None:
            raise AsyncClientUnavailableError("Async methods require httpx. Install percolator-client[httpx].")

        url, content, headers, timeout, retries = self._prepare(request, options)
        self._log_client_warnings(options)

        attempt = 0
        while True:
            try:
                response = await self._send_async(request["method"], url, content, headers, timeout)
            except TransportError as exc:
                attempt = self._next_attempt(exc, attempt, retries, request["method"], url)
                continue
            return self._to_result(response, options)

    def request(self, request: Mapping[str, Any], options: Mapping[str, Any], callback: Any) -> Any:
        """Dispatch ``request`` and report the outcome as ``callback(error, result)``."""

        try:
            result = self.perform(request, options)
        except PercolatorError as exc:
            return callback(
                exc,
                Result(
                    body=getattr(exc, "response_text", None),
                    status_code=getattr(exc, "status_code", None),
                    warnings=options.get("warnings"),
                ),
            )
        return callback(None, result)


__all__ = ["Transport", "httpx", "requests"]
