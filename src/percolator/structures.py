from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional


class Request(dict):
    """Wire-level request handed to the dispatcher."""

    def __init__(
        self,
        *,
        method: str,
        path: str,
        body: Any = "",
        querystring: Optional[Dict[str, Any]] = None,
    ) -> None:
        if not isinstance(method, str):
            raise TypeError("method must be str")
        if not isinstance(path, str):
            raise TypeError("path must be str")
        if querystring is not None and not isinstance(querystring, dict):
            raise TypeError("querystring must be dict or None")
        super().__init__(method=method, path=path, body=body, querystring=querystring or {})


class RequestOptions(dict):
    """Per-request transport options derived from the caller's options."""

    def __init__(
        self,
        *,
        ignore: Optional[List[int]] = None,
        requestTimeout: Optional[float] = None,  # noqa: N803
        maxRetries: Optional[int] = None,  # noqa: N803
        asStream: bool = False,  # noqa: N803
        headers: Optional[Mapping[str, str]] = None,
        querystring: Optional[Mapping[str, Any]] = None,
        compression: bool = False,
        warnings: Optional[List[str]] = None,
    ) -> None:
        if ignore is not None and not isinstance(ignore, list):
            raise TypeError("ignore must be list or None")
        if headers is not None and not isinstance(headers, Mapping):
            raise TypeError("headers must be mapping or None")
        if querystring is not None and not isinstance(querystring, Mapping):
            raise TypeError("querystring must be mapping or None")
        super().__init__(
            ignore=ignore,
            requestTimeout=requestTimeout,
            maxRetries=maxRetries,
            asStream=asStream,
            headers=headers,
            querystring=querystring,
            compression=compression,
            warnings=warnings,
        )


class Result(dict):
    """Outcome of a dispatched request."""

    def __init__(
        self,
        *,
        body: Any = None,
        status_code: Optional[int] = None,
        headers: Optional[Dict[str, str]] = None,
        warnings: Optional[List[str]] = None,
    ) -> None:
        if status_code is not None and not isinstance(status_code, int):
            raise TypeError("status_code must be int or None")
        super().__init__(body=body, status_code=status_code, headers=headers, warnings=warnings)


DEFAULT_RESULT: Mapping[str, Any] = MappingProxyType(
    {"body": None, "status_code": None, "headers": None, "warnings": None}
)


__all__ = ["Request", "RequestOptions", "Result", "DEFAULT_RESULT"]
