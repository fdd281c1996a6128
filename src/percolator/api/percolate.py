"""Binding for the ``_percolate`` endpoint.

``build_percolate`` turns a dispatcher (``make_request``) into the public
``percolate(params, options, callback)`` callable. The callable validates the
parameters, renames camelCase options to their wire names, builds the URL path
and hands everything to the dispatcher. Without a callback it returns a
:class:`concurrent.futures.Future` settled by the dispatcher's outcome.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future
from numbers import Number
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from ..exceptions import ConfigurationError
from ..structures import DEFAULT_RESULT, Request, RequestOptions
from ..utils import encode_path_segment

logger = logging.getLogger(__name__)

Callback = Callable[[Optional[BaseException], Any], Any]
MakeRequest = Callable[[Request, RequestOptions, Callback], Any]

ACCEPTED_QUERYSTRING = frozenset(
    {
        "routing",
        "preference",
        "ignore_unavailable",
        "allow_no_indices",
        "expand_wildcards",
        "percolate_index",
        "percolate_type",
        "percolate_routing",
        "percolate_preference",
        "percolate_format",
        "version",
        "version_type",
        "pretty",
        "human",
        "error_trace",
        "source",
        "filter_path",
    }
)

SNAKE_CASE: Mapping[str, str] = MappingProxyType(
    {
        "ignoreUnavailable": "ignore_unavailable",
        "allowNoIndices": "allow_no_indices",
        "expandWildcards": "expand_wildcards",
        "percolateIndex": "percolate_index",
        "percolateType": "percolate_type",
        "percolateRouting": "percolate_routing",
        "percolatePreference": "percolate_preference",
        "percolateFormat": "percolate_format",
        "versionType": "version_type",
        "errorTrace": "error_trace",
        "filterPath": "filter_path",
    }
)

# Consumed by the request itself, never sent as query parameters.
STRUCTURAL_KEYS = frozenset({"method", "body", "index", "type", "id"})


def _is_status(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def _validate(params: Mapping[str, Any], options: Mapping[str, Any]) -> Optional[str]:
    if params.get("index") is None:
        return "Missing required parameter: index"
    if params.get("type") is None:
        return "Missing required parameter: type"

    headers = options.get("headers")
    if headers is not None and not isinstance(headers, Mapping):
        return f"Headers should be an object, instead got: {type(headers).__name__}"

    ignore = options.get("ignore")
    if ignore is not None and not _is_status(ignore):
        if isinstance(ignore, (str, bytes)) or not isinstance(ignore, Sequence):
            return f"Ignore should be a number or a list of numbers, instead got: {type(ignore).__name__}"
        if not all(_is_status(status) for status in ignore):
            return "Ignore should be a number or a list of numbers, instead got a list with non-numeric items"
    return None


def _semicopy(params: Mapping[str, Any]) -> Tuple[Dict[str, Any], Optional[List[str]]]:
    querystring: Dict[str, Any] = {}
    warnings: Optional[List[str]] = None
    for key, value in params.items():
        if key in STRUCTURAL_KEYS:
            continue
        name = SNAKE_CASE.get(key, key)
        querystring[name] = value
        if name not in ACCEPTED_QUERYSTRING:
            if warnings is None:
                warnings = []
            warnings.append(f'Client - Unknown parameter: "{key}", sending it as query parameter')
    return querystring, warnings


def _normalize_ignore(ignore: Any) -> Optional[List[int]]:
    if ignore is None:
        return None
    if _is_status(ignore):
        return [ignore]
    return list(ignore)


def _build_path(index: Any, doc_type: Any, doc_id: Any) -> str:
    if index is not None and doc_type is not None and doc_id is not None:
        segments = (index, doc_type, doc_id)
    else:
        segments = (index, doc_type)
    return "/" + "/".join(encode_path_segment(segment) for segment in segments) + "/_percolate"


def _or_default(value: Any, default: Any) -> Any:
    return default if value is None else value


def _build_request(params: Mapping[str, Any], options: Mapping[str, Any]) -> Tuple[Request, RequestOptions]:
    querystring, warnings = _semicopy(params)
    body = params.get("body")
    method = params.get("method")
    if method is None:
        method = "GET" if body is None else "POST"

    request = Request(
        method=method,
        path=_build_path(params.get("index"), params.get("type"), params.get("id")),
        body=_or_default(body, ""),
        querystring=querystring,
    )
    request_options = RequestOptions(
        ignore=_normalize_ignore(options.get("ignore")),
        requestTimeout=options.get("requestTimeout"),
        maxRetries=options.get("maxRetries"),
        asStream=_or_default(options.get("asStream"), False),
        headers=options.get("headers"),
        querystring=options.get("querystring"),
        compression=_or_default(options.get("compression"), False),
        warnings=warnings,
    )
    return request, request_options


def prepare_percolate(
    params: Optional[Mapping[str, Any]] = None,
    options: Optional[Mapping[str, Any]] = None,
) -> Tuple[Request, RequestOptions]:
    """Validate and normalize a percolate call without dispatching it.

    Raises :class:`ConfigurationError` when a required parameter is missing,
    ``options["headers"]`` is not a mapping or ``options["ignore"]`` is not a
    status code or a list of them.
    """

    params = params or {}
    options = options or {}
    message = _validate(params, options)
    if message is not None:
        raise ConfigurationError(message)
    return _build_request(params, options)


def build_percolate(
    make_request: MakeRequest,
    configuration_error: Callable[[str], BaseException] = ConfigurationError,
    result: Any = DEFAULT_RESULT,
) -> Callable[..., Any]:
    """Build the ``percolate`` callable on top of a dispatcher.

    Configuration errors are never raised: they are reported through the
    callback (or the returned future) together with ``result``.
    """

    def dispatch(params: Mapping[str, Any], options: Mapping[str, Any], callback: Callback) -> Any:
        message = _validate(params, options)
        if message is not None:
            return callback(configuration_error(message), result)

        request, request_options = _build_request(params, options)
        logger.debug("Dispatching percolate request %s %s", request["method"], request["path"])
        return make_request(request, request_options, callback)

    def percolate(params: Any = None, options: Any = None, callback: Optional[Callback] = None) -> Any:
        """Perform a percolate request.

        Accepts ``percolate(params, options, callback)``, ``percolate(params,
        callback)`` and ``percolate(callback)``. Without a callback a
        :class:`concurrent.futures.Future` is returned instead.
        """

        if not options and not callable(options):
            options = {}
        if callable(options):
            callback = options
            options = {}
        if params is None or callable(params):
            callback = params
            params = {}
            options = {}

        if callback is None:
            future: Future = Future()

            def settle(err: Optional[BaseException], body: Any) -> None:
                if err is not None:
                    future.set_exception(err)
                else:
                    future.set_result(body)

            try:
                percolate(params, options, settle)
            except Exception as exc:
                if future.done():
                    raise
                future.set_exception(exc)
            return future

        return dispatch(params, options, callback)

    return percolate


__all__ = [
    "ACCEPTED_QUERYSTRING",
    "SNAKE_CASE",
    "STRUCTURAL_KEYS",
    "build_percolate",
    "prepare_percolate",
]
