from __future__ import annotations

import gzip
import json
from typing import Any, Dict, List, Mapping, Optional, Union
from urllib.parse import quote, urlencode

from .exceptions import SerializationError

# Characters left untouched by JavaScript's encodeURIComponent besides [A-Za-z0-9_.-~].
_URI_COMPONENT_SAFE = "!~*'()"


def serialize_value(value: Any) -> str:
    """Render a parameter value the way the search API expects it on the wire."""

    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(serialize_value(item) for item in value)
    return str(value)


def encode_path_segment(value: Any) -> str:
    """URL-encode a single path component."""

    return quote(serialize_value(value), safe=_URI_COMPONENT_SAFE)


def build_querystring(*sources: Optional[Mapping[str, Any]]) -> str:
    """Merge query mappings left to right and encode them, skipping None values."""

    merged: Dict[str, Any] = {}
    for source in sources:
        if source:
            merged.update(source)
    clean = {key: serialize_value(value) for key, value in merged.items() if value is not None}
    return urlencode(clean)


def serialize_body(body: Any) -> Optional[bytes]:
    if body is None or body == "":
        return None
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode("utf-8")
    try:
        return json.dumps(body).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Failed to serialize request body: {exc}") from exc


def gzip_body(data: bytes) -> bytes:
    return gzip.compress(data)


def warning_headers(headers: Any) -> List[str]:
    """Collect server ``Warning`` headers from an httpx or requests response."""

    get_list = getattr(headers, "get_list", None)
    if get_list is not None:
        return list(get_list("warning"))
    value = headers.get("warning")
    return [value] if value else []


def merge_warnings(*groups: Optional[List[str]]) -> Union[List[str], None]:
    merged = [warning for group in groups if group for warning in group]
    return merged or None


__all__ = [
    "serialize_value",
    "encode_path_segment",
    "build_querystring",
    "serialize_body",
    "gzip_body",
    "warning_headers",
    "merge_warnings",
]
