from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional

from .api.percolate import build_percolate, prepare_percolate
from .exceptions import ConfigurationError
from .structures import DEFAULT_RESULT, Result
from .transport import Transport


@dataclass
class Client:
    """Search API client with callback, future and coroutine entry points."""

    node: str
    request_timeout: float = 30.0
    max_retries: int = 3
    headers: Optional[Dict[str, str]] = None
    compression: bool = False
    transport: Transport = field(init=False, repr=False)
    _percolate: Callable[..., Any] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.node, str) or not self.node:
            raise ConfigurationError("node must be a non-empty URL string")
        self.transport = Transport(
            base_url=self.node,
            request_timeout=self.request_timeout,
            max_retries=self.max_retries,
            headers=self.headers,
            compression=self.compression,
        )
        self._percolate = build_percolate(self.transport.request, ConfigurationError, DEFAULT_RESULT)

    def percolate(self, params: Any = None, options: Any = None, callback: Any = None) -> Any:
        """Match a document against the queries registered on an index.

        With a callback, returns whatever the callback returns; without one,
        returns a :class:`concurrent.futures.Future` holding the result.
        """

        return self._percolate(params, options, callback)

    async def percolate_async(
        self,
        params: Optional[Mapping[str, Any]] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Result:
        request, request_options = prepare_percolate(params, options)
        return await self.transport.perform_async(request, request_options)


__all__ = ["Client"]
