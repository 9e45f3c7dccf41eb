"""Tools package for xdiff."""

from typing import Protocol

import httpx

from xdiff.tools.http import HTTPClient, HTTPResponse


class HTTPTransport(Protocol):
    """Protocol for transports used by RequestExecutor."""

    async def execute(
        self,
        method: str,
        url: str,
        headers: httpx.Headers | dict[str, str] | None = None,
        content: bytes | None = None,
    ) -> HTTPResponse:
        """Send a request and return the complete response."""
        ...


__all__ = [
    "HTTPClient",
    "HTTPResponse",
    "HTTPTransport",
]
