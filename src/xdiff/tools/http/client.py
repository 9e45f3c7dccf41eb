"""Async HTTP transport built on httpx."""

import time
from dataclasses import dataclass, field

import httpx

from xdiff.config.settings import get_follow_redirects, get_timeout, get_verify_ssl
from xdiff.errors import TransportError


@dataclass
class HTTPResponse:
    """Represents an HTTP response."""

    url: str
    status_code: int
    http_version: str = "HTTP/1.1"
    reason: str = ""
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    content: bytes = b""
    encoding: str = "utf-8"
    response_time: float = 0.0

    @property
    def content_type(self) -> str:
        return self.headers.get("content-type", "")

    @property
    def text(self) -> str:
        """Body decoded with the response charset."""
        return self.content.decode(self.encoding or "utf-8", errors="replace")

    def header_keys(self) -> list[str]:
        """Header names in response order, without duplicates."""
        return list(dict.fromkeys(key for key, _ in self.headers.multi_items()))


class HTTPClient:
    """Async HTTP client used as the transport for profile requests."""

    def __init__(
        self,
        timeout: float | None = None,
        follow_redirects: bool | None = None,
        verify_ssl: bool | None = None,
    ):
        self.timeout = get_timeout() if timeout is None else timeout
        self.follow_redirects = (
            get_follow_redirects() if follow_redirects is None else follow_redirects
        )
        self.verify_ssl = get_verify_ssl() if verify_ssl is None else verify_ssl
        self.client: httpx.AsyncClient | None = None

    async def __aenter__(self):
        self.client = httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=self.follow_redirects,
            verify=self.verify_ssl,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.client:
            await self.client.aclose()
            self.client = None

    async def execute(
        self,
        method: str,
        url: str,
        headers: httpx.Headers | dict[str, str] | None = None,
        content: bytes | None = None,
    ) -> HTTPResponse:
        """
        Send one request and read the whole response.

        Raises:
            TransportError: on connection, TLS, protocol or timeout failures.
        """
        if not self.client:
            raise RuntimeError("Client not initialized. Use async context manager.")

        start = time.monotonic()
        try:
            response = await self.client.request(
                method=method,
                url=url,
                headers=headers,
                content=content or None,
            )
        except httpx.HTTPError as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc
        elapsed = time.monotonic() - start

        return HTTPResponse(
            url=str(response.url),
            status_code=response.status_code,
            http_version=response.http_version,
            reason=httpx.codes.get_reason_phrase(response.status_code),
            headers=httpx.Headers(response.headers),
            content=response.content,
            encoding=response.encoding or "utf-8",
            response_time=round(elapsed, 4),
        )
