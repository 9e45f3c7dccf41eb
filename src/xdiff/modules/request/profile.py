"""Request profiles: templated HTTP requests that accept runtime overrides."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qsl, urlsplit, urlunsplit

import httpx

from xdiff.errors import ConfigParseError, InvalidShape
from xdiff.modules.request.codec import JSON_TYPE, encode_body, encode_query
from xdiff.modules.request.overrides import ExtraArgs, coerce_scalar

logger = logging.getLogger(__name__)

HTTP_METHODS = frozenset(
    {"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS", "TRACE", "CONNECT"}
)
PROFILE_FIELDS = frozenset({"method", "url", "params", "headers", "body"})


def _header_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return "" if value is None else str(value)


def _append_query(url: str, query: str) -> str:
    if not query:
        return url
    parts = urlsplit(url)
    merged = f"{parts.query}&{query}" if parts.query else query
    return urlunsplit(parts._replace(query=merged))


@dataclass(frozen=True)
class ResolvedRequest:
    """A request with overrides applied and its body already serialized."""

    method: str
    url: str
    headers: httpx.Headers
    params: dict[str, Any]
    content: bytes = b""

    @property
    def full_url(self) -> str:
        """The URL with merged query parameters appended."""
        return _append_query(self.url, encode_query(self.params))


@dataclass(frozen=True)
class RequestProfile:
    """Template for one HTTP request as described in a profile document."""

    url: str
    method: str = "GET"
    params: Any = None
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    body: Any = None

    @classmethod
    def from_dict(cls, data: Any) -> "RequestProfile":
        """Build a profile from a parsed config mapping."""
        if not isinstance(data, Mapping):
            raise ConfigParseError(f"Request must be a mapping, got {type(data).__name__}")
        url = data.get("url")
        if not isinstance(url, str) or not url:
            raise ConfigParseError("Request is missing a 'url' string")
        unknown = set(data) - PROFILE_FIELDS
        if unknown:
            logger.warning("Ignoring unknown request fields: %s", ", ".join(sorted(unknown)))

        raw_headers = data.get("headers") or {}
        if not isinstance(raw_headers, Mapping):
            raise ConfigParseError("Request 'headers' must be a mapping")
        headers = httpx.Headers(
            [(str(k), _header_text(v)) for k, v in raw_headers.items()], encoding="utf-8"
        )

        return cls(
            url=url,
            method=str(data.get("method") or "GET").upper(),
            params=data.get("params"),
            headers=headers,
            body=data.get("body"),
        )

    @classmethod
    def from_url(cls, raw_url: str) -> "RequestProfile":
        """
        Build a GET profile from a bare URL.

        The query string is moved into ``params`` (values typed with
        :func:`coerce_scalar`) and removed from the URL.
        """
        parts = urlsplit(raw_url.strip())
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise InvalidShape(f"Not an absolute http(s) URL: {raw_url!r}")
        params = {k: coerce_scalar(v) for k, v in parse_qsl(parts.query, keep_blank_values=True)}
        return cls(url=urlunsplit(parts._replace(query="")), params=params or None)

    def to_dict(self) -> dict[str, Any]:
        """Config-document representation; empty fields and a GET method are omitted."""
        data: dict[str, Any] = {}
        if self.method != "GET":
            data["method"] = self.method
        data["url"] = self.url
        if self.params:
            data["params"] = dict(self.params)
        if self.headers:
            data["headers"] = dict(self.headers.items())
        if self.body:
            data["body"] = dict(self.body)
        return data

    def validate(self) -> None:
        """
        Check the profile's shape.

        Raises:
            InvalidShape: if params/body is present but not a mapping, the
                method is unknown or the URL is not absolute.
        """
        if self.method not in HTTP_METHODS:
            raise InvalidShape(f"Unsupported HTTP method: {self.method!r}")
        parts = urlsplit(self.url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise InvalidShape(f"Not an absolute http(s) URL: {self.url!r}")
        if self.params is not None and not isinstance(self.params, Mapping):
            raise InvalidShape(
                f"Params must be an object but got {type(self.params).__name__}: {self.params!r}"
            )
        if self.body is not None and not isinstance(self.body, Mapping):
            raise InvalidShape(
                f"Body must be an object but got {type(self.body).__name__}: {self.body!r}"
            )

    def with_overrides(self, args: ExtraArgs | None = None) -> ResolvedRequest:
        """
        Merge overrides into a new request; the profile itself is left untouched.

        Header overrides replace every existing value of the same name. Query
        and body overrides set top-level keys. Without a Content-Type the
        request defaults to JSON.
        """
        self.validate()
        args = args or ExtraArgs()

        headers = httpx.Headers(self.headers, encoding="utf-8")
        for key, value in args.headers:
            headers[key] = value
        if "content-type" not in headers:
            headers["content-type"] = JSON_TYPE

        params = dict(self.params or {})
        for key, value in args.query:
            params[key] = coerce_scalar(value)

        body = dict(self.body or {})
        for key, value in args.body:
            body[key] = coerce_scalar(value)

        content = encode_body(body, headers.get("content-type"))
        if self.body is None and not args.body:
            content = b""

        return ResolvedRequest(
            method=self.method,
            url=self.url,
            headers=headers,
            params=params,
            content=content,
        )

    def get_url(self, args: ExtraArgs | None = None) -> str:
        """Final URL including merged query parameters."""
        return self.with_overrides(args).full_url
