"""HTTP helpers for xdiff."""

from .client import HTTPClient, HTTPResponse

__all__ = [
    "HTTPClient",
    "HTTPResponse",
]
