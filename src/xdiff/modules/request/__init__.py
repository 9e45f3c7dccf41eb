"""Request profiles, override directives and request dispatch."""

from .codec import encode_body, encode_query, media_type
from .executor import RequestExecutor
from .overrides import ExtraArgs, KeyVal, KeyValType, coerce_scalar, parse_key_val
from .profile import RequestProfile, ResolvedRequest

__all__ = [
    "ExtraArgs",
    "KeyVal",
    "KeyValType",
    "RequestExecutor",
    "RequestProfile",
    "ResolvedRequest",
    "coerce_scalar",
    "encode_body",
    "encode_query",
    "media_type",
    "parse_key_val",
]
