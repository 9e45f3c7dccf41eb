"""Content-type driven encoding of request bodies and query strings."""

import json
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

from xdiff.errors import UnsupportedContentType

JSON_TYPE = "application/json"
FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def media_type(content_type: str | None) -> str | None:
    """Return the bare, lower-cased media type of a Content-Type value."""
    if not content_type:
        return None
    return content_type.split(";", 1)[0].strip().lower() or None


def is_json_media_type(mtype: str | None) -> bool:
    """True for ``application/json`` and structured ``+json`` suffixes."""
    return bool(mtype) and (mtype == JSON_TYPE or mtype.endswith("+json"))


def _scalar_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def flatten_pairs(data: Mapping[str, Any], prefix: str = "") -> list[tuple[str, str]]:
    """
    Flatten a mapping into ``(key, text)`` pairs for urlencoding.

    Lists repeat the key; nested mappings use bracket notation (``a[b]``).
    """
    pairs: list[tuple[str, str]] = []
    for key, value in data.items():
        name = f"{prefix}[{key}]" if prefix else str(key)
        if isinstance(value, Mapping):
            pairs.extend(flatten_pairs(value, name))
        elif isinstance(value, (list, tuple)):
            for item in value:
                if isinstance(item, Mapping):
                    pairs.extend(flatten_pairs(item, name))
                else:
                    pairs.append((name, _scalar_text(item)))
        else:
            pairs.append((name, _scalar_text(value)))
    return pairs


def encode_query(params: Mapping[str, Any]) -> str:
    """Encode query parameters; an empty mapping gives an empty string."""
    return urlencode(flatten_pairs(params))


def encode_body(body: Mapping[str, Any], content_type: str | None) -> bytes:
    """
    Serialize a body mapping according to the request's Content-Type.

    Raises:
        UnsupportedContentType: for anything other than JSON or form encodings.
    """
    mtype = media_type(content_type)
    if mtype == JSON_TYPE:
        return json.dumps(body, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    if mtype in FORM_TYPES:
        return encode_query(body).encode("ascii")
    raise UnsupportedContentType(content_type)
