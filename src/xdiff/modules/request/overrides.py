"""Runtime override directives (``key=value``, ``%key=value``, ``@key=value``)."""

import json
import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from xdiff.errors import InvalidOverrideKey

HEADER_SIGIL = "%"
BODY_SIGIL = "@"


class KeyValType(Enum):
    """Where an override lands in the request."""

    QUERY = "query"
    HEADER = "header"
    BODY = "body"


@dataclass(frozen=True)
class KeyVal:
    """A single parsed override directive."""

    key_type: KeyValType
    key: str
    value: str


@dataclass
class ExtraArgs:
    """Overrides grouped by destination, each list kept in directive order."""

    headers: list[tuple[str, str]] = field(default_factory=list)
    query: list[tuple[str, str]] = field(default_factory=list)
    body: list[tuple[str, str]] = field(default_factory=list)

    @classmethod
    def from_key_vals(cls, key_vals: Iterable[KeyVal]) -> "ExtraArgs":
        """Sort parsed directives into header, query and body lists."""
        args = cls()
        for kv in key_vals:
            if kv.key_type is KeyValType.HEADER:
                args.headers.append((kv.key, kv.value))
            elif kv.key_type is KeyValType.BODY:
                args.body.append((kv.key, kv.value))
            else:
                args.query.append((kv.key, kv.value))
        return args

    @classmethod
    def parse(cls, directives: Iterable[str]) -> "ExtraArgs":
        """Parse raw ``key=value`` strings straight into an ``ExtraArgs``."""
        return cls.from_key_vals(parse_key_val(d) for d in directives)

    def is_empty(self) -> bool:
        return not (self.headers or self.query or self.body)


def parse_key_val(directive: str) -> KeyVal:
    """
    Parse one override directive.

    ``%`` marks a header, ``@`` a body field and a leading ASCII letter a query
    parameter. Key and value are trimmed.

    Raises:
        InvalidOverrideKey: if there is no ``=`` or the key has an unknown prefix.
    """
    key, sep, value = directive.partition("=")
    if not sep:
        raise InvalidOverrideKey(f"Invalid key value pair: {directive!r}")
    key = key.strip()
    value = value.strip()

    if key.startswith(HEADER_SIGIL):
        key_type, key = KeyValType.HEADER, key[1:].strip()
    elif key.startswith(BODY_SIGIL):
        key_type, key = KeyValType.BODY, key[1:].strip()
    elif key[:1].isascii() and key[:1].isalpha():
        key_type = KeyValType.QUERY
    else:
        raise InvalidOverrideKey(f"Invalid key type in {directive!r}")

    if not key:
        raise InvalidOverrideKey(f"Missing key in {directive!r}")
    return KeyVal(key_type=key_type, key=key, value=value)


def coerce_scalar(value: str) -> Any:
    """
    Interpret an override or query-string value.

    Numbers, booleans and ``null`` become the matching JSON scalar; anything
    else (including quoted strings, arrays and objects) stays the raw string.
    """
    try:
        parsed = json.loads(value)
    except ValueError:
        return value
    if parsed is None or isinstance(parsed, bool):
        return parsed
    if isinstance(parsed, int):
        return parsed
    if isinstance(parsed, float) and math.isfinite(parsed):
        return parsed
    return value
