"""Response filter and canonical text models."""

from dataclasses import dataclass, field
from typing import Any

from xdiff.errors import ConfigParseError


@dataclass(frozen=True)
class ResponseProfile:
    """Top-level response headers and body keys left out of the comparison."""

    skip_headers: list[str] = field(default_factory=list)
    skip_body: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "ResponseProfile":
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigParseError("Response filter 'res' must be a mapping")
        return cls(
            skip_headers=_string_list(data.get("skip_headers"), "skip_headers"),
            skip_body=_string_list(data.get("skip_body"), "skip_body"),
        )

    def to_dict(self) -> dict[str, list[str]]:
        data: dict[str, list[str]] = {}
        if self.skip_headers:
            data["skip_headers"] = list(self.skip_headers)
        if self.skip_body:
            data["skip_body"] = list(self.skip_body)
        return data

    def is_default(self) -> bool:
        return not (self.skip_headers or self.skip_body)


def _string_list(value: Any, field_name: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigParseError(f"'{field_name}' must be a list of strings")
    return [str(item) for item in value]


@dataclass(frozen=True)
class CanonicalText:
    """Normalized rendering of one response, the unit the diff compares."""

    status: str
    header_lines: list[str]
    body: str

    @property
    def headers_text(self) -> str:
        return "".join(f"{line}\n" for line in self.header_lines) + "\n"

    def __str__(self) -> str:
        return f"{self.status}\n{self.headers_text}{self.body}\n"
