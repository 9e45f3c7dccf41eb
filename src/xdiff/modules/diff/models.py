"""Structured diff output: lines, hunks and the full rendered diff."""

from dataclasses import dataclass, field

SIGN_EQUAL = " "
SIGN_DELETE = "-"
SIGN_INSERT = "+"


@dataclass(frozen=True)
class Segment:
    """A run of text inside a diff line; ``emphasized`` marks the changed part."""

    text: str
    emphasized: bool = False


@dataclass(frozen=True)
class DiffLine:
    """One rendered line: 1-based line numbers (None where absent), sign, segments."""

    old_index: int | None
    new_index: int | None
    sign: str
    segments: tuple[Segment, ...]
    missing_newline: bool = False

    @property
    def text(self) -> str:
        return "".join(segment.text for segment in self.segments)

    @property
    def is_change(self) -> bool:
        return self.sign != SIGN_EQUAL

    def as_tuple(self) -> tuple[int | None, int | None, str, list[tuple[str, bool]]]:
        return (
            self.old_index,
            self.new_index,
            self.sign,
            [(segment.text, segment.emphasized) for segment in self.segments],
        )


@dataclass
class Hunk:
    """A run of changes with their surrounding context lines."""

    lines: list[DiffLine] = field(default_factory=list)

    @property
    def changes(self) -> list[DiffLine]:
        return [line for line in self.lines if line.is_change]


@dataclass
class RenderedDiff:
    """All hunks of a diff, in order. No hunks means the inputs were equal."""

    hunks: list[Hunk] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.hunks

    @property
    def changes(self) -> list[DiffLine]:
        return [line for hunk in self.hunks for line in hunk.changes]

    def __len__(self) -> int:
        return len(self.hunks)

    def __iter__(self):
        return iter(self.hunks)
