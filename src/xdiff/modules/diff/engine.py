"""Line diff with grouped context and inline (token level) emphasis."""

import re
from collections.abc import Iterator
from difflib import SequenceMatcher

from xdiff.modules.diff.models import (
    SIGN_DELETE,
    SIGN_EQUAL,
    SIGN_INSERT,
    DiffLine,
    Hunk,
    RenderedDiff,
    Segment,
)
from xdiff.modules.diff.myers import DiffOp, diff_opcodes

DEFAULT_CONTEXT = 3
INLINE_RATIO = 0.5
_TOKEN_RE = re.compile(r"\w+|\s+|[^\w\s]")


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` keeping terminators; a final unterminated line is kept as-is."""
    parts = text.split("\n")
    lines = [f"{part}\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def _tokenize(text: str) -> list[str]:
    return _TOKEN_RE.findall(text)


def _join_segments(pieces: list[tuple[str, bool]]) -> tuple[Segment, ...]:
    segments: list[Segment] = []
    for text, emphasized in pieces:
        if not text:
            continue
        if segments and segments[-1].emphasized == emphasized:
            segments[-1] = Segment(segments[-1].text + text, emphasized)
        else:
            segments.append(Segment(text, emphasized))
    return tuple(segments)


def inline_segments(old: str, new: str) -> tuple[tuple[Segment, ...], tuple[Segment, ...]]:
    """
    Token-level emphasis for a changed line pair.

    Pairs sharing less than half of their tokens get no emphasis at all.
    """
    old_tokens = _tokenize(old)
    new_tokens = _tokenize(new)
    matcher = SequenceMatcher(None, old_tokens, new_tokens, autojunk=False)
    if matcher.ratio() < INLINE_RATIO:
        return _join_segments([(old, False)]), _join_segments([(new, False)])

    old_pieces: list[tuple[str, bool]] = []
    new_pieces: list[tuple[str, bool]] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        changed = tag != "equal"
        old_pieces.append(("".join(old_tokens[i1:i2]), changed))
        new_pieces.append(("".join(new_tokens[j1:j2]), changed))
    return _join_segments(old_pieces), _join_segments(new_pieces)


class TextDiff:
    """Diff between two texts, line by line."""

    def __init__(self, old_lines: list[str], new_lines: list[str]):
        self.old_lines = old_lines
        self.new_lines = new_lines
        self._ops: list[DiffOp] | None = None

    @classmethod
    def from_lines(cls, old_text: str, new_text: str) -> "TextDiff":
        return cls(split_lines(old_text), split_lines(new_text))

    def ops(self) -> list[DiffOp]:
        """Minimal opcodes covering both texts."""
        if self._ops is None:
            self._ops = diff_opcodes(self.old_lines, self.new_lines)
        return self._ops

    def grouped_ops(self, n: int = DEFAULT_CONTEXT) -> list[list[DiffOp]]:
        """
        Group opcodes into hunks with up to ``n`` lines of context.

        Equal runs longer than ``2 * n`` split hunks. Returns an empty list
        when the texts are identical.
        """
        codes = list(self.ops())
        if all(op.tag == "equal" for op in codes):
            return []

        if codes[0].tag == "equal":
            tag, i1, i2, j1, j2 = codes[0]
            codes[0] = DiffOp(tag, max(i1, i2 - n), i2, max(j1, j2 - n), j2)
        if codes[-1].tag == "equal":
            tag, i1, i2, j1, j2 = codes[-1]
            codes[-1] = DiffOp(tag, i1, min(i2, i1 + n), j1, min(j2, j1 + n))

        groups: list[list[DiffOp]] = []
        group: list[DiffOp] = []
        for tag, i1, i2, j1, j2 in codes:
            if tag == "equal" and i2 - i1 > 2 * n:
                group.append(DiffOp(tag, i1, min(i2, i1 + n), j1, min(j2, j1 + n)))
                groups.append(group)
                group = []
                i1, j1 = max(i1, i2 - n), max(j1, j2 - n)
            group.append(DiffOp(tag, i1, i2, j1, j2))
        if group and not (len(group) == 1 and group[0].tag == "equal"):
            groups.append(group)
        return [
            [op for op in g if op.old_start != op.old_end or op.new_start != op.new_end]
            for g in groups
        ]

    def _line(
        self,
        old_index: int | None,
        new_index: int | None,
        sign: str,
        raw: str,
        segments: tuple[Segment, ...] | None = None,
    ) -> DiffLine:
        text = raw[:-1] if raw.endswith("\n") else raw
        return DiffLine(
            old_index=None if old_index is None else old_index + 1,
            new_index=None if new_index is None else new_index + 1,
            sign=sign,
            segments=segments if segments is not None else _join_segments([(text, False)]),
            missing_newline=not raw.endswith("\n"),
        )

    def iter_changes(self, op: DiffOp) -> Iterator[DiffLine]:
        """Yield the lines of one opcode; replace pairs carry inline emphasis."""
        tag, i1, i2, j1, j2 = op
        if tag == "equal":
            for offset in range(i2 - i1):
                yield self._line(i1 + offset, j1 + offset, SIGN_EQUAL, self.old_lines[i1 + offset])
            return

        old_segments: dict[int, tuple[Segment, ...]] = {}
        new_segments: dict[int, tuple[Segment, ...]] = {}
        if tag == "replace":
            for i, j in zip(range(i1, i2), range(j1, j2)):
                old_raw, new_raw = self.old_lines[i], self.new_lines[j]
                old_segments[i], new_segments[j] = inline_segments(
                    old_raw.rstrip("\n"), new_raw.rstrip("\n")
                )

        for i in range(i1, i2):
            yield self._line(i, None, SIGN_DELETE, self.old_lines[i], old_segments.get(i))
        for j in range(j1, j2):
            yield self._line(None, j, SIGN_INSERT, self.new_lines[j], new_segments.get(j))

    def hunks(self, n: int = DEFAULT_CONTEXT) -> list[Hunk]:
        return [
            Hunk(lines=[line for op in group for line in self.iter_changes(op)])
            for group in self.grouped_ops(n)
        ]


def diff_text(old_text: str, new_text: str, context: int = DEFAULT_CONTEXT) -> RenderedDiff:
    """Diff two texts into hunks of structured lines."""
    return RenderedDiff(hunks=TextDiff.from_lines(old_text, new_text).hunks(context))
