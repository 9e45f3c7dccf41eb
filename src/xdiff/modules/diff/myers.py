"""Minimal edit scripts with Myers' O(ND) algorithm (linear-space variant).

The recursion splits each problem at the middle snake, so its depth grows
with log(D) rather than with the input size.
"""

from collections.abc import Hashable, Sequence
from typing import NamedTuple


class DiffOp(NamedTuple):
    """One opcode over half-open ranges, in the shape ``difflib`` uses."""

    tag: str
    old_start: int
    old_end: int
    new_start: int
    new_end: int


def _diff(
    a: Sequence[Hashable],
    b: Sequence[Hashable],
    a_lo: int,
    a_hi: int,
    b_lo: int,
    b_hi: int,
    out: list[DiffOp],
) -> None:
    prefix = 0
    while (
        a_lo + prefix < a_hi
        and b_lo + prefix < b_hi
        and a[a_lo + prefix] == b[b_lo + prefix]
    ):
        prefix += 1
    if prefix:
        out.append(DiffOp("equal", a_lo, a_lo + prefix, b_lo, b_lo + prefix))
    a_lo += prefix
    b_lo += prefix

    suffix = 0
    while (
        a_hi - suffix > a_lo
        and b_hi - suffix > b_lo
        and a[a_hi - suffix - 1] == b[b_hi - suffix - 1]
    ):
        suffix += 1
    tail = DiffOp("equal", a_hi - suffix, a_hi, b_hi - suffix, b_hi) if suffix else None
    a_hi -= suffix
    b_hi -= suffix

    if a_lo == a_hi:
        if b_lo < b_hi:
            out.append(DiffOp("insert", a_lo, a_lo, b_lo, b_hi))
    elif b_lo == b_hi:
        out.append(DiffOp("delete", a_lo, a_hi, b_lo, b_lo))
    else:
        _bisect(a, b, a_lo, a_hi, b_lo, b_hi, out)

    if tail:
        out.append(tail)


def _bisect(
    a: Sequence[Hashable],
    b: Sequence[Hashable],
    a_lo: int,
    a_hi: int,
    b_lo: int,
    b_hi: int,
    out: list[DiffOp],
) -> None:
    """Find the middle snake of two non-empty ranges and recurse on both halves."""
    n = a_hi - a_lo
    m = b_hi - b_lo
    max_d = (n + m + 1) // 2
    v_offset = max_d
    v_length = 2 * max_d + 2
    v1 = [-1] * v_length
    v2 = [-1] * v_length
    v1[v_offset + 1] = 0
    v2[v_offset + 1] = 0
    delta = n - m
    # With an odd delta the paths can only meet while extending forwards.
    front = delta % 2 != 0
    k1start = k1end = k2start = k2end = 0

    for d in range(max_d):
        for k1 in range(-d + k1start, d + 1 - k1end, 2):
            k1_offset = v_offset + k1
            if k1 == -d or (k1 != d and v1[k1_offset - 1] < v1[k1_offset + 1]):
                x1 = v1[k1_offset + 1]
            else:
                x1 = v1[k1_offset - 1] + 1
            y1 = x1 - k1
            while x1 < n and y1 < m and a[a_lo + x1] == b[b_lo + y1]:
                x1 += 1
                y1 += 1
            v1[k1_offset] = x1
            if x1 > n:
                k1end += 2
            elif y1 > m:
                k1start += 2
            elif front:
                k2_offset = v_offset + delta - k1
                if 0 <= k2_offset < v_length and v2[k2_offset] != -1:
                    if x1 >= n - v2[k2_offset]:
                        _split(a, b, a_lo, a_hi, b_lo, b_hi, x1, y1, out)
                        return

        for k2 in range(-d + k2start, d + 1 - k2end, 2):
            k2_offset = v_offset + k2
            if k2 == -d or (k2 != d and v2[k2_offset - 1] < v2[k2_offset + 1]):
                x2 = v2[k2_offset + 1]
            else:
                x2 = v2[k2_offset - 1] + 1
            y2 = x2 - k2
            while x2 < n and y2 < m and a[a_hi - x2 - 1] == b[b_hi - y2 - 1]:
                x2 += 1
                y2 += 1
            v2[k2_offset] = x2
            if x2 > n:
                k2end += 2
            elif y2 > m:
                k2start += 2
            elif not front:
                k1_offset = v_offset + delta - k2
                if 0 <= k1_offset < v_length and v1[k1_offset] != -1:
                    x1 = v1[k1_offset]
                    y1 = v_offset + x1 - k1_offset
                    if x1 >= n - x2:
                        _split(a, b, a_lo, a_hi, b_lo, b_hi, x1, y1, out)
                        return

    # No overlap within max_d means the ranges share no element at all.
    out.append(DiffOp("delete", a_lo, a_hi, b_lo, b_lo))
    out.append(DiffOp("insert", a_hi, a_hi, b_lo, b_hi))


def _split(a, b, a_lo, a_hi, b_lo, b_hi, x, y, out) -> None:
    _diff(a, b, a_lo, a_lo + x, b_lo, b_lo + y, out)
    _diff(a, b, a_lo + x, a_hi, b_lo + y, b_hi, out)


def _merge(raw: list[DiffOp]) -> list[DiffOp]:
    """Coalesce adjacent runs; a delete/insert cluster becomes one replace."""
    merged: list[DiffOp] = []
    for op in raw:
        if op.old_start == op.old_end and op.new_start == op.new_end:
            continue
        if merged:
            last = merged[-1]
            same_kind = (op.tag == "equal") == (last.tag == "equal")
            if same_kind:
                tag = last.tag
                if tag != "equal" and tag != op.tag:
                    tag = "replace"
                merged[-1] = DiffOp(
                    tag,
                    min(last.old_start, op.old_start),
                    max(last.old_end, op.old_end),
                    min(last.new_start, op.new_start),
                    max(last.new_end, op.new_end),
                )
                continue
        merged.append(op)
    return merged


def diff_opcodes(a: Sequence[Hashable], b: Sequence[Hashable]) -> list[DiffOp]:
    """Return a minimal list of equal/delete/insert/replace opcodes turning ``a`` into ``b``."""
    raw: list[DiffOp] = []
    _diff(a, b, 0, len(a), 0, len(b), raw)
    return _merge(raw)
