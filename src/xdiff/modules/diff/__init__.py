"""Line-based diffing of canonical response text."""

from .engine import TextDiff, diff_text, inline_segments, split_lines
from .models import DiffLine, Hunk, RenderedDiff, Segment
from .myers import DiffOp, diff_opcodes
from .render import print_diff, render_plain, render_rich

__all__ = [
    "DiffLine",
    "DiffOp",
    "Hunk",
    "RenderedDiff",
    "Segment",
    "TextDiff",
    "diff_opcodes",
    "diff_text",
    "inline_segments",
    "print_diff",
    "render_plain",
    "render_rich",
    "split_lines",
]
