"""Turn structured diffs into plain text or styled rich output."""

from rich.console import Console
from rich.text import Text

from xdiff.errors import RenderError
from xdiff.modules.diff.models import SIGN_DELETE, SIGN_INSERT, DiffLine, RenderedDiff

DIVIDER = "-" * 80
NO_NEWLINE_MARKER = "\\ No newline at end of file"

SIGN_STYLES = {
    SIGN_DELETE: "red",
    SIGN_INSERT: "green",
}


def _gutter(index: int | None) -> str:
    return "    " if index is None else f"{index:<4}"


def _prefix(line: DiffLine) -> str:
    return f"{_gutter(line.old_index)}{_gutter(line.new_index)} |"


def render_plain(diff: RenderedDiff) -> str:
    """Render without styling, one hunk after another separated by a divider."""
    out: list[str] = []
    for idx, hunk in enumerate(diff.hunks):
        if idx > 0:
            out.append(f"{DIVIDER}\n")
        for line in hunk.lines:
            out.append(f"{_prefix(line)}{line.sign}{line.text}\n")
            if line.missing_newline:
                out.append(f"{NO_NEWLINE_MARKER}\n")
    return "".join(out)


def render_rich(diff: RenderedDiff) -> Text:
    """Render as rich ``Text``: red deletions, green insertions, dim context."""
    text = Text()
    for idx, hunk in enumerate(diff.hunks):
        if idx > 0:
            text.append(f"{DIVIDER}\n", style="dim")
        for line in hunk.lines:
            color = SIGN_STYLES.get(line.sign)
            text.append(_prefix(line), style="dim")
            if color is None:
                text.append(f"{line.sign}{line.text}\n", style="dim")
            else:
                text.append(line.sign, style=f"bold {color}")
                for segment in line.segments:
                    style = f"{color} underline on black" if segment.emphasized else color
                    text.append(segment.text, style=style)
                text.append("\n")
            if line.missing_newline:
                text.append(f"{NO_NEWLINE_MARKER}\n", style="dim italic")
    return text


def print_diff(console: Console, diff: RenderedDiff) -> None:
    """
    Write a diff to a console; styling is dropped when it is not a terminal.

    Raises:
        RenderError: if the console's output stream cannot be written.
    """
    try:
        console.print(render_rich(diff), end="", soft_wrap=True, highlight=False)
    except OSError as exc:
        raise RenderError(f"Failed to write diff output: {exc}") from exc
