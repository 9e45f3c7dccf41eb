"""Shared CLI app objects and output helpers."""

import logging

import typer
from rich.console import Console
from rich.syntax import Syntax

from xdiff.config.settings import is_verbose
from xdiff.errors import InvalidOverrideKey, XdiffError
from xdiff.modules.request import parse_key_val
from xdiff.utils.debug import set_debug_enabled

diff_app = typer.Typer(
    name="xdiff",
    help="Diff two http requests and compare the difference of the responses",
    no_args_is_help=True,
)
req_app = typer.Typer(
    name="xreq",
    help="HTTP request client driven by named profiles",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

DEFAULT_DIFF_CONFIG = "xdiff.yml"
DEFAULT_REQ_CONFIG = "xreq.yml"
SYNTAX_THEME = "monokai"


@diff_app.callback()
@req_app.callback()
def main_options(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Print outgoing requests and incoming responses to stderr",
    ),
) -> None:
    """Options shared by every command."""
    enabled = verbose or is_verbose()
    set_debug_enabled(enabled)
    if enabled:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def print_error(exc: Exception) -> None:
    """Report an error on stderr; styling is dropped when stderr is not a terminal."""
    err_console.print(
        f"Error: {exc}", style="red", markup=False, highlight=False, soft_wrap=True
    )


def fail(exc: XdiffError) -> typer.Exit:
    """Print an xdiff error and return the exit to raise."""
    print_error(exc)
    return typer.Exit(1)


def print_highlighted(text: str, language: str) -> None:
    """Syntax-highlight on a terminal, write the text untouched otherwise."""
    if console.is_terminal:
        console.print(Syntax(text, language, theme=SYNTAX_THEME, background_color="default"))
    else:
        end = "" if text.endswith("\n") else "\n"
        console.print(
            text, end=end, markup=False, highlight=False, emoji=False, soft_wrap=True
        )


def check_extra_params(values: list[str] | None) -> list[str]:
    """Reject malformed ``-e`` directives before any command runs."""
    values = values or []
    for value in values:
        try:
            parse_key_val(value)
        except InvalidOverrideKey as exc:
            raise typer.BadParameter(str(exc)) from exc
    return values


EXTRA_PARAMS_HELP = (
    "Extra parameters to override the profile: "
    "'%key=value' for headers, '@key=value' for body, 'key=value' for query"
)
