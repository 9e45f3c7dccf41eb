"""xdiff / xreq command line entry points.

Importing this module registers every command on the two Typer apps and
exposes the collaborators that commands resolve through
:func:`xdiff.cli_commands.deps.cli_module`.
"""

from prompt_toolkit.shortcuts import checkboxlist_dialog

from xdiff.cli_commands import diff_command as _diff_command  # noqa: F401
from xdiff.cli_commands import req_command as _req_command  # noqa: F401
from xdiff.cli_commands import version_command as _version_command  # noqa: F401
from xdiff.cli_commands.shared import console, diff_app, err_console, print_error, req_app
from xdiff.config.profiles import DiffConfig, RequestConfig, build_profile
from xdiff.modules.request import RequestExecutor
from xdiff.tools import HTTPClient

app = diff_app

__all__ = [
    "DiffConfig",
    "HTTPClient",
    "RequestConfig",
    "RequestExecutor",
    "app",
    "build_profile",
    "checkboxlist_dialog",
    "console",
    "diff_app",
    "diff_main",
    "err_console",
    "main",
    "print_error",
    "req_app",
    "req_main",
]


def diff_main():
    """Entry point for ``xdiff``."""
    diff_app()


def req_main():
    """Entry point for ``xreq``."""
    req_app()


main = diff_main
