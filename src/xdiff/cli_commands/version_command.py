"""Version command for both apps."""

from importlib.metadata import PackageNotFoundError, version as pkg_version

from .shared import console, diff_app, req_app


def get_version() -> str:
    try:
        return pkg_version("xdiff")
    except PackageNotFoundError:
        return "0.0.0+unknown"


@diff_app.command()
@req_app.command()
def version() -> None:
    """Show the installed xdiff version."""
    console.print(f"xdiff {get_version()}", markup=False, highlight=False)
