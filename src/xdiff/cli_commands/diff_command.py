"""xdiff commands: run a diff profile, or build one from two URLs."""

import logging

import typer

from xdiff.errors import XdiffError
from xdiff.modules.diff import RenderedDiff, print_diff
from xdiff.modules.request import ExtraArgs, RequestProfile
from xdiff.modules.response import ResponseProfile
from xdiff.utils.async_utils import safe_async_run

from .deps import cli_module
from .shared import (
    DEFAULT_DIFF_CONFIG,
    EXTRA_PARAMS_HELP,
    check_extra_params,
    console,
    diff_app,
    fail,
    print_highlighted,
)

logger = logging.getLogger(__name__)


async def run_diff(profile, args: ExtraArgs) -> RenderedDiff:
    """Send both requests of a profile over one client and diff the responses."""
    cli = cli_module()
    async with cli.HTTPClient() as client:
        return await profile.diff(cli.RequestExecutor(client), args)


async def fetch_header_keys(request: RequestProfile) -> list[str]:
    """Header names returned for a request, in response order."""
    cli = cli_module()
    async with cli.HTTPClient() as client:
        response = await cli.RequestExecutor(client).send_profile(request)
    return response.header_keys()


def select_headers(keys: list[str]) -> list[str]:
    """Let the user tick the response headers to skip; cancel selects none."""
    if not keys:
        return []
    selected = cli_module().checkboxlist_dialog(
        title="Response headers",
        text="Select headers to skip",
        values=[(key, key) for key in keys],
    ).run()
    return list(selected or [])


@diff_app.command()
def run(
    profile: str = typer.Option(..., "--profile", "-p", help="Profile name"),
    config: str = typer.Option(
        DEFAULT_DIFF_CONFIG, "--config", "-c", help="Configuration to use"
    ),
    extra_params: list[str] = typer.Option(
        [],
        "--extra-params",
        "-e",
        help=EXTRA_PARAMS_HELP,
        callback=check_extra_params,
    ),
) -> None:
    """Diff the responses of the two requests of a profile."""
    cli = cli_module()
    try:
        diff_config = cli.DiffConfig.load_yaml(config)
        diff_profile = diff_config.get_profile(profile)
        args = ExtraArgs.parse(extra_params)
        logger.debug("Running profile %s from %s", profile, config)
        diff = safe_async_run(run_diff(diff_profile, args))
        print_diff(console, diff)
    except XdiffError as exc:
        raise fail(exc) from exc


@diff_app.command()
def parse(
    url1: str = typer.Option(..., "--url1", prompt="Url1", help="First URL"),
    url2: str = typer.Option(..., "--url2", prompt="Url2", help="Second URL"),
    name: str = typer.Option(..., "--name", prompt="Profile", help="Profile name"),
    skip_header: list[str] = typer.Option(
        [], "--skip-header", help="Response header to skip (repeatable)"
    ),
    skip_body: list[str] = typer.Option(
        [], "--skip-body", help="Top-level JSON body key to skip (repeatable)"
    ),
    select: bool = typer.Option(
        True,
        "--select/--no-select",
        help="Offer req1's response headers for skipping when none were given",
    ),
) -> None:
    """Build a diff profile from two URLs and print it as YAML."""
    cli = cli_module()
    try:
        req1 = RequestProfile.from_url(url1)
        req2 = RequestProfile.from_url(url2)

        headers = list(skip_header)
        if not headers and select:
            headers = select_headers(safe_async_run(fetch_header_keys(req1)))

        res = ResponseProfile(skip_headers=headers, skip_body=list(skip_body))
        diff_profile = cli.build_profile(req1, req2, res)
        document = cli.DiffConfig.single(name, diff_profile).to_yaml()
    except XdiffError as exc:
        raise fail(exc) from exc

    print_highlighted(document, "yaml")
