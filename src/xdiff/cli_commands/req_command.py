"""xreq commands: send a single request profile, or build one from a URL."""

import logging

import typer

from xdiff.errors import XdiffError
from xdiff.modules.request import ExtraArgs, RequestProfile
from xdiff.modules.response import get_body_text, get_headers_text, get_status_text
from xdiff.tools import HTTPResponse
from xdiff.utils.async_utils import safe_async_run

from .deps import cli_module
from .shared import (
    DEFAULT_REQ_CONFIG,
    EXTRA_PARAMS_HELP,
    check_extra_params,
    console,
    fail,
    print_highlighted,
    req_app,
)

logger = logging.getLogger(__name__)


async def send_request(profile: RequestProfile, args: ExtraArgs) -> HTTPResponse:
    cli = cli_module()
    async with cli.HTTPClient() as client:
        return await cli.RequestExecutor(client).send_profile(profile, args)


def print_response(url: str, response: HTTPResponse) -> None:
    """Full response on a terminal; only the body when piped."""
    body = get_body_text(response)
    if not console.is_terminal:
        print_highlighted(body, "json")
        return

    console.print(f"Url: {url}\n", markup=False, highlight=False)
    console.print(get_status_text(response), style="bold", markup=False, highlight=False)
    print_highlighted(get_headers_text(response), "yaml")
    print_highlighted(body, "json")


@req_app.command()
def run(
    profile: str = typer.Option(..., "--profile", "-p", help="Profile name"),
    config: str = typer.Option(DEFAULT_REQ_CONFIG, "--config", "-c", help="Configuration to use"),
    extra_params: list[str] = typer.Option(
        [],
        "--extra-params",
        "-e",
        help=EXTRA_PARAMS_HELP,
        callback=check_extra_params,
    ),
) -> None:
    """Send the request of a profile and print the response."""
    cli = cli_module()
    try:
        request_config = cli.RequestConfig.load_yaml(config)
        request = request_config.get_profile(profile)
        args = ExtraArgs.parse(extra_params)
        url = request.get_url(args)
        logger.debug("Requesting %s for profile %s", url, profile)
        response = safe_async_run(send_request(request, args))
        print_response(url, response)
    except XdiffError as exc:
        raise fail(exc) from exc


@req_app.command()
def parse(
    url: str = typer.Option(..., "--url", prompt="Url", help="URL to turn into a profile"),
    name: str = typer.Option(..., "--name", prompt="Profile", help="Profile name"),
) -> None:
    """Build a request profile from a URL and print it as YAML."""
    cli = cli_module()
    try:
        request = RequestProfile.from_url(url)
        document = cli.RequestConfig.single(name, request).to_yaml()
    except XdiffError as exc:
        raise fail(exc) from exc

    print_highlighted(document, "yaml")
