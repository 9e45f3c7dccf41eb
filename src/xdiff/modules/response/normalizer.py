"""Turn raw HTTP responses into canonical, comparable text."""

import json
from collections.abc import Iterable

from xdiff.errors import BodyDecodeError
from xdiff.modules.request.codec import is_json_media_type, media_type
from xdiff.modules.response.models import CanonicalText, ResponseProfile
from xdiff.tools import HTTPResponse


def get_status_text(response: HTTPResponse) -> str:
    """``HTTP/1.1 200 OK``; an unknown status gets an empty reason."""
    return f"{response.http_version} {response.status_code} {response.reason}".rstrip()


def get_header_lines(response: HTTPResponse, skip_headers: Iterable[str] = ()) -> list[str]:
    """Header lines in response order, minus skipped names (case-insensitive)."""
    skipped = {name.lower() for name in skip_headers}
    return [
        f"{name}: {value}"
        for name, value in response.headers.multi_items()
        if name.lower() not in skipped
    ]


def get_headers_text(response: HTTPResponse, skip_headers: Iterable[str] = ()) -> str:
    """Header lines joined with newlines and terminated by a blank line."""
    return "".join(f"{line}\n" for line in get_header_lines(response, skip_headers)) + "\n"


def filter_json(text: str, skip: Iterable[str] = ()) -> str:
    """
    Drop top-level keys from a JSON object and pretty-print the result.

    Non-object documents are re-serialized untouched.

    Raises:
        BodyDecodeError: if ``text`` is not valid JSON.
    """
    try:
        document = json.loads(text)
    except ValueError as exc:
        raise BodyDecodeError(f"Response body is not valid JSON: {exc}") from exc

    if isinstance(document, dict):
        for key in skip:
            document.pop(key, None)
    return json.dumps(document, indent=2, ensure_ascii=False)


def get_body_text(response: HTTPResponse, skip_body: Iterable[str] = ()) -> str:
    """Body text, filtered and pretty-printed when the response is JSON."""
    if is_json_media_type(media_type(response.content_type)):
        return filter_json(response.text, skip_body)
    return response.text


def normalize(response: HTTPResponse, profile: ResponseProfile | None = None) -> CanonicalText:
    """Build the canonical text for a response using a filter profile."""
    profile = profile or ResponseProfile()
    return CanonicalText(
        status=get_status_text(response),
        header_lines=get_header_lines(response, profile.skip_headers),
        body=get_body_text(response, profile.skip_body),
    )
