"""Response normalization: canonical text and filtering."""

from .models import CanonicalText, ResponseProfile
from .normalizer import (
    filter_json,
    get_body_text,
    get_header_lines,
    get_headers_text,
    get_status_text,
    normalize,
)

__all__ = [
    "CanonicalText",
    "ResponseProfile",
    "filter_json",
    "get_body_text",
    "get_header_lines",
    "get_headers_text",
    "get_status_text",
    "normalize",
]
