"""Debug utilities for request/response visibility.

Debug output goes to stderr with rich formatting so it never mixes with the
diff written to stdout.
"""

import json
from typing import Any

from rich.console import Console
from rich.syntax import Syntax

_debug_state: dict[str, bool] = {"enabled": False}


def set_debug_enabled(enabled: bool) -> None:
    """Turn debug output on or off for this process."""
    _debug_state["enabled"] = enabled


def is_debug_enabled() -> bool:
    """Check if debug mode is enabled."""
    return _debug_state["enabled"]


def debug_print(category: str, message: str, **data: Any) -> None:
    """Print debug information if debug mode is enabled.

    Args:
        category: Debug category (request, response, config)
        message: Main message to display
        **data: Additional key-value pairs to display
    """
    if not is_debug_enabled():
        return
    console = Console(stderr=True)
    console.print(f"[DEBUG:{category}] {message}", style="bold cyan", markup=False)
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, dict):
            try:
                json_str = json.dumps(value, indent=2, ensure_ascii=False)
                syntax = Syntax(json_str, "json", theme="monokai", line_numbers=False)
                console.print(f"  {key}:", style="dim", markup=False)
                console.print(syntax)
            except (TypeError, ValueError):
                console.print(f"  {key}: {value}", style="dim", markup=False)
        elif isinstance(value, str) and len(value) > 200:
            console.print(f"  {key}: {value[:200]}... ({len(value)} chars)", style="dim", markup=False)
        else:
            console.print(f"  {key}: {value}", style="dim", markup=False)


def debug_request(method: str, url: str, headers: dict[str, str], content: bytes) -> None:
    """Log an outgoing request in debug mode."""
    if not is_debug_enabled():
        return
    debug_print(
        "request",
        f"→ {method} {url}",
        Headers=headers or None,
        Body=content.decode("utf-8", errors="replace") if content else None,
    )


def debug_response(url: str, status_code: int, elapsed: float, size: int) -> None:
    """Log a received response in debug mode."""
    if not is_debug_enabled():
        return
    debug_print(
        "response",
        f"← {status_code} {url} +{elapsed:.2f}s",
        Size=f"{size} bytes",
    )
