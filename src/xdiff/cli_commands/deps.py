"""Runtime access to public CLI facade symbols.

Command modules resolve collaborators from ``xdiff.cli`` at call time so tests
can monkeypatch facade-level symbols (for example ``HTTPClient`` or
``checkboxlist_dialog``).
"""

from importlib import import_module
from types import ModuleType


def cli_module() -> ModuleType:
    """Return the public CLI facade module."""
    return import_module("xdiff.cli")
