"""Test configuration and fixtures for xdiff."""

import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from xdiff.utils.debug import set_debug_enabled

DIFF_YAML = """\
todo:
  req1:
    url: https://jsonplaceholder.typicode.com/todos/1
    params:
      a: 100
  req2:
    url: https://jsonplaceholder.typicode.com/todos/2
    params:
      c: 200
  res:
    skip_headers:
      - report-to
      - date
    skip_body:
      - id
rust:
  req1:
    method: GET
    url: https://www.rust-lang.org/
    headers:
      user-agent: Aloha
  req2:
    url: https://www.rust-lang.org/
"""

REQ_YAML = """\
todo:
  url: https://jsonplaceholder.typicode.com/todos/1
  params:
    a: 100
"""


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def diff_yaml_path(temp_dir: Path) -> Path:
    """A diff config file with the ``todo`` and ``rust`` profiles."""
    path = temp_dir / "xdiff.yml"
    path.write_text(DIFF_YAML, encoding="utf-8")
    return path


@pytest.fixture
def req_yaml_path(temp_dir: Path) -> Path:
    """A request config file with the ``todo`` profile."""
    path = temp_dir / "xreq.yml"
    path.write_text(REQ_YAML, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, temp_dir: Path) -> None:
    """Keep the user's ~/.xdiff/config.yml and XDIFF_* variables out of tests."""
    monkeypatch.setattr(Path, "home", lambda: temp_dir / "home")
    for name in ("XDIFF_TIMEOUT", "XDIFF_VERIFY_SSL", "XDIFF_FOLLOW_REDIRECTS", "XDIFF_VERBOSE"):
        monkeypatch.delenv(name, raising=False)
    set_debug_enabled(False)
