"""
Runtime settings for xdiff.

Values are resolved in order of priority:
1. Environment variables (highest priority)
2. Global config file (~/.xdiff/config.yml)
3. Default values (lowest priority)
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
TRUTHY = {"1", "true", "yes", "on"}
FALSY = {"0", "false", "no", "off"}


def get_global_config_path() -> Path:
    """Return the path of the global ~/.xdiff/config.yml file."""
    return Path.home() / ".xdiff" / "config.yml"


def load_global_config() -> dict[str, Any]:
    """Load global configuration from ~/.xdiff/config.yml."""
    config_path = get_global_config_path()
    if not config_path.exists():
        return {}
    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        logger.warning("Failed to read global config %s", config_path, exc_info=True)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring global config %s: not a mapping", config_path)
        return {}
    return data


def get_config(key: str, default: Any = None) -> Any:
    """
    Get configuration value with priority:
    1. Environment variable
    2. Global config file
    3. Default value
    """
    env_value = os.environ.get(key)
    if env_value:
        return env_value

    global_config = load_global_config()
    if key in global_config:
        return global_config[key]

    return default


def _as_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUTHY:
        return True
    if text in FALSY:
        return False
    return default


def get_timeout() -> float:
    """Per-request timeout in seconds (XDIFF_TIMEOUT, default 30)."""
    value = get_config("XDIFF_TIMEOUT", DEFAULT_TIMEOUT)
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        logger.warning("Invalid XDIFF_TIMEOUT %r, using %s", value, DEFAULT_TIMEOUT)
        return DEFAULT_TIMEOUT
    return timeout if timeout > 0 else DEFAULT_TIMEOUT


def get_verify_ssl() -> bool:
    """Whether TLS certificates are verified (XDIFF_VERIFY_SSL, default true)."""
    return _as_bool(get_config("XDIFF_VERIFY_SSL", True), True)


def get_follow_redirects() -> bool:
    """Whether redirects are followed (XDIFF_FOLLOW_REDIRECTS, default false)."""
    return _as_bool(get_config("XDIFF_FOLLOW_REDIRECTS", False), False)


def is_verbose() -> bool:
    """Whether debug output is on (XDIFF_VERBOSE, default false)."""
    return _as_bool(get_config("XDIFF_VERBOSE", False), False)
