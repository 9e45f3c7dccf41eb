"""
Configuration for xdiff.

Runtime settings come from the environment and ~/.xdiff/config.yml; profile
stores live in :mod:`xdiff.config.profiles`.
"""

from .loader import YamlConfigMixin, dump_yaml, parse_yaml
from .settings import (
    get_config,
    get_follow_redirects,
    get_global_config_path,
    get_timeout,
    get_verify_ssl,
    is_verbose,
    load_global_config,
)

__all__ = [
    # loader
    "YamlConfigMixin",
    "dump_yaml",
    "parse_yaml",
    # settings
    "get_config",
    "get_follow_redirects",
    "get_global_config_path",
    "get_timeout",
    "get_verify_ssl",
    "is_verbose",
    "load_global_config",
]
