"""YAML loading shared by the profile stores."""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from xdiff.errors import ConfigParseError

logger = logging.getLogger(__name__)


def parse_yaml(content: str) -> dict[str, Any]:
    """Parse a profile document; an empty document is an empty mapping."""
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ConfigParseError(f"Invalid YAML: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigParseError(
            f"Config must be a mapping of profile names, got {type(data).__name__}"
        )
    return dict(data)


def dump_yaml(data: Mapping[str, Any]) -> str:
    """Serialize a document keeping key order."""
    return yaml.safe_dump(dict(data), sort_keys=False, allow_unicode=True, default_flow_style=False)


class YamlConfigMixin:
    """Adds ``load_yaml``/``from_yaml``/``to_yaml`` to a store with dict conversion."""

    @classmethod
    def load_yaml(cls, path: str | Path, validate: bool = True):
        """Load and validate a config file; relative paths resolve against the cwd."""
        config_path = Path(path)
        if not config_path.is_absolute():
            config_path = Path.cwd() / config_path
        try:
            content = config_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigParseError(f"Cannot read config file {config_path}: {exc}") from exc
        logger.debug("Loaded config file %s", config_path)
        return cls.from_yaml(content, source=str(path), validate=validate)

    @classmethod
    def from_yaml(cls, content: str, source: str | None = None, validate: bool = True):
        config = cls.from_dict(parse_yaml(content), source=source)
        if validate:
            config.validate()
        return config

    def to_yaml(self) -> str:
        return dump_yaml(self.to_dict())
