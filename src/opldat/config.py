"""
Formatting configuration for rendered data files.

Every Document carries its own FormatConfig. There is no process-wide
formatting state, so documents with different layouts can coexist.

A config can be written as YAML:

    indent_width: 2
    indent_level: 1
    id_padding: 6
    timestamp_format: "%Y-%m-%dT%H:%M:%S"
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict

import yaml

from opldat.errors import ConfigurationError


@dataclass(frozen=True)
class FormatConfig:
    """
    Layout constants used when rendering a Document.

    Properties:
        indent_width: spaces per nesting level in pretty-printed output
        indent_level: nesting depth of top-level element content
        id_padding: minimum digit count of generated identifier counters
            (not applied automatically; pass it to enumerate_item_ids)
        banner_title: first text line of the header comment
        timestamp_format: strftime pattern for the creation date line
        temp_prefix: file name prefix used for temporary data files
        temp_suffix: file name suffix used for temporary data files
    """

    indent_width: int = 4
    indent_level: int = 1
    id_padding: int = 4
    banner_title: str = "Auto generated data file"
    timestamp_format: str = "%Y-%m-%d %H:%M:%S %Z"
    temp_prefix: str = "networkstructure-data-"
    temp_suffix: str = ".dat"

    def __post_init__(self) -> None:
        for key in ("indent_width", "indent_level", "id_padding"):
            value = getattr(self, key)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{key} must be an integer, got {value!r}")
            if value < 0:
                raise ConfigurationError(f"{key} must not be negative, got {value}")
        for key in ("banner_title", "timestamp_format", "temp_prefix", "temp_suffix"):
            value = getattr(self, key)
            if not isinstance(value, str):
                raise ConfigurationError(f"{key} must be a string, got {value!r}")
        if "*/" in self.banner_title:
            raise ConfigurationError("banner_title must not contain '*/'")


DEFAULT_CONFIG = FormatConfig()


def config_to_dict(config: FormatConfig) -> Dict[str, Any]:
    return asdict(config)


def config_from_dict(d: Dict[str, Any] | None) -> FormatConfig:
    if d is None:
        return FormatConfig()
    if not isinstance(d, dict):
        raise ConfigurationError(f"Expected a mapping, got {type(d).__name__}")
    known = {f.name for f in fields(FormatConfig)}
    unknown = set(d) - known
    if unknown:
        raise ConfigurationError(f"Unknown config keys: {', '.join(sorted(map(str, unknown)))}")
    return FormatConfig(**d)


def config_from_yaml(text: str) -> FormatConfig:
    try:
        d = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML config: {exc}") from exc
    return config_from_dict(d)


def config_to_yaml(config: FormatConfig) -> str:
    return yaml.safe_dump(config_to_dict(config), sort_keys=False)


def load_config(path: str) -> FormatConfig:
    """Read a FormatConfig from a YAML file."""
    with open(path, "r", encoding="utf-8") as fh:
        return config_from_yaml(fh.read())
