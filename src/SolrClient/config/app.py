"""Application config: YAML layers merged into one validated `AppConfig`."""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from pathlib import Path
from typing import Any, Mapping

import yaml

from SolrClient.config.runtime import RuntimeConfig, check_runtime, load_runtime
from SolrClient.config.solr import SolrConfig, check_solr, load_solr

DEFAULT_CONFIG_PATH = Path("config/default.yml")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application root configuration."""

    runtime: RuntimeConfig
    solr: SolrConfig


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Parse a merged mapping into AppConfig.

    Raises:
        TypeError: If a value has the wrong type.
        ValueError: If a key is missing or a value is out of range.
    """
    config = AppConfig(runtime=load_runtime(raw), solr=load_solr(raw))
    check_runtime(config.runtime)
    check_solr(config.solr)
    return config


def load_config(path: Path) -> AppConfig:
    """Load one YAML config file without layering."""
    return parse_config_dict(read_yaml(path))


def load_config_with_defaults(
    config_path: Path, default_path: Path = DEFAULT_CONFIG_PATH
) -> AppConfig:
    """Load `config_path` layered over the defaults file.

    Nested sections merge key by key; lists and scalars in the override
    replace the default value. A missing defaults file is skipped, so a
    complete `config_path` works from any directory.
    """
    if config_path == default_path or not default_path.is_file():
        layers = [config_path]
    else:
        layers = [default_path, config_path]
    merged = reduce(merge_config_dicts, (read_yaml(layer) for layer in layers), {})
    return parse_config_dict(merged)


def read_yaml(path: Path) -> dict[str, Any]:
    return parse_yaml(path.read_text(encoding="utf-8"))


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse raw YAML text into a mapping.

    Raises:
        ValueError: If the document root is not a mapping.
    """
    data = yaml.safe_load(text) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_config_dicts(current, value)
        else:
            merged[key] = value
    return merged
