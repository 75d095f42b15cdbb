"""Configuration loading for the solr-client command line front end.

One YAML file with `log` and `solr` sections, optionally layered over a
default file; values are validated into frozen dataclasses.
"""

from __future__ import annotations

from SolrClient.config.app import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    load_config,
    load_config_with_defaults,
    merge_config_dicts,
    parse_config_dict,
)
from SolrClient.config.runtime import RuntimeConfig
from SolrClient.config.solr import SolrConfig

__all__ = [
    "AppConfig",
    "DEFAULT_CONFIG_PATH",
    "RuntimeConfig",
    "SolrConfig",
    "load_config",
    "load_config_with_defaults",
    "merge_config_dicts",
    "parse_config_dict",
]
