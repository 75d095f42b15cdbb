"""Connection configuration for the search server."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from SolrClient.config.common import (
    ConfigSection,
    env_override,
    expect_float,
    expect_int,
    expect_non_empty,
    expect_positive,
    expect_str,
)
from SolrClient.request.builder import normalize_base_url

DEFAULT_BASE_URL_ENV = "SOLR_BASE_URL"
DEFAULT_COLLECTION_ENV = "SOLR_COLLECTION"
DEFAULT_TIMEOUT = 30
DEFAULT_ROWS = 10


@dataclass(frozen=True, slots=True)
class SolrConfig:
    """Store validated connection settings.

    `base_url` and `collection` already include environment overrides.
    """

    base_url: str
    collection: str
    timeout: float
    rows: int
    base_url_env: str = DEFAULT_BASE_URL_ENV
    collection_env: str = DEFAULT_COLLECTION_ENV


def load_solr(raw: Mapping[str, Any]) -> SolrConfig:
    """Load the `solr` section, applying environment overrides.

    Args:
        raw: Root configuration mapping.

    Returns:
        Parsed connection configuration.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    section = ConfigSection.of(raw, "solr", required=True)
    base_url_env = section.optional("base_url_env", DEFAULT_BASE_URL_ENV, expect_str)
    collection_env = section.optional("collection_env", DEFAULT_COLLECTION_ENV, expect_str)
    return SolrConfig(
        base_url=env_override(base_url_env, section.required("base_url", expect_str)),
        collection=env_override(collection_env, section.required("collection", expect_str)),
        timeout=section.optional("timeout", DEFAULT_TIMEOUT, expect_float),
        rows=section.optional("rows", DEFAULT_ROWS, expect_int),
        base_url_env=base_url_env,
        collection_env=collection_env,
    )


def check_solr(config: SolrConfig) -> None:
    """Validate connection constraints.

    Raises:
        ValueError: If values violate connection constraints.
    """
    expect_non_empty(config.collection, "solr.collection")
    try:
        normalize_base_url(config.base_url)
    except ValueError as error:
        raise ValueError(f"solr.base_url is invalid: {error}") from error
    expect_positive(config.timeout, "solr.timeout")
    expect_positive(config.rows, "solr.rows")
