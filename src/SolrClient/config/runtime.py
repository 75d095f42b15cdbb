"""Runtime domain configuration (logging of the command line front end)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from SolrClient.config.common import ConfigSection, expect_bool, expect_non_empty, expect_str

_ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """Store validated logging settings."""

    level: str
    to_file: bool = False
    dir: str = "log"


def load_runtime(raw: Mapping[str, Any]) -> RuntimeConfig:
    """Load runtime configuration from the `log` section.

    Only `log.level` is required; file logging is off unless enabled.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    section = ConfigSection.of(raw, "log", required=True)
    return RuntimeConfig(
        level=section.required("level", expect_str).upper(),
        to_file=section.optional("to_file", False, expect_bool),
        dir=section.optional("dir", "log", expect_str),
    )


def check_runtime(config: RuntimeConfig) -> None:
    if config.level not in _ALLOWED_LOG_LEVELS:
        raise ValueError(f"log.level must be one of {sorted(_ALLOWED_LOG_LEVELS)}")
    if config.to_file:
        expect_non_empty(config.dir, "log.dir")
