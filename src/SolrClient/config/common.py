"""Shared helpers for configuration loading and validation.

Sections are read through `ConfigSection`, which names every failure by its
dotted key (`solr.timeout`), and value checks follow the `check(value, key)`
signature so they can be passed straight to `required`/`optional`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Callable, Mapping, TypeVar

V = TypeVar("V")
Check = Callable[[Any, str], V]


@dataclass(frozen=True, slots=True)
class ConfigSection:
    """One top-level mapping of the YAML config.

    Attributes:
        name: Section key, used as prefix of error messages.
        values: Section contents; empty when an optional section is missing.
    """

    name: str
    values: Mapping[str, Any]

    @classmethod
    def of(cls, raw: Mapping[str, Any], name: str, *, required: bool) -> ConfigSection:
        """Extract a section from the root config.

        Args:
            raw: Root configuration mapping.
            name: Section name.
            required: Whether the section must exist.

        Raises:
            ValueError: If section is required but missing.
            TypeError: If section is not a mapping.
        """
        section = raw.get(name)
        if section is None:
            if required:
                raise ValueError(f"Missing required config: {name}")
            return cls(name, {})
        if not isinstance(section, Mapping):
            raise TypeError(f"{name} must be an object")
        return cls(name, section)

    def key(self, field: str) -> str:
        return f"{self.name}.{field}"

    def required(self, field: str, check: Check[V]) -> V:
        """Return a validated field that must be present.

        Raises:
            ValueError: If the field is missing.
        """
        if field not in self.values:
            raise ValueError(f"Missing required config: {self.key(field)}")
        return check(self.values[field], self.key(field))

    def optional(self, field: str, default: V, check: Check[V]) -> V:
        return check(self.values.get(field, default), self.key(field))


def expect_str(value: Any, config_key: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{config_key} must be a string")
    return value


def expect_bool(value: Any, config_key: str) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"{config_key} must be a boolean")
    return value


def expect_int(value: Any, config_key: str) -> int:
    """Validate an integer; YAML booleans are rejected."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{config_key} must be an integer")
    return value


def expect_float(value: Any, config_key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{config_key} must be a number")
    return float(value)


def expect_non_empty(value: str, config_key: str) -> None:
    if not value.strip():
        raise ValueError(f"{config_key} must not be empty")


def expect_positive(value: float, config_key: str) -> None:
    if value <= 0:
        raise ValueError(f"{config_key} must be positive")


def env_override(env_name: str, value: str) -> str:
    """Return the environment value when `env_name` is set and non-blank.

    An empty `env_name` disables the override.
    """
    if not env_name:
        return value
    return os.getenv(env_name, "").strip() or value
