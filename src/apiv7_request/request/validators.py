"""Input validation and reference formatting for query options."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any

from ..core.errors import ConfigurationError


def ensure_str(value: object, *, name: str) -> str:
    if isinstance(value, Enum):
        value = value.value
    if not isinstance(value, str) or value == "":
        raise ConfigurationError(f"{name} must be a non-empty str")
    return value


def ensure_count(value: object, *, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be int")
    if value < 0:
        raise ConfigurationError(f"{name} must be >= 0")
    return value


def ensure_bool(value: object, *, name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{name} must be bool")
    return value


def ensure_sequence(value: object, *, name: str) -> tuple[Any, ...]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise ConfigurationError(f"{name} must be a sequence, not {type(value).__name__}")
    return tuple(value)


def ensure_mapping(value: object, *, name: str, allowed: frozenset[str]) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"{name} must be a mapping, not {type(value).__name__}")
    unknown = sorted(set(value) - allowed)
    if unknown:
        raise ConfigurationError(f"unknown {name} keys: {', '.join(unknown)}")
    return value


def stringify_value(value: object) -> str:
    """Text form of one reference or batch value.

    Booleans are lowercased and ``None`` becomes an empty string, matching
    how query parameters are written.
    """

    if value is True:
        return "true"
    if value is False:
        return "false"
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def join_reference(reference: Sequence[Any]) -> str:
    """Join references with ``","``; nested lists are flattened one level."""

    parts: list[str] = []
    for item in reference:
        if isinstance(item, (list, tuple)):
            parts.append(",".join(stringify_value(inner) for inner in item))
        else:
            parts.append(stringify_value(item))
    return ",".join(parts)


__all__ = [
    "ensure_str",
    "ensure_count",
    "ensure_bool",
    "ensure_sequence",
    "ensure_mapping",
    "stringify_value",
    "join_reference",
]
