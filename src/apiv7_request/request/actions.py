"""Default endpoint actions and action declaration merging."""

from __future__ import annotations

from collections.abc import Mapping
from copy import deepcopy
from typing import Any

from ..constants import QUERY_OPERATIONS, ServiceType, parse_service_type
from ..core.errors import ConfigurationError

DISABLED_OPERATIONS_KEY = "disabled_operations"

_ALL_OPERATIONS = list(QUERY_OPERATIONS)

_V7_DEFAULT_ACTIONS: dict[str, dict[str, Any]] = {
    "get": {"method": "GET"},
    "query": {"method": "GET", "is_array": True},
    "save": {"method": "POST", DISABLED_OPERATIONS_KEY: _ALL_OPERATIONS},
    "update": {"method": "PUT", DISABLED_OPERATIONS_KEY: _ALL_OPERATIONS},
    "remove": {"method": "DELETE", DISABLED_OPERATIONS_KEY: _ALL_OPERATIONS},
    "delete": {"method": "DELETE", DISABLED_OPERATIONS_KEY: _ALL_OPERATIONS},
}

_ICEBERG_DEFAULT_ACTIONS: dict[str, dict[str, Any]] = {
    "get": {"method": "GET", DISABLED_OPERATIONS_KEY: ["batch", "aggregation"]},
    "query": {"method": "GET", "is_array": True, DISABLED_OPERATIONS_KEY: ["batch", "aggregation"]},
    "save": {"method": "POST", DISABLED_OPERATIONS_KEY: _ALL_OPERATIONS},
    "update": {"method": "PUT", DISABLED_OPERATIONS_KEY: _ALL_OPERATIONS},
    "remove": {"method": "DELETE", DISABLED_OPERATIONS_KEY: _ALL_OPERATIONS},
    "delete": {"method": "DELETE", DISABLED_OPERATIONS_KEY: _ALL_OPERATIONS},
}

_DEFAULT_ACTIONS: dict[ServiceType, dict[str, dict[str, Any]]] = {
    ServiceType.V7: _V7_DEFAULT_ACTIONS,
    ServiceType.ICEBERG: _ICEBERG_DEFAULT_ACTIONS,
}


def default_actions(service_type: ServiceType | str) -> dict[str, dict[str, Any]]:
    """Return a fresh copy of the default actions of a dialect."""

    return deepcopy(_DEFAULT_ACTIONS[parse_service_type(service_type)])


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge override into a copy of base; nested mappings merge, other values replace."""

    merged = deepcopy(dict(base))
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = deepcopy(value)
    return merged


def split_disabled_operations(
    action_name: str,
    declaration: Mapping[str, Any],
) -> tuple[dict[str, Any], frozenset[str]]:
    """Separate the disabled-operation metadata from transport settings."""

    if not isinstance(declaration, Mapping):
        raise ConfigurationError(f"action '{action_name}' must be declared with a mapping")
    transport_options = {
        key: value for key, value in declaration.items() if key != DISABLED_OPERATIONS_KEY
    }
    raw = declaration.get(DISABLED_OPERATIONS_KEY) or ()
    if isinstance(raw, str):
        raise ConfigurationError(
            f"action '{action_name}': {DISABLED_OPERATIONS_KEY} must be a list of names"
        )
    disabled = frozenset(str(item) for item in raw)
    unknown = sorted(disabled - set(QUERY_OPERATIONS))
    if unknown:
        raise ConfigurationError(
            f"action '{action_name}' disables unknown operations: {', '.join(unknown)}"
        )
    return transport_options, disabled


__all__ = [
    "DISABLED_OPERATIONS_KEY",
    "default_actions",
    "deep_merge",
    "split_disabled_operations",
]
