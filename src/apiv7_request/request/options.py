"""Query option models."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, fields
from typing import Any

from ..constants import QUERY_OPERATIONS
from ..core.errors import ConfigurationError
from .validators import (
    ensure_bool,
    ensure_count,
    ensure_mapping,
    ensure_sequence,
    ensure_str,
    stringify_value,
)

_SORT_KEYS = frozenset({"field", "order"})
_FILTER_KEYS = frozenset({"field", "comparator", "reference"})
_BATCH_KEYS = frozenset({"parameter", "values", "separator"})


@dataclass(slots=True, frozen=True)
class SortOption:
    field: str
    order: str = "ASC"


@dataclass(slots=True, frozen=True)
class FilterOption:
    field: str
    comparator: str
    # str when set through set_filter, raw tuple when added through add_filter
    reference: Any


@dataclass(slots=True, frozen=True)
class BatchOption:
    parameter: str
    values: Sequence[Any]
    separator: str = ","

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", ensure_sequence(self.values, name="batch values"))

    def joined(self) -> str:
        return self.separator.join(stringify_value(value) for value in self.values)


@dataclass(slots=True, frozen=True)
class QueryOptions:
    """Accumulated query options; ``None`` means the option is not set."""

    expansion: bool | None = None
    sort: SortOption | None = None
    filters: tuple[FilterOption, ...] | None = None
    batch: BatchOption | None = None
    aggregation: tuple[str, ...] | None = None
    limit: int | None = None
    offset: int | None = None

    def __post_init__(self) -> None:
        if self.filters is not None:
            object.__setattr__(self, "filters", tuple(self.filters))
        if self.aggregation is not None:
            object.__setattr__(self, "aggregation", tuple(self.aggregation))

    def present(self) -> Iterator[str]:
        """Yield the names of the options that are set, in vocabulary order."""

        for name in QUERY_OPERATIONS:
            if getattr(self, name) is not None:
                yield name

    def is_empty(self) -> bool:
        return next(self.present(), None) is None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for name in self.present():
            value = getattr(self, name)
            if isinstance(value, SortOption):
                out[name] = {"field": value.field, "order": value.order}
            elif isinstance(value, BatchOption):
                out[name] = {
                    "parameter": value.parameter,
                    "values": list(value.values),
                    "separator": value.separator,
                }
            elif name == "filters":
                out[name] = [
                    {
                        "field": item.field,
                        "comparator": item.comparator,
                        "reference": list(item.reference)
                        if isinstance(item.reference, tuple)
                        else item.reference,
                    }
                    for item in value
                ]
            elif name == "aggregation":
                out[name] = list(value)
            else:
                out[name] = value
        return out

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any] | None) -> "QueryOptions":
        """Build options from a plain mapping such as ``{"sort": {"field": "x"}}``.

        Values go through the same checks as the request chain methods; an
        empty sort field means no sort.
        """

        if raw is None:
            return cls()
        if not isinstance(raw, Mapping):
            raise ConfigurationError("query options must be a mapping")
        known = {item.name for item in fields(cls)}
        unknown = sorted(set(raw) - known)
        if unknown:
            raise ConfigurationError(f"unknown query options: {', '.join(unknown)}")

        values: dict[str, Any] = {}
        for name, value in raw.items():
            if value is None:
                continue
            value = _PARSERS[name](value)
            if value is not None:
                values[name] = value
        return cls(**values)


def _parse_sort(value: object) -> SortOption | None:
    if isinstance(value, SortOption):
        field, order = value.field, value.order
    else:
        raw = ensure_mapping(value, name="sort", allowed=_SORT_KEYS)
        field, order = raw.get("field"), raw.get("order")
    if not field:
        return None
    return SortOption(
        ensure_str(field, name="sort field"),
        ensure_str(order or "ASC", name="sort order").upper(),
    )


def _parse_filter(value: object) -> FilterOption:
    if isinstance(value, FilterOption):
        return value
    raw = ensure_mapping(value, name="filter", allowed=_FILTER_KEYS)
    reference = raw.get("reference", "")
    if isinstance(reference, list):
        reference = tuple(reference)
    return FilterOption(
        field=ensure_str(raw.get("field"), name="filter field"),
        comparator=ensure_str(raw.get("comparator"), name="filter comparator"),
        reference=reference,
    )


def _parse_batch(value: object) -> BatchOption:
    if isinstance(value, BatchOption):
        return value
    raw = ensure_mapping(value, name="batch", allowed=_BATCH_KEYS)
    if "values" not in raw:
        raise ConfigurationError("batch values are required")
    return BatchOption(
        parameter=ensure_str(raw.get("parameter"), name="batch parameter"),
        values=raw["values"],
        separator=ensure_str(raw.get("separator") or ",", name="batch separator"),
    )


_PARSERS = {
    "expansion": lambda value: ensure_bool(value, name="expansion"),
    "sort": _parse_sort,
    "filters": lambda value: tuple(
        _parse_filter(item) for item in ensure_sequence(value, name="filters")
    ),
    "batch": _parse_batch,
    "aggregation": lambda value: tuple(
        ensure_str(item, name="aggregation parameter")
        for item in ensure_sequence(value, name="aggregation")
    ),
    "limit": lambda value: ensure_count(value, name="limit"),
    "offset": lambda value: ensure_count(value, name="offset"),
}


__all__ = [
    "SortOption",
    "FilterOption",
    "BatchOption",
    "QueryOptions",
]
