"""Query vocabulary shared by builders, endpoints and dialects."""

from __future__ import annotations

from enum import Enum

from .core.errors import ConfigurationError


class FilterComparator(str, Enum):
    """Comparators accepted by APIv7 filters."""

    EQUAL = "eq"
    NOT_EQUAL = "ne"
    GREATER_THAN = "gt"
    GREATER_OR_EQUAL = "ge"
    LESS_THAN = "lt"
    LESS_OR_EQUAL = "le"
    LIKE = "like"
    IN = "in"
    NOT_IN = "nin"


class SortOrder(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


class ServiceType(str, Enum):
    """API dialect used to translate query options."""

    V7 = "v7"
    ICEBERG = "iceberg"


class QueryOperation(str, Enum):
    """Names of the accumulated query options, in vocabulary order."""

    EXPANSION = "expansion"
    SORT = "sort"
    FILTERS = "filters"
    BATCH = "batch"
    AGGREGATION = "aggregation"
    LIMIT = "limit"
    OFFSET = "offset"


QUERY_OPERATIONS: tuple[str, ...] = tuple(operation.value for operation in QueryOperation)


def parse_service_type(value: ServiceType | str) -> ServiceType:
    try:
        return ServiceType(value)
    except ValueError as exc:
        raise ConfigurationError(f"unknown service type: {value!r}") from exc


__all__ = [
    "FilterComparator",
    "SortOrder",
    "ServiceType",
    "QueryOperation",
    "QUERY_OPERATIONS",
    "parse_service_type",
]
