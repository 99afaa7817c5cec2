"""Iceberg dialect: pagination, sort and filters travel as request headers."""

from __future__ import annotations

from dataclasses import replace
from typing import Any
from urllib.parse import quote

from ..constants import QueryOperation
from ..core.errors import OperationNotSupportedError
from ..request.options import QueryOptions
from .base import CachingRequestUpgrader, TransportInstructions
from .v7 import format_reference

PAGINATION_MODE = "CachedObjectList-Pages"
_UNSUPPORTED = (QueryOperation.BATCH.value, QueryOperation.AGGREGATION.value)


def page_number(offset: int, limit: int | None) -> int:
    """1-based page holding the item at ``offset``."""

    if limit:
        return offset // limit + 1
    return offset + 1


def build_pagination_headers(query: QueryOptions) -> dict[str, str]:
    headers: dict[str, str] = {}
    if query.expansion:
        headers["X-Pagination-Mode"] = PAGINATION_MODE
    if query.limit is not None:
        headers["X-Pagination-Size"] = str(query.limit)
    if query.offset is not None:
        headers["X-Pagination-Number"] = str(page_number(query.offset, query.limit))
    if query.sort is not None:
        headers["X-Pagination-Sort"] = query.sort.field
        headers["X-Pagination-Sort-Order"] = query.sort.order
    if query.filters:
        headers["X-Pagination-Filter"] = "&".join(
            f"{quote(item.field, safe='')}:{item.comparator}="
            f"{quote(format_reference(item.reference), safe='')}"
            for item in query.filters
        )
    return headers


class ApiIcebergRequestUpgrader(CachingRequestUpgrader):
    name = "iceberg"

    def _build(
        self,
        url_params: dict[str, Any],
        action_options: dict[str, Any],
        query: QueryOptions,
    ) -> TransportInstructions:
        for operation in _UNSUPPORTED:
            if getattr(query, operation) is not None:
                raise OperationNotSupportedError(
                    operation,
                    reason="not expressible in the iceberg dialect",
                )

        options = dict(action_options)
        headers = dict(options.get("headers") or {})
        headers.update(build_pagination_headers(query))
        if headers:
            options["headers"] = headers
        return TransportInstructions(transport_options=options, transport_params=dict(url_params))

    def _apply_clean_cache(self, instructions: TransportInstructions) -> TransportInstructions:
        options = dict(instructions.transport_options)
        options["headers"] = {**(options.get("headers") or {}), "Pragma": "no-cache"}
        return replace(instructions, transport_options=options)


__all__ = [
    "PAGINATION_MODE",
    "page_number",
    "build_pagination_headers",
    "ApiIcebergRequestUpgrader",
]
