"""APIv7 dialect: query options become ``$``-prefixed query string entries."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from ..request.options import FilterOption, QueryOptions
from ..request.validators import join_reference, stringify_value
from .aggregation import TRANSFORM_RESPONSE_KEY, AggregationResponseTransformer
from .base import CachingRequestUpgrader, TransportInstructions

AGGREGATION_WILDCARD = "*"


def format_reference(reference: Any) -> str:
    if isinstance(reference, (tuple, list)):
        return join_reference(reference)
    return stringify_value(reference)


def build_filter_entry(item: FilterOption) -> str:
    return (
        f"{quote(item.field, safe='')}:{item.comparator}="
        f"{quote(format_reference(item.reference), safe=',')}"
    )


def build_query_string(query: QueryOptions) -> list[str]:
    entries: list[str] = []
    if query.aggregation is not None:
        entries.append("$aggreg=1")
    if query.batch is not None:
        entries.append(f"$batch={quote(query.batch.separator, safe='')}")
    if query.expansion:
        entries.append("$expand=1")
    if query.sort is not None:
        entries.append(f"$sort={quote(query.sort.field, safe='')}")
        entries.append(f"$order={query.sort.order.lower()}")
    for item in query.filters or ():
        entries.append(build_filter_entry(item))
    if query.limit is not None:
        entries.append(f"$limit={query.limit}")
    if query.offset is not None:
        entries.append(f"$offset={query.offset}")
    return entries


class Apiv7RequestUpgrader(CachingRequestUpgrader):
    """Appends APIv7 operations to the action URL.

    The operations are written into the URL rather than passed as params so
    the ``$`` keys and filter syntax reach the API unescaped.
    Aggregated parameters are replaced by the ``*`` wildcard and the action
    becomes array-valued, its items unwrapped by
    :class:`AggregationResponseTransformer`; batched parameters are joined
    with the batch separator.
    """

    name = "v7"

    def _build(
        self,
        url_params: dict[str, Any],
        action_options: dict[str, Any],
        query: QueryOptions,
    ) -> TransportInstructions:
        params = dict(url_params)
        options = dict(action_options)

        for parameter in query.aggregation or ():
            params[parameter] = AGGREGATION_WILDCARD
        if query.aggregation is not None:
            options["is_array"] = True
            options[TRANSFORM_RESPONSE_KEY] = AggregationResponseTransformer(query.aggregation)
        if query.batch is not None:
            params[query.batch.parameter] = query.batch.joined()

        entries = build_query_string(query)
        if entries:
            url = str(options.get("url", ""))
            joiner = "&" if "?" in url else "?"
            options["url"] = url + joiner + "&".join(entries)

        return TransportInstructions(transport_options=options, transport_params=params)


__all__ = [
    "AGGREGATION_WILDCARD",
    "format_reference",
    "build_filter_entry",
    "build_query_string",
    "Apiv7RequestUpgrader",
]
