"""Post-processing of aggregated APIv7 responses."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger("apiv7_request")

#: action option holding the callable applied to the decoded payload
TRANSFORM_RESPONSE_KEY = "transform_response"


@dataclass(slots=True, frozen=True)
class AggregationResponseTransformer:
    """Unwrap the ``{"key", "value", "path", "error"}`` items of an aggregated call.

    Each successful item is replaced by its ``value``. When exactly one URL
    parameter was aggregated, the item's ``key`` (the value that replaced the
    wildcard) is written into the object under that parameter's name unless
    the object already carries it. Failed items and items whose value is not
    an object are returned unchanged so errors stay visible to the caller.
    """

    parameters: tuple[str, ...] = ()

    def __call__(self, payload: Any) -> Any:
        if not isinstance(payload, list):
            return payload
        out: list[Any] = []
        failed = 0
        for item in payload:
            if not _is_aggregated_item(item):
                out.append(item)
                continue
            if item.get("error") or not isinstance(item["value"], Mapping):
                failed += 1
                out.append(item)
                continue
            value = dict(item["value"])
            if len(self.parameters) == 1 and "key" in item:
                value.setdefault(self.parameters[0], item["key"])
            out.append(value)
        if failed:
            logger.debug("aggregated response items_failed=%s items_total=%s", failed, len(payload))
        return out


def _is_aggregated_item(item: object) -> bool:
    return isinstance(item, Mapping) and "value" in item and ("key" in item or "path" in item)


__all__ = [
    "TRANSFORM_RESPONSE_KEY",
    "AggregationResponseTransformer",
]
