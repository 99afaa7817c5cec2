"""Core response models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

_TOTAL_COUNT_HEADER = "x-pagination-elements"


@dataclass(slots=True, frozen=True)
class ResourceResponse:
    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    data: Any = None

    @property
    def total_count(self) -> int | None:
        """Total number of items reported by paginated (iceberg) responses."""

        raw = self.headers.get(_TOTAL_COUNT_HEADER)
        if raw is None:
            return None
        text = raw.strip()
        return int(text) if text.isdigit() else None


__all__ = [
    "ResourceResponse",
]
