"""Translation contract shared by every API dialect."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from ..core.cache import TranslationCache, make_cache_key
from ..request.options import QueryOptions

logger = logging.getLogger("apiv7_request")


@dataclass(slots=True, frozen=True)
class TransportInstructions:
    """Resolved transport options (HTTP behaviour) and call parameters."""

    transport_options: dict[str, Any] = field(default_factory=dict)
    transport_params: dict[str, Any] = field(default_factory=dict)


class TranslationStrategy(Protocol):
    """Converts accumulated query options into transport instructions."""

    def translate(
        self,
        url_params: Mapping[str, Any],
        action_options: Mapping[str, Any],
        query: QueryOptions,
        clean_cache: bool = False,
    ) -> TransportInstructions:
        """Return the instructions for one call; must not mutate its inputs."""


class CachingRequestUpgrader(ABC):
    """Common translate flow: cache lookup, build, cache refresh."""

    #: dialect name, part of every cache key
    name: str = ""

    def __init__(self, *, cache: TranslationCache | None = None) -> None:
        self._cache = cache

    def translate(
        self,
        url_params: Mapping[str, Any],
        action_options: Mapping[str, Any],
        query: QueryOptions,
        clean_cache: bool = False,
    ) -> TransportInstructions:
        key = None
        instructions = None
        if self._cache is not None:
            key = make_cache_key(self.name, dict(url_params), dict(action_options), query.to_dict())
            if clean_cache:
                logger.debug("translation cache refresh dialect=%s", self.name)
                self._cache.invalidate(key)
            else:
                instructions = self._cache.get(key)
                if instructions is not None:
                    logger.debug("translation cache hit dialect=%s", self.name)

        if instructions is None:
            instructions = self._build(dict(url_params), dict(action_options), query)
            if self._cache is not None:
                self._cache.put(key, instructions)

        if clean_cache:
            instructions = self._apply_clean_cache(instructions)
        logger.debug(
            "translated query dialect=%s operations=%s",
            self.name,
            ",".join(query.present()) or "-",
        )
        return instructions

    @abstractmethod
    def _build(
        self,
        url_params: dict[str, Any],
        action_options: dict[str, Any],
        query: QueryOptions,
    ) -> TransportInstructions: ...

    def _apply_clean_cache(self, instructions: TransportInstructions) -> TransportInstructions:
        return instructions


__all__ = [
    "TransportInstructions",
    "TranslationStrategy",
    "CachingRequestUpgrader",
]
