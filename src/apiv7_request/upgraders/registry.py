"""Explicit service type -> translation strategy table."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from ..constants import ServiceType, parse_service_type
from ..core.cache import TranslationCache
from ..core.errors import ConfigurationError
from .base import TranslationStrategy
from .iceberg import ApiIcebergRequestUpgrader
from .v7 import Apiv7RequestUpgrader


class TranslationRegistry:
    """Maps each supported dialect to the strategy translating its requests."""

    def __init__(self, strategies: Mapping[ServiceType | str, TranslationStrategy]) -> None:
        resolved: dict[ServiceType, TranslationStrategy] = {}
        for service_type, strategy in strategies.items():
            if not callable(getattr(strategy, "translate", None)):
                raise ConfigurationError(f"strategy for {service_type!r} has no translate()")
            resolved[parse_service_type(service_type)] = strategy
        self._strategies = resolved

    def __contains__(self, service_type: object) -> bool:
        try:
            return parse_service_type(service_type) in self._strategies  # type: ignore[arg-type]
        except ConfigurationError:
            return False

    def __iter__(self) -> Iterator[ServiceType]:
        return iter(self._strategies)

    def get(self, service_type: ServiceType | str) -> TranslationStrategy:
        resolved = parse_service_type(service_type)
        strategy = self._strategies.get(resolved)
        if strategy is None:
            raise ConfigurationError(f"no translation strategy registered for {resolved.value!r}")
        return strategy


def default_registry(cache: TranslationCache | None = None) -> TranslationRegistry:
    return TranslationRegistry(
        {
            ServiceType.V7: Apiv7RequestUpgrader(cache=cache),
            ServiceType.ICEBERG: ApiIcebergRequestUpgrader(cache=cache),
        }
    )


__all__ = [
    "TranslationRegistry",
    "default_registry",
]
