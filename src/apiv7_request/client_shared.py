"""Shared helpers for sync/async client bootstrap."""

from __future__ import annotations

from .config import Apiv7ClientConfig
from .core.cache import MemoryTranslationCache, TranslationCache
from .core.errors import ConfigurationError
from .upgraders.registry import TranslationRegistry, default_registry


def validate_client_config(config: Apiv7ClientConfig) -> None:
    try:
        config.validate()
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc


def resolve_translation_cache(
    *,
    config: Apiv7ClientConfig,
    cache: TranslationCache | None,
) -> TranslationCache | None:
    if cache is not None:
        return cache
    if config.cache.enabled:
        return MemoryTranslationCache(
            ttl_seconds=config.cache.ttl_seconds,
            max_entries=config.cache.max_entries,
        )
    return None


def resolve_registry(
    *,
    config: Apiv7ClientConfig,
    registry: TranslationRegistry | None,
    cache: TranslationCache | None,
) -> TranslationRegistry:
    if registry is not None:
        return registry
    return default_registry(resolve_translation_cache(config=config, cache=cache))


__all__ = [
    "validate_client_config",
    "resolve_translation_cache",
    "resolve_registry",
]
