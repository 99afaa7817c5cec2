"""Client configuration."""

from __future__ import annotations

from dataclasses import dataclass, field

from .constants import ServiceType
from .core.cache import DEFAULT_CACHE_MAX_ENTRIES, DEFAULT_CACHE_TTL_SECONDS


@dataclass(slots=True, frozen=True)
class TransportConfig:
    """Transport-related settings."""

    timeout_connect_seconds: float = 5.0
    timeout_read_seconds: float = 30.0
    timeout_write_seconds: float = 30.0
    timeout_pool_seconds: float = 5.0

    def validate(self) -> None:
        for field_name in (
            "timeout_connect_seconds",
            "timeout_read_seconds",
            "timeout_write_seconds",
            "timeout_pool_seconds",
        ):
            if getattr(self, field_name) <= 0:
                raise ValueError(f"transport.{field_name} must be > 0")


@dataclass(slots=True, frozen=True)
class CacheConfig:
    """Translation cache settings."""

    enabled: bool = True
    ttl_seconds: float = float(DEFAULT_CACHE_TTL_SECONDS)
    max_entries: int = DEFAULT_CACHE_MAX_ENTRIES

    def validate(self) -> None:
        if not isinstance(self.enabled, bool):
            raise ValueError("cache.enabled must be bool")
        if self.ttl_seconds <= 0:
            raise ValueError("cache.ttl_seconds must be > 0")
        if self.max_entries < 1:
            raise ValueError("cache.max_entries must be >= 1")


@dataclass(slots=True, frozen=True)
class Apiv7ClientConfig:
    """Runtime configuration for the APIv7 client."""

    base_url: str = "https://www.ovh.com/engine/apiv7"
    user_agent: str = "apiv7-request/0.1.0"
    default_service_type: ServiceType = ServiceType.V7
    # reject unknown sort orders and filter comparators in chain calls
    strict: bool = False

    transport: TransportConfig = field(default_factory=TransportConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)

    def validate(self) -> None:
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        if not isinstance(self.strict, bool):
            raise ValueError("strict must be bool")
        try:
            ServiceType(self.default_service_type)
        except ValueError as exc:
            raise ValueError(
                f"default_service_type is unknown: {self.default_service_type!r}"
            ) from exc
        self.transport.validate()
        self.cache.validate()


__all__ = [
    "TransportConfig",
    "CacheConfig",
    "Apiv7ClientConfig",
]
