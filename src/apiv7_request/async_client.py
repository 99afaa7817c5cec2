"""Public async client entrypoint."""

from __future__ import annotations

from collections.abc import Mapping
from types import TracebackType
from typing import Any

from .client_shared import resolve_registry, validate_client_config
from .config import Apiv7ClientConfig
from .constants import ServiceType
from .core.async_transport import AsyncHttpResourceFactory, AsyncTransportClient
from .core.cache import TranslationCache
from .core.errors import ClientClosedError
from .request.endpoint import ApiEndpoint
from .upgraders.registry import TranslationRegistry


class AsyncApiv7Client:
    """Async counterpart of :class:`~apiv7_request.client.Apiv7Client`.

    Requests built from its endpoints return coroutines from ``execute``.
    """

    def __init__(
        self,
        *,
        config: Apiv7ClientConfig | None = None,
        http_client: AsyncTransportClient | None = None,
        resource_factory: AsyncHttpResourceFactory | None = None,
        registry: TranslationRegistry | None = None,
        cache: TranslationCache | None = None,
    ) -> None:
        self._config = config or Apiv7ClientConfig()
        validate_client_config(self._config)

        self._resource_factory = resource_factory or AsyncHttpResourceFactory(
            self._config,
            client=http_client,
        )
        self._registry = resolve_registry(config=self._config, registry=registry, cache=cache)
        self._closed = False

    @property
    def registry(self) -> TranslationRegistry:
        return self._registry

    def endpoint(
        self,
        url: str,
        default_params: Mapping[str, Any] | None = None,
        actions: Mapping[str, Mapping[str, Any]] | None = None,
        resource_options: Mapping[str, Any] | None = None,
        *,
        service_type: ServiceType | str | None = None,
    ) -> ApiEndpoint:
        self._ensure_open()
        return ApiEndpoint(
            url,
            default_params,
            actions,
            resource_options,
            strategies=self._registry,
            resource_factory=self._resource_factory,
            service_type=service_type or self._config.default_service_type,
            strict=self._config.strict,
        )

    def _ensure_open(self) -> None:
        if self._closed:
            raise ClientClosedError("AsyncApiv7Client is already closed")

    async def close(self) -> None:
        if self._closed:
            return
        await self._resource_factory.close()
        self._closed = True

    async def __aenter__(self) -> "AsyncApiv7Client":
        self._ensure_open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        await self.close()
        return False


__all__ = [
    "AsyncApiv7Client",
]
