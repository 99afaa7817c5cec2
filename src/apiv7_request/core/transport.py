"""Sync HTTP resource executor."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Protocol

import httpx

from ..config import Apiv7ClientConfig
from .errors import Apiv7Error, ConfigurationError, TransportError
from .models import ResourceResponse
from .response_parsing import parse_json_payload, raise_for_status
from .transport_shared import (
    PreparedCall,
    build_default_headers,
    build_default_timeout,
    build_resource_response,
    prepare_call,
)

logger = logging.getLogger("apiv7_request")


class SyncTransportClient(Protocol):
    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        json: object = None,
    ) -> object: ...

    def close(self) -> None: ...


class HttpResource:
    """Resource bound to one URL template and a set of named actions."""

    def __init__(
        self,
        factory: "HttpResourceFactory",
        url: str,
        default_params: Mapping[str, Any] | None,
        actions: Mapping[str, Mapping[str, Any]],
        options: Mapping[str, Any] | None = None,
    ) -> None:
        self._factory = factory
        self.url = url
        self.default_params = MappingProxyType(dict(default_params or {}))
        self.actions = MappingProxyType({name: dict(opts) for name, opts in actions.items()})
        self.options = MappingProxyType(dict(options or {}))

    def invoke(
        self,
        action_name: str,
        params: Mapping[str, Any] | None = None,
        *,
        data: object = None,
    ) -> ResourceResponse:
        action_options = self.actions.get(action_name)
        if action_options is None:
            raise ConfigurationError(f"unknown action: {action_name!r}")
        call = prepare_call(
            self.url,
            self.default_params,
            action_name,
            action_options,
            self.options,
            params,
            data=data,
        )
        return self._factory._send(call, action_name, action_options, self.options)


class HttpResourceFactory:
    """Builds :class:`HttpResource` objects sharing one ``httpx.Client``."""

    def __init__(
        self,
        config: Apiv7ClientConfig,
        *,
        client: SyncTransportClient | None = None,
    ) -> None:
        self._config = config
        self._closed = False
        self._owns_client = client is None
        normalized_base_url = config.base_url.rstrip("/") + "/"
        self._client = client or httpx.Client(
            base_url=normalized_base_url,
            headers=build_default_headers(config),
            timeout=build_default_timeout(config),
        )

    def __call__(
        self,
        url: str,
        default_params: Mapping[str, Any] | None,
        actions: Mapping[str, Mapping[str, Any]],
        options: Mapping[str, Any] | None = None,
    ) -> HttpResource:
        return HttpResource(self, url, default_params, actions, options)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_client and hasattr(self._client, "close"):
            self._client.close()

    def _send(
        self,
        call: PreparedCall,
        action_name: str,
        action_options: Mapping[str, Any],
        resource_options: Mapping[str, Any],
    ) -> ResourceResponse:
        if self._closed:
            raise TransportError("transport is already closed")

        logger.debug("request start method=%s url=%s action=%s", call.method, call.url, action_name)
        try:
            response = self._client.request(
                call.method,
                call.url,
                headers=call.headers or None,
                json=call.body,
            )
        except Exception as exc:
            logger.error(
                "request network error method=%s url=%s error=%s",
                call.method,
                call.url,
                exc.__class__.__name__,
            )
            raise TransportError("network/transport error", cause="network") from exc

        http_status = getattr(response, "status_code", None)
        try:
            payload = parse_json_payload(response, http_status=http_status)
            raise_for_status(payload, http_status=http_status)
            result = build_resource_response(
                response,
                payload,
                action_name=action_name,
                action_options=action_options,
                resource_options=resource_options,
            )
        except Apiv7Error:
            logger.error(
                "request failed method=%s url=%s http_status=%s",
                call.method,
                call.url,
                http_status,
            )
            raise
        logger.info("request success method=%s url=%s http_status=%s", call.method, call.url, http_status)
        return result


__all__ = [
    "HttpResource",
    "HttpResourceFactory",
]
