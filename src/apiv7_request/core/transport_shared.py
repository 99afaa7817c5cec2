"""Shared helpers for sync/async resource executors."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote, urlencode

import httpx

from ..config import Apiv7ClientConfig
from .errors import ConfigurationError, ProtocolError
from .models import ResourceResponse

_PLACEHOLDER_RE = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")
_DUPLICATE_SLASHES_RE = re.compile(r"(?<!:)/{2,}")
_BODY_METHODS = {"POST", "PUT", "PATCH"}
_URL_SAFE_CHARS = "*,"


def build_default_headers(config: Apiv7ClientConfig) -> Mapping[str, str]:
    return {
        "Accept": "application/json",
        "User-Agent": config.user_agent,
    }


def build_default_timeout(config: Apiv7ClientConfig) -> httpx.Timeout:
    return httpx.Timeout(
        connect=config.transport.timeout_connect_seconds,
        read=config.transport.timeout_read_seconds,
        write=config.transport.timeout_write_seconds,
        pool=config.transport.timeout_pool_seconds,
    )


def _lookup_attribute(data: object, path: str) -> object:
    current = data
    for part in path.split("."):
        if isinstance(current, Mapping):
            current = current.get(part)
        else:
            current = getattr(current, part, None)
        if current is None:
            return None
    return current


def resolve_params(
    default_params: Mapping[str, Any] | None,
    params: Mapping[str, Any] | None,
    *,
    data: object = None,
) -> dict[str, Any]:
    """Merge call params over defaults.

    Callable defaults are resolved on every call; ``"@attr"`` defaults are
    read from the request body.
    """

    resolved: dict[str, Any] = {}
    for name, value in (default_params or {}).items():
        if callable(value):
            value = value()
        elif isinstance(value, str) and value.startswith("@"):
            value = _lookup_attribute(data, value[1:])
        if value is not None:
            resolved[name] = value
    for name, value in (params or {}).items():
        if value is None:
            resolved.pop(name, None)
            continue
        resolved[name] = value
    return resolved


def expand_url_template(
    template: str,
    params: Mapping[str, Any],
    *,
    strip_trailing_slashes: bool = True,
) -> tuple[str, dict[str, Any]]:
    """Substitute ``:name`` placeholders and return the unused params."""

    used: set[str] = set()

    def _substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        used.add(name)
        value = params.get(name)
        if value is None or value == "":
            return ""
        return quote(str(value), safe=_URL_SAFE_CHARS)

    path, separator, query = template.partition("?")
    expanded = _DUPLICATE_SLASHES_RE.sub("/", _PLACEHOLDER_RE.sub(_substitute, path))
    if strip_trailing_slashes and len(expanded) > 1:
        expanded = expanded.rstrip("/")
    leftover = {name: value for name, value in params.items() if name not in used}
    return expanded + separator + query, leftover


def append_query(url: str, params: Mapping[str, Any]) -> str:
    if not params:
        return url
    encoded = urlencode(
        {
            name: ("true" if value is True else "false" if value is False else value)
            for name, value in params.items()
        },
        doseq=True,
    )
    joiner = "&" if "?" in url else "?"
    return f"{url}{joiner}{encoded}"


@dataclass(slots=True, frozen=True)
class PreparedCall:
    method: str
    url: str
    headers: Mapping[str, str]
    body: Any


def prepare_call(
    url: str,
    default_params: Mapping[str, Any] | None,
    action_name: str,
    action_options: Mapping[str, Any],
    resource_options: Mapping[str, Any],
    params: Mapping[str, Any] | None,
    *,
    data: object = None,
) -> PreparedCall:
    method = str(action_options.get("method", "GET")).upper()
    has_body = action_options.get("has_body", method in _BODY_METHODS)
    if data is not None and not has_body:
        raise ConfigurationError(f"action '{action_name}' does not accept a request body")

    template = action_options.get("url") or url
    resolved = resolve_params(default_params, params, data=data)
    path, leftover = expand_url_template(
        template,
        resolved,
        strip_trailing_slashes=resource_options.get("strip_trailing_slashes", True),
    )
    full_url = append_query(path, leftover)
    if "://" not in full_url:
        full_url = full_url.lstrip("/")

    headers = {str(name): str(value) for name, value in (action_options.get("headers") or {}).items()}
    return PreparedCall(
        method=method,
        url=full_url,
        headers=headers,
        body=data if has_body else None,
    )


def build_resource_response(
    response: object,
    payload: object,
    *,
    action_name: str,
    action_options: Mapping[str, Any],
    resource_options: Mapping[str, Any],
) -> ResourceResponse:
    envelope_key = resource_options.get("envelope_key")
    if envelope_key is not None and payload is not None:
        if not isinstance(payload, Mapping) or envelope_key not in payload:
            raise ProtocolError(f"response envelope is missing key '{envelope_key}'")
        payload = payload[envelope_key]

    if action_options.get("is_array") and payload is not None and not isinstance(payload, list):
        raise ProtocolError(
            f"action '{action_name}' expects an array response but got {type(payload).__name__}"
        )

    transform = action_options.get("transform_response")
    if transform is not None and payload is not None:
        payload = transform(payload)

    raw_headers = getattr(response, "headers", None) or {}
    return ResourceResponse(
        status_code=getattr(response, "status_code", 0),
        headers={str(name).lower(): str(value) for name, value in raw_headers.items()},
        data=payload,
    )


__all__ = [
    "build_default_headers",
    "build_default_timeout",
    "resolve_params",
    "expand_url_template",
    "append_query",
    "PreparedCall",
    "prepare_call",
    "build_resource_response",
]
