"""Shared response parsing helpers for sync/async executors."""

from __future__ import annotations

from typing import Protocol

from .errors import Apiv7Error, ProtocolError, classify_http_error


class JsonPayloadResponse(Protocol):
    content: bytes

    def json(self) -> object: ...


def parse_json_payload(
    response: JsonPayloadResponse,
    *,
    http_status: int | None,
) -> object:
    """Decode the response body; empty bodies decode to ``None``."""

    content = getattr(response, "content", None)
    if content is not None and len(content) == 0:
        return None
    try:
        return response.json()
    except Exception as exc:
        raise _json_parse_error(http_status=http_status) from exc


def raise_for_status(payload: object, *, http_status: int | None) -> None:
    mapped_error = classify_http_error(payload, http_status=http_status)
    if mapped_error is not None:
        raise mapped_error


def _json_parse_error(*, http_status: int | None) -> Apiv7Error:
    mapped = classify_http_error(None, http_status=http_status)
    if mapped is not None:
        return mapped
    return ProtocolError(
        "response body is not valid JSON",
        http_status=http_status,
    )


__all__ = [
    "parse_json_payload",
    "raise_for_status",
]
