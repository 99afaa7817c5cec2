"""Error types and status mapping."""

from __future__ import annotations

from collections.abc import Mapping


def extract_message(payload: object) -> str | None:
    if not isinstance(payload, Mapping):
        return None
    value = payload.get("message")
    return str(value) if value is not None else None


def extract_error_class(payload: object) -> str | None:
    if not isinstance(payload, Mapping):
        return None
    value = payload.get("class")
    return str(value) if value is not None else None


class Apiv7Error(Exception):
    """Base exception for this package."""

    def __init__(
        self,
        message: str,
        *,
        http_status: int | None = None,
        error_class: str | None = None,
        cause: str | None = None,
    ) -> None:
        super().__init__(message)
        self.http_status = http_status
        self.error_class = error_class
        self.cause = cause


class OperationNotSupportedError(Apiv7Error):
    """A query option was used on an action (or dialect) that forbids it."""

    def __init__(self, operation: str, *, action: str | None = None, reason: str | None = None) -> None:
        target = f"action '{action}'" if action else "this action"
        message = f"{target} does not support the '{operation}' operation"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.operation = operation
        self.action = action
        self.reason = reason


class ConfigurationError(Apiv7Error, TypeError):
    """Malformed builder arguments or endpoint declarations."""


class ClientClosedError(Apiv7Error):
    """Raised when client is used after close."""


class TransportError(Apiv7Error):
    """Network/transport-level failure."""


class HttpClientError(Apiv7Error):
    """Request rejected by the API (4xx)."""


class HttpServerError(Apiv7Error):
    """Server-side failure (5xx)."""


class ProtocolError(Apiv7Error):
    """Response body does not match what the action declared."""


def classify_http_error(
    payload: object,
    *,
    http_status: int | None,
) -> Apiv7Error | None:
    """Map an HTTP status and decoded error body to a domain exception."""

    if http_status is None:
        return ProtocolError("missing HTTP status")
    if http_status < 400:
        return None

    message = extract_message(payload) or f"API request failed with HTTP {http_status}"
    error_class = extract_error_class(payload)
    if http_status >= 500:
        return HttpServerError(
            message,
            http_status=http_status,
            error_class=error_class,
            cause="server",
        )
    return HttpClientError(
        message,
        http_status=http_status,
        error_class=error_class,
    )


__all__ = [
    "Apiv7Error",
    "OperationNotSupportedError",
    "ConfigurationError",
    "ClientClosedError",
    "TransportError",
    "HttpClientError",
    "HttpServerError",
    "ProtocolError",
    "extract_message",
    "extract_error_class",
    "classify_http_error",
]
