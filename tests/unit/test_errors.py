from __future__ import annotations

import pytest

from apiv7_request.core.errors import (
    Apiv7Error,
    ConfigurationError,
    HttpClientError,
    HttpServerError,
    OperationNotSupportedError,
    ProtocolError,
    classify_http_error,
)


def test_success_status_maps_to_no_error():
    assert classify_http_error({"message": "ok"}, http_status=200) is None


@pytest.mark.parametrize(
    ("http_status", "expected"),
    [(400, HttpClientError), (404, HttpClientError), (500, HttpServerError), (503, HttpServerError)],
)
def test_error_status_is_classified(http_status, expected):
    err = classify_http_error({"message": "boom", "class": "Client::NotFound"}, http_status=http_status)
    assert isinstance(err, expected)
    assert str(err) == "boom"
    assert err.http_status == http_status
    assert err.error_class == "Client::NotFound"


def test_missing_message_uses_generic_text():
    err = classify_http_error(None, http_status=404)
    assert "404" in str(err)


def test_missing_status_is_protocol_error():
    assert isinstance(classify_http_error({}, http_status=None), ProtocolError)


def test_operation_not_supported_error_carries_operation_and_action():
    err = OperationNotSupportedError("sort", action="get")
    assert isinstance(err, Apiv7Error)
    assert err.operation == "sort"
    assert err.action == "get"
    assert "'get'" in str(err) and "'sort'" in str(err)


def test_configuration_error_is_type_error():
    assert issubclass(ConfigurationError, TypeError)
    assert issubclass(ConfigurationError, Apiv7Error)
