from __future__ import annotations

import pytest

from apiv7_request.core.errors import (
    ConfigurationError,
    HttpClientError,
    HttpServerError,
    ProtocolError,
    TransportError,
)
from apiv7_request.core.transport import HttpResourceFactory
from tests.shared.transport import Response, SyncSequencedClient, build_config


def make_resource(client, actions=None, options=None, default_params=None):
    factory = HttpResourceFactory(build_config(), client=client)
    return factory, factory(
        "/item/:id",
        default_params,
        actions or {"doRequest": {"method": "GET", "url": "/item/:id"}},
        options,
    )


def test_invoke_sends_expanded_url_and_returns_response():
    client = SyncSequencedClient([Response(200, {"id": "abc"}, headers={"X-Request-Id": "r1"})])
    _, resource = make_resource(client)

    result = resource.invoke("doRequest", {"id": "abc", "lang": "en"})

    assert result.status_code == 200
    assert result.data == {"id": "abc"}
    assert result.headers["x-request-id"] == "r1"
    sent = client.sent[0]
    assert (sent.method, sent.url) == ("GET", "item/abc?lang=en")
    assert sent.body is None


def test_invoke_sends_action_headers_and_body():
    client = SyncSequencedClient([Response(200, {"ok": True})])
    _, resource = make_resource(
        client,
        actions={"doRequest": {"method": "PUT", "url": "/item/:id", "headers": {"Pragma": "no-cache"}}},
        default_params={"id": "@id"},
    )

    resource.invoke("doRequest", {}, data={"id": 3, "name": "x"})

    sent = client.sent[0]
    assert (sent.method, sent.url) == ("PUT", "item/3")
    assert sent.headers == {"Pragma": "no-cache"}
    assert sent.body == {"id": 3, "name": "x"}


def test_empty_body_decodes_to_none():
    client = SyncSequencedClient([Response(204)])
    _, resource = make_resource(client, actions={"doRequest": {"method": "DELETE"}})
    assert resource.invoke("doRequest", {"id": 1}).data is None


@pytest.mark.parametrize(
    ("response", "expected"),
    [
        (Response(404, {"message": "not found"}), HttpClientError),
        (Response(500, {"message": "boom"}), HttpServerError),
        (Response(502, raw=b"<html>"), HttpServerError),
        (Response(200, raw=b"not json"), ProtocolError),
    ],
    ids=["404", "500", "502-html", "200-invalid-json"],
)
def test_error_responses_are_mapped(response, expected):
    client = SyncSequencedClient([response])
    _, resource = make_resource(client)
    with pytest.raises(expected):
        resource.invoke("doRequest", {"id": 1})
    assert client.calls == 1


def test_network_error_is_wrapped_without_retry():
    client = SyncSequencedClient([RuntimeError("network down")])
    _, resource = make_resource(client)
    with pytest.raises(TransportError) as exc_info:
        resource.invoke("doRequest", {"id": 1})
    assert exc_info.value.cause == "network"
    assert client.calls == 1


def test_array_action_rejects_object_payload():
    client = SyncSequencedClient([Response(200, {"id": 1})])
    _, resource = make_resource(client, actions={"doRequest": {"method": "GET", "is_array": True}})
    with pytest.raises(ProtocolError):
        resource.invoke("doRequest", {})


def test_unknown_action_is_rejected():
    _, resource = make_resource(SyncSequencedClient([]))
    with pytest.raises(ConfigurationError):
        resource.invoke("missing")


def test_closed_factory_rejects_calls_and_keeps_injected_client_open():
    client = SyncSequencedClient([Response(200, {})])
    factory, resource = make_resource(client)
    factory.close()
    factory.close()
    assert factory.closed is True
    assert client.closed is False
    with pytest.raises(TransportError, match="closed"):
        resource.invoke("doRequest", {"id": 1})
    assert client.calls == 0
