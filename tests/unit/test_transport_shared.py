from __future__ import annotations

import pytest

from apiv7_request.core.errors import ConfigurationError, ProtocolError
from apiv7_request.core.transport_shared import (
    append_query,
    build_resource_response,
    expand_url_template,
    prepare_call,
    resolve_params,
)
from tests.shared.transport import Response


def test_expand_url_template_substitutes_and_returns_leftovers():
    url, leftover = expand_url_template("/me/bill/:billId/details/:detailId", {"billId": "B 1", "x": 1})
    assert url == "/me/bill/B%201/details"
    assert leftover == {"x": 1}


def test_expand_url_template_keeps_wildcard_and_commas():
    url, _ = expand_url_template("/item/:id", {"id": "*"})
    assert url == "/item/*"
    url, _ = expand_url_template("/item/:id", {"id": "1,2"})
    assert url == "/item/1,2"


def test_expand_url_template_drops_missing_segments():
    assert expand_url_template("/a/:x/b/:y", {})[0] == "/a/b"
    assert expand_url_template("/a/:x/", {}, strip_trailing_slashes=False)[0] == "/a/"


def test_expand_url_template_leaves_query_part_untouched():
    url, _ = expand_url_template("/a/:x?$filter=a:eq=1", {"x": "1"})
    assert url == "/a/1?$filter=a:eq=1"


def test_expand_url_template_keeps_absolute_scheme():
    url, _ = expand_url_template("https://host.test/a/:x", {"x": 2})
    assert url == "https://host.test/a/2"


def test_resolve_params_merges_defaults_callables_and_body_attributes():
    resolved = resolve_params(
        {"id": "@id", "owner": "@meta.owner", "lang": lambda: "en", "empty": None},
        {"lang": "fr", "x": None},
        data={"id": 7, "meta": {"owner": "me"}},
    )
    assert resolved == {"id": 7, "owner": "me", "lang": "fr"}


def test_resolve_params_none_overrides_default():
    assert resolve_params({"id": 1}, {"id": None}) == {}


def test_append_query_joins_existing_query_and_sequences():
    assert append_query("/a", {}) == "/a"
    assert append_query("/a?x=1", {"y": [1, 2]}) == "/a?x=1&y=1&y=2"
    assert append_query("/a", {"flag": True}) == "/a?flag=true"


def test_prepare_call_builds_relative_url_headers_and_body():
    call = prepare_call(
        "/item/:id",
        {"id": "@id"},
        "save",
        {"method": "post", "url": "/item/:id", "headers": {"X-A": 1}},
        {},
        {"extra": "y"},
        data={"id": 5},
    )
    assert call.method == "POST"
    assert call.url == "item/5?extra=y"
    assert call.headers == {"X-A": "1"}
    assert call.body == {"id": 5}


def test_prepare_call_rejects_body_on_bodiless_action():
    with pytest.raises(ConfigurationError):
        prepare_call("/x", None, "get", {"method": "GET"}, {}, None, data={"a": 1})


def test_build_resource_response_unwraps_envelope_and_checks_arrays():
    response = Response(200, {"data": [1, 2]}, headers={"X-Pagination-Elements": "2"})
    result = build_resource_response(
        response,
        {"data": [1, 2]},
        action_name="query",
        action_options={"is_array": True},
        resource_options={"envelope_key": "data"},
    )
    assert result.data == [1, 2]
    assert result.status_code == 200
    assert result.total_count == 2

    with pytest.raises(ProtocolError, match="envelope"):
        build_resource_response(
            response,
            {"other": 1},
            action_name="query",
            action_options={},
            resource_options={"envelope_key": "data"},
        )
    with pytest.raises(ProtocolError, match="array"):
        build_resource_response(
            response,
            {"id": 1},
            action_name="query",
            action_options={"is_array": True},
            resource_options={},
        )
