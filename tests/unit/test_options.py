from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from apiv7_request.core.errors import ConfigurationError
from apiv7_request.request.options import BatchOption, FilterOption, QueryOptions, SortOption


def test_empty_options_have_no_present_keys():
    options = QueryOptions()
    assert list(options.present()) == []
    assert options.is_empty()
    assert options.to_dict() == {}


def test_present_follows_vocabulary_order():
    options = QueryOptions(offset=1, sort=SortOption("a"), expansion=False, aggregation=())
    assert list(options.present()) == ["expansion", "sort", "aggregation", "offset"]


def test_nested_sequences_are_stored_as_tuples():
    options = QueryOptions(filters=[FilterOption("a", "eq", "1")], aggregation=["x"])
    assert options.filters == (FilterOption("a", "eq", "1"),)
    assert options.aggregation == ("x",)


def test_options_are_frozen():
    options = QueryOptions(limit=1)
    with pytest.raises(FrozenInstanceError):
        options.limit = 2  # type: ignore[misc]


def test_to_dict_uses_plain_containers():
    options = QueryOptions(
        sort=SortOption("name", "DESC"),
        filters=(FilterOption("a", "in", (1, 2)), FilterOption("b", "eq", "x")),
        batch=BatchOption("id", (1, 2), ";"),
        aggregation=("p",),
        limit=3,
    )
    assert options.to_dict() == {
        "sort": {"field": "name", "order": "DESC"},
        "filters": [
            {"field": "a", "comparator": "in", "reference": [1, 2]},
            {"field": "b", "comparator": "eq", "reference": "x"},
        ],
        "batch": {"parameter": "id", "values": [1, 2], "separator": ";"},
        "aggregation": ["p"],
        "limit": 3,
    }


def test_from_mapping_round_trips_nested_values():
    raw = {
        "expansion": True,
        "sort": {"field": "name", "order": "desc"},
        "filters": [{"field": "a", "comparator": "eq", "reference": "1"}],
        "batch": {"parameter": "id", "values": [1, 2]},
        "limit": None,
    }
    options = QueryOptions.from_mapping(raw)
    assert options == QueryOptions(
        expansion=True,
        sort=SortOption("name", "DESC"),
        filters=(FilterOption("a", "eq", "1"),),
        batch=BatchOption("id", (1, 2), ","),
    )


def test_from_mapping_rejects_unknown_keys_and_non_mappings():
    with pytest.raises(ConfigurationError, match="unknown query options: sorting"):
        QueryOptions.from_mapping({"sorting": "a"})
    with pytest.raises(ConfigurationError):
        QueryOptions.from_mapping(["limit"])  # type: ignore[arg-type]
    assert QueryOptions.from_mapping(None) == QueryOptions()


def test_batch_joined_uses_separator():
    assert BatchOption("id", ["a", 2], "|").joined() == "a|2"


@pytest.mark.parametrize(
    "raw",
    [
        {"aggregation": "serviceName"},
        {"aggregation": ["ok", ""]},
        {"limit": "ten"},
        {"offset": -1},
        {"limit": True},
        {"expansion": "no"},
        {"sort": "name"},
        {"sort": {"field": "name", "direction": "asc"}},
        {"filters": {"field": "a", "comparator": "eq"}},
        {"filters": [{"field": "", "comparator": "eq"}]},
        {"filters": [{"field": "a"}]},
        {"batch": {"parameter": "id", "values": "1,2"}},
        {"batch": {"parameter": "id"}},
        {"batch": ["id", [1, 2]]},
    ],
    ids=[
        "aggregation-str",
        "aggregation-empty-name",
        "limit-str",
        "offset-negative",
        "limit-bool",
        "expansion-str",
        "sort-str",
        "sort-unknown-key",
        "filters-mapping",
        "filter-empty-field",
        "filter-no-comparator",
        "batch-str-values",
        "batch-no-values",
        "batch-sequence",
    ],
)
def test_from_mapping_rejects_malformed_values(raw):
    with pytest.raises(ConfigurationError):
        QueryOptions.from_mapping(raw)


@pytest.mark.parametrize("sort", [{"field": ""}, {"field": None, "order": "DESC"}, {}])
def test_from_mapping_empty_sort_field_means_no_sort(sort):
    assert QueryOptions.from_mapping({"sort": sort, "limit": 0}) == QueryOptions(limit=0)


def test_from_mapping_normalizes_like_chain_methods():
    options = QueryOptions.from_mapping(
        {
            "sort": {"field": "date", "order": None},
            "filters": [{"field": "id", "comparator": "in", "reference": [1, 2]}, FilterOption("b", "eq", "x")],
            "batch": {"parameter": "id", "values": (1, 2), "separator": None},
            "aggregation": ("serviceName",),
        }
    )
    assert options == QueryOptions(
        sort=SortOption("date", "ASC"),
        filters=(FilterOption("id", "in", (1, 2)), FilterOption("b", "eq", "x")),
        batch=BatchOption("id", (1, 2), ","),
        aggregation=("serviceName",),
    )
