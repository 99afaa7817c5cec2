"""Immutable, chainable request configuration."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from copy import deepcopy
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Protocol

from ..constants import FilterComparator, ServiceType, SortOrder, parse_service_type
from ..core.errors import ConfigurationError, OperationNotSupportedError
from .options import BatchOption, FilterOption, QueryOptions, SortOption
from .validators import ensure_bool, ensure_count, ensure_str, join_reference

if TYPE_CHECKING:
    from ..upgraders.registry import TranslationRegistry

logger = logging.getLogger("apiv7_request")

REQUEST_ACTION = "doRequest"
_SORT_ORDERS = {order.value for order in SortOrder}
_COMPARATORS = {comparator.value for comparator in FilterComparator}


class Resource(Protocol):
    def invoke(
        self,
        action_name: str,
        params: Mapping[str, Any] | None = None,
        *,
        data: object = None,
    ) -> Any: ...


class ResourceFactory(Protocol):
    def __call__(
        self,
        url: str,
        default_params: Mapping[str, Any] | None,
        actions: Mapping[str, Mapping[str, Any]],
        options: Mapping[str, Any] | None = None,
    ) -> Resource: ...


@dataclass(slots=True, frozen=True, kw_only=True)
class ApiRequest:
    """A request configuration customised by method chaining.

    Instances are normally created by the actions of an
    :class:`~apiv7_request.request.endpoint.ApiEndpoint`. Every chain method
    returns a new instance and leaves the receiver untouched, so a request
    can be shared, branched and executed several times; each ``execute``
    performs one independent call.
    """

    url: str
    strategies: "TranslationRegistry" = field(repr=False, compare=False)
    resource_factory: ResourceFactory = field(repr=False, compare=False)
    default_params: Mapping[str, Any] = field(default_factory=dict)
    action_options: Mapping[str, Any] = field(default_factory=dict)
    resource_options: Mapping[str, Any] = field(default_factory=dict)
    query: QueryOptions = field(default_factory=QueryOptions)
    disabled_operations: frozenset[str] = frozenset()
    service_type: ServiceType = ServiceType.V7
    action_name: str | None = None
    strict: bool = False

    def __post_init__(self) -> None:
        service_type = parse_service_type(self.service_type)
        if service_type not in self.strategies:
            raise ConfigurationError(f"no translation strategy registered for {service_type.value!r}")
        object.__setattr__(self, "service_type", service_type)

        if not isinstance(self.query, QueryOptions):
            object.__setattr__(self, "query", QueryOptions.from_mapping(self.query))
        if self.strict:
            self._check_strict_query()
        object.__setattr__(self, "disabled_operations", frozenset(self.disabled_operations))

        if not isinstance(self.action_options, MappingProxyType):
            action_options = deepcopy(dict(self.action_options))
            action_options.setdefault("url", self.url)
            object.__setattr__(self, "action_options", MappingProxyType(action_options))
        if not isinstance(self.default_params, MappingProxyType):
            object.__setattr__(self, "default_params", MappingProxyType(dict(self.default_params)))
        if not isinstance(self.resource_options, MappingProxyType):
            object.__setattr__(self, "resource_options", MappingProxyType(dict(self.resource_options)))

    def expand(self, toggle: bool = True) -> "ApiRequest":
        """Return referenced objects instead of their ids."""

        return self._clone(expansion=ensure_bool(toggle, name="expand toggle"))

    def sort(self, field: str | None, order: str | None = "ASC") -> "ApiRequest":
        """Sort on ``field`` (``ASC`` or ``DESC``); an empty field unsets sorting."""

        if not field:
            return self._clone(sort=None)
        field = ensure_str(field, name="sort field")
        normalized = ensure_str(order or SortOrder.ASC, name="sort order").upper()
        if self.strict and normalized not in _SORT_ORDERS:
            raise ConfigurationError(f"unknown sort order: {normalized!r}")
        return self._clone(sort=SortOption(field=field, order=normalized))

    def set_filter(self, field: str | None, comparator: str | None = None, *reference: Any) -> "ApiRequest":
        """Replace every filter with a single one; a falsy field unsets filters.

        References are joined with ``","``.
        """

        if not field:
            return self._clone(filters=None)
        item = FilterOption(
            field=ensure_str(field, name="filter field"),
            comparator=self._comparator(comparator),
            reference=join_reference(reference),
        )
        return self._clone(filters=(item,))

    filter = set_filter

    def add_filter(self, field: str, comparator: str, *reference: Any) -> "ApiRequest":
        """Append a filter; references are kept as given."""

        item = FilterOption(
            field=ensure_str(field, name="filter field"),
            comparator=self._comparator(comparator),
            reference=tuple(reference),
        )
        return self._clone(filters=(*(self.query.filters or ()), item))

    def batch(self, parameter: str, values: Any, separator: str | None = ",") -> "ApiRequest":
        """Retrieve several objects in one call by joining ``values`` into ``parameter``."""

        option = BatchOption(
            parameter=ensure_str(parameter, name="batch parameter"),
            values=values,
            separator=ensure_str(separator or ",", name="batch separator"),
        )
        return self._clone(batch=option)

    def aggregate(self, parameter_to_wildcard: str | None = None) -> "ApiRequest":
        """Aggregate on a URL parameter by replacing it with a wildcard."""

        aggregation = tuple(self.query.aggregation or ())
        if parameter_to_wildcard is not None and not isinstance(parameter_to_wildcard, str):
            raise ConfigurationError("aggregation parameter must be str")
        if parameter_to_wildcard:
            aggregation = (*aggregation, parameter_to_wildcard)
        return self._clone(aggregation=aggregation)

    def limit(self, limit: int) -> "ApiRequest":
        return self._clone(limit=ensure_count(limit, name="limit"))

    def offset(self, offset: int) -> "ApiRequest":
        return self._clone(offset=ensure_count(offset, name="offset"))

    def execute(
        self,
        params: Mapping[str, Any] | None = None,
        *,
        data: object = None,
        clean_cache: bool = False,
    ) -> Any:
        """Translate the configuration and perform the call.

        Returns whatever the resource executor returns for the call: a
        response for the sync executor, a pending coroutine for the async one.
        """

        self._assert_operations_allowed()
        url_params = dict(params or {})
        strategy = self.strategies.get(self.service_type)
        try:
            instructions = strategy.translate(url_params, self.action_options, self.query, clean_cache)
        except OperationNotSupportedError as exc:
            if exc.action is not None or self.action_name is None:
                raise
            raise OperationNotSupportedError(
                exc.operation,
                action=self.action_name,
                reason=exc.reason,
            ) from exc

        resource = self.resource_factory(
            self.url,
            self.default_params,
            {REQUEST_ACTION: instructions.transport_options},
            self.resource_options,
        )
        logger.debug(
            "execute action=%s service_type=%s clean_cache=%s",
            self.action_name,
            self.service_type.value,
            clean_cache,
        )
        return resource.invoke(REQUEST_ACTION, instructions.transport_params, data=data)

    def _assert_operations_allowed(self) -> None:
        for operation in self.query.present():
            if operation in self.disabled_operations:
                raise OperationNotSupportedError(operation, action=self.action_name)

    def _check_strict_query(self) -> None:
        if self.query.sort is not None and self.query.sort.order not in _SORT_ORDERS:
            raise ConfigurationError(f"unknown sort order: {self.query.sort.order!r}")
        for item in self.query.filters or ():
            self._comparator(item.comparator)

    def _comparator(self, comparator: object) -> str:
        value = ensure_str(comparator, name="filter comparator")
        if self.strict and value not in _COMPARATORS:
            raise ConfigurationError(f"unknown filter comparator: {value!r}")
        return value

    def _clone(self, **changes: Any) -> "ApiRequest":
        return replace(self, query=replace(self.query, **changes))


__all__ = [
    "REQUEST_ACTION",
    "Resource",
    "ResourceFactory",
    "ApiRequest",
]
