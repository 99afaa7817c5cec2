"""Endpoint factory creating one request builder per declared action."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from ..constants import ServiceType, parse_service_type
from ..core.errors import ConfigurationError
from .actions import deep_merge, default_actions, split_disabled_operations
from .builder import ApiRequest, ResourceFactory
from .options import QueryOptions

if TYPE_CHECKING:
    from ..upgraders.registry import TranslationRegistry

RequestConstructor = Callable[..., ApiRequest]


class ApiEndpoint:
    """Endpoint exposing each action as a method returning an :class:`ApiRequest`.

    The dialect's default actions (``get``, ``query``, ``save``, ``update``,
    ``remove``, ``delete``) are deep-merged with ``actions`` so callers only
    declare what differs. An action may carry ``disabled_operations``, the
    query options it does not support; using one of them makes ``execute``
    fail before anything is sent.

    Example::

        bills = client.endpoint("/me/bill/:billId")
        response = bills.query().sort("date", "DESC").limit(10).execute()
    """

    def __init__(
        self,
        url: str,
        default_params: Mapping[str, Any] | None = None,
        actions: Mapping[str, Mapping[str, Any]] | None = None,
        resource_options: Mapping[str, Any] | None = None,
        *,
        strategies: "TranslationRegistry",
        resource_factory: ResourceFactory,
        service_type: ServiceType | str = ServiceType.V7,
        strict: bool = False,
    ) -> None:
        if not isinstance(url, str) or not url:
            raise ConfigurationError("endpoint url must be a non-empty str")
        resolved_type = parse_service_type(service_type)
        if resolved_type not in strategies:
            raise ConfigurationError(f"no translation strategy registered for {resolved_type.value!r}")
        if actions is not None and not isinstance(actions, Mapping):
            raise ConfigurationError("actions must be a mapping of action name to settings")

        self.url = url
        self.service_type = resolved_type
        self._default_params = MappingProxyType(dict(default_params or {}))
        self._resource_options = MappingProxyType(dict(resource_options or {}))
        self._strategies = strategies
        self._resource_factory = resource_factory
        self._strict = strict

        merged = deep_merge(default_actions(resolved_type), actions or {})
        self._builders: dict[str, RequestConstructor] = self._create_request_builders(merged)

    def _create_request_builders(
        self,
        actions: Mapping[str, Mapping[str, Any]],
    ) -> dict[str, RequestConstructor]:
        builders: dict[str, RequestConstructor] = {}
        for action_name, declaration in actions.items():
            if not isinstance(action_name, str) or not action_name:
                raise ConfigurationError("action names must be non-empty str")
            if (
                action_name.startswith("_")
                or hasattr(type(self), action_name)
                or action_name in vars(self)
            ):
                raise ConfigurationError(
                    f"action name {action_name!r} is reserved by the endpoint; rename the action"
                )
            transport_options, disabled = split_disabled_operations(action_name, declaration)
            builders[action_name] = self._make_constructor(
                action_name,
                MappingProxyType(transport_options),
                disabled,
            )
        return builders

    def _make_constructor(
        self,
        action_name: str,
        transport_options: Mapping[str, Any],
        disabled_operations: frozenset[str],
    ) -> RequestConstructor:
        def build(initial_query: QueryOptions | Mapping[str, Any] | None = None) -> ApiRequest:
            return ApiRequest(
                url=self.url,
                strategies=self._strategies,
                resource_factory=self._resource_factory,
                default_params=self._default_params,
                action_options=dict(transport_options),
                resource_options=self._resource_options,
                query=initial_query if initial_query is not None else QueryOptions(),
                disabled_operations=disabled_operations,
                service_type=self.service_type,
                action_name=action_name,
                strict=self._strict,
            )

        build.__name__ = action_name
        build.__doc__ = f"Create a request for the '{action_name}' action."
        return build

    @property
    def actions(self) -> tuple[str, ...]:
        return tuple(self._builders)

    def action(self, name: str) -> RequestConstructor:
        try:
            return self._builders[name]
        except KeyError:
            raise ConfigurationError(f"unknown action: {name!r}") from None

    def __contains__(self, name: object) -> bool:
        return name in self._builders

    def __iter__(self) -> Iterator[str]:
        return iter(self._builders)

    def __getattr__(self, name: str) -> RequestConstructor:
        # only reached when normal lookup fails
        builders = self.__dict__.get("_builders")
        if builders is not None and name in builders:
            return builders[name]
        raise AttributeError(f"{type(self).__name__!s} has no action {name!r}")

    def __dir__(self) -> list[str]:
        return sorted({*super().__dir__(), *self._builders})

    def __repr__(self) -> str:
        return (
            f"ApiEndpoint(url={self.url!r}, service_type={self.service_type.value!r}, "
            f"actions={list(self._builders)!r})"
        )


__all__ = [
    "ApiEndpoint",
]
