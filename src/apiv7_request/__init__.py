"""Public package exports for the APIv7 request builder."""

from .async_client import AsyncApiv7Client
from .client import Apiv7Client
from .config import Apiv7ClientConfig
from .constants import FilterComparator, ServiceType, SortOrder
from .core.errors import ConfigurationError, OperationNotSupportedError
from .request import ApiEndpoint, ApiRequest, QueryOptions

__all__ = [
    "Apiv7Client",
    "AsyncApiv7Client",
    "Apiv7ClientConfig",
    "ApiEndpoint",
    "ApiRequest",
    "QueryOptions",
    "FilterComparator",
    "SortOrder",
    "ServiceType",
    "OperationNotSupportedError",
    "ConfigurationError",
]
