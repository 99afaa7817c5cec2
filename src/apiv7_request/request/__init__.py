"""Request builder, endpoint factory and query option models."""

from .builder import ApiRequest
from .endpoint import ApiEndpoint
from .options import BatchOption, FilterOption, QueryOptions, SortOption

__all__ = [
    "ApiRequest",
    "ApiEndpoint",
    "QueryOptions",
    "SortOption",
    "FilterOption",
    "BatchOption",
]
