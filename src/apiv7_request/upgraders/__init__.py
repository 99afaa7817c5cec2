"""Translation strategies for the supported API dialects."""

from .aggregation import AggregationResponseTransformer
from .base import CachingRequestUpgrader, TranslationStrategy, TransportInstructions
from .iceberg import ApiIcebergRequestUpgrader
from .registry import TranslationRegistry, default_registry
from .v7 import Apiv7RequestUpgrader

__all__ = [
    "TransportInstructions",
    "TranslationStrategy",
    "CachingRequestUpgrader",
    "Apiv7RequestUpgrader",
    "AggregationResponseTransformer",
    "ApiIcebergRequestUpgrader",
    "TranslationRegistry",
    "default_registry",
]
