"""Normalization engine — Provider-specific JSON to one result schema."""

from serpbridge.core.exceptions import MalformedResponseError, NormalizationError, UnsupportedProviderError
from serpbridge.core.mappings import PROVIDER_MAPPINGS, Provider
from serpbridge.core.normalizer import Normalizer, normalize

__all__ = [
    "PROVIDER_MAPPINGS",
    "MalformedResponseError",
    "NormalizationError",
    "Normalizer",
    "Provider",
    "UnsupportedProviderError",
    "normalize",
]
