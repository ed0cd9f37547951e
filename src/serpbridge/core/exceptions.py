"""Normalization exceptions."""


class NormalizationError(Exception):
    """Base exception for normalization errors."""


class MalformedResponseError(NormalizationError):
    """Raised when a response root is missing or is not a JSON object."""


class UnsupportedProviderError(NormalizationError):
    """Raised when no field mapping exists for the requested provider."""
