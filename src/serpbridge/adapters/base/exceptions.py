"""Adapter-specific exceptions."""


class AdapterError(Exception):
    """Base exception for adapter errors."""


class ConnectionError(AdapterError):
    """Raised when the adapter cannot reach the provider (or was never initialized)."""


class AuthenticationError(AdapterError):
    """Raised when the provider rejects the API key."""


class QueryError(AdapterError):
    """Raised when the provider answers a search with an error or an unreadable body."""


class ConfigurationError(AdapterError):
    """Raised when adapter configuration is invalid."""


class OperationNotSupportedError(AdapterError):
    """Raised when an operation is not supported by the selected adapter."""
