"""Base adapter interface — Abstract classes for search provider connectors."""

from serpbridge.adapters.base.adapter import EngineInfo, SearchAdapter
from serpbridge.adapters.base.registry import AdapterNotFoundError, AdapterRegistry, select_default_adapter

__all__ = ["AdapterNotFoundError", "AdapterRegistry", "EngineInfo", "SearchAdapter", "select_default_adapter"]
