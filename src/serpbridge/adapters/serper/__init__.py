"""Serper adapter (POST, header authentication)."""

from serpbridge.adapters.serper.adapter import SerperAdapter

__all__ = ["SerperAdapter"]
