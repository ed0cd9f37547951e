"""Observability — logging setup."""

from serpbridge.observability.logging import setup_logging

__all__ = ["setup_logging"]
