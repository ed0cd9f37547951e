"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. YAML config file (if loaded via ``Settings.from_yaml``)
  2. Environment variables (SERPBRIDGE_ prefix)
  3. Default values

API keys and the default engine additionally fall back to the conventional
``SERPER_API_KEY``, ``SERPAPI_API_KEY`` and ``SEARCH_ENGINE`` variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

from serpbridge.adapters import API_KEY_ENV_VARS
from serpbridge.adapters.base.registry import DEFAULT_ENGINE


class AdapterConfig(BaseModel):
    """Configuration for a single search adapter."""

    enabled: bool = Field(default=True, description="Whether this adapter is registered")
    api_key: str | None = Field(default=None, description="Provider API key")
    base_url: str | None = Field(default=None, description="Override the provider base URL")
    extra: dict[str, Any] = Field(default_factory=dict, description="Adapter-specific options")


class SearchSettings(BaseModel):
    """Search behavior configuration."""

    default_engine: str | None = Field(default=None, description="Engine used when none is named")
    timeout: float = Field(default=30.0, gt=0, description="HTTP request timeout in seconds")
    adapters: dict[str, AdapterConfig] = Field(default_factory=dict, description="Adapter configurations")

    @field_validator("default_engine")
    @classmethod
    def _lower_engine(cls, v: str | None) -> str | None:
        return v.strip().lower() if v else v


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the SERPBRIDGE_ prefix.
    Nested settings use double underscores: SERPBRIDGE_SEARCH__TIMEOUT=10

    Example:
        SERPBRIDGE_SEARCH__DEFAULT_ENGINE=serpapi
        SERPBRIDGE_SEARCH__ADAPTERS__SERPER__API_KEY=...
        SERPBRIDGE_OBSERVABILITY__LOG_FORMAT=console
    """

    model_config = {
        "env_prefix": "SERPBRIDGE_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    search: SearchSettings = Field(default_factory=SearchSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    def adapter_config(self, name: str) -> AdapterConfig:
        """Configuration for adapter *name* (defaults if not configured)."""
        return self.search.adapters.get(name) or AdapterConfig()

    def api_key_for(self, name: str) -> str:
        """API key for adapter *name*: configured value, else its conventional env var."""
        configured = self.adapter_config(name).api_key
        if configured:
            return configured
        env_var = API_KEY_ENV_VARS.get(name)
        return os.environ.get(env_var, "") if env_var else ""

    def preferred_engine(self) -> str:
        """Engine to select when the caller names none."""
        return self.search.default_engine or os.environ.get("SEARCH_ENGINE", "").strip().lower() or DEFAULT_ENGINE

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Keys present in the YAML file win over environment variables; keys
        it omits are still read from the environment.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
