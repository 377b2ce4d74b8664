"""Runtime configuration loaded from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from dojo_marketplace.catalog import DEFAULT_API_BASE_URL, DEFAULT_TIMEOUT
from dojo_marketplace.fetcher import DEFAULT_DOWNLOAD_TIMEOUT

LOG_LEVELS = ("debug", "info", "warning", "error")

# Environment variable -> field name
ENV_VARS = {
    "DOJO_API_BASE_URL": "api_base_url",
    "DOJO_API_KEY": "api_key",
    "DOJO_LOG_LEVEL": "log_level",
    "DOJO_INSTALL_ROOT": "install_root",
    "DOJO_HTTP_TIMEOUT": "http_timeout",
    "DOJO_DOWNLOAD_TIMEOUT": "download_timeout",
}


class MarketplaceConfig(BaseModel):
    """Settings for the marketplace client."""

    api_base_url: str = DEFAULT_API_BASE_URL
    api_key: str | None = None
    log_level: str = "info"
    install_root: Path | None = None
    http_timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    download_timeout: float = Field(default=DEFAULT_DOWNLOAD_TIMEOUT, gt=0)

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().lower()
        if level == "warn":
            level = "warning"
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("install_root")
    @classmethod
    def _expand_root(cls, value: Path | None) -> Path | None:
        return value.expanduser() if value is not None else None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> MarketplaceConfig:
        """Load settings from environment variables.

        Unset or empty variables fall back to the defaults.

        Args:
            environ: Mapping to read instead of ``os.environ``.

        Returns:
            Validated configuration.

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value.
        """
        env = os.environ if environ is None else environ
        values = {field: env[var] for var, field in ENV_VARS.items() if env.get(var)}
        return cls.model_validate(values)
