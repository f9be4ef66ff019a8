"""Configuration service for the feedback portal.

Updates:
    v0.1.0 - 2025-07-14 - Exposed API, logging and dashboard sections.
    v0.2.0 - 2025-07-21 - Expand `${VAR}` references and fall back to a local API URL.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..core.config_loader import ConfigLoader
from ..core.models import DEFAULT_PAGE_SIZE, PAGE_SIZES

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000/api"


@dataclass(slots=True, frozen=True)
class ApiConfig:
    """Connection parameters for the feedback service."""

    base_url: str
    timeout_seconds: float = 30.0
    retry_attempts: int = 1


class ConfigService:
    """Loads and exposes configuration for portal components."""

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialize configuration caches.

        Args:
            config_path (Path | None): Optional override for the configuration directory.
        """

        self._loader = ConfigLoader(base_path=config_path)
        self._settings = self._loader.load("settings")

    @property
    def config_path(self) -> Path:
        return self._loader.base_path

    @property
    def app_metadata(self) -> dict[str, Any]:
        """Return general application metadata."""
        return self._section("app")

    @property
    def logging_config(self) -> dict[str, Any]:
        """Return logging configuration settings."""
        return self._section("logging")

    @property
    def dashboard_config(self) -> dict[str, Any]:
        return self._section("dashboard")

    @property
    def api_config(self) -> ApiConfig:
        """Return the resolved API connection settings.

        Raises:
            ValueError: If timeout or retry values are not numeric.
        """

        section = self._expand_env_values(self._section("api"))
        base_url = str(section.get("base_url") or "").strip()
        if not base_url or "${" in base_url:
            logger.debug("API base URL unset; using %s", DEFAULT_BASE_URL)
            base_url = DEFAULT_BASE_URL
        return ApiConfig(
            base_url=base_url.rstrip("/"),
            timeout_seconds=float(section.get("timeout_seconds", 30.0)),
            retry_attempts=max(1, int(section.get("retry_attempts", 1))),
        )

    @property
    def default_page_size(self) -> int:
        value = self.dashboard_config.get("default_limit", DEFAULT_PAGE_SIZE)
        try:
            size = int(value)
        except (TypeError, ValueError):
            return DEFAULT_PAGE_SIZE
        return size if size in PAGE_SIZES else DEFAULT_PAGE_SIZE

    def as_dict(self) -> dict[str, Any]:
        """Return the effective configuration for display."""

        api = self.api_config
        return {
            "config_path": str(self.config_path),
            "app": self.app_metadata,
            "api": {
                "base_url": api.base_url,
                "timeout_seconds": api.timeout_seconds,
                "retry_attempts": api.retry_attempts,
            },
            "dashboard": {"default_limit": self.default_page_size},
            "logging": self.logging_config,
        }

    @staticmethod
    def clear_cache() -> None:
        """Clear cached configuration to reflect file updates."""

        ConfigLoader.load.cache_clear()

    def _section(self, name: str) -> dict[str, Any]:
        section = self._settings.get(name, {})
        return dict(section) if isinstance(section, dict) else {}

    @staticmethod
    def _expand_env_values(value: Any) -> Any:
        if isinstance(value, dict):
            return {key: ConfigService._expand_env_values(entry) for key, entry in value.items()}
        if isinstance(value, list):
            return [ConfigService._expand_env_values(item) for item in value]
        if isinstance(value, str):
            return os.path.expandvars(value)
        return value
