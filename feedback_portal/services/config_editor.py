"""Mutable configuration helpers.

Updates:
    v0.1.0 - 2025-07-21 - Edit API connection settings in settings.yaml.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import yaml

from ..core.config_loader import default_config_path


def _resolve_config_path(config_path: Path | None) -> Path:
    directory = (config_path or default_config_path()).resolve()
    if not directory.exists():
        raise FileNotFoundError(f"Config directory not found: {directory}")
    return directory


@dataclass(slots=True)
class ConfigEditor:
    """Provides mutation operations for the YAML settings file."""

    base_path: Path

    def __init__(self, config_path: Path | None = None) -> None:
        self.base_path = _resolve_config_path(config_path)

    def update_api(
        self,
        *,
        base_url: str | None = None,
        timeout_seconds: float | None = None,
        retry_attempts: int | None = None,
    ) -> Dict[str, Any]:
        """Update the `api` section and return the new entry.

        Raises:
            ValueError: If timeout or retry values are out of range.
        """

        path, data = self._load_yaml("settings.yaml")
        entry = dict(data.get("api") or {})

        if base_url is not None:
            entry["base_url"] = base_url.strip().rstrip("/")
        if timeout_seconds is not None:
            if timeout_seconds <= 0:
                raise ValueError("Timeout must be greater than zero.")
            entry["timeout_seconds"] = float(timeout_seconds)
        if retry_attempts is not None:
            if retry_attempts < 1:
                raise ValueError("Retry attempts must be at least 1.")
            entry["retry_attempts"] = int(retry_attempts)

        data["api"] = entry
        self._write_yaml(path, data)
        return entry

    def _load_yaml(self, name: str) -> tuple[Path, Dict[str, Any]]:
        path = self.base_path / name
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
        return path, data

    def _write_yaml(self, path: Path, data: Dict[str, Any]) -> None:
        with path.open("w", encoding="utf-8") as handle:
            yaml.safe_dump(data, handle, sort_keys=False)
