"""Configuration loader utilities.

Updates:
    v0.1.0 - 2025-07-14 - YAML loader rooted at the portal config directory.
"""

from __future__ import annotations

import functools
import os
from pathlib import Path
from typing import Any, Dict

import yaml

PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG_ENV_VAR = "FEEDBACK_PORTAL_CONFIG_PATH"


def default_config_path() -> Path:
    """Return the configured directory, preferring the environment override."""

    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).resolve()
    return PROJECT_ROOT / "config"


class ConfigLoader:
    """Loads YAML configuration files from the portal config directory."""

    def __init__(self, base_path: Path | None = None) -> None:
        """Configure the loader with the base directory location.

        Args:
            base_path (Path | None): Custom configuration directory if provided.

        Raises:
            FileNotFoundError: If the resolved configuration path does not exist.
        """

        self._base_path = (base_path or default_config_path()).resolve()
        if not self._base_path.exists():
            raise FileNotFoundError(f"Config directory not found: {self._base_path}")

    @property
    def base_path(self) -> Path:
        return self._base_path

    def _resolve(self, name: str) -> Path:
        candidate = self._base_path / name
        if candidate.suffix != ".yaml":
            candidate = candidate.with_suffix(".yaml")
        if not candidate.exists():
            raise FileNotFoundError(f"Config file not found: {candidate}")
        return candidate

    @functools.lru_cache(maxsize=None)
    def load(self, name: str) -> Dict[str, Any]:
        """Load and cache a configuration file as a dictionary.

        Args:
            name (str): Logical configuration name, with or without `.yaml`.

        Returns:
            dict[str, Any]: Parsed YAML content from disk.
        """

        path = self._resolve(name)
        with path.open("r", encoding="utf-8") as fh:
            return yaml.safe_load(fh) or {}


def load_config(name: str, base_path: Path | None = None) -> Dict[str, Any]:
    """Load a configuration file without explicitly creating a loader."""

    loader = ConfigLoader(base_path=base_path)
    return loader.load(name)
