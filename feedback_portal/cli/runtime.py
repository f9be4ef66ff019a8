"""Runtime wiring for the feedback portal CLI."""

from __future__ import annotations

import logging
import os
from typing import Any

from feedback_portal.cli.io import console
from feedback_portal.cli.state import AppState
from feedback_portal.core.api_client import FeedbackApiClient
from feedback_portal.core.logging_setup import configure_logging
from feedback_portal.core.logging_setup import set_runtime_level  # re-export via utils
from feedback_portal.core.query_state import QueryState
from feedback_portal.services.config_editor import ConfigEditor
from feedback_portal.services.config_service import DEFAULT_BASE_URL, ConfigService
from feedback_portal.services.review_dashboard import ReviewDashboard
from feedback_portal.services.submission_form import SubmissionForm
from feedback_portal.services.view_switcher import View, ViewSwitcher

logger = logging.getLogger(__name__)

_RUNTIME_CACHE: AppState | None = None

_DEFAULT_CONFIG_SERVICE = ConfigService
_DEFAULT_API_CLIENT = FeedbackApiClient


def initialize_runtime() -> AppState:
    """Load configuration and build the API client for this session."""

    config_service_cls = _resolve_dependency("ConfigService", _DEFAULT_CONFIG_SERVICE)
    api_client_cls = _resolve_dependency("FeedbackApiClient", _DEFAULT_API_CLIENT)

    try:
        config_service = config_service_cls()
    except FileNotFoundError as exc:
        console.print(f"[notice]Using built-in defaults: {exc}[/]")
        configure_logging({"level": "WARNING"})
        base_url = os.environ.get("FEEDBACK_API_BASE_URL") or DEFAULT_BASE_URL
        return AppState(api_client=api_client_cls(base_url))

    configure_logging(config_service.logging_config)
    api = config_service.api_config
    logger.debug("Runtime initialization starting.", extra={"base_url": api.base_url})
    api_client = api_client_cls(
        api.base_url,
        timeout=api.timeout_seconds,
        retry_attempts=api.retry_attempts,
    )
    return AppState(
        api_client=api_client,
        config_service=config_service,
        default_page_size=config_service.default_page_size,
    )


def get_runtime() -> AppState:
    """Return the lazily-initialized CLI state."""

    global _RUNTIME_CACHE
    if _RUNTIME_CACHE is None:
        _RUNTIME_CACHE = initialize_runtime()
    return _RUNTIME_CACHE


def set_runtime(runtime: AppState | None) -> None:
    """Replace the cached runtime state."""

    global _RUNTIME_CACHE
    _RUNTIME_CACHE = runtime


def get_state() -> AppState:
    return get_runtime()


def get_api_client() -> FeedbackApiClient:
    state = get_state()
    if state.api_client is None:
        raise RuntimeError("API client not initialized.")
    return state.api_client


def refresh_runtime() -> None:
    """Rebuild the runtime after configuration changes."""

    current = _RUNTIME_CACHE
    if current is not None and current.api_client is not None:
        current.api_client.close()
    set_runtime(initialize_runtime())


def create_dashboard(query: QueryState | None = None) -> ReviewDashboard:
    state = get_state()
    return ReviewDashboard(
        get_api_client(),
        query=query or QueryState(limit=state.default_page_size),
    )


def create_form() -> SubmissionForm:
    return SubmissionForm(api_client=get_api_client())


def create_view_switcher(initial: View | str = View.EMPLOYEE) -> ViewSwitcher:
    """Build the portal shell; each switch builds a fresh form or dashboard."""

    return ViewSwitcher(
        {View.EMPLOYEE: create_form, View.ADMIN: create_dashboard},
        initial=initial,
    )


def _resolve_dependency(name: str, default: Any) -> Any:
    """Return a dependency, preferring overrides on the cli package."""

    from sys import modules

    cli_module = modules.get("feedback_portal.cli")
    if cli_module is not None and hasattr(cli_module, name):
        return getattr(cli_module, name)
    return default


__all__ = [
    "ConfigEditor",
    "create_dashboard",
    "create_form",
    "create_view_switcher",
    "get_api_client",
    "get_runtime",
    "get_state",
    "initialize_runtime",
    "refresh_runtime",
    "set_runtime",
    "set_runtime_level",
]
