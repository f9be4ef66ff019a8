"""Settings command group for the feedback portal CLI."""

from __future__ import annotations

import sys

import typer

from feedback_portal.cli.io import console
from feedback_portal.cli.utils import apply_log_override, prompt_value


def _cli():
    return sys.modules["feedback_portal.cli"]


def settings_show(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Override logging level for this invocation.",
    )
) -> None:
    """Display the effective configuration."""

    apply_log_override(log_level)

    state = _cli().get_state()
    if state.config_service is None:
        client = state.api_client
        console.print_json(
            data={"api": {"base_url": client.base_url if client else None}, "source": "defaults"}
        )
        return
    console.print_json(data=state.config_service.as_dict())


def settings_update_api(
    base_url: str | None = typer.Option(None, "--base-url", help="Root URL of the feedback API."),
    timeout: float | None = typer.Option(
        None, "--timeout", help="Request timeout in seconds."
    ),
    retry_attempts: int | None = typer.Option(
        None, "--retry-attempts", help="Total attempts for read requests (1 disables retries)."
    ),
    interactive: bool = typer.Option(
        False,
        "--interactive",
        "-i",
        help="Prompt for values that were not supplied via options.",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Override logging level for this invocation.",
    ),
) -> None:
    """Update API settings in settings.yaml and refresh the runtime."""

    apply_log_override(log_level)

    cli_module = _cli()

    if interactive and base_url is None:
        current = None
        state = cli_module.get_state()
        if state.api_client is not None:
            current = state.api_client.base_url
        base_url = prompt_value("API base URL", current)

    if base_url is None and timeout is None and retry_attempts is None:
        raise typer.BadParameter(
            "Provide at least one of --base-url, --timeout or --retry-attempts."
        )

    try:
        editor = cli_module.ConfigEditor()
        editor.update_api(
            base_url=base_url,
            timeout_seconds=timeout,
            retry_attempts=retry_attempts,
        )
    except (FileNotFoundError, ValueError) as exc:
        raise typer.BadParameter(str(exc)) from exc

    cli_module.ConfigService.clear_cache()
    cli_module.refresh_runtime()
    console.print("[success]Updated API settings.[/]")
    settings_show(log_level=None)


__all__ = ["settings_show", "settings_update_api"]
