"""Employee Feedback Portal CLI package."""

from __future__ import annotations

import logging

import typer

from feedback_portal.cli.commands.admin import (
    admin_delete,
    admin_list,
    admin_review,
    admin_show,
    admin_stats,
)
from feedback_portal.cli.commands.interactive import (
    dashboard,
    handle_dashboard_command,
    handle_employee_command,
    handle_shell_command,
    portal,
)
from feedback_portal.cli.commands.settings import settings_show, settings_update_api
from feedback_portal.cli.commands.submit import health, submit
from feedback_portal.cli.io import console
from feedback_portal.cli.renderers import (
    format_submission_time,
    render_dashboard,
    render_feedback_table,
    render_record,
    render_stats,
)
from feedback_portal.cli.runtime import (
    ConfigEditor,
    create_dashboard,
    create_form,
    create_view_switcher,
    get_api_client,
    get_runtime,
    get_state,
    initialize_runtime,
    refresh_runtime,
    set_runtime,
    set_runtime_level,
)
from feedback_portal.cli.state import AppState, PROJECT_ROOT
from feedback_portal.cli.utils import apply_log_override
from feedback_portal.core.api_client import FeedbackApiClient
from feedback_portal.core.logging_setup import configure_logging
from feedback_portal.services.config_service import ConfigService

logger = logging.getLogger(__name__)

# Typer applications ---------------------------------------------------------

app = typer.Typer(add_completion=False, help="Employee Feedback Portal CLI")
admin_app = typer.Typer(
    add_completion=False, help="Review, filter and manage submitted feedback."
)
settings_app = typer.Typer(
    add_completion=False, help="Inspect and edit application configuration."
)


@settings_app.callback(invoke_without_command=True)
def _settings_callback(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        settings_show(log_level=None)


# Command registration -------------------------------------------------------

app.command()(submit)
app.command()(health)
app.command()(dashboard)
app.command()(portal)

admin_app.command("list")(admin_list)
admin_app.command("show")(admin_show)
admin_app.command("review")(admin_review)
admin_app.command("delete")(admin_delete)
admin_app.command("stats")(admin_stats)

settings_app.command("show")(settings_show)
settings_app.command("update-api")(settings_update_api)

app.add_typer(admin_app, name="admin")
app.add_typer(settings_app, name="settings")


def main() -> None:
    """CLI entry point."""

    app()


__all__: list[str] = [
    # Typer apps / entrypoints
    "app",
    "admin_app",
    "settings_app",
    "main",
    # Console & logging
    "console",
    "logger",
    "apply_log_override",
    "configure_logging",
    "set_runtime_level",
    # State & runtime
    "AppState",
    "PROJECT_ROOT",
    "create_dashboard",
    "create_form",
    "create_view_switcher",
    "get_api_client",
    "get_runtime",
    "get_state",
    "initialize_runtime",
    "refresh_runtime",
    "set_runtime",
    # Commands
    "submit",
    "health",
    "dashboard",
    "portal",
    "admin_list",
    "admin_show",
    "admin_review",
    "admin_delete",
    "admin_stats",
    "settings_show",
    "settings_update_api",
    "handle_dashboard_command",
    "handle_employee_command",
    "handle_shell_command",
    # Renderers
    "format_submission_time",
    "render_dashboard",
    "render_feedback_table",
    "render_record",
    "render_stats",
    # External classes re-exported for tests/compatibility
    "ConfigEditor",
    "ConfigService",
    "FeedbackApiClient",
]
