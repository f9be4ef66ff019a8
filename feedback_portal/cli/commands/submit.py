"""Employee-facing commands: anonymous submission and connectivity check."""

from __future__ import annotations

import logging
import sys
from typing import Any

import typer
from rich.panel import Panel

from feedback_portal.cli.io import console
from feedback_portal.cli.renderers import render_form_status
from feedback_portal.cli.utils import apply_log_override, prompt_choice
from feedback_portal.core.models import Category
from feedback_portal.services.submission_form import SubmissionForm

logger = logging.getLogger(__name__)


def _cli() -> Any:
    return sys.modules["feedback_portal.cli"]


def fill_form_interactively(form: SubmissionForm) -> None:
    """Prompt for any field the form is still missing."""

    if not form.category:
        choice = prompt_choice("Feedback category", [member.value for member in Category])
        form.update(category=choice)
    if not form.feedback.strip():
        text = typer.prompt("Your feedback (minimum 10 characters)", default="", show_default=False)
        form.update(feedback=text)


def run_submission(form: SubmissionForm) -> bool:
    """Submit the form, showing the busy indicator while the request runs."""

    with console.status("Submitting..."):
        succeeded = form.submit()
    render_form_status(form)
    return succeeded


def submit(
    category: str | None = typer.Option(
        None,
        "--category",
        "-c",
        help="Feedback category (Work Environment, Leadership, Growth, Others).",
    ),
    text: str | None = typer.Option(
        None,
        "--text",
        "-t",
        help="Feedback text, 10 to 1000 characters.",
    ),
    interactive: bool = typer.Option(
        True,
        "--interactive/--no-interactive",
        help="Prompt for values that were not supplied via options.",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Override logging level for this invocation (e.g., DEBUG, INFO).",
    ),
) -> None:
    """Submit anonymous feedback."""

    apply_log_override(log_level)

    form = _cli().create_form()
    form.update(feedback=text or "", category=category or "")
    if interactive:
        fill_form_interactively(form)

    if not run_submission(form):
        raise typer.Exit(code=1)


def health(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Override logging level for this invocation.",
    )
) -> None:
    """Check whether the feedback service is reachable."""

    apply_log_override(log_level)

    client = _cli().get_api_client()
    if client.check_connection():
        console.print(Panel(f"[success]Connected[/] to {client.base_url}", title="Health"))
        return
    console.print(Panel(f"[error]Cannot reach[/] {client.base_url}", title="Health"))
    raise typer.Exit(code=1)


__all__ = ["fill_form_interactively", "health", "run_submission", "submit"]
