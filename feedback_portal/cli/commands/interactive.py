"""Interactive views: the admin dashboard loop and the two-view portal shell."""

from __future__ import annotations

import logging
import sys
from typing import Any

import typer
from rich.markup import escape

from feedback_portal.cli.commands.submit import fill_form_interactively, run_submission
from feedback_portal.cli.io import console
from feedback_portal.cli.renderers import render_dashboard, render_header, render_record
from feedback_portal.cli.utils import apply_log_override, prompt_choice
from feedback_portal.core.errors import ValidationError
from feedback_portal.core.models import PAGE_SIZES, SORT_OPTIONS, Category, ReviewedFilter
from feedback_portal.services.review_dashboard import ReviewDashboard
from feedback_portal.services.submission_form import SubmissionForm
from feedback_portal.services.view_switcher import View, ViewSwitcher

logger = logging.getLogger(__name__)

DASHBOARD_HELP = (
    "[dim]n/p page | g N go to page | c category | r status | l page size | o sort | "
    "s search | m ID review | d ID delete | v ID view | f refresh | q quit[/]"
)
EMPLOYEE_HELP = "[dim]s submit | e edit (start over) | q quit[/]"
SHELL_HELP = "[dim]switch | employee | admin[/]"

DELETE_PROMPT = "Are you sure you want to delete this feedback?"


def _cli() -> Any:
    return sys.modules["feedback_portal.cli"]


def handle_dashboard_command(dashboard: ReviewDashboard, line: str) -> bool:
    """Apply one dashboard command; return False when the user quits."""

    parts = line.strip().split(maxsplit=1)
    if not parts:
        return True
    key = parts[0].lower()
    arg = parts[1].strip() if len(parts) > 1 else ""

    try:
        if key in {"q", "quit", "exit"}:
            return False
        if key == "n":
            dashboard.next_page()
        elif key == "p":
            dashboard.previous_page()
        elif key == "g":
            if not arg.isdigit():
                raise ValidationError("Usage: g <page number>")
            dashboard.go_to_page(int(arg))
        elif key == "c":
            choices = ["All Categories", *(member.value for member in Category)]
            value = arg or prompt_choice("Category", choices)
            dashboard.set_category(None if value == "All Categories" else value)
        elif key == "r":
            choices = [member.label for member in ReviewedFilter]
            value = arg or prompt_choice("Status", choices)
            labels = {member.label: member for member in ReviewedFilter}
            dashboard.set_reviewed(labels.get(value, value))
        elif key == "l":
            value = arg or prompt_choice("Page size", [str(size) for size in PAGE_SIZES])
            dashboard.set_limit(value)
        elif key == "o":
            value = arg or prompt_choice("Sort", list(SORT_OPTIONS))
            dashboard.set_sort(value or None)
        elif key == "s":
            dashboard.set_search(arg)
        elif key == "m":
            if not arg:
                raise ValidationError("Usage: m <feedback id>")
            dashboard.mark_reviewed(arg)
        elif key == "d":
            if not arg:
                raise ValidationError("Usage: d <feedback id>")
            dashboard.delete(arg, confirm=lambda: typer.confirm(DELETE_PROMPT))
        elif key == "v":
            if not arg:
                raise ValidationError("Usage: v <feedback id>")
            record = dashboard.show(arg)
            if record is not None:
                render_record(record)
        elif key == "f":
            with console.status("Loading feedback..."):
                dashboard.refresh()
        else:
            console.print(f"[notice]Unknown command: {escape(key)}[/]")
    except ValidationError as exc:
        console.print(f"[error]{escape(exc.message)}[/]")
    return True


def handle_employee_command(form: SubmissionForm, line: str) -> bool:
    """Apply one employee view command; return False when the user quits."""

    key = line.strip().lower()
    if key in {"q", "quit", "exit"}:
        return False
    if key in {"e", "edit"}:
        form.update(feedback="", category="")
        key = "s"
    if key in {"", "s", "submit"}:
        fill_form_interactively(form)
        run_submission(form)
        return True
    console.print(f"[notice]Unknown command: {escape(key)}[/]")
    return True


def dashboard(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Override logging level for this invocation.",
    )
) -> None:
    """Open the interactive review dashboard."""

    apply_log_override(log_level)

    view = _cli().create_dashboard()
    with console.status("Loading feedback..."):
        view.refresh()
    while True:
        render_dashboard(view)
        console.print(DASHBOARD_HELP)
        line = typer.prompt("dashboard", default="", show_default=False)
        view.clear_message()
        if not handle_dashboard_command(view, line):
            break


def handle_shell_command(switcher: ViewSwitcher, line: str) -> bool:
    """Route a portal line to the view switcher or the mounted view."""

    key = line.strip().lower()
    if key == "switch":
        _mount(switcher, switcher.current, toggle=True)
        return True
    if key in {View.EMPLOYEE.value, View.ADMIN.value}:
        _mount(switcher, View(key))
        return True
    if switcher.current is View.ADMIN:
        return handle_dashboard_command(switcher.active, line)
    return handle_employee_command(switcher.active, line)


def _mount(switcher: ViewSwitcher, view: View, *, toggle: bool = False) -> None:
    previous = switcher.current
    active = switcher.toggle() if toggle else switcher.switch_to(view)
    if switcher.current is View.ADMIN and switcher.current is not previous:
        with console.status("Loading feedback..."):
            active.refresh()


def portal(
    view: str = typer.Option(
        View.EMPLOYEE.value,
        "--view",
        help="Initial view: employee or admin.",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Override logging level for this invocation.",
    ),
) -> None:
    """Run the portal shell, switching between the employee and admin views."""

    apply_log_override(log_level)

    try:
        initial = View(view.strip().lower())
    except ValueError as exc:
        raise typer.BadParameter("View must be 'employee' or 'admin'.") from exc

    switcher = _cli().create_view_switcher(initial)
    if switcher.current is View.ADMIN:
        with console.status("Loading feedback..."):
            switcher.active.refresh()

    while True:
        render_header(switcher.current)
        if switcher.current is View.ADMIN:
            render_dashboard(switcher.active)
            console.print(DASHBOARD_HELP)
        else:
            console.print(
                "Your voice matters! All submissions are anonymous and confidential."
            )
            console.print(EMPLOYEE_HELP)
        console.print(SHELL_HELP)
        line = typer.prompt(switcher.current.value, default="", show_default=False)
        if switcher.current is View.ADMIN:
            switcher.active.clear_message()
        if not handle_shell_command(switcher, line):
            break


__all__ = [
    "dashboard",
    "handle_dashboard_command",
    "handle_employee_command",
    "handle_shell_command",
    "portal",
]
