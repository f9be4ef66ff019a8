"""Rich renderers for CLI outputs."""

from __future__ import annotations

from datetime import datetime

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from feedback_portal.cli.io import console
from feedback_portal.core.models import (
    MAX_FEEDBACK_LENGTH,
    FeedbackRecord,
    FeedbackStats,
    MessageType,
)
from feedback_portal.services.review_dashboard import ACTION_DELETE, ACTION_REVIEW, ReviewDashboard
from feedback_portal.services.submission_form import SubmissionForm
from feedback_portal.services.view_switcher import View

PREVIEW_LENGTH = 60


def format_submission_time(value: datetime | None) -> str:
    """Format a timestamp in local time as e.g. ``Jul 4, 2025, 09:05``."""

    if value is None:
        return "Unknown"
    local = value.astimezone()
    return f"{local:%b} {local.day}, {local:%Y, %H:%M}"


def truncate(text: str, limit: int = PREVIEW_LENGTH) -> str:
    collapsed = " ".join(text.split())
    if len(collapsed) <= limit:
        return collapsed
    return collapsed[: limit - 3].rstrip() + "..."


def render_message(message: str, message_type: MessageType | None) -> None:
    if not message:
        return
    style = "success" if message_type is MessageType.SUCCESS else "error"
    console.print(f"[{style}]{escape(message)}[/]")


def render_header(current: View) -> None:
    """Display the portal title and the current view indicator."""

    tabs = []
    for view in View:
        marker = "[bold reverse]" if view is current else "[dim]"
        tabs.append(f"{marker} {view.value.title()} [/]")
    console.print(
        Panel(
            f"{' '.join(tabs)}\n[bold]{current.label}[/]",
            title="Employee Feedback Portal",
        )
    )


def render_form_status(form: SubmissionForm) -> None:
    counter_style = "notice" if form.near_limit else "dim"
    console.print(f"[{counter_style}]{form.character_count}/{MAX_FEEDBACK_LENGTH}[/]")
    if form.submitting:
        console.print("[cyan]Submitting...[/]")
    render_message(form.message, form.message_type)


def render_stats(stats: FeedbackStats | None) -> None:
    """Render the overview cards; nothing is shown until stats are loaded."""

    if stats is None:
        return
    table = Table(title="Overview", show_header=True)
    table.add_column("Total Feedback", justify="right")
    table.add_column("Reviewed", justify="right", style="reviewed")
    table.add_column("Pending Review", justify="right", style="yellow")
    table.add_column("Categories", justify="right", style="magenta")
    table.add_row(
        str(stats.total_feedback),
        str(stats.total_reviewed),
        str(stats.total_unreviewed),
        str(len(stats.category_stats)),
    )
    console.print(table)

    if stats.category_stats:
        breakdown = Table(title="By Category")
        breakdown.add_column("Category")
        breakdown.add_column("Count", justify="right")
        for entry in stats.category_stats:
            breakdown.add_row(escape(entry.category), str(entry.count))
        console.print(breakdown)


def render_feedback_table(
    rows: list[FeedbackRecord],
    *,
    dashboard: ReviewDashboard | None = None,
) -> None:
    if not rows:
        console.print(Panel("No feedback found", title="Feedback"))
        return

    table = Table(title="Feedback", show_lines=False)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Feedback")
    table.add_column("Category", style="magenta")
    table.add_column("Status")
    table.add_column("Submitted", style="dim")
    table.add_column("Actions", style="cyan")

    for row in rows:
        status = "[reviewed]Reviewed[/]" if row.is_reviewed else "[pending]Pending[/]"
        if dashboard is not None:
            actions = dashboard.row_actions(row)
        else:
            actions = (ACTION_DELETE,) if row.is_reviewed else (ACTION_REVIEW, ACTION_DELETE)
        table.add_row(
            escape(row.id),
            escape(truncate(row.feedback)),
            escape(row.category),
            status,
            format_submission_time(row.submission_time),
            ", ".join(actions),
        )
    console.print(table)


def render_pagination(dashboard: ReviewDashboard) -> None:
    pagination = dashboard.pagination
    if pagination.pages <= 1:
        return
    previous = "[bold]< Previous[/]" if dashboard.can_go_previous else "[dim]< Previous[/]"
    following = "[bold]Next >[/]" if dashboard.can_go_next else "[dim]Next >[/]"
    console.print(
        f"Showing page {pagination.page} of {pagination.pages} "
        f"({pagination.total} total)    {previous}  {following}"
    )


def render_dashboard(dashboard: ReviewDashboard) -> None:
    """Render stats, filters, rows, pagination and the last status message."""

    render_stats(dashboard.stats)

    query = dashboard.query
    filters = [
        f"Category: {query.category.value if query.category else 'All Categories'}",
        f"Status: {query.reviewed.label}",
        f"{query.limit} per page",
    ]
    if query.sort:
        filters.append(f"Sort: {query.sort}")
    if query.search_term:
        filters.append(f"Search: {query.search_term!r}")
    console.print(" | ".join(filters))

    render_message(dashboard.message, dashboard.message_type)

    if dashboard.loading:
        console.print("[cyan]Loading feedback...[/]")
        return

    visible = dashboard.visible_rows
    render_feedback_table(visible, dashboard=dashboard)
    if query.search_term:
        console.print(
            f"[dim]Search matched {len(visible)} of {len(dashboard.rows)} rows on this page; "
            "totals below count the whole result set.[/]"
        )
    render_pagination(dashboard)


def render_record(record: FeedbackRecord) -> None:
    status = "[reviewed]Reviewed[/]" if record.is_reviewed else "[pending]Pending[/]"
    lines = [
        f"[bold]Category:[/] {escape(record.category)}",
        f"[bold]Status:[/] {status}",
        f"[bold]Submitted:[/] {format_submission_time(record.submission_time)}",
        "",
        escape(record.feedback),
    ]
    console.print(Panel("\n".join(lines), title=f"Feedback {escape(record.id)}"))


__all__ = [
    "format_submission_time",
    "render_dashboard",
    "render_feedback_table",
    "render_form_status",
    "render_header",
    "render_message",
    "render_pagination",
    "render_record",
    "render_stats",
    "truncate",
]
