"""Administrator commands for reviewing feedback."""

from __future__ import annotations

import logging
import sys
from typing import Any

import typer

from feedback_portal.cli.io import console
from feedback_portal.cli.renderers import (
    render_dashboard,
    render_message,
    render_record,
    render_stats,
)
from feedback_portal.cli.utils import (
    apply_log_override,
    bad_parameter,
    parse_category_option,
    parse_reviewed_option,
)
from feedback_portal.core.errors import RequestError, ValidationError
from feedback_portal.core.models import MessageType
from feedback_portal.core.query_state import QueryState

logger = logging.getLogger(__name__)


def _cli() -> Any:
    return sys.modules["feedback_portal.cli"]


def _log_option() -> Any:
    return typer.Option(
        None,
        "--log-level",
        "-l",
        help="Override logging level for this invocation.",
    )


def admin_list(
    category: str | None = typer.Option(None, "--category", "-c", help="Only this category."),
    reviewed: str | None = typer.Option(
        None, "--reviewed", "-r", help="Review status filter: any, true or false."
    ),
    page: int = typer.Option(1, "--page", "-p", min=1, help="1-based page number."),
    limit: int | None = typer.Option(
        None, "--limit", "-n", help="Page size: 5, 10, 20 or 50."
    ),
    sort: str | None = typer.Option(
        None, "--sort", help="Sort key, e.g. -submissionTime or category."
    ),
    search: str | None = typer.Option(
        None, "--search", "-s", help="Filter the fetched page by text (local only)."
    ),
    log_level: str | None = _log_option(),
) -> None:
    """List feedback with filters, pagination and the stats overview."""

    apply_log_override(log_level)

    cli_module = _cli()
    state = cli_module.get_state()
    try:
        query = QueryState(
            category=parse_category_option(category),
            reviewed=parse_reviewed_option(reviewed),
            page=page,
            limit=limit if limit is not None else state.default_page_size,
            sort=sort,
            search_term=search or "",
        )
    except ValidationError as exc:
        raise bad_parameter(exc) from exc

    dashboard = cli_module.create_dashboard(query)
    with console.status("Loading feedback..."):
        dashboard.refresh()
    render_dashboard(dashboard)
    if dashboard.message_type is MessageType.ERROR:
        raise typer.Exit(code=1)


def admin_show(
    feedback_id: str = typer.Argument(..., help="Identifier of the feedback record."),
    log_level: str | None = _log_option(),
) -> None:
    """Show a single feedback record."""

    apply_log_override(log_level)

    try:
        record = _cli().get_api_client().get_by_id(feedback_id)
    except RequestError as exc:
        render_message(f"Failed to load feedback: {exc.message}", MessageType.ERROR)
        raise typer.Exit(code=1) from exc
    render_record(record)


def admin_review(
    feedback_id: str = typer.Argument(..., help="Identifier of the feedback record."),
    log_level: str | None = _log_option(),
) -> None:
    """Mark a feedback record as reviewed."""

    apply_log_override(log_level)

    client = _cli().get_api_client()
    try:
        record = client.get_by_id(feedback_id)
    except RequestError as exc:
        render_message(f"Failed to load feedback: {exc.message}", MessageType.ERROR)
        raise typer.Exit(code=1) from exc
    if record.is_reviewed:
        console.print("[notice]Feedback is already reviewed.[/]")
        return

    try:
        client.mark_reviewed(feedback_id)
    except RequestError as exc:
        render_message(f"Failed to mark as reviewed: {exc.message}", MessageType.ERROR)
        raise typer.Exit(code=1) from exc
    logger.info("feedback_reviewed", extra={"feedback_id": feedback_id})
    render_message("Feedback marked as reviewed", MessageType.SUCCESS)


def admin_delete(
    feedback_id: str = typer.Argument(..., help="Identifier of the feedback record."),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Delete without confirmation prompt.",
    ),
    log_level: str | None = _log_option(),
) -> None:
    """Delete a feedback record after confirmation."""

    apply_log_override(log_level)

    if not force and not typer.confirm("Are you sure you want to delete this feedback?"):
        console.print("[notice]Feedback unchanged.[/]")
        return

    try:
        _cli().get_api_client().delete(feedback_id)
    except RequestError as exc:
        render_message(f"Failed to delete feedback: {exc.message}", MessageType.ERROR)
        raise typer.Exit(code=1) from exc
    logger.info("feedback_deleted", extra={"feedback_id": feedback_id})
    render_message("Feedback deleted successfully", MessageType.SUCCESS)


def admin_stats(
    raw: bool = typer.Option(False, "--raw", help="Emit raw JSON instead of tables."),
    log_level: str | None = _log_option(),
) -> None:
    """Show aggregate feedback statistics."""

    apply_log_override(log_level)

    try:
        stats = _cli().get_api_client().stats()
    except RequestError as exc:
        render_message(f"Failed to fetch stats: {exc.message}", MessageType.ERROR)
        raise typer.Exit(code=1) from exc

    if raw:
        console.print_json(
            data={
                "totalFeedback": stats.total_feedback,
                "totalReviewed": stats.total_reviewed,
                "totalUnreviewed": stats.total_unreviewed,
                "categoryStats": [
                    {"category": entry.category, "count": entry.count}
                    for entry in stats.category_stats
                ],
            }
        )
        return
    render_stats(stats)


__all__ = ["admin_delete", "admin_list", "admin_review", "admin_show", "admin_stats"]
