from __future__ import annotations

import os
import time
from datetime import datetime, timezone
from typing import Iterator

import pytest
import typer
from rich.console import Console

import feedback_portal.cli as cli
import feedback_portal.cli.renderers as renderers
from feedback_portal.cli.io import PORTAL_THEME
from feedback_portal.cli.renderers import truncate
from feedback_portal.cli.utils import parse_reviewed_option, prompt_choice
from feedback_portal.core.models import (
    Category,
    CategoryCount,
    FeedbackRecord,
    FeedbackStats,
    ReviewedFilter,
)
from feedback_portal.core.query_state import QueryState
from feedback_portal.services.review_dashboard import ReviewDashboard
from feedback_portal.services.submission_form import SubmissionForm
from feedback_portal.services.view_switcher import View, ViewSwitcher
from tests.helpers.cli import (
    StubApiClient,
    capture_console,
    make_record,
    mute_console,
    scripted_prompts,
)


def _backlog() -> StubApiClient:
    return StubApiClient(
        [make_record(f"R{idx:02d}", feedback=f"Item {idx}") for idx in range(1, 24)]
        + [make_record("G01", category="Leadership", is_reviewed=True)]
    )


@pytest.fixture()
def india_time() -> Iterator[None]:
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is unavailable on this platform")
    previous = os.environ.get("TZ")
    os.environ["TZ"] = "IST-05:30"
    time.tzset()
    yield
    if previous is None:
        os.environ.pop("TZ", None)
    else:
        os.environ["TZ"] = previous
    time.tzset()


@pytest.fixture()
def recording_console(monkeypatch: pytest.MonkeyPatch) -> Console:
    recorder = Console(record=True, width=160, theme=PORTAL_THEME)
    monkeypatch.setattr(renderers, "console", recorder)
    return recorder


def test_format_submission_time_uses_local_time(india_time: None) -> None:
    value = datetime(2025, 7, 4, 9, 5, tzinfo=timezone.utc)

    assert cli.format_submission_time(value) == "Jul 4, 2025, 14:35"
    assert cli.format_submission_time(None) == "Unknown"


def test_renderers_show_bracketed_server_values(recording_console: Console) -> None:
    record = FeedbackRecord(id="a[/]b", feedback="x [bold] y", category="[Others]")

    cli.render_feedback_table([record])
    cli.render_record(record)
    cli.render_stats(FeedbackStats(total_feedback=1, category_stats=[CategoryCount("[Others]", 1)]))

    output = recording_console.export_text()
    assert "a[/]b" in output
    assert "x [bold] y" in output
    assert "[Others]" in output
    assert "Feedback a[/]b" in output


def test_truncate_collapses_whitespace() -> None:
    assert truncate("short\n text") == "short text"
    long_text = "word " * 30
    result = truncate(long_text, 20)
    assert len(result) <= 20
    assert result.endswith("...")


def test_apply_log_override_rejects_invalid_level() -> None:
    with pytest.raises(typer.BadParameter):
        cli.apply_log_override("chatty")


def test_apply_log_override_delegates(monkeypatch: pytest.MonkeyPatch) -> None:
    levels: list[str] = []
    monkeypatch.setattr(cli, "set_runtime_level", levels.append)

    cli.apply_log_override("debug")
    cli.apply_log_override(None)

    assert levels == ["debug"]


def test_parse_reviewed_option_errors() -> None:
    assert parse_reviewed_option("true") is ReviewedFilter.REVIEWED
    with pytest.raises(typer.BadParameter):
        parse_reviewed_option("sometimes")


def test_prompt_choice_accepts_number_text_or_blank(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(typer, "echo", lambda *args, **kwargs: None)
    scripted_prompts(monkeypatch, ["2", "Others", ""])

    assert prompt_choice("Pick", ["a", "b"]) == "b"
    assert prompt_choice("Pick", ["a", "b"]) == "Others"
    assert prompt_choice("Pick", ["a", "b"], current="a") == "a"


def test_dashboard_commands_drive_query_state(monkeypatch: pytest.MonkeyPatch) -> None:
    mute_console(monkeypatch)
    api = _backlog()
    dashboard = ReviewDashboard(api, QueryState(limit=10))
    dashboard.refresh()

    assert cli.handle_dashboard_command(dashboard, "n") is True
    assert dashboard.query.page == 2
    assert cli.handle_dashboard_command(dashboard, "g 3") is True
    assert dashboard.query.page == 3

    cli.handle_dashboard_command(dashboard, "c Leadership")
    assert dashboard.query.category is Category.LEADERSHIP
    assert dashboard.query.page == 1

    cli.handle_dashboard_command(dashboard, "r Pending Review")
    assert dashboard.query.reviewed is ReviewedFilter.PENDING

    cli.handle_dashboard_command(dashboard, "c All Categories")
    assert dashboard.query.category is None

    cli.handle_dashboard_command(dashboard, "l 20")
    assert dashboard.query.limit == 20

    cli.handle_dashboard_command(dashboard, "o -submissionTime")
    assert dashboard.query.sort == "-submissionTime"

    list_calls = api.count("list")
    cli.handle_dashboard_command(dashboard, "s item 1")
    assert dashboard.query.search_term == "item 1"
    assert api.count("list") == list_calls

    assert cli.handle_dashboard_command(dashboard, "q") is False


def test_dashboard_command_reports_invalid_input(monkeypatch: pytest.MonkeyPatch) -> None:
    printed = capture_console(monkeypatch)
    dashboard = ReviewDashboard(_backlog())

    assert cli.handle_dashboard_command(dashboard, "l 7") is True
    assert cli.handle_dashboard_command(dashboard, "g next") is True
    cli.handle_dashboard_command(dashboard, "m")

    assert dashboard.query.limit == 10
    assert any("Page size must be one of" in line for line in printed)
    assert any("Usage: g <page number>" in line for line in printed)
    assert any("Usage: m <feedback id>" in line for line in printed)


def test_dashboard_row_commands(monkeypatch: pytest.MonkeyPatch) -> None:
    mute_console(monkeypatch)
    api = _backlog()
    dashboard = ReviewDashboard(api)
    dashboard.refresh()
    monkeypatch.setattr(typer, "confirm", lambda *args, **kwargs: False)

    cli.handle_dashboard_command(dashboard, "m R01")
    assert api.count("mark_reviewed") == 1

    cli.handle_dashboard_command(dashboard, "d R02")
    assert api.count("delete") == 0

    cli.handle_dashboard_command(dashboard, "v R03")
    assert api.count("get_by_id") == 1


def test_employee_commands(monkeypatch: pytest.MonkeyPatch) -> None:
    mute_console(monkeypatch)
    api = StubApiClient()
    form = SubmissionForm(api_client=api, feedback="Quarterly planning was smooth.", category="Others")

    assert cli.handle_employee_command(form, "s") is True
    assert api.count("create") == 1
    assert cli.handle_employee_command(form, "q") is False


def test_shell_switches_views_with_fresh_state(monkeypatch: pytest.MonkeyPatch) -> None:
    mute_console(monkeypatch)
    api = _backlog()
    switcher = ViewSwitcher(
        {
            View.EMPLOYEE: lambda: SubmissionForm(api_client=api),
            View.ADMIN: lambda: ReviewDashboard(api),
        }
    )

    assert cli.handle_shell_command(switcher, "admin") is True
    assert switcher.current is View.ADMIN
    assert api.count("list") == 1

    cli.handle_shell_command(switcher, "n")
    assert switcher.active.query.page == 2

    cli.handle_shell_command(switcher, "switch")
    assert switcher.current is View.EMPLOYEE

    cli.handle_shell_command(switcher, "admin")
    assert switcher.active.query.page == 1
    assert api.count("list") == 3


def test_render_dashboard_notes_local_search(monkeypatch: pytest.MonkeyPatch) -> None:
    printed = capture_console(monkeypatch)
    dashboard = ReviewDashboard(_backlog())
    dashboard.refresh()
    dashboard.set_search("Item 1")

    cli.render_dashboard(dashboard)

    assert any("Search matched 2 of 10 rows on this page" in line for line in printed)
    assert any("Showing page 1 of 3 (24 total)" in line for line in printed)


def test_render_dashboard_while_loading(monkeypatch: pytest.MonkeyPatch) -> None:
    printed = capture_console(monkeypatch)
    dashboard = ReviewDashboard(_backlog())
    dashboard.begin_list_fetch()

    cli.render_dashboard(dashboard)

    assert any("Loading feedback..." in line for line in printed)
    assert not any("Showing page" in line for line in printed)
