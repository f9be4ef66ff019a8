"""Shared test doubles and utilities for feedback_portal tests."""

from __future__ import annotations

import math
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

import feedback_portal.cli as cli
from feedback_portal.core.errors import RequestError
from feedback_portal.core.models import (
    CategoryCount,
    FeedbackPage,
    FeedbackRecord,
    FeedbackStats,
)


def make_record(
    identifier: str,
    *,
    feedback: str = "The onboarding process was thorough.",
    category: str = "Growth",
    is_reviewed: bool = False,
) -> FeedbackRecord:
    return FeedbackRecord(
        id=identifier,
        feedback=feedback,
        category=category,
        is_reviewed=is_reviewed,
        submission_time=datetime(2025, 7, 4, 9, 5, tzinfo=timezone.utc),
    )


class StubApiClient:
    """In-memory stand-in for FeedbackApiClient that records every call."""

    def __init__(
        self,
        records: Iterable[FeedbackRecord] | None = None,
        *,
        base_url: str = "http://testserver/api",
    ) -> None:
        self.records: list[FeedbackRecord] = list(records or [])
        self.base_url = base_url
        self.calls: list[tuple[str, Any]] = []
        self.failures: dict[str, RequestError] = {}
        self.reachable = True
        self.closed = False
        self._next_id = len(self.records) + 1

    def fail(self, operation: str, message: str = "Network down", status_code: int | None = None) -> None:
        self.failures[operation] = RequestError(message, status_code=status_code)

    def count(self, operation: str) -> int:
        return sum(1 for name, _ in self.calls if name == operation)

    def _record_call(self, operation: str, argument: Any = None) -> None:
        self.calls.append((operation, argument))
        if operation in self.failures:
            raise self.failures[operation]

    def create(self, feedback: str, category: Any) -> FeedbackRecord:
        category_value = getattr(category, "value", category)
        self._record_call("create", {"feedback": feedback, "category": category_value})
        record = make_record(str(self._next_id), feedback=feedback, category=category_value)
        self._next_id += 1
        self.records.append(record)
        return record

    def list(self, filters: Mapping[str, Any] | None = None) -> FeedbackPage:
        params = dict(filters or {})
        self._record_call("list", params)
        rows = self.records
        if params.get("category"):
            rows = [row for row in rows if row.category == params["category"]]
        if params.get("reviewed") in {"true", "false"}:
            wanted = params["reviewed"] == "true"
            rows = [row for row in rows if row.is_reviewed is wanted]
        page = int(params.get("page") or 1)
        limit = int(params.get("limit") or 10)
        total = len(rows)
        start = (page - 1) * limit
        return FeedbackPage(
            data=rows[start : start + limit],
            page=page,
            pages=math.ceil(total / limit) if total else 0,
            total=total,
        )

    def get_by_id(self, feedback_id: str) -> FeedbackRecord:
        self._record_call("get_by_id", feedback_id)
        for record in self.records:
            if record.id == feedback_id:
                return record
        raise RequestError("Feedback not found", status_code=404)

    def mark_reviewed(self, feedback_id: str) -> FeedbackRecord:
        self._record_call("mark_reviewed", feedback_id)
        for idx, record in enumerate(self.records):
            if record.id == feedback_id:
                self.records[idx] = replace(record, is_reviewed=True)
                return self.records[idx]
        raise RequestError("Feedback not found", status_code=404)

    def delete(self, feedback_id: str) -> dict[str, Any]:
        self._record_call("delete", feedback_id)
        before = len(self.records)
        self.records = [record for record in self.records if record.id != feedback_id]
        if len(self.records) == before:
            raise RequestError("Feedback not found", status_code=404)
        return {"message": "Feedback deleted"}

    def stats(self) -> FeedbackStats:
        self._record_call("stats")
        reviewed = sum(1 for record in self.records if record.is_reviewed)
        counts: dict[str, int] = {}
        for record in self.records:
            counts[record.category] = counts.get(record.category, 0) + 1
        return FeedbackStats(
            total_feedback=len(self.records),
            total_reviewed=reviewed,
            total_unreviewed=len(self.records) - reviewed,
            category_stats=[CategoryCount(name, count) for name, count in counts.items()],
        )

    def check_connection(self) -> bool:
        self.calls.append(("check_connection", None))
        return self.reachable

    def close(self) -> None:
        self.closed = True


def mute_console(monkeypatch: Any) -> None:
    """Silence Rich console output during tests."""

    monkeypatch.setattr(cli.console, "print", lambda *args, **kwargs: None)
    monkeypatch.setattr(cli.console, "print_json", lambda *args, **kwargs: None)


def capture_console(monkeypatch: Any) -> list[str]:
    """Record plain-text console output for assertions."""

    printed: list[str] = []
    monkeypatch.setattr(
        cli.console, "print", lambda *args, **kwargs: printed.extend(str(arg) for arg in args)
    )
    monkeypatch.setattr(
        cli.console, "print_json", lambda *args, **kwargs: printed.append(str(kwargs.get("data")))
    )
    return printed


def patch_runtime(api_client: StubApiClient, *, default_page_size: int = 10) -> cli.AppState:
    """Install a runtime whose API client is the supplied stub."""

    state = cli.AppState(api_client=api_client, default_page_size=default_page_size)  # type: ignore[arg-type]
    cli.set_runtime(state)
    return state


def scripted_prompts(monkeypatch: Any, answers: Iterable[str]) -> list[str]:
    """Feed typer.prompt from a list; returns the labels that were asked."""

    queue = list(answers)
    asked: list[str] = []

    def _prompt(label: str, *args: Any, **kwargs: Any) -> str:
        asked.append(label)
        if not queue:
            raise AssertionError(f"Unexpected prompt: {label}")
        return queue.pop(0)

    monkeypatch.setattr("typer.prompt", _prompt)
    return asked


__all__ = [
    "StubApiClient",
    "capture_console",
    "make_record",
    "mute_console",
    "patch_runtime",
    "scripted_prompts",
]
