"""Administrator review dashboard: filtering, pagination and row actions.

Updates:
    v0.1.0 - 2025-07-14 - Query-state driven list and stats fetching.
    v0.2.0 - 2025-07-21 - Sequenced fetches so stale responses are dropped.
    v0.3.0 - 2025-07-28 - Clamp the page after deletions shrink the result set.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import count
from typing import Any, Callable, Mapping, Protocol

from ..core.errors import RequestError
from ..core.models import (
    Category,
    FeedbackPage,
    FeedbackRecord,
    FeedbackStats,
    MessageType,
    ReviewedFilter,
)
from ..core.query_state import QueryState

logger = logging.getLogger(__name__)

LIST_CHANNEL = "list"
STATS_CHANNEL = "stats"

ACTION_REVIEW = "review"
ACTION_DELETE = "delete"


class FeedbackReviewApi(Protocol):
    def list(self, filters: Mapping[str, Any] | None = None) -> FeedbackPage:
        ...

    def stats(self) -> FeedbackStats:
        ...

    def get_by_id(self, feedback_id: str) -> FeedbackRecord:
        ...

    def mark_reviewed(self, feedback_id: str) -> FeedbackRecord:
        ...

    def delete(self, feedback_id: str) -> dict[str, Any]:
        ...


class RequestSequencer:
    """Issues increasing tokens per channel; only the newest token is current."""

    def __init__(self) -> None:
        self._counter = count(1)
        self._latest: dict[str, int] = {}

    def issue(self, channel: str) -> int:
        token = next(self._counter)
        self._latest[channel] = token
        return token

    def is_current(self, channel: str, token: int) -> bool:
        return self._latest.get(channel) == token


@dataclass(slots=True)
class Pagination:
    page: int = 1
    pages: int = 0
    total: int = 0


class ReviewDashboard:
    """View state for the admin dashboard.

    Every change to category, review status, sort, page or page size refetches
    both the listing and the stats. The search term filters only the rows of
    the page already on screen.
    """

    def __init__(self, api_client: FeedbackReviewApi, query: QueryState | None = None) -> None:
        self.api_client = api_client
        self.query = query or QueryState()
        self.rows: list[FeedbackRecord] = []
        self.pagination = Pagination(page=self.query.page)
        self.stats: FeedbackStats | None = None
        self.message = ""
        self.message_type: MessageType | None = None
        self._sequencer = RequestSequencer()
        self._pending_list: int | None = None
        self._pending_queries: dict[int, QueryState] = {}

    # Derived view state ---------------------------------------------------

    @property
    def loading(self) -> bool:
        return self._pending_list is not None

    @property
    def visible_rows(self) -> list[FeedbackRecord]:
        if self.loading:
            return []
        return [row for row in self.rows if self.query.matches(row)]

    @property
    def can_go_previous(self) -> bool:
        return self.query.page > 1

    @property
    def can_go_next(self) -> bool:
        return self.query.page < self.pagination.pages

    def row_actions(self, record: FeedbackRecord) -> tuple[str, ...]:
        if record.is_reviewed:
            return (ACTION_DELETE,)
        return (ACTION_REVIEW, ACTION_DELETE)

    def find_row(self, feedback_id: str) -> FeedbackRecord | None:
        for row in self.rows:
            if row.id == feedback_id:
                return row
        return None

    # Query transitions ----------------------------------------------------

    def set_category(self, category: Category | str | None) -> bool:
        return self._apply_query(self.query.with_category(category))

    def set_reviewed(self, reviewed: ReviewedFilter | bool | str | None) -> bool:
        return self._apply_query(self.query.with_reviewed(reviewed))

    def set_limit(self, limit: int | str) -> bool:
        return self._apply_query(self.query.with_limit(limit))

    def set_sort(self, sort: str | None) -> bool:
        return self._apply_query(self.query.with_sort(sort))

    def set_search(self, term: str | None) -> None:
        self.query = self.query.with_search(term)

    def go_to_page(self, page: int) -> bool:
        upper = max(self.pagination.pages, 1)
        target = min(max(int(page), 1), upper)
        return self._apply_query(self.query.with_page(target))

    def next_page(self) -> bool:
        if not self.can_go_next:
            return False
        return self.go_to_page(self.query.page + 1)

    def previous_page(self) -> bool:
        if not self.can_go_previous:
            return False
        return self.go_to_page(self.query.page - 1)

    def refresh(self) -> None:
        """Re-run the list and stats fetches unconditionally."""

        self.fetch_list()
        self.fetch_stats()

    # Fetching -------------------------------------------------------------

    def begin_list_fetch(self) -> int:
        token = self._sequencer.issue(LIST_CHANNEL)
        self._pending_list = token
        self._pending_queries[token] = self.query
        return token

    def complete_list_fetch(
        self,
        token: int,
        page: FeedbackPage | None = None,
        error: RequestError | None = None,
    ) -> bool:
        """Apply a list response if it belongs to the newest request.

        Returns:
            bool: False when the response was superseded and discarded.
        """

        requested = self._pending_queries.pop(token, self.query)
        if not self._sequencer.is_current(LIST_CHANNEL, token):
            logger.debug("list_response_discarded", extra={"token": token})
            return False
        self._pending_list = None

        if error is not None:
            self._set_message(f"Failed to fetch feedback: {error.message}", MessageType.ERROR)
            return True
        if page is None:
            return True

        last_page = max(page.pages, 1)
        if requested.page > last_page:
            logger.info(
                "page_clamped",
                extra={"requested_page": requested.page, "pages": page.pages},
            )
            self.query = self.query.with_page(last_page)
            self.pagination.pages = page.pages
            self.fetch_list()
            return True

        self.rows = list(page.data)
        self.pagination = Pagination(page=page.page, pages=page.pages, total=page.total)
        return True

    def fetch_list(self) -> None:
        token = self.begin_list_fetch()
        params = self.query.to_params()
        try:
            page = self.api_client.list(params)
        except RequestError as exc:
            logger.warning("list_fetch_failed", extra={"error": exc.message, "filters": params})
            self.complete_list_fetch(token, error=exc)
            return
        self.complete_list_fetch(token, page=page)

    def begin_stats_fetch(self) -> int:
        return self._sequencer.issue(STATS_CHANNEL)

    def complete_stats_fetch(self, token: int, stats: FeedbackStats | None) -> bool:
        if not self._sequencer.is_current(STATS_CHANNEL, token):
            logger.debug("stats_response_discarded", extra={"token": token})
            return False
        if stats is not None:
            self.stats = stats
        return True

    def fetch_stats(self) -> None:
        token = self.begin_stats_fetch()
        try:
            stats = self.api_client.stats()
        except RequestError as exc:
            logger.warning("stats_fetch_failed", extra={"error": exc.message})
            self.complete_stats_fetch(token, None)
            return
        self.complete_stats_fetch(token, stats)

    # Row actions ----------------------------------------------------------

    def show(self, feedback_id: str) -> FeedbackRecord | None:
        try:
            return self.api_client.get_by_id(feedback_id)
        except RequestError as exc:
            self._set_message(f"Failed to load feedback: {exc.message}", MessageType.ERROR)
            return None

    def mark_reviewed(self, feedback_id: str) -> bool:
        row = self.find_row(feedback_id)
        if row is not None and row.is_reviewed:
            return False
        try:
            self.api_client.mark_reviewed(feedback_id)
        except RequestError as exc:
            logger.warning(
                "mark_reviewed_failed",
                extra={"feedback_id": feedback_id, "error": exc.message},
            )
            self._set_message(f"Failed to mark as reviewed: {exc.message}", MessageType.ERROR)
            return False
        self._set_message("Feedback marked as reviewed", MessageType.SUCCESS)
        self.refresh()
        return True

    def delete(self, feedback_id: str, confirm: Callable[[], bool]) -> bool:
        """Delete a record after the caller's confirmation step."""

        if not confirm():
            logger.debug("delete_cancelled", extra={"feedback_id": feedback_id})
            return False
        try:
            self.api_client.delete(feedback_id)
        except RequestError as exc:
            logger.warning(
                "delete_failed",
                extra={"feedback_id": feedback_id, "error": exc.message},
            )
            self._set_message(f"Failed to delete feedback: {exc.message}", MessageType.ERROR)
            return False
        self._set_message("Feedback deleted successfully", MessageType.SUCCESS)
        self.refresh()
        return True

    def clear_message(self) -> None:
        self.message = ""
        self.message_type = None

    def _apply_query(self, query: QueryState) -> bool:
        if query.same_server_query(self.query):
            self.query = query
            return False
        self.query = query
        self.refresh()
        return True

    def _set_message(self, message: str, message_type: MessageType) -> None:
        self.message = message
        self.message_type = message_type


__all__ = [
    "ACTION_DELETE",
    "ACTION_REVIEW",
    "Pagination",
    "RequestSequencer",
    "ReviewDashboard",
]
