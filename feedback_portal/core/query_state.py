"""Immutable query state driving the review dashboard.

Updates:
    v0.1.0 - 2025-07-14 - Replaced the mutable filter dict with a frozen value.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from .errors import ValidationError
from .models import (
    DEFAULT_PAGE_SIZE,
    PAGE_SIZES,
    SORT_OPTIONS,
    Category,
    FeedbackRecord,
    ReviewedFilter,
)


@dataclass(slots=True, frozen=True)
class QueryState:
    """Filter, pagination and search values for one dashboard view.

    Changing a server-side filter returns a copy on page 1. The search term
    only narrows the rows already fetched and is never sent to the server.
    """

    category: Category | None = None
    reviewed: ReviewedFilter = ReviewedFilter.ANY
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE
    sort: str | None = None
    search_term: str = ""

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "category", Category.parse(self.category))
            object.__setattr__(self, "reviewed", ReviewedFilter.parse(self.reviewed))
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        try:
            limit = int(self.limit)
            page = int(self.page)
        except (TypeError, ValueError) as exc:
            raise ValidationError(f"Page and limit must be integers: {exc}") from exc
        if limit not in PAGE_SIZES:
            allowed = ", ".join(str(size) for size in PAGE_SIZES)
            raise ValidationError(f"Page size must be one of {allowed}; got {self.limit}.")
        if page < 1:
            raise ValidationError(f"Page must be 1 or greater; got {self.page}.")
        if self.sort and self.sort not in SORT_OPTIONS:
            raise ValidationError(f"Unknown sort option: {self.sort}")
        object.__setattr__(self, "limit", limit)
        object.__setattr__(self, "page", page)
        object.__setattr__(self, "sort", self.sort or None)
        object.__setattr__(self, "search_term", self.search_term or "")

    def with_category(self, category: Category | str | None) -> "QueryState":
        return replace(self, category=category, page=1)

    def with_reviewed(self, reviewed: ReviewedFilter | bool | str | None) -> "QueryState":
        return replace(self, reviewed=reviewed, page=1)

    def with_limit(self, limit: int | str) -> "QueryState":
        return replace(self, limit=limit, page=1)

    def with_sort(self, sort: str | None) -> "QueryState":
        return replace(self, sort=sort, page=1)

    def with_page(self, page: int) -> "QueryState":
        return replace(self, page=page)

    def with_search(self, term: str | None) -> "QueryState":
        return replace(self, search_term=term or "")

    def same_server_query(self, other: "QueryState") -> bool:
        """Return True when both states would issue the same list request."""

        return self.to_params() == other.to_params()

    def to_params(self) -> dict[str, Any]:
        """Return the filter set sent to the list endpoint."""

        return {
            "category": self.category.value if self.category else None,
            "reviewed": self.reviewed.value,
            "page": self.page,
            "limit": self.limit,
            "sort": self.sort,
        }

    def matches(self, record: FeedbackRecord) -> bool:
        term = self.search_term.strip().lower()
        if not term:
            return True
        return term in record.feedback.lower()


__all__ = ["QueryState"]
