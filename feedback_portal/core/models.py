"""Domain values shared by the submission form and the review dashboard.

Updates:
    v0.1.0 - 2025-07-14 - Hoisted the category list into a single enumeration.
    v0.2.0 - 2025-07-21 - Accept `_id` identifiers and `{"data": ...}` envelopes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional


class Category(str, Enum):
    """Fixed set of feedback categories."""

    WORK_ENVIRONMENT = "Work Environment"
    LEADERSHIP = "Leadership"
    GROWTH = "Growth"
    OTHERS = "Others"

    @classmethod
    def parse(cls, value: "Category | str | None") -> Optional["Category"]:
        """Return the matching category, ``None`` for blank input.

        Raises:
            ValueError: If the value names no known category.
        """

        if value is None or isinstance(value, cls):
            return value
        text = str(value).strip()
        if not text:
            return None
        for member in cls:
            if member.value.lower() == text.lower() or member.name.lower() == text.lower():
                return member
        raise ValueError(f"Unknown category: {value}")


class ReviewedFilter(str, Enum):
    """Tri-state review filter; the value is what goes on the wire."""

    ANY = ""
    REVIEWED = "true"
    PENDING = "false"

    @classmethod
    def parse(cls, value: "ReviewedFilter | bool | str | None") -> "ReviewedFilter":
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.ANY
        if isinstance(value, bool):
            return cls.REVIEWED if value else cls.PENDING
        text = str(value).strip().lower()
        if text in {"", "any", "all"}:
            return cls.ANY
        if text in {"true", "reviewed", "yes"}:
            return cls.REVIEWED
        if text in {"false", "pending", "no"}:
            return cls.PENDING
        raise ValueError(f"Unknown review filter: {value}")

    @property
    def label(self) -> str:
        return {
            ReviewedFilter.ANY: "All Status",
            ReviewedFilter.REVIEWED: "Reviewed",
            ReviewedFilter.PENDING: "Pending Review",
        }[self]


class MessageType(str, Enum):
    """Tone of the transient status message shown after an action."""

    SUCCESS = "success"
    ERROR = "error"


PAGE_SIZES: tuple[int, ...] = (5, 10, 20, 50)
DEFAULT_PAGE_SIZE = 10

MIN_FEEDBACK_LENGTH = 10
MAX_FEEDBACK_LENGTH = 1000

SORT_OPTIONS: dict[str, str] = {
    "-submissionTime": "Newest First",
    "submissionTime": "Oldest First",
    "category": "Category A-Z",
    "-category": "Category Z-A",
    "isReviewed": "Unreviewed First",
    "-isReviewed": "Reviewed First",
}


def unwrap_envelope(payload: Any) -> Any:
    """Return ``payload["data"]`` when the server wrapped a single object."""

    if isinstance(payload, Mapping) and isinstance(payload.get("data"), Mapping):
        return payload["data"]
    return payload


def _parse_timestamp(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None


@dataclass(slots=True, frozen=True)
class FeedbackRecord:
    """One anonymous submission as stored by the feedback service."""

    id: str
    feedback: str
    category: str
    is_reviewed: bool = False
    submission_time: datetime | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "FeedbackRecord":
        data = unwrap_envelope(payload)
        if not isinstance(data, Mapping):
            raise ValueError("Feedback payload must be an object.")
        identifier = data.get("id", data.get("_id"))
        if identifier is None:
            raise ValueError("Feedback payload is missing an identifier.")
        return cls(
            id=str(identifier),
            feedback=str(data.get("feedback") or ""),
            category=str(data.get("category") or ""),
            is_reviewed=bool(data.get("isReviewed", False)),
            submission_time=_parse_timestamp(data.get("submissionTime")),
        )


@dataclass(slots=True)
class FeedbackPage:
    """A single page of the filtered listing."""

    data: list[FeedbackRecord] = field(default_factory=list)
    page: int = 1
    pages: int = 0
    total: int = 0

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "FeedbackPage":
        rows = payload.get("data") or []
        return cls(
            data=[FeedbackRecord.from_payload(item) for item in rows],
            page=int(payload.get("page") or 1),
            pages=int(payload.get("pages") or 0),
            total=int(payload.get("total") or 0),
        )


@dataclass(slots=True, frozen=True)
class CategoryCount:
    category: str
    count: int


@dataclass(slots=True)
class FeedbackStats:
    """Server-computed aggregate counts for the overview cards."""

    total_feedback: int = 0
    total_reviewed: int = 0
    total_unreviewed: int = 0
    category_stats: list[CategoryCount] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "FeedbackStats":
        data = unwrap_envelope(payload)
        breakdown: list[CategoryCount] = []
        for entry in data.get("categoryStats") or []:
            if not isinstance(entry, Mapping):
                continue
            name = entry.get("category") or entry.get("_id") or entry.get("name")
            if not name:
                continue
            breakdown.append(CategoryCount(category=str(name), count=int(entry.get("count") or 0)))
        return cls(
            total_feedback=int(data.get("totalFeedback") or 0),
            total_reviewed=int(data.get("totalReviewed") or 0),
            total_unreviewed=int(data.get("totalUnreviewed") or 0),
            category_stats=breakdown,
        )


__all__ = [
    "Category",
    "CategoryCount",
    "DEFAULT_PAGE_SIZE",
    "FeedbackPage",
    "FeedbackRecord",
    "FeedbackStats",
    "MAX_FEEDBACK_LENGTH",
    "MessageType",
    "MIN_FEEDBACK_LENGTH",
    "PAGE_SIZES",
    "ReviewedFilter",
    "SORT_OPTIONS",
    "unwrap_envelope",
]
