from __future__ import annotations

import pytest

from feedback_portal.core.errors import ValidationError
from feedback_portal.core.models import Category, ReviewedFilter
from feedback_portal.core.query_state import QueryState
from tests.helpers.cli import make_record


def test_defaults() -> None:
    query = QueryState()

    assert query.category is None
    assert query.reviewed is ReviewedFilter.ANY
    assert (query.page, query.limit) == (1, 10)
    assert query.to_params() == {
        "category": None,
        "reviewed": "",
        "page": 1,
        "limit": 10,
        "sort": None,
    }


def test_filter_changes_reset_page() -> None:
    query = QueryState(page=3)

    assert query.with_category("Leadership").page == 1
    assert query.with_category("Leadership").category is Category.LEADERSHIP
    assert query.with_reviewed(False).page == 1
    assert query.with_limit(20).page == 1
    assert query.with_sort("category").page == 1


def test_page_and_search_keep_filters() -> None:
    query = QueryState(category="Growth", reviewed="true", limit=20)

    moved = query.with_page(4)
    searched = moved.with_search("team")

    assert moved.page == 4
    assert moved.category is Category.GROWTH
    assert searched.page == 4
    assert searched.search_term == "team"
    assert searched.same_server_query(moved)
    assert not moved.same_server_query(query)


@pytest.mark.parametrize("limit", [0, 7, 100, "abc"])
def test_limit_must_be_allowed_size(limit: object) -> None:
    with pytest.raises(ValidationError):
        QueryState(limit=limit)  # type: ignore[arg-type]


def test_page_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        QueryState(page=0)


def test_unknown_values_are_rejected() -> None:
    with pytest.raises(ValidationError):
        QueryState(category="Compensation")
    with pytest.raises(ValidationError):
        QueryState(reviewed="sometimes")
    with pytest.raises(ValidationError):
        QueryState(sort="-priority")


def test_limit_accepts_numeric_strings() -> None:
    assert QueryState(limit="50").limit == 50  # type: ignore[arg-type]


def test_search_matches_case_insensitively() -> None:
    query = QueryState(search_term="  TEAM ")

    assert query.matches(make_record("1", feedback="Great team culture and support."))
    assert not query.matches(make_record("2", feedback="Office chairs are uncomfortable."))
    assert QueryState().matches(make_record("3"))
