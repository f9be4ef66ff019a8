from __future__ import annotations

from typing import Any

import pytest

from feedback_portal.services.view_switcher import View, ViewSwitcher


def _factories(created: list[tuple[View, Any]]) -> dict[View, Any]:
    def build(view: View) -> Any:
        def factory() -> Any:
            instance = object()
            created.append((view, instance))
            return instance

        return factory

    return {View.EMPLOYEE: build(View.EMPLOYEE), View.ADMIN: build(View.ADMIN)}


def test_initial_view_defaults_to_employee() -> None:
    created: list[tuple[View, Any]] = []
    switcher = ViewSwitcher(_factories(created))

    assert switcher.current is View.EMPLOYEE
    assert switcher.current.label == "Employee View"
    assert [view for view, _ in created] == [View.EMPLOYEE]


def test_switching_remounts_fresh_instances() -> None:
    created: list[tuple[View, Any]] = []
    switcher = ViewSwitcher(_factories(created))
    first_employee = switcher.active

    admin = switcher.switch_to("admin")
    assert switcher.current is View.ADMIN
    assert switcher.current.label == "Admin Dashboard"
    assert switcher.active is admin

    employee = switcher.toggle()
    assert switcher.current is View.EMPLOYEE
    assert employee is not first_employee
    assert len(created) == 3


def test_selecting_current_view_keeps_instance() -> None:
    created: list[tuple[View, Any]] = []
    switcher = ViewSwitcher(_factories(created), initial=View.ADMIN)
    active = switcher.active

    assert switcher.switch_to(View.ADMIN) is active
    assert len(created) == 1


def test_every_view_needs_a_factory() -> None:
    with pytest.raises(ValueError):
        ViewSwitcher({View.EMPLOYEE: object})


def test_unknown_view_is_rejected() -> None:
    switcher = ViewSwitcher(_factories([]))

    with pytest.raises(ValueError):
        switcher.switch_to("reports")
