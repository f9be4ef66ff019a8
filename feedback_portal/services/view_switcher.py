"""Toggle between the employee form and the admin dashboard."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Mapping

logger = logging.getLogger(__name__)


class View(str, Enum):
    EMPLOYEE = "employee"
    ADMIN = "admin"

    @property
    def label(self) -> str:
        return "Employee View" if self is View.EMPLOYEE else "Admin Dashboard"


class ViewSwitcher:
    """Keeps exactly one view mounted; switching remounts with fresh state."""

    def __init__(
        self,
        factories: Mapping[View, Callable[[], Any]],
        initial: View | str = View.EMPLOYEE,
    ) -> None:
        missing = set(View) - set(factories)
        if missing:
            names = ", ".join(sorted(view.value for view in missing))
            raise ValueError(f"No factory registered for view(s): {names}")
        self._factories = dict(factories)
        self.current = View(initial)
        self.active = self._factories[self.current]()

    def switch_to(self, view: View | str) -> Any:
        """Mount the requested view, returning its instance."""

        target = View(view)
        if target is self.current:
            return self.active
        logger.debug("view_switched", extra={"from_view": self.current.value, "to_view": target.value})
        self.current = target
        self.active = self._factories[target]()
        return self.active

    def toggle(self) -> Any:
        other = View.ADMIN if self.current is View.EMPLOYEE else View.EMPLOYEE
        return self.switch_to(other)


__all__ = ["View", "ViewSwitcher"]
