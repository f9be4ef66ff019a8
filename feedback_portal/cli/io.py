"""Console shared by the feedback portal commands and renderers."""

from __future__ import annotations

from rich.console import Console
from rich.theme import Theme

PORTAL_THEME = Theme(
    {
        "success": "green",
        "error": "bold red",
        "notice": "yellow",
        "reviewed": "green",
        "pending": "yellow",
    }
)

console = Console(theme=PORTAL_THEME)

__all__ = ["PORTAL_THEME", "console"]
