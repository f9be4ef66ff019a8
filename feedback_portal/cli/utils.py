"""Utility helpers shared across CLI command modules."""

from __future__ import annotations

import logging
import sys
from typing import Iterable, Optional

import typer

from feedback_portal.core.errors import ValidationError
from feedback_portal.core.models import Category, ReviewedFilter

logger = logging.getLogger(__name__)


def _cli():
    return sys.modules["feedback_portal.cli"]


def apply_log_override(log_level: Optional[str]) -> None:
    """Override logging level for the current invocation."""

    if not log_level or not isinstance(log_level, str):
        return
    try:
        _cli().set_runtime_level(log_level)
        logger.info("Log level overridden to %s", log_level.upper())
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def parse_category_option(value: Optional[str]) -> Optional[Category]:
    """Convert a `--category` option into a Category, blank meaning all."""

    try:
        return Category.parse(value)
    except ValueError as exc:
        choices = ", ".join(member.value for member in Category)
        raise typer.BadParameter(f"{exc}. Choose one of: {choices}.") from exc


def parse_reviewed_option(value: Optional[str]) -> ReviewedFilter:
    try:
        return ReviewedFilter.parse(value)
    except ValueError as exc:
        raise typer.BadParameter(f"{exc}. Use any, true or false.") from exc


def prompt_choice(label: str, choices: Iterable[str], current: str | None = None) -> str:
    """Prompt for one of a numbered list of choices; blank keeps the current value."""

    options = list(choices)
    for idx, option in enumerate(options, start=1):
        typer.echo(f"  {idx}. {option}")
    response = typer.prompt(label, default=current or "", show_default=bool(current)).strip()
    if not response:
        return current or ""
    if response.isdigit() and 1 <= int(response) <= len(options):
        return options[int(response) - 1]
    return response


def prompt_value(label: str, current: str | None) -> str | None:
    """Prompt for a string value with an optional default."""

    default_display = current if current is not None else ""
    response = typer.prompt(label, default=default_display)
    return response.strip() or current


def bad_parameter(exc: ValidationError) -> typer.BadParameter:
    return typer.BadParameter(exc.message)


__all__ = [
    "apply_log_override",
    "bad_parameter",
    "parse_category_option",
    "parse_reviewed_option",
    "prompt_choice",
    "prompt_value",
]
