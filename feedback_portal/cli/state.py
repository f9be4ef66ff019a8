"""CLI session state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from feedback_portal.core.config_loader import PROJECT_ROOT
from feedback_portal.core.models import DEFAULT_PAGE_SIZE

if TYPE_CHECKING:
    from feedback_portal.core.api_client import FeedbackApiClient
    from feedback_portal.services.config_service import ConfigService


@dataclass
class AppState:
    """Runtime objects shared by the commands of one CLI session.

    Nothing here is written to disk; query state lives only as long as the
    process.
    """

    api_client: Optional["FeedbackApiClient"] = field(default=None, repr=False)
    config_service: Optional["ConfigService"] = field(default=None, repr=False)
    default_page_size: int = DEFAULT_PAGE_SIZE


__all__ = ["AppState", "PROJECT_ROOT"]
