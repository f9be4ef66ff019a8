"""Anonymous feedback submission form state machine.

Updates:
    v0.1.0 - 2025-07-14 - Editing/submitting phases with local validation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from ..core.errors import RequestError, ValidationError
from ..core.models import (
    MAX_FEEDBACK_LENGTH,
    MIN_FEEDBACK_LENGTH,
    Category,
    FeedbackRecord,
    MessageType,
)

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Thank you! Your feedback has been submitted successfully."
FALLBACK_FAILURE_MESSAGE = "Failed to submit feedback. Please try again."
MISSING_FIELDS_MESSAGE = "Please fill in all fields"
INVALID_CATEGORY_MESSAGE = "Please select a valid category"
TOO_SHORT_MESSAGE = f"Feedback must be at least {MIN_FEEDBACK_LENGTH} characters long"
TOO_LONG_MESSAGE = f"Feedback must be at most {MAX_FEEDBACK_LENGTH} characters long"
NEAR_LIMIT_THRESHOLD = 900


class FeedbackCreator(Protocol):
    def create(self, feedback: str, category: Category | str) -> FeedbackRecord:
        ...


class FormPhase(str, Enum):
    EDITING = "editing"
    SUBMITTING = "submitting"


@dataclass
class SubmissionForm:
    """Collects category and text, validates locally and submits once."""

    api_client: FeedbackCreator
    feedback: str = ""
    category: str = ""
    phase: FormPhase = FormPhase.EDITING
    message: str = ""
    message_type: MessageType | None = None
    last_created: FeedbackRecord | None = field(default=None, repr=False)

    @property
    def submitting(self) -> bool:
        return self.phase is FormPhase.SUBMITTING

    @property
    def can_submit(self) -> bool:
        """Mirror of the submit control's enabled state."""

        return not self.submitting and bool(self.feedback.strip()) and bool(self.category)

    @property
    def character_count(self) -> int:
        return len(self.feedback)

    @property
    def near_limit(self) -> bool:
        return self.character_count > NEAR_LIMIT_THRESHOLD

    def update(self, *, feedback: str | None = None, category: Category | str | None = None) -> None:
        """Edit one or both fields while in the editing phase."""

        if self.submitting:
            return
        if feedback is not None:
            self.feedback = feedback
        if category is not None:
            self.category = category.value if isinstance(category, Category) else category

    def validate(self) -> Category:
        """Return the selected category when the form may be submitted.

        Raises:
            ValidationError: With the user-facing message for the first failed rule.
        """

        text = self.feedback.strip()
        if not text or not self.category:
            raise ValidationError(MISSING_FIELDS_MESSAGE)
        try:
            category = Category.parse(self.category)
        except ValueError as exc:
            raise ValidationError(INVALID_CATEGORY_MESSAGE) from exc
        if category is None:
            raise ValidationError(MISSING_FIELDS_MESSAGE)
        if len(text) < MIN_FEEDBACK_LENGTH:
            raise ValidationError(TOO_SHORT_MESSAGE)
        if len(text) > MAX_FEEDBACK_LENGTH:
            raise ValidationError(TOO_LONG_MESSAGE)
        return category

    def submit(self) -> bool:
        """Validate and send the form; return True on success."""

        if self.submitting:
            return False
        try:
            category = self.validate()
        except ValidationError as exc:
            logger.info("submission_rejected", extra={"reason": exc.message})
            self._set_message(exc.message, MessageType.ERROR)
            return False

        self.phase = FormPhase.SUBMITTING
        self.message = ""
        self.message_type = None
        try:
            self.last_created = self.api_client.create(self.feedback.strip(), category)
        except RequestError as exc:
            logger.warning(
                "submission_failed",
                extra={"status_code": exc.status_code, "error": exc.message},
            )
            self._set_message(exc.message or FALLBACK_FAILURE_MESSAGE, MessageType.ERROR)
            return False
        finally:
            self.phase = FormPhase.EDITING

        logger.info("submission_created", extra={"category": category.value})
        self.feedback = ""
        self.category = ""
        self._set_message(SUCCESS_MESSAGE, MessageType.SUCCESS)
        return True

    def _set_message(self, message: str, message_type: MessageType) -> None:
        self.message = message
        self.message_type = message_type


__all__ = [
    "FormPhase",
    "SubmissionForm",
    "SUCCESS_MESSAGE",
    "MISSING_FIELDS_MESSAGE",
    "TOO_SHORT_MESSAGE",
    "TOO_LONG_MESSAGE",
]
