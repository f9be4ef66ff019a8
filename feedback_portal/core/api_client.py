"""HTTP client for the external feedback service.

Updates:
    v0.1.0 - 2025-07-14 - Initial httpx client with uniform RequestError handling.
    v0.2.0 - 2025-07-21 - Added tenacity retries for idempotent reads and request timing logs.
"""

from __future__ import annotations

import logging
from time import perf_counter
from typing import Any, Callable, Mapping, TypeVar

import httpx
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from .errors import RequestError
from .models import (
    Category,
    FeedbackPage,
    FeedbackRecord,
    FeedbackStats,
    ReviewedFilter,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_NO_BODY = object()


def build_query_params(filters: Mapping[str, Any] | None) -> dict[str, str]:
    """Serialize a filter mapping, omitting empty and ``None`` values.

    Args:
        filters (Mapping[str, Any] | None): Raw filter values keyed by query name.

    Returns:
        dict[str, str]: Query parameters ready for the list endpoint.
    """

    params: dict[str, str] = {}
    for key, value in (filters or {}).items():
        if value is None or value == "":
            continue
        if isinstance(value, bool):
            params[key] = "true" if value else "false"
        elif isinstance(value, (Category, ReviewedFilter)):
            if value.value:
                params[key] = value.value
        else:
            params[key] = str(value)
    return params


def _parse(builder: Callable[[Any], T], payload: Any) -> T:
    try:
        return builder(payload)
    except (AttributeError, TypeError, ValueError) as exc:
        logger.warning("Unexpected payload shape: %s", exc)
        raise RequestError("Invalid response from server") from exc


class FeedbackApiClient:
    """Wraps the feedback REST endpoints behind one base URL."""

    DEFAULT_TIMEOUT_SECONDS = 30.0

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float | None = None,
        retry_attempts: int = 1,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Create the underlying httpx client.

        Args:
            base_url (str): Root of the feedback API, e.g. ``http://host/api``.
            timeout (float | None): Per-request timeout in seconds.
            retry_attempts (int): Total attempts for idempotent GET requests.
            transport (httpx.BaseTransport | None): Optional transport override.
        """

        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else self.DEFAULT_TIMEOUT_SECONDS,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )
        self._transport = transport
        self._retry = Retrying(
            stop=stop_after_attempt(max(1, int(retry_attempts))),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        )

    # Endpoint operations -------------------------------------------------

    def create(self, feedback: str, category: Category | str) -> FeedbackRecord:
        """Submit a new anonymous feedback record."""

        category_value = category.value if isinstance(category, Category) else category
        payload = self._request(
            "POST",
            "/feedback",
            json_body={"feedback": feedback, "category": category_value},
        )
        return _parse(FeedbackRecord.from_payload, payload)

    def list(self, filters: Mapping[str, Any] | None = None) -> FeedbackPage:
        """Return one page of feedback matching the supplied filters."""

        payload = self._request("GET", "/feedback", params=build_query_params(filters))
        return _parse(FeedbackPage.from_payload, payload)

    def get_by_id(self, feedback_id: str) -> FeedbackRecord:
        payload = self._request("GET", f"/feedback/{feedback_id}")
        return _parse(FeedbackRecord.from_payload, payload)

    def mark_reviewed(self, feedback_id: str) -> FeedbackRecord:
        payload = self._request("PATCH", f"/feedback/{feedback_id}/reviewed")
        return _parse(FeedbackRecord.from_payload, payload)

    def delete(self, feedback_id: str) -> dict[str, Any]:
        payload = self._request("DELETE", f"/feedback/{feedback_id}")
        return dict(payload) if isinstance(payload, Mapping) else {"result": payload}

    def stats(self) -> FeedbackStats:
        payload = self._request("GET", "/feedback/stats")
        return _parse(FeedbackStats.from_payload, payload)

    def list_by_category(self, category: Category | str) -> FeedbackPage:
        return self.list({"category": category})

    def list_by_review_status(self, reviewed: ReviewedFilter | bool | str) -> FeedbackPage:
        return self.list({"reviewed": ReviewedFilter.parse(reviewed)})

    def list_paginated(self, page: int = 1, limit: int = 10) -> FeedbackPage:
        return self.list({"page": page, "limit": limit})

    def check_connection(self) -> bool:
        """Return True when the service root answers with a 2xx status."""

        root = self.base_url
        if root.endswith("/api"):
            root = root[: -len("/api")]
        try:
            with httpx.Client(
                timeout=self._client.timeout, transport=self._transport
            ) as probe:
                response = probe.get(root + "/")
        except httpx.HTTPError as exc:
            logger.warning("api_unreachable", extra={"url": root, "error": str(exc)})
            return False
        return response.is_success

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "FeedbackApiClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # Internals -----------------------------------------------------------

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        json_body: Any = _NO_BODY,
    ) -> Any:
        started = perf_counter()
        try:
            if method == "GET":
                response = self._send_with_retry(method, path, params, json_body)
            else:
                response = self._send(method, path, params, json_body)
        except httpx.HTTPError as exc:
            duration_ms = (perf_counter() - started) * 1000
            logger.error(
                "request_failed",
                extra={
                    "method": method,
                    "path": path,
                    "duration_ms": round(duration_ms, 2),
                    "error": str(exc),
                },
            )
            raise RequestError(str(exc) or "Network error") from exc

        duration_ms = (perf_counter() - started) * 1000
        logger.info(
            "request_completed",
            extra={
                "method": method,
                "path": path,
                "status": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return self._handle_response(response)

    def _send_with_retry(
        self,
        method: str,
        path: str,
        params: Mapping[str, str] | None,
        json_body: Any,
    ) -> httpx.Response:
        for attempt in self._retry:
            with attempt:
                logger.debug(
                    "Sending %s %s attempt=%s",
                    method,
                    path,
                    attempt.retry_state.attempt_number,
                )
                return self._send(method, path, params, json_body)
        raise RequestError(f"{method} {path} failed without response.")

    def _send(
        self,
        method: str,
        path: str,
        params: Mapping[str, str] | None,
        json_body: Any,
    ) -> httpx.Response:
        kwargs: dict[str, Any] = {}
        if params:
            kwargs["params"] = dict(params)
        if json_body is not _NO_BODY:
            kwargs["json"] = json_body
        return self._client.request(method, path, **kwargs)

    @staticmethod
    def _handle_response(response: httpx.Response) -> Any:
        try:
            payload: Any = response.json()
        except ValueError:
            payload = None

        if not response.is_success:
            message = None
            if isinstance(payload, Mapping):
                message = payload.get("message")
            raise RequestError(
                str(message) if message else f"HTTP error! status: {response.status_code}",
                status_code=response.status_code,
            )

        if payload is None:
            if response.status_code == httpx.codes.NO_CONTENT:
                return {}
            raise RequestError("Invalid response from server", status_code=response.status_code)
        return payload


__all__ = ["FeedbackApiClient", "build_query_params"]
