"""
BrewTracker IDs — Uniform view of HTTP client failures.

``normalize_error`` folds httpx exceptions (timeouts, transport failures,
non-2xx responses) into one ``NormalizedApiError`` so callers and the retry
loop can decide what to do without inspecting exception classes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

import httpx

from brewtracker.core.constants import (
    HTTP_SERVER_ERROR_MIN,
    HTTP_STATUS_MESSAGES,
    HTTP_TOO_MANY_REQUESTS,
)


@dataclass
class NormalizedApiError:
    message: str = "An unexpected error occurred"
    status_code: Optional[int] = None
    code: Optional[Union[str, int]] = None
    is_network_error: bool = False
    is_timeout: bool = False
    is_retryable: bool = False
    original_error: Optional[BaseException] = None


def _body_message(response: httpx.Response) -> Optional[str]:
    """Return a string ``error`` / ``message`` field from a JSON error body."""
    try:
        body = response.json()
    except (ValueError, httpx.ResponseNotRead):
        return None
    if not isinstance(body, dict):
        return None
    for key in ("error", "message"):
        value = body.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def normalize_error(exc: BaseException) -> NormalizedApiError:
    """Classify ``exc`` into a ``NormalizedApiError``.

    Timeouts and transport failures are network errors and retryable.
    HTTP 429 and 5xx are retryable; other statuses are not.
    """
    normalized = NormalizedApiError(original_error=exc)

    if isinstance(exc, httpx.TimeoutException):
        normalized.is_network_error = True
        normalized.is_timeout = True
        normalized.is_retryable = True
        normalized.code = type(exc).__name__
        normalized.message = "Request timed out. Please check your connection and try again."
        return normalized

    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        normalized.status_code = status
        normalized.code = status
        normalized.message = HTTP_STATUS_MESSAGES.get(
            status, f"Server error ({status}). Please try again."
        )
        normalized.is_retryable = (
            status == HTTP_TOO_MANY_REQUESTS or status >= HTTP_SERVER_ERROR_MIN
        )
        normalized.message = _body_message(exc.response) or normalized.message
        return normalized

    if isinstance(exc, httpx.TransportError):
        normalized.is_network_error = True
        normalized.is_retryable = True
        normalized.code = type(exc).__name__
        normalized.message = "Unable to connect to server. Please try again."
        return normalized

    if str(exc):
        normalized.message = str(exc)
    return normalized
