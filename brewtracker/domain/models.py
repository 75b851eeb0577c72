"""
brewtracker.domain.models — Canonical Pydantic / dataclass models.

These are the data structures flowing through the interceptor chains.
Request and response envelopes are Pydantic models so they validate on
construction; the small bookkeeping records are plain dataclasses.

Import pattern::

    from brewtracker.domain.models import RequestConfig, ApiResponse
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# HTTP envelopes seen by interceptors
# ---------------------------------------------------------------------------

class RequestConfig(BaseModel):
    """Outbound request as request interceptors see it.

    ``data`` is the JSON body (dict / list) or ``None`` for body-less calls.
    Interceptors may reassign any field before the request is sent.
    """

    url: str = ""
    method: str = "GET"
    data: Any = None
    params: Dict[str, Any] = Field(default_factory=dict)
    headers: Dict[str, str] = Field(default_factory=dict)
    timeout: Optional[float] = None


class ApiResponse(BaseModel):
    """Inbound response as response interceptors see it."""

    data: Any = None
    status_code: int = 200
    headers: Dict[str, str] = Field(default_factory=dict)
    config: RequestConfig = Field(default_factory=RequestConfig)


# ---------------------------------------------------------------------------
# Interceptor bookkeeping
# ---------------------------------------------------------------------------

@dataclass
class InterceptorHandler:
    """One ``(fulfilled, rejected)`` pair registered on a chain."""
    fulfilled: Optional[Callable[[Any], Any]] = None
    rejected:  Optional[Callable[[BaseException], Any]] = None


@dataclass
class InterceptorStatus:
    """Whether each chain currently holds at least one handler."""
    request_interceptors:  bool = False
    response_interceptors: bool = False
