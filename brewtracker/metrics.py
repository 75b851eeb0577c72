"""
Lightweight runtime counters for the ID interceptors.

Uses in-process counters so it works without extra dependencies.  Only the
interceptor adapter records here; the pure transformation functions keep no
state at all.
"""

from __future__ import annotations

import threading
import time
from collections import deque
from typing import Deque, Dict


class _RuntimeMetrics:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._responses_normalized = 0
        self._requests_denormalized = 0
        self._transform_failures = 0
        self._failure_timestamps: Deque[float] = deque()

    def record_response_normalized(self) -> None:
        with self._lock:
            self._responses_normalized += 1

    def record_request_denormalized(self) -> None:
        with self._lock:
            self._requests_denormalized += 1

    def record_transform_failure(self, ts: float | None = None) -> None:
        now = ts if ts is not None else time.time()
        with self._lock:
            self._transform_failures += 1
            self._failure_timestamps.append(now)
            self._prune_locked(now)

    def snapshot(self) -> Dict[str, int]:
        now = time.time()
        with self._lock:
            self._prune_locked(now)
            return {
                "responses_normalized": self._responses_normalized,
                "requests_denormalized": self._requests_denormalized,
                "transform_failures": self._transform_failures,
                "transform_failures_last_hour": len(self._failure_timestamps),
            }

    def reset_for_tests(self) -> None:
        with self._lock:
            self._responses_normalized = 0
            self._requests_denormalized = 0
            self._transform_failures = 0
            self._failure_timestamps.clear()

    def _prune_locked(self, now: float) -> None:
        cutoff = now - 3600.0
        while self._failure_timestamps and self._failure_timestamps[0] < cutoff:
            self._failure_timestamps.popleft()


_METRICS = _RuntimeMetrics()


def record_response_normalized() -> None:
    _METRICS.record_response_normalized()


def record_request_denormalized() -> None:
    _METRICS.record_request_denormalized()


def record_transform_failure(ts: float | None = None) -> None:
    _METRICS.record_transform_failure(ts)


def metrics_snapshot() -> Dict[str, int]:
    return _METRICS.snapshot()


def reset_metrics_for_tests() -> None:
    _METRICS.reset_for_tests()
