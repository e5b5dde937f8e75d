"""
Performance metrics collection for recipe storage queries and image uploads.
Uses contextvars for request-scoped state (async-safe).
"""
import logging
import time
from contextvars import ContextVar
from dataclasses import dataclass
from typing import ContextManager

from recipe_catalog.services import prometheus_metrics

logger = logging.getLogger(__name__)

# Request-scoped metrics (reset per request)
_request_metrics_var: ContextVar["RequestMetrics | None"] = ContextVar(
    "request_metrics", default=None
)


@dataclass
class RequestMetrics:
    """Metrics for a single request (storage and upload timings)."""

    storage_ms: float = 0.0
    upload_ms: float = 0.0
    uploads: int = 0

    def to_dict(self) -> dict:
        return {
            "storage_ms": round(self.storage_ms, 2),
            "upload_ms": round(self.upload_ms, 2),
            "uploads": self.uploads,
        }


def start_request_metrics() -> RequestMetrics:
    """Start tracking metrics for a new request. Call at the beginning of each API handler."""
    m = RequestMetrics()
    _request_metrics_var.set(m)
    return m


def current_metrics() -> RequestMetrics | None:
    """Return metrics for the current request, or None if not started."""
    return _request_metrics_var.get()


def record_storage(elapsed_ms: float) -> None:
    """Record a storage query duration."""
    prometheus_metrics.record_storage_duration(elapsed_ms / 1000)
    m = _request_metrics_var.get()
    if m is not None:
        m.storage_ms += elapsed_ms


def record_upload(elapsed_ms: float) -> None:
    """Record an image write duration."""
    prometheus_metrics.record_upload_duration(elapsed_ms / 1000)
    m = _request_metrics_var.get()
    if m is not None:
        m.upload_ms += elapsed_ms
        m.uploads += 1


def timed_storage() -> "ContextManager[float]":
    """Context manager to time a storage query and record it."""
    return _TimedContext(is_storage=True)


def timed_upload() -> "ContextManager[float]":
    """Context manager to time an image write and record it."""
    return _TimedContext(is_storage=False)


class _TimedContext:
    """Context manager that measures elapsed time and records to metrics."""

    def __init__(self, *, is_storage: bool) -> None:
        self._is_storage = is_storage
        self._start: float = 0.0
        self._elapsed_ms: float = 0.0

    def __enter__(self) -> "_TimedContext":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *args: object) -> None:
        elapsed = (time.perf_counter() - self._start) * 1000
        self._elapsed_ms = elapsed
        if self._is_storage:
            record_storage(elapsed)
        else:
            record_upload(elapsed)

    @property
    def elapsed_ms(self) -> float:
        return self._elapsed_ms


@dataclass
class AggregateMetrics:
    """Aggregate metrics across all requests (for /api/metrics endpoint)."""

    request_count: int = 0
    storage_total_ms: float = 0.0
    upload_count: int = 0
    upload_total_ms: float = 0.0

    def record(self, m: RequestMetrics) -> None:
        self.request_count += 1
        self.storage_total_ms += m.storage_ms
        self.upload_count += m.uploads
        self.upload_total_ms += m.upload_ms
        logger.debug(
            "Request metrics: storage=%.2fms upload=%.2fms uploads=%d",
            m.storage_ms,
            m.upload_ms,
            m.uploads,
        )

    def reset(self) -> None:
        self.request_count = 0
        self.storage_total_ms = 0.0
        self.upload_count = 0
        self.upload_total_ms = 0.0

    def to_dict(self) -> dict:
        return {
            "requests": self.request_count,
            "storage": {
                "total_ms": round(self.storage_total_ms, 2),
                "avg_ms": round(self.storage_total_ms / self.request_count, 2)
                if self.request_count > 0
                else 0,
            },
            "uploads": {
                "count": self.upload_count,
                "total_ms": round(self.upload_total_ms, 2),
                "avg_ms": round(self.upload_total_ms / self.upload_count, 2)
                if self.upload_count > 0
                else 0,
            },
        }


def finish_request_metrics() -> None:
    """Fold the current request's metrics into the aggregate."""
    m = _request_metrics_var.get()
    if m is not None:
        aggregate_metrics.record(m)
        _request_metrics_var.set(None)


aggregate_metrics = AggregateMetrics()
