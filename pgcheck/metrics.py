"""Prometheus metrics for pgcheck.

Exposed at the /metrics endpoint.
"""

import time

from prometheus_client import Counter, Histogram, Gauge, generate_latest, CONTENT_TYPE_LATEST

# ============ Metrics Definitions ============

CHECK_TOTAL = Counter(
    'pgcheck_checks_total',
    'Total number of version checks performed',
    ['status']  # success / error
)

CHECK_DURATION = Histogram(
    'pgcheck_check_duration_seconds',
    'Time spent running a version check',
    buckets=[0.5, 1, 2, 5, 10, 15, 30, 60]
)

FETCH_ERRORS_TOTAL = Counter(
    'pgcheck_fetch_errors_total',
    'Page fetch failures by kind',
    ['kind']  # http, timeout, dns, ssl, conn, other
)

EXTRACTION_TOTAL = Counter(
    'pgcheck_extraction_total',
    'Accepted version extractions by pattern',
    ['pattern']
)

UPDATE_AVAILABLE = Gauge(
    'pgcheck_update_available',
    '1 when the last successful check found a version mismatch'
)


# ============ Helper Functions ============

def record_check(status: str, duration: float, update_available: bool | None = None):
    """Record a finished check.

    Args:
        status: 'success' or 'error'
        duration: Check duration in seconds
        update_available: Result of a successful check, None on failure
    """
    CHECK_TOTAL.labels(status=status).inc()
    CHECK_DURATION.observe(duration)
    if update_available is not None:
        UPDATE_AVAILABLE.set(1 if update_available else 0)


def record_fetch_error(kind: str):
    FETCH_ERRORS_TOTAL.labels(kind=kind).inc()


def record_extraction(pattern: str):
    EXTRACTION_TOTAL.labels(pattern=pattern).inc()


class CheckTimer:
    """Context manager measuring a check's wall time."""

    def __enter__(self):
        self.start_time = time.time()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.end_time = time.time()
        return False

    @property
    def duration(self) -> float:
        return getattr(self, 'end_time', time.time()) - self.start_time


def get_metrics() -> bytes:
    """Current metrics in Prometheus text format."""
    return generate_latest()


def get_content_type() -> str:
    return CONTENT_TYPE_LATEST
