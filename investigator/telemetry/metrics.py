"""Prometheus metrics definitions."""

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest

http_request_duration = Histogram(
    "http_request_duration_seconds",
    "Duration of HTTP requests in seconds",
    labelnames=["method", "endpoint", "status_code"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

http_requests_total = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    labelnames=["method", "endpoint", "status_code"],
)

http_requests_in_progress = Gauge(
    "http_requests_in_progress",
    "HTTP requests currently being served",
    labelnames=["method"],
)

investigations_total = Counter(
    "investigations_total",
    "Investigation reports built, by resolved status",
    labelnames=["status"],
)

dropped_events_total = Counter(
    "investigation_dropped_events_total",
    "Events rejected by the normalizer",
)

investigation_events = Histogram(
    "investigation_events",
    "Number of events considered per investigation",
    buckets=(0, 1, 5, 10, 25, 50, 100, 250, 500, 1000),
)


def get_metrics() -> tuple[bytes, str]:
    return generate_latest(), CONTENT_TYPE_LATEST
