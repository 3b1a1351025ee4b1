"""Prometheus metrics: request count by route/status, latency, upload outcomes."""
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total requests",
    ["method", "path", "status_class"],
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "Request latency",
    ["method", "path"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)
UPLOAD_TOTAL = Counter(
    "uploads_total",
    "Upload attempts",
    ["result"],  # stored | rejected | too_large | no_file | failed
)


def _status_class(status: int) -> str:
    if status < 200:
        return "1xx"
    if status < 300:
        return "2xx"
    if status < 400:
        return "3xx"
    if status < 500:
        return "4xx"
    return "5xx"


def normalize_path(path: str) -> str:
    path = path or "/"
    # Per-file routes collapse to one label each
    if path.startswith("/api/imagenes/") and len(path) > len("/api/imagenes/"):
        return "/api/imagenes/{nombre}"
    if path.startswith("/imagenes/"):
        return "/imagenes/{archivo}"
    return path


def record_request(method: str, path: str, status_code: int, latency_seconds: float) -> None:
    path = normalize_path(path)
    sc = _status_class(status_code)
    REQUEST_COUNT.labels(method=method, path=path, status_class=sc).inc()
    REQUEST_LATENCY.labels(method=method, path=path).observe(latency_seconds)


def record_upload(result: str) -> None:
    UPLOAD_TOTAL.labels(result=result).inc()


def get_metrics() -> tuple[bytes, str]:
    return generate_latest(), CONTENT_TYPE_LATEST
