"""
Prometheus metrics for storage latency, image uploads, and API outcomes.
Exposed via /metrics endpoint for Prometheus scraping.
"""

from prometheus_client import Counter, Histogram

# Response time histograms (seconds)
storage_query_duration_seconds = Histogram(
    "recipe_catalog_storage_query_duration_seconds",
    "Recipe storage query duration in seconds",
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)
upload_write_duration_seconds = Histogram(
    "recipe_catalog_upload_write_duration_seconds",
    "Image upload write duration in seconds",
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)

upload_bytes_total = Counter(
    "recipe_catalog_upload_bytes_total",
    "Total bytes written to the upload directory",
)

# Recipe API calls by outcome
recipe_requests_total = Counter(
    "recipe_catalog_recipe_requests_total",
    "Recipe API requests by operation and status code",
    ["operation", "status"],  # create/list/update/delete, HTTP status
)


def record_storage_duration(seconds: float) -> None:
    """Record storage query duration."""
    storage_query_duration_seconds.observe(seconds)


def record_upload_duration(seconds: float) -> None:
    """Record image write duration."""
    upload_write_duration_seconds.observe(seconds)


def record_upload_bytes(size: int) -> None:
    upload_bytes_total.inc(size)


def record_recipe_request(operation: str, status: int) -> None:
    """Record a recipe API call result."""
    recipe_requests_total.labels(operation=operation, status=str(status)).inc()
