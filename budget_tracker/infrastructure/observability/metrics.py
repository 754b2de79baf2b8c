"""Prometheus metrics for extraction outcomes, budget health and request latency"""

from prometheus_client import Counter, Histogram

# Extraction metrics
extraction_counter = Counter(
    "budget_extraction_total",
    "Notification texts processed by the extractor",
    ["outcome"],  # detected | not_detected
)

extracted_category_counter = Counter(
    "budget_extracted_category_total",
    "Categories inferred for extracted transactions",
    ["category"],
)

# Analytics metrics
health_status_counter = Counter(
    "budget_health_status_total",
    "Budget health assessments by status",
    ["status"],  # Excellent | Good | Risk | Critical | No Data
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_extraction(detected: bool, category: str | None = None) -> None:
    """Record extraction outcome and, when detected, the inferred category"""
    extraction_counter.labels(outcome="detected" if detected else "not_detected").inc()
    if detected and category:
        extracted_category_counter.labels(category=category).inc()


def record_health_status(status: str) -> None:
    health_status_counter.labels(status=status).inc()
