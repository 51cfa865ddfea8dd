"""Prometheus metrics for calculator usage, eligibility outcomes and lead webhook delivery"""

from typing import Optional

from prometheus_client import Counter, Histogram

# Calculator metrics
calculation_counter = Counter(
    "tradesman_calculations_total",
    "Total calculations run",
    ["calculator"],
)

eligibility_tier_counter = Counter(
    "tradesman_eligibility_tier_total",
    "Eligibility and affordability tiers issued",
    ["calculator", "tier"],  # high | medium | low
)

recommendation_counter = Counter(
    "tradesman_recommendation_total",
    "Recommended finance products",
    ["calculator", "product"],  # hp | lease | contract
)

# Session store metrics
session_store_load_failures_counter = Counter(
    "session_store_load_failures_total",
    "Stored calculations discarded as unreadable",
)

# Lead webhook metrics
lead_webhook_latency_histogram = Histogram(
    "lead_webhook_latency_seconds",
    "Lead webhook response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

lead_webhook_failure_counter = Counter(
    "lead_webhook_failures_total",
    "Failed lead webhook delivery attempts",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_calculation(
    calculator: str,
    tier: Optional[str] = None,
    recommended_product: Optional[str] = None,
) -> None:
    """Record calculator usage and, where the calculator produces them, its tier and recommendation"""
    calculation_counter.labels(calculator=calculator).inc()

    if tier is not None:
        eligibility_tier_counter.labels(calculator=calculator, tier=tier).inc()

    if recommended_product is not None:
        recommendation_counter.labels(calculator=calculator, product=recommended_product).inc()


def record_store_corruption(storage_key: str) -> None:
    session_store_load_failures_counter.inc()
