"""Prometheus metrics for monitoring calculation outcomes, refund amounts and admin API health"""

from prometheus_client import Counter, Histogram

# Calculation metrics
calculation_counter = Counter(
    "refund_calculation_total",
    "Total refund calculations made",
    ["coverage", "outcome"],  # desgravamen | cesantia | ambos ; ok | error
)

refund_amount_histogram = Histogram(
    "refund_amount_clp",
    "Client refund amounts quoted (CLP, after margin)",
    buckets=[0, 50_000, 100_000, 250_000, 500_000, 1_000_000, 2_500_000],
)

# Breakdown metrics
breakdown_counter = Counter(
    "refund_breakdown_total",
    "Snapshot breakdown reconstructions",
    ["outcome"],  # applied | not_applicable
)

margin_floored_counter = Counter(
    "refund_margin_floored_total",
    "Breakdowns whose inferred margin was negative and floored to 0",
)

# Refund admin API metrics
refund_admin_fetch_failures_counter = Counter(
    "refund_admin_fetch_failures_total",
    "Failed refund admin API calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_calculation(coverage: str, refund_amount: int, error: str | None) -> None:
    """Record calculation metrics for monitoring error rates and refund distribution"""
    outcome = "error" if error else "ok"
    calculation_counter.labels(coverage=coverage, outcome=outcome).inc()

    if not error:
        refund_amount_histogram.observe(refund_amount)


def record_breakdown(applied: bool, margin_floored: bool) -> None:
    breakdown_counter.labels(outcome="applied" if applied else "not_applicable").inc()
    if margin_floored:
        margin_floored_counter.inc()
