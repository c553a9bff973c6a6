"""Prometheus metrics for monitoring claim outcomes, quota usage and provider health"""

from prometheus_client import Counter, Gauge, Histogram

from airtime_gateway.domain.models import SiteState

# Claim metrics
claim_counter = Counter(
    "airtime_claims_total",
    "Total airtime claims handled",
    ["outcome"],  # success | success_admin | site_offline | quota_exceeded | provider_rejected | ...
)

claims_today_gauge = Gauge(
    "airtime_claims_today",
    "Successful quota-counted claims since the last reset",
)

site_online_gauge = Gauge(
    "airtime_site_online",
    "1 when public claims are accepted, 0 when the site is switched off",
)

# Provider metrics
provider_latency_histogram = Histogram(
    "provider_request_latency_seconds",
    "Airtime provider response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 15.0],
)

provider_failures_counter = Counter(
    "provider_failures_total",
    "Failed airtime provider calls",
    ["kind"],  # rejected | unreachable | setup_failed
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_claim(outcome: str) -> None:
    claim_counter.labels(outcome=outcome).inc()


def record_site_state(state: SiteState) -> None:
    """Mirror the ledger's policy state into gauges"""
    claims_today_gauge.set(state.claims_today)
    site_online_gauge.set(1 if state.is_online else 0)
