"""Prometheus metrics for recommendation volume, eligibility and upstream fallbacks"""

from prometheus_client import Counter, Histogram

# Recommendation metrics
recommendation_counter = Counter(
    "drivelens_recommendations_total",
    "Recommendation sets produced",
    ["variant"],  # catalog | inventory
)

eligibility_counter = Counter(
    "drivelens_eligibility_total",
    "Eligibility checks by outcome",
    ["outcome"],  # eligible | ineligible
)

# Upstream metrics
catalog_fetch_failures_counter = Counter(
    "catalog_fetch_failures_total",
    "Remote vehicle catalog fetches that fell back to the local dataset",
)

catalog_cache_hits_counter = Counter(
    "catalog_cache_hits_total",
    "Catalog requests served from the TTL cache",
)

narration_fallback_counter = Counter(
    "narration_fallbacks_total",
    "Narrations replaced by the local fallback summary",
    ["cause"],  # no_credentials | error
)

narration_latency_histogram = Histogram(
    "narration_latency_seconds",
    "Narration model response time",
    buckets=[0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_recommendation(variant: str) -> None:
    recommendation_counter.labels(variant=variant).inc()


def record_eligibility(eligible: bool) -> None:
    eligibility_counter.labels(outcome="eligible" if eligible else "ineligible").inc()
