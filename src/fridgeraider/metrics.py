"""Prometheus metrics definitions for FridgeRaider."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "fridgeraider_http_requests_total",
    "Total number of HTTP requests processed by the FridgeRaider API",
    ["method", "path", "status"],
)

REQUEST_LATENCY = Histogram(
    "fridgeraider_http_request_duration_seconds",
    "Latency of HTTP requests processed by the FridgeRaider API",
    ["method", "path"],
)

AI_CALLS = Counter(
    "fridgeraider_ai_calls_total",
    "Generative model calls by operation and outcome",
    ["operation", "outcome"],
)

AI_LATENCY = Histogram(
    "fridgeraider_ai_call_duration_seconds",
    "Latency of generative model calls",
    ["operation"],
)

PREFETCH_SYNCS = Counter(
    "fridgeraider_prefetch_syncs_total",
    "Prefetch syncs triggered by inventory changes, by outcome",
    ["outcome"],
)

__all__ = [
    "REQUEST_COUNT",
    "REQUEST_LATENCY",
    "AI_CALLS",
    "AI_LATENCY",
    "PREFETCH_SYNCS",
]
