"""Prometheus instrumentation for csrgen.

Labels stay small: the generation path (config|native|openssl) and a coarse
result.
"""
from __future__ import annotations

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
    CONTENT_TYPE_LATEST,
)

REGISTRY = CollectorRegistry()

GENERATIONS = Counter(
    "csrgen_generations_total",
    "Generation requests by path and result.",
    ["path", "result"],
    registry=REGISTRY,
)
GEN_LATENCY = Histogram(
    "csrgen_generation_seconds",
    "Time spent producing config/key/CSR per path.",
    ["path"],
    buckets=(0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10, 30),
    registry=REGISTRY,
)
BUNDLES = Counter(
    "csrgen_bundles_total",
    "Archives built.",
    ["result"],
    registry=REGISTRY,
)


def observe_generation(*, path: str, result: str, seconds: float) -> None:
    GENERATIONS.labels(path=path, result=result).inc()
    GEN_LATENCY.labels(path=path).observe(seconds)


def prometheus_latest() -> tuple[bytes, str]:
    return generate_latest(REGISTRY), CONTENT_TYPE_LATEST
