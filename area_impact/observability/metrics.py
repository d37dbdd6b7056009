"""
Metrics definitions for area impact analysis.

This module defines Prometheus metrics for monitoring source calls
and the aggregation pipeline.
"""

from prometheus_client import Counter, Histogram

# 카운터 메트릭
source_requests = Counter(
    "source_requests_total",
    "Number of data source calls by outcome",
    ["source", "outcome"]
)

analyses = Counter(
    "analyses_total",
    "Number of completed area analyses",
    ["outcome"]
)

rejected_requests = Counter(
    "rejected_requests_total",
    "Number of analysis requests rejected during validation",
    ["reason"]
)

# 히스토그램 메트릭
source_seconds = Histogram(
    "source_duration_seconds",
    "Time spent waiting on a data source",
    ["source"],
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0]
)

analysis_seconds = Histogram(
    "analysis_duration_seconds",
    "Total scatter-gather latency per analysis",
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0]
)


def observe_source(source: str, outcome: str, elapsed: float) -> None:
    """소스 호출 결과와 소요 시간을 기록합니다."""
    source_requests.labels(source=source, outcome=outcome).inc()
    source_seconds.labels(source=source).observe(elapsed)
