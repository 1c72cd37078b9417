"""
Metrics definitions for etcdkv.

This module defines Prometheus metrics for the store client
requests and their outcomes.
"""

from prometheus_client import Counter, Histogram

# 카운터 메트릭
requests_total = Counter(
    "etcd_requests_total",
    "Number of completed store requests",
    ["operation", "outcome"]
)

validation_errors = Counter(
    "etcd_validation_errors_total",
    "Number of calls rejected before any network I/O",
    ["operation"]
)

# 히스토그램 메트릭
request_seconds = Histogram(
    "etcd_request_duration_seconds",
    "Time spent on one store round trip",
    ["operation"],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0]
)
