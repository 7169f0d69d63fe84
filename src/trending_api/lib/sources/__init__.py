"""Metric sources: read-only snapshots of programs, coaches and posts."""

from .base import MetricSource, PostOrder
from .elasticsearch_source import ElasticsearchMetricSource

__all__ = [
    "MetricSource",
    "PostOrder",
    "ElasticsearchMetricSource",
]
