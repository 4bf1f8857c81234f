"""
Data models for graphite-reader-core.
"""

from .data_point import DataPoint
from .metric import Metric
from .metric_request import MetricRequest
from .metrics import Metrics

__all__ = [
    "DataPoint",
    "Metric",
    "MetricRequest",
    "Metrics",
]
