"""
Python library for fetching Graphite metrics via the render API
"""

from .adapters import CancellableHTTPAdapter
from .client import GraphiteClient
from .context import FetchContext
from .exceptions import (
    CancelledError,
    ConfigurationError,
    DecodeError,
    GraphiteError,
    MalformedDataPointError,
    MalformedTimestampError,
    TransportError,
    UnexpectedStatusError,
)
from .models import DataPoint, Metric, MetricRequest, Metrics

__version__ = "0.1.0"

__all__ = [
    "GraphiteClient",
    "CancellableHTTPAdapter",
    "FetchContext",
    "DataPoint",
    "Metric",
    "MetricRequest",
    "Metrics",
    "GraphiteError",
    "ConfigurationError",
    "TransportError",
    "CancelledError",
    "UnexpectedStatusError",
    "DecodeError",
    "MalformedDataPointError",
    "MalformedTimestampError",
]
