"""
Metrics model representing the full result of a Graphite render request.
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional

from ..exceptions import DecodeError
from .metric import Metric


@dataclass
class Metrics:
    """
    Ordered collection of series returned by one render request.

    Behaves as a read-only sequence of Metric objects in server order.

    Attributes:
        series: List of Metric objects.
    """

    series: list[Metric] = field(default_factory=list)

    def __iter__(self) -> Iterator[Metric]:
        return iter(self.series)

    def __len__(self) -> int:
        return len(self.series)

    def __getitem__(self, index: int) -> Metric:
        return self.series[index]

    def get(self, target: str) -> Optional[Metric]:
        """
        Find the first series produced by the given target.

        Args:
            target: Target name as reported by Graphite.

        Returns:
            Matching Metric, or None if no series has that target.
        """
        for metric in self.series:
            if metric.target == target:
                return metric
        return None

    @property
    def targets(self) -> list[str]:
        """Target names in series order."""
        return [metric.target for metric in self.series]

    @property
    def total_datapoints(self) -> int:
        """
        Get total number of datapoints across all series.

        Returns:
            Total datapoint count.
        """
        return sum(len(metric.datapoints) for metric in self.series)

    def to_dict(self) -> dict:
        """
        Convert to dictionary for serialization.

        Returns:
            Dictionary with the serialized series list.
        """
        return {
            "series": [metric.to_dict() for metric in self.series]
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Metrics":
        """
        Create Metrics from dictionary.

        Args:
            data: Dictionary with a series key.

        Returns:
            Metrics instance.
        """
        return cls(series=[Metric.from_dict(m) for m in data.get("series", [])])

    @classmethod
    def from_graphite_response(cls, response_data: list) -> "Metrics":
        """
        Create Metrics from a decoded Graphite render response.

        Args:
            response_data: JSON array of series objects.

        Returns:
            Metrics instance preserving server order.

        Raises:
            DecodeError: If the response is not an array of series objects.
        """
        if not isinstance(response_data, list):
            raise DecodeError(
                f"Expected a JSON array of series, got {type(response_data).__name__}"
            )
        return cls(series=[Metric.from_graphite_series(s) for s in response_data])
