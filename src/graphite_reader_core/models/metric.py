"""
Metric model representing one named Graphite series.
"""

from dataclasses import dataclass, field

from ..exceptions import DecodeError
from .data_point import DataPoint


@dataclass
class Metric:
    """
    A Graphite series produced by one render target.

    Attributes:
        target: Series name or expression that produced this series.
        datapoints: List of DataPoint objects, ordered by time as returned.
        tags: Series tags reported by Graphite 1.1+ (empty when absent).
    """

    target: str
    datapoints: list[DataPoint]
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def values(self) -> list:
        """Sample values in series order, None for gaps."""
        return [point.value for point in self.datapoints]

    def to_dict(self) -> dict:
        """
        Convert to dictionary for serialization.

        Returns:
            Dictionary with target, tags and datapoints.
        """
        return {
            "target": self.target,
            "tags": self.tags,
            "datapoints": [point.to_dict() for point in self.datapoints]
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Metric":
        """
        Create Metric from dictionary.

        Args:
            data: Dictionary with target, datapoints and optional tags keys.

        Returns:
            Metric instance.
        """
        datapoints = [DataPoint.from_dict(p) for p in data.get("datapoints", [])]
        return cls(
            target=data["target"],
            datapoints=datapoints,
            tags=data.get("tags", {})
        )

    @classmethod
    def from_graphite_series(cls, series_data: dict) -> "Metric":
        """
        Create Metric from Graphite render JSON format.

        Format: {"target": "name", "datapoints": [[value, ts], ...], "tags": {...}}

        A missing target decodes to an empty string and missing or null
        datapoints to an empty list.

        Args:
            series_data: One element of the render response array.

        Returns:
            Metric instance.

        Raises:
            DecodeError: If the series does not have the expected shape.
        """
        if not isinstance(series_data, dict):
            raise DecodeError(f"Expected a series object, got {type(series_data).__name__}")

        target = series_data.get("target")
        if target is None:
            target = ""
        if not isinstance(target, str):
            raise DecodeError(f"Series target is not a string: {target!r}")

        values = series_data.get("datapoints")
        if values is None:
            values = []
        if not isinstance(values, list):
            raise DecodeError(f"Series datapoints is not a list for target {target!r}")

        tags = series_data.get("tags")
        if tags is None:
            tags = {}
        if not isinstance(tags, dict):
            raise DecodeError(f"Series tags is not an object for target {target!r}")
        for name, value in tags.items():
            if not isinstance(value, str):
                raise DecodeError(
                    f"Tag {name!r} is not a string for target {target!r}: {value!r}"
                )

        datapoints = [DataPoint.from_graphite_value(v) for v in values]
        return cls(target=target, datapoints=datapoints, tags=tags)
