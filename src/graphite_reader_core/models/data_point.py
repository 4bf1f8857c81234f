"""
DataPoint model representing a single sample from a Graphite series.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..exceptions import MalformedDataPointError, MalformedTimestampError
from ..utils import datetime_to_epoch, epoch_to_datetime


@dataclass
class DataPoint:
    """
    A single sample from a Graphite render series.

    Attributes:
        value: Measured value, or None where Graphite has no data for the slot.
        timestamp: UTC time of the sample, whole-second resolution.
    """

    value: Optional[float]
    timestamp: datetime

    @property
    def epoch(self) -> int:
        """Timestamp as Unix epoch seconds."""
        return datetime_to_epoch(self.timestamp)

    def to_dict(self) -> dict:
        """
        Convert to dictionary for serialization.

        Returns:
            Dictionary with value and epoch-second timestamp.
        """
        return {
            "value": self.value,
            "timestamp": self.epoch
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DataPoint":
        """
        Create DataPoint from dictionary.

        Args:
            data: Dictionary with value and timestamp (epoch seconds) keys.

        Returns:
            DataPoint instance.
        """
        value = data.get("value")
        return cls(
            value=float(value) if value is not None else None,
            timestamp=epoch_to_datetime(int(data["timestamp"]))
        )

    @classmethod
    def from_graphite_value(cls, value: list) -> "DataPoint":
        """
        Create DataPoint from Graphite's [value, epoch_seconds] format.

        Args:
            value: Two-element list decoded from the render JSON.

        Returns:
            DataPoint instance with a UTC timestamp.

        Raises:
            MalformedDataPointError: If value is not a pair or its first element
                is neither a number nor null.
            MalformedTimestampError: If the second element is not integer seconds.
        """
        if not isinstance(value, (list, tuple)) or len(value) != 2:
            raise MalformedDataPointError(
                f"Wrong argument count for datapoint, expected [value, timestamp]: {value!r}"
            )

        raw_value, raw_timestamp = value

        if raw_value is None:
            sample = None
        elif isinstance(raw_value, (int, float)) and not isinstance(raw_value, bool):
            try:
                sample = float(raw_value)
            except OverflowError as e:
                raise MalformedDataPointError(
                    f"Datapoint value out of float range: {raw_value!r}"
                ) from e
        else:
            raise MalformedDataPointError(f"Datapoint value is not a number: {raw_value!r}")

        # bool is an int subclass; JSON true/false is not a timestamp
        if not isinstance(raw_timestamp, int) or isinstance(raw_timestamp, bool):
            raise MalformedTimestampError(
                f"Datapoint timestamp is not integer epoch seconds: {raw_timestamp!r}"
            )

        try:
            timestamp = epoch_to_datetime(raw_timestamp)
        except (OverflowError, OSError, ValueError) as e:
            raise MalformedTimestampError(
                f"Datapoint timestamp out of range: {raw_timestamp!r}"
            ) from e

        return cls(value=sample, timestamp=timestamp)
