"""
MetricRequest model describing a Graphite render query.
"""

from dataclasses import dataclass, field
from urllib.parse import urlencode


@dataclass
class MetricRequest:
    """
    Parameters for a Graphite render request.

    See https://graphite.readthedocs.io/en/latest/render_api.html

    Attributes:
        from_time: Lower time bound, relative ("-5min") or absolute ("04:00_20210101").
        until: Upper time bound in the same formats.
        targets: Target expressions; blank entries are skipped.
    """

    from_time: str = ""
    until: str = ""
    targets: list[str] = field(default_factory=list)

    def to_params(self) -> list[tuple[str, str]]:
        """
        Build the ordered query parameters for this request.

        Order is format, from, until, then one target per non-empty entry.

        Returns:
            List of (name, value) pairs.
        """
        params = [("format", "json")]

        if self.from_time:
            params.append(("from", self.from_time))
        if self.until:
            params.append(("until", self.until))

        for target in self.targets:
            if target:
                params.append(("target", target))

        return params

    def encode(self) -> str:
        """
        Encode the request as a URL query string.

        Returns:
            Percent-encoded query string, e.g. "format=json&from=-5min&target=a.b".
        """
        return urlencode(self.to_params())

    def to_dict(self) -> dict:
        """
        Convert to dictionary for serialization.

        Returns:
            Dictionary with from, until and targets.
        """
        return {
            "from": self.from_time,
            "until": self.until,
            "targets": list(self.targets)
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MetricRequest":
        """
        Create MetricRequest from dictionary.

        Args:
            data: Dictionary with optional from, until and targets keys.

        Returns:
            MetricRequest instance.
        """
        return cls(
            from_time=data.get("from", ""),
            until=data.get("until", ""),
            targets=list(data.get("targets", []))
        )
