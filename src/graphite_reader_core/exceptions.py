"""
Custom exceptions for graphite-reader-core.
"""

from typing import Optional


class GraphiteError(Exception):
    """Base exception for all Graphite-related errors."""
    pass


class ConfigurationError(GraphiteError):
    """Raised when the client is constructed with invalid settings."""
    pass


class TransportError(GraphiteError):
    """Raised when the HTTP request to Graphite fails at the network level."""
    pass


class CancelledError(GraphiteError):
    """Raised when a fetch context is cancelled or its deadline passes."""
    pass


class UnexpectedStatusError(GraphiteError):
    """
    Raised when Graphite answers with a status code outside [200, 300).

    Attributes:
        status_code: HTTP status code of the response.
        body: Leading bytes of the response body, if any were read.
    """

    def __init__(self, status_code: int, body: bytes = b"", message: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        if message is None:
            message = f"Graphite render request failed with status {status_code}"
        super().__init__(message)


class DecodeError(GraphiteError):
    """Raised when a render response cannot be decoded into metrics."""
    pass


class MalformedDataPointError(DecodeError):
    """Raised when a datapoint is not a [value, timestamp] pair."""
    pass


class MalformedTimestampError(DecodeError):
    """Raised when a datapoint timestamp is not integer epoch seconds."""
    pass
