"""
GraphiteClient for fetching metrics from the Graphite render API.
"""

import json
import logging
import threading
from typing import Optional
from urllib.parse import SplitResult, urlsplit, urlunsplit

import requests

from .adapters import CancellableHTTPAdapter, abort_response, bind_context
from .context import FetchContext
from .exceptions import (
    CancelledError,
    ConfigurationError,
    DecodeError,
    TransportError,
    UnexpectedStatusError,
)
from .models import MetricRequest, Metrics

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5
DRAIN_LIMIT = 512
CHUNK_SIZE = 8192
USER_AGENT = "graphite-reader-core/0.1.0"

REQUEST_HEADERS = {
    "Accept": "application/json",
    "User-Agent": USER_AGENT,
}


def _parse_render_url(render_url: str) -> SplitResult:
    """Parse and validate the base render endpoint.

    Args:
        render_url: Absolute http(s) URL of the render endpoint.

    Returns:
        The split URL.

    Raises:
        ConfigurationError: If the URL is malformed or not absolute http(s).
    """
    if not isinstance(render_url, str) or not render_url.strip():
        raise ConfigurationError(f"Render URL must be a non-empty string, got {render_url!r}")

    try:
        parts = urlsplit(render_url.strip())
        parts.port  # raises ValueError for a non-numeric or out-of-range port
    except ValueError as e:
        raise ConfigurationError(f"Invalid render URL {render_url!r}: {e}") from e

    if parts.scheme not in ("http", "https"):
        raise ConfigurationError(
            f"Render URL must use http or https, got {render_url!r}"
        )
    if not parts.hostname:
        raise ConfigurationError(f"Render URL has no host: {render_url!r}")

    return parts


def _transport_error(error: requests.exceptions.RequestException, url: str) -> TransportError:
    """Map a requests exception to a TransportError with a readable message."""
    if isinstance(error, requests.exceptions.SSLError):
        return TransportError(f"SSL error connecting to Graphite: {error}")
    if isinstance(error, requests.exceptions.Timeout):
        return TransportError(f"Request to Graphite timed out: {error}")
    if isinstance(error, requests.exceptions.ConnectionError):
        return TransportError(f"Failed to connect to Graphite at {url}: {error}")
    return TransportError(f"Request to Graphite failed: {error}")


class GraphiteClient:
    """
    Client for the Graphite render API.

    The client holds no per-call state and may be shared between threads.

    Example:
        client = GraphiteClient("https://graphite.example.com/render")

        request = MetricRequest(from_time="-1h", targets=["servers.web01.cpu.load"])
        for metric in client.fetch(request):
            print(metric.target, metric.values)
    """

    def __init__(
        self,
        render_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
        ca_cert: Optional[str] = None,
        verify_ssl: bool = True
    ):
        """
        Initialize the Graphite client.

        Args:
            render_url: URL of the render endpoint (e.g., "https://graphite.example.com/render").
            session: Optional requests.Session to use as-is. When omitted, the client
                creates and owns a default session.
            timeout: Request timeout in seconds.
            ca_cert: Optional path to CA certificate PEM file, applied to the default session.
            verify_ssl: Whether the default session verifies SSL certificates.

        Raises:
            ConfigurationError: If render_url is invalid or timeout is not positive.
        """
        self.render_url = _parse_render_url(render_url)

        if (
            not isinstance(timeout, (int, float))
            or isinstance(timeout, bool)
            or timeout <= 0
        ):
            raise ConfigurationError(f"Timeout must be a positive number of seconds, got {timeout!r}")

        self.timeout = timeout
        self.ca_cert = ca_cert
        self.verify_ssl = verify_ssl

        self._session = session
        self._owns_session = session is None
        self._session_lock = threading.Lock()

    @property
    def session(self) -> requests.Session:
        """
        Get the HTTP session, creating the default one on first use.

        Returns:
            requests.Session instance.
        """
        with self._session_lock:
            if self._session is None:
                self._session = requests.Session()
                self._session.mount("http://", CancellableHTTPAdapter())
                self._session.mount("https://", CancellableHTTPAdapter())

                if self.ca_cert:
                    self._session.verify = self.ca_cert
                else:
                    self._session.verify = self.verify_ssl

            return self._session

    def build_url(self, request: MetricRequest) -> str:
        """
        Build the full render URL for a request.

        The stored base URL is copied and only its query string is replaced.

        Args:
            request: Metric request to encode.

        Returns:
            Absolute URL string.
        """
        return urlunsplit(self.render_url._replace(query=request.encode()))

    def _request_timeout(self, context: Optional[FetchContext]) -> float:
        if context is None:
            return self.timeout
        remaining = context.remaining()
        if remaining is None:
            return self.timeout
        return min(self.timeout, remaining)

    def fetch(self, request: MetricRequest, context: Optional[FetchContext] = None) -> Metrics:
        """
        Fetch metrics from Graphite.

        Cancelling the context shuts down the connection's socket, so a fetch
        blocked on the network returns promptly. A provided session needs
        CancellableHTTPAdapter mounted for this to cover the wait for headers.

        Args:
            request: Targets and time range to render.
            context: Optional FetchContext used to cancel the call or bound its duration.

        Returns:
            Metrics with one Metric per series, in server order. Empty on 204 No Content.

        Raises:
            CancelledError: If the context is cancelled or its deadline passes.
            TransportError: If the request fails at the network level.
            UnexpectedStatusError: If the status code is outside [200, 300).
            DecodeError: If the body is not a valid render response.
        """
        if context is not None and context.done:
            raise CancelledError("Graphite fetch cancelled before the request was sent")

        url = self.build_url(request)
        logger.debug("Fetching Graphite metrics from %s", url)

        with bind_context(context):
            try:
                response = self.session.get(
                    url,
                    headers=REQUEST_HEADERS,
                    timeout=self._request_timeout(context),
                    stream=True
                )
            except requests.exceptions.RequestException as e:
                if context is not None and context.done:
                    raise CancelledError(f"Graphite fetch cancelled: {e}") from e
                raise _transport_error(e, url) from e

            unregister = None
            if context is not None:
                unregister = context.on_cancel(lambda: abort_response(response))
            try:
                return self._decode_response(response, url, context)
            finally:
                if unregister is not None:
                    unregister()
                response.close()

    def _decode_response(
        self,
        response: requests.Response,
        url: str,
        context: Optional[FetchContext]
    ) -> Metrics:
        status = response.status_code
        logger.debug("Graphite responded with status %s for %s", status, url)

        # Skip bad answers
        if status < 200 or status >= 300:
            raise UnexpectedStatusError(status, self._drain(response))

        if status == requests.codes.no_content:
            return Metrics()

        body = self._read_body(response, url, context)

        try:
            data = json.loads(body)
        except ValueError as e:
            raise DecodeError(f"Invalid JSON response from Graphite: {e}") from e

        metrics = Metrics.from_graphite_response(data)
        logger.debug("Decoded %d series from %s", len(metrics), url)
        return metrics

    def _read_body(
        self,
        response: requests.Response,
        url: str,
        context: Optional[FetchContext]
    ) -> bytes:
        chunks = []
        try:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if context is not None and context.done:
                    raise CancelledError("Graphite fetch cancelled while reading the response")
                chunks.append(chunk)
        except (requests.exceptions.RequestException, OSError, ValueError) as e:
            if context is not None and context.done:
                raise CancelledError(f"Graphite fetch cancelled: {e}") from e
            if isinstance(e, requests.exceptions.RequestException):
                raise _transport_error(e, url) from e
            raise TransportError(f"Failed to read Graphite response: {e}") from e

        # a response closed by cancel() can end iteration early without an error
        if context is not None and context.done:
            raise CancelledError("Graphite fetch cancelled while reading the response")

        return b"".join(chunks)

    def _drain(self, response: requests.Response) -> bytes:
        """Read up to DRAIN_LIMIT bytes so the connection can be reused."""
        try:
            for chunk in response.iter_content(chunk_size=DRAIN_LIMIT):
                return chunk[:DRAIN_LIMIT]
        except (requests.exceptions.RequestException, OSError, ValueError) as e:
            logger.debug("Could not drain Graphite error response: %s", e)
        return b""

    def close(self) -> None:
        """Close the HTTP session if the client created it."""
        with self._session_lock:
            if self._session is not None and self._owns_session:
                self._session.close()
                self._session = None

    def __enter__(self) -> "GraphiteClient":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - closes the owned session."""
        self.close()
