"""
Transport adapter that lets a FetchContext abort requests in flight.
"""

import logging
import socket
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.connection import HTTPConnection, HTTPSConnection
from urllib3.connectionpool import HTTPConnectionPool, HTTPSConnectionPool

from .context import FetchContext

logger = logging.getLogger(__name__)

_active = threading.local()


def shutdown_socket(sock: Optional[socket.socket]) -> None:
    """
    Shut down both directions of a socket, waking any thread blocked on it.

    Args:
        sock: Socket to shut down, or None if the connection has none yet.
    """
    if sock is None:
        return
    try:
        sock.shutdown(socket.SHUT_RDWR)
    except OSError as e:
        # already closed or never connected
        logger.debug("Socket shutdown skipped: %s", e)


def abort_response(response: requests.Response) -> None:
    """
    Abort a streamed response by shutting down its underlying socket.

    Used for sessions without CancellableHTTPAdapter, where the connection
    is only reachable once headers have arrived.

    Args:
        response: Response returned with stream=True.
    """
    connection = getattr(response.raw, "_connection", None)
    shutdown_socket(getattr(connection, "sock", None))


@contextmanager
def bind_context(context: Optional[FetchContext]) -> Iterator[None]:
    """
    Bind a FetchContext to connections used by the current thread.

    While bound, connections created by CancellableHTTPAdapter register a
    callback that shuts down their socket when the context is cancelled.
    Callbacks are unregistered when the block exits.

    Args:
        context: Context to bind, or None to bind nothing.
    """
    previous = getattr(_active, "context", None)
    previous_releases = getattr(_active, "releases", None)
    _active.context = context
    _active.releases = []
    try:
        yield
    finally:
        for release in _active.releases:
            release()
        _active.context = previous
        _active.releases = previous_releases


class _CancellableConnectionMixin:
    """Registers the connection's socket with the context bound to this thread."""

    _watched_by: Optional[FetchContext] = None

    def _watch(self) -> Optional[FetchContext]:
        context = getattr(_active, "context", None)
        if context is None or self._watched_by is context:
            return context

        self._watched_by = context
        unregister = context.on_cancel(self._abort)

        def release() -> None:
            unregister()
            self._watched_by = None

        _active.releases.append(release)
        return context

    def _abort(self) -> None:
        shutdown_socket(getattr(self, "sock", None))

    def connect(self):
        context = self._watch()
        super().connect()
        # the socket may not have existed when cancel() ran
        if context is not None and context.done:
            self._abort()

    def request(self, *args, **kwargs):
        self._watch()
        return super().request(*args, **kwargs)


class CancellableHTTPConnection(_CancellableConnectionMixin, HTTPConnection):
    pass


class CancellableHTTPSConnection(_CancellableConnectionMixin, HTTPSConnection):
    pass


class CancellableHTTPConnectionPool(HTTPConnectionPool):
    ConnectionCls = CancellableHTTPConnection


class CancellableHTTPSConnectionPool(HTTPSConnectionPool):
    ConnectionCls = CancellableHTTPSConnection


class CancellableHTTPAdapter(HTTPAdapter):
    """
    HTTPAdapter whose connections can be aborted by a FetchContext.

    GraphiteClient mounts it on the session it creates. Mount it on a
    provided session to let cancel() abort requests still waiting for
    response headers:

        session = requests.Session()
        session.mount("http://", CancellableHTTPAdapter())
        session.mount("https://", CancellableHTTPAdapter())
    """

    def init_poolmanager(self, *args, **kwargs) -> None:
        super().init_poolmanager(*args, **kwargs)
        self.poolmanager.pool_classes_by_scheme = {
            "http": CancellableHTTPConnectionPool,
            "https": CancellableHTTPSConnectionPool,
        }
