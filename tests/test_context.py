"""Tests for FetchContext."""

import threading
from unittest.mock import MagicMock, patch

from graphite_reader_core.context import FetchContext


class TestFetchContextDeadline:
    """Test FetchContext deadline handling."""

    def test_no_deadline(self) -> None:
        ctx = FetchContext()
        assert ctx.deadline is None
        assert ctx.remaining() is None
        assert ctx.expired is False
        assert ctx.done is False

    @patch("graphite_reader_core.context.time.monotonic")
    def test_remaining(self, mock_monotonic: MagicMock) -> None:
        mock_monotonic.return_value = 100.0
        ctx = FetchContext(timeout=2.0)

        mock_monotonic.return_value = 101.5
        assert ctx.remaining() == 0.5
        assert ctx.expired is False

    @patch("graphite_reader_core.context.time.monotonic")
    def test_expired(self, mock_monotonic: MagicMock) -> None:
        mock_monotonic.return_value = 100.0
        ctx = FetchContext(timeout=2.0)

        mock_monotonic.return_value = 103.0
        assert ctx.remaining() == 0.0
        assert ctx.expired is True
        assert ctx.done is True
        assert ctx.cancelled is False

    def test_zero_timeout_is_expired(self) -> None:
        assert FetchContext(timeout=0).expired is True


class TestFetchContextCancel:
    """Test FetchContext cancellation."""

    def test_cancel(self) -> None:
        ctx = FetchContext()
        ctx.cancel()
        assert ctx.cancelled is True
        assert ctx.done is True

    def test_callbacks_run_once(self) -> None:
        ctx = FetchContext()
        callback = MagicMock()
        ctx.on_cancel(callback)

        ctx.cancel()
        ctx.cancel()

        callback.assert_called_once_with()

    def test_callback_after_cancel_runs_immediately(self) -> None:
        ctx = FetchContext()
        ctx.cancel()
        callback = MagicMock()

        ctx.on_cancel(callback)

        callback.assert_called_once_with()

    def test_unregister(self) -> None:
        ctx = FetchContext()
        callback = MagicMock()
        unregister = ctx.on_cancel(callback)

        unregister()
        ctx.cancel()

        callback.assert_not_called()

    def test_cancel_from_other_thread(self) -> None:
        ctx = FetchContext()
        fired = threading.Event()
        ctx.on_cancel(fired.set)

        worker = threading.Thread(target=ctx.cancel)
        worker.start()
        worker.join()

        assert fired.is_set()
        assert ctx.cancelled is True
