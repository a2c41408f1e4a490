"""Tests for vmremote.shutdown module."""

from __future__ import annotations

import threading
import time
from unittest.mock import patch

from vmremote.shutdown import schedule_shutdown


class TestScheduleShutdown:
    def test_returns_before_termination(self):
        fired = threading.Event()
        started = time.monotonic()
        thread = schedule_shutdown(0.3, terminate=fired.set)
        assert time.monotonic() - started < 0.3
        assert not fired.is_set()
        assert fired.wait(timeout=5)
        assert time.monotonic() - started >= 0.3
        thread.join(timeout=1)

    def test_thread_is_detached(self):
        fired = threading.Event()
        thread = schedule_shutdown(0.01, terminate=fired.set)
        assert thread.daemon
        assert thread.name == "remote-shutdown"
        assert fired.wait(timeout=5)

    def test_default_terminator_exits_process(self):
        with patch("vmremote.shutdown.os._exit") as mock_exit:
            thread = schedule_shutdown(0.01)
            thread.join(timeout=5)
        mock_exit.assert_called_once_with(0)

    def test_logs_schedule_and_shutdown(self):
        fired = threading.Event()
        with patch("vmremote.shutdown.log") as mock_log:
            thread = schedule_shutdown(0.01, terminate=fired.set)
            thread.join(timeout=5)
        messages = [call.args[1] for call in mock_log.call_args_list]
        assert any("in 0.01 seconds" in message for message in messages)
        assert any("shut down at" in message for message in messages)
