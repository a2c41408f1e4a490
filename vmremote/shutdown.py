"""Delayed, non-cancellable process termination requested over XML-RPC."""

from __future__ import annotations

import os
import threading
import time
from datetime import datetime
from typing import Callable, Optional

from vmremote.constants import SHUTDOWN_DELAY
from vmremote.utils import log


def _terminate() -> None:
    os._exit(0)


def schedule_shutdown(
    delay: float = SHUTDOWN_DELAY,
    terminate: Optional[Callable[[], None]] = None,
) -> threading.Thread:
    """Terminate the process ``delay`` seconds from now, in a detached thread.

    The caller returns immediately so the in-flight XML-RPC response can be
    written before the process exits. Once scheduled there is no way to cancel
    the termination.
    """
    terminate = terminate or _terminate

    def _shutdown_later() -> None:
        time.sleep(delay)
        log("INFO", f"Remote server/library shut down at {datetime.now():%Y-%m-%d %H:%M:%S}")
        terminate()

    thread = threading.Thread(target=_shutdown_later, name="remote-shutdown", daemon=True)
    thread.start()
    log("INFO", f"Shutting down remote server/library in {delay:g} seconds, from remote library request")
    return thread
