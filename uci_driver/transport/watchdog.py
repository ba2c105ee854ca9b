"""
Read deadline for a blocking engine pipe.

A blocking read on a pipe cannot be cancelled from Python, so the deadline
is enforced from the other side: a timer thread kills the engine process,
which closes the pipe and wakes up the reader with EOF.
"""

import logging
import subprocess
import threading

logger = logging.getLogger(__name__)


class Watchdog:
    """
    Kill a subprocess if a guarded block runs past its deadline.

    Usage:
        with Watchdog(process, timeout=5.0) as watchdog:
            line = process.stdout.readline()
        if watchdog.expired:
            ...

    Attributes:
        process: Subprocess to kill on expiry
        timeout: Deadline in seconds, measured from __enter__
        expired: True once the timer fired and the process was killed
    """

    def __init__(self, process: subprocess.Popen, timeout: float):
        self.process = process
        self.timeout = timeout
        self.expired = False
        self._lock = threading.Lock()
        self._timer = None

    def __enter__(self):
        self.expired = False
        self._timer = threading.Timer(self.timeout, self._expire)
        self._timer.daemon = True
        self._timer.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.cancel()
        return False

    def cancel(self):
        """Stop the timer; has no effect after expiry."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _expire(self):
        with self._lock:
            if self._timer is None:
                return
            self._timer = None
            self.expired = True

        logger.warning(
            f"Engine pid {self.process.pid} silent for {self.timeout:g}s, killing it"
        )
        try:
            self.process.kill()
        except OSError as e:
            # Process already gone
            logger.debug(f"Kill failed: {e}")
