"""
Sudo keep-alive — background credential refresh during a long run.

A daemon thread re-validates the sudo timestamp every
``REFRESH_INTERVAL_S`` so package installs late in a full profile do
not stop at a password prompt.  It is stopped through a
``threading.Event`` when the component loop ends, so the thread never
outlives the run.

    with SudoKeepAlive(runner):
        execute_profile(...)
"""

from __future__ import annotations

import logging
import threading

from dotinstall.adapters.shell.command import CommandRunner

logger = logging.getLogger(__name__)

REFRESH_INTERVAL_S = 50.0
"""Seconds between refreshes; sudo's default timestamp timeout is 5 minutes."""


class SudoKeepAlive:
    """Cancellable sudo credential refresher."""

    def __init__(self, runner: CommandRunner, interval: float = REFRESH_INTERVAL_S):
        self.runner = runner
        self.interval = interval
        self.refresh_count = 0
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._loop,
            daemon=True,
            name="sudo-keepalive",
        )
        self._thread.start()
        logger.debug("sudo keep-alive started (every %.0fs)", self.interval)

    def stop(self, timeout: float = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.debug("sudo keep-alive stopped after %d refreshes", self.refresh_count)

    def _loop(self) -> None:
        while not self._stop.wait(self.interval):
            result = self.runner.run(["sudo", "-n", "true"], timeout=10)
            self.refresh_count += 1
            if not result.ok:
                # Credentials expired; the next sudo call will prompt.
                logger.debug("sudo refresh failed: %s", result.describe())
                return

    def __enter__(self) -> SudoKeepAlive:
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()
