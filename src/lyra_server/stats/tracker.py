# SPDX-License-Identifier: MIT
"""Download tracking."""

from __future__ import annotations

import threading
import time
from typing import Callable, Optional

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from .store import CounterStore, DownloadStats


def download_key(package: str, version: str) -> str:
    """Counter key for one package version."""
    return f"{package}@{version}"


class DownloadTracker:
    """Records downloads against a counter store.

    Persisting is best effort: a failure is logged and the download that
    triggered it still succeeds.
    """

    def __init__(self, store: CounterStore, clock: Callable[[], float] = time.time) -> None:
        self.store = store
        self._clock = clock
        self._lock = threading.Lock()

    def record(self, package: str, version: str) -> Optional[int]:
        """Count one download of ``package`` at ``version``.

        Returns:
            The download count for this package version after recording, or
            None if the store failed
        """
        timestamp = int(self._clock() * 1000)
        with self._lock:
            try:
                count = self.store.increment(download_key(package, version))
                self.store.record_last(package, version, timestamp)
                self.store.flush()
            except (OSError, SQLAlchemyError) as e:
                logger.error("Error saving stats: {}", e)
                return None
        return count

    def stats(self) -> DownloadStats:
        """Return a snapshot of the counters."""
        return self.store.snapshot()
