# SPDX-License-Identifier: MIT
"""Download statistics."""

from ..config import ConfigError, StatsConfig
from .database import DatabaseCounterStore
from .store import (
    CounterStore,
    DownloadStats,
    JsonCounterStore,
    LastDownload,
    MemoryCounterStore,
)
from .tracker import DownloadTracker, download_key

__all__ = [
    "CounterStore",
    "DatabaseCounterStore",
    "DownloadStats",
    "DownloadTracker",
    "JsonCounterStore",
    "LastDownload",
    "MemoryCounterStore",
    "create_counter_store",
    "download_key",
]


def create_counter_store(config: StatsConfig) -> CounterStore:
    """Create the counter store selected by configuration.

    Raises:
        ConfigError: If the backend is unknown
    """
    if config.backend == "json":
        return JsonCounterStore(config.path)
    if config.backend == "database":
        return DatabaseCounterStore(config.database_url, echo=config.echo)
    if config.backend == "memory":
        return MemoryCounterStore()
    raise ConfigError(f"Unknown stats backend: {config.backend}")
