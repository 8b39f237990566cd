# SPDX-License-Identifier: MIT
"""Download counter stores."""

from __future__ import annotations

import json
import os
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Protocol

from loguru import logger


@dataclass(frozen=True)
class LastDownload:
    """Most recent recorded download."""

    package: str
    version: str
    timestamp: int  # epoch milliseconds

    def to_dict(self) -> dict[str, Any]:
        return {"package": self.package, "version": self.version, "timestamp": self.timestamp}


@dataclass
class DownloadStats:
    """Point-in-time copy of the download counters."""

    total: int = 0
    package_downloads: dict[str, int] = field(default_factory=dict)
    last_download: Optional[LastDownload] = None

    def top_packages(self, limit: int = 10) -> list[tuple[str, int]]:
        """Return the most downloaded ``name@version`` keys, highest first."""
        ranked = sorted(self.package_downloads.items(), key=lambda item: item[1], reverse=True)
        return ranked[:limit]


class CounterStore(Protocol):
    """Key-increment store behind the download tracker."""

    def load(self) -> None:
        """Read persisted counters, starting fresh if there are none."""
        ...

    def increment(self, key: str) -> int:
        """Add one download to ``key`` and to the total; return the new count."""
        ...

    def record_last(self, package: str, version: str, timestamp: int) -> None:
        """Remember the most recent download."""
        ...

    def flush(self) -> None:
        """Persist pending changes."""
        ...

    def snapshot(self) -> DownloadStats:
        """Return a copy of the current counters."""
        ...


class MemoryCounterStore:
    """Counters kept in process memory only."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._total = 0
        self._counts: dict[str, int] = {}
        self._last: Optional[LastDownload] = None

    def load(self) -> None:
        pass

    def increment(self, key: str) -> int:
        with self._lock:
            self._total += 1
            self._counts[key] = self._counts.get(key, 0) + 1
            return self._counts[key]

    def record_last(self, package: str, version: str, timestamp: int) -> None:
        with self._lock:
            self._last = LastDownload(package=package, version=version, timestamp=timestamp)

    def flush(self) -> None:
        pass

    def snapshot(self) -> DownloadStats:
        with self._lock:
            return DownloadStats(
                total=self._total,
                package_downloads=dict(self._counts),
                last_download=self._last,
            )

    def _replace(self, stats: DownloadStats) -> None:
        with self._lock:
            self._total = stats.total
            self._counts = dict(stats.package_downloads)
            self._last = stats.last_download


def stats_from_json(data: Any) -> DownloadStats:
    """Parse the on-disk JSON layout.

    Raises:
        ValueError: If the document doesn't have the expected shape
    """
    if not isinstance(data, dict):
        raise ValueError("stats document must be a JSON object")

    counts = data.get("packageDownloads") or {}
    if not isinstance(counts, dict):
        raise ValueError("packageDownloads must be an object")

    last = data.get("lastDownload")
    last_download = None
    if last is not None:
        try:
            last_download = LastDownload(
                package=str(last["package"]),
                version=str(last["version"]),
                timestamp=int(last["timestamp"]),
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"invalid lastDownload record: {e}") from e

    return DownloadStats(
        total=int(data.get("totalDownloads", 0)),
        package_downloads={str(k): int(v) for k, v in counts.items()},
        last_download=last_download,
    )


def stats_to_json(stats: DownloadStats) -> dict[str, Any]:
    """Render counters in the on-disk JSON layout."""
    return {
        "totalDownloads": stats.total,
        "packageDownloads": stats.package_downloads,
        "lastDownload": stats.last_download.to_dict() if stats.last_download else None,
    }


class JsonCounterStore(MemoryCounterStore):
    """Counters persisted as a single JSON file, rewritten in full on flush."""

    def __init__(self, path: Path | str) -> None:
        super().__init__()
        self.path = Path(path)

    def load(self) -> None:
        if not self.path.exists():
            logger.info("No statistics file at {}; starting fresh", self.path)
            return

        try:
            stats = stats_from_json(json.loads(self.path.read_text(encoding="utf-8")))
        except (OSError, ValueError, TypeError) as e:
            logger.error("Error loading stats from {}: {}; starting fresh", self.path, e)
            return

        self._replace(stats)
        logger.info("Loaded statistics from {}", self.path)

    def flush(self) -> None:
        """Write all counters to disk.

        Raises:
            OSError: If the file cannot be written
        """
        with self._lock:
            document = stats_to_json(self.snapshot())
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_name(self.path.name + ".tmp")
            tmp_path.write_text(json.dumps(document, indent=2), encoding="utf-8")
            os.replace(tmp_path, self.path)
