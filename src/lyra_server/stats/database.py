# SPDX-License-Identifier: MIT
"""Download counters stored in a SQL database."""

from __future__ import annotations

import threading
from typing import Optional

from loguru import logger
from sqlalchemy import Engine, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..db import DownloadCounter, LastDownloadRecord, create_db_engine
from .store import DownloadStats, LastDownload

_LAST_DOWNLOAD_ID = 1


class DatabaseCounterStore:
    """Counters kept in ``download_counters`` and ``last_download`` tables.

    Every change is committed immediately, so ``flush()`` has nothing to do.
    """

    def __init__(self, url: str, echo: bool = False) -> None:
        self.url = url
        self.echo = echo
        self._engine: Optional[Engine] = None
        self._lock = threading.Lock()

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._engine = create_db_engine(self.url, echo=self.echo)
        return self._engine

    def load(self) -> None:
        try:
            engine = self.engine
            with Session(engine) as session:
                total = session.scalar(
                    select(func.coalesce(func.sum(DownloadCounter.count), 0))
                )
        except SQLAlchemyError as e:
            logger.error("Error loading stats from {}: {}; starting fresh", self.url, e)
            return
        logger.info("Loaded statistics from {} ({} downloads)", engine.url, total)

    def increment(self, key: str) -> int:
        with self._lock, Session(self.engine) as session, session.begin():
            result = session.execute(
                update(DownloadCounter)
                .where(DownloadCounter.key == key)
                .values(count=DownloadCounter.count + 1)
            )
            if result.rowcount == 0:
                session.add(DownloadCounter(key=key, count=1))
                return 1
            return session.scalar(select(DownloadCounter.count).where(DownloadCounter.key == key))

    def record_last(self, package: str, version: str, timestamp: int) -> None:
        with self._lock, Session(self.engine) as session, session.begin():
            session.merge(
                LastDownloadRecord(
                    id=_LAST_DOWNLOAD_ID,
                    package=package,
                    version=version,
                    timestamp=timestamp,
                )
            )

    def flush(self) -> None:
        pass

    def snapshot(self) -> DownloadStats:
        """Read the counters, or report none if the database can't be read."""
        try:
            with Session(self.engine) as session:
                counts = {
                    row.key: row.count for row in session.scalars(select(DownloadCounter)).all()
                }
                last = session.get(LastDownloadRecord, _LAST_DOWNLOAD_ID)
        except SQLAlchemyError as e:
            logger.error("Error reading stats from {}: {}", self.url, e)
            return DownloadStats()

        last_download = (
            LastDownload(package=last.package, version=last.version, timestamp=last.timestamp)
            if last is not None
            else None
        )
        return DownloadStats(
            total=sum(counts.values()),
            package_downloads=counts,
            last_download=last_download,
        )

    def close(self) -> None:
        """Release database connections."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
