# SPDX-License-Identifier: MIT
"""SQLAlchemy database models for download statistics."""

from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


class DownloadCounter(Base):
    """Download count for one ``name@version`` key."""

    __tablename__ = "download_counters"

    key: Mapped[str] = mapped_column(String(300), primary_key=True)
    count: Mapped[int] = mapped_column(Integer, default=0)

    def __repr__(self) -> str:
        return f"<DownloadCounter(key={self.key!r}, count={self.count})>"


class LastDownloadRecord(Base):
    """Single-row table holding the most recent download."""

    __tablename__ = "last_download"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    package: Mapped[str] = mapped_column(String(200))
    version: Mapped[str] = mapped_column(String(100))
    timestamp: Mapped[int] = mapped_column(BigInteger)

    def __repr__(self) -> str:
        return f"<LastDownloadRecord(package={self.package!r}, version={self.version!r})>"
