# SPDX-License-Identifier: MIT
"""Database module for download statistics."""

from sqlalchemy import Engine, create_engine

from .models import Base, DownloadCounter, LastDownloadRecord

__all__ = [
    "Base",
    "DownloadCounter",
    "LastDownloadRecord",
    "create_db_engine",
]


def create_db_engine(url: str, echo: bool = False) -> Engine:
    """Create a database engine and make sure the tables exist.

    Args:
        url: SQLAlchemy database URL
        echo: Log emitted SQL

    Returns:
        Engine bound to the database
    """
    connect_args = {}
    if url.startswith("sqlite"):
        # Request handlers run on a thread pool
        connect_args["check_same_thread"] = False

    engine = create_engine(url, echo=echo, connect_args=connect_args)
    Base.metadata.create_all(engine)
    return engine
