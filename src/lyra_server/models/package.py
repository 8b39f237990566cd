# SPDX-License-Identifier: MIT
"""Pydantic models for package data."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ..index import ArchiveEntry


class ArchiveEntryModel(BaseModel):
    """One indexed archive of a package."""

    model_config = ConfigDict(frozen=True)

    version: str
    filename: str
    size: int = Field(ge=0, description="File size in bytes")
    hash: str = Field(description="Lowercase hex SHA-256 of the archive")
    uploaded: datetime = Field(description="File modification time")

    @classmethod
    def from_entry(cls, entry: ArchiveEntry) -> "ArchiveEntryModel":
        """Convert an index entry."""
        return cls.model_validate(entry.to_dict())


def entries_to_models(entries: tuple[ArchiveEntry, ...]) -> list[ArchiveEntryModel]:
    """Convert a package's entries, keeping their order."""
    return [ArchiveEntryModel.from_entry(entry) for entry in entries]
