# SPDX-License-Identifier: MIT
"""Package index construction from an archive directory."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from stat import S_ISREG
from typing import Any

from loguru import logger

from .checksum import compute_sha256_file
from .compare import sort_newest_first
from .filename import ARCHIVE_EXTENSION, FilenameError, is_archive_filename, parse_archive_filename


@dataclass(frozen=True, slots=True)
class ArchiveEntry:
    """One indexed archive file.

    Attributes:
        version: Version parsed from the filename
        filename: Basename of the archive inside the package directory
        size: File size in bytes
        hash: Lowercase hex SHA-256 of the file contents
        uploaded_at: File modification time (UTC)
    """

    version: str
    filename: str
    size: int
    hash: str
    uploaded_at: datetime

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire format used by the API."""
        return {
            "version": self.version,
            "filename": self.filename,
            "size": self.size,
            "hash": self.hash,
            "uploaded": self.uploaded_at,
        }


PackageIndex = tuple[ArchiveEntry, ...]


def _list_directory(directory: Path) -> list[str]:
    """List directory entry names, sorted for deterministic grouping."""
    return sorted(os.listdir(directory))


def _index_archive(path: Path, version: str) -> ArchiveEntry | None:
    """Stat and hash one archive, or return None if it is not a regular file."""
    info = path.stat()
    if not S_ISREG(info.st_mode):
        logger.debug("Skipping {}: not a regular file", path.name)
        return None

    return ArchiveEntry(
        version=version,
        filename=path.name,
        size=info.st_size,
        hash=compute_sha256_file(path),
        uploaded_at=datetime.fromtimestamp(info.st_mtime, tz=UTC),
    )


def build_index(
    directory: Path | str, extension: str = ARCHIVE_EXTENSION
) -> dict[str, PackageIndex]:
    """Scan a directory and build a fresh package index.

    Files that don't look like archives or don't parse are skipped silently.
    Files that can't be read are logged and skipped. A directory that can't
    be listed yields an empty index.

    Args:
        directory: Directory holding the archives (not scanned recursively)
        extension: Archive extension to index

    Returns:
        Mapping of package name to its entries, newest version first
    """
    directory = Path(directory)

    try:
        names = _list_directory(directory)
    except OSError as e:
        logger.error("Error generating package index for {}: {}", directory, e)
        return {}

    groups: dict[str, list[ArchiveEntry]] = {}
    for name in names:
        if not is_archive_filename(name, extension):
            continue

        try:
            parsed = parse_archive_filename(name, extension)
        except FilenameError:
            logger.debug("Skipping {}: filename does not match name-version pattern", name)
            continue

        try:
            entry = _index_archive(directory / name, parsed.version)
        except OSError as e:
            logger.warning("Skipping {}: could not read archive: {}", name, e)
            continue

        if entry is not None:
            groups.setdefault(parsed.name, []).append(entry)

    return {name: tuple(sort_newest_first(entries)) for name, entries in groups.items()}
