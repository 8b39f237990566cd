# SPDX-License-Identifier: MIT
"""Query service over the current package index."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from loguru import logger

from .filename import ARCHIVE_EXTENSION
from .index import ArchiveEntry, PackageIndex, build_index
from .errors import PackageFileMissingError, PackageNotFoundError, VersionNotFoundError

ServerIndex = Mapping[str, PackageIndex]


class PackageIndexService:
    """Owns the server index and answers queries against it.

    The index is replaced wholesale by ``refresh()``: a new mapping is built
    off to the side and swapped in with a single assignment. Every query
    reads the current reference once, so it sees either the old index or the
    new one, never a mix. Concurrent refreshes are last-writer-wins.
    """

    def __init__(self, packages_dir: Path | str, extension: str = ARCHIVE_EXTENSION) -> None:
        self._packages_dir = Path(packages_dir)
        self._extension = extension
        self._index: ServerIndex = MappingProxyType({})

    @property
    def packages_dir(self) -> Path:
        """Directory the index is built from."""
        return self._packages_dir

    @property
    def package_count(self) -> int:
        """Number of packages in the current index."""
        return len(self._index)

    def refresh(self) -> int:
        """Rescan the package directory and swap in the new index.

        Returns:
            Number of packages in the new index
        """
        logger.info("Refreshing package index from {}", self._packages_dir)
        index = MappingProxyType(build_index(self._packages_dir, self._extension))
        self._index = index
        logger.info("Package index refreshed: {} packages", len(index))
        return len(index)

    def list_packages(self) -> tuple[int, ServerIndex]:
        """Return the package count and the full index."""
        index = self._index
        return len(index), index

    def search(self, query: str) -> ServerIndex:
        """Find packages whose name contains the query, ignoring case.

        An empty query matches every package.
        """
        needle = query.lower()
        index = self._index
        return MappingProxyType(
            {name: entries for name, entries in index.items() if needle in name.lower()}
        )

    def get(self, name: str) -> PackageIndex:
        """Get every indexed version of a package, newest first.

        Raises:
            PackageNotFoundError: If the name is not indexed (case-sensitive)
        """
        entries = self._index.get(name)
        if entries is None:
            raise PackageNotFoundError(name)
        return entries

    def get_version(self, name: str, version: str) -> ArchiveEntry:
        """Get one version of a package by exact version string.

        ``"1.0"`` and ``"1.0.0"`` are different versions here even though
        they compare equal for sorting.

        Raises:
            PackageNotFoundError: If the name is not indexed
            VersionNotFoundError: If no entry has exactly this version
        """
        entries = self.get(name)
        for entry in entries:
            if entry.version == version:
                return entry
        raise VersionNotFoundError(name, version, [entry.version for entry in entries])

    def latest(self, name: str) -> ArchiveEntry:
        """Get the newest version of a package.

        Raises:
            PackageNotFoundError: If the name is not indexed or has no entries
        """
        entries = self._index.get(name)
        if not entries:
            raise PackageNotFoundError(name)
        return entries[0]

    def resolve_file(self, entry: ArchiveEntry) -> Path:
        """Locate the archive backing an entry.

        Raises:
            PackageFileMissingError: If the file was removed since indexing
        """
        path = self._packages_dir / entry.filename
        if not path.is_file():
            logger.warning("Indexed file {} is missing; index is stale", entry.filename)
            raise PackageFileMissingError(entry.filename)
        return path
