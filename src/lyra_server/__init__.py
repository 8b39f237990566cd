# SPDX-License-Identifier: MIT
"""HTTP server for package archives kept in a directory."""

__version__ = "1.0.0"

from .app import create_app
from .checksum import compute_sha256_file, compute_sha256_stream
from .compare import Ordering, compare_versions, sort_newest_first, version_sort_key
from .config import ConfigError, LoggingConfig, PackagesConfig, ServerConfig, StatsConfig
from .filename import (
    ARCHIVE_EXTENSION,
    FilenameError,
    ParsedArchiveFilename,
    parse_archive_filename,
    try_parse_archive_filename,
)
from .index import ArchiveEntry, build_index
from .errors import (
    APIError,
    ErrorCode,
    PackageFileMissingError,
    PackageNotFoundError,
    VersionNotFoundError,
)
from .service import PackageIndexService

__all__ = [
    # App factory
    "create_app",
    # Configuration
    "ConfigError",
    "LoggingConfig",
    "PackagesConfig",
    "ServerConfig",
    "StatsConfig",
    # Filenames and versions
    "ARCHIVE_EXTENSION",
    "FilenameError",
    "Ordering",
    "ParsedArchiveFilename",
    "compare_versions",
    "parse_archive_filename",
    "sort_newest_first",
    "try_parse_archive_filename",
    "version_sort_key",
    # Checksum utilities
    "compute_sha256_file",
    "compute_sha256_stream",
    # Index
    "ArchiveEntry",
    "PackageIndexService",
    "build_index",
    # Errors
    "APIError",
    "ErrorCode",
    "PackageFileMissingError",
    "PackageNotFoundError",
    "VersionNotFoundError",
]
