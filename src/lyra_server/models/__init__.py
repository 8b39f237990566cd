# SPDX-License-Identifier: MIT
"""Pydantic models for API responses."""

from .package import ArchiveEntryModel, entries_to_models
from .responses import (
    DownloadInfo,
    HealthResponse,
    LastDownloadModel,
    PackageListResponse,
    PackageResponse,
    RefreshResponse,
    RootResponse,
    SearchResponse,
    ServerInfo,
    StatsResponse,
    TopPackageModel,
)

__all__ = [
    # Package models
    "ArchiveEntryModel",
    "entries_to_models",
    # Response models
    "DownloadInfo",
    "HealthResponse",
    "LastDownloadModel",
    "PackageListResponse",
    "PackageResponse",
    "RefreshResponse",
    "RootResponse",
    "SearchResponse",
    "ServerInfo",
    "StatsResponse",
    "TopPackageModel",
]
