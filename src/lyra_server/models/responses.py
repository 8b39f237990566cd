# SPDX-License-Identifier: MIT
"""Pydantic models for API response wrappers."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .package import ArchiveEntryModel


class PackageListResponse(BaseModel):
    """Response for the package listing endpoint."""

    count: int = Field(ge=0, description="Number of packages")
    packages: dict[str, list[ArchiveEntryModel]] = Field(
        description="Map of package name to its versions, newest first"
    )


class SearchResponse(BaseModel):
    """Response for the search endpoint."""

    query: str
    count: int = Field(ge=0)
    results: dict[str, list[ArchiveEntryModel]]


class PackageResponse(BaseModel):
    """Response for the package metadata endpoint."""

    name: str
    versions: list[ArchiveEntryModel]


class RefreshResponse(BaseModel):
    """Response for the index refresh endpoint."""

    message: str
    count: int = Field(ge=0, description="Number of packages after the refresh")


class HealthResponse(BaseModel):
    """Response for the health check endpoint."""

    status: str
    packages: int
    uptime: float = Field(description="Seconds since the server started")


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LastDownloadModel(_CamelModel):
    """Most recent download."""

    package: str
    version: str
    timestamp: int = Field(description="Epoch milliseconds")


class TopPackageModel(_CamelModel):
    """Download count for one package version."""

    package: str = Field(description="Key in name@version form")
    downloads: int


class ServerInfo(_CamelModel):
    """Server part of the statistics response."""

    uptime: str = Field(description="Human readable uptime, e.g. 1d 2h 3m 4s")
    uptime_seconds: float
    packages_available: int


class DownloadInfo(_CamelModel):
    """Download part of the statistics response."""

    total: int
    last_download: LastDownloadModel | None = None
    top_packages: list[TopPackageModel] = Field(default_factory=list)


class StatsResponse(_CamelModel):
    """Response for the statistics endpoint."""

    server: ServerInfo
    downloads: DownloadInfo


class RootResponse(_CamelModel):
    """Response for the root endpoint."""

    name: str
    version: str
    endpoints: dict[str, str]
    packages_available: int
