# SPDX-License-Identifier: MIT
"""Health, statistics and server info endpoints."""

import time

from fastapi import APIRouter, Request

from ..dependencies import ConfigDep, IndexServiceDep, TrackerDep
from ..models import (
    DownloadInfo,
    HealthResponse,
    LastDownloadModel,
    RootResponse,
    ServerInfo,
    StatsResponse,
    TopPackageModel,
)

router = APIRouter()

ENDPOINTS = {
    "GET /api/packages": "List all packages",
    "GET /api/search/:query": "Search packages",
    "GET /api/package/:name": "Get package info",
    "GET /packages/:name": "Download latest version",
    "GET /packages/:name/:version": "Download specific version",
    "POST /api/refresh": "Refresh package index",
    "GET /api/stats": "Download statistics",
    "GET /health": "Health check",
}


def format_uptime(seconds: float) -> str:
    """Format a duration as e.g. ``1d 2h 3m 4s``, omitting zero leading units.

    Examples:
        >>> format_uptime(93784)
        '1d 2h 3m 4s'
        >>> format_uptime(5)
        '5s'
    """
    days, remainder = divmod(int(seconds), 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, secs = divmod(remainder, 60)

    parts = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    parts.append(f"{secs}s")
    return " ".join(parts)


def _uptime(request: Request) -> float:
    return time.time() - request.app.state.started_at


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request, service: IndexServiceDep) -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="ok", packages=service.package_count, uptime=_uptime(request))


@router.get("/api/stats", response_model=StatsResponse)
async def server_stats(
    request: Request,
    service: IndexServiceDep,
    tracker: TrackerDep,
) -> StatsResponse:
    """Uptime and download statistics, including the ten most downloaded versions."""
    uptime = _uptime(request)
    stats = tracker.stats()
    last = stats.last_download

    return StatsResponse(
        server=ServerInfo(
            uptime=format_uptime(uptime),
            uptime_seconds=uptime,
            packages_available=service.package_count,
        ),
        downloads=DownloadInfo(
            total=stats.total,
            last_download=(
                LastDownloadModel(
                    package=last.package, version=last.version, timestamp=last.timestamp
                )
                if last
                else None
            ),
            top_packages=[
                TopPackageModel(package=key, downloads=count)
                for key, count in stats.top_packages(10)
            ],
        ),
    )


@router.get("/", response_model=RootResponse)
async def root(config: ConfigDep, service: IndexServiceDep) -> RootResponse:
    """Server name, version and available endpoints."""
    return RootResponse(
        name=config.title,
        version=config.version,
        endpoints=ENDPOINTS,
        packages_available=service.package_count,
    )
