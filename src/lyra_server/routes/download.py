# SPDX-License-Identifier: MIT
"""Package download endpoints."""

from fastapi import APIRouter
from fastapi.responses import FileResponse
from loguru import logger
from starlette.concurrency import run_in_threadpool

from ..dependencies import IndexServiceDep, TrackerDep
from ..index import ArchiveEntry
from ..service import PackageIndexService
from ..stats import DownloadTracker

router = APIRouter()


async def _serve(
    name: str,
    entry: ArchiveEntry,
    service: PackageIndexService,
    tracker: DownloadTracker,
) -> FileResponse:
    """Check the archive is still on disk, count the download and stream it."""
    file_path = service.resolve_file(entry)

    logger.info("Serving {} v{} ({})", name, entry.version, entry.filename)
    await run_in_threadpool(tracker.record, name, entry.version)

    return FileResponse(
        path=file_path,
        filename=entry.filename,
        media_type="application/octet-stream",
        headers={"X-Checksum-SHA256": entry.hash},
    )


@router.get("/packages/{name}")
async def download_latest(
    name: str,
    service: IndexServiceDep,
    tracker: TrackerDep,
) -> FileResponse:
    """Download the newest version of a package."""
    return await _serve(name, service.latest(name), service, tracker)


@router.get("/packages/{name}/{version}")
async def download_version(
    name: str,
    version: str,
    service: IndexServiceDep,
    tracker: TrackerDep,
) -> FileResponse:
    """Download a specific version of a package.

    The version must match the filename's version string exactly.
    """
    return await _serve(name, service.get_version(name, version), service, tracker)
