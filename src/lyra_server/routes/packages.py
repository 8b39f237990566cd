# SPDX-License-Identifier: MIT
"""Package listing, search, metadata and refresh endpoints."""

from collections.abc import Mapping

from fastapi import APIRouter
from loguru import logger
from starlette.concurrency import run_in_threadpool

from ..dependencies import IndexServiceDep
from ..index import PackageIndex
from ..models import (
    ArchiveEntryModel,
    PackageListResponse,
    PackageResponse,
    RefreshResponse,
    SearchResponse,
    entries_to_models,
)

router = APIRouter()


def _index_to_models(index: Mapping[str, PackageIndex]) -> dict[str, list[ArchiveEntryModel]]:
    """Convert an index mapping to response models."""
    return {name: entries_to_models(entries) for name, entries in index.items()}


@router.get("/packages", response_model=PackageListResponse)
async def list_packages(service: IndexServiceDep) -> PackageListResponse:
    """List every package with all of its versions, newest first."""
    count, index = service.list_packages()
    return PackageListResponse(count=count, packages=_index_to_models(index))


@router.get("/search/{query}", response_model=SearchResponse)
async def search_packages(query: str, service: IndexServiceDep) -> SearchResponse:
    """Search package names for a case-insensitive substring."""
    results = service.search(query)
    return SearchResponse(
        query=query.lower(),
        count=len(results),
        results=_index_to_models(results),
    )


@router.get("/package/{name}", response_model=PackageResponse)
async def get_package(name: str, service: IndexServiceDep) -> PackageResponse:
    """Get every indexed version of a package."""
    entries = service.get(name)
    return PackageResponse(name=name, versions=entries_to_models(entries))


@router.post("/refresh", response_model=RefreshResponse)
async def refresh_index(service: IndexServiceDep) -> RefreshResponse:
    """Rescan the package directory.

    Useful after adding or removing archives. Queries made while the rescan
    runs keep seeing the previous index.
    """
    logger.info("Refreshing package index...")
    count = await run_in_threadpool(service.refresh)
    return RefreshResponse(message="Package index refreshed", count=count)
