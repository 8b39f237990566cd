# SPDX-License-Identifier: MIT
"""FastAPI dependencies for request handlers."""

from typing import Annotated

from fastapi import Depends, Request

from .config import ServerConfig
from .service import PackageIndexService
from .stats import DownloadTracker


def get_config(request: Request) -> ServerConfig:
    return request.app.state.config


def get_index_service(request: Request) -> PackageIndexService:
    return request.app.state.index_service


def get_tracker(request: Request) -> DownloadTracker:
    return request.app.state.tracker


ConfigDep = Annotated[ServerConfig, Depends(get_config)]
IndexServiceDep = Annotated[PackageIndexService, Depends(get_index_service)]
TrackerDep = Annotated[DownloadTracker, Depends(get_tracker)]
