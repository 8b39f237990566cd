# SPDX-License-Identifier: MIT
"""FastAPI application factory."""

import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from loguru import logger
from starlette.concurrency import run_in_threadpool

from .config import ServerConfig
from .log import configure_logging
from .service import PackageIndexService
from .stats import DownloadTracker, create_counter_store


def _ensure_packages_dir(directory: Path) -> None:
    if directory.exists():
        return
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error("Could not create packages directory {}: {}", directory, e)
        return
    logger.info("Created packages directory: {}", directory)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    config: ServerConfig = app.state.config
    service: PackageIndexService = app.state.index_service
    tracker: DownloadTracker = app.state.tracker

    app.state.started_at = time.time()

    if config.packages.create_missing:
        _ensure_packages_dir(service.packages_dir)

    # Startup: load counters and build the initial index
    await run_in_threadpool(tracker.store.load)
    await run_in_threadpool(service.refresh)

    logger.info("{} started", config.title)
    logger.info("Package directory: {}", service.packages_dir)
    logger.info("Packages available: {}", service.package_count)
    logger.info("Total downloads: {}", tracker.stats().total)

    yield

    # Shutdown: release the counter store
    close = getattr(tracker.store, "close", None)
    if close is not None:
        close()


def create_app(config: ServerConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Server configuration. If None, loads from environment.

    Returns:
        Configured FastAPI application instance.
    """
    if config is None:
        config = ServerConfig.from_env()
    else:
        config.validate()

    configure_logging(config.logging)

    app = FastAPI(
        title=config.title,
        description=config.description,
        version=config.version,
        debug=config.debug,
        docs_url=config.docs_url,
        openapi_url=config.openapi_url,
        lifespan=lifespan,
    )

    # Store config and core services in app state
    app.state.config = config
    app.state.started_at = time.time()
    app.state.index_service = PackageIndexService(
        config.packages.directory, extension=config.packages.extension
    )
    app.state.tracker = DownloadTracker(create_counter_store(config.stats))

    # Add error handling middleware
    from .middleware.errors import add_error_handlers

    add_error_handlers(app, catch_all=not config.debug)

    # Register routes
    from .routes import download, packages, status

    app.include_router(packages.router, prefix="/api", tags=["packages"])
    app.include_router(download.router, tags=["download"])
    app.include_router(status.router, tags=["status"])

    return app
