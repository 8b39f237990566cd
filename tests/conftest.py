# SPDX-License-Identifier: MIT
"""Pytest fixtures for server tests."""

from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from loguru import logger

from lyra_server import ServerConfig, create_app


def write_archive(directory: Path, filename: str, content: Optional[bytes] = None) -> Path:
    """Write a fake archive file and return its path."""
    path = directory / filename
    path.write_bytes(content if content is not None else f"contents of {filename}".encode())
    return path


@pytest.fixture
def caplog(caplog: pytest.LogCaptureFixture):
    """Route loguru records into pytest's caplog."""
    handler_id = logger.add(caplog.handler, format="{message}", level=0)
    yield caplog
    logger.remove(handler_id)


@pytest.fixture
def packages_dir(tmp_path: Path) -> Path:
    """Empty package directory."""
    directory = tmp_path / "packages"
    directory.mkdir()
    return directory


@pytest.fixture
def sample_packages_dir(packages_dir: Path) -> Path:
    """Package directory with a few packages and some files that aren't archives."""
    for filename in [
        "foo-1.0.0.tar.gz",
        "foo-2.1.0.tar.gz",
        "foo-2.0.5.tar.gz",
        "bar-0.1.0-x86_64.tar.gz",
        "Baz-3.0.tar.gz",
        "notapackage.txt",
        "noversion.tar.gz",
    ]:
        write_archive(packages_dir, filename)
    return packages_dir


@pytest.fixture
def test_config(tmp_path: Path, sample_packages_dir: Path) -> ServerConfig:
    """Create test configuration with in-memory download counters."""
    config = ServerConfig()
    config.packages.directory = str(sample_packages_dir)
    config.packages.create_missing = False
    config.stats.backend = "memory"
    config.stats.path = str(tmp_path / "stats.json")
    config.logging.level = "WARNING"
    return config


@pytest.fixture
def app(test_config: ServerConfig):
    """Create test FastAPI application."""
    return create_app(test_config)


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client against a started application."""
    async with app.router.lifespan_context(app):
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as client:
            yield client
