# SPDX-License-Identifier: MIT
"""Server configuration."""

import os
from dataclasses import dataclass, field
from typing import Optional

from loguru import logger

from .filename import ARCHIVE_EXTENSION

STATS_BACKENDS = ("json", "database", "memory")


class ConfigError(Exception):
    """Raised when configuration values are invalid."""

    pass


@dataclass
class PackagesConfig:
    """Package directory configuration."""

    directory: str = "./packages"
    extension: str = ARCHIVE_EXTENSION
    create_missing: bool = True


@dataclass
class StatsConfig:
    """Download statistics storage configuration."""

    backend: str = "json"  # "json", "database" or "memory"
    path: str = "./stats.json"
    database_url: str = "sqlite:///./lyra_stats.db"
    echo: bool = False


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    file: Optional[str] = None
    rotation: str = "10 MB"
    retention: str = "10 days"


@dataclass
class ServerConfig:
    """Main server configuration."""

    # Server settings
    title: str = "Lyra Package Server"
    description: str = "Serves package archives from a directory with search and download stats"
    version: str = "1.0.0"
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    # Sub-configurations
    packages: PackagesConfig = field(default_factory=PackagesConfig)
    stats: StatsConfig = field(default_factory=StatsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # API settings
    docs_url: Optional[str] = "/docs"
    openapi_url: Optional[str] = "/openapi.json"

    def validate(self) -> None:
        """Check values that can't be expressed by types alone.

        Raises:
            ConfigError: If a value is out of range or unknown
        """
        if not 0 < self.port < 65536:
            raise ConfigError(f"Port out of range: {self.port}")
        if self.stats.backend not in STATS_BACKENDS:
            raise ConfigError(
                f"Unknown stats backend '{self.stats.backend}'; "
                f"expected one of {', '.join(STATS_BACKENDS)}"
            )
        if not self.packages.extension:
            raise ConfigError("Archive extension cannot be empty")
        try:
            logger.level(self.logging.level)
        except ValueError as e:
            raise ConfigError(f"Unknown log level: {self.logging.level}") from e

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Create configuration from environment variables."""
        config = cls()

        # Server
        if host := os.getenv("LYRA_HOST"):
            config.host = host
        if port := os.getenv("LYRA_PORT", os.getenv("PORT")):
            try:
                config.port = int(port)
            except ValueError as e:
                raise ConfigError(f"Invalid port: {port}") from e

        # Packages
        if packages_dir := os.getenv("LYRA_PACKAGES_DIR"):
            config.packages.directory = packages_dir
        if extension := os.getenv("LYRA_ARCHIVE_EXTENSION"):
            config.packages.extension = extension
        config.packages.create_missing = (
            os.getenv("LYRA_CREATE_PACKAGES_DIR", "true").lower() == "true"
        )

        # Stats
        if backend := os.getenv("LYRA_STATS_BACKEND"):
            config.stats.backend = backend.lower()
        if stats_path := os.getenv("LYRA_STATS_PATH"):
            config.stats.path = stats_path
        if db_url := os.getenv("LYRA_DATABASE_URL"):
            config.stats.database_url = db_url
        config.stats.echo = os.getenv("LYRA_DATABASE_ECHO", "").lower() == "true"

        # Logging
        if level := os.getenv("LYRA_LOG_LEVEL"):
            config.logging.level = level.upper()
        if log_file := os.getenv("LYRA_LOG_FILE"):
            config.logging.file = log_file

        # Debug
        config.debug = os.getenv("LYRA_DEBUG", "").lower() == "true"

        config.validate()
        return config
