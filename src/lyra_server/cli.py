# SPDX-License-Identifier: MIT
"""CLI entry point for the lyra-server command."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import click
import httpx

from .config import ConfigError, ServerConfig
from .index import build_index
from .log import configure_logging

DEFAULT_SERVER_URL = "http://localhost:8000"


class Context:
    """CLI context object passed to commands."""

    def __init__(self) -> None:
        self.config: Optional[ServerConfig] = None
        self.verbose: bool = False

    def load_config(self) -> ServerConfig:
        """Load configuration from the environment, caching the result."""
        if self.config is None:
            self.config = ServerConfig.from_env()
            if self.verbose:
                self.config.logging.level = "DEBUG"
        return self.config


pass_context = click.make_pass_decorator(Context, ensure=True)


def echo_error(message: str) -> None:
    """Print an error message to stderr."""
    click.secho(f"Error: {message}", fg="red", err=True)


def echo_success(message: str) -> None:
    """Print a success message."""
    click.secho(message, fg="green")


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(message)


@click.group()
@click.version_option(package_name="lyra-server")
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose output.",
)
@pass_context
def cli(ctx: Context, verbose: bool) -> None:
    """Lyra package server.

    Serves the package archives in a directory over HTTP.

    \b
    Examples:
        lyra-server serve --packages-dir ./packages
        lyra-server index --json
        lyra-server refresh --url http://localhost:8000
    """
    ctx.verbose = verbose


@cli.command()
@click.option("--host", help="Interface to bind (default from LYRA_HOST or 0.0.0.0).")
@click.option("--port", type=int, help="Port to listen on (default from LYRA_PORT or 8000).")
@click.option(
    "--packages-dir",
    "-d",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory holding the package archives.",
)
@pass_context
def serve(
    ctx: Context,
    host: Optional[str],
    port: Optional[int],
    packages_dir: Optional[Path],
) -> None:
    """Run the HTTP server."""
    import uvicorn

    from .app import create_app

    config = ctx.load_config()
    if host:
        config.host = host
    if port:
        config.port = port
    if packages_dir:
        config.packages.directory = str(packages_dir)
    config.validate()

    echo_info(f"Listening on http://{config.host}:{config.port}")
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level=config.logging.level.lower(),
    )


@cli.command()
@click.option(
    "--packages-dir",
    "-d",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory holding the package archives.",
)
@click.option("--json", "as_json", is_flag=True, help="Print the index as JSON.")
@pass_context
def index(ctx: Context, packages_dir: Optional[Path], as_json: bool) -> None:
    """Build the package index and print it without starting a server."""
    config = ctx.load_config()
    directory = packages_dir or Path(config.packages.directory)
    configure_logging(config.logging)

    packages = build_index(directory, config.packages.extension)

    if as_json:
        document = {
            "count": len(packages),
            "packages": {
                name: [entry.to_dict() for entry in entries] for name, entries in packages.items()
            },
        }
        click.echo(json.dumps(document, indent=2, default=str))
        return

    if not packages:
        echo_info(f"No packages found in {directory}")
        return

    for name in sorted(packages):
        entries = packages[name]
        echo_info(f"{name} (latest {entries[0].version})")
        for entry in entries:
            echo_info(f"  {entry.version:<16} {entry.size:>12}  {entry.filename}")
    echo_success(f"{len(packages)} packages indexed")


@cli.command()
@click.option(
    "--url",
    default=DEFAULT_SERVER_URL,
    show_default=True,
    help="Base URL of the running server.",
)
def refresh(url: str) -> None:
    """Ask a running server to rescan its package directory."""
    try:
        response = httpx.post(f"{url.rstrip('/')}/api/refresh", timeout=300.0)
        response.raise_for_status()
    except httpx.ConnectError:
        echo_error(f"Connection failed. Is the server running at {url}?")
        sys.exit(1)
    except httpx.TimeoutException:
        echo_error("Refresh timed out.")
        sys.exit(1)
    except httpx.HTTPStatusError as e:
        echo_error(f"Server returned {e.response.status_code}")
        sys.exit(1)

    data = response.json()
    echo_success(f"{data['message']}: {data['count']} packages")


def main() -> None:
    """Main entry point for the CLI."""
    try:
        cli()
    except ConfigError as e:
        echo_error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
