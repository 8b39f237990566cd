# SPDX-License-Identifier: MIT
"""Tests for the lyra-server command line."""

import json
from pathlib import Path

import httpx
import pytest
from click.testing import CliRunner
from loguru import logger

from lyra_server import cli as cli_module
from lyra_server.cli import cli
from lyra_server.config import ConfigError
from lyra_server.log import _sink_ids


@pytest.fixture
def runner(monkeypatch: pytest.MonkeyPatch) -> CliRunner:
    monkeypatch.setenv("LYRA_LOG_LEVEL", "ERROR")
    monkeypatch.delenv("LYRA_STATS_BACKEND", raising=False)
    yield CliRunner()
    # Sinks bound to the runner's captured stderr are closed after invoke
    while _sink_ids:
        logger.remove(_sink_ids.pop())


class TestIndexCommand:
    """Tests for the index command."""

    def test_json_output(self, runner: CliRunner, sample_packages_dir: Path):
        result = runner.invoke(cli, ["index", "--json", "-d", str(sample_packages_dir)])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["count"] == 3
        assert [e["version"] for e in data["packages"]["foo"]] == ["2.1.0", "2.0.5", "1.0.0"]
        assert data["packages"]["bar"][0]["filename"] == "bar-0.1.0-x86_64.tar.gz"

    def test_listing(self, runner: CliRunner, sample_packages_dir: Path):
        result = runner.invoke(cli, ["index", "-d", str(sample_packages_dir)])

        assert result.exit_code == 0, result.output
        assert "foo (latest 2.1.0)" in result.stdout
        assert "3 packages indexed" in result.stdout

    def test_empty_directory(self, runner: CliRunner, packages_dir: Path):
        result = runner.invoke(cli, ["index", "-d", str(packages_dir)])

        assert result.exit_code == 0, result.output
        assert "No packages found" in result.stdout


class TestRefreshCommand:
    """Tests for the refresh command."""

    def test_refresh(self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch):
        calls = []

        def fake_post(url: str, **kwargs) -> httpx.Response:
            calls.append(url)
            return httpx.Response(
                200,
                json={"message": "Package index refreshed", "count": 4},
                request=httpx.Request("POST", url),
            )

        monkeypatch.setattr(cli_module.httpx, "post", fake_post)

        result = runner.invoke(cli, ["refresh", "--url", "http://example.test/"])

        assert result.exit_code == 0, result.output
        assert calls == ["http://example.test/api/refresh"]
        assert "Package index refreshed: 4 packages" in result.stdout

    def test_server_error(self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch):
        def fake_post(url: str, **kwargs) -> httpx.Response:
            return httpx.Response(500, request=httpx.Request("POST", url))

        monkeypatch.setattr(cli_module.httpx, "post", fake_post)

        result = runner.invoke(cli, ["refresh"])

        assert result.exit_code == 1

    def test_connection_failed(self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch):
        def fake_post(url: str, **kwargs) -> httpx.Response:
            raise httpx.ConnectError("refused", request=httpx.Request("POST", url))

        monkeypatch.setattr(cli_module.httpx, "post", fake_post)

        result = runner.invoke(cli, ["refresh"])

        assert result.exit_code == 1


def test_unknown_log_level_is_a_config_error(
    runner: CliRunner, monkeypatch: pytest.MonkeyPatch, packages_dir: Path
):
    monkeypatch.setenv("LYRA_LOG_LEVEL", "loud")

    result = runner.invoke(cli, ["index", "-d", str(packages_dir)])

    assert result.exit_code != 0
    assert isinstance(result.exception, ConfigError)


def test_main_reports_config_error(monkeypatch: pytest.MonkeyPatch, capsys):
    monkeypatch.setenv("LYRA_LOG_LEVEL", "loud")
    monkeypatch.setattr("sys.argv", ["lyra-server", "index"])

    with pytest.raises(SystemExit) as exc_info:
        cli_module.main()

    assert exc_info.value.code == 1
    assert "Unknown log level" in capsys.readouterr().err
