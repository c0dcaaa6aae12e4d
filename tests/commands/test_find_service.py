"""Tests for the find-service CLI command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from provctl.cli import cli
from tests.conftest import vcap_services


class TestFindServiceCommand:
    def test_from_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        services = tmp_path / "vcap.json"
        services.write_text(vcap_services())
        result = cli_runner.invoke(
            cli, ["--json", "find-service", "--services-file", str(services)]
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["data"]["service"] == "lf-mysqldb-1"
        assert "jdbc:mysql" not in result.output

    def test_from_env(self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VCAP_SERVICES", vcap_services())
        result = cli_runner.invoke(cli, ["find-service"])
        assert result.exit_code == 0
        assert "lf-mysqldb-1" in result.output

    def test_no_match_warns(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["find-service"])
        assert result.exit_code == 0
        assert "WARNING" in result.output

    def test_malformed_services_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        services = tmp_path / "vcap.json"
        services.write_text("{broken")
        result = cli_runner.invoke(cli, ["find-service", "--services-file", str(services)])
        assert result.exit_code == 1
        assert "not valid JSON" in result.output

    def test_credentials_not_an_object(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        services = tmp_path / "vcap.json"
        services.write_text('[{"name": "lf-mysqldb-1", "credentials": [1, 2]}]')
        result = cli_runner.invoke(cli, ["find-service", "--services-file", str(services)])
        assert result.exit_code == 1
        assert "must be an object" in result.output
        assert not isinstance(result.exception, TypeError)
