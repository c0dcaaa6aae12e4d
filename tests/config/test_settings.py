"""Tests for ProvSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from provctl.config.settings import ProvSettings


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = ProvSettings.from_cli(search_from=tmp_path)
        assert settings.json_output is False
        assert settings.tomcat.version is None
        assert settings.tomcat.strip_components == 1
        assert settings.tomcat.listener_class == "org.apache.catalina.core.JasperListener"
        assert settings.service.filter == "lf-mysqldb"
        assert settings.pool.max_pool_size == 20
        assert settings.portal.auto_deploy_dir == "${catalina.home}/deploy"

    def test_frozen(self, settings: ProvSettings) -> None:
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_discovered_by_walk_up(self, tmp_path: Path) -> None:
        (tmp_path / "provctl.toml").write_text(
            '[tomcat]\nversion = "8.0.32"\n[pool]\nmax_pool_size = 40\n'
        )
        child = tmp_path / "app" / "WEB-INF"
        child.mkdir(parents=True)
        settings = ProvSettings.from_cli(search_from=child)
        assert settings.tomcat.version == "8.0.32"
        assert settings.pool.max_pool_size == 40
        assert settings.pool.min_pool_size == 10
        assert settings.config_path == tmp_path / "provctl.toml"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom.toml"
        custom.write_text('[service]\nfilter = "mysql"\n')
        settings = ProvSettings.from_cli(config_path=str(custom))
        assert settings.service.filter == "mysql"

    def test_invalid_toml(self, tmp_path: Path) -> None:
        custom = tmp_path / "bad.toml"
        custom.write_text("[tomcat\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            ProvSettings.from_cli(config_path=str(custom))

    def test_invalid_filter_rejected(self, tmp_path: Path) -> None:
        custom = tmp_path / "bad.toml"
        custom.write_text('[service]\nfilter = "("\n')
        with pytest.raises(ValueError, match="Invalid service filter"):
            ProvSettings.from_cli(config_path=str(custom))


class TestPriority:
    def test_cli_flags_override_toml(self, tmp_path: Path) -> None:
        custom = tmp_path / "c.toml"
        custom.write_text("quiet = true\n")
        settings = ProvSettings.from_cli(config_path=str(custom), quiet=False)
        assert settings.quiet is False

    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        custom = tmp_path / "c.toml"
        custom.write_text('[tomcat]\nversion = "7.0.50"\n')
        monkeypatch.setenv("PROVCTL_TOMCAT__VERSION", "8.5.1")
        settings = ProvSettings.from_cli(config_path=str(custom))
        assert settings.tomcat.version == "8.5.1"

    def test_nested_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PROVCTL_POOL__NUM_HELPER_THREADS", "6")
        settings = ProvSettings.from_cli(search_from=tmp_path)
        assert settings.pool.num_helper_threads == 6
