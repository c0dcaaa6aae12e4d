"""Tests for sandbox path layout."""

from pathlib import Path

import pytest

from provctl.domain.layout import SandboxLayout


class TestSandboxLayout:
    def test_fixed_locations(self, tmp_path: Path) -> None:
        layout = SandboxLayout(tmp_path)
        assert layout.server_xml == tmp_path / "conf" / "server.xml"
        assert layout.context_xml == tmp_path / "conf" / "context.xml"
        assert layout.deploy_dir == tmp_path / "deploy"
        assert layout.lib_dir == tmp_path / "lib"
        assert layout.webapps_root == tmp_path / "webapps" / "ROOT"
        assert layout.portal_properties == (
            tmp_path / "webapps" / "ROOT" / "WEB-INF" / "classes" / "portal-ext.properties"
        )

    def test_datasource_jar(self, tmp_path: Path) -> None:
        layout = SandboxLayout(tmp_path)
        assert layout.datasource_jar() == tmp_path / "lib" / "tomcat-jdbc.jar"
        assert layout.datasource_jar("other.jar") == tmp_path / "lib" / "other.jar"

    def test_artifact_path(self, tmp_path: Path) -> None:
        assert SandboxLayout(tmp_path).artifact_path("portal") == tmp_path / "deploy" / "portal.war"

    @pytest.mark.parametrize("name", ["", ".", "..", "a/b", "..\\x"])
    def test_artifact_name_must_stay_in_deploy(self, tmp_path: Path, name: str) -> None:
        with pytest.raises(ValueError, match="Invalid application name"):
            SandboxLayout(tmp_path).artifact_path(name)
