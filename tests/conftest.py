"""Shared pytest fixtures and test helpers for provctl tests."""

from __future__ import annotations

import io
import json
import os
import tarfile
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from provctl.config.settings import ProvSettings
from provctl.services.telemetry import _current_span, disable_telemetry

SERVER_XML = """\
<?xml version='1.0' encoding='utf-8'?>
<!-- Licensed to the Apache Software Foundation (ASF) -->
<Server port="8005" shutdown="SHUTDOWN">
  <Listener className="org.apache.catalina.core.AprLifecycleListener" SSLEngine="on" />
  <GlobalNamingResources>
    <Resource name="UserDatabase" auth="Container" />
  </GlobalNamingResources>
  <Service name="Catalina">
    <Connector port="8080" protocol="HTTP/1.1" />
    <Engine name="Catalina" defaultHost="localhost" />
  </Service>
</Server>
"""

CONTEXT_XML = """\
<?xml version='1.0' encoding='utf-8'?>
<!-- The contents of this file will be loaded for each web application -->
<Context>
    <WatchedResource>WEB-INF/web.xml</WatchedResource>
</Context>
"""

CREDENTIALS: dict[str, str] = {
    "jdbcUrl": "jdbc:mysql://h/db",
    "hostname": "h",
    "username": "u",
    "password": "p",
}


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host environment variables out of every test."""
    for name in ("VCAP_SERVICES", "VCAP_APPLICATION", "PROVCTL_CONFIG"):
        monkeypatch.delenv(name, raising=False)
    for name in list(os.environ):
        if name.startswith("PROVCTL_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    yield
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path) -> ProvSettings:
    """Default settings with no config file in reach."""
    return ProvSettings.from_cli(config_path=str(tmp_path / "absent.toml"))


@pytest.fixture
def conf_dir(tmp_path: Path) -> Path:
    """A ``conf/`` directory holding stock server.xml and context.xml."""
    conf = tmp_path / "sandbox" / "conf"
    conf.mkdir(parents=True)
    (conf / "server.xml").write_text(SERVER_XML, encoding="utf-8")
    (conf / "context.xml").write_text(CONTEXT_XML, encoding="utf-8")
    return conf


@pytest.fixture
def app_dir(tmp_path: Path) -> Path:
    """An exploded portal application with hidden files mixed in."""
    root = tmp_path / "app"
    write_tree(
        root,
        {
            "index.jsp": "<html/>",
            "WEB-INF/web.xml": "<web-app/>",
            "WEB-INF/classes/app.properties": "a=b\n",
            "html/js/deep/nested/main.js": "console.log(1);",
            ".git/config": "[core]\n",
            ".env": "SECRET=1\n",
            "html/.cache/blob": "x",
            "html/.DS_Store": "x",
        },
    )
    return root


@pytest.fixture
def runtime_archive(tmp_path: Path) -> Path:
    """A Tomcat-like tarball with a single top-level directory."""
    return build_runtime_archive(tmp_path / "apache-tomcat-7.0.50.tar.gz")


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_tree(root: Path, files: dict[str, str]) -> None:
    """Create *files* (relative path → content) under *root*."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def build_runtime_archive(
    path: Path,
    *,
    top: str = "apache-tomcat-7.0.50",
    extra: dict[str, str] | None = None,
    datasource_jar: bool = True,
) -> Path:
    """Write a gzipped tarball shaped like a Tomcat distribution."""
    files = {
        "conf/server.xml": SERVER_XML,
        "conf/context.xml": CONTEXT_XML,
        "bin/catalina.sh": "#!/bin/sh\n",
        "webapps/ROOT/index.jsp": "<html/>",
        **(extra or {}),
    }
    if datasource_jar:
        files["lib/tomcat-jdbc.jar"] = "jar"
    with tarfile.open(path, "w:gz") as tar:
        directory = tarfile.TarInfo(top)
        directory.type = tarfile.DIRTYPE
        directory.mode = 0o755
        tar.addfile(directory)
        for relative, content in files.items():
            payload = content.encode("utf-8")
            info = tarfile.TarInfo(f"{top}/{relative}")
            info.size = len(payload)
            info.mode = 0o755 if relative.endswith(".sh") else 0o644
            tar.addfile(info, io.BytesIO(payload))
    return path


def vcap_services(name: str = "lf-mysqldb-1", **credentials: Any) -> str:
    """A ``VCAP_SERVICES`` payload with one bound MySQL service."""
    creds = {**CREDENTIALS, **credentials}
    return json.dumps(
        {
            "p-mysql": [
                {"name": name, "label": "p-mysql", "tags": ["mysql"], "credentials": creds}
            ]
        }
    )
