"""Fixed relative locations inside a provisioned Tomcat sandbox."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DATASOURCE_JAR = "tomcat-jdbc.jar"
PORTAL_PROPERTIES = "portal-ext.properties"


@dataclass(frozen=True)
class SandboxLayout:
    """Paths derived from a sandbox root.

    The sandbox is owned exclusively by the run that creates it.
    """

    root: Path

    @property
    def conf_dir(self) -> Path:
        return self.root / "conf"

    @property
    def server_xml(self) -> Path:
        return self.conf_dir / "server.xml"

    @property
    def context_xml(self) -> Path:
        return self.conf_dir / "context.xml"

    @property
    def lib_dir(self) -> Path:
        return self.root / "lib"

    @property
    def deploy_dir(self) -> Path:
        return self.root / "deploy"

    @property
    def webapps_root(self) -> Path:
        return self.root / "webapps" / "ROOT"

    @property
    def portal_properties(self) -> Path:
        return self.webapps_root / "WEB-INF" / "classes" / PORTAL_PROPERTIES

    def datasource_jar(self, name: str = DATASOURCE_JAR) -> Path:
        return self.lib_dir / name

    def artifact_path(self, application_name: str) -> Path:
        """Return ``deploy/<application_name>.war``.

        Raises ValueError when the name would leave the deploy directory.
        """
        if not application_name or "/" in application_name or "\\" in application_name:
            msg = f"Invalid application name: {application_name!r}"
            raise ValueError(msg)
        if application_name in (".", ".."):
            msg = f"Invalid application name: {application_name!r}"
            raise ValueError(msg)
        return self.deploy_dir / f"{application_name}.war"
