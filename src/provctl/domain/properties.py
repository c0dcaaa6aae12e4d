"""Rendering of the portal ``portal-ext.properties`` database block.

Values are interpolated verbatim. Java properties treat ``\\``, line
breaks and leading whitespace specially; credentials containing them are
not escaped. :func:`unsafe_fields` reports line breaks so callers can warn.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from provctl.domain.errors import MissingCredentialField

REQUIRED_FIELDS = ("jdbcUrl", "hostname", "username", "password")

DEFAULT_DRIVER_CLASS = "com.mysql.jdbc.Driver"
DEFAULT_AUTO_DEPLOY_DIR = "${catalina.home}/deploy"


class DatabaseCredentials(BaseModel):
    """The four credential fields the portal needs from a bound database."""

    model_config = {"frozen": True}

    jdbc_url: str
    hostname: str
    username: str
    password: str

    @classmethod
    def from_mapping(cls, credentials: Mapping[str, Any]) -> DatabaseCredentials:
        """Build from a service's credentials mapping.

        Raises MissingCredentialField for the first absent required field.
        """
        for name in REQUIRED_FIELDS:
            if credentials.get(name) is None:
                raise MissingCredentialField(name)
        return cls(
            jdbc_url=str(credentials["jdbcUrl"]),
            hostname=str(credentials["hostname"]),
            username=str(credentials["username"]),
            password=str(credentials["password"]),
        )


class PoolSettings(BaseModel):
    """c3p0 connection pool tuning written into the properties file."""

    model_config = {"frozen": True}

    acquire_increment: int = 5
    connection_customizer_class_name: str = (
        "com.liferay.portal.dao.jdbc.pool.c3p0.PortalConnectionCustomizer"
    )
    idle_connection_test_period: int = 60
    max_idle_time: int = 3600
    max_pool_size: int = 20
    min_pool_size: int = 10
    num_helper_threads: int = 3


def _section(title: str) -> list[str]:
    return ["#", f"# {title}", "#"]


def render_portal_properties(
    credentials: DatabaseCredentials,
    pool: PoolSettings | None = None,
    *,
    driver_class: str = DEFAULT_DRIVER_CLASS,
    auto_deploy_dir: str = DEFAULT_AUTO_DEPLOY_DIR,
) -> str:
    """Render the fixed-schema properties text, newline terminated."""
    pool = pool or PoolSettings()
    lines = [
        *_section("MySQL"),
        f"jdbc.default.driverClassName={driver_class}",
        f"jdbc.default.url={credentials.jdbc_url}",
        f"jdbc.default.username={credentials.username}",
        f"jdbc.default.password={credentials.password}",
        *_section("Configuration Connextion Pool"),
        f"jdbc.default.acquireIncrement={pool.acquire_increment}",
        f"jdbc.default.connectionCustomizerClassName={pool.connection_customizer_class_name}",
        f"jdbc.default.idleConnectionTestPeriod={pool.idle_connection_test_period}",
        f"jdbc.default.maxIdleTime={pool.max_idle_time}",
        f"jdbc.default.maxPoolSize={pool.max_pool_size}",
        f"jdbc.default.minPoolSize={pool.min_pool_size}",
        f"jdbc.default.numHelperThreads={pool.num_helper_threads}",
        *_section("Configuration of the auto deploy folder"),
        f"auto.deploy.dest.dir={auto_deploy_dir}",
        f"auto.deploy.dir={auto_deploy_dir}",
        f"auto.deploy.deploy.dir={auto_deploy_dir}",
    ]
    return "\n".join(lines) + "\n"


def unsafe_fields(credentials: DatabaseCredentials) -> list[str]:
    """Names of emitted fields whose values contain a line break."""
    emitted = {
        "jdbcUrl": credentials.jdbc_url,
        "username": credentials.username,
        "password": credentials.password,
    }
    return [name for name, value in emitted.items() if "\n" in value or "\r" in value]
