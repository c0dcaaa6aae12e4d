"""Tests for credential validation and properties rendering."""

import pytest

from provctl.domain.errors import MissingCredentialField
from provctl.domain.properties import (
    REQUIRED_FIELDS,
    DatabaseCredentials,
    PoolSettings,
    render_portal_properties,
    unsafe_fields,
)
from tests.conftest import CREDENTIALS

EXPECTED = """\
#
# MySQL
#
jdbc.default.driverClassName=com.mysql.jdbc.Driver
jdbc.default.url=jdbc:mysql://h/db
jdbc.default.username=u
jdbc.default.password=p
#
# Configuration Connextion Pool
#
jdbc.default.acquireIncrement=5
jdbc.default.connectionCustomizerClassName=com.liferay.portal.dao.jdbc.pool.c3p0.PortalConnectionCustomizer
jdbc.default.idleConnectionTestPeriod=60
jdbc.default.maxIdleTime=3600
jdbc.default.maxPoolSize=20
jdbc.default.minPoolSize=10
jdbc.default.numHelperThreads=3
#
# Configuration of the auto deploy folder
#
auto.deploy.dest.dir=${catalina.home}/deploy
auto.deploy.dir=${catalina.home}/deploy
auto.deploy.deploy.dir=${catalina.home}/deploy
"""


class TestDatabaseCredentials:
    def test_from_mapping(self) -> None:
        creds = DatabaseCredentials.from_mapping(CREDENTIALS)
        assert creds.jdbc_url == "jdbc:mysql://h/db"
        assert creds.hostname == "h"
        assert creds.username == "u"
        assert creds.password == "p"

    @pytest.mark.parametrize("missing", REQUIRED_FIELDS)
    def test_each_field_required(self, missing: str) -> None:
        partial = {k: v for k, v in CREDENTIALS.items() if k != missing}
        with pytest.raises(MissingCredentialField) as excinfo:
            DatabaseCredentials.from_mapping(partial)
        assert excinfo.value.field == missing
        assert excinfo.value.code == "MISSING_CREDENTIAL"

    def test_extra_keys_ignored(self) -> None:
        creds = DatabaseCredentials.from_mapping({**CREDENTIALS, "port": 3306})
        assert creds.username == "u"

    def test_non_string_values_coerced(self) -> None:
        creds = DatabaseCredentials.from_mapping({**CREDENTIALS, "password": 1234})
        assert creds.password == "1234"


class TestRenderPortalProperties:
    def test_fixed_layout(self) -> None:
        text = render_portal_properties(DatabaseCredentials.from_mapping(CREDENTIALS))
        assert text == EXPECTED

    def test_hostname_not_emitted(self) -> None:
        creds = DatabaseCredentials.from_mapping({**CREDENTIALS, "hostname": "db-host-xyz"})
        assert "db-host-xyz" not in render_portal_properties(creds)

    def test_pool_overrides(self) -> None:
        creds = DatabaseCredentials.from_mapping(CREDENTIALS)
        text = render_portal_properties(creds, PoolSettings(max_pool_size=50, min_pool_size=5))
        assert "jdbc.default.maxPoolSize=50\n" in text
        assert "jdbc.default.minPoolSize=5\n" in text
        assert "jdbc.default.acquireIncrement=5\n" in text

    def test_driver_and_deploy_dir(self) -> None:
        creds = DatabaseCredentials.from_mapping(CREDENTIALS)
        text = render_portal_properties(
            creds, driver_class="org.mariadb.jdbc.Driver", auto_deploy_dir="/srv/deploy"
        )
        assert "jdbc.default.driverClassName=org.mariadb.jdbc.Driver\n" in text
        assert text.count("=/srv/deploy\n") == 3

    def test_values_written_verbatim(self) -> None:
        creds = DatabaseCredentials.from_mapping({**CREDENTIALS, "password": "a=b#c"})
        assert "jdbc.default.password=a=b#c\n" in render_portal_properties(creds)


class TestUnsafeFields:
    def test_clean_credentials(self) -> None:
        assert unsafe_fields(DatabaseCredentials.from_mapping(CREDENTIALS)) == []

    def test_line_breaks_reported(self) -> None:
        creds = DatabaseCredentials.from_mapping(
            {**CREDENTIALS, "password": "p\nx=1", "username": "u\r"}
        )
        assert unsafe_fields(creds) == ["username", "password"]
