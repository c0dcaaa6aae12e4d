"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, provctl.toml only contains
overrides. A plain run needs no config file at all.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, Field, field_validator

from provctl.domain.bindings import DEFAULT_FILTER
from provctl.domain.layout import DATASOURCE_JAR
from provctl.domain.properties import DEFAULT_AUTO_DEPLOY_DIR, DEFAULT_DRIVER_CLASS
from provctl.infrastructure.xml_config import JASPER_LISTENER


class TomcatConfig(BaseModel):
    """[tomcat] section."""

    model_config = {"frozen": True}

    version: str | None = None
    listener_class: str = JASPER_LISTENER
    datasource_jar: str = DATASOURCE_JAR
    strip_components: int = Field(default=1, ge=0)


class ServiceConfig(BaseModel):
    """[service] section."""

    model_config = {"frozen": True}

    filter: str = DEFAULT_FILTER

    @field_validator("filter")
    @classmethod
    def _compiles(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as exc:
            msg = f"Invalid service filter {value!r}: {exc}"
            raise ValueError(msg) from exc
        return value


class PortalConfig(BaseModel):
    """[portal] section."""

    model_config = {"frozen": True}

    driver_class: str = DEFAULT_DRIVER_CLASS
    auto_deploy_dir: str = DEFAULT_AUTO_DEPLOY_DIR

