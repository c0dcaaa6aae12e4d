"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``PROVCTL_*`` prefix
  3. TOML file    — ``provctl.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from provctl.config.discovery import read_config, resolve_config
from provctl.config.models import PortalConfig, ServiceConfig, TomcatConfig
from provctl.domain.properties import PoolSettings


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from the resolved ``provctl.toml``, if any."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = read_config(toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class ProvSettings(BaseSettings):
    """Unified settings for the provctl CLI.

    Stored on the :class:`AppContext` at the CLI root level and handed to
    every service.

    Attributes:
        config_path: The TOML file that was loaded, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "PROVCTL_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    tomcat: TomcatConfig = Field(default_factory=TomcatConfig)
    service: ServiceConfig = Field(default_factory=ServiceConfig)
    portal: PortalConfig = Field(default_factory=PortalConfig)
    pool: PoolSettings = Field(default_factory=PoolSettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        search_from: Path | None = None,
        **cli_flags: Any,
    ) -> ProvSettings:
        """Construct settings from CLI invocation.

        Uses the explicit *config_path* when given, otherwise discovers
        ``provctl.toml`` by walking up from *search_from* (default: cwd).
        """
        toml_path = resolve_config(config_path, search_from)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None
