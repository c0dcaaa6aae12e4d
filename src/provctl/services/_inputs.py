"""Resolution of host-provided inputs: bindings and application name.

Cloud Foundry hands these over as ``VCAP_SERVICES`` and
``VCAP_APPLICATION`` JSON environment variables. An explicit services file
takes priority over the environment.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path

from provctl.domain.bindings import ServiceBinding, parse_services

SERVICES_ENV_VAR = "VCAP_SERVICES"
APPLICATION_ENV_VAR = "VCAP_APPLICATION"


def load_bindings(
    services_file: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> list[ServiceBinding]:
    """Read bindings from *services_file*, else ``VCAP_SERVICES``.

    Raises ValueError when the chosen source is malformed.
    """
    if services_file is not None:
        try:
            raw = services_file.read_text(encoding="utf-8")
        except OSError as exc:
            msg = f"Cannot read services file {services_file}: {exc}"
            raise ValueError(msg) from exc
        return parse_services(raw)

    env = os.environ if environ is None else environ
    return parse_services(env.get(SERVICES_ENV_VAR))


def application_name(app_dir: Path, environ: Mapping[str, str] | None = None) -> str:
    """``application_name`` from ``VCAP_APPLICATION``, else the directory name."""
    env = os.environ if environ is None else environ
    raw = env.get(APPLICATION_ENV_VAR)
    if raw:
        try:
            details = json.loads(raw)
        except json.JSONDecodeError:
            details = None
        if isinstance(details, dict) and details.get("application_name"):
            return str(details["application_name"])
    return app_dir.resolve().name
