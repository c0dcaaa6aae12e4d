"""Command: provision a Tomcat sandbox for an exploded portal application."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from provctl.commands._base import ProvCommand

if TYPE_CHECKING:
    from provctl.commands._context import AppContext

_DIR = click.Path(exists=True, file_okay=False, path_type=Path)
_FILE = click.Path(exists=True, dir_okay=False, path_type=Path)


@click.command(
    cls=ProvCommand,
    examples="""\
  provctl provision ./app ./app/.tomcat --archive tomcat-7.0.50.tar.gz --tomcat-version 7.0.50
  provctl provision ./app ./sandbox --archive tomcat.tar.gz --services-file vcap.json
  provctl provision ./app ./sandbox --archive tomcat.tar.gz --resources ./overlay
  PROVCTL_TOMCAT__VERSION=8.0.32 provctl --json provision ./app ./sandbox --archive t.tar.gz""",
)
@click.argument("app_dir", type=_DIR)
@click.argument("sandbox", type=click.Path(file_okay=False, path_type=Path))
@click.option("--archive", required=True, type=_FILE, help="Runtime .tar.gz to expand.")
@click.option(
    "--tomcat-version",
    default=None,
    help="Resolved runtime version, e.g. 7.0.50 (default: [tomcat] version).",
)
@click.option(
    "--app-name",
    default=None,
    help="Archive name under deploy/ (default: $VCAP_APPLICATION name or APP_DIR name).",
)
@click.option(
    "--services-file",
    type=_FILE,
    default=None,
    help="JSON service bindings (default: $VCAP_SERVICES).",
)
@click.option(
    "--resources",
    "resources",
    multiple=True,
    type=_DIR,
    help="Directory copied over the sandbox after expansion (repeatable).",
)
@click.option(
    "--library",
    "libraries",
    multiple=True,
    type=_FILE,
    help="Jar linked into APP_DIR/WEB-INF/lib (repeatable).",
)
@click.pass_obj
def provision(
    app: AppContext,
    app_dir: Path,
    sandbox: Path,
    archive: Path,
    tomcat_version: str | None,
    app_name: str | None,
    services_file: Path | None,
    resources: tuple[Path, ...],
    libraries: tuple[Path, ...],
) -> None:
    """Expand the runtime into SANDBOX and configure it for APP_DIR."""
    from provctl.services._inputs import application_name, load_bindings
    from provctl.services.provision import ProvisionRequest, ProvisionService
    from provctl.services.result import ServiceResult

    version = tomcat_version or app.settings.tomcat.version
    if not version:
        raise click.UsageError("No runtime version: pass --tomcat-version or set [tomcat] version")

    try:
        bindings = load_bindings(services_file)
    except ValueError as exc:
        app.emit(ServiceResult.failure("provision", "INVALID_INPUT", str(exc), step="validate"))
        return

    request = ProvisionRequest(
        app_dir=app_dir,
        sandbox=sandbox,
        archive=archive,
        version=version,
        application_name=app_name or application_name(app_dir),
        bindings=bindings,
        resources=list(resources),
        libraries=list(libraries),
    )
    app.emit(ProvisionService(app.settings).provision(request))
