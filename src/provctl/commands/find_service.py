"""Command: show which bound service would configure the database."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from provctl.commands._base import ProvCommand

if TYPE_CHECKING:
    from provctl.commands._context import AppContext


@click.command(
    "find-service",
    cls=ProvCommand,
    examples="""\
  VCAP_SERVICES="$(cat vcap.json)" provctl find-service
  provctl find-service --services-file vcap.json
  provctl find-service --services-file vcap.json --filter 'mysql'""",
)
@click.option(
    "--services-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON service bindings (default: $VCAP_SERVICES).",
)
@click.option("--filter", "pattern", default=None, help="Regex matched against name/label/tags.")
@click.pass_obj
def find_service(app: AppContext, services_file: Path | None, pattern: str | None) -> None:
    """Report the service binding that matches the database filter."""
    from provctl.services._inputs import load_bindings
    from provctl.services.inspect import InspectService
    from provctl.services.result import ServiceResult

    try:
        bindings = load_bindings(services_file)
    except ValueError as exc:
        app.emit(ServiceResult.failure("find_service", "INVALID_INPUT", str(exc)))
        return
    app.emit(InspectService(app.settings).find_service(bindings, pattern))
