"""Command: show the configuration schema a runtime version selects."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from provctl.commands._base import ProvCommand

if TYPE_CHECKING:
    from provctl.commands._context import AppContext


@click.command(
    cls=ProvCommand,
    examples="""\
  provctl gate 7.0.50
  provctl --json gate 8.0.32""",
)
@click.argument("version")
@click.pass_obj
def gate(app: AppContext, version: str) -> None:
    """Show whether VERSION uses the legacy or modern config schema."""
    from provctl.services.inspect import InspectService

    app.emit(InspectService(app.settings).gate(version))
