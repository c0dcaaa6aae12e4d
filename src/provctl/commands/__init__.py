"""Subcommand modules for provctl.

Provides register_commands() which uses deferred imports to keep
``provctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from provctl.commands.find_service import find_service
    from provctl.commands.gate import gate
    from provctl.commands.provision import provision

    cli.add_command(provision)
    cli.add_command(find_service)
    cli.add_command(gate)
