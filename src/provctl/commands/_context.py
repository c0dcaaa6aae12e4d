"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Owns logging setup and result emission
(stdout/stderr routing and exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from provctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from provctl.config.settings import ProvSettings
    from provctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: ProvSettings) -> None:
        self.settings = settings

        from provctl.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )

        if settings.verbose:
            from provctl.services.telemetry import enable_telemetry

            enable_telemetry()

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: stdout, warnings on stderr (except in JSON mode, where
          they are part of the payload).
        * Failure: stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
