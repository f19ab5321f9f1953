"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Owns logging setup and result emission
(stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from scaffoldctl.output.formatters import OutputSettings, format_result, format_status

if TYPE_CHECKING:
    from scaffoldctl.config.settings import ScaffoldSettings
    from scaffoldctl.services.result import Notifier, ServiceResult, StatusMessage


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: ScaffoldSettings) -> None:
        self.settings = settings

        from scaffoldctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from scaffoldctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def notifier(self) -> Notifier | None:
        """Status-notice callback for services; None in JSON or quiet mode."""
        if self.settings.json_output or self.settings.quiet:
            return None

        def echo(message: StatusMessage) -> None:
            click.echo(format_status(message), err=True)

        return echo

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: stdout, normal return. Warnings go to stderr.
        * Failure: stderr, exit code 1. Warnings (e.g. a failed cleanup)
          are still shown, after the error.
        """
        settings = self.output_settings
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)

        # In JSON mode, warnings are already in the serialized payload.
        if not settings.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)

        if not result.ok:
            raise SystemExit(1)
