"""Per-invocation state handed to every subcommand.

The root group builds one :class:`AppContext` from the resolved settings.
Building it switches on logging and, under ``--verbose``, span collection.
Subcommands receive it with ``@click.pass_obj`` and finish by calling
:meth:`AppContext.emit`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from threeway.config.logging import configure_logging
from threeway.output.formatters import OutputSettings, format_result
from threeway.services.telemetry import enable_telemetry

if TYPE_CHECKING:
    from threeway.config.settings import ThreewaySettings
    from threeway.services.result import ServiceResult


class AppContext:
    """Settings for this run plus the one way results leave the process."""

    def __init__(self, settings: ThreewaySettings) -> None:
        self.settings = settings

        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )
        enable_telemetry(settings.verbose)

    def _output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def emit(self, result: ServiceResult, *, exit_code: int = 0) -> None:
        """Print *result* and end the command with the matching exit status.

        A successful result goes to stdout and exits with *exit_code* if
        that is non-zero; its warnings go to stderr unless the output is
        JSON, which already carries them.  A failed result goes to stderr
        and exits 1.
        """
        fmt = self._output_settings()
        text = format_result(result, settings=fmt)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)

        click.echo(text)
        if not fmt.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
        if exit_code:
            raise SystemExit(exit_code)
