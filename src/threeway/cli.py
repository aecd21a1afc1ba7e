"""The ``threeway`` command: global flags and the subcommands they apply to."""

from __future__ import annotations

import click

from threeway import __version__
from threeway.commands import register_commands
from threeway.commands._base import ThreewayGroup
from threeway.commands._context import AppContext
from threeway.config.settings import ThreewaySettings


@click.group(
    cls=ThreewayGroup,
    invoke_without_command=True,
    examples="""\
  threeway compare '[0, 1]' '[0, 2]'
  threeway bench --depth 14
  threeway laws --samples 30""",
)
@click.version_option(version=__version__, prog_name="threeway")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only the answer, one line.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logs and telemetry spans.")
@click.option("--log-json", is_flag=True, help="Write stderr logs as JSON lines.")
@click.option(
    "-c", "--config", "config_path", default=None, help="Read settings from this threeway.toml."
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """threeway — three-way comparison toolkit."""
    settings = ThreewaySettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
