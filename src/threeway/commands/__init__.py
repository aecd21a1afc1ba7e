"""Subcommand modules for threeway.

Provides register_commands() which uses deferred imports to keep
``threeway --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from threeway.commands.bench import bench
    from threeway.commands.compare import compare
    from threeway.commands.laws import laws

    cli.add_command(bench)
    cli.add_command(laws)
    cli.add_command(compare)
