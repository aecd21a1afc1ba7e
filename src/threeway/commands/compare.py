"""Command: classify two JSON values with one comparison."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from threeway.commands._base import ThreewayCommand

if TYPE_CHECKING:
    from threeway.commands._context import AppContext


@click.command(
    cls=ThreewayCommand,
    examples="""\
  threeway compare 1 2
  threeway compare '"abc"' '"abd"'
  threeway compare '[[0, 0], [0, 1]]' '[[0, 0], [0, 0]]'
  threeway --json compare '[1, 2]' '[1, 2]'""",
)
@click.argument("lhs")
@click.argument("rhs")
@click.pass_obj
def compare(app: AppContext, lhs: str, rhs: str) -> None:
    """Compare LHS with RHS (JSON; two-element lists nest as pairs)."""
    from threeway.services.compare import CompareService

    app.emit(CompareService(app.settings).compare(lhs, rhs))
