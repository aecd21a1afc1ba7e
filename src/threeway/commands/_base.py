"""Click base classes that add an ``--examples`` flag.

``--help`` stays short; ``--examples`` prints ready-to-paste invocations
and exits.
"""

from __future__ import annotations

from typing import Any

import click


def _print_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    command = ctx.command
    click.echo(f"Examples for '{ctx.command_path}':\n")
    click.echo(getattr(command, "examples", "") or "")
    ctx.exit(0)


class _ExamplesMixin:
    """Stores ``examples`` text and registers the eager ``--examples`` option."""

    params: list[click.Parameter]

    def _init_examples(self, examples: str | None) -> None:
        self.examples = examples
        if not examples:
            return
        self.params.append(
            click.Option(
                ["--examples"],
                is_flag=True,
                expose_value=False,
                is_eager=True,
                callback=_print_examples,
                help="Show usage examples.",
            )
        )


class ThreewayCommand(_ExamplesMixin, click.Command):
    """Command accepting an ``examples=`` keyword."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class ThreewayGroup(_ExamplesMixin, click.Group):
    """Group accepting an ``examples=`` keyword; subcommands default to ThreewayCommand."""

    command_class = ThreewayCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)
