"""Allow ``python -m threeway``."""

from threeway.cli import cli

cli()
