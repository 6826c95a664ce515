"""Allow `python -m pvemcp`."""

from pvemcp.cli import cli

cli()
