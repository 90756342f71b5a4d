"""Allow ``python -m gocoveralls``."""

from gocoveralls.cli.main import cli

cli()
