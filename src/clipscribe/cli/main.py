"""Root CLI group for ClipScribe."""

from __future__ import annotations

import click

from clipscribe import __version__


@click.group()
@click.version_option(version=__version__, prog_name="clipscribe")
def cli() -> None:
    """ClipScribe — extract key moments from your videos."""


# Import and register subcommands
from clipscribe.cli.init_cmd import init_cmd  # noqa: E402
from clipscribe.cli.run_cmd import run_cmd  # noqa: E402
from clipscribe.cli.settings_cmd import settings_cmd  # noqa: E402

cli.add_command(init_cmd, "init")
cli.add_command(run_cmd, "run")
cli.add_command(settings_cmd, "settings")
