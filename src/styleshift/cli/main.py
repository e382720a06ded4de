"""styleshift CLI entry point: Click group with subcommands."""

import logging

import click

from styleshift import __version__


@click.group()
@click.version_option(version=__version__, prog_name="styleshift")
@click.option("--verbose", "-v", is_flag=True, help="Log engine activity to stderr.")
def cli(verbose: bool) -> None:
    """styleshift - animated transitions between style rules."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


# Import and register subcommands
from styleshift.cli.inspect import inspect  # noqa: E402
from styleshift.cli.simulate import simulate  # noqa: E402

cli.add_command(inspect)
cli.add_command(simulate)
