"""widgetcss CLI entry point: Click group with subcommands."""

import logging

import click

from widgetcss import __version__


@click.group()
@click.version_option(version=__version__, prog_name="widgetcss")
@click.option("-v", "--verbose", is_flag=True, help="Log cascade details to stderr.")
def cli(verbose: bool) -> None:
    """widgetcss - selector and cascade tooling for widget stylesheets."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# Import and register subcommands
from widgetcss.cli.validate import validate  # noqa: E402
from widgetcss.cli.inspect import inspect  # noqa: E402

cli.add_command(validate)
cli.add_command(inspect)
