"""assetmin CLI entry point: Click group with subcommands."""

import logging

import click

from assetmin import __version__


@click.group()
@click.version_option(version=__version__, prog_name="assetmin")
@click.option("-v", "--verbose", is_flag=True, help="Log progress and size reports to stderr.")
def cli(verbose: bool) -> None:
    """assetmin - merge and minify CSS, JavaScript and markup."""
    if verbose:
        logging.basicConfig(
            level=logging.INFO, format="%(levelname)s %(name)s: %(message)s"
        )


# Import and register subcommands
from assetmin.cli.css import css  # noqa: E402
from assetmin.cli.js import js  # noqa: E402
from assetmin.cli.trim import trim  # noqa: E402

cli.add_command(css)
cli.add_command(js)
cli.add_command(trim)
