"""
redditpaper

Set your desktop wallpaper to the best image posted to your favorite subreddits.

This module defines the entry point to the redditpaper CLI: a 'cli' command group that collects
the global options and stores them on the click context for the subcommands. Subcommands live in
the subcommands directory and are attached by main().
"""

from pathlib import Path

import click

from redditpaper.AppState import AppState
from redditpaper.cli_utils.console import setup_logging
from redditpaper.cli_utils.console import set_quiet
from redditpaper.cli_utils.utils import attach_commands
from redditpaper.cli_utils.utils import import_commands


@click.group()
@click.pass_context
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    help="Read configuration from this json file instead of ~/.reddit-wallpaper/config.json",
)
@click.option(
    "--verbose",
    "verbosity",
    flag_value="verbose",
    help="Print debug logging to the terminal.",
)
@click.option(
    "--quiet",
    "verbosity",
    flag_value="quiet",
    help="Silence all output printed to the terminal.",
)
@click.version_option(package_name="redditpaper")
def cli(ctx: click.Context, config_path, verbosity):
    """
    redditpaper

    Pick the best wallpaper posted to a set of subreddits and set it as your desktop background.


    ====================
    Quickstart
    ====================

    Write a default config to ~/.reddit-wallpaper/config.json:

        $ redditpaper init

    Change your wallpaper to the top image of the month:

        $ redditpaper run

    Change it every hour:

        $ redditpaper run --every 3600

    See what would be picked from:

        $ redditpaper candidates


    ====================
    Configuration
    ====================

    config.json holds the subreddits to read, the listing sort and time window ("from"),
    the minimum score, allowed domains and file types, the minimum resolution, the
    download directory and whether to skip images that were already downloaded ("shuffle").
    Any field left out falls back to its default.
    """

    verbosity = verbosity or "normal"
    set_quiet(verbosity == "quiet")
    setup_logging(verbosity)

    ctx.obj = AppState(config_path=config_path, verbosity=verbosity)


def main():

    commands = import_commands()
    attach_commands(cli, commands)
    cli()


if __name__ == "__main__":
    main()
