"""
redditpaper init

This module defines the 'init' subcommand, which writes a config file holding the default
settings so there is something to edit.
"""

import click

from redditpaper.AppState import AppState
from redditpaper.config import CONFIG_FILE_NAME
from redditpaper.config import RedditpaperConfig
from redditpaper.config import get_config_dir
from redditpaper.cli_utils.console import confirm_success
from redditpaper.cli_utils.decorators import catch_errors


@click.command(name="init")
@click.option(
    "--force",
    is_flag=True,
    default=False,
    help="Overwrite an existing config file.",
)
@click.pass_obj
@catch_errors
def cli(state: AppState, force):
    """
    Write a config file with the default settings.
    """

    dest_file = state.config_path or get_config_dir() / CONFIG_FILE_NAME

    if dest_file.exists() and not force:
        raise click.ClickException(
            f"{dest_file} already exists. Use --force to overwrite it."
        )

    dest_file = RedditpaperConfig().generate_config_json(dest_file)
    confirm_success(f":floppy_disk-emoji: 'init' wrote default config to {dest_file}")
