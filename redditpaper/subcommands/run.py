"""
redditpaper run

This module defines the 'run' subcommand: fetch the configured subreddits, pick the best image,
download it, set it as the desktop wallpaper and show a notification. With --every the whole
thing repeats on an interval until interrupted.
"""

from time import sleep

import click

from redditpaper import pipeline
from redditpaper.config import RedditpaperConfig
from redditpaper.selector import NoCandidateError
from redditpaper.cli_utils.console import confirm_success
from redditpaper.cli_utils.console import describe
from redditpaper.cli_utils.decorators import catch_errors
from redditpaper.cli_utils.decorators import require_config


def run_once(config: RedditpaperConfig, dry_run: bool, notify: bool):
    describe(
        f":earth_asia-emoji: 'run' reading {', '.join('/r/' + s for s in config.subreddits)} ..."
    )

    try:
        result = pipeline.run(config, dry_run=dry_run, notify=notify)
    except NoCandidateError as error:
        describe(f":zzz-emoji: {error}")
        return None

    link = result.link
    confirm_success(
        f":floppy_disk-emoji: 'run' saved '{result.file.name}' from /r/{link.subreddit} "
        f"({link.score} points) to {result.file.parent}"
    )

    if dry_run:
        describe("dry run, not setting wallpaper.")
    elif result.wallpaper_set:
        confirm_success(f":white_check_mark-emoji: 'run' updated wallpaper to {result.file}")

    return result


@click.command(name="run")
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Download the selected image but don't set it as wallpaper.",
)
@click.option(
    "--notify/--no-notify",
    default=True,
    show_default=True,
    help="Show a desktop notification for the new wallpaper.",
)
@click.option(
    "--every",
    "interval",
    type=click.IntRange(min=1),
    help="Repeat every INTERVAL seconds instead of running once.",
)
@catch_errors
@require_config
def cli(config: RedditpaperConfig, dry_run, notify, interval):
    """
    Set the best image from your subreddits as desktop wallpaper.
    """

    while True:
        run_once(config, dry_run=dry_run, notify=notify)

        if not interval:
            break

        describe(f"Waiting {interval}s for next wallpaper...")
        sleep(interval)
