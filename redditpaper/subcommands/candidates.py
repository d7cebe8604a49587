"""
redditpaper candidates

This module defines the 'candidates' subcommand, which lists the links 'run' would choose from,
highest score first, without downloading anything.
"""

import click
from rich.table import Table

from redditpaper import pipeline
from redditpaper.config import RedditpaperConfig
from redditpaper.selector import accepts
from redditpaper.selector import is_downloaded
from redditpaper.cli_utils.console import console
from redditpaper.cli_utils.console import describe
from redditpaper.cli_utils.decorators import catch_errors
from redditpaper.cli_utils.decorators import require_config


def candidates_table(links, config: RedditpaperConfig, show_accepted: bool = False) -> Table:
    table = Table(show_lines=False)
    table.add_column("score", justify="right")
    table.add_column("subreddit")
    table.add_column("type")
    table.add_column("resolution")
    table.add_column("domain")
    table.add_column("saved", justify="center")
    if show_accepted:
        table.add_column("ok", justify="center")
    table.add_column("title", overflow="fold")

    for link in links:
        resolution = (
            f"{link.resolution.width}x{link.resolution.height}" if link.resolution else ""
        )
        row = [
            str(link.score if link.score is not None else ""),
            link.subreddit,
            link.file_type,
            resolution,
            link.domain,
            "✓" if is_downloaded(link, config.directory) else "",
        ]
        if show_accepted:
            row.append("✓" if accepts(link, config) else "")
        row.append(link.title)
        table.add_row(*row)

    return table


@click.command(name="candidates")
@click.option(
    "--limit",
    "-n",
    type=click.IntRange(min=1),
    default=10,
    show_default=True,
    help="Number of links to show.",
)
@click.option(
    "--all",
    "show_all",
    is_flag=True,
    default=False,
    help="Show every link in the listings, not only the ones that pass the filters.",
)
@catch_errors
@require_config
def cli(config: RedditpaperConfig, limit, show_all):
    """
    List the wallpapers 'run' would choose from, best first.
    """

    links = pipeline.collect_links(config)
    if not show_all:
        links = [link for link in links if accepts(link, config)]

    if not links:
        describe("No links match your config.")
        return

    # stable sort keeps listing order among equal scores, the same tie-break 'run' uses
    links = sorted(links, key=lambda link: link.score or 0, reverse=True)[:limit]
    console.print(candidates_table(links, config, show_accepted=show_all))
