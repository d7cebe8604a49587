"""
Pipeline orchestrator: fetch -> normalize -> filter -> select -> download -> set -> notify.

Every fatal error propagates to the caller unchanged. Only NotifyError is absorbed here,
since by the time a notification is shown the wallpaper has already been changed.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from redditpaper import image_handler
from redditpaper import notify_handler
from redditpaper import reddit_handler
from redditpaper import wallpaper_handler
from redditpaper.cli_utils.console import warn
from redditpaper.config import RedditpaperConfig
from redditpaper.links import Link
from redditpaper.links import normalize_all
from redditpaper.selector import NoCandidateError
from redditpaper.selector import filter_links
from redditpaper.selector import select_link

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Summary of a completed run."""

    link: Link
    file: Path
    wallpaper_set: bool = False
    notified: bool = False


def collect_links(config: RedditpaperConfig) -> list[Link]:
    """Fetch every configured listing and return all of their links, unfiltered."""

    listings = reddit_handler.fetch_listings(config)
    links = normalize_all(listings)
    logger.debug("normalized %d links from %d listings", len(links), len(listings))
    return links


def select_wallpaper(config: RedditpaperConfig) -> Link:
    """
    Return the winning link for config. Raise NoCandidateError when nothing qualifies.
    """

    links = filter_links(collect_links(config), config)
    logger.debug("%d links passed the filters", len(links))

    link: Optional[Link] = select_link(links, config)
    if link is None:
        raise NoCandidateError(
            f"No new wallpaper found in {', '.join('/r/' + s for s in config.subreddits)}."
        )

    logger.info("selected %s (%s points) from /r/%s", link.url, link.score, link.subreddit)
    return link


def run(
    config: RedditpaperConfig, dry_run: bool = False, notify: bool = True
) -> RunResult:
    """
    Select a wallpaper, download it and set it as the desktop background, then notify the user.
    dry_run stops after the download.
    """

    link = select_wallpaper(config)
    file = image_handler.download_image(link.url, config.directory)
    result = RunResult(link=link, file=file)

    if dry_run:
        return result

    wallpaper_handler.update_wallpaper(file)
    result.wallpaper_set = True

    if notify:
        try:
            notify_handler.notify(link, file)
            result.notified = True
        except notify_handler.NotifyError as error:
            warn(f"wallpaper was set but the notification failed: {error}")

    return result
