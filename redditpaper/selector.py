"""
Candidate Filter and Selector

accepts() decides whether a single Link meets the criteria in the config. select_link() picks
the winner among the accepted links: the one with the highest score, earliest first on a tie.

In shuffle mode links whose image is already in the download directory are dropped before
picking, so every run moves on to a wallpaper that hasn't been used yet. The existence checks
hit the filesystem and run on a thread pool.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional

from redditpaper.config import RedditpaperConfig
from redditpaper.links import Link
from redditpaper.links import match_file

logger = logging.getLogger(__name__)

MAX_CHECK_WORKERS = 8


class NoCandidateError(Exception):
    """
    Raised when no link survives filtering and selection. Not a failure: there is simply
    nothing new to download.
    """

    pass


def accepts(link: Link, config: RedditpaperConfig) -> bool:
    """Return True if link passes the score, domain, type and resolution filters."""

    # score
    if link.score and link.score < config.min_score:
        return False

    # domains
    if config.domains and link.domain.lower() not in config.domains:
        return False

    # types
    if config.types and link.file_type not in config.types:
        return False

    # resolution
    minimum = config.min_resolution
    if minimum is not None:
        if link.resolution is None:
            return False
        if link.resolution.width < minimum.width or link.resolution.height < minimum.height:
            return False

    return True


def filter_links(links, config: RedditpaperConfig) -> list[Link]:
    return [link for link in links if accepts(link, config)]


def url_file_path(url: str, directory: Path) -> Optional[Path]:
    """
    Return the location an image url is downloaded to, directory/basename.extension. None if no
    file name can be derived from the url.
    """

    match = match_file(url)
    if match is None:
        return None

    basename, extension = match
    return Path(directory) / f"{basename}.{extension}"


def is_downloaded(link: Link, directory: Path) -> bool:
    """
    Check whether the image for link already exists in directory. Anything that goes wrong while
    checking counts as not downloaded.
    """

    try:
        path = url_file_path(link.url, directory)
        return path is not None and path.exists()
    except (OSError, ValueError, TypeError) as error:
        logger.debug("could not check %s: %s", link.url, error)
        return False


def not_downloaded(links, directory: Path) -> list[Link]:
    """Drop the links whose image already exists in directory, keeping order."""

    links = list(links)
    if not links:
        return []

    with ThreadPoolExecutor(max_workers=min(MAX_CHECK_WORKERS, len(links))) as executor:
        downloaded = list(executor.map(lambda link: is_downloaded(link, directory), links))

    return [link for link, exists in zip(links, downloaded) if not exists]


def best_link(links) -> Optional[Link]:
    """
    Return the link with the greatest score. A later link only wins with a strictly greater
    score; a missing score counts as zero.
    """

    best = None
    for link in links:
        if best is None or (link.score or 0) > (best.score or 0):
            best = link

    return best


def select_link(links, config: RedditpaperConfig) -> Optional[Link]:
    """
    Pick the winner among already-filtered links, or None if there is nothing to pick.
    """

    links = list(links)

    if config.shuffle:
        links = not_downloaded(links, config.directory)
        logger.debug("%d links left after dropping downloaded images", len(links))

    return best_link(links)
