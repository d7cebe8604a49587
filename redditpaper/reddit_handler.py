"""
Reddit Listing Handler

This module is a wrapper around the public, unauthenticated reddit json endpoints. Appending
".json" to a subreddit listing url returns the listing as a json document, e.g.

    https://reddit.com/r/wallpaper/top.json?t=month

The "t" query parameter is the time window and only matters for the "top" and "controversial"
sorts; reddit ignores it otherwise.

Listings for every configured subreddit are fetched at the same time on a thread pool. Fetches
are independent of each other, but if any one of them fails the whole run fails: there is no
partial result and no retry.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

import requests

from redditpaper.config import RedditpaperConfig

logger = logging.getLogger(__name__)

BASE_URL = "https://reddit.com"

# reddit throttles the default python-requests user agent aggressively
USER_AGENT = "redditpaper/0.1 (desktop wallpaper fetcher)"

REQUEST_TIMEOUT = 30  # seconds


class FetchError(Exception):
    """
    Raised when a subreddit listing can't be fetched or its body isn't json.
    """

    pass


def listing_url(subreddit: str, sort: str, time_filter: str) -> str:
    return f"{BASE_URL}/r/{subreddit}/{sort}.json?t={time_filter}"


def fetch_listing(subreddit: str, sort: str, time_filter: str) -> dict:
    """
    Fetch one subreddit listing and return the decoded json document. Raise FetchError if the
    request fails, the server answers with an error status or the body isn't json.
    """

    url = listing_url(subreddit, sort, time_filter)
    logger.debug("fetching %s", url)

    try:
        r = requests.get(
            url, headers={"User-Agent": USER_AGENT}, timeout=REQUEST_TIMEOUT
        )
    except requests.exceptions.RequestException as error:
        raise FetchError(f"Could not fetch /r/{subreddit}: {error}") from error

    try:
        r.raise_for_status()
    except requests.exceptions.HTTPError as error:
        raise FetchError(
            f"Could not fetch /r/{subreddit}: {url} answered with status code {r.status_code}"
        ) from error

    # requests' JSONDecodeError is a ValueError on every supported version
    try:
        return r.json()
    except ValueError as error:
        raise FetchError(f"/r/{subreddit} did not return json: {error}") from error


def fetch_listings(config: RedditpaperConfig) -> list:
    """
    Fetch the listings of every subreddit in config concurrently. The result keeps the order of
    config.subreddits. The first failure raises FetchError.
    """

    subreddits = list(config.subreddits)
    if not subreddits:
        return []

    def fetch(subreddit):
        return fetch_listing(subreddit, config.sort, config.time_filter)

    with ThreadPoolExecutor(max_workers=len(subreddits)) as executor:
        listings = list(executor.map(fetch, subreddits))

    logger.debug("fetched %d listings", len(listings))
    return listings
