"""
Link Normalizer

Converts raw reddit listing documents into Link records: one immutable record per link post,
with the file type parsed from the post url and the resolution parsed from a "[1920 x 1080]"
style tag in the post title.

Anything in a listing that doesn't look like a link post is skipped silently. Reddit mixes
other "kinds" into listings (comments t1, accounts t2, ...) and only t3 is a link.
"""

import re
from dataclasses import dataclass
from typing import NamedTuple, Optional

LISTING_KIND = "Listing"
LINK_KIND = "t3"

# basename and extension right before a query string, a fragment or the end of the url.
# the character class excludes "/" and "." so the match never spans path segments.
FILE_PATTERN = re.compile(r"([\w,\s-]+)\.(\w+)(\?|$|#)", re.IGNORECASE)

# e.g. "[1920 x 1080]", "[3840×2160]", "[2560 * 1440]"
RESOLUTION_PATTERN = re.compile(r"\[\s*(\d+)\s*[x×*]\s*(\d+)\s*\]", re.IGNORECASE)


class Resolution(NamedTuple):
    width: int
    height: int


@dataclass(frozen=True)
class Link:
    """A wallpaper candidate taken from one link post."""

    url: str
    subreddit: str
    permalink: str
    title: str
    author: str
    score: Optional[int]
    created_utc: float
    domain: str
    file_type: str
    resolution: Optional[Resolution] = None


def match_file(url: str) -> Optional[tuple[str, str]]:
    """
    Return the (basename, extension) pair of the file a url points to, e.g.
    "http://i.imgur.com/jEFSFKr.jpg?q=1" -> ("jEFSFKr", "jpg"). None if the url doesn't end
    in something that looks like a file name.
    """

    if not url:
        return None

    match = FILE_PATTERN.search(url)
    if match is None:
        return None

    return match.group(1), match.group(2)


def parse_type(url: str) -> str:
    """Return the lowercased file extension of url, or the empty string."""

    match = match_file(url)
    return match[1].lower() if match else ""


def parse_resolution(title: str) -> Optional[Resolution]:
    """
    Parse the first resolution tag out of a post title. Later tags are ignored even if they
    describe a larger image.
    """

    if not title:
        return None

    match = RESOLUTION_PATTERN.search(title)
    if match is None:
        return None

    return Resolution(int(match.group(1)), int(match.group(2)))


def make_link(data: dict) -> Link:
    url = data.get("url") or ""
    title = data.get("title") or ""

    return Link(
        url=url,
        subreddit=data.get("subreddit") or "",
        permalink=data.get("permalink") or "",
        title=title,
        author=data.get("author") or "",
        score=data.get("score"),
        created_utc=data.get("created_utc") or 0,
        domain=(data.get("domain") or "").lower(),
        file_type=parse_type(url),
        resolution=parse_resolution(title),
    )


def normalize(listing) -> list[Link]:
    """
    Return a Link for every link post in a decoded listing document. Documents that are not
    listings, or that have no children, give an empty list.
    """

    if not isinstance(listing, dict) or listing.get("kind") != LISTING_KIND:
        return []

    data = listing.get("data")
    children = data.get("children") if isinstance(data, dict) else None
    if not isinstance(children, list):
        return []

    links = []
    for child in children:
        if not isinstance(child, dict):
            continue

        kind = child.get("kind")
        if not isinstance(kind, str) or kind.lower() != LINK_KIND:
            continue

        if not isinstance(child.get("data"), dict):
            continue

        links.append(make_link(child["data"]))

    return links


def normalize_all(listings) -> list[Link]:
    """Normalize several listings and flatten the result, keeping listing order."""

    return [link for listing in listings for link in normalize(listing)]
