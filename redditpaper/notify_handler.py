"""
Desktop Notification Handler

Shows a notification naming the post the new wallpaper came from:

    <post title>
    /r/wallpaper 5123 points, 3 days ago by someone

On Linux this goes through notify-send (libnotify). When clicks are handled the notification
gets a default action and notify-send waits for it; clicking opens the reddit post in the
browser. macOS notifications are posted with osascript and have no click action.

A failed notification is reported but never undoes the wallpaper change.
"""

import logging
import subprocess
import sys
import time
from pathlib import Path

import click

from redditpaper.links import Link
from redditpaper.wallpaper_handler import quote_applescript

logger = logging.getLogger(__name__)

APP_NAME = "redditpaper"
DEFAULT_ACTION = "default"

MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR


class NotifyError(Exception):
    """
    Raised when a desktop notification can't be shown.
    """

    pass


def relative_time(created_utc: float, now: float = None) -> str:
    """
    Describe a unix timestamp relative to now, e.g. "a few seconds ago", "3 hours ago",
    "a month ago". Thresholds follow moment.js fromNow().
    """

    if now is None:
        now = time.time()

    seconds = abs(now - created_utc)
    future = created_utc > now

    if seconds < 45:
        text = "a few seconds"
    elif seconds < 90:
        text = "a minute"
    elif seconds < 45 * MINUTE:
        text = f"{round(seconds / MINUTE)} minutes"
    elif seconds < 90 * MINUTE:
        text = "an hour"
    elif seconds < 22 * HOUR:
        text = f"{round(seconds / HOUR)} hours"
    elif seconds < 36 * HOUR:
        text = "a day"
    elif seconds < 26 * DAY:
        text = f"{round(seconds / DAY)} days"
    elif seconds < 45 * DAY:
        text = "a month"
    elif seconds < 320 * DAY:
        text = f"{round(seconds / (30.4 * DAY))} months"
    elif seconds < 548 * DAY:
        text = "a year"
    else:
        text = f"{round(seconds / (365.25 * DAY))} years"

    return f"in {text}" if future else f"{text} ago"


def post_url(link: Link) -> str:
    return f"https://reddit.com{link.permalink}"


def build_message(link: Link, now: float = None) -> str:
    return (
        f"/r/{link.subreddit} {link.score or 0} points, "
        f"{relative_time(link.created_utc, now)} by {link.author}"
    )


def _notify_linux(link: Link, icon: Path, open_on_click: bool) -> None:
    command = [
        "notify-send",
        f"--app-name={APP_NAME}",
        f"--icon={icon}",
    ]

    if open_on_click:
        command += [f"--action={DEFAULT_ACTION}=Open post", "--wait"]

    command += [link.title or f"/r/{link.subreddit}", build_message(link)]

    try:
        result = subprocess.run(
            command,
            check=True,
            text=True,
            stdin=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            stdout=subprocess.PIPE,
        )
    except (subprocess.CalledProcessError, OSError) as error:
        raise NotifyError(f"Could not show notification: {error}") from error

    # notify-send prints the name of the action that was invoked, if any
    if open_on_click and result.stdout.strip() == DEFAULT_ACTION:
        logger.debug("notification clicked, opening %s", post_url(link))
        click.launch(post_url(link))


def _notify_macos(link: Link) -> None:
    script = (
        f"display notification {quote_applescript(build_message(link))} "
        f"with title {quote_applescript(link.title)} "
        f"subtitle {quote_applescript(link.subreddit)}"
    )

    try:
        subprocess.run(
            ["osascript", "-e", script],
            check=True,
            stdin=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            stdout=subprocess.PIPE,
        )
    except (subprocess.CalledProcessError, OSError) as error:
        raise NotifyError(f"Could not show notification: {error}") from error


def notify(link: Link, file: Path, open_on_click: bool = True) -> None:
    """
    Show a desktop notification for the winning link, using the downloaded file as its icon.
    With open_on_click the call blocks until the notification is dismissed or clicked.
    """

    if sys.platform.startswith("linux"):
        _notify_linux(link, Path(file), open_on_click)
    elif sys.platform == "darwin":
        _notify_macos(link)
    else:
        raise NotifyError(f"Notifications are not supported on {sys.platform}.")
