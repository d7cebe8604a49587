"""
redditpaper console utilities

This module provides application-wide access to Rich Console objects for writing to stdout
and stderr, and configures the "redditpaper" logger to print through Rich as well.
"""

import logging
from io import StringIO

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

redditpaper_theme = Theme(
    {"warning": "orange_red1", "fail": "bold red", "confirm": "green", "describe": ""}
)

console = Console(theme=redditpaper_theme)
error_console = Console(theme=redditpaper_theme, stderr=True)


"""
Formatting helpers
"""


def warn(msg: str):
    """
    Format msg and print to stderr.
    """

    error_console.print(
        f":exclamation_mark-emoji: [bold]warning: [/] {msg}", style="warning"
    )


def describe(msg: str, **kwargs):
    """
    Format descriptive msg and print to stdout.
    """

    console.print(f"{msg}", style="describe", **kwargs)


def confirm_success(msg: str, **kwargs):
    """
    Format confirmation msg and print to stdout. Accept any additional kwargs that console.print from
    rich module exposes.
    """

    console.print(f"{msg}", style="confirm", **kwargs)


def fail(msg: str):
    """
    Format failure msg and print to stderr.
    """

    error_console.print(f":x-emoji: failed. {msg}", style="fail")


def set_quiet(quiet: bool):
    """
    Send everything printed through the consoles to a junk stream, or back to stdout and stderr.
    """

    console.file = StringIO() if quiet else None
    error_console.file = StringIO() if quiet else None


def setup_logging(verbosity: str = "normal") -> logging.Logger:
    """
    Attach a RichHandler to the redditpaper logger. "verbose" logs debug messages, "normal" only
    warnings and errors, "quiet" nothing at all.
    """

    levels = {
        "verbose": logging.DEBUG,
        "normal": logging.WARNING,
        "quiet": logging.CRITICAL + 1,
    }

    logger = logging.getLogger("redditpaper")
    logger.setLevel(levels.get(verbosity, logging.WARNING))

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(console=error_console, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)

    return logger
