"""
Desktop Wallpaper Handler

This module updates the desktop background. On GNOME it drops into the gsettings CLI and writes
the picture-uri keys of the org.gnome.desktop.background schema; more information on this
schema can be found at:
https://github.com/GNOME/gsettings-desktop-schemas/blob/master/schemas/org.gnome.desktop.background.gschema.xml.in

macOS is handled through osascript and System Events, Windows through the
SystemParametersInfoW call in user32.
"""

import logging
import subprocess
import sys
from collections import OrderedDict
from pathlib import Path

from redditpaper.image_handler import InvalidImageError
from redditpaper.image_handler import validate_image

logger = logging.getLogger(__name__)

GNOME_SCHEMA = "org.gnome.desktop.background"

# picture-uri-dark is what GNOME 42+ shows when the dark style is on
GNOME_KEYS = ("picture-uri", "picture-uri-dark")

SPI_SETDESKWALLPAPER = 20
SPIF_UPDATEINIFILE_SENDCHANGE = 3


class WallpaperSetError(Exception):
    """
    Raised when an attempt to update the desktop background fails.
    """

    pass


def _run(command: list, description: str) -> subprocess.CompletedProcess:
    """
    Run command and raise WallpaperSetError if it can't be started or returns a non-zero exit status.
    """

    logger.debug("running %s", " ".join(command))
    try:
        return subprocess.run(
            command,
            check=True,
            text=True,
            stdin=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            stdout=subprocess.PIPE,
        )
    except (subprocess.CalledProcessError, OSError) as error:
        raise WallpaperSetError(f"Could not {description}: {error}") from error


def _set_gnome(wallpaper_location: Path) -> None:
    for key in GNOME_KEYS:
        # ordered dict is used here for clarity and to preserve sequence for command arguments
        set_desktop_background = OrderedDict(
            [
                ("cmd", "gsettings"),
                ("subcmd", "set"),
                ("schema", GNOME_SCHEMA),
                ("key", key),
                ("value", wallpaper_location.as_uri()),
            ]
        )

        try:
            _run(list(set_desktop_background.values()), "set desktop background")
        except WallpaperSetError:
            # older GNOME releases have no picture-uri-dark key
            if key == "picture-uri":
                raise
            logger.debug("could not set %s, skipping", key)


def quote_applescript(text: str) -> str:
    """Return text as an AppleScript string literal."""

    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _set_macos(wallpaper_location: Path) -> None:
    script = (
        'tell application "System Events" to tell every desktop '
        f"to set picture to {quote_applescript(str(wallpaper_location))}"
    )
    _run(["osascript", "-e", script], "set desktop background")


def _set_windows(wallpaper_location: Path) -> None:
    import ctypes

    ok = ctypes.windll.user32.SystemParametersInfoW(
        SPI_SETDESKWALLPAPER, 0, str(wallpaper_location), SPIF_UPDATEINIFILE_SENDCHANGE
    )
    if not ok:
        raise WallpaperSetError("Could not set desktop background: SystemParametersInfoW failed.")


def update_wallpaper(img_path: Path) -> None:
    """
    Update the background image to the one at img_path. Raise WallpaperSetError if the path is not
    an existing image or the platform call fails.
    """

    # pathlib accepts only str and os.PathLike, anything else is a TypeError
    try:
        wallpaper_location = Path(img_path).expanduser().resolve()
    except TypeError:
        raise WallpaperSetError(
            f"Invalid parameter: {img_path} is not a valid Pathlike object."
        )

    # Path("") resolves to the working directory, so is_file also rejects the empty string
    if str(img_path) == "" or not wallpaper_location.is_file():
        raise WallpaperSetError(
            f"Invalid path provided for image location: {img_path} does not exist."
        )

    try:
        validate_image(wallpaper_location)
    except InvalidImageError:
        raise WallpaperSetError(
            f"Invalid image type provided. {wallpaper_location.name} is not a valid image."
        )

    if sys.platform.startswith("linux"):
        _set_gnome(wallpaper_location)
    elif sys.platform == "darwin":
        _set_macos(wallpaper_location)
    elif sys.platform == "win32":
        _set_windows(wallpaper_location)
    else:
        raise WallpaperSetError(f"Setting the wallpaper is not supported on {sys.platform}.")
