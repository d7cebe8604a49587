"""
Image Handler

Utilities for downloading and validating images. Downloads are plain GET requests for image
files specified by URL, with no expectation of authentication or other API requests. Finding
the image in the first place is the job of the reddit handler and the selector.

Images are written to disk byte for byte as the server sent them. Pillow is only used to check
that the bytes are an image before anything is written.
"""

import io
import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError
import requests

from redditpaper.reddit_handler import REQUEST_TIMEOUT
from redditpaper.reddit_handler import USER_AGENT
from redditpaper.selector import url_file_path

logger = logging.getLogger(__name__)


class InvalidImageError(Exception):
    """
    Raised when a provided binary input file is not an image. Wrapper around the PIL
    UnidentifiedImageError for better identification of errors during debugging
    and custom error messaging.
    """

    pass


class DownloadError(Exception):
    """
    Raised when an image download is unsuccessful.
    """

    pass


def validate_image(input) -> str:
    """
    Determine whether input is a valid image and return its format, e.g. "JPEG". PIL open accepts a
    Path object, string, or file object (buffered stream). It reads the content header to determine
    the file type but doesn't load the pixel data, so it is cheap to use as a validation method.
    """

    try:
        with Image.open(input) as image:
            return image.format

    except UnidentifiedImageError:
        raise InvalidImageError(f"Input {str(input)} does not appear to be an image.")

    except Image.DecompressionBombError as error:
        raise InvalidImageError(f"Input {str(input)} is too large to open: {error}")

    except (FileNotFoundError, IsADirectoryError):
        raise InvalidImageError(f"Input {str(input)} could not be found.")


def download_image(url: str, directory: Path) -> Path:
    """
    Download the image at url to directory/basename.extension and return the saved location.
    The directory is created if it does not exist.

    If the file is already there it is reused and nothing is downloaded. If downloading fails for
    one of various reasons, raise DownloadError instead of failing silently.
    """

    destination_path = url_file_path(url, Path(directory).expanduser())
    if destination_path is None:
        raise DownloadError(f"Could not derive a file name from {url}.")

    if destination_path.is_dir():
        raise DownloadError(f"Destination file {destination_path} is a directory.")

    if destination_path.exists():
        logger.debug("%s already exists, not downloading again", destination_path)
        return destination_path

    try:
        r = requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=REQUEST_TIMEOUT)
    except requests.exceptions.RequestException as error:
        raise DownloadError(f"Download error: {error}") from error

    # successful request but received a bad response from the server.
    try:
        r.raise_for_status()
    except requests.exceptions.HTTPError as error:
        raise DownloadError(
            f"Download error: something went wrong trying to access {url} (status code {r.status_code})"
        ) from error

    # successful request but did not get back image data as the response. imgur in particular
    # answers removed images with an html page.
    try:
        image_format = validate_image(io.BytesIO(r.content))
    except InvalidImageError as error:
        raise DownloadError(
            f"Download error: the target resource at {url} does not appear to be an image."
        ) from error

    # write next to the destination and rename into place so an interrupted write never leaves
    # a truncated image under the final name.
    partial_path = destination_path.with_name(destination_path.name + ".part")
    try:
        destination_path.parent.mkdir(parents=True, exist_ok=True)
        partial_path.write_bytes(r.content)
        partial_path.replace(destination_path)
    except OSError as error:
        partial_path.unlink(missing_ok=True)
        raise DownloadError(f"Could not save {destination_path}: {error}") from error

    logger.debug("saved %s image to %s", image_format, destination_path)
    return destination_path
