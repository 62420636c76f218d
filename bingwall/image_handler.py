"""
Image Handler

Downloads the image of the day to disk.

save_image decides where the image goes and whether a download is needed at all:

- with a backup directory, the image is saved there under its canonical name
  (see naming.derive_filename), so each day/resolution combination gets its own file.
- without one, the image is saved to a fixed file in the local data directory.

If the destination already holds a file nothing is requested from the network and
None is returned. Otherwise the response body is streamed to a ".part" sibling and only
moved into place once it has been written completely, so a failed or interrupted download
never leaves something that looks like a finished image at the destination.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import requests

from bingwall.models import ImageDescriptor
from bingwall.naming import derive_download_url, derive_filename

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_NAME = ".wallpaper.jpg"
DOWNLOAD_TIMEOUT_SEC = 60
CHUNK_SIZE = 65536


class ImageDownloadError(Exception):
    """
    Raised when an image download is unsuccessful.
    """

    pass


class DestinationError(Exception):
    """
    Raised when the directory or file an image should be saved to cannot be used.
    """

    pass


def expand_backup_dir(backup_dir: str) -> Path:
    """
    Expand a leading "~" to the user's home directory. Raise DestinationError if the home
    directory cannot be determined.
    """

    try:
        return Path(backup_dir).expanduser()
    except RuntimeError as error:
        raise DestinationError(f"can not expand home directory in {backup_dir!r}: {error}")


def resolve_destination(
    descriptor: ImageDescriptor,
    resolution: Optional[str],
    data_dir: Path,
    backup_dir: Optional[str] = None,
) -> Path:
    """
    Return the file path the image should be saved to, creating the backup directory if
    it does not exist yet.
    """

    if backup_dir is None:
        return Path(data_dir) / DEFAULT_IMAGE_NAME

    directory = expand_backup_dir(backup_dir)

    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        raise DestinationError(f"can not create backup directory {directory}: {error}")

    return directory / derive_filename(descriptor, resolution)


def download_image(url: str, destination: Path, timeout: float = DOWNLOAD_TIMEOUT_SEC) -> Path:
    """
    Stream the resource at url into destination and return destination.

    The body is never held in memory as a whole. Raise ImageDownloadError naming the url
    and path if the request, the response or the write fails; in that case nothing is
    left at destination.
    """

    destination = Path(destination)
    part_path = destination.with_name(destination.name + ".part")

    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        raise DestinationError(f"can not create directory {destination.parent}: {error}")

    try:
        response = requests.get(url, stream=True, timeout=timeout)
    except requests.exceptions.RequestException as error:
        raise ImageDownloadError(f"Download error: request to {url} failed: {error}")

    try:
        response.raise_for_status()

        with part_path.open("wb") as file:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    file.write(chunk)

        os.replace(part_path, destination)

    except requests.exceptions.HTTPError:
        raise ImageDownloadError(
            f"Download error: something went wrong trying to access {url} (status code {response.status_code})"
        )

    except (requests.exceptions.RequestException, OSError) as error:
        part_path.unlink(missing_ok=True)
        raise ImageDownloadError(f"Download error: saving {url} to {destination} failed: {error}")

    finally:
        response.close()

    return destination


def save_image(
    descriptor: ImageDescriptor,
    resolution: Optional[str],
    data_dir: Path,
    backup_dir: Optional[str] = None,
) -> Optional[Path]:
    """
    Save the image described by descriptor at resolution. Return the path of the newly
    written file, or None if the destination already held a file and nothing was
    downloaded.
    """

    destination = resolve_destination(descriptor, resolution, data_dir, backup_dir)
    logger.info("filepath: %s", destination)

    if destination.is_file():
        logger.info("file exists, skip download: %s", destination)
        return None

    if destination.exists():
        raise DestinationError(f"Destination {destination} exists and is not a file.")

    url = derive_download_url(descriptor, resolution)
    logger.info("Downloading %s ...", url)

    return download_image(url, destination)
