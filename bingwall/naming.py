"""
Naming utilities for the image of the day.

Filenames follow the convention used by the bing-wallpaper gnome extension so that
images saved by bingwall and by the extension into the same backup directory line up:

    {startdate}-{urlbase without "th?id=OHR."}_{resolution}.jpg

e.g. urlbase "/th?id=OHR.ViesteItaly_EN-US0948108910", startdate "20231013" and
resolution "1920x1080" give "20231013-ViesteItaly_EN-US0948108910_1920x1080.jpg".
"""

import logging
import re
from typing import Optional

from bingwall.models import DEFAULT_RESOLUTION, SUPPORTED_RESOLUTIONS, URL_BASE_MARKER, ImageDescriptor

logger = logging.getLogger(__name__)

IMAGE_HOST = "https://bing.com"
START_DATE_PATTERN = re.compile(r"[0-9]{8}")


class FilenameError(Exception):
    """Raise when a descriptor's urlbase cannot be turned into a filename."""

    pass


def resolve_resolution(resolution: Optional[str]) -> str:
    """
    Return the resolution to use for urls and filenames. Unset and "auto" resolve to the
    default without comment; anything outside the allow-list falls back to the default
    with a warning.
    """

    if resolution is None or resolution == "auto":
        return DEFAULT_RESOLUTION

    if resolution not in SUPPORTED_RESOLUTIONS:
        logger.warning(
            "resolution %s not in %s, use default %s",
            resolution,
            sorted(SUPPORTED_RESOLUTIONS),
            DEFAULT_RESOLUTION,
        )
        return DEFAULT_RESOLUTION

    return resolution


def derive_filename(descriptor: ImageDescriptor, resolution: Optional[str]) -> str:
    """
    Return the canonical filename for descriptor at resolution. Raise FilenameError if
    the last path segment of urlbase does not start with the OHR marker. There is no
    fallback name: guessing one could overwrite or misplace other images.
    """

    url_base = descriptor.url_base
    _, slash, segment = url_base.rpartition("/")

    if not slash or not segment.startswith(URL_BASE_MARKER):
        raise FilenameError(f"can not parse urlbase {url_base!r} to filename")

    # ".." must never reach the filesystem
    cleaned = segment.removeprefix(URL_BASE_MARKER).replace("..", "_")
    if not cleaned:
        raise FilenameError(f"urlbase {url_base!r} has no image name after the marker")

    if not START_DATE_PATTERN.fullmatch(descriptor.start_date):
        raise FilenameError(f"startdate {descriptor.start_date!r} is not a YYYYMMDD date")

    return f"{descriptor.start_date}-{cleaned}_{resolve_resolution(resolution)}.jpg"


def derive_download_url(descriptor: ImageDescriptor, resolution: Optional[str]) -> str:
    """Return the url of the image rendition for resolution."""

    return f"{IMAGE_HOST}{descriptor.url_base}_{resolve_resolution(resolution)}.jpg"
