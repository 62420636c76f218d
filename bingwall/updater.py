"""
bingwall - set the Bing image of the day as desktop wallpaper

This module sequences one run of the application:

    cache check -> (fresh: done)
                -> fetch descriptor -> persist to cache -> download -> (file existed: done)
                                                                    -> set wallpaper -> notify

Only the fetch, the download and the post actions can fail the run. A cache that cannot
be read is a cache miss, and a cache that cannot be written is logged and ignored since
the image is still worth downloading.
"""

import enum
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from bingwall.bing_handler import build_api_url, fetch_latest_image
from bingwall.cache import CacheError, cache_path, load_cached_image, save_cached_image
from bingwall.freshness import is_cache_valid
from bingwall.image_handler import save_image
from bingwall.notification import notify_wallpaper_set
from bingwall.wallpaper_handler import DEFAULT_MODE, run_custom_commands, set_wallpaper

logger = logging.getLogger(__name__)


class Outcome(enum.Enum):
    """How a run ended when it did not fail."""

    FRESH_CACHE_HIT = "fresh-cache-hit"
    SKIPPED = "skipped"
    DOWNLOADED = "downloaded"


@dataclass
class UpdateOptions:
    """
    Parameters of one invocation. market and resolution are kept exactly as given
    (None when unset): they are what gets stamped into the cache and compared on the
    next run.
    """

    silent: bool = False
    mode: str = DEFAULT_MODE
    custom_commands: list = field(default_factory=list)
    backup_dir: Optional[str] = None
    market: Optional[str] = None
    resolution: Optional[str] = None


@dataclass
class UpdateResult:
    outcome: Outcome
    destination: Optional[Path] = None
    title: Optional[str] = None


def update(options: UpdateOptions, data_dir: Path, now: Optional[datetime] = None) -> UpdateResult:
    """
    Run the cache check, fetch, download and post actions for options. data_dir is the
    resolved local data directory holding the cache file (and the image when no backup
    directory is configured).
    """

    metadata_path = cache_path(data_dir)

    try:
        cached = load_cached_image(metadata_path)
    except CacheError as error:
        logger.debug("no usable cached api data, continue to request api: %s", error)
    else:
        logger.debug("read cached api data success: %s", cached)
        if is_cache_valid(cached, options.resolution, options.market, now):
            logger.info("cached api data match our need, do nothing")
            return UpdateResult(Outcome.FRESH_CACHE_HIT, title=cached.title)

    image = fetch_latest_image(build_api_url(options.market))
    image = image.stamped(options.resolution, options.market)

    try:
        save_cached_image(metadata_path, image)
    except CacheError as error:
        logger.warning("could not cache api data, continuing: %s", error)

    destination = save_image(image, options.resolution, data_dir, options.backup_dir)
    if destination is None:
        logger.info("image file exists, do nothing")
        return UpdateResult(Outcome.SKIPPED, title=image.title)

    destination = destination.absolute()

    if options.custom_commands:
        run_custom_commands(options.custom_commands, destination)
    else:
        set_wallpaper(destination, options.mode)

    if not options.silent:
        notify_wallpaper_set(image.title, str(destination))

    return UpdateResult(Outcome.DOWNLOADED, destination=destination, title=image.title)
