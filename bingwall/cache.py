"""
Metadata cache

Holds exactly one record: the descriptor of the last image fetched from the archive,
stamped with the resolution and market that were requested at the time. The record is
stored as a flat JSON object at a fixed file name inside the local data directory.

Anything wrong with the file (missing, unreadable, not JSON, missing fields) surfaces as
a CacheError so the caller can treat it as a cache miss.
"""

import json
import os
from pathlib import Path

from bingwall.models import DescriptorError, ImageDescriptor

CACHE_FILE_NAME = ".wallpaper.json"


class CacheError(Exception):
    """Raise when the cached descriptor cannot be read or written."""

    pass


def cache_path(data_dir: Path) -> Path:
    """Location of the cache file inside data_dir."""

    return Path(data_dir) / CACHE_FILE_NAME


def load_cached_image(path: Path) -> ImageDescriptor:
    """
    Read the cached descriptor at path. Raise CacheError if it is absent or unusable.
    """

    try:
        with Path(path).open("r", encoding="utf-8") as file:
            from_json = json.load(file)

    except FileNotFoundError:
        raise CacheError(f"no cached api data at {path}")

    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as error:
        raise CacheError(f"There was an issue reading cached api data at {path}: {error}")

    try:
        return ImageDescriptor.from_dict(from_json)
    except DescriptorError as error:
        raise CacheError(f"cached api data at {path} is invalid: {error}")


def save_cached_image(path: Path, descriptor: ImageDescriptor) -> Path:
    """
    Write descriptor to path, replacing any previous record. The JSON is written to a
    temporary sibling first and moved over the old file so a crash never leaves a
    half-written cache behind.
    """

    path = Path(path)
    tmp_path = path.with_name(path.name + ".tmp")

    try:
        to_json = json.dumps(descriptor.to_dict(), ensure_ascii=False, indent=2)

    except (TypeError, ValueError) as error:
        raise CacheError(f"There was an error serializing api data to JSON: {error}")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tmp_path.open("w", encoding="utf-8") as file:
            file.write(to_json)
        os.replace(tmp_path, path)

    except OSError as error:
        tmp_path.unlink(missing_ok=True)
        raise CacheError(f"There was an error saving api data to {path}: {error}")

    return path
