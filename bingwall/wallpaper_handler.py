"""
Wallpaper Handler

This module hands a downloaded image to whatever actually paints the desktop.

By default that is feh, invoked with one of its --bg-* scaling flags. Users who run a
different setter (swaybg, nitrogen, gsettings, a script of their own...) can instead give
any number of custom shell commands; every "%" in a command is replaced by the absolute
path of the image before it is run.

Processes are started and left running: bingwall does not wait for them and does not
look at their exit status. Only a failure to start a process is reported, as a
WallpaperUpdateError.
"""

import logging
import subprocess
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)

WALLPAPER_SETTER = "feh"
DEFAULT_MODE = "fill"

# display modes and the feh flag for each
MODES = {
    "center": "--bg-center",  # centered, not scaled
    "fill": "--bg-fill",  # fills the screen, keeps aspect ratio
    "max": "--bg-max",  # largest size that fits, borders on one side
    "scale": "--bg-scale",  # fills the screen, ignores aspect ratio
    "tile": "--bg-tile",
}

PATH_PLACEHOLDER = "%"


class WallpaperUpdateError(Exception):
    """
    Raised when the process that should update the desktop background cannot be started.
    """

    pass


def mode_flag(mode: str) -> str:
    """Return the feh flag for a display mode."""

    try:
        return MODES[mode.lower()]
    except KeyError:
        raise WallpaperUpdateError(f"unknown display mode {mode!r}, expected one of {', '.join(MODES)}")


def set_wallpaper(img_path: Path, mode: str = DEFAULT_MODE) -> subprocess.Popen:
    """
    Start feh to set img_path as the desktop background using the given display mode.
    """

    command = [WALLPAPER_SETTER, mode_flag(mode), str(img_path)]
    logger.debug("begin exec command: %s", command)

    try:
        return subprocess.Popen(command)
    except OSError as error:
        raise WallpaperUpdateError(f"could not run {WALLPAPER_SETTER} for {img_path}: {error}")


def expand_command(command: str, img_path: Path) -> str:
    """Replace every placeholder in command with the absolute image path."""

    return command.replace(PATH_PLACEHOLDER, str(Path(img_path).absolute()))


def run_custom_commands(commands: Iterable[str], img_path: Path) -> list[subprocess.Popen]:
    """
    Run each command through "sh -c" after placeholder substitution. Commands are
    independent of each other and none of them is waited for.
    """

    processes = []

    for command in commands:
        command = expand_command(command, img_path)
        logger.info("begin exec command: %s", command)

        try:
            processes.append(subprocess.Popen(["sh", "-c", command]))
        except OSError as error:
            raise WallpaperUpdateError(f"could not run custom command {command!r}: {error}")

    return processes
