"""
bingwall Configuration Management

This file handles generating and loading the configuration file. init() should be called
once at startup, before any command processing, and its BingwallConfig passed to the code
that needs it. Raise a BingwallConfigError for any issues that arise in processing or
retrieving these configuration variables.

The configuration file is "config.json", saved at ~/.config/bingwall/config.json unless
the BINGWALL_CONFIG_DIR environment variable points somewhere else. Every value in it is a
default that the matching command line option overrides.
"""

import json
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path, PurePath
from typing import Optional

from bingwall.wallpaper_handler import DEFAULT_MODE, MODES

CONFIG_FILE_NAME = "config.json"


class BingwallConfigError(Exception):
    """Raise when an issue occurs with handling bingwall configuration."""

    pass


class PathEncoder(json.JSONEncoder):
    """
    custom encoder adds support for serializing pathlib objects as strings
    """

    def default(self, o):
        if isinstance(o, PurePath):
            return str(o)

        else:
            return json.JSONEncoder.default(self, o)


def default_config_dir() -> Path:
    """$BINGWALL_CONFIG_DIR if set, otherwise ~/.config/bingwall."""

    try:
        return Path(os.environ["BINGWALL_CONFIG_DIR"]).expanduser()
    except KeyError:
        return Path("~/.config/bingwall").expanduser()


def default_data_dir() -> Path:
    """Per-user local data directory: $XDG_DATA_HOME or ~/.local/share."""

    xdg_data_home = os.environ.get("XDG_DATA_HOME")
    if xdg_data_home:
        return Path(xdg_data_home)
    return Path("~/.local/share").expanduser()


@dataclass
class BingwallConfig:
    """
    Dataclass holding bingwall's configuration. It is instantiated by supplying keyword
    arguments from the deserialized (flat) config.json, so application code refers to
    attributes instead of dictionary keys.

    DATA_DIR is where the metadata cache and, without a BACKUP_DIR, the image itself live.
    """

    DATA_DIR: Path = field(default_factory=default_data_dir)
    BACKUP_DIR: Optional[str] = None
    MARKET: Optional[str] = None
    RESOLUTION: Optional[str] = None
    MODE: str = DEFAULT_MODE
    SILENT: bool = False
    CUSTOM_COMMANDS: list = field(default_factory=list)

    def __post_init__(self):
        """
        JSON cannot deserialize a str into a Path, so convert here. Also reject values
        that would only fail much later in the run.
        """

        self.DATA_DIR = Path(self.DATA_DIR).expanduser()

        if self.MODE not in MODES:
            raise BingwallConfigError(
                f"MODE must be one of {', '.join(MODES)}, got {self.MODE!r}"
            )

        if not isinstance(self.CUSTOM_COMMANDS, list) or not all(
            isinstance(command, str) for command in self.CUSTOM_COMMANDS
        ):
            raise BingwallConfigError("CUSTOM_COMMANDS must be a list of strings")

    def generate_config_json(self, config_dir: Optional[Path] = None) -> Path:
        """
        Write the BingwallConfig to config_dir (default: default_config_dir()) as JSON and
        return the path of the written file.

        Warning: will overwrite any existing config file for bingwall.
        """

        config_dir = Path(config_dir) if config_dir is not None else default_config_dir()

        try:
            to_json = json.dumps(asdict(self), sort_keys=True, indent=4, cls=PathEncoder)

        except TypeError as error:
            raise BingwallConfigError(
                f"There was an error trying to serialize config data to JSON: {error}"
            )

        try:
            config_dir.mkdir(parents=True, exist_ok=True)

            dest_file = config_dir / CONFIG_FILE_NAME
            with open(dest_file, "w", encoding="utf-8") as file:
                file.write(to_json)

        except OSError as error:
            raise BingwallConfigError(f"There was an error saving the configuration file: {error}.")

        return dest_file


def load_config(config_dir: Optional[Path] = None) -> BingwallConfig:
    """
    Load config.json from config_dir (default: default_config_dir()) and instantiate a
    BingwallConfig. Raise BingwallConfigError if the file is missing or invalid.
    """

    config_dir = Path(config_dir) if config_dir is not None else default_config_dir()
    config_src = config_dir / CONFIG_FILE_NAME

    try:
        with config_src.open("r", encoding="utf-8") as file:
            from_json = json.loads(file.read())

    except json.JSONDecodeError as error:
        raise BingwallConfigError(f"There was an issue reading the config: {error}")

    except OSError as error:
        raise BingwallConfigError(f"There was an issue opening the config: {error}")

    if not isinstance(from_json, dict):
        raise BingwallConfigError(f"{config_src} must contain a JSON object")

    known = {f.name for f in fields(BingwallConfig)}
    unknown = sorted(set(from_json) - known)
    if unknown:
        raise BingwallConfigError(f"Unknown keys in {config_src}: {', '.join(unknown)}")

    return BingwallConfig(**from_json)


def init(config_dir: Optional[Path] = None) -> BingwallConfig:
    """
    Load the configuration, writing a default config file first if none exists yet.
    """

    config_dir = Path(config_dir) if config_dir is not None else default_config_dir()

    if not (config_dir / CONFIG_FILE_NAME).exists():
        config = BingwallConfig()
        config.generate_config_json(config_dir)
        return config

    try:
        return load_config(config_dir)
    except BingwallConfigError as error:
        raise BingwallConfigError(f"There was an issue trying to load config file for bingwall: {error}")
