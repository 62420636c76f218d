"""
bingwall

Set the Bing image of the day as your desktop wallpaper.

This module defines the entry point to the bingwall CLI. Options given on the command line
override the matching values of the config file (see config.py); anything not given falls
back to the config.
"""

import click

from bingwall import config as bingwall_config
from bingwall.cli_utils.console import confirm_success, describe, setup_logging
from bingwall.cli_utils.decorators import catch_errors
from bingwall.updater import Outcome, UpdateOptions, update
from bingwall.wallpaper_handler import MODES


@click.command()
@click.option("--silent", "-s", is_flag=True, help="Disable desktop notifications.")
@click.option(
    "--mode",
    "-m",
    type=click.Choice(list(MODES), case_sensitive=False),
    default=None,
    help="Scaling option for feh: center, fill (keep aspect ratio), max (black borders), scale (ignore aspect ratio) or tile. [default: fill]",
)
@click.option(
    "--custom-command",
    "-c",
    "custom_commands",
    multiple=True,
    help="Run a custom wallpaper command instead of feh. '%' is replaced by the image path. Can be used multiple times.",
)
@click.option(
    "--backup-dir",
    "-b",
    default=None,
    help="Directory to keep a copy of every daily wallpaper in, e.g. ~/Pictures/bing.",
)
@click.option(
    "--market",
    "-M",
    default=None,
    help="Market (region) to get the image for, e.g. en-GB. Unsupported markets fall back to en-US.",
)
@click.option(
    "--resolution",
    "-r",
    default=None,
    help="Resolution of the image, e.g. 1920x1080. Unsupported resolutions fall back to UHD.",
)
@click.option(
    "--verbose",
    "verbosity",
    flag_value="verbose",
    help="Print debug output.",
)
@click.option(
    "--quiet",
    "verbosity",
    flag_value="quiet",
    help="Silence all output except warnings and errors.",
)
@click.version_option(package_name="bingwall")
@catch_errors
def cli(silent, mode, custom_commands, backup_dir, market, resolution, verbosity):
    """
    bingwall

    Download the Bing image of the day and set it as desktop wallpaper.

    Run it as often as you like (at login, from cron, from a systemd timer): the image is
    only fetched again once the cached one is a day old or when you ask for a different
    market or resolution.

    Examples:

        $ bingwall --mode scale --market ja-JP

        $ bingwall --backup-dir ~/Pictures/bing --resolution 1920x1080

        $ bingwall -c "swaybg -i % -m fill" --silent
    """

    setup_logging(verbosity or "normal")

    config = bingwall_config.init()

    options = UpdateOptions(
        silent=silent or config.SILENT,
        mode=(mode or config.MODE).lower(),
        custom_commands=list(custom_commands) or list(config.CUSTOM_COMMANDS),
        backup_dir=backup_dir if backup_dir is not None else config.BACKUP_DIR,
        market=market if market is not None else config.MARKET,
        resolution=resolution if resolution is not None else config.RESOLUTION,
    )

    result = update(options, data_dir=config.DATA_DIR)

    if result.outcome is Outcome.FRESH_CACHE_HIT:
        describe(f"wallpaper is up to date: {result.title}")
    elif result.outcome is Outcome.SKIPPED:
        describe(f"image already downloaded, nothing to do: {result.title}")
    else:
        confirm_success(f"wallpaper set to '{result.title}' ({result.destination})")


def main():
    cli()


if __name__ == "__main__":
    main()
