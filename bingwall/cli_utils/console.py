"""
bingwall console utilities

This module provides application-wide access to Rich Console objects for writing
to stdout and stderr, and wires the standard logging module into Rich so that log
records from every bingwall module share the same themed output.

User-facing status lines go through the formatting helpers below. Diagnostics
(cache decisions, urls being requested, fallbacks) are emitted as log records by
the module that makes the decision, via logging.getLogger(__name__).
"""

import logging
from io import StringIO

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

bingwall_theme = Theme(
    {"fail": "bold red", "confirm": "green", "describe": ""}
)

console = Console(theme=bingwall_theme)
error_console = Console(theme=bingwall_theme, stderr=True)

logger = logging.getLogger("bingwall")

LOG_LEVELS = {
    "verbose": logging.DEBUG,
    "normal": logging.INFO,
    "quiet": logging.WARNING,
}


def setup_logging(verbosity: str = "normal") -> None:
    """
    Attach a RichHandler to the bingwall logger and set the level for the given
    verbosity ("verbose", "normal" or "quiet"). Calling it again replaces the
    handler instead of stacking a second one.
    """

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(console=error_console, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(LOG_LEVELS.get(verbosity, logging.INFO))

    # quiet silences regular stdout output, errors still reach stderr
    if verbosity == "quiet":
        console.file = StringIO()


"""
Formatting helpers
"""


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

    error_console.print(f":x-emoji: failed. {msg}", style="fail", markup=False)
