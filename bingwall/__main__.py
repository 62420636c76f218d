"""
__main__.py

This file adds support for running bingwall as a python module (python -m bingwall) instead of
invoking the "bingwall" command line entrypoint.
"""

from bingwall.cli import main


if __name__ == "__main__":
    main()
