"""
Bing Image Archive API

This module wraps the public, unauthenticated HPImageArchive endpoint that publishes the
Bing image of the day. It builds the request url for a market, performs the GET and parses
the first image record of the response into an ImageDescriptor.

Sample response (trimmed), see
curl -Ss "https://www.bing.com/HPImageArchive.aspx?format=js&idx=0&n=1&mkt=en-US":

    {
      "images": [
        {
          "startdate": "20231013",
          "fullstartdate": "202310131500",
          "enddate": "20231014",
          "url": "/th?id=OHR.RailwayDay2023_JA-JP6915793143_1920x1080.jpg&rf=LaDigue_1920x1080.jpg&pid=hp",
          "urlbase": "/th?id=OHR.RailwayDay2023_JA-JP6915793143",
          "copyright": "...",
          "copyrightlink": "https://www.bing.com/search?q=...",
          "title": "...",
          "quiz": "/search?q=Bing+homepage+quiz&...",
          "wp": true,
          "hsh": "693bc6e04e2867a01a8cbf5c2acfc44c",
          "drk": 1, "top": 1, "bot": 1, "hs": []
        }
      ],
      "tooltips": {...}
    }

Three failure modes are kept apart: the request itself failing (ImageRequestFailed), a body
that is not the expected structure (ResponseParseFailed) and a well-formed response with
no image in it (NoImageAvailable).
"""

import logging
from typing import Optional
from urllib.parse import urlencode

import requests

from bingwall.models import DEFAULT_MARKET, SUPPORTED_MARKETS, DescriptorError, ImageDescriptor

logger = logging.getLogger(__name__)

API_URL = "https://www.bing.com/HPImageArchive.aspx"
API_TIMEOUT_SEC = 30


class ImageRequestFailed(Exception):
    """Raise when the request to the archive api fails at the transport or http level."""

    pass


class ResponseParseFailed(Exception):
    """Raise when the archive api answers with something that is not the expected JSON."""

    pass


class NoImageAvailable(Exception):
    """Raise when the archive api answers with an empty image list."""

    pass


def resolve_market(market: Optional[str]) -> str:
    """
    Return market if the archive supports it. Unset falls back to the default silently,
    unsupported values fall back with a warning. Never raises.
    """

    if market is None:
        return DEFAULT_MARKET

    if market not in SUPPORTED_MARKETS:
        logger.warning(
            "market %s not in %s, use default %s",
            market,
            sorted(SUPPORTED_MARKETS),
            DEFAULT_MARKET,
        )
        return DEFAULT_MARKET

    return market


def build_api_url(market: Optional[str] = None) -> str:
    """Build the archive url requesting exactly one image (idx 0) for market."""

    query = urlencode(
        {"format": "js", "idx": 0, "n": 1, "mbl": 1, "mkt": resolve_market(market)}
    )
    return f"{API_URL}?{query}"


def parse_response(payload) -> ImageDescriptor:
    """
    Turn a decoded api response into a descriptor for its first image record.
    """

    if not isinstance(payload, dict):
        raise ResponseParseFailed(
            f"expected a JSON object from the api, got {type(payload).__name__}"
        )

    images = payload.get("images")
    if images is None:
        raise NoImageAvailable("api response contains no images")

    if not isinstance(images, list):
        raise ResponseParseFailed(f"'images' must be a list, got {type(images).__name__}")

    if not images:
        raise NoImageAvailable("api response contains an empty image list")

    try:
        return ImageDescriptor.from_dict(images[0])
    except DescriptorError as error:
        raise ResponseParseFailed(f"can not parse image record: {error}")


def fetch_latest_image(url: str, timeout: float = API_TIMEOUT_SEC) -> ImageDescriptor:
    """
    GET url and return the descriptor of the first image in the response.
    """

    logger.debug("begin request api %s ...", url)

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()

    except requests.exceptions.RequestException as error:
        raise ImageRequestFailed(f"request to {url} failed: {error}")

    try:
        payload = response.json()

    except ValueError as error:
        raise ResponseParseFailed(f"parse response json from {url} failed: {error}")

    try:
        image = parse_response(payload)

    except ResponseParseFailed as error:
        raise ResponseParseFailed(f"{url}: {error}")

    except NoImageAvailable as error:
        raise NoImageAvailable(f"{url}: {error}")

    logger.debug("image: %s", image)
    return image
