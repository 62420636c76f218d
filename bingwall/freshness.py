"""
Freshness of the cached image descriptor.

The archive rotates its image once per day. Rather than asking the API whether anything
changed, a cached descriptor is trusted for 24 hours after its declared start time, as
long as the user is still asking for the same resolution and market.
"""

import logging
import re
from datetime import datetime, timedelta
from typing import Optional

from bingwall.models import ImageDescriptor

logger = logging.getLogger(__name__)

FULL_START_DATE_FORMAT = "%Y%m%d%H%M"  # e.g. 202310131500
FULL_START_DATE_PATTERN = re.compile(r"[0-9]{12}")
VALIDITY_WINDOW = timedelta(hours=24)


def parse_full_start_date(value: str) -> Optional[datetime]:
    """
    Parse a fullstartdate as a local wall-clock time and return it as an aware datetime,
    or None if it cannot be parsed.
    """

    # strptime alone would accept single-digit fields, e.g. "2023101315" as 01:05
    if not isinstance(value, str) or not FULL_START_DATE_PATTERN.fullmatch(value):
        return None

    try:
        naive = datetime.strptime(value, FULL_START_DATE_FORMAT)
    except (TypeError, ValueError):
        return None

    # astimezone() on a naive datetime interprets it in the local time zone
    return naive.astimezone()


def is_cache_valid(
    cached: ImageDescriptor,
    requested_resolution: Optional[str],
    requested_market: Optional[str],
    now: Optional[datetime] = None,
) -> bool:
    """
    Return True when cached can be reused without a network fetch: now is before
    fullstartdate + 24h and both requested values equal the ones stamped on the cached
    descriptor. None only matches None. An unparseable fullstartdate is a cache miss.
    """

    start = parse_full_start_date(cached.full_start_date)
    if start is None:
        logger.debug("cached fullstartdate %r is not parseable, treat as cache miss", cached.full_start_date)
        return False

    now = (now or datetime.now()).astimezone()
    expiry = start + VALIDITY_WINDOW

    if now >= expiry:
        logger.info("cached api data is expired (%s >= %s), continue to request api", now, expiry)
        return False

    if requested_resolution != cached.requested_resolution or requested_market != cached.requested_market:
        logger.info(
            "cached api data does not match request (resolution %r -> %r, market %r -> %r)",
            cached.requested_resolution,
            requested_resolution,
            cached.requested_market,
            requested_market,
        )
        return False

    logger.debug("cached api data is valid until %s", expiry)
    return True
