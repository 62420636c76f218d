"""
bingwall Models

Defines the ImageDescriptor dataclass, which represents one day's published image as
returned by the Bing image archive, along with the allow-lists for markets and resolutions
the archive understands.

A descriptor is built fresh from every API response and one instance at a time is
persisted to the metadata cache. Descriptors are frozen: the only "change" ever made
after construction is stamping the resolution and market the user requested, which
produces a new instance via stamped().
"""

from dataclasses import dataclass, field, replace
from typing import Any, Optional


DEFAULT_RESOLUTION = "UHD"
DEFAULT_MARKET = "en-US"

# market and resolution lists follow the ones published by the bing-wallpaper gnome extension
SUPPORTED_RESOLUTIONS = frozenset(
    [
        "auto",
        "UHD",
        "1920x1200",
        "1920x1080",
        "1366x768",
        "1280x720",
        "1024x768",
        "800x600",
    ]
)

SUPPORTED_MARKETS = frozenset(
    [
        "auto", "ar-XA", "da-DK", "de-AT", "de-CH", "de-DE", "en-AU", "en-CA", "en-GB",
        "en-ID", "en-IE", "en-IN", "en-MY", "en-NZ", "en-PH", "en-SG", "en-US", "en-WW",
        "en-XA", "en-ZA", "es-AR", "es-CL", "es-ES", "es-MX", "es-US", "es-XL", "et-EE",
        "fi-FI", "fr-BE", "fr-CA", "fr-CH", "fr-FR", "he-IL", "hr-HR", "hu-HU", "it-IT",
        "ja-JP", "ko-KR", "lt-LT", "lv-LV", "nb-NO", "nl-BE", "nl-NL", "pl-PL", "pt-BR",
        "pt-PT", "ro-RO", "ru-RU", "sk-SK", "sl-SL", "sv-SE", "th-TH", "tr-TR", "uk-UA",
        "zh-CN", "zh-HK", "zh-TW",
    ]
)

# keys that must be present (as strings) in every image record
REQUIRED_KEYS = ("startdate", "fullstartdate", "enddate", "url", "urlbase", "copyright", "title")

# last path segment of every urlbase starts with this, e.g. "/th?id=OHR.ViesteItaly_EN-US0948108910"
URL_BASE_MARKER = "th?id=OHR."


class DescriptorError(Exception):
    """Raise when an image record cannot be turned into an ImageDescriptor."""

    pass


@dataclass(frozen=True)
class ImageDescriptor:
    """
    Metadata for one published image of the day.

    full_start_date (e.g. "202310131500") is the freshness anchor. url_base
    (e.g. "/th?id=OHR.ViesteItaly_EN-US0948108910") is the fragment that both the
    download url and the saved filename are derived from.

    requested_resolution and requested_market are *not* part of the archive record.
    They hold the raw values the user asked for when the descriptor was fetched, so
    the next run can tell whether its own parameters match.
    """

    start_date: str
    full_start_date: str
    end_date: str
    url: str
    url_base: str
    copyright: str
    title: str
    copyright_link: str = ""
    quiz: str = ""
    wp: bool = False
    hsh: str = ""
    drk: int = 0
    top: int = 0
    bot: int = 0
    hs: list = field(default_factory=list)

    requested_resolution: Optional[str] = None
    requested_market: Optional[str] = None

    @classmethod
    def from_dict(cls, record: Any) -> "ImageDescriptor":
        """
        Build a descriptor from an image record using the archive's own key names.
        Raise DescriptorError naming the problem if the record is not usable.
        """

        if not isinstance(record, dict):
            raise DescriptorError(f"image record must be an object, got {type(record).__name__}")

        for key in REQUIRED_KEYS:
            if not isinstance(record.get(key), str):
                raise DescriptorError(f"image record field '{key}' is missing or not a string")

        _, slash, segment = record["urlbase"].rpartition("/")
        if not slash or not segment.startswith(URL_BASE_MARKER) or segment == URL_BASE_MARKER:
            raise DescriptorError(f"urlbase {record['urlbase']!r} does not name an {URL_BASE_MARKER} image")

        for key in ("requested_resolution", "requested_market"):
            value = record.get(key)
            if value is not None and not isinstance(value, str):
                raise DescriptorError(f"field '{key}' must be a string or null, got {value!r}")

        try:
            return cls(
                start_date=record["startdate"],
                full_start_date=record["fullstartdate"],
                end_date=record["enddate"],
                url=record["url"],
                url_base=record["urlbase"],
                copyright=record["copyright"],
                title=record["title"],
                copyright_link=str(record.get("copyrightlink", "")),
                quiz=str(record.get("quiz", "")),
                wp=bool(record.get("wp", False)),
                hsh=str(record.get("hsh", "")),
                drk=int(record.get("drk", 0)),
                top=int(record.get("top", 0)),
                bot=int(record.get("bot", 0)),
                hs=list(record.get("hs") or []),
                requested_resolution=record.get("requested_resolution"),
                requested_market=record.get("requested_market"),
            )
        except (TypeError, ValueError) as error:
            raise DescriptorError(f"image record has a malformed field: {error}")

    def to_dict(self) -> dict:
        """Serialize using the archive's key names plus the two requested_* fields."""

        return {
            "startdate": self.start_date,
            "fullstartdate": self.full_start_date,
            "enddate": self.end_date,
            "url": self.url,
            "urlbase": self.url_base,
            "copyright": self.copyright,
            "copyrightlink": self.copyright_link,
            "title": self.title,
            "quiz": self.quiz,
            "wp": self.wp,
            "hsh": self.hsh,
            "drk": self.drk,
            "top": self.top,
            "bot": self.bot,
            "hs": list(self.hs),
            "requested_resolution": self.requested_resolution,
            "requested_market": self.requested_market,
        }

    def stamped(self, resolution: Optional[str], market: Optional[str]) -> "ImageDescriptor":
        """Return a copy carrying the parameters of the current invocation."""

        return replace(self, requested_resolution=resolution, requested_market=market)
