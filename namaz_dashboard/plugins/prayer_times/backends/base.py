"""
Base type and interface for prayer times backends.
All backends return List[PrayerTime]; no dicts.
"""
import logging
import re
from abc import ABC, abstractmethod
from collections import namedtuple
from typing import Any, Dict, List, Optional

import requests

AUTO = "auto"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

# Order matters: next-prayer calculation walks the fields in this order.
PRAYER_FIELDS = ("imsak", "sunrise", "noon", "afternoon", "sunset", "night")

# One day's schedule. Times are zero-padded "HH:MM" strings.
PrayerTime = namedtuple(
    "PrayerTime",
    [
        "gregorian_date",  # provider-specific format, e.g. "18.10.2026"
        "imsak",
        "sunrise",
        "noon",
        "afternoon",
        "sunset",
        "night",
        "hijri_date",      # str or None
    ],
    defaults=(None,),
)

# PrayerTime field -> key used on the wire (and by the Turkish upstreams)
WIRE_KEYS = {
    "gregorian_date": "MiladiTarih",
    "hijri_date": "HicriTarih",
    "imsak": "Imsak",
    "sunrise": "Gunes",
    "noon": "Ogle",
    "afternoon": "Ikindi",
    "sunset": "Aksam",
    "night": "Yatsi",
}

_TIME_RE = re.compile(r"^\s*(\d{1,2})[:.](\d{2})")


class ProviderError(Exception):
    """A provider could not deliver usable prayer times."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class NetworkError(ProviderError):
    """Upstream unreachable or answered with a non-200 status."""


class MalformedResponseError(ProviderError):
    """200 response with an unrecognized or incomplete payload."""


class NoUsableDataError(ProviderError):
    """Provider answered but produced an empty result set."""


def normalize_time(value: Any) -> Optional[str]:
    """Return value as zero-padded "HH:MM", or None if it is not a valid time of day.

    Trailing decorations such as " (+03)" are ignored.
    """
    if value is None:
        return None
    m = _TIME_RE.match(str(value))
    if not m:
        return None
    hour, minute = int(m.group(1)), int(m.group(2))
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return None
    return f"{hour:02d}:{minute:02d}"


def build_prayer_time(
    gregorian_date: str,
    times: Dict[str, Any],
    hijri_date: Optional[str] = None,
) -> PrayerTime:
    """Validate the six raw times and build a PrayerTime.

    Raises MalformedResponseError naming every missing or invalid field.
    """
    normalized = {}
    missing = []
    for field in PRAYER_FIELDS:
        value = normalize_time(times.get(field))
        if value is None:
            missing.append(WIRE_KEYS[field])
        else:
            normalized[field] = value
    if missing:
        raise MalformedResponseError(f"Missing or invalid prayer times: {', '.join(missing)}")
    return PrayerTime(
        gregorian_date=str(gregorian_date or ""),
        hijri_date=hijri_date or None,
        **normalized,
    )


def prayer_time_to_dict(item: PrayerTime) -> Dict[str, Any]:
    """Wire/cached representation: {"MiladiTarih": ..., "Imsak": ..., ...}."""
    return {WIRE_KEYS[field]: getattr(item, field) for field in PrayerTime._fields}


def prayer_time_from_dict(data: Dict[str, Any]) -> PrayerTime:
    """Inverse of prayer_time_to_dict; validates the times again."""
    times = {field: data.get(WIRE_KEYS[field]) for field in PRAYER_FIELDS}
    return build_prayer_time(data.get("MiladiTarih", ""), times, data.get("HicriTarih"))


class PrayerTimesBackend(ABC):
    """Abstract backend: return list of PrayerTime from one provider."""

    id: str = ""
    name: str = ""
    description: str = ""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        self.logger = logging.getLogger(self.__class__.__name__)
        self.timeout = self.config.get("request_timeout")
        self.user_agent = self.config.get("user_agent") or DEFAULT_USER_AGENT

    @abstractmethod
    def fetch(self, city_code: str) -> List[PrayerTime]:
        """Fetch prayer times for a city. Raise ProviderError subclasses on failure."""
        pass

    def _get(self, url: str, accept: str = "application/json", params: Optional[Dict] = None) -> requests.Response:
        """GET url and return the response if it is a 200; NetworkError otherwise."""
        headers = {"Accept": accept, "User-Agent": self.user_agent}
        self.logger.debug(f"Making request to {url} with params {params}")
        try:
            response = requests.get(url, params=params, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Request to {url} failed: {e}") from e
        if response.status_code != 200:
            raise NetworkError(f"{self.name or self.id} responded with status: {response.status_code}")
        return response

    def _json(self, response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(f"Invalid JSON from {response.url}: {e}") from e
