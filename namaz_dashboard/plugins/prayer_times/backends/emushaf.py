"""
E-Mushaf backend (ezanvakti.emushaf.net). One request returns a multi-day array;
date selection is left to the caller.
"""
from typing import Any, Dict, List

from .base import (
    MalformedResponseError,
    NoUsableDataError,
    PrayerTime,
    PrayerTimesBackend,
    ProviderError,
    build_prayer_time,
)

EMUSHAF_URL = "https://ezanvakti.emushaf.net/vakitler/{city_code}"

_DATE_KEYS = ("MiladiTarihKisa", "MiladiTarih", "MiladiTarihUzun")
_HIJRI_KEYS = ("HicriTarihUzun", "HicriTarih", "HicriTarihKisa")


def _first(item: Dict[str, Any], keys) -> str:
    for key in keys:
        if item.get(key):
            return str(item[key])
    return ""


class EmushafBackend(PrayerTimesBackend):
    id = "emushaf"
    name = "E-Mushaf"
    description = "E-Mushaf namaz vakitleri API'si"

    def fetch(self, city_code: str) -> List[PrayerTime]:
        url = self.config.get("emushaf_url", EMUSHAF_URL).format(city_code=city_code)
        self.logger.info(f"Trying Emushaf: {url}")
        data = self._json(self._get(url))

        if not isinstance(data, list):
            raise MalformedResponseError("Emushaf did not return a list")
        if not data:
            raise NoUsableDataError("Emushaf returned an empty list")

        result = []
        for item in data:
            if not isinstance(item, dict):
                self.logger.warning(f"Skipping non-object Emushaf entry: {item!r}")
                continue
            try:
                result.append(self._to_prayer_time(item))
            except ProviderError as e:
                self.logger.warning(f"Skipping Emushaf entry {_first(item, _DATE_KEYS)!r}: {e.reason}")

        if not result:
            raise MalformedResponseError("Emushaf returned no valid entries")
        self.logger.info(f"Emushaf returned {len(result)} days")
        return result

    def _to_prayer_time(self, item: Dict[str, Any]) -> PrayerTime:
        return build_prayer_time(
            _first(item, _DATE_KEYS),
            {
                "imsak": item.get("Imsak"),
                "sunrise": item.get("Gunes"),
                "noon": item.get("Ogle"),
                "afternoon": item.get("Ikindi"),
                "sunset": item.get("Aksam"),
                "night": item.get("Yatsi"),
            },
            hijri_date=_first(item, _HIJRI_KEYS),
        )
