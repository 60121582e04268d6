"""
Namaz Vakti backend. The same service is published on several mirrors with two
response shapes; mirrors are tried in order until one answers.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from namaz_dashboard.core.cities import get_city_name

from .base import (
    MalformedResponseError,
    PrayerTime,
    PrayerTimesBackend,
    ProviderError,
    build_prayer_time,
)

DEFAULT_MIRRORS = [
    "https://namaz-vakti-api.herokuapp.com/data?region={city_code}",
    "https://namaz-vakti-api.vercel.app/api/timings?city={city_name}",
    "https://namazvakitleri-api.netlify.app/api/timings?city={city_name}",
]


def parse_payload(data: Any, gregorian_date: str) -> Optional[PrayerTime]:
    """Normalize either known shape into a PrayerTime; None if the shape is not recognized.

    Raises MalformedResponseError when the shape is known but times are missing.
    """
    if not isinstance(data, dict):
        return None
    if isinstance(data.get("times"), dict):
        times = data["times"]
        return build_prayer_time(
            gregorian_date,
            {
                "imsak": times.get("imsak"),
                "sunrise": times.get("gunes"),
                "noon": times.get("ogle"),
                "afternoon": times.get("ikindi"),
                "sunset": times.get("aksam"),
                "night": times.get("yatsi"),
            },
            hijri_date=_text(data.get("hicri")),
        )
    if isinstance(data.get("timings"), dict):
        timings = data["timings"]
        date_info = data.get("date") or {}
        if not isinstance(date_info, dict):
            raise MalformedResponseError(f"NamazVakti 'date' is not an object: {date_info!r}")
        hijri = date_info.get("hijri") or {}
        if not isinstance(hijri, dict):
            raise MalformedResponseError(f"NamazVakti 'date.hijri' is not an object: {hijri!r}")
        return build_prayer_time(
            gregorian_date,
            {
                "imsak": timings.get("Imsak"),
                "sunrise": timings.get("Sunrise"),
                "noon": timings.get("Dhuhr"),
                "afternoon": timings.get("Asr"),
                "sunset": timings.get("Maghrib"),
                "night": timings.get("Isha"),
            },
            hijri_date=_text(hijri.get("date")),
        )
    return None


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


class NamazVaktiBackend(PrayerTimesBackend):
    id = "namazvakti"
    name = "Namaz Vakti API"
    description = "Alternatif namaz vakitleri API'si (Bakımda olabilir)"

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        self.mirrors = list(self.config.get("namazvakti_mirrors") or DEFAULT_MIRRORS)

    def fetch(self, city_code: str) -> List[PrayerTime]:
        city_name = quote(get_city_name(city_code))
        today = datetime.now().strftime("%d.%m.%Y")
        last_error: Optional[ProviderError] = None

        for template in self.mirrors:
            url = template.format(city_code=city_code, city_name=city_name)
            self.logger.info(f"Trying NamazVakti mirror: {url}")
            try:
                data = self._json(self._get(url))
                prayer_time = parse_payload(data, today)
            except ProviderError as e:
                self.logger.warning(f"NamazVakti mirror {url} failed: {e.reason}")
                last_error = e
                continue
            if prayer_time is None:
                self.logger.warning(f"NamazVakti mirror {url} returned an unrecognized payload")
                last_error = MalformedResponseError(f"Unrecognized response from {url}")
                continue
            return [prayer_time]

        if last_error is not None:
            raise last_error
        raise MalformedResponseError("NamazVakti returned no valid data")
