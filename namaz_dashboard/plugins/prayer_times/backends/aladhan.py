"""
Al-Adhan backend: one timingsByCity request per day, issued sequentially.
Days that fail are skipped; the backend only fails when no day succeeded.
"""
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional

from namaz_dashboard.core.cities import get_city_name

from .base import (
    MalformedResponseError,
    NoUsableDataError,
    PrayerTime,
    PrayerTimesBackend,
    ProviderError,
    build_prayer_time,
)

ALADHAN_TIMINGS_BY_CITY_URL = "https://api.aladhan.com/v1/timingsByCity/{date}"
DEFAULT_DAYS = 7
DEFAULT_METHOD = 13  # Diyanet İşleri Başkanlığı, Turkey


def _section(parent: Dict[str, Any], key: str) -> Dict[str, Any]:
    """Nested object under key; {} when absent, MalformedResponseError when not an object."""
    value = parent.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise MalformedResponseError(f"Al-Adhan field '{key}' is not an object: {value!r}")
    return value


def parse_day(payload: Any) -> PrayerTime:
    """Turn one timingsByCity response into a PrayerTime."""
    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, dict) or not isinstance(data.get("timings"), dict):
        raise MalformedResponseError("Al-Adhan response has no timings")

    timings = data["timings"]
    date_info = _section(data, "date")
    gregorian = _section(date_info, "gregorian")
    hijri = _section(date_info, "hijri")

    gregorian_date = ""
    if gregorian.get("date"):
        # "18-10-2026" -> "18.10.2026"
        gregorian_date = str(gregorian["date"]).replace("-", ".")

    hijri_date = None
    hijri_month = _section(hijri, "month").get("en")
    if hijri.get("day") and hijri_month and hijri.get("year"):
        hijri_date = f"{hijri['day']} {hijri_month} {hijri['year']}"

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
        hijri_date=hijri_date,
    )


class AladhanBackend(PrayerTimesBackend):
    id = "aladhan"
    name = "Al-Adhan"
    description = "Uluslararası İslami vakitler API'si"

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        self.days = int(self.config.get("aladhan_days", DEFAULT_DAYS))
        self.method = int(self.config.get("aladhan_method", DEFAULT_METHOD))

    def fetch(self, city_code: str, start: Optional[date] = None) -> List[PrayerTime]:
        city_name = get_city_name(city_code)
        start = start or datetime.now().date()
        result = []

        for offset in range(self.days):
            day = start + timedelta(days=offset)
            date_str = f"{day.day}-{day.month}-{day.year}"
            url = ALADHAN_TIMINGS_BY_CITY_URL.format(date=date_str)
            params = {"city": city_name, "country": "Turkey", "method": self.method}
            try:
                response = self._get(url, params=params)
                result.append(parse_day(self._json(response)))
            except ProviderError as e:
                self.logger.error(f"Al-Adhan failed for {date_str}: {e.reason}")
                continue

        if not result:
            raise NoUsableDataError(f"Al-Adhan returned no data for {city_name}")
        self.logger.info(f"Al-Adhan returned {len(result)}/{self.days} days for {city_name}")
        return result
