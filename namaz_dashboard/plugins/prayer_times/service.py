"""
Service layer: pick the right day out of a provider result and format dates for display.
Providers disagree on date formats, so matching is heuristic.
"""
from datetime import date, datetime
from typing import Callable, List, Optional, Tuple

from .backends.base import PrayerTime

TURKISH_MONTHS = [
    "Ocak", "Şubat", "Mart", "Nisan", "Mayıs", "Haziran",
    "Temmuz", "Ağustos", "Eylül", "Ekim", "Kasım", "Aralık",
]
TURKISH_WEEKDAYS = ["Pazartesi", "Salı", "Çarşamba", "Perşembe", "Cuma", "Cumartesi", "Pazar"]


def _date_matchers(today: date) -> List[Callable[[str], bool]]:
    day = f"{today.day:02d}"
    month = f"{today.month:02d}"
    year = str(today.year)
    month_name = f"{today.day} {TURKISH_MONTHS[today.month - 1]} {year}".casefold()
    return [
        lambda s: today.isoformat() in s,
        lambda s: f"{day}.{month}.{year}" in s,
        lambda s: month_name in s.casefold(),
        lambda s: f"{month}.{day}.{year}" in s,
        lambda s: day in s and month in s and year in s,
    ]


def find_today(records: List[PrayerTime], today: Optional[date] = None) -> Optional[PrayerTime]:
    """Return the record whose gregorian date is today, trying stricter formats first."""
    today = today or datetime.now().date()
    dated = [r for r in records if r.gregorian_date]
    for matches in _date_matchers(today):
        for record in dated:
            if matches(str(record.gregorian_date)):
                return record
    return None


def select_day(records: List[PrayerTime], today: Optional[date] = None) -> Optional[PrayerTime]:
    """Today's record if one can be matched, else the first record."""
    if not records:
        return None
    return find_today(records, today) or records[0]


def find_by_date(records: List[PrayerTime], gregorian_date: str) -> Optional[PrayerTime]:
    """Exact lookup used when the user picks a day from the list."""
    for record in records:
        if record.gregorian_date == gregorian_date:
            return record
    return None


def parse_gregorian_date(date_str: str) -> Optional[date]:
    """Parse "DD.MM.YYYY" or an ISO date; None for anything else."""
    if not date_str:
        return None
    text = date_str.strip()
    try:
        if "." in text:
            day, month, year = (int(part) for part in text.split(".")[:3])
            return date(year, month, day)
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def format_date(date_str: str) -> str:
    """'18.10.2026' -> '18 Ekim 2026 Pazar'. Unparseable input is returned unchanged."""
    parsed = parse_gregorian_date(date_str)
    if parsed is None:
        return date_str
    return (
        f"{parsed.day} {TURKISH_MONTHS[parsed.month - 1]} {parsed.year} "
        f"{TURKISH_WEEKDAYS[parsed.weekday()]}"
    )


def load_day(aggregator, city_code: str, provider: str, today: Optional[date] = None,
             force_fetch: bool = False) -> Tuple[List[PrayerTime], PrayerTime]:
    """Resolve prayer times and pick today's record. AggregationError propagates."""
    records = aggregator.resolve(city_code, provider, force_fetch=force_fetch)
    return records, select_day(records, today)
