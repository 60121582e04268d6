"""
Next prayer countdown. Pure functions of one day's PrayerTime and the wall clock;
callers recompute at least once a minute.
"""
from collections import namedtuple
from datetime import date, datetime, time, timedelta
from typing import Optional

from .backends.base import PRAYER_FIELDS, PrayerTime, normalize_time

PRAYER_NAMES = {
    "imsak": "İmsak",
    "sunrise": "Güneş",
    "noon": "Öğle",
    "afternoon": "İkindi",
    "sunset": "Akşam",
    "night": "Yatsı",
}

NextPrayerInfo = namedtuple(
    "NextPrayerInfo",
    [
        "key",                # PrayerTime field, e.g. "sunset"
        "name",               # display name, e.g. "Akşam"
        "time",               # "HH:MM"
        "at",                 # datetime of the next prayer (tomorrow on wraparound)
        "remaining_label",    # "1s 45dk"
        "remaining_minutes",  # whole minutes left
        "progress_percent",   # 0..100 through the current interval
    ],
)


def parse_time_on(day: date, value: str) -> datetime:
    """Combine an "HH:MM" string with a calendar date."""
    normalized = normalize_time(value)
    if normalized is None:
        raise ValueError(f"Invalid prayer time: {value!r}")
    hour, minute = map(int, normalized.split(":"))
    return datetime.combine(day, time(hour, minute))


def format_remaining(delta: timedelta) -> str:
    total_seconds = max(0, int(delta.total_seconds()))
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    return f"{hours}s {minutes}dk"


def next_prayer(times: PrayerTime, now: Optional[datetime] = None) -> NextPrayerInfo:
    """Find the next prayer after now, the time left, and how far through the current interval we are.

    When every prayer of the day has passed the next one is tomorrow's İmsak.
    """
    now = now or datetime.now()
    today = now.date()
    slots = [(field, parse_time_on(today, getattr(times, field))) for field in PRAYER_FIELDS]

    index = next((i for i, (_, at) in enumerate(slots) if at > now), None)
    if index is None:
        index = 0
        key, next_at = slots[0][0], slots[0][1] + timedelta(days=1)
    else:
        key, next_at = slots[index]

    # index 0 wraps to the last prayer; push it to yesterday if it lies after next_at
    prev_at = slots[index - 1][1]
    if prev_at > next_at:
        prev_at -= timedelta(days=1)

    remaining = next_at - now
    interval = (next_at - prev_at).total_seconds()
    if interval > 0:
        progress = (now - prev_at).total_seconds() / interval * 100
    else:
        progress = 0.0
    progress = min(100.0, max(0.0, progress))

    return NextPrayerInfo(
        key=key,
        name=PRAYER_NAMES[key],
        time=getattr(times, key),
        at=next_at,
        remaining_label=format_remaining(remaining),
        remaining_minutes=int(remaining.total_seconds() // 60),
        progress_percent=progress,
    )


class PrayerReminder:
    """Produces one reminder per upcoming prayer once it is lead_minutes away or closer."""

    def __init__(self, lead_minutes: int = 15):
        self.lead_minutes = lead_minutes
        self._notified = None

    def check(self, info: NextPrayerInfo) -> Optional[str]:
        marker = (info.key, info.at)
        if 0 < info.remaining_minutes <= self.lead_minutes and marker != self._notified:
            self._notified = marker
            return f"{info.name} vaktine {info.remaining_minutes} dakika kaldı."
        return None
