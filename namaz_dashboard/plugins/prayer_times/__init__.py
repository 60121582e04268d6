from .aggregator import AggregationError, PrayerTimesAggregator
from .next_prayer import NextPrayerInfo, PrayerReminder, next_prayer

__all__ = [
    "AggregationError",
    "PrayerTimesAggregator",
    "NextPrayerInfo",
    "PrayerReminder",
    "next_prayer",
]
