from datetime import datetime, timedelta

import pytest

from namaz_dashboard.plugins.prayer_times.next_prayer import (
    PrayerReminder,
    format_remaining,
    next_prayer,
)

from conftest import make_day


def test_afternoon_to_sunset_example(sample_day):
    info = next_prayer(sample_day, datetime(2026, 10, 18, 18, 0))

    assert info.key == "sunset"
    assert info.name == "Akşam"
    assert info.time == "19:45"
    assert info.at == datetime(2026, 10, 18, 19, 45)
    assert info.remaining_label == "1s 45dk"
    assert info.remaining_minutes == 105
    # 90 of the 195 minutes between 16:30 and 19:45
    assert info.progress_percent == pytest.approx(90 / 195 * 100)


def test_wraps_to_tomorrows_imsak_after_last_prayer():
    day = make_day(night="22:00")
    now = datetime(2026, 10, 18, 23, 50)

    info = next_prayer(day, now)

    assert info.key == "imsak"
    assert info.name == "İmsak"
    assert info.at == datetime(2026, 10, 19, 5, 0)
    assert info.at.date() == now.date() + timedelta(days=1)
    assert info.remaining_label == "5s 10dk"
    # 110 of the 420 minutes between 22:00 and 05:00
    assert info.progress_percent == pytest.approx(110 / 420 * 100)


def test_before_imsak_measures_from_yesterdays_night(sample_day):
    info = next_prayer(sample_day, datetime(2026, 10, 18, 3, 0))

    assert info.key == "imsak"
    assert info.at == datetime(2026, 10, 18, 5, 0)
    # 21:15 yesterday -> 05:00 today is 465 minutes, 345 elapsed
    assert info.progress_percent == pytest.approx(345 / 465 * 100)


def test_prayer_time_itself_counts_as_passed(sample_day):
    info = next_prayer(sample_day, datetime(2026, 10, 18, 19, 45))

    assert info.key == "night"
    assert info.progress_percent == 0.0


def test_progress_is_monotonic_within_an_interval_and_bounded(sample_day):
    start = datetime(2026, 10, 18, 16, 30)
    previous = -1.0
    for minute in range(0, 195):
        info = next_prayer(sample_day, start + timedelta(minutes=minute))
        assert info.key == "sunset"
        assert 0.0 <= info.progress_percent <= 100.0
        assert info.progress_percent >= previous
        previous = info.progress_percent

    after = next_prayer(sample_day, datetime(2026, 10, 18, 19, 46))
    assert after.key == "night"
    assert after.progress_percent < 5


def test_every_minute_of_the_day_is_in_range(sample_day):
    start = datetime(2026, 10, 18)
    for minute in range(0, 24 * 60, 7):
        info = next_prayer(sample_day, start + timedelta(minutes=minute))
        assert 0.0 <= info.progress_percent <= 100.0
        assert info.at > start + timedelta(minutes=minute)


def test_same_input_gives_same_result(sample_day):
    now = datetime(2026, 10, 18, 12, 1, 30)
    assert next_prayer(sample_day, now) == next_prayer(sample_day, now)


def test_invalid_time_is_rejected():
    day = make_day(noon="25:00")
    with pytest.raises(ValueError):
        next_prayer(day, datetime(2026, 10, 18, 12, 0))


def test_format_remaining_floors_minutes():
    assert format_remaining(timedelta(hours=2, minutes=3, seconds=59)) == "2s 3dk"
    assert format_remaining(timedelta(seconds=30)) == "0s 0dk"


def test_reminder_fires_once_per_prayer(sample_day):
    reminder = PrayerReminder(lead_minutes=15)

    far = next_prayer(sample_day, datetime(2026, 10, 18, 19, 0))
    assert reminder.check(far) is None

    near = next_prayer(sample_day, datetime(2026, 10, 18, 19, 35))
    assert reminder.check(near) == "Akşam vaktine 10 dakika kaldı."
    assert reminder.check(next_prayer(sample_day, datetime(2026, 10, 18, 19, 40))) is None

    night = next_prayer(sample_day, datetime(2026, 10, 18, 21, 5))
    assert reminder.check(night) == "Yatsı vaktine 10 dakika kaldı."
