from datetime import date

from namaz_dashboard.plugins.prayer_times.service import (
    find_by_date,
    find_today,
    format_date,
    load_day,
    parse_gregorian_date,
    select_day,
)

from conftest import FakeBackend, FakeFactory, make_day
from namaz_dashboard.plugins.prayer_times.aggregator import PrayerTimesAggregator

TODAY = date(2026, 10, 18)


def test_find_today_dotted_format():
    records = [make_day("17.10.2026"), make_day("18.10.2026"), make_day("19.10.2026")]
    assert find_today(records, TODAY).gregorian_date == "18.10.2026"


def test_find_today_iso_format():
    records = [make_day("2026-10-17T00:00:00"), make_day("2026-10-18T00:00:00")]
    assert find_today(records, TODAY).gregorian_date == "2026-10-18T00:00:00"


def test_find_today_turkish_month_name():
    records = [make_day("17 Ekim 2026 Cumartesi"), make_day("18 Ekim 2026 Pazar")]
    assert find_today(records, TODAY).gregorian_date == "18 Ekim 2026 Pazar"


def test_exact_match_preferred_over_loose_match():
    # "10.18.2026" also contains 18, 10 and 2026; the DD.MM.YYYY record must win
    records = [make_day("10.18.2026"), make_day("18.10.2026")]
    assert find_today(records, TODAY).gregorian_date == "18.10.2026"


def test_find_today_none_and_select_day_fallback():
    records = [make_day("01.01.2027"), make_day("02.01.2027")]
    assert find_today(records, TODAY) is None
    assert select_day(records, TODAY).gregorian_date == "01.01.2027"
    assert select_day([], TODAY) is None


def test_find_by_date():
    records = [make_day("18.10.2026"), make_day("19.10.2026")]
    assert find_by_date(records, "19.10.2026") is records[1]
    assert find_by_date(records, "20.10.2026") is None


def test_format_date():
    assert format_date("18.10.2026") == "18 Ekim 2026 Pazar"
    assert format_date("2026-02-02") == "2 Şubat 2026 Pazartesi"
    assert format_date("18 Ekim 2026 Pazar") == "18 Ekim 2026 Pazar"
    assert parse_gregorian_date("31.02.2026") is None


def test_load_day_picks_today():
    week = [make_day("17.10.2026"), make_day("18.10.2026")]
    aggregator = PrayerTimesAggregator(backend_factory=FakeFactory({"aladhan": FakeBackend(result=week)}))

    records, today = load_day(aggregator, "11001", "aladhan", today=TODAY)

    assert records == week
    assert today.gregorian_date == "18.10.2026"
