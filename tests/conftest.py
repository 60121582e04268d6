import pytest

from namaz_dashboard.plugins.prayer_times.backends.base import PrayerTime


def make_day(gregorian_date="18.10.2026", **overrides):
    times = dict(
        imsak="05:00",
        sunrise="06:30",
        noon="13:00",
        afternoon="16:30",
        sunset="19:45",
        night="21:15",
    )
    times.update(overrides)
    return PrayerTime(gregorian_date=gregorian_date, **times)


class FakeBackend:
    """Stands in for a provider backend; returns a canned result or raises."""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def fetch(self, city_code):
        self.calls.append(city_code)
        if self.error is not None:
            raise self.error
        return self.result


class FakeFactory:
    """backend_factory replacement that records which providers were asked for."""

    def __init__(self, backends):
        self.backends = backends
        self.requested = []

    def __call__(self, provider_id, config):
        self.requested.append(provider_id)
        return self.backends.get(provider_id)


@pytest.fixture
def sample_day():
    return make_day()
