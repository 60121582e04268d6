from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from namaz_dashboard.api.server import create_app, run_api_server
from namaz_dashboard.plugins.prayer_times.aggregator import AggregationError, PrayerTimesAggregator
from namaz_dashboard.plugins.prayer_times.backends.base import NetworkError

from conftest import FakeBackend, FakeFactory, make_day


def make_client(backends):
    aggregator = PrayerTimesAggregator(backend_factory=FakeFactory(backends))
    return TestClient(create_app(SimpleNamespace(aggregator=aggregator)))


@pytest.mark.parametrize("path", ["/prayer-times", "/api/prayer-times"])
def test_prayer_times_returns_wire_format(path):
    client = make_client({"diyanet": FakeBackend(result=[make_day("18.10.2026")])})

    response = client.get(path, params={"cityCode": "11001", "provider": "auto"})

    assert response.status_code == 200
    assert response.json() == [{
        "MiladiTarih": "18.10.2026",
        "HicriTarih": None,
        "Imsak": "05:00",
        "Gunes": "06:30",
        "Ogle": "13:00",
        "Ikindi": "16:30",
        "Aksam": "19:45",
        "Yatsi": "21:15",
    }]


def test_missing_city_code_is_400():
    client = make_client({})

    response = client.get("/prayer-times")

    assert response.status_code == 400
    assert response.json() == {"error": "cityCode is required"}


def test_all_providers_failing_is_500_with_every_reason():
    backends = {pid: FakeBackend(error=NetworkError("down")) for pid in ("diyanet", "aladhan", "emushaf", "namazvakti")}
    client = make_client(backends)

    response = client.get("/prayer-times", params={"cityCode": "11001"})

    assert response.status_code == 500
    error = response.json()["error"]
    for provider in ("diyanet", "aladhan", "emushaf", "namazvakti"):
        assert f"{provider}: down" in error


def test_explicit_provider_failure_is_500():
    client = make_client({"emushaf": FakeBackend(error=NetworkError("Emushaf responded with status: 502"))})

    response = client.get("/prayer-times", params={"cityCode": "11001", "provider": "emushaf"})

    assert response.status_code == 500
    assert response.json() == {"error": "emushaf returned no data: Emushaf responded with status: 502"}


def test_adapter_crash_is_reported_as_json_error():
    client = make_client({"diyanet": FakeBackend(error=AttributeError("boom"))})

    response = client.get("/prayer-times", params={"cityCode": "11001", "provider": "diyanet"})

    assert response.status_code == 500
    assert response.headers["content-type"].startswith("application/json")
    assert response.json() == {"error": "diyanet returned no data: AttributeError: boom"}


def test_next_prayer_endpoint():
    client = make_client({"aladhan": FakeBackend(result=[make_day("18.10.2026")])})

    response = client.get("/next-prayer", params={"cityCode": "11001", "provider": "aladhan"})

    assert response.status_code == 200
    body = response.json()
    assert body["provider"] == "aladhan"
    assert body["times"]["Aksam"] == "19:45"
    assert body["next"]["name"] in {"İmsak", "Güneş", "Öğle", "İkindi", "Akşam", "Yatsı"}
    assert 0 <= body["next"]["progress"] <= 100


def test_next_prayer_endpoint_error():
    client = make_client({})

    response = client.get("/next-prayer", params={"cityCode": "11001", "provider": "nope"})

    assert response.status_code == 500
    assert response.json() == {"error": "nope returned no data: Unknown provider: nope"}


def test_registries():
    client = make_client({})

    providers = client.get("/providers").json()
    cities = client.get("/api/cities").json()

    assert providers[0]["id"] == "auto"
    assert {"code": "10604", "name": "Ankara"} in cities
    assert client.get("/api/health").json() == {"status": "ok"}


def test_aggregation_error_carries_reasons():
    err = AggregationError("x", {"diyanet": "down"})
    assert err.errors == {"diyanet": "down"}
    assert str(err) == "x"


def test_run_api_server_uses_configured_address(monkeypatch):
    import uvicorn

    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append(kwargs))
    aggregator = PrayerTimesAggregator(backend_factory=FakeFactory({}))
    dashboard_app = SimpleNamespace(aggregator=aggregator, config=SimpleNamespace(data={"api": {"host": "0.0.0.0", "port": "9001"}}))

    run_api_server(dashboard_app)

    assert calls == [{"host": "0.0.0.0", "port": 9001, "log_config": None}]
