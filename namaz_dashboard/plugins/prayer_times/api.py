"""
Per-plugin API for Prayer Times. Mounted at / and /api/.
- /prayer-times: resolved schedule for a city (JSON array, wire keys MiladiTarih/Imsak/...).
- /next-prayer: today's schedule plus the countdown.
- /providers, /cities: static registries for the UI.
Failures are always returned as {"error": ...}, never as raw exceptions.
"""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from namaz_dashboard.core.cities import list_cities
from .aggregator import AggregationError
from .backends import AUTO, list_providers
from .next_prayer import next_prayer
from .service import load_day


class PrayerTimeResponse(BaseModel):
    """Pydantic view of PrayerTime; serialized with the Turkish wire keys."""

    model_config = ConfigDict(populate_by_name=True)

    gregorian_date: str = Field(alias="MiladiTarih")
    hijri_date: Optional[str] = Field(default=None, alias="HicriTarih")
    imsak: str = Field(alias="Imsak")
    sunrise: str = Field(alias="Gunes")
    noon: str = Field(alias="Ogle")
    afternoon: str = Field(alias="Ikindi")
    sunset: str = Field(alias="Aksam")
    night: str = Field(alias="Yatsi")


class NextPrayerResponse(BaseModel):
    name: str
    time: str
    at: datetime
    remaining: str
    remaining_minutes: int
    progress: float


class NextPrayerDayResponse(BaseModel):
    """Response for GET /next-prayer."""

    provider: str
    times: PrayerTimeResponse
    next: NextPrayerResponse


class ProviderResponse(BaseModel):
    id: str
    name: str
    description: str


class CityResponse(BaseModel):
    code: str
    name: str


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def get_router(dashboard_app) -> Optional[APIRouter]:
    """Return router for this plugin; uses dashboard_app.aggregator for lookups."""
    router = APIRouter(tags=["Prayer Times"])

    @router.get("/prayer-times", response_model=List[PrayerTimeResponse])
    def get_prayer_times(
        city_code: Optional[str] = Query(None, alias="cityCode"),
        provider: str = Query(AUTO),
    ):
        """Return every day the chosen provider (or the first working one in auto mode) delivered."""
        if not city_code:
            return _error("cityCode is required", 400)
        try:
            records = dashboard_app.aggregator.resolve(city_code, provider)
        except AggregationError as e:
            return _error(e.message, 500)
        return [PrayerTimeResponse(**r._asdict()) for r in records]

    @router.get("/next-prayer", response_model=NextPrayerDayResponse)
    def get_next_prayer(
        city_code: Optional[str] = Query(None, alias="cityCode"),
        provider: str = Query(AUTO),
    ):
        """Return today's schedule and the next prayer countdown for a city."""
        if not city_code:
            return _error("cityCode is required", 400)
        try:
            _, today = load_day(dashboard_app.aggregator, city_code, provider)
        except AggregationError as e:
            return _error(e.message, 500)
        info = next_prayer(today)
        return NextPrayerDayResponse(
            provider=provider,
            times=PrayerTimeResponse(**today._asdict()),
            next=NextPrayerResponse(
                name=info.name,
                time=info.time,
                at=info.at,
                remaining=info.remaining_label,
                remaining_minutes=info.remaining_minutes,
                progress=round(info.progress_percent, 1),
            ),
        )

    @router.get("/providers", response_model=List[ProviderResponse])
    def get_providers() -> List[ProviderResponse]:
        return [ProviderResponse(**p) for p in list_providers()]

    @router.get("/cities", response_model=List[CityResponse])
    def get_cities() -> List[CityResponse]:
        return [CityResponse(**c) for c in list_cities()]

    return router
