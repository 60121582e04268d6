from .base import (
    AUTO,
    MalformedResponseError,
    NetworkError,
    NoUsableDataError,
    PrayerTime,
    PrayerTimesBackend,
    ProviderError,
)
from .aladhan import AladhanBackend
from .diyanet import DiyanetBackend
from .emushaf import EmushafBackend
from .namazvakti import NamazVaktiBackend

__all__ = [
    "AUTO",
    "PrayerTime",
    "PrayerTimesBackend",
    "ProviderError",
    "NetworkError",
    "MalformedResponseError",
    "NoUsableDataError",
    "AladhanBackend",
    "DiyanetBackend",
    "EmushafBackend",
    "NamazVaktiBackend",
    "AUTO_ORDER",
    "get_backend",
    "list_providers",
]

_BACKENDS = {
    "diyanet": DiyanetBackend,
    "emushaf": EmushafBackend,
    "aladhan": AladhanBackend,
    "namazvakti": NamazVaktiBackend,
}

# Priority order for auto mode
AUTO_ORDER = ("diyanet", "aladhan", "emushaf", "namazvakti")


def get_backend(backend_type: str, config: dict = None):
    """Factory: return backend instance for given type, or None if unknown."""
    cls = _BACKENDS.get((backend_type or "").lower())
    if not cls:
        return None
    return cls(config)


def list_providers():
    """Provider ids with display names, auto first."""
    providers = [{
        "id": AUTO,
        "name": "Otomatik (Önerilen)",
        "description": "En iyi çalışan API'yi otomatik olarak seçer",
    }]
    for provider_id in ("diyanet", "emushaf", "aladhan", "namazvakti"):
        cls = _BACKENDS[provider_id]
        providers.append({"id": cls.id, "name": cls.name, "description": cls.description})
    return providers
