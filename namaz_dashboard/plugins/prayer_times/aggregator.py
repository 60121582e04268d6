"""
Aggregation router: picks a provider (or walks the auto priority list) and
returns the first non-empty result. Providers are always tried one at a time.
"""
import logging
from typing import Any, Callable, Dict, List, Optional

import requests

from namaz_dashboard.core.cache_helper import CacheHelper
from .backends import AUTO, AUTO_ORDER, get_backend
from .backends.base import (
    NoUsableDataError,
    PrayerTime,
    PrayerTimesBackend,
    ProviderError,
    prayer_time_from_dict,
    prayer_time_to_dict,
)

logger = logging.getLogger(__name__)


class AggregationError(Exception):
    """No candidate provider produced usable data. errors: {provider_id: reason}."""

    def __init__(self, message: str, errors: Dict[str, str]):
        super().__init__(message)
        self.message = message
        self.errors = errors


class PrayerTimesAggregator:
    """Resolve prayer times for a city from one provider or, in auto mode, the first that works."""

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        cache: Optional[CacheHelper] = None,
        backend_factory: Optional[Callable[[str, Dict[str, Any]], Optional[PrayerTimesBackend]]] = None,
        auto_order=AUTO_ORDER,
    ):
        self.config = config or {}
        self.cache = cache
        self.backend_factory = backend_factory or get_backend
        self.auto_order = tuple(auto_order)
        # Failures seen by the most recent resolve(), including ones auto mode recovered from
        self.last_errors: Dict[str, str] = {}

    def candidates(self, provider: str) -> List[str]:
        """Try order for a selector: the priority list for auto, else just the named provider."""
        if provider == AUTO:
            return list(self.auto_order)
        return [provider]

    def resolve(self, city_code: str, provider: str = AUTO, force_fetch: bool = False) -> List[PrayerTime]:
        """Return the first usable result set; raise AggregationError if there is none."""
        provider = (provider or AUTO).strip().lower()
        self.last_errors = {}

        if self.cache and not force_fetch:
            cached = self._from_cache(city_code, provider)
            if cached:
                logger.info(f"Using cached data for {city_code} with provider {provider}")
                return cached

        logger.info(f"Fetching prayer times for city {city_code} using provider {provider}")
        errors: Dict[str, str] = {}
        self.last_errors = errors

        for candidate in self.candidates(provider):
            try:
                data = self._fetch_one(candidate, city_code)
            except (ProviderError, requests.exceptions.RequestException) as e:
                reason = getattr(e, "reason", None) or str(e) or e.__class__.__name__
                logger.error(f"Error fetching from {candidate}: {reason}")
                errors[candidate] = reason
                if provider != AUTO:
                    break
                continue
            except Exception as e:
                # Adapter bugs count as provider failures
                reason = f"{e.__class__.__name__}: {e}"
                logger.error(f"Unexpected error from {candidate}: {reason}", exc_info=True)
                errors[candidate] = reason
                if provider != AUTO:
                    break
                continue

            logger.info(f"Successfully fetched {len(data)} days from {candidate}")
            if self.cache:
                self.cache.save_to_cache(city_code, provider, [prayer_time_to_dict(p) for p in data])
            return data

        if provider == AUTO:
            details = "; ".join(f"{p}: {e}" for p, e in errors.items())
            message = f"No provider returned data: {details}"
        else:
            message = f"{provider} returned no data: {errors.get(provider, 'Unknown error')}"
        logger.error(message)
        raise AggregationError(message, errors)

    def _fetch_one(self, provider_id: str, city_code: str) -> List[PrayerTime]:
        backend = self.backend_factory(provider_id, self.config)
        if backend is None:
            raise ProviderError(f"Unknown provider: {provider_id}")
        data = backend.fetch(city_code)
        if not data:
            raise NoUsableDataError(f"{provider_id} returned no prayer times")
        return list(data)

    def _from_cache(self, city_code: str, provider: str) -> Optional[List[PrayerTime]]:
        cached = self.cache.get_cached_content(city_code, provider)
        if not cached:
            return None
        try:
            return [prayer_time_from_dict(item) for item in cached]
        except (ProviderError, AttributeError) as e:
            logger.warning(f"Discarding invalid cache entry for {city_code}/{provider}: {e}")
            return None
