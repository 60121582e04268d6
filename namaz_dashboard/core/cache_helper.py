import os
import re
import json
import time
import logging
import tempfile
from datetime import timedelta
from typing import Any, List, Optional

logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "prayerTimesCache"
DEFAULT_TTL = timedelta(days=7)


def _now_ms() -> int:
    return int(time.time() * 1000)


class CacheHelper:
    DEFAULT_CACHE_DIR = ".cache"

    def __init__(self, cache_dir: Optional[str] = None, component_name: str = "", ttl: Optional[timedelta] = None):
        """Initialize cache helper with specific cache directory
        Args:
            cache_dir: Base cache directory from config, if None uses DEFAULT_CACHE_DIR
            component_name: Component specific subdirectory
            ttl: How long an entry stays valid, default 7 days
        """
        base_dir = os.path.expanduser(cache_dir or self.DEFAULT_CACHE_DIR)
        self.cache_dir = os.path.join(base_dir, component_name) if component_name else base_dir
        self.ttl = ttl if ttl is not None else DEFAULT_TTL
        os.makedirs(self.cache_dir, exist_ok=True)

    @staticmethod
    def cache_key(city_code: str, provider: str) -> str:
        """prayerTimesCache_<cityCode>_<provider>"""
        return f"{CACHE_KEY_PREFIX}_{city_code}_{provider}"

    def _get_cache_file(self, key: str) -> str:
        safe_key = re.sub(r"[^\w.-]", "_", key)
        return os.path.join(self.cache_dir, f"{safe_key}.json")

    def get_cached_content(self, city_code: str, provider: str, now_ms: Optional[int] = None) -> Optional[List[Any]]:
        """Return cached data if an entry exists for this city/provider and is younger than the TTL"""
        cache_file = self._get_cache_file(self.cache_key(city_code, provider))
        if not os.path.exists(cache_file):
            return None
        try:
            with open(cache_file, 'r', encoding='utf-8') as f:
                cached = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Error reading cache {cache_file}: {e}")
            return None

        if not isinstance(cached, dict):
            logger.warning(f"Ignoring malformed cache entry {cache_file}")
            return None
        if cached.get('cityCode') != city_code or cached.get('provider') != provider:
            return None

        now_ms = _now_ms() if now_ms is None else now_ms
        try:
            age_ms = now_ms - int(cached['timestamp'])
        except (KeyError, TypeError, ValueError):
            logger.warning(f"Ignoring cache entry without timestamp: {cache_file}")
            return None
        if age_ms >= self.ttl.total_seconds() * 1000:
            logger.debug(f"Cache expired for {city_code}/{provider} (age {age_ms} ms)")
            return None

        data = cached.get('data')
        if not isinstance(data, list) or not data:
            return None
        return data

    def save_to_cache(self, city_code: str, provider: str, data: List[Any], now_ms: Optional[int] = None) -> None:
        """Save data for this city/provider stamped with now. Last writer wins."""
        cache_data = {
            'data': data,
            'timestamp': _now_ms() if now_ms is None else now_ms,
            'cityCode': city_code,
            'provider': provider,
        }
        cache_file = self._get_cache_file(self.cache_key(city_code, provider))
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(dir=self.cache_dir, suffix=".tmp")
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(cache_data, f, ensure_ascii=False)
            os.replace(tmp_path, cache_file)
            tmp_path = None
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error saving to cache: {e}")
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.remove(tmp_path)

    def clear(self, city_code: str, provider: str) -> None:
        """Drop the entry for this city/provider if present"""
        cache_file = self._get_cache_file(self.cache_key(city_code, provider))
        try:
            os.remove(cache_file)
        except FileNotFoundError:
            pass
