from datetime import timedelta
from typing import Any, Dict, Optional
import logging
import sys
from .cache_helper import CacheHelper
from .config import Config


class PrayerTimesApp:
    """Wires config, cache and the aggregation router together for the API and the CLI."""

    def __init__(self, config_path: Optional[str] = None, watch: bool = False, use_cache: bool = True):
        self.logger = logging.getLogger(self.__class__.__name__)

        self.config = Config(config_path=config_path, watch=watch)
        self.config.register_change_callback(self.handle_config_change)

        self._setup_logging()

        self.use_cache = use_cache
        self.aggregator = self._create_aggregator(self.config.data)

    def _setup_logging(self) -> None:
        """Configure logging to write to stdout and, if configured, a file"""
        logging_config = self.config.get_section("logging")
        root_logger = logging.getLogger()
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
        root_logger.setLevel(getattr(logging, str(logging_config.get("level", "INFO")).upper(), logging.INFO))

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
        )

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

        if logging_config.get("file"):
            file_handler = logging.FileHandler(logging_config["file"], encoding="utf-8")
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

        logging.info("Prayer times application starting...")

    def _create_aggregator(self, config_data: Dict[str, Any]):
        from namaz_dashboard.plugins.prayer_times.aggregator import PrayerTimesAggregator

        cache = None
        if self.use_cache:
            cache_config = config_data.get("cache") or {}
            cache = CacheHelper(
                cache_config.get("directory"),
                "prayer_times",
                ttl=timedelta(days=float(cache_config.get("ttl_days", 7))),
            )
        return PrayerTimesAggregator(config=config_data.get("prayer_times") or {}, cache=cache)

    def handle_config_change(self, new_config: Dict[str, Any]) -> None:
        """Rebuild the aggregator so backends pick up the new settings"""
        self.logger.info("Applying new prayer times configuration")
        self.aggregator = self._create_aggregator(new_config)

    @property
    def prayer_config(self) -> Dict[str, Any]:
        return self.config.get_section("prayer_times")

    def shutdown(self) -> None:
        self.config.cleanup()
