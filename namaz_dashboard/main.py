import argparse
import logging
import sys
import time
from datetime import datetime

from namaz_dashboard.core.app import PrayerTimesApp
from namaz_dashboard.core.cities import get_city_name
from namaz_dashboard.plugins.prayer_times.aggregator import AggregationError
from namaz_dashboard.plugins.prayer_times.backends import AUTO
from namaz_dashboard.plugins.prayer_times.backends.base import PRAYER_FIELDS
from namaz_dashboard.plugins.prayer_times.next_prayer import PRAYER_NAMES, PrayerReminder, next_prayer
from namaz_dashboard.plugins.prayer_times.service import find_by_date, format_date, select_day


def setup_basic_logging():
    """Setup basic stdout logging before config is loaded"""
    root_logger = logging.getLogger()
    if not root_logger.handlers:  # Only add handler if none exists
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
        ))
        root_logger.addHandler(handler)
        root_logger.setLevel(logging.DEBUG)
        logging.debug("Basic logging initialized")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Namaz vakitleri for Turkish cities')
    parser.add_argument('--config',
                        help='Path to config file (default: ~/.namaz_dashboard/config.yaml)')
    subparsers = parser.add_subparsers(dest='command')

    subparsers.add_parser('serve', help='Run the HTTP API')

    show = subparsers.add_parser('show', help="Print a day's prayer times and the next prayer")
    show.add_argument('--city', help='City code, e.g. 11001 (Istanbul)')
    show.add_argument('--provider', help=f'Provider id or "{AUTO}"')
    show.add_argument('--date', help='Gregorian date as delivered by the provider, e.g. 18.10.2026')
    show.add_argument('--refresh', action='store_true', help='Ignore cached data')
    show.add_argument('--watch', action='store_true', help='Recompute the countdown every minute')
    return parser


def print_day(city_code: str, provider: str, day) -> None:
    print(f"{get_city_name(city_code)} ({provider}) - {format_date(day.gregorian_date)}")
    if day.hijri_date:
        print(day.hijri_date)
    for field in PRAYER_FIELDS:
        print(f"  {PRAYER_NAMES[field]:<8} {getattr(day, field)}")


def run_show(app: PrayerTimesApp, args) -> int:
    prayer_config = app.prayer_config
    city_code = args.city or str(prayer_config.get("city_code", "11001"))
    provider = args.provider or prayer_config.get("provider", AUTO)

    try:
        records = app.aggregator.resolve(city_code, provider, force_fetch=args.refresh)
    except AggregationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        if provider != AUTO:
            print(f"Retry, or switch to automatic mode with --provider {AUTO}", file=sys.stderr)
        else:
            print("Retry later", file=sys.stderr)
        return 1

    if args.date:
        day = find_by_date(records, args.date)
        if day is None:
            available = ", ".join(r.gregorian_date for r in records)
            print(f"No data for {args.date}; available: {available}", file=sys.stderr)
            return 1
    else:
        day = select_day(records)
    print_day(city_code, provider, day)

    reminder = PrayerReminder(int(prayer_config.get("reminder_minutes", 15)))
    while True:
        info = next_prayer(day)
        print(f"Sonraki vakit: {info.name} {info.time} - {info.remaining_label} "
              f"({info.progress_percent:.0f}%)")
        message = reminder.check(info)
        if message:
            print(message)
        if not args.watch:
            return 0
        time.sleep(60 - datetime.now().second)
        if not args.date:
            day = select_day(records)


def main(argv=None) -> int:
    setup_basic_logging()

    parser = build_parser()
    argv = list(argv) if argv is not None else sys.argv[1:]
    args = parser.parse_args(argv)
    if args.command is None:
        args = parser.parse_args(argv + ['show'])
    command = args.command

    if command == 'serve':
        from namaz_dashboard.api.server import run_api_server

        app = PrayerTimesApp(config_path=args.config, watch=True, use_cache=False)
        try:
            run_api_server(app)
        finally:
            app.shutdown()
        return 0

    app = PrayerTimesApp(config_path=args.config)
    try:
        return run_show(app, args)
    except KeyboardInterrupt:
        return 0
    finally:
        app.shutdown()


if __name__ == "__main__":
    sys.exit(main())
