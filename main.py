"""
Energy Prices Widget entry point.

Runs one refresh by default. With --schedule, keeps refreshing every
REFRESH_MINUTES through APScheduler.
"""
import argparse
import logging
from datetime import timedelta

from energy_widget.config import REFRESH_MINUTES, TIMEZONE
from energy_widget.widget import STATUS_ERROR, run_widget

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Render the upcoming electricity prices widget.")
    parser.add_argument("--schedule", action="store_true", help=f"refresh every {REFRESH_MINUTES} minutes")
    parser.add_argument("--no-cache", action="store_true", help="ignore cached prices for this run")
    return parser.parse_args(argv)


def run_scheduler(max_age=None):
    from apscheduler.schedulers.blocking import BlockingScheduler
    from apscheduler.triggers.interval import IntervalTrigger
    import pytz

    tz = pytz.timezone(TIMEZONE)

    # Create scheduler
    scheduler = BlockingScheduler(timezone=tz)

    scheduler.add_job(
        run_widget,
        trigger=IntervalTrigger(minutes=REFRESH_MINUTES, timezone=tz),
        kwargs={"max_age": max_age},
        id='energy_prices_widget',
        name='Energy Prices Widget',
        replace_existing=True
    )

    logger.info(f"Scheduler initialized. Will refresh every {REFRESH_MINUTES} minutes.")
    logger.info(f"Timezone: {tz}")
    logger.info("Running initial refresh now...")

    # Run once immediately at startup
    try:
        run_widget(max_age=max_age)
    except Exception as e:
        logger.error(f"Error in initial refresh: {e}", exc_info=True)

    # Start scheduler (blocks forever)
    logger.info("Starting scheduler... (this will block and keep the process running)")
    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        logger.info("Scheduler stopped by signal.")


def main(argv=None):
    args = parse_args(argv)
    max_age = timedelta(0) if args.no_cache else None

    if args.schedule:
        run_scheduler(max_age=max_age)
        return 0

    result = run_widget(max_age=max_age)
    print(result.title)
    return 1 if result.status == STATUS_ERROR else 0


if __name__ == "__main__":
    raise SystemExit(main())
