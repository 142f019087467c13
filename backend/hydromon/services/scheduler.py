"""
Scheduled Tasks for the hydroponic monitor

Uses APScheduler to poll sensor_data for new readings on the app's event loop.
"""
import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from hydromon.services.sensor_feed import SensorFeed

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()


def start_scheduler(feed: SensorFeed, interval_seconds: float) -> None:
    """Start the scheduler with the sensor feed job."""
    if not scheduler.running:
        scheduler.add_job(
            feed.poll,
            trigger=IntervalTrigger(seconds=interval_seconds),
            id="sensor_feed",
            name="Sensor reading alert feed",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        scheduler.start()
        logger.info(f"Scheduler started with sensor feed job (interval: {interval_seconds}s)")


def stop_scheduler() -> None:
    """Stop the APScheduler gracefully."""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
