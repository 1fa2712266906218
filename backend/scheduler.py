# file: backend/scheduler.py

import threading
import schedule
import logging
import time

from backend.alerts import check_aqi_threshold, get_alert_settings
from backend.cities import CITY_COORDS, get_city_name, get_reading
from backend.store import KeyValueStore

CHECK_INTERVAL_MINUTES = 5


def check_watched_cities(store: KeyValueStore) -> int:
    """Re-check every watched city against the alert threshold. Returns the number of alerts recorded."""
    settings = get_alert_settings(store)
    if not settings.enabled:
        return 0
    recorded = 0
    for city in settings.cities:
        if city not in CITY_COORDS:
            logging.warning(f"Skipping unknown watched city {city}")
            continue
        reading = get_reading(city)
        if check_aqi_threshold(store, city, get_city_name(city), reading.aqi):
            recorded += 1
    return recorded


def run_schedule(store: KeyValueStore) -> None:
    """Schedule periodic threshold checks for watched cities."""

    def job():
        try:
            check_watched_cities(store)
        except Exception as e:
            logging.error(f"Scheduled threshold check failed: {e}")

    schedule.every(CHECK_INTERVAL_MINUTES).minutes.do(job)

    def run_continuously():
        while True:
            schedule.run_pending()
            time.sleep(30)

    thread = threading.Thread(target=run_continuously, daemon=True)
    thread.start()
    logging.info("Scheduler started in background thread")
