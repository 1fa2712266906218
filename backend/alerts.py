# file: backend/alerts.py

import logging
import time
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from backend.models import AlertSettings, ThresholdAlert
from backend.store import KeyValueStore
from backend.utils import get_current_time

ALERTS_KEY = "alerts"
SETTINGS_KEY = "alert_settings"
MAX_ALERT_HISTORY = 50

SEVERITY_COLORS = {
    "moderate": "bg-yellow-100 text-yellow-800 border-yellow-300",
    "unhealthy": "bg-orange-100 text-orange-800 border-orange-300",
    "very-unhealthy": "bg-red-100 text-red-800 border-red-300",
    "hazardous": "bg-red-200 text-red-900 border-red-400",
}


def get_alert_settings(store: KeyValueStore) -> AlertSettings:
    stored = store.get(SETTINGS_KEY)
    if not stored:
        return AlertSettings()
    try:
        return AlertSettings(**stored)
    except (TypeError, ValidationError) as e:
        logging.warning(f"Discarding malformed alert settings: {e}")
        return AlertSettings()


def save_alert_settings(store: KeyValueStore, settings: AlertSettings) -> None:
    store.set(SETTINGS_KEY, settings.model_dump())


def get_alert_history(store: KeyValueStore) -> List[ThresholdAlert]:
    try:
        return [ThresholdAlert(**entry) for entry in store.get(ALERTS_KEY, [])]
    except (TypeError, ValidationError) as e:
        logging.warning(f"Discarding malformed alert history: {e}")
        return []


def _history_entries(entries: Any) -> List[Dict[str, Any]]:
    return [entry for entry in entries if isinstance(entry, dict)] if isinstance(entries, list) else []


def add_alert(store: KeyValueStore, alert: ThresholdAlert) -> None:
    """Prepend an alert, keeping only the most recent entries."""

    def prepend(entries):
        return [alert.model_dump()] + _history_entries(entries)[:MAX_ALERT_HISTORY - 1]

    store.update(ALERTS_KEY, prepend, [])


def clear_alerts(store: KeyValueStore) -> None:
    store.set(ALERTS_KEY, [])


def classify_threshold_severity(aqi: int) -> str:
    severity = "moderate"
    if aqi > 200:
        severity = "very-unhealthy"
    elif aqi > 150:
        severity = "unhealthy"
    # TODO: the hazardous branch never fires because aqi > 200 is tested first;
    # move it to the top once the severity thresholds are tuned.
    elif aqi > 300:
        severity = "hazardous"
    return severity


def check_aqi_threshold(store: KeyValueStore, city_code: str, city_name: str, aqi: int) -> Optional[ThresholdAlert]:
    """Record an alert when a watched city reaches the configured threshold and its reading changed."""
    settings = get_alert_settings(store)
    if not settings.enabled or city_code not in settings.cities:
        return None
    if aqi < settings.threshold:
        return None

    alert = ThresholdAlert(
        id=f"{city_code}-{int(time.time() * 1000)}",
        city=city_code,
        city_name=city_name,
        threshold=settings.threshold,
        current_aqi=aqi,
        timestamp=get_current_time(),
        severity=classify_threshold_severity(aqi),
    )
    recorded = []

    def record(entries):
        history = _history_entries(entries)
        latest = next((entry for entry in history if entry.get("city") == city_code), None)
        # An unchanged reading against an unchanged threshold is not a new alert
        if latest and latest.get("current_aqi") == aqi and latest.get("threshold") == settings.threshold:
            return history
        recorded.append(alert)
        return [alert.model_dump()] + history[:MAX_ALERT_HISTORY - 1]

    store.update(ALERTS_KEY, record, [])
    if not recorded:
        return None
    logging.info(f"AQI {aqi} in {city_code} reached threshold {settings.threshold} ({alert.severity})")
    return alert


def get_severity_color(severity: str) -> str:
    return SEVERITY_COLORS[severity]
