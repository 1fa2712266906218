# file: backend/forecast.py

"""Hourly AQI forecast, pollutant alerts and synthesized 7-day trends.

The forecast is a simplified linear heuristic, not a fitted regression.
Every random draw goes through ``rng`` (a zero-argument callable returning a
float in [0, 1)) so callers can pin the jitter; ``rng=lambda: 0.5`` zeroes it.
"""

import math
import random
from datetime import date, datetime, timedelta
from typing import Callable, Dict, List, Optional

from backend import config
from backend.models import Alert, ForecastPoint, TrendPoint, Trends
from backend.utils import as_utc, round_half_up, today_utc

RandomSource = Callable[[], float]

FORECAST_HOURS = 24
TREND_DAYS = 7

# Linear coefficients
WIND_COEF = -2.5
TEMPERATURE_COEF = 0.8
PRECIPITATION_COEF = -5
O3_COEF = 0.4
NO2_COEF = 0.3

# (first hour, last hour, AQI bump)
TIME_OF_DAY_EFFECTS = [
    (7, 9, 12),    # morning rush
    (17, 19, 15),  # evening rush
    (12, 14, 8),   # midday
]

NO2_HIGH, NO2_MODERATE = 40, 25        # WHO guideline
O3_HIGH, O3_MODERATE = 100, 70         # WHO guideline
PM25_HIGH, PM25_MODERATE = 35, 15      # EPA standard
FORECAST_AQI_HIGH = 150

TREND_FLOORS = {"no2": 5, "pm25": 3, "o3": 20}

ALERT_TEMPLATES: Dict[str, Dict[str, str]] = {
    "en": {
        "no2_high": "🚨 Critical NO₂ level ({value} µg/m³) in {city}. Avoid outdoor exercise and keep windows closed.",
        "no2_moderate": "⚠️ Elevated NO₂ ({value} µg/m³) in {city}. Sensitive groups should limit time outdoors.",
        "o3_high": "🚨 Dangerous ozone O₃ level ({value} µg/m³) in {city}. Stay indoors unless necessary.",
        "o3_moderate": "⚠️ Elevated ozone O₃ ({value} µg/m³) in {city}. Avoid strenuous outdoor activity.",
        "pm25_high": "🚨 High PM2.5 concentration ({value} µg/m³) in {city}. Wear an N95 mask outdoors.",
        "pm25_moderate": "⚠️ Moderate PM2.5 level ({value} µg/m³) in {city}. People with respiratory conditions should take care.",
        "aqi_high": "🚨 Forecast: unhealthy air quality (AQI {value}) in {city} within the next 24 hours.",
    },
    "ru": {
        "no2_high": "🚨 Критический уровень NO₂ ({value} мкг/м³) в {city}. Избегайте физических нагрузок на улице. Закройте окна.",
        "no2_moderate": "⚠️ Повышенный NO₂ ({value} мкг/м³) в {city}. Чувствительным группам рекомендуется ограничить время на улице.",
        "o3_high": "🚨 Опасный уровень озона O₃ ({value} мкг/м³) в {city}. Не выходите на улицу без необходимости.",
        "o3_moderate": "⚠️ Повышенный озон O₃ ({value} мкг/м³) в {city}. Избегайте интенсивных физических нагрузок на улице.",
        "pm25_high": "🚨 Высокая концентрация PM2.5 ({value} мкг/м³) в {city}. Используйте маски N95 при выходе на улицу.",
        "pm25_moderate": "⚠️ Умеренный уровень PM2.5 ({value} мкг/м³) в {city}. Людям с респираторными заболеваниями следует быть осторожными.",
        "aqi_high": "🚨 Прогноз: вредное качество воздуха (ИКВ {value}) в {city} в ближайшие 24 часа.",
    },
}

# City names in the grammatical form each template expects
LOCALIZED_CITY_NAMES: Dict[str, Dict[str, str]] = {
    "en": {"NYC": "New York City", "LA": "Los Angeles"},
    "ru": {"NYC": "Нью-Йорке", "LA": "Лос-Анджелесе"},
}


class ForecastInputError(ValueError):
    """Raised when a reading value is missing or not a finite number."""


def _require_finite(**values: float) -> None:
    for name, value in values.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise ForecastInputError(f"{name} must be a finite number, got {value!r}")


def _jitter(rng: RandomSource, spread: float) -> float:
    return (rng() - 0.5) * spread


def time_of_day_effect(hour: int) -> int:
    """AQI bump for rush hours and midday."""
    for first, last, bump in TIME_OF_DAY_EFFECTS:
        if first <= hour <= last:
            return bump
    return 0


def generate_forecast(current_aqi: float, o3: float, no2: float, pm25: float,
                      wind_speed: float, temperature: float, precipitation: float,
                      rng: RandomSource = random.random,
                      now: Optional[datetime] = None) -> List[ForecastPoint]:
    """Forecast AQI and pollutant levels for each of the next 24 hours."""
    _require_finite(current_aqi=current_aqi, o3=o3, no2=no2, pm25=pm25, wind_speed=wind_speed,
                    temperature=temperature, precipitation=precipitation)
    start = as_utc(now)

    baseline = (current_aqi
                + WIND_COEF * (wind_speed / 10)
                + TEMPERATURE_COEF * (temperature / 25)
                + PRECIPITATION_COEF * precipitation
                + O3_COEF * (o3 / 50)
                + NO2_COEF * (no2 / 25))
    pm25_shift = 3 if wind_speed < 5 else -2

    forecast = []
    for hour in range(FORECAST_HOURS):
        bump = time_of_day_effect(hour)
        aqi = baseline + bump + _jitter(rng, 6)
        forecast_o3 = max(0, o3 + math.sin((hour - 6) / 4) * 12 + _jitter(rng, 5))
        forecast_no2 = max(0, no2 + bump * 0.5 + _jitter(rng, 3))
        forecast_pm25 = max(0, pm25 + pm25_shift + _jitter(rng, 2))

        forecast.append(ForecastPoint(
            hour=hour,
            aqi=max(0, round_half_up(aqi)),
            o3=round_half_up(forecast_o3),
            no2=round_half_up(forecast_no2),
            pm25=round_half_up(forecast_pm25, 1),
            timestamp=(start + timedelta(hours=hour)).isoformat(),
        ))
    return forecast


def _format_value(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def generate_alerts(forecast: List[ForecastPoint], city: str, o3: float, no2: float, pm25: float,
                    now: Optional[datetime] = None, locale: Optional[str] = None) -> List[Alert]:
    """Evaluate every threshold rule independently against the current reading and forecast peak."""
    locale = locale or config.ALERT_LOCALE
    templates = ALERT_TEMPLATES.get(locale, ALERT_TEMPLATES["en"])
    city_name = LOCALIZED_CITY_NAMES.get(locale, LOCALIZED_CITY_NAMES["en"]).get(city, city)
    timestamp = as_utc(now).isoformat()

    def alert(key: str, severity: str, pollutant: str, value: float) -> Alert:
        message = templates[key].format(value=_format_value(value), city=city_name)
        return Alert(severity=severity, message=message, pollutant=pollutant, value=value, timestamp=timestamp)

    alerts = []
    if no2 > NO2_HIGH:
        alerts.append(alert("no2_high", "high", "NO2", no2))
    elif no2 > NO2_MODERATE:
        alerts.append(alert("no2_moderate", "moderate", "NO2", no2))

    if o3 > O3_HIGH:
        alerts.append(alert("o3_high", "high", "O3", o3))
    elif o3 > O3_MODERATE:
        alerts.append(alert("o3_moderate", "moderate", "O3", o3))

    if pm25 > PM25_HIGH:
        alerts.append(alert("pm25_high", "high", "PM2.5", pm25))
    elif pm25 > PM25_MODERATE:
        alerts.append(alert("pm25_moderate", "moderate", "PM2.5", pm25))

    if forecast:
        peak = max(point.aqi for point in forecast)
        if peak > FORECAST_AQI_HIGH:
            alerts.append(alert("aqi_high", "high", "AQI", peak))
    return alerts


def generate_trends(no2: float, pm25: float, o3: float,
                    rng: RandomSource = random.random,
                    today: Optional[date] = None) -> Trends:
    """Synthesize a 7-day series per pollutant ending today, anchored to the current values."""
    _require_finite(no2=no2, pm25=pm25, o3=o3)
    today = today or today_utc()

    series: Dict[str, List[TrendPoint]] = {"no2": [], "pm25": [], "o3": []}
    for days_back in range(TREND_DAYS - 1, -1, -1):
        day = (today - timedelta(days=days_back)).isoformat()
        day_factor = (TREND_DAYS - days_back) / TREND_DAYS
        variation = _jitter(rng, 0.3)

        no2_value = round_half_up(no2 * (0.7 + day_factor * 0.3 + variation))
        pm25_value = round_half_up(pm25 * (0.6 + rng() * 0.6), 1)
        o3_value = round_half_up(o3 * (0.8 + math.sin(days_back / 2) * 0.3 + variation))

        series["no2"].append(TrendPoint(date=day, value=max(TREND_FLOORS["no2"], no2_value)))
        series["pm25"].append(TrendPoint(date=day, value=max(TREND_FLOORS["pm25"], pm25_value)))
        series["o3"].append(TrendPoint(date=day, value=max(TREND_FLOORS["o3"], o3_value)))
    return Trends(**series)
