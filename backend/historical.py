# file: backend/historical.py

import math
import random
from datetime import date, datetime, timedelta
from typing import Callable, Dict, List, Optional

from backend import config
from backend.models import HistoricalDataPoint
from backend.utils import round_half_up

RandomSource = Callable[[], float]

# city: (baseline AQI, variance)
CITY_BASELINES: Dict[str, tuple] = {
    "NYC": (65, 25),
    "LA": (85, 30),
    "CHI": (70, 20),
    "HOU": (75, 25),
    "PHX": (80, 28),
}
DEFAULT_BASELINE = (70, 25)
AQI_MIN, AQI_MAX = 20, 180

TIME_RANGES = {
    "7d": ("Last 7 Days", 7),
    "30d": ("Last 30 Days", 30),
    "90d": ("Last 90 Days", 90),
}


def _data_date() -> date:
    return datetime.strptime(config.DATA_DATE, "%Y-%m-%d").date()


def _clamp_aqi(aqi: float) -> float:
    return max(AQI_MIN, min(AQI_MAX, aqi))


def generate_historical_data(city: str, days: int = 30, rng: RandomSource = random.random,
                             today: Optional[date] = None) -> List[HistoricalDataPoint]:
    """Daily readings for the last `days` days, oldest first."""
    if days < 1:
        raise ValueError("days must be at least 1")
    today = today or _data_date()
    baseline, variance = CITY_BASELINES.get(city.upper(), DEFAULT_BASELINE)

    data = []
    for i in range(days - 1, -1, -1):
        weekly = math.sin(i / 7) * 10
        noise = (rng() - 0.5) * variance
        aqi = _clamp_aqi(baseline + weekly + noise)
        data.append(HistoricalDataPoint(
            date=(today - timedelta(days=i)).isoformat(),
            aqi=round_half_up(aqi),
            pm25=round_half_up(aqi * 0.4 + rng() * 10),
            pm10=round_half_up(aqi * 0.5 + rng() * 15),
            no2=round_half_up(aqi * 0.3 + rng() * 8),
            o3=round_half_up(aqi * 0.35 + rng() * 12),
            so2=round_half_up(aqi * 0.2 + rng() * 5),
        ))
    return data


def generate_forecast_data(current_aqi: float, days: int = 3, rng: RandomSource = random.random,
                           today: Optional[date] = None) -> List[HistoricalDataPoint]:
    """Daily outlook for the next `days` days with a small random trend."""
    today = today or _data_date()
    data = []
    for i in range(1, days + 1):
        aqi = _clamp_aqi(current_aqi + (rng() - 0.5) * 15)
        data.append(HistoricalDataPoint(
            date=(today + timedelta(days=i)).isoformat(),
            aqi=round_half_up(aqi),
            pm25=round_half_up(aqi * 0.4),
            pm10=round_half_up(aqi * 0.5),
            no2=round_half_up(aqi * 0.3),
            o3=round_half_up(aqi * 0.35),
            so2=round_half_up(aqi * 0.2),
        ))
    return data


def get_time_range_label(time_range: str) -> str:
    return TIME_RANGES[time_range][0]


def get_time_range_days(time_range: str) -> int:
    return TIME_RANGES[time_range][1]
