# file: backend/cities.py

from typing import Dict, List

from backend.models import City, Pollutants, Reading, Weather

DEFAULT_CITY = "NYC"

CITY_COORDS: Dict[str, Dict[str, object]] = {
    "NYC": {"lat": 40.7128, "lon": -74.006, "name": "New York City"},
    "LA": {"lat": 34.0522, "lon": -118.2437, "name": "Los Angeles"},
}

# Baseline public AQI readings per city
CITY_AIR_QUALITY: Dict[str, Dict[str, float]] = {
    "NYC": {"aqi": 58, "o3": 52, "no2": 19, "pm25": 13.2, "pm10": 24.8},
    "LA": {"aqi": 75, "o3": 68, "no2": 24, "pm25": 18.5, "pm10": 32.1},
}

# Used when live NOAA data is unavailable
CITY_WEATHER: Dict[str, Dict[str, float]] = {
    "NYC": {"wind_speed": 6.8, "temperature": 18, "precipitation": 0.2},
    "LA": {"wind_speed": 4.2, "temperature": 24, "precipitation": 0.0},
}


class UnknownCityError(ValueError):
    """Raised for a city code outside the supported set."""


def _require_city(city: str) -> str:
    code = (city or "").upper()
    if code not in CITY_COORDS:
        raise UnknownCityError(f"Unknown city '{city}'. Expected one of: {', '.join(CITY_COORDS)}")
    return code


def list_cities() -> List[City]:
    return [City(code=code, **coords) for code, coords in CITY_COORDS.items()]


def get_city_name(city: str) -> str:
    return CITY_COORDS[_require_city(city)]["name"]


def get_reading(city: str) -> Reading:
    """Build a fresh reading for a city from the baseline tables."""
    code = _require_city(city)
    air = CITY_AIR_QUALITY[code]
    return Reading(
        aqi=air["aqi"],
        pollutants=Pollutants(pm25=air["pm25"], pm10=air["pm10"], o3=air["o3"], no2=air["no2"]),
        weather=Weather(**CITY_WEATHER[code]),
    )
