#file: frontend/utils.py

import pandas as pd
from typing import Any, Dict, List

POLLUTANT_LABELS = {"no2": "Nitrogen Dioxide (NO₂)", "pm25": "Fine Particulate Matter (PM2.5)",
                    "o3": "Ozone (O₃)", "pm10": "Coarse Particulate Matter (PM10)"}


def forecast_to_frame(forecast: List[Dict[str, Any]]) -> pd.DataFrame:
    """Convert forecast points into a DataFrame indexed by timestamp order."""
    if not forecast:
        return pd.DataFrame()
    df = pd.DataFrame(forecast)
    df["timestamp"] = pd.to_datetime(df["timestamp"])
    return df.sort_values(by="hour")


def trends_to_frame(trends: Dict[str, List[Dict[str, Any]]]) -> pd.DataFrame:
    """Flatten per-pollutant trend series into long format."""
    rows = [
        {"date": point["date"], "value": point["value"], "pollutant": POLLUTANT_LABELS.get(name, name)}
        for name, series in (trends or {}).items()
        for point in series
    ]
    if not rows:
        return pd.DataFrame()
    df = pd.DataFrame(rows)
    df["date"] = pd.to_datetime(df["date"])
    return df.sort_values(by="date")


def validation_to_frame(pairs: List[Dict[str, Any]]) -> pd.DataFrame:
    if not pairs:
        return pd.DataFrame()
    return pd.DataFrame([
        {
            "station": pair["ground_station"]["station_name"],
            "station_id": pair["ground_station"]["station_id"],
            "lat": pair["ground_station"]["lat"],
            "lon": pair["ground_station"]["lng"],
            "ground": round(pair["ground_station"]["value"], 2),
            "satellite": round(pair["satellite"]["value"], 2),
            "difference_pct": round(pair["percent_difference"], 1),
            "status": pair["status"],
        }
        for pair in pairs
    ])


def format_map_data(cities: List[Dict[str, Any]], selected_city: str,
                    stations: pd.DataFrame = None) -> pd.DataFrame:
    """Combine the supported cities and validation stations into one map layer."""
    rows = [
        {"name": city["name"], "lat": city["lat"], "lon": city["lon"],
         "kind": "Selected city" if city["code"] == selected_city else "City",
         "size": 20 if city["code"] == selected_city else 12}
        for city in cities
    ]
    if stations is not None and not stations.empty:
        rows.extend(
            {"name": row.station, "lat": row.lat, "lon": row.lon, "kind": "Ground station", "size": 6}
            for row in stations.itertuples()
        )
    return pd.DataFrame(rows)
