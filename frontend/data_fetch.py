#file: frontend/data_fetch.py

import os
import asyncio
import aiohttp
import logging
from typing import Any, Dict, List, Optional

FASTAPI_URL = os.getenv("FASTAPI_URL", "http://localhost:8000")
REQUEST_TIMEOUT = aiohttp.ClientTimeout(total=float(os.getenv("FASTAPI_TIMEOUT", "30")))


async def _request(method: str, path: str, default: Any = None, **kwargs) -> Any:
    """Call the backend and decode JSON, returning `default` on any HTTP or network error."""
    url = f"{FASTAPI_URL}{path}"
    async with aiohttp.ClientSession(timeout=REQUEST_TIMEOUT) as session:
        try:
            async with session.request(method, url, **kwargs) as response:
                if response.status >= 400:
                    logging.error(f"[ERROR] HTTP {response.status} for {path}: {await response.text()}")
                    return default
                return await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logging.error(f"[ERROR] Network request to {path} failed: {e}")
    return default


async def fetch_cities() -> List[Dict[str, Any]]:
    """Fetch the supported cities from FastAPI."""
    return await _request("GET", "/cities", default=[])


async def fetch_aqi(city: str) -> Optional[Dict[str, Any]]:
    """Fetch current reading, forecast, trends and alerts for a city."""
    return await _request("GET", "/aqi", params={"city": city})


async def fetch_health_advisory(aqi: int) -> Optional[Dict[str, Any]]:
    return await _request("GET", "/health_advisory", params={"aqi": aqi})


async def fetch_pollutants() -> List[Dict[str, Any]]:
    return await _request("GET", "/pollutants", default=[])


async def fetch_historical(city: str, time_range: str = "30d") -> List[Dict[str, Any]]:
    return await _request("GET", "/historical", default=[], params={"city": city, "time_range": time_range})


async def fetch_validation_parameters() -> List[Dict[str, str]]:
    return await _request("GET", "/validation/parameters", default=[])


async def fetch_validation(parameter: str) -> Optional[Dict[str, Any]]:
    return await _request("GET", "/validation", params={"parameter": parameter})


async def fetch_export(city: str) -> Optional[bytes]:
    """Download the XLSX export for a city."""
    url = f"{FASTAPI_URL}/export"
    async with aiohttp.ClientSession(timeout=REQUEST_TIMEOUT) as session:
        try:
            async with session.get(url, params={"city": city}) as response:
                response.raise_for_status()
                return await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logging.error(f"Error downloading export: {e}")
    return None


async def fetch_favorites() -> List[Dict[str, Any]]:
    return await _request("GET", "/favorites", default=[])


async def add_favorite(code: str, name: str, country: str) -> List[Dict[str, Any]]:
    return await _request("POST", "/favorites", default=[], json={"code": code, "name": name, "country": country})


async def remove_favorite(code: str) -> List[Dict[str, Any]]:
    return await _request("DELETE", f"/favorites/{code}", default=[])


async def fetch_alert_settings() -> Dict[str, Any]:
    return await _request("GET", "/alerts/settings", default={"enabled": False, "threshold": 100, "cities": []})


async def save_alert_settings(settings: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    return await _request("PUT", "/alerts/settings", json=settings)


async def fetch_alert_history() -> List[Dict[str, Any]]:
    return await _request("GET", "/alerts/history", default=[])


async def clear_alert_history() -> List[Dict[str, Any]]:
    return await _request("DELETE", "/alerts/history", default=[])


async def analyze(location: str, aqi: int, pollutants: Dict[str, Any]) -> Optional[str]:
    """Ask the backend for an AI health analysis."""
    result = await _request("POST", "/ai/analyze", json={"location": location, "aqi": aqi, "pollutants": pollutants})
    return result.get("analysis") if result else None


async def chat(messages: List[Dict[str, str]]) -> Optional[str]:
    result = await _request("POST", "/ai/chat", json={"messages": messages})
    return result.get("reply") if result else None
