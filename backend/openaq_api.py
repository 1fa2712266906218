# file: backend/openaq_api.py

import aiohttp
import asyncio
import logging
import ssl
from typing import Any, Dict

import certifi

from backend import config

# OpenAQ parameter ids: pm10, pm25, o3 (ppm), co, no2, so2
OPENAQ_PARAMETER_IDS = "2,3,7,10,19,130"
OPENAQ_LIMIT = 200


def build_locations_url(lat: str, lng: str, radius: str) -> str:
    return (f"{config.OPENAQ_URL}/locations?coordinates={lat},{lng}&radius={radius}"
            f"&limit={OPENAQ_LIMIT}&order_by=id&parameters_id={OPENAQ_PARAMETER_IDS}")


async def fetch_openaq_locations(lat: str, lng: str, radius: str = "25000") -> Dict[str, Any]:
    """Fetch monitoring locations near a point. Failures come back as an empty result with an error label."""
    api_key = config.OPENAQ_API_KEY
    if not api_key:
        logging.error("Missing OPENAQ_API_KEY environment variable")
        return {
            "error": "OpenAQ API key not configured",
            "message": "Please add OPENAQ_API_KEY to your environment variables",
            "results": [],
        }

    url = build_locations_url(lat, lng, radius)
    logging.info(f"Fetching OpenAQ data for lat={lat}, lng={lng}, radius={radius}")
    ssl_context = ssl.create_default_context(cafile=certifi.where())
    timeout = aiohttp.ClientTimeout(total=config.HTTP_TIMEOUT)
    headers = {"Accept": "application/json", "X-API-Key": api_key}

    try:
        async with aiohttp.ClientSession(connector=aiohttp.TCPConnector(ssl=ssl_context), timeout=timeout) as session:
            async with session.get(url, headers=headers) as response:
                if response.status in (401, 403):
                    logging.error(f"OpenAQ rejected the API key: HTTP {response.status}")
                    return {
                        "error": "Invalid OpenAQ API key",
                        "message": "Please check your OPENAQ_API_KEY environment variable",
                        "results": [],
                    }
                if response.status != 200:
                    error_text = await response.text()
                    logging.error(f"OpenAQ API error: HTTP {response.status} {error_text}")
                    return {"results": [], "meta": {}, "error": f"OpenAQ API error: {response.status}"}
                data = await response.json()
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        logging.error(f"Error fetching OpenAQ data: {e!r}")
        return {"results": [], "meta": {}, "error": str(e) or type(e).__name__}

    results = data.get("results") or []
    logging.info(f"OpenAQ data received: {len(results)} locations")
    return {"results": results, "meta": data.get("meta") or {}}
