# file: backend/main.py

import logging
import random
import uvicorn
from fastapi import Depends, FastAPI, Query, Response
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Any, Callable, Dict, List, Optional

from backend import config
from backend.alerts import clear_alerts, get_alert_history, get_alert_settings, save_alert_settings
from backend.aqi_utils import get_aqi_category, get_health_advisories, get_sensitive_population_alerts
from backend.cities import DEFAULT_CITY, UnknownCityError, get_reading, list_cities
from backend.export import XLSX_MEDIA_TYPE, export_filename, export_to_excel, generate_export_table
from backend.favorites import add_favorite, get_favorites, remove_favorite
from backend.forecast import ForecastInputError, generate_alerts, generate_forecast, generate_trends
from backend.historical import TIME_RANGES, generate_forecast_data, generate_historical_data, get_time_range_days
from backend.llm import LanguageModel, build_analysis_prompt, get_language_model
from backend.models import AQIResponse, AlertSettings, AnalyzeRequest, ChatRequest, City, CurrentConditions, \
    FavoriteLocation, HealthAdvisoryResponse, HistoricalDataPoint, ThresholdAlert, VectorIndexRequest, \
    VectorMetadata, VectorSearchRequest
from backend.openaq_api import fetch_openaq_locations
from backend.pollutant_info import POLLUTANTS_INFO, PollutantInfo, get_pollutant_info
from backend.scheduler import run_schedule
from backend.store import JsonFileStore, KeyValueStore
from backend.utils import get_current_time
from backend.validation import VALIDATION_PARAMETERS, generate_validation_data, summarize_validation
from backend.vector_search import VectorSearchService, get_vector_search

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

AQI_CACHE_CONTROL = "public, s-maxage=300, stale-while-revalidate=600"


@lru_cache(maxsize=1)
def get_store() -> KeyValueStore:
    return JsonFileStore(config.STORE_PATH)


def get_random_source() -> Callable[[], float]:
    return random.random


def error_response(status_code: int, error: str, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, **extra})


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the threshold-check scheduler on startup."""
    if config.ENABLE_SCHEDULER:
        run_schedule(get_store())
    yield


app = FastAPI(
    title="AirGuard - Air Quality Monitoring",
    description="Air quality forecasts, alerts and health advice with OpenAQ, language model and vector search integrations.",
    version="0.1",
    lifespan=lifespan
)


@app.get("/cities", response_model=List[City])
async def cities():
    """List the cities served by /aqi."""
    return list_cities()


@app.get("/aqi", response_model=AQIResponse)
async def aqi(
    response: Response,
    city: str = Query(DEFAULT_CITY, description="City code (e.g., 'NYC', 'LA')"),
    rng: Callable[[], float] = Depends(get_random_source)
):
    """Current reading, 24-hour forecast, 7-day trends and alerts for a city."""
    logging.info(f"Building AQI report for city: {city}")
    try:
        code = city.upper()
        reading = get_reading(code)
        pollutants, weather = reading.pollutants, reading.weather

        forecast = generate_forecast(reading.aqi, pollutants.o3, pollutants.no2, pollutants.pm25,
                                     weather.wind_speed, weather.temperature, weather.precipitation, rng=rng)
        alerts = generate_alerts(forecast, code, pollutants.o3, pollutants.no2, pollutants.pm25)
        trends = generate_trends(pollutants.no2, pollutants.pm25, pollutants.o3, rng=rng)
    except (UnknownCityError, ForecastInputError) as e:
        logging.warning(f"Rejected AQI request: {e}")
        return error_response(400, str(e))
    except Exception as e:
        logging.error(f"API error: {e}")
        return error_response(500, "Failed to fetch air quality data")

    response.headers["Cache-Control"] = AQI_CACHE_CONTROL
    return AQIResponse(
        city=code,
        current=CurrentConditions(timestamp=get_current_time(), **reading.model_dump()),
        forecast=forecast,
        trends=trends,
        alerts=alerts,
        dataSource=config.DATA_SOURCE,
        dataDate=config.DATA_DATE,
    )


@app.get("/health_advisory", response_model=HealthAdvisoryResponse)
async def health_advisory(aqi: int = Query(..., ge=0, description="Air Quality Index value")):
    """Category, advice cards and sensitive-group warnings for an AQI value."""
    return HealthAdvisoryResponse(
        aqi=aqi,
        category=get_aqi_category(aqi),
        advisories=get_health_advisories(aqi),
        sensitive_groups=get_sensitive_population_alerts(aqi),
    )


@app.get("/pollutants", response_model=List[PollutantInfo])
async def pollutants():
    return list(POLLUTANTS_INFO.values())


@app.get("/pollutants/{pollutant_id}", response_model=PollutantInfo)
async def pollutant(pollutant_id: str):
    info = get_pollutant_info(pollutant_id)
    if info is None:
        return error_response(404, f"Unknown pollutant '{pollutant_id}'")
    return info


@app.get("/openaq")
async def openaq(
    lat: Optional[str] = Query(None, description="Latitude"),
    lng: Optional[str] = Query(None, description="Longitude"),
    radius: str = Query("25000", description="Search radius in meters")
):
    """Proxy nearby monitoring locations from OpenAQ."""
    if not lat or not lng:
        return error_response(400, "Missing lat or lng parameters")
    return await fetch_openaq_locations(lat, lng, radius)


@app.post("/ai/analyze")
async def ai_analyze(request: AnalyzeRequest, model: Optional[LanguageModel] = Depends(get_language_model)):
    """Ask the language model for a health analysis of a reading."""
    if model is None:
        return error_response(503, "Language model not configured")
    try:
        analysis = await model.complete(build_analysis_prompt(request.location, request.aqi, request.pollutants))
    except Exception as e:
        logging.error(f"Language model analysis failed: {e}")
        return error_response(502, "Language model request failed")
    return {"analysis": analysis}


@app.post("/ai/chat")
async def ai_chat(request: ChatRequest, model: Optional[LanguageModel] = Depends(get_language_model)):
    """Continue a conversation with the air quality assistant."""
    if model is None:
        return error_response(503, "Language model not configured")
    try:
        reply = await model.chat([message.model_dump() for message in request.messages])
    except Exception as e:
        logging.error(f"Language model chat failed: {e}")
        return error_response(502, "Language model request failed")
    return {"reply": reply}


@app.post("/vector/index")
async def vector_index(request: VectorIndexRequest, service: VectorSearchService = Depends(get_vector_search)):
    """Store an embedding of a reading for later similarity search."""
    if not await service.initialize():
        return error_response(503, "Vector search not configured")
    metadata = VectorMetadata(location=request.location, timestamp=get_current_time(), aqi=request.aqi,
                              pollutants=request.pollutants)
    try:
        await service.index_reading(request.id, metadata)
    except Exception as e:
        logging.error(f"Error indexing vector {request.id}: {e}")
        return error_response(502, "Vector index request failed")
    return {"success": True, "id": request.id}


@app.post("/vector/search")
async def vector_search(request: VectorSearchRequest, service: VectorSearchService = Depends(get_vector_search)):
    """Find past readings similar to the given one."""
    if not await service.initialize():
        return error_response(503, "Vector search not configured")
    metadata = VectorMetadata(location=request.location, timestamp=get_current_time(), aqi=request.aqi,
                              pollutants=request.pollutants)
    try:
        results = await service.find_similar_patterns(request.location, metadata)
    except Exception as e:
        logging.error(f"Error searching similar patterns: {e}")
        return error_response(502, "Vector search request failed")
    return {"results": [result.model_dump() for result in results]}


@app.get("/historical", response_model=List[HistoricalDataPoint])
async def historical(
    city: str = Query(DEFAULT_CITY, description="City code"),
    days: int = Query(30, ge=1, le=365, description="Number of days"),
    time_range: Optional[str] = Query(None, description="One of 7d, 30d, 90d; overrides days"),
    rng: Callable[[], float] = Depends(get_random_source)
):
    """Daily history for a city, oldest first."""
    if time_range is not None:
        if time_range not in TIME_RANGES:
            return error_response(400, f"Unknown time range '{time_range}'")
        days = get_time_range_days(time_range)
    return generate_historical_data(city, days, rng=rng)


@app.get("/historical/forecast", response_model=List[HistoricalDataPoint])
async def historical_forecast(
    aqi: int = Query(..., ge=0, description="Current AQI"),
    days: int = Query(3, ge=1, le=14, description="Number of days ahead"),
    rng: Callable[[], float] = Depends(get_random_source)
):
    return generate_forecast_data(aqi, days, rng=rng)


@app.get("/validation")
async def validation(
    parameter: str = Query("no2", description="Parameter id (e.g., 'no2', 'pm25')"),
    rng: Callable[[], float] = Depends(get_random_source)
):
    """Satellite vs ground-station comparison for one parameter."""
    if parameter not in {p["id"] for p in VALIDATION_PARAMETERS}:
        return error_response(400, f"Unknown parameter '{parameter}'")
    pairs = generate_validation_data(parameter, rng=rng)
    return {"parameter": parameter, "pairs": [pair.model_dump() for pair in pairs],
            "counts": summarize_validation(pairs)}


@app.get("/validation/parameters")
async def validation_parameters():
    return VALIDATION_PARAMETERS


@app.get("/export")
async def export(
    city: str = Query(DEFAULT_CITY, description="City code"),
    rng: Callable[[], float] = Depends(get_random_source)
):
    """Download the last 30 days as an Excel workbook."""
    code = city.upper()
    try:
        rows = generate_export_table(code, rng=rng)
    except UnknownCityError as e:
        return error_response(400, str(e))
    return Response(
        content=export_to_excel(rows),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{export_filename(code)}"'},
    )


@app.get("/favorites", response_model=List[FavoriteLocation])
async def favorites(store: KeyValueStore = Depends(get_store)):
    return get_favorites(store)


@app.post("/favorites", response_model=List[FavoriteLocation])
async def create_favorite(location: FavoriteLocation, store: KeyValueStore = Depends(get_store)):
    """Add a favorite location; existing codes are left untouched."""
    return add_favorite(store, location.code, location.name, location.country)


@app.delete("/favorites/{code}", response_model=List[FavoriteLocation])
async def delete_favorite(code: str, store: KeyValueStore = Depends(get_store)):
    return remove_favorite(store, code)


@app.get("/alerts/settings", response_model=AlertSettings)
async def alert_settings(store: KeyValueStore = Depends(get_store)):
    return get_alert_settings(store)


@app.put("/alerts/settings", response_model=AlertSettings)
async def update_alert_settings(settings: AlertSettings, store: KeyValueStore = Depends(get_store)):
    save_alert_settings(store, settings)
    return settings


@app.get("/alerts/history", response_model=List[ThresholdAlert])
async def alert_history(store: KeyValueStore = Depends(get_store)):
    """Threshold alerts, newest first."""
    return get_alert_history(store)


@app.delete("/alerts/history", response_model=List[ThresholdAlert])
async def delete_alert_history(store: KeyValueStore = Depends(get_store)):
    clear_alerts(store)
    return []


if __name__ == "__main__" :
    uvicorn.run(app, host = "0.0.0.0", port = 8000, log_level="info")
