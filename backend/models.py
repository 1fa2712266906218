#file: backend/models.py

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Literal, Optional, Tuple, Union


class Pollutants(BaseModel):
    model_config = ConfigDict(frozen=True)

    pm25: float = Field(..., ge=0, description="PM2.5 concentration (µg/m³)")
    pm10: float = Field(..., ge=0, description="PM10 concentration (µg/m³)")
    o3: float = Field(..., ge=0, description="O3 concentration (µg/m³)")
    no2: float = Field(..., ge=0, description="NO2 concentration (µg/m³)")


class Weather(BaseModel):
    model_config = ConfigDict(frozen=True)

    wind_speed: float = Field(..., ge=0, description="Wind speed (m/s)")
    temperature: float = Field(..., description="Air temperature (°C)")
    precipitation: float = Field(..., ge=0, description="Precipitation (mm)")


class Reading(BaseModel):
    """Snapshot of one city's air quality and weather at one instant."""
    model_config = ConfigDict(frozen=True)

    aqi: int = Field(..., ge=0)
    pollutants: Pollutants
    weather: Weather


class CurrentConditions(Reading):
    timestamp: str


class ForecastPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    hour: int = Field(..., ge=0, le=23)
    aqi: int = Field(..., ge=0)
    o3: int = Field(..., ge=0)
    no2: int = Field(..., ge=0)
    pm25: float = Field(..., ge=0)
    timestamp: str


class TrendPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: str
    value: Union[int, float]


class Trends(BaseModel):
    model_config = ConfigDict(frozen=True)

    no2: List[TrendPoint]
    pm25: List[TrendPoint]
    o3: List[TrendPoint]


class Alert(BaseModel):
    model_config = ConfigDict(frozen=True)

    severity: Literal["moderate", "high"]
    message: str
    pollutant: str
    value: Union[int, float]
    timestamp: str


class AQIResponse(BaseModel):
    city: str
    current: CurrentConditions
    forecast: List[ForecastPoint]
    trends: Trends
    alerts: List[Alert]
    dataSource: str
    dataDate: str


class AQICategory(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: str
    color: str
    bg_color: str
    range: Tuple[int, int]
    health_implications: str
    cautionary_statement: str


class HealthAdvisory(BaseModel):
    model_config = ConfigDict(frozen=True)

    icon: str
    title: str
    content: str
    color: str
    priority: Literal["high", "medium", "low"]


class HealthAdvisoryResponse(BaseModel):
    aqi: int
    category: AQICategory
    advisories: List[HealthAdvisory]
    sensitive_groups: List[str]


class City(BaseModel):
    code: str
    name: str
    lat: float
    lon: float


class FavoriteLocation(BaseModel):
    code: str
    name: str
    country: str
    added_at: Optional[str] = None


class AlertSettings(BaseModel):
    enabled: bool = False
    threshold: int = Field(100, ge=0, le=500)
    cities: List[str] = Field(default_factory=list)


class ThresholdAlert(BaseModel):
    id: str
    city: str
    city_name: str
    threshold: int
    current_aqi: int
    timestamp: str
    severity: Literal["moderate", "unhealthy", "very-unhealthy", "hazardous"]


class PollutantLevels(BaseModel):
    pm25: Optional[float] = None
    pm10: Optional[float] = None
    no2: Optional[float] = None
    o3: Optional[float] = None
    so2: Optional[float] = None
    co: Optional[float] = None


class AnalyzeRequest(BaseModel):
    location: str
    aqi: int = Field(..., ge=0)
    pollutants: Dict[str, Any] = Field(default_factory=dict)


class ChatMessage(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str


class ChatRequest(BaseModel):
    messages: List[ChatMessage] = Field(..., min_length=1)


class VectorMetadata(BaseModel):
    location: str
    timestamp: str
    aqi: int
    pollutants: PollutantLevels = Field(default_factory=PollutantLevels)


class VectorIndexRequest(BaseModel):
    id: str
    location: str
    aqi: int = Field(..., ge=0)
    pollutants: PollutantLevels = Field(default_factory=PollutantLevels)


class VectorSearchRequest(BaseModel):
    location: str
    aqi: int = Field(..., ge=0)
    pollutants: PollutantLevels = Field(default_factory=PollutantLevels)


class VectorSearchResult(BaseModel):
    id: str
    score: float
    metadata: VectorMetadata


class SatelliteReading(BaseModel):
    lat: float
    lng: float
    value: Union[int, float]
    timestamp: str
    parameter: str


class GroundStationReading(SatelliteReading):
    station_id: str
    station_name: str


class ValidationPair(BaseModel):
    satellite: SatelliteReading
    ground_station: GroundStationReading
    difference: float
    percent_difference: float
    status: Literal["good", "acceptable", "poor"]


class HistoricalDataPoint(BaseModel):
    date: str
    aqi: int
    pm25: int
    pm10: int
    no2: int
    o3: int
    so2: int
