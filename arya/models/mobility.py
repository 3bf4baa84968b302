from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Literal, Optional

ChargerType = Literal["slow", "fast", "ultra-fast"]
ParkingType = Literal["street", "garage", "lot"]
TransitType = Literal["bus", "metro", "tram"]
RiskLevel = Literal["low", "moderate", "high", "extreme"]
HydrationLevel = Literal["low", "moderate", "high", "critical"]

class CamelModel(BaseModel):
    # snake_case in python, camelCase on the wire
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class Location(CamelModel):
    id: str
    latitude: float
    longitude: float
    address: str
    district: str
    zone: Optional[str] = None

class EVCharger(Location):
    type: ChargerType
    total_sockets: int
    available_sockets: int
    power_output: float  # kW
    price: float  # AED per kWh
    operator: str
    amenities: List[str] = []
    predicted_free_time: Optional[str] = None  # HH:MM
    reliability: int  # 0-100

class AvailabilityPoint(CamelModel):
    time: str
    availability: float

class ChargerPrediction(EVCharger):
    predictions: List[AvailabilityPoint]

class ParkingZone(Location):
    capacity: int
    occupied: int
    hourly_rate: int  # AED
    nearby_pois: List[str] = Field(default=[], alias="nearbyPOIs")
    walking_distance: int  # meters
    type: ParkingType

class ParkingStress(CamelModel):
    zone: str
    stress_level: float
    available: int
    total: int

class TransitSchedule(CamelModel):
    start_time: str
    end_time: str
    frequency: int  # minutes

class TransitRoute(CamelModel):
    id: str
    name: str
    type: TransitType
    stops: List[Location]
    schedule: TransitSchedule
    current_load: int  # 0-100

class TransitArrival(CamelModel):
    route_id: str
    arrival_time: int  # minutes
    load: float

class TransitStop(Location):
    routes: List[str] = []
    next_arrivals: List[TransitArrival] = []

class TransitStatus(CamelModel):
    active_metro_lines: int
    active_bus_routes: int
    average_metro_load: int
    average_bus_load: int
    delayed_routes: List[str]

class ImpactZone(CamelModel):
    latitude: float
    longitude: float
    radius_km: float

class MobilityImpact(CamelModel):
    parking_closures: List[str]
    transit_delays: int  # minutes
    route_diversions: List[str]

class Event(CamelModel):
    id: str
    name: str
    location: Location
    start_time: str
    end_time: str
    expected_crowd: int
    impact_zone: ImpactZone
    affected_areas: List[str]
    mobility_impact: MobilityImpact

class EventImpactSummary(CamelModel):
    total_events: int
    high_crowd_events: List[Event]
    affected_areas: List[str]
    estimated_delays: int

class TimeWindow(CamelModel):
    start_time: str
    end_time: str

class HeatIndex(CamelModel):
    location: Location
    temperature: float
    feels_like: float
    uv_index: float
    risk_level: RiskLevel
    safe_walking_window: Optional[TimeWindow] = None

class CoolestWalkingTime(CamelModel):
    time_window: str
    temperature: str
    recommendations: List[str]

class HydrationRecommendation(CamelModel):
    level: HydrationLevel
    water_per_hour: int  # ml
    message: str

class CurrentWeather(CamelModel):
    latitude: float
    longitude: float
    temperature: float
    apparent_temperature: Optional[float] = None

class HealthConditions(CamelModel):
    weather: Optional[CurrentWeather] = None
    hydration: HydrationRecommendation
    coolest_time: CoolestWalkingTime
    high_risk_areas: List[HeatIndex]

class APIResponse(CamelModel):
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    timestamp: str

class RouteStep(CamelModel):
    instruction: str
    distance: float  # meters

class DirectionsResult(CamelModel):
    profile: str
    distance: float  # meters
    duration: float  # seconds
    steps: List[RouteStep] = []
    geometry: Optional[Dict[str, Any]] = None

class GeocodeResult(CamelModel):
    query: str
    latitude: float
    longitude: float
    address: Optional[str] = None
