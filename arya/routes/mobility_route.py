from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from datetime import datetime, timezone
from typing import Any, Optional
import logging

from arya.models.mobility import APIResponse, HealthConditions
from arya.services.mobility_service import MobilityDataProvider
from arya.services.navigation_service import WeatherService
from arya.utils.geo_utils import user_location

logger = logging.getLogger(__name__)

router = APIRouter()

DATA_TYPES = ("chargers", "parking", "transit", "events")
CHARGER_TYPES = ("slow", "fast", "ultra-fast")

# fallback temperature for hydration advice when the weather lookup fails
DEFAULT_TEMPERATURE = 40.0

def get_provider(request: Request) -> MobilityDataProvider:
    return request.app.state.provider

def get_weather(request: Request) -> WeatherService:
    return request.app.state.weather

def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()

def envelope(data: Any = None, error: Optional[str] = None, status_code: int = 200) -> JSONResponse:
    """Wrap a payload in the {success, data | error, timestamp} shape"""
    body = APIResponse(success=error is None, data=data, error=error, timestamp=_timestamp())
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True)
    )

@router.get("")
def get_mobility_data(type: Optional[str] = None, provider: MobilityDataProvider = Depends(get_provider)):
    if type not in DATA_TYPES:
        logger.warning(f"Mobility API: invalid data type '{type}'")
        return envelope(error="Invalid data type. Use: chargers, parking, transit, or events", status_code=400)

    try:
        if type == "chargers":
            data = provider.all_chargers()
        elif type == "parking":
            data = provider.all_parking()
        elif type == "transit":
            data = provider.transit_routes()
        else:
            data = provider.upcoming_events()

        logger.info(f"Mobility API: returning {len(data)} {type} records")
        return envelope(data=data)

    except Exception as e:
        logger.error(f"Mobility API error: {e}")
        return envelope(error="Failed to fetch mobility data", status_code=500)

@router.get("/chargers")
def get_chargers(type: Optional[str] = None, provider: MobilityDataProvider = Depends(get_provider)):
    if type is None:
        return envelope(data=provider.all_chargers())
    if type not in CHARGER_TYPES:
        raise HTTPException(status_code=400, detail=f"Invalid charger type. Use: {', '.join(CHARGER_TYPES)}")
    return envelope(data=provider.chargers_by_type(type))

@router.get("/chargers/live")
def get_live_chargers(latitude: float, longitude: float,
                      radius_km: float = Query(10, gt=0, le=50),
                      provider: MobilityDataProvider = Depends(get_provider)):
    chargers = provider.live_chargers_near(user_location(latitude, longitude), radius_km)
    logger.info(f"Live chargers: {len(chargers)} within {radius_km}km of ({latitude}, {longitude})")
    return envelope(data=chargers)

@router.get("/chargers/live/{charger_id}")
def get_live_charger(charger_id: str, provider: MobilityDataProvider = Depends(get_provider)):
    charger = provider.live_charger(charger_id)
    if charger is None:
        raise HTTPException(status_code=404, detail="Charger not found")
    return envelope(data=charger)

@router.get("/chargers/{charger_id}/prediction")
def get_charger_prediction(charger_id: str, provider: MobilityDataProvider = Depends(get_provider)):
    charger = provider.charger_with_prediction(charger_id)
    if charger is None:
        raise HTTPException(status_code=404, detail="Charger not found")
    return envelope(data=charger)

@router.get("/parking/cheapest")
def get_cheapest_parking(count: int = Query(10, ge=1, le=30),
                         provider: MobilityDataProvider = Depends(get_provider)):
    return envelope(data=provider.cheapest_parking(count))

@router.get("/parking/stress")
def get_parking_stress(provider: MobilityDataProvider = Depends(get_provider)):
    return envelope(data=provider.parking_stress())

@router.get("/transit/status")
def get_transit_status(provider: MobilityDataProvider = Depends(get_provider)):
    return envelope(data=provider.transit_status())

@router.get("/events/impact")
def get_event_impact(provider: MobilityDataProvider = Depends(get_provider)):
    return envelope(data=provider.event_impact_summary())

@router.get("/events/nearby")
def get_events_nearby(latitude: float, longitude: float,
                      radius_km: float = Query(3, gt=0, le=50),
                      provider: MobilityDataProvider = Depends(get_provider)):
    return envelope(data=provider.events_affecting(user_location(latitude, longitude), radius_km))

@router.get("/health")
def get_health_conditions(latitude: float, longitude: float,
                          provider: MobilityDataProvider = Depends(get_provider),
                          weather_service: WeatherService = Depends(get_weather)):
    weather = weather_service.current(latitude, longitude)
    temperature = weather.temperature if weather else DEFAULT_TEMPERATURE

    conditions = HealthConditions(
        weather=weather,
        hydration=provider.hydration_recommendation(temperature),
        coolest_time=provider.coolest_walking_time(),
        high_risk_areas=provider.high_risk_areas(),
    )
    return envelope(data=conditions)

@router.get("/heat")
def get_heat_index(latitude: float, longitude: float, provider: MobilityDataProvider = Depends(get_provider)):
    heat = provider.heat_index_for([user_location(latitude, longitude)])
    return envelope(data=heat[0])
