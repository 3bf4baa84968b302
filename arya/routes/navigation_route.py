from fastapi import APIRouter, Depends, HTTPException, Query, Request
import logging

from arya.models.mobility import CurrentWeather, DirectionsResult, GeocodeResult
from arya.services.navigation_service import (
    ROUTING_PROFILES, GeocodingService, OSRMRoutingService, WeatherService
)

logger = logging.getLogger(__name__)

router = APIRouter()

def get_geocoder(request: Request) -> GeocodingService:
    return request.app.state.geocoder

def get_router_service(request: Request) -> OSRMRoutingService:
    return request.app.state.routing

def get_weather(request: Request) -> WeatherService:
    return request.app.state.weather

@router.get("/geocode", response_model=GeocodeResult)
def geocode(q: str = Query(..., min_length=1), geocoder: GeocodingService = Depends(get_geocoder)):
    result = geocoder.geocode(q)
    if result is None:
        raise HTTPException(status_code=404, detail=f"Could not find '{q}' in Dubai")
    return result

@router.get("/directions", response_model=DirectionsResult)
def directions(from_lat: float, from_lon: float, to_lat: float, to_lon: float,
               profile: str = "driving", routing: OSRMRoutingService = Depends(get_router_service)):
    if profile not in ROUTING_PROFILES:
        raise HTTPException(status_code=400, detail=f"Invalid profile. Use: {', '.join(ROUTING_PROFILES)}")

    result = routing.get_route(from_lat, from_lon, to_lat, to_lon, profile)
    if result is None:
        raise HTTPException(status_code=502, detail="Routing service returned no route")
    return result

@router.get("/weather", response_model=CurrentWeather)
def weather(latitude: float, longitude: float, weather_service: WeatherService = Depends(get_weather)):
    result = weather_service.current(latitude, longitude)
    if result is None:
        raise HTTPException(status_code=502, detail="Weather service unavailable")
    return result
