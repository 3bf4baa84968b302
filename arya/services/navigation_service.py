import requests, logging
from geopy.geocoders import Nominatim
from typing import Optional

from arya.config.settings import Settings
from arya.models.mobility import CurrentWeather, DirectionsResult, GeocodeResult, RouteStep

logger = logging.getLogger(__name__)

ROUTING_PROFILES = ("driving", "walking")

class WeatherService:

    def __init__(self, settings: Settings):
        self.url = settings.OPEN_METEO_URL
        self.timeout = settings.REQUEST_TIMEOUT_SECONDS

    def current(self, latitude: float, longitude: float) -> Optional[CurrentWeather]:
        """Current temperature from Open-Meteo, None when unavailable"""
        try:
            response = requests.get(
                self.url,
                params={
                    "latitude": latitude,
                    "longitude": longitude,
                    "current": "temperature_2m,apparent_temperature",
                },
                timeout=self.timeout
            )
            response.raise_for_status()
            current = response.json().get("current") or {}

            if current.get("temperature_2m") is None:
                logger.error("WeatherService: no current temperature in response")
                return None

            return CurrentWeather(
                latitude=latitude,
                longitude=longitude,
                temperature=current["temperature_2m"],
                apparent_temperature=current.get("apparent_temperature"),
            )

        except Exception as e:
            logger.error(f"WeatherService: weather lookup failed: {e}")
            return None

class GeocodingService:

    def __init__(self, settings: Settings, country: str = "United Arab Emirates"):
        self.geolocator = Nominatim(user_agent=settings.NOMINATIM_USER_AGENT)
        self.timeout = settings.REQUEST_TIMEOUT_SECONDS
        self.country = country

    def geocode(self, place_name: str) -> Optional[GeocodeResult]:
        """
        Convert a place name in Dubai to coordinates.
        Returns None if the place is not found or the lookup fails.
        """
        try:
            query = f"{place_name}, Dubai, {self.country}"
            location = self.geolocator.geocode(query, language="en", timeout=self.timeout)

            if location is None:
                logger.error(f"GeocodingService: could not geocode '{place_name}'")
                return None

            logger.info(f"GeocodingService: geocoded '{place_name}': ({location.latitude}, {location.longitude})")
            return GeocodeResult(
                query=place_name,
                latitude=location.latitude,
                longitude=location.longitude,
                address=location.address,
            )

        except Exception as e:
            logger.error(f"GeocodingService: geocoding error: {e}")
            return None

class OSRMRoutingService:

    def __init__(self, settings: Settings):
        self.base_url = settings.OSRM_URL
        self.timeout = settings.REQUEST_TIMEOUT_SECONDS

    def get_route(self, from_lat: float, from_lon: float, to_lat: float, to_lon: float,
                  profile: str = "driving") -> Optional[DirectionsResult]:
        """Route between two points, None when OSRM has no answer"""
        if profile not in ROUTING_PROFILES:
            raise ValueError(f"Unsupported routing profile: {profile}")

        try:
            url = f"{self.base_url}/route/v1/{profile}/{from_lon},{from_lat};{to_lon},{to_lat}"
            response = requests.get(
                url,
                params={
                    "overview": "full",
                    "steps": "true",
                    "geometries": "geojson"
                },
                timeout=self.timeout
            )

            if response.status_code == 200:
                data = response.json()

                if data.get('code') == 'Ok' and data.get('routes'):
                    route = data['routes'][0]

                    steps = []
                    for leg in route.get('legs', []):
                        for step in leg.get('steps', []):
                            maneuver = step.get('maneuver') or {}
                            instruction = maneuver.get('instruction') or " ".join(
                                part for part in (maneuver.get('type'), maneuver.get('modifier'), step.get('name')) if part
                            )
                            steps.append(RouteStep(instruction=instruction, distance=step.get('distance', 0)))

                    result = DirectionsResult(
                        profile=profile,
                        distance=route['distance'],
                        duration=route['duration'],
                        steps=steps,
                        geometry=route.get('geometry'),
                    )
                    logger.info(f"OSRMRoutingService: route found: {result.distance/1000:.1f}km, {result.duration/60:.0f} minutes")
                    return result

            logger.error(f"OSRMRoutingService: no route found (status {response.status_code})")
            return None

        except Exception as e:
            logger.error(f"OSRMRoutingService: routing error: {e}")
            return None
