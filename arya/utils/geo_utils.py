import math
from typing import Iterable, List, TypeVar

from arya.models.mobility import Location

T = TypeVar("T", bound=Location)

EARTH_RADIUS_KM = 6371

def haversine(lat1, lon1, lat2, lon2):
    # great-circle distance in km
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)

    a = math.sin(delta_phi/2.0)**2 + \
        math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda/2.0)**2

    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1-a))
    return EARTH_RADIUS_KM * c

def distance_to(origin: Location, item: Location) -> float:
    return haversine(origin.latitude, origin.longitude, item.latitude, item.longitude)

def within_radius(origin: Location, items: Iterable[T], radius_km: float) -> List[T]:
    return [item for item in items if distance_to(origin, item) <= radius_km]

def sort_by_distance(origin: Location, items: Iterable[T]) -> List[T]:
    return sorted(items, key=lambda item: distance_to(origin, item))

def user_location(latitude: float, longitude: float, address: str = "Your location") -> Location:
    """Wrap raw coordinates as a Location in Dubai."""
    return Location(
        id="user-location",
        latitude=latitude,
        longitude=longitude,
        address=address,
        district="Dubai",
    )
