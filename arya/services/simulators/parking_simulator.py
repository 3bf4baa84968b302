import random
from typing import List, Optional

from arya.models.mobility import Location, ParkingStress, ParkingZone
from arya.utils.geo_utils import sort_by_distance, within_radius

DUBAI_ZONES = [
    {"name": "Downtown Dubai", "lat": 25.2048, "lng": 55.2708},
    {"name": "Dubai Marina", "lat": 25.0761, "lng": 55.1704},
    {"name": "Business Bay", "lat": 25.0331, "lng": 55.1716},
    {"name": "Deira", "lat": 25.1972, "lng": 55.2744},
    {"name": "Jumeirah", "lat": 25.276, "lng": 55.3631},
    {"name": "JBR", "lat": 25.2003, "lng": 55.1577},
    {"name": "Arabian Ranches", "lat": 25.148, "lng": 55.2066},
    {"name": "Al Barsha", "lat": 25.0754, "lng": 55.3061},
]

PARKING_TYPES = ["street", "garage", "lot"]

# AED per hour
HOURLY_RATES = {"garage": 5, "lot": 3, "street": 2}

NEARBY_POIS = [
    "Shopping Mall",
    "Restaurant",
    "Hotel",
    "Office",
    "Residential",
    "Beach",
]

DEFAULT_ZONE_COUNT = 30

def generate_parking_zone(zone_id: int, rng: random.Random) -> ParkingZone:
    zone = rng.choice(DUBAI_ZONES)
    capacity = rng.randint(50, 249)
    occupied = int(capacity * (rng.random() * 0.9 + 0.1))
    parking_type = rng.choice(PARKING_TYPES)

    return ParkingZone(
        id=f"parking-{zone_id}",
        latitude=zone["lat"] + (rng.random() - 0.5) * 0.02,
        longitude=zone["lng"] + (rng.random() - 0.5) * 0.02,
        address=f"{zone['name']}, Dubai",
        district=zone["name"],
        capacity=capacity,
        occupied=occupied,
        hourly_rate=HOURLY_RATES[parking_type],
        nearby_pois=NEARBY_POIS[:rng.randint(1, 3)],
        walking_distance=rng.randint(50, 849),
        type=parking_type,
    )

def get_parking_zones(count: int = DEFAULT_ZONE_COUNT, rng: Optional[random.Random] = None) -> List[ParkingZone]:
    rng = rng or random.Random()
    return [generate_parking_zone(i, rng) for i in range(count)]

def get_parking_near_location(location: Location, radius_km: float = 2,
                              rng: Optional[random.Random] = None) -> List[ParkingZone]:
    """Zones within the radius, closest first."""
    nearby = within_radius(location, get_parking_zones(rng=rng), radius_km)
    return sort_by_distance(location, nearby)

def get_cheapest_parking(count: int = 10, rng: Optional[random.Random] = None) -> List[ParkingZone]:
    zones = sorted(get_parking_zones(rng=rng), key=lambda z: z.hourly_rate)
    return zones[:count]

def get_parking_stress_level(rng: Optional[random.Random] = None) -> List[ParkingStress]:
    return [
        ParkingStress(
            zone=z.district,
            stress_level=(z.occupied / z.capacity) * 100,
            available=z.capacity - z.occupied,
            total=z.capacity,
        )
        for z in get_parking_zones(rng=rng)
    ]
