import random
from datetime import datetime, timedelta
from typing import List, Optional

from arya.models.mobility import AvailabilityPoint, ChargerPrediction, EVCharger, Location
from arya.utils.geo_utils import within_radius

DUBAI_LOCATIONS = [
    {"lat": 25.2048, "lng": 55.2708, "name": "Downtown Dubai"},
    {"lat": 25.0761, "lng": 55.1704, "name": "Business Bay"},
    {"lat": 25.0331, "lng": 55.1716, "name": "Dubai Marina"},
    {"lat": 25.1972, "lng": 55.2744, "name": "Deira"},
    {"lat": 25.276, "lng": 55.3631, "name": "Jumeirah"},
    {"lat": 25.2003, "lng": 55.1577, "name": "JBR"},
    {"lat": 25.148, "lng": 55.2066, "name": "Arabian Ranches"},
    {"lat": 25.0754, "lng": 55.3061, "name": "Al Barsha"},
    {"lat": 25.1811, "lng": 55.2659, "name": "Al Karama"},
    {"lat": 25.1245, "lng": 55.1959, "name": "Dubai Hills Estate"},
]

CHARGER_OPERATORS = [
    "DEWA",
    "Charge Spot UAE",
    "GreenPower",
    "EV Connect",
    "Smart Charge",
]

CHARGER_TYPES = [
    {"type": "slow", "power": 7, "avg_price": 0.8},
    {"type": "fast", "power": 22, "avg_price": 1.2},
    {"type": "ultra-fast", "power": 150, "avg_price": 2.5},
]

AMENITIES = [
    "WiFi",
    "Coffee Shop",
    "Restroom",
    "Shaded Parking",
    "EV Display",
    "Fast Food",
    "Shopping",
]

DEFAULT_CHARGER_COUNT = 45

def generate_charger(charger_id: int, rng: random.Random) -> EVCharger:
    location = rng.choice(DUBAI_LOCATIONS)
    charger_type = rng.choice(CHARGER_TYPES)
    total_sockets = rng.randint(2, 9)
    available_sockets = rng.randint(0, total_sockets)

    predicted_free_time = None
    if available_sockets == 0:
        predicted_free_time = f"{rng.randint(0, 23):02d}:{rng.randint(0, 59):02d}"

    return EVCharger(
        id=f"charger-{charger_id}",
        latitude=location["lat"] + (rng.random() - 0.5) * 0.01,
        longitude=location["lng"] + (rng.random() - 0.5) * 0.01,
        address=f"{location['name']}, Dubai",
        district=location["name"],
        type=charger_type["type"],
        total_sockets=total_sockets,
        available_sockets=available_sockets,
        power_output=charger_type["power"],
        price=round(charger_type["avg_price"] + (rng.random() - 0.5) * 0.4, 2),
        operator=rng.choice(CHARGER_OPERATORS),
        amenities=AMENITIES[:rng.randint(1, 4)],
        predicted_free_time=predicted_free_time,
        reliability=rng.randint(70, 99),
    )

def get_ev_chargers(count: int = DEFAULT_CHARGER_COUNT, rng: Optional[random.Random] = None) -> List[EVCharger]:
    rng = rng or random.Random()
    return [generate_charger(i, rng) for i in range(count)]

def get_chargers_near_location(location: Location, radius_km: float = 5,
                               rng: Optional[random.Random] = None) -> List[EVCharger]:
    return within_radius(location, get_ev_chargers(rng=rng), radius_km)

def get_chargers_by_type(charger_type: str, rng: Optional[random.Random] = None) -> List[EVCharger]:
    return [c for c in get_ev_chargers(rng=rng) if c.type == charger_type]

def get_charger_with_prediction(charger_id: str, now: Optional[datetime] = None,
                                rng: Optional[random.Random] = None) -> Optional[ChargerPrediction]:
    """
    Project availability of one charger over the next 12 hours.
    Returns None when the id is not part of the simulated fleet.
    """
    rng = rng or random.Random()
    now = now or datetime.now()

    charger = next((c for c in get_ev_chargers(rng=rng) if c.id == charger_id), None)
    if charger is None:
        return None

    predictions = []
    for hour in range(12):
        drift = charger.available_sockets + rng.random() * 4 - 2
        predictions.append(AvailabilityPoint(
            time=(now + timedelta(hours=hour)).isoformat(),
            availability=max(0, min(charger.total_sockets, drift)),
        ))

    return ChargerPrediction(**charger.model_dump(), predictions=predictions)
