import random
from datetime import datetime
from typing import List, Optional

from arya.models.mobility import (
    CoolestWalkingTime, HeatIndex, HydrationRecommendation, Location, TimeWindow
)

DUBAI_LOCATIONS = [
    {"lat": 25.2048, "lng": 55.2708, "name": "Downtown Dubai"},
    {"lat": 25.276, "lng": 55.3631, "name": "Jumeirah"},
    {"lat": 25.1245, "lng": 55.1959, "name": "Dubai Hills"},
    {"lat": 25.0761, "lng": 55.1704, "name": "Marina"},
    {"lat": 25.1972, "lng": 55.2744, "name": "Deira"},
]

BASE_RECOMMENDATIONS = [
    "Drink plenty of water",
    "Wear light-colored clothing",
    "Use SPF 50+ sunscreen",
    "Wear a hat and sunglasses",
    "Take breaks in shade",
]

def calculate_feels_like(temp: float, humidity: float) -> float:
    """Simplified heat index (Rothfusz regression), Celsius in and out."""
    c1 = -42.379
    c2 = 2.04901523
    c3 = 10.14333127
    c4 = -0.22475541
    c5 = -0.00683783
    c6 = -0.05481717
    c7 = 0.00122874
    c8 = 0.00085282
    c9 = -0.00000199

    t = (temp * 9) / 5 + 32
    rh = humidity

    a = c1 + c2 * t + c3 * rh
    b = c4 * t * rh + c5 * t * t + c6 * rh * rh
    c = c7 * t * t * rh + c8 * t * rh * rh + c9 * t * t * rh * rh
    hi_f = a + b + c

    return ((hi_f - 32) * 5) / 9

def risk_level_for(feels_like: float) -> str:
    if feels_like > 50:
        return "extreme"
    if feels_like > 45:
        return "high"
    if feels_like > 40:
        return "moderate"
    return "low"

def generate_heat_index(location: Location, now: datetime, rng: random.Random) -> HeatIndex:
    hour = now.hour

    base_temp = 25
    if 11 <= hour <= 15:
        base_temp = 42 + rng.random() * 6
    elif 9 <= hour <= 17:
        base_temp = 35 + rng.random() * 8
    elif 17 <= hour <= 20:
        base_temp = 32 + rng.random() * 8

    temperature = base_temp + (rng.random() - 0.5) * 3
    humidity = 40 + rng.random() * 40
    feels_like = calculate_feels_like(temperature, humidity)

    if 10 <= hour <= 16:
        uv_index = 9 + rng.random() * 3
    else:
        uv_index = 3 + rng.random() * 4
    uv_index = max(0, min(12, uv_index))

    risk_level = risk_level_for(feels_like)
    window = None
    if risk_level in ("high", "extreme"):
        window = TimeWindow(start_time="06:00", end_time="09:00")

    return HeatIndex(
        location=location,
        temperature=round(temperature, 1),
        feels_like=round(feels_like, 1),
        uv_index=round(uv_index, 1),
        risk_level=risk_level,
        safe_walking_window=window,
    )

def get_heat_index_for_locations(locations: List[Location], now: Optional[datetime] = None,
                                 rng: Optional[random.Random] = None) -> List[HeatIndex]:
    rng = rng or random.Random()
    now = now or datetime.now()
    return [generate_heat_index(loc, now, rng) for loc in locations]

def get_high_risk_areas(now: Optional[datetime] = None,
                        rng: Optional[random.Random] = None) -> List[HeatIndex]:
    locations = [
        Location(
            id=f"loc-{loc['name'].lower().replace(' ', '-')}",
            latitude=loc["lat"],
            longitude=loc["lng"],
            address=loc["name"],
            district=loc["name"],
            zone=loc["name"],
        )
        for loc in DUBAI_LOCATIONS
    ]
    indices = get_heat_index_for_locations(locations, now=now, rng=rng)
    return [hi for hi in indices if hi.risk_level in ("high", "extreme")]

def get_coolest_walking_time(now: Optional[datetime] = None) -> CoolestWalkingTime:
    hour = (now or datetime.now()).hour
    time_window = "06:00 - 09:00"
    temperature = "25-32°C"
    recommendations = list(BASE_RECOMMENDATIONS)

    if 17 <= hour <= 20:
        time_window = "17:00 - 20:00"
        temperature = "32-38°C"
        recommendations.insert(2, "Peak UV hours have passed")
    elif hour >= 20:
        time_window = "20:00 - 22:00"
        temperature = "28-32°C"
        recommendations.append("Evening walks are ideal")

    return CoolestWalkingTime(
        time_window=time_window,
        temperature=temperature,
        recommendations=recommendations,
    )

def get_hydration_recommendation(temperature: float) -> HydrationRecommendation:
    if temperature > 48:
        return HydrationRecommendation(
            level="critical",
            water_per_hour=500,
            message="Extreme heat: Drink 500ml of water every hour. Seek air conditioning.",
        )
    if temperature > 43:
        return HydrationRecommendation(
            level="high",
            water_per_hour=400,
            message="Hot conditions: Drink 400ml of water every hour. Take frequent breaks.",
        )
    if temperature > 38:
        return HydrationRecommendation(
            level="moderate",
            water_per_hour=300,
            message="Warm conditions: Drink 300ml of water every hour. Stay in shade when possible.",
        )
    return HydrationRecommendation(
        level="low",
        water_per_hour=200,
        message="Normal conditions: Drink water regularly throughout the day.",
    )
