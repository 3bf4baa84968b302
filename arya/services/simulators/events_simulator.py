import random
from datetime import datetime, timedelta
from typing import List, Optional

from arya.models.mobility import (
    Event, EventImpactSummary, ImpactZone, Location, MobilityImpact
)
from arya.utils.geo_utils import within_radius

MAJOR_VENUES = [
    {"name": "Global Village", "lat": 25.1153, "lng": 55.1521, "default_crowd": 50000},
    {"name": "Expo City Dubai", "lat": 25.0969, "lng": 55.1689, "default_crowd": 30000},
    {"name": "Downtown Dubai", "lat": 25.1965, "lng": 55.2684, "default_crowd": 100000},
    {"name": "Dubai Mall", "lat": 25.1972, "lng": 55.2744, "default_crowd": 75000},
    {"name": "Emirates Stadium", "lat": 25.1103, "lng": 55.1377, "default_crowd": 60000},
    {"name": "Hatta Dam Area", "lat": 25.0697, "lng": 55.5219, "default_crowd": 5000},
]

EVENT_TYPES = [
    "Concert",
    "Sports Event",
    "Festival",
    "Conference",
    "Market",
    "Exhibition",
]

DISTRICTS = ["Downtown Dubai", "Business Bay", "Marina", "Deira", "Al Karama"]

PARKING_CLOSURES = {
    "Downtown Dubai": ["P1-Downtown", "P2-Downtown"],
    "Business Bay": ["P1-Bay", "P3-Bay"],
    "Marina": ["Marina-North", "Marina-South"],
    "Deira": ["Deira-A", "Deira-B", "Deira-C"],
    "Al Karama": ["Karama-Main"],
}

ROUTE_DIVERSIONS = {
    "Downtown Dubai": ["E11 towards Marina", "Emaar Boulevard"],
    "Business Bay": ["Sheikh Zayed Road alternate"],
    "Marina": ["JBR Corniche", "Marina Promenade"],
    "Deira": ["Al Khaleej Road", "Port Saeed"],
    "Al Karama": ["Al Fahidi Street"],
}

CANDIDATE_EVENTS = 8
HIGH_CROWD_THRESHOLD = 50000

def generate_event(event_id: int, now: datetime, rng: random.Random) -> Event:
    venue = MAJOR_VENUES[event_id % len(MAJOR_VENUES)]
    event_type = rng.choice(EVENT_TYPES)
    start = now + timedelta(days=rng.randint(0, 29))
    end = start + timedelta(hours=3 if rng.random() > 0.5 else 6)

    radius_km = 2 if event_type == "Sports Event" else 1.5
    affected = DISTRICTS[:rng.randint(1, 3)]
    crowd = int(venue["default_crowd"] * (0.5 + rng.random() * 0.5))

    return Event(
        id=f"event-{event_id}",
        name=f"{event_type} at {venue['name']}",
        location=Location(
            id=f"venue-{event_id}",
            latitude=venue["lat"],
            longitude=venue["lng"],
            address=f"{venue['name']}, Dubai",
            district=venue["name"],
        ),
        start_time=start.isoformat(),
        end_time=end.isoformat(),
        expected_crowd=crowd,
        impact_zone=ImpactZone(latitude=venue["lat"], longitude=venue["lng"], radius_km=radius_km),
        affected_areas=affected,
        mobility_impact=MobilityImpact(
            parking_closures=[p for d in affected for p in PARKING_CLOSURES.get(d, [])],
            transit_delays=rng.randint(5, 34),
            route_diversions=[r for d in affected for r in ROUTE_DIVERSIONS.get(d, [])],
        ),
    )

def get_events_upcoming(days_ahead: int = 30, now: Optional[datetime] = None,
                        rng: Optional[random.Random] = None) -> List[Event]:
    """Events starting between now and now + days_ahead."""
    rng = rng or random.Random()
    now = now or datetime.now()
    horizon = now + timedelta(days=days_ahead)

    events = []
    for i in range(CANDIDATE_EVENTS):
        event = generate_event(i, now, rng)
        if now <= datetime.fromisoformat(event.start_time) <= horizon:
            events.append(event)
    return events

def get_events_affecting_location(location: Location, radius_km: float = 3,
                                  now: Optional[datetime] = None,
                                  rng: Optional[random.Random] = None) -> List[Event]:
    events = get_events_upcoming(now=now, rng=rng)
    venues = within_radius(location, [e.location for e in events], radius_km)
    venue_ids = {v.id for v in venues}
    return [e for e in events if e.location.id in venue_ids]

def get_event_impact_summary(now: Optional[datetime] = None,
                             rng: Optional[random.Random] = None) -> EventImpactSummary:
    events = get_events_upcoming(now=now, rng=rng)

    affected = []
    for event in events:
        for area in event.affected_areas:
            if area not in affected:
                affected.append(area)

    total_delays = sum(e.mobility_impact.transit_delays for e in events)

    return EventImpactSummary(
        total_events=len(events),
        high_crowd_events=[e for e in events if e.expected_crowd > HIGH_CROWD_THRESHOLD],
        affected_areas=affected,
        estimated_delays=total_delays // len(events) if events else 0,
    )
