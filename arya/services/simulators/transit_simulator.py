import random
from typing import Dict, List, Optional

from arya.models.mobility import (
    Location, TransitArrival, TransitRoute, TransitSchedule, TransitStatus, TransitStop
)
from arya.utils.geo_utils import distance_to, sort_by_distance

MAJOR_STOPS = {
    "Downtown-Station": Location(id="stop-downtown", latitude=25.2048, longitude=55.2708,
                                 address="Downtown Dubai", district="Downtown"),
    "Marina-Station": Location(id="stop-marina", latitude=25.0761, longitude=55.1704,
                               address="Dubai Marina", district="Marina"),
    "Deira-Station": Location(id="stop-deira", latitude=25.276, longitude=55.3631,
                              address="Deira", district="Deira"),
    "JBR-Station": Location(id="stop-jbr", latitude=25.2003, longitude=55.1577,
                            address="Jumeirah Beach Residence", district="JBR"),
    "Emirates-Metro": Location(id="stop-emirates", latitude=25.1811, longitude=55.2659,
                               address="Emirates", district="Emirates"),
}

METRO_ROUTES = [
    TransitRoute(
        id="metro-red",
        name="Red Line",
        type="metro",
        stops=[MAJOR_STOPS["Downtown-Station"], MAJOR_STOPS["Deira-Station"], MAJOR_STOPS["Emirates-Metro"]],
        schedule=TransitSchedule(start_time="06:00", end_time="00:00", frequency=4),
        current_load=65,
    ),
    TransitRoute(
        id="metro-green",
        name="Green Line",
        type="metro",
        stops=[MAJOR_STOPS["Marina-Station"], MAJOR_STOPS["Downtown-Station"], MAJOR_STOPS["Emirates-Metro"]],
        schedule=TransitSchedule(start_time="06:00", end_time="00:00", frequency=5),
        current_load=55,
    ),
]

BUS_ROUTES = [
    TransitRoute(
        id="bus-f1",
        name="F1 - Downtown to Marina",
        type="bus",
        stops=[MAJOR_STOPS["Downtown-Station"], MAJOR_STOPS["Marina-Station"]],
        schedule=TransitSchedule(start_time="05:30", end_time="23:30", frequency=10),
        current_load=72,
    ),
    TransitRoute(
        id="bus-x91",
        name="X91 - Deira Express",
        type="bus",
        stops=[MAJOR_STOPS["Deira-Station"], MAJOR_STOPS["Emirates-Metro"]],
        schedule=TransitSchedule(start_time="06:00", end_time="23:00", frequency=15),
        current_load=48,
    ),
    TransitRoute(
        id="bus-8",
        name="8 - JBR Loop",
        type="bus",
        stops=[MAJOR_STOPS["JBR-Station"], MAJOR_STOPS["Marina-Station"]],
        schedule=TransitSchedule(start_time="05:00", end_time="00:30", frequency=8),
        current_load=85,
    ),
]

def get_transit_routes() -> List[TransitRoute]:
    return METRO_ROUTES + BUS_ROUTES

def get_transit_stops_near_location(location: Location, radius_km: float = 1,
                                    rng: Optional[random.Random] = None) -> List[TransitStop]:
    """
    Collect stops within the radius, merging every route that serves a stop
    into a single entry with one simulated arrival per route.
    """
    rng = rng or random.Random()
    stops: Dict[str, TransitStop] = {}

    for route in get_transit_routes():
        for stop in route.stops:
            if distance_to(location, stop) > radius_km:
                continue

            arrival = TransitArrival(
                route_id=route.id,
                arrival_time=rng.randint(2, 16),
                load=route.current_load + (rng.random() - 0.5) * 20,
            )
            if stop.id not in stops:
                stops[stop.id] = TransitStop(**stop.model_dump())
            stops[stop.id].routes.append(route.id)
            stops[stop.id].next_arrivals.append(arrival)

    return sort_by_distance(location, stops.values())

def get_transit_status(rng: Optional[random.Random] = None) -> TransitStatus:
    rng = rng or random.Random()
    routes = get_transit_routes()
    metro = [r for r in routes if r.type == "metro"]
    buses = [r for r in routes if r.type == "bus"]

    # roughly one route in five is reported as delayed
    delayed = [r.id for r in routes if rng.random() < 0.2]

    return TransitStatus(
        active_metro_lines=len(metro),
        active_bus_routes=len(buses),
        average_metro_load=round(sum(r.current_load for r in metro) / len(metro)),
        average_bus_load=round(sum(r.current_load for r in buses) / len(buses)),
        delayed_routes=delayed,
    )
