import random, logging
from datetime import datetime
from typing import Callable, List, Optional

from arya.config.settings import Settings
from arya.models.mobility import (
    ChargerPrediction, CoolestWalkingTime, EVCharger, Event, EventImpactSummary,
    HeatIndex, HydrationRecommendation, Location, ParkingStress, ParkingZone,
    TransitRoute, TransitStatus, TransitStop
)
from arya.services.openchargemap_service import OpenChargeMapService
from arya.services.simulators import (
    ev_simulator, events_simulator, heat_simulator, parking_simulator, transit_simulator
)

logger = logging.getLogger(__name__)

# search radii used by the assistant
CHARGER_RADIUS_KM = 5
PARKING_RADIUS_KM = 2
TRANSIT_RADIUS_KM = 1
EVENTS_HORIZON_DAYS = 7

class MobilityDataProvider:
    """
    Single read-only entry point to every mobility data source.

    Simulated datasets are regenerated on each call from `rng`; pass a seeded
    random.Random (and a fixed `clock`) to get reproducible data. Live charger
    data comes from Open Charge Map and is never cached.
    """

    def __init__(self, settings: Settings, rng: Optional[random.Random] = None,
                 clock: Optional[Callable[[], datetime]] = None,
                 ocm_service: Optional[OpenChargeMapService] = None):
        self.rng = rng
        self.clock = clock or datetime.now
        self.ocm = ocm_service or OpenChargeMapService(settings)

    # chargers
    def all_chargers(self) -> List[EVCharger]:
        return ev_simulator.get_ev_chargers(rng=self.rng)

    def chargers_near(self, location: Location, radius_km: float = 5) -> List[EVCharger]:
        return ev_simulator.get_chargers_near_location(location, radius_km, rng=self.rng)

    def live_chargers_near(self, location: Location, radius_km: float = 5) -> List[EVCharger]:
        return self.ocm.fetch_chargers(location.latitude, location.longitude, radius_km)

    def live_charger(self, charger_id: str) -> Optional[EVCharger]:
        return self.ocm.get_charger_details(charger_id)

    def chargers_by_type(self, charger_type: str) -> List[EVCharger]:
        return ev_simulator.get_chargers_by_type(charger_type, rng=self.rng)

    def charger_with_prediction(self, charger_id: str) -> Optional[ChargerPrediction]:
        return ev_simulator.get_charger_with_prediction(charger_id, now=self.clock(), rng=self.rng)

    # parking
    def all_parking(self) -> List[ParkingZone]:
        return parking_simulator.get_parking_zones(rng=self.rng)

    def parking_near(self, location: Location, radius_km: float = 2) -> List[ParkingZone]:
        return parking_simulator.get_parking_near_location(location, radius_km, rng=self.rng)

    def cheapest_parking(self, count: int = 10) -> List[ParkingZone]:
        return parking_simulator.get_cheapest_parking(count, rng=self.rng)

    def parking_stress(self) -> List[ParkingStress]:
        return parking_simulator.get_parking_stress_level(rng=self.rng)

    # transit
    def transit_routes(self) -> List[TransitRoute]:
        return transit_simulator.get_transit_routes()

    def transit_stops_near(self, location: Location, radius_km: float = 1) -> List[TransitStop]:
        return transit_simulator.get_transit_stops_near_location(location, radius_km, rng=self.rng)

    def transit_status(self) -> TransitStatus:
        return transit_simulator.get_transit_status(rng=self.rng)

    # events
    def upcoming_events(self, days_ahead: int = 30) -> List[Event]:
        return events_simulator.get_events_upcoming(days_ahead, now=self.clock(), rng=self.rng)

    def events_affecting(self, location: Location, radius_km: float = 3) -> List[Event]:
        return events_simulator.get_events_affecting_location(location, radius_km, now=self.clock(), rng=self.rng)

    def event_impact_summary(self) -> EventImpactSummary:
        return events_simulator.get_event_impact_summary(now=self.clock(), rng=self.rng)

    # heat
    def coolest_walking_time(self) -> CoolestWalkingTime:
        return heat_simulator.get_coolest_walking_time(now=self.clock())

    def heat_index_for(self, locations: List[Location]) -> List[HeatIndex]:
        return heat_simulator.get_heat_index_for_locations(locations, now=self.clock(), rng=self.rng)

    def high_risk_areas(self) -> List[HeatIndex]:
        return heat_simulator.get_high_risk_areas(now=self.clock(), rng=self.rng)

    def hydration_recommendation(self, temperature: float) -> HydrationRecommendation:
        return heat_simulator.get_hydration_recommendation(temperature)
