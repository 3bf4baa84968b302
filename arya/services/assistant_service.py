import logging
from typing import Callable, Dict, List, Optional, Tuple

from arya.config.settings import Settings
from arya.models.assistant import (
    AssistantAction, AssistantRequest, AssistantResponse, ChargerPayload, EventsPayload,
    HeatPayload, Intent, ParkingPayload, TransitPayload, UserLocation
)
from arya.services.gemini_service import AssistantMode, GeminiResponder
from arya.services.mobility_service import (
    CHARGER_RADIUS_KM, EVENTS_HORIZON_DAYS, PARKING_RADIUS_KM, TRANSIT_RADIUS_KM, MobilityDataProvider
)
from arya.utils.geo_utils import user_location

logger = logging.getLogger(__name__)

PLACEHOLDER_NAME = "unnamed"

TOP_CHARGERS = 5
TOP_PARKING = 5
TOP_STOPS = 3
TOP_EVENTS = 5

GENERAL_SUGGESTIONS = [
    "Find EV chargers near me",
    "Where can I park?",
    "How do I stay cool?",
    "Show me events today",
    "Best transit route to...",
]

class IntentClassifier:

    # evaluated top to bottom, first hit wins
    INTENT_KEYWORDS: List[Tuple[Intent, List[str]]] = [
        (Intent.FIND_CHARGERS, ['charger', 'ev', 'charge', 'electric']),
        (Intent.FIND_PARKING, ['parking', 'park', 'spot', 'garage']),
        (Intent.HEAT_SAFETY, ['heat', 'hot', 'temperature', 'sun', 'walk safely', 'hydration', 'water']),
        (Intent.PLAN_ROUTE, ['route', 'directions', 'way to', 'how do i get', 'go to']),
        (Intent.FIND_TRANSIT, ['bus', 'metro', 'transit', 'public transport', 'train']),
        (Intent.EVENTS, ['event', 'concert', 'festival', 'game', 'show']),
    ]

    @classmethod
    def classify(cls, message: str) -> Intent:
        """Classify message"""
        message_lower = (message or "").lower()

        for intent, keywords in cls.INTENT_KEYWORDS:
            if any(kw in message_lower for kw in keywords):
                return intent
        return Intent.GENERAL

class KeywordResponder:
    """Templated replies for each intent, used when Gemini is not configured"""

    def __init__(self, provider: MobilityDataProvider):
        self.provider = provider
        self._handlers: Dict[Intent, Callable[[AssistantRequest], AssistantResponse]] = {
            Intent.FIND_CHARGERS: self.handle_chargers,
            Intent.FIND_PARKING: self.handle_parking,
            Intent.HEAT_SAFETY: self.handle_heat,
            Intent.PLAN_ROUTE: self.handle_route,
            Intent.FIND_TRANSIT: self.handle_transit,
            Intent.EVENTS: self.handle_events,
            Intent.GENERAL: self.handle_general,
        }

    def respond(self, intent: Intent, request: AssistantRequest) -> AssistantResponse:
        return self._handlers[intent](request)

    @staticmethod
    def _here(location: UserLocation):
        return user_location(location.latitude, location.longitude)

    def handle_chargers(self, request: AssistantRequest) -> AssistantResponse:
        if not request.user_location:
            return AssistantResponse(
                message="To find EV chargers near you, please share your current location. "
                        "How many kilometers away are you comfortable traveling?",
                actions=[],
            )

        chargers = self.provider.chargers_near(self._here(request.user_location), CHARGER_RADIUS_KM)
        available = [c for c in chargers if c.available_sockets > 0]
        nearest = available[0] if available else None

        operator = nearest.operator if nearest else PLACEHOLDER_NAME
        sockets = nearest.available_sockets if nearest else 0
        price = nearest.price if nearest else 0

        return AssistantResponse(
            message=f"I found {len(available)} available EV chargers within {CHARGER_RADIUS_KM}km. "
                    f"The closest one is the {operator} charger with {sockets} available sockets at AED {price}/kWh.",
            data=ChargerPayload(chargers=available[:TOP_CHARGERS], count=len(available)),
        )

    def handle_parking(self, request: AssistantRequest) -> AssistantResponse:
        if not request.user_location:
            return AssistantResponse(
                message="To find parking, please share your location. Would you prefer cheap rates or close proximity?",
                actions=[],
            )

        zones = self.provider.parking_near(self._here(request.user_location), PARKING_RADIUS_KM)
        available = [z for z in zones if z.occupied < z.capacity]
        nearest = available[0] if available else None

        parking_type = nearest.type if nearest else PLACEHOLDER_NAME
        district = nearest.district if nearest else PLACEHOLDER_NAME
        rate = nearest.hourly_rate if nearest else 0

        return AssistantResponse(
            message=f"Found {len(available)} available parking zones nearby. "
                    f"The closest is {parking_type} parking in {district} at AED {rate}/hour.",
            data=ParkingPayload(parking=available[:TOP_PARKING], count=len(available)),
        )

    def handle_heat(self, request: AssistantRequest) -> AssistantResponse:
        coolest_time = self.provider.coolest_walking_time()

        return AssistantResponse(
            message=f"For outdoor activities in Dubai, the safest time to go out is between "
                    f"{coolest_time.time_window} when temperatures are around {coolest_time.temperature}. "
                    f"{' '.join(coolest_time.recommendations)}",
            data=HeatPayload(coolest_time=coolest_time, recommendations=coolest_time.recommendations),
        )

    def handle_route(self, request: AssistantRequest) -> AssistantResponse:
        return AssistantResponse(
            message="Route planning requires your destination. Where would you like to go? "
                    "Also, what's your priority: speed, cost, eco-friendliness, or comfort?",
            actions=[AssistantAction.navigate()],
        )

    def handle_transit(self, request: AssistantRequest) -> AssistantResponse:
        if not request.user_location:
            return AssistantResponse(
                message="To show you transit options, please share your current location. "
                        "Which area would you like to travel to?",
                actions=[],
            )

        stops = self.provider.transit_stops_near(self._here(request.user_location), TRANSIT_RADIUS_KM)
        nearest = stops[0] if stops else None

        route_count = len(nearest.routes) if nearest else 0
        next_arrival = nearest.next_arrivals[0].arrival_time if nearest and nearest.next_arrivals else 0

        return AssistantResponse(
            message=f"There are {len(stops)} transit stops within {TRANSIT_RADIUS_KM}km. "
                    f"The nearest has {route_count} routes, with next arrival in {next_arrival} minutes.",
            data=TransitPayload(stops=stops[:TOP_STOPS]),
        )

    def handle_events(self, request: AssistantRequest) -> AssistantResponse:
        events = self.provider.upcoming_events(EVENTS_HORIZON_DAYS)

        message = f"There are {len(events)} events happening in Dubai this week."
        if events:
            first = events[0]
            message += (
                f" The next major event is {first.name} at {first.location.district} "
                f"with an expected crowd of {int(first.expected_crowd / 1000 + 0.5)}K people."
            )

        return AssistantResponse(
            message=message,
            data=EventsPayload(events=events[:TOP_EVENTS], total_events=len(events)),
        )

    def handle_general(self, request: AssistantRequest) -> AssistantResponse:
        return AssistantResponse(
            message=f"I'm ARYA, your Dubai mobility assistant. I can help you with "
                    f"{', '.join(GENERAL_SUGGESTIONS[:3])}. What would you like to know?",
            actions=[],
        )

class AryaAssistant:
    """
    Entry point of the assistant pipeline.
    The mode is fixed at construction; each request goes either to Gemini or
    through the keyword classifier and its handlers.
    """

    def __init__(self, mode: AssistantMode, provider: MobilityDataProvider, settings: Settings):
        self.mode = mode
        self.keywords = KeywordResponder(provider)
        self.gemini: Optional[GeminiResponder] = None
        if mode.use_ai and mode.model is not None:
            self.gemini = GeminiResponder(mode.model, provider, settings)

    @property
    def uses_ai(self) -> bool:
        return self.gemini is not None

    def respond(self, request: AssistantRequest) -> AssistantResponse:
        if self.gemini is not None:
            logger.info("AryaAssistant: using Gemini for response")
            return self.gemini.respond(request)

        intent = IntentClassifier.classify(request.message)
        logger.info(f"AryaAssistant: Gemini unavailable, keyword intent '{intent.value}'")
        return self.keywords.respond(intent, request)
