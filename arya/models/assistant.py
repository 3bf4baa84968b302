from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Literal, Optional, Union
from enum import Enum

from arya.models.mobility import (
    CamelModel, CoolestWalkingTime, EVCharger, Event, ParkingZone, TransitStop
)

ROUTES_PAGE = "/app/routes"

class Intent(str, Enum):
    FIND_CHARGERS = "find_chargers"
    FIND_PARKING = "find_parking"
    HEAT_SAFETY = "heat_safety"
    PLAN_ROUTE = "plan_route"
    FIND_TRANSIT = "find_transit"
    EVENTS = "events"
    GENERAL = "general"

class UserLocation(CamelModel):
    latitude: float
    longitude: float

class ChatMessage(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    role: Literal["user", "assistant"]
    content: str
    timestamp: str
    context: Optional[Dict[str, Any]] = None

class AssistantRequest(CamelModel):
    message: str = ""
    conversation_history: List[ChatMessage] = []
    user_location: Optional[UserLocation] = None

class AssistantAction(CamelModel):
    type: Literal["navigate", "show-route", "open-page", "search"]
    payload: Dict[str, Any] = {}

    @classmethod
    def navigate(cls, page: str = ROUTES_PAGE) -> "AssistantAction":
        return cls(type="navigate", payload={"page": page})

# typed payloads, one per handler
class ChargerPayload(CamelModel):
    chargers: List[EVCharger]
    count: int

class ParkingPayload(CamelModel):
    parking: List[ParkingZone]
    count: int

class TransitPayload(CamelModel):
    stops: List[TransitStop]

class EventsPayload(CamelModel):
    events: List[Event]
    total_events: int

class HeatPayload(CamelModel):
    coolest_time: CoolestWalkingTime
    recommendations: List[str]

class EnrichmentPayload(CamelModel):
    chargers: Optional[List[EVCharger]] = None
    parking: Optional[List[ParkingZone]] = None

AssistantPayload = Union[
    ChargerPayload, ParkingPayload, TransitPayload,
    EventsPayload, HeatPayload, EnrichmentPayload,
]

class AssistantResponse(CamelModel):
    message: str
    data: Optional[AssistantPayload] = None
    actions: List[AssistantAction] = []

class AssistantErrorResponse(CamelModel):
    message: str
    actions: List[AssistantAction] = []
