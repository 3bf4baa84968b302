import logging
import google.generativeai as genai
from google.api_core import exceptions as google_exceptions
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from arya.config.settings import Settings
from arya.models.assistant import (
    AssistantAction, AssistantRequest, AssistantResponse, ChatMessage,
    EnrichmentPayload, UserLocation
)
from arya.services.mobility_service import (
    CHARGER_RADIUS_KM, EVENTS_HORIZON_DAYS, PARKING_RADIUS_KM, TRANSIT_RADIUS_KM, MobilityDataProvider
)
from arya.utils.geo_utils import user_location

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are ARYA, a professional AI-powered mobility assistant for Dubai. Your role is to provide expert navigation and transportation guidance with precision and clarity.

Key capabilities:
1. Plan multi-modal routes (bus, metro, EV, scooter, walking)
2. Predict EV charger availability and pricing
3. Find parking solutions with real-time availability
4. Provide heat safety recommendations based on current conditions
5. Advise on events and crowd impacts on mobility
6. Optimize for user preferences (fastest, cheapest, eco-friendly, coolest)

Response style:
- Be concise and professional - provide essential information efficiently
- Structure responses with clear bullet points or numbered lists
- Focus on actionable recommendations with specific data
- Include safety considerations when relevant
- Maintain a knowledgeable, expert tone

Always prioritize:
- User safety, especially in extreme heat
- Accurate, real-time information
- Personalized recommendations based on context
- Clear, step-by-step guidance

Remember:
- Dubai uses AED currency
- Temperatures can exceed 50°C in summer - mention heat safety when appropriate
- Metro Red and Green lines are the main transit backbone
- Multiple ride-sharing options available (Uber, Careem, Tier scooters, Lime)
- Weekend is Friday-Saturday, Sunday is a workday

When responding:
1. Provide direct, concise answers to the user's query
2. Include specific data points (times, costs, availability numbers)
3. Structure information clearly with bullet points when multiple options exist
4. Mention safety considerations briefly when relevant
5. Offer 2-3 alternatives maximum to avoid overwhelming the user"""

AI_APOLOGY = (
    "I'm having trouble processing your request right now. Please try asking in a different way, "
    "or let me know if you need help with something specific like finding EV chargers, parking, or planning a route."
)

HISTORY_WINDOW = 4
ENRICHMENT_LIMIT = 5

@dataclass(frozen=True)
class AssistantMode:
    """Startup-time choice between the Gemini path and the keyword path"""
    use_ai: bool
    model: Optional[Any] = None

class ModeSelector:

    @staticmethod
    def resolve(settings: Settings) -> AssistantMode:
        if not settings.gemini_configured:
            logger.warning("ModeSelector: GEMINI_API_KEY missing or placeholder, using keyword fallback")
            return AssistantMode(use_ai=False)

        try:
            genai.configure(api_key=settings.GEMINI_API_KEY)
            model = genai.GenerativeModel(settings.GEMINI_MODEL)
            logger.info(f"ModeSelector: Gemini model '{settings.GEMINI_MODEL}' initialized")
            return AssistantMode(use_ai=True, model=model)
        except Exception as e:
            logger.error(f"ModeSelector: Gemini initialization error: {e}, using keyword fallback")
            return AssistantMode(use_ai=False)

class MobilityContextBuilder:
    """Build the textual data bundle sent to Gemini"""

    def __init__(self, provider: MobilityDataProvider):
        self.provider = provider

    def build_context(self, location: Optional[UserLocation]) -> str:
        context_parts = []

        events = self.provider.upcoming_events(EVENTS_HORIZON_DAYS)
        coolest_time = self.provider.coolest_walking_time()

        if location:
            here = user_location(location.latitude, location.longitude, address="User location")

            chargers = self.provider.live_chargers_near(here, CHARGER_RADIUS_KM)
            parking = self.provider.parking_near(here, PARKING_RADIUS_KM)[:3]
            stops = self.provider.transit_stops_near(here, TRANSIT_RADIUS_KM)[:2]

            context_parts.append("NEARBY DATA:")
            context_parts.append(f"EV Chargers within {CHARGER_RADIUS_KM}km: {len(chargers)} available")
            if chargers:
                c = chargers[0]
                context_parts.append(
                    f"Closest charger: {c.operator} ({c.available_sockets}/{c.total_sockets} available) at AED {c.price}/kWh"
                )

            context_parts.append(f"Parking within {PARKING_RADIUS_KM}km: {len(parking)} zones with availability")
            if parking:
                p = parking[0]
                context_parts.append(
                    f"Closest parking: {p.district} ({p.capacity - p.occupied}/{p.capacity} available) at AED {p.hourly_rate}/hour"
                )

            context_parts.append(f"Transit stops within {TRANSIT_RADIUS_KM}km: {len(stops)}")
            if stops:
                context_parts.append(f"Nearest stop: {stops[0].district} with {len(stops[0].routes)} routes")

        context_parts.append("\nCURRENT CONDITIONS:")
        context_parts.append(f"Safest outdoor time: {coolest_time.time_window} ({coolest_time.temperature})")
        context_parts.append(f"Upcoming events this week: {len(events)}")

        return "\n".join(context_parts)

    @staticmethod
    def build_conversation_context(history: List[ChatMessage]) -> str:
        if len(history) <= 1:
            return "This is the start of our conversation."
        lines = [
            f"{'User' if msg.role == 'user' else 'ARYA'}: {msg.content}"
            for msg in history[-HISTORY_WINDOW:]
        ]
        return "Previous conversation:\n" + "\n".join(lines)

    @staticmethod
    def build_location_context(location: Optional[UserLocation]) -> str:
        if not location:
            return "User location not provided."
        return f"User is currently at approximately {location.latitude}, {location.longitude} in Dubai."

    def build_prompt(self, request: AssistantRequest) -> str:
        context = self.build_context(request.user_location)

        return f"""{SYSTEM_PROMPT}

{self.build_location_context(request.user_location)}

{self.build_conversation_context(request.conversation_history)}

Current Dubai mobility data:
{context}

User's latest message: "{request.message}"

Please respond naturally and conversationally as ARYA. Be helpful, specific, and provide actionable advice based on the current data. If you need more information to give the best recommendation, ask follow-up questions."""

class ResponseEnricher:
    """
    Attach structured data to a free-text reply based on what it mentions.
    Each step fails on its own: a broken charger lookup still lets parking through.
    """

    def __init__(self, provider: MobilityDataProvider):
        self.provider = provider

    def enrich(self, text: str, location: Optional[UserLocation]) -> Tuple[EnrichmentPayload, List[AssistantAction]]:
        lowered = text.lower()
        data = EnrichmentPayload()
        actions: List[AssistantAction] = []

        if location and ("charger" in lowered or "ev" in lowered):
            try:
                here = user_location(location.latitude, location.longitude)
                data.chargers = self.provider.live_chargers_near(here, CHARGER_RADIUS_KM)[:ENRICHMENT_LIMIT]
            except Exception as e:
                logger.error(f"ResponseEnricher: charger enrichment failed: {e}")

        if location and "parking" in lowered:
            try:
                here = user_location(location.latitude, location.longitude)
                data.parking = self.provider.parking_near(here, PARKING_RADIUS_KM)[:ENRICHMENT_LIMIT]
            except Exception as e:
                logger.error(f"ResponseEnricher: parking enrichment failed: {e}")

        if "route" in lowered or "direction" in lowered:
            actions.append(AssistantAction.navigate())

        return data, actions

def is_model_not_found(error: Exception) -> bool:
    return isinstance(error, google_exceptions.NotFound) or "not found" in str(error).lower()

class GeminiResponder:

    def __init__(self, model, provider: MobilityDataProvider, settings: Settings):
        self.model = model
        self.settings = settings
        self.context_builder = MobilityContextBuilder(provider)
        self.enricher = ResponseEnricher(provider)

    def _log_available_models(self):
        # diagnostics only, never affects the reply
        try:
            names = [m.name for m in genai.list_models()]
            logger.info(f"GeminiResponder: available models: {names}")
        except Exception as e:
            logger.error(f"GeminiResponder: error listing models: {e}")

    def respond(self, request: AssistantRequest) -> AssistantResponse:
        try:
            prompt = self.context_builder.build_prompt(request)
            response = self.model.generate_content(
                prompt,
                generation_config=genai.types.GenerationConfig(
                    temperature=self.settings.RESPONSE_TEMPERATURE,
                    max_output_tokens=self.settings.MAX_RESPONSE_TOKENS,
                ),
                request_options={"timeout": self.settings.REQUEST_TIMEOUT_SECONDS},
            )
            text = response.text.strip()
            logger.info(f"GeminiResponder: response ({len(text)} chars)")

        except Exception as e:
            logger.error(f"GeminiResponder: Gemini generation error: {e}")
            if is_model_not_found(e):
                self._log_available_models()
            return AssistantResponse(message=AI_APOLOGY, data=EnrichmentPayload(), actions=[])

        data, actions = self.enricher.enrich(text, request.user_location)
        return AssistantResponse(message=text, data=data, actions=actions)
