import random, re
from unittest.mock import Mock
import pytest

from arya.models.assistant import AssistantRequest, Intent, UserLocation
from arya.services.assistant_service import AryaAssistant, KeywordResponder, PLACEHOLDER_NAME
from arya.services.gemini_service import AssistantMode
from arya.services.mobility_service import MobilityDataProvider
from arya.services.simulators import parking_simulator
from arya.test.factories import (
    DOWNTOWN, FIXED_NOW, StubProvider, make_charger, make_event, make_parking, make_settings
)

def located(message: str) -> AssistantRequest:
    return AssistantRequest(message=message, user_location=UserLocation(latitude=DOWNTOWN[0], longitude=DOWNTOWN[1]))

@pytest.fixture
def responder(provider):
    return KeywordResponder(provider)

@pytest.mark.parametrize("intent", [Intent.FIND_CHARGERS, Intent.FIND_PARKING, Intent.FIND_TRANSIT])
def test_missing_location_asks_for_it(responder, intent):
    response = responder.respond(intent, AssistantRequest(message="help"))

    assert response.message.endswith("?")
    assert "location" in response.message
    assert response.data is None
    assert response.actions == []

def test_chargers_reports_available_count(responder):
    response = responder.respond(Intent.FIND_CHARGERS, located("Where can I charge?"))

    assert response.message.startswith("I found 2 available EV chargers within 5km.")
    assert "DEWA" in response.message
    assert "AED 1.2/kWh" in response.message
    assert response.data.count == 2
    assert len(response.data.chargers) == 2

def test_chargers_skips_fully_occupied():
    provider = StubProvider(chargers=[
        make_charger("charger-1", available=0, operator="GreenPower"),
        make_charger("charger-2", available=3, operator="EV Connect", price=2.5),
    ])
    response = KeywordResponder(provider).respond(Intent.FIND_CHARGERS, located("charger"))

    assert response.data.count == 1
    assert response.data.chargers[0].id == "charger-2"
    assert "EV Connect charger with 3 available sockets at AED 2.5/kWh" in response.message

def test_chargers_empty_uses_placeholders():
    provider = StubProvider(chargers=[make_charger("charger-1", available=0)])
    response = KeywordResponder(provider).respond(Intent.FIND_CHARGERS, located("charger"))

    assert response.message.startswith("I found 0 available EV chargers")
    assert f"the {PLACEHOLDER_NAME} charger with 0 available sockets at AED 0/kWh" in response.message
    assert response.data.count == 0
    assert response.data.chargers == []

def test_chargers_caps_list_at_five():
    provider = StubProvider(chargers=[make_charger(f"charger-{i}") for i in range(8)])
    response = KeywordResponder(provider).respond(Intent.FIND_CHARGERS, located("charger"))

    assert response.data.count == 8
    assert len(response.data.chargers) == 5

def test_parking_reports_nearest_zone(responder):
    response = responder.respond(Intent.FIND_PARKING, located("parking"))

    assert response.message == (
        "Found 1 available parking zones nearby. "
        "The closest is garage parking in Downtown Dubai at AED 5/hour."
    )
    assert response.data.count == 1

def test_parking_full_zones_use_placeholders():
    provider = StubProvider(parking=[make_parking("parking-1", occupied=100, capacity=100)])
    response = KeywordResponder(provider).respond(Intent.FIND_PARKING, located("parking"))

    assert response.message == (
        f"Found 0 available parking zones nearby. "
        f"The closest is {PLACEHOLDER_NAME} parking in {PLACEHOLDER_NAME} at AED 0/hour."
    )
    assert response.data.parking == []

def test_heat_does_not_need_location(responder):
    response = responder.respond(Intent.HEAT_SAFETY, AssistantRequest(message="so hot"))

    assert "06:00 - 09:00" in response.message
    assert response.message.endswith("Walk early in the morning Carry water")
    assert response.data.recommendations == ["Walk early in the morning", "Carry water"]

def test_route_returns_navigate_action(responder):
    response = responder.respond(Intent.PLAN_ROUTE, AssistantRequest(message="directions"))

    assert response.message.startswith("Route planning requires your destination.")
    assert len(response.actions) == 1
    assert response.actions[0].type == "navigate"
    assert response.actions[0].payload == {"page": "/app/routes"}

def test_transit_reports_next_arrival(responder):
    response = responder.respond(Intent.FIND_TRANSIT, located("metro"))

    assert response.message == (
        "There are 1 transit stops within 1km. "
        "The nearest has 2 routes, with next arrival in 4 minutes."
    )
    assert len(response.data.stops) == 1

def test_transit_without_stops():
    response = KeywordResponder(StubProvider(stops=[])).respond(Intent.FIND_TRANSIT, located("bus"))

    assert response.message == (
        "There are 0 transit stops within 1km. "
        "The nearest has 0 routes, with next arrival in 0 minutes."
    )

def test_events_summarises_next_event(responder):
    response = responder.respond(Intent.EVENTS, AssistantRequest(message="concert"))

    assert response.message == (
        "There are 1 events happening in Dubai this week. "
        "The next major event is Dubai Food Festival at Trade Centre with an expected crowd of 60K people."
    )
    assert response.data.total_events == 1

def test_simulated_parking_rate_is_whole_dirhams():
    provider = StubProvider(parking=[parking_simulator.generate_parking_zone(0, random.Random(3))])
    response = KeywordResponder(provider).respond(Intent.FIND_PARKING, located("parking"))

    assert response.data.count > 0
    assert re.search(r"at AED \d+/hour\.$", response.message)

def test_events_crowd_rounds_half_up():
    provider = StubProvider(events=[make_event(crowd=62500)])
    response = KeywordResponder(provider).respond(Intent.EVENTS, AssistantRequest(message="festival"))

    assert response.message.endswith("with an expected crowd of 63K people.")

def test_events_empty_week():
    response = KeywordResponder(StubProvider(events=[])).respond(Intent.EVENTS, AssistantRequest(message="show"))

    assert response.message == "There are 0 events happening in Dubai this week."
    assert response.data.total_events == 0

def test_general_lists_three_suggestions(responder):
    response = responder.respond(Intent.GENERAL, AssistantRequest(message="hello"))

    assert response.message.startswith("I'm ARYA")
    suggestions = response.message.split("I can help you with ")[1].split(". What would")[0]
    assert suggestions.split(", ") == ["Find EV chargers near me", "Where can I park?", "How do I stay cool?"]
    assert response.actions == []
    assert response.data is None

def test_same_inputs_give_same_text():
    def build():
        provider = MobilityDataProvider(make_settings(), rng=random.Random(7), clock=lambda: FIXED_NOW)
        return KeywordResponder(provider)

    request = located("Where can I charge?")
    first = build().respond(Intent.FIND_CHARGERS, request)
    second = build().respond(Intent.FIND_CHARGERS, request)

    assert first.message == second.message
    assert first.data == second.data

class TestAryaAssistant:

    def test_keyword_mode_classifies_message(self, provider):
        assistant = AryaAssistant(AssistantMode(use_ai=False), provider, make_settings())

        response = assistant.respond(AssistantRequest(message="hello"))

        assert assistant.uses_ai is False
        assert response.message.startswith("I'm ARYA")

    def test_ai_mode_without_model_falls_back(self, provider):
        assistant = AryaAssistant(AssistantMode(use_ai=True, model=None), provider, make_settings())
        assert assistant.uses_ai is False

    def test_ai_mode_uses_model(self, provider):
        model = Mock()
        model.generate_content.return_value = Mock(text="Take the Red Line.")
        assistant = AryaAssistant(AssistantMode(use_ai=True, model=model), provider, make_settings())

        response = assistant.respond(AssistantRequest(message="metro?"))

        assert assistant.uses_ai is True
        assert response.message == "Take the Red Line."
        model.generate_content.assert_called_once()
