import pytest

from arya.models.assistant import Intent
from arya.services.assistant_service import IntentClassifier

@pytest.mark.parametrize("message", [
    "Where is the nearest charger?",
    "I drive an EV",
    "Can I charge my car downtown?",
    "Any electric vehicle stations?",
])
def test_charger_keywords(message):
    assert IntentClassifier.classify(message) == Intent.FIND_CHARGERS

@pytest.mark.parametrize("message, expected", [
    ("Is there a parking garage nearby?", Intent.FIND_PARKING),
    ("It is so hot today", Intent.HEAT_SAFETY),
    ("Give me directions to the Marina", Intent.PLAN_ROUTE),
    ("Which metro line goes to Deira?", Intent.FIND_TRANSIT),
    ("Any concert this weekend?", Intent.EVENTS),
    ("hello", Intent.GENERAL),
    ("", Intent.GENERAL),
])
def test_single_intent_messages(message, expected):
    assert IntentClassifier.classify(message) == expected

def test_classification_is_case_insensitive():
    assert IntentClassifier.classify("PARKING PLEASE") == Intent.FIND_PARKING

def test_earlier_intent_wins_on_overlap():
    # parking and metro both match, parking is checked first
    assert IntentClassifier.classify("parking near the metro") == Intent.FIND_PARKING
    # charger beats route
    assert IntentClassifier.classify("route to a charger") == Intent.FIND_CHARGERS

def test_substring_matches_are_kept_literally():
    # "events" contains "ev", and chargers are checked before events
    assert IntentClassifier.classify("events this week") == Intent.FIND_CHARGERS
    # "show" is an events keyword, but "how do i get" is checked first under routes
    assert IntentClassifier.classify("how do i get to the show") == Intent.PLAN_ROUTE

def test_none_message_is_general():
    assert IntentClassifier.classify(None) == Intent.GENERAL
