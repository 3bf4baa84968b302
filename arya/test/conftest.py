import pytest
from fastapi.testclient import TestClient

from arya.services.gemini_service import AssistantMode
from arya.test.factories import StubProvider, make_settings

@pytest.fixture
def settings():
    return make_settings()

@pytest.fixture
def provider():
    return StubProvider()

@pytest.fixture
def keyword_mode():
    return AssistantMode(use_ai=False)

@pytest.fixture
def app(settings, provider, keyword_mode):
    from main import create_app
    return create_app(app_settings=settings, mode=keyword_mode, provider=provider)

@pytest.fixture
def client(app):
    return TestClient(app)
