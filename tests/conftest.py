import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app


def fake_completion(content):
    resp = MagicMock()
    resp.choices = [MagicMock(message=MagicMock(content=content))]
    return resp


@pytest.fixture
def local_settings():
    return Settings()


@pytest.fixture
def ai_settings():
    return Settings(openai_api_key="sk-test", model="gpt-4o-mini", temperature=0.7)


@pytest.fixture
def fake_openai():
    client = MagicMock()
    client.chat.completions.create.return_value = fake_completion("  A lovely year ahead.  ")
    return client


@pytest.fixture
def local_client(local_settings):
    return TestClient(create_app(local_settings))


@pytest.fixture
def ai_client(ai_settings, fake_openai):
    return TestClient(create_app(ai_settings, openai_client=fake_openai))
