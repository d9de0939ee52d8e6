"""Shared pytest fixtures for all test suites."""

from typing import Any

import pytest

from backend.app.config import Settings
from backend.app.models.grounding import GenerationSettings, ModelReply
from backend.app.models.preferences import PreferenceModel


class FakeModelClient:
    """Model client returning a canned reply and recording calls."""

    def __init__(self, reply: ModelReply | None = None, error: Exception | None = None):
        self.reply = reply or ModelReply(text="")
        self.error = error
        self.calls: list[tuple[str, GenerationSettings]] = []

    async def generate(self, *, prompt: str, settings: GenerationSettings) -> ModelReply:
        self.calls.append((prompt, settings))
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment and .env files."""
    return Settings(_env_file=None, gemini_api_key=None, regional_focus=None)


@pytest.fixture
def kyoto_preferences() -> PreferenceModel:
    """Preferences without a location (structured mode)."""
    return PreferenceModel(
        destination="Kyoto",
        duration=3,
        interests="food",
        budget=500,
        currency="USD",
    )


@pytest.fixture
def located_preferences() -> PreferenceModel:
    """Preferences with a location (grounded mode)."""
    return PreferenceModel(
        destination="Kyoto",
        duration=3,
        interests="food",
        budget=500,
        currency="USD",
        latitude=35.0116,
        longitude=135.7681,
    )


@pytest.fixture
def kyoto_itinerary_json() -> dict[str, Any]:
    """Schema-valid itinerary as the model would return it."""
    return {
        "destination": "Kyoto",
        "duration": 3,
        "overview": "Three days of food in Kyoto.",
        "itinerary": [
            {
                "day": 1,
                "theme": "Nishiki Market",
                "activities": [
                    {"time": "9:00 AM", "description": "Breakfast at Nishiki Market"},
                    {"time": "1:00 PM", "description": "Matcha tasting in Uji"},
                ],
            },
            {
                "day": 2,
                "theme": "Gion",
                "activities": [{"time": "Evening", "description": "Kaiseki dinner in Gion"}],
            },
            {"day": 3, "theme": "Departure", "activities": []},
        ],
        "packingSuggestions": ["Comfortable shoes", "Umbrella"],
        "notes": "Many small restaurants are cash only.",
        "budgetSummary": "500 USD covers street food and one kaiseki dinner.",
    }


@pytest.fixture
def make_client() -> type[FakeModelClient]:
    """Factory for fake model clients: make_client(reply=..., error=...)."""
    return FakeModelClient
