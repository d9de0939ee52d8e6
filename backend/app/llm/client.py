"""Model client for itinerary generation with Gemini integration.

Security: Reads API key from environment only, never hardcoded.
Provides deterministic fallback when no key present for testing.
"""

import json
import logging
import re
from typing import Any, Protocol

from google import genai
from google.genai import types

from backend.app.config import Settings, get_settings
from backend.app.models.grounding import (
    GenerationSettings,
    GroundingChunk,
    MapsSource,
    ModelReply,
    ReviewSnippetRef,
    ToolKind,
    WebSource,
)

logger = logging.getLogger(__name__)


class ModelClient(Protocol):
    """Protocol for model client implementations."""

    async def generate(self, *, prompt: str, settings: GenerationSettings) -> ModelReply:
        """Send one prompt to the model.

        Args:
            prompt: Instruction text
            settings: Model id, tools, sampling and optional schema/location

        Returns:
            ModelReply with trimmed reply text and grounding chunks

        Raises:
            Exception: Whatever the underlying service raises; callers classify it
        """
        ...


class DeterministicStubClient:
    """Deterministic stub client for testing (no API key required)."""

    async def generate(self, *, prompt: str, settings: GenerationSettings) -> ModelReply:
        """Generate a deterministic itinerary for the prompt's destination."""
        destination, duration = _parse_trip_from_prompt(prompt)

        itinerary = {
            "destination": destination,
            "duration": duration,
            "overview": f"A {duration}-day placeholder trip to {destination}.",
            "itinerary": [
                {
                    "day": day,
                    "theme": f"Day {day} in {destination}",
                    "activities": [
                        {"time": "9:00 AM", "description": "Morning walk (stub)"},
                        {"time": "7:00 PM", "description": "Dinner (stub)"},
                    ],
                }
                for day in range(1, duration + 1)
            ],
            "packingSuggestions": ["Comfortable shoes"],
            "notes": "This is a stub response generated without a model call.",
            "budgetSummary": "Budget analysis not available (stub).",
        }
        text = json.dumps(itinerary, indent=2)

        # Unconstrained replies usually arrive fenced with a lead-in sentence
        if settings.response_schema is None:
            text = f"Here is your itinerary:\n```json\n{text}\n```"

        return ModelReply(text=text, grounding_chunks=[])


_TRIP_PATTERN = re.compile(r"for a (\d+)-day trip to (.+?)\.\n")


def _parse_trip_from_prompt(prompt: str) -> tuple[str, int]:
    match = _TRIP_PATTERN.search(prompt)
    if not match:
        return ("Unknown", 1)
    return (match.group(2), int(match.group(1)))


class GeminiClient:
    """Gemini-backed model client.

    A fresh SDK client is opened for every call and closed afterwards, so the
    most recently configured API key is always used.
    """

    def __init__(self, api_key: str):
        """Initialize Gemini client.

        Args:
            api_key: Gemini API key (read from environment)
        """
        self.api_key = api_key

    async def generate(self, *, prompt: str, settings: GenerationSettings) -> ModelReply:
        """Generate content using the Gemini API."""
        config = build_generate_content_config(settings)

        async with genai.Client(api_key=self.api_key).aio as client:
            response = await client.models.generate_content(
                model=settings.model,
                contents=prompt,
                config=config,
            )

        return ModelReply(
            text=(response.text or "").strip(),
            grounding_chunks=_convert_grounding_chunks(response),
        )


_TOOL_FACTORIES = {
    ToolKind.google_search: lambda: types.Tool(google_search=types.GoogleSearch()),
    ToolKind.google_maps: lambda: types.Tool(google_maps=types.GoogleMaps()),
}


def build_generate_content_config(settings: GenerationSettings) -> types.GenerateContentConfig:
    """Translate generation settings into the SDK config object."""
    kwargs: dict[str, Any] = {
        "temperature": settings.temperature,
        "top_p": settings.top_p,
        "top_k": settings.top_k,
        "tools": [_TOOL_FACTORIES[tool]() for tool in settings.tools],
    }

    if settings.retrieval_lat_lng is not None:
        kwargs["tool_config"] = types.ToolConfig(
            retrieval_config=types.RetrievalConfig(
                lat_lng=types.LatLng(
                    latitude=settings.retrieval_lat_lng.latitude,
                    longitude=settings.retrieval_lat_lng.longitude,
                )
            )
        )

    if settings.response_schema is not None:
        kwargs["response_schema"] = settings.response_schema
        kwargs["response_mime_type"] = settings.response_mime_type or "application/json"

    return types.GenerateContentConfig(**kwargs)


def _convert_grounding_chunks(response: Any) -> list[GroundingChunk]:
    """Read grounding chunks of the first candidate into contract types."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []

    metadata = getattr(candidates[0], "grounding_metadata", None)
    raw_chunks = getattr(metadata, "grounding_chunks", None) or []

    chunks: list[GroundingChunk] = []
    for raw in raw_chunks:
        web = getattr(raw, "web", None)
        maps = getattr(raw, "maps", None)
        if web is not None:
            chunks.append(GroundingChunk(web=WebSource(uri=web.uri, title=web.title)))
        elif maps is not None:
            sources = getattr(maps, "place_answer_sources", None)
            snippets = getattr(sources, "review_snippets", None) or []
            chunks.append(
                GroundingChunk(
                    maps=MapsSource(
                        uri=maps.uri,
                        title=maps.title,
                        review_snippets=[
                            ReviewSnippetRef(
                                uri=getattr(s, "uri", None) or getattr(s, "google_maps_uri", None),
                                title=getattr(s, "title", None),
                            )
                            for s in snippets
                        ],
                    )
                )
            )
        else:
            chunks.append(GroundingChunk())
    return chunks


def get_model_client(settings: Settings | None = None) -> ModelClient:
    """Factory function to get appropriate model client based on config.

    Returns:
        GeminiClient if API key is configured, DeterministicStubClient otherwise
    """
    settings = settings or get_settings()
    api_key = settings.gemini_api_key

    if api_key and api_key.get_secret_value():
        logger.info("Using Gemini client for itinerary generation")
        return GeminiClient(api_key=api_key.get_secret_value())
    else:
        logger.warning("No Gemini API key configured, using deterministic stub client")
        return DeterministicStubClient()
