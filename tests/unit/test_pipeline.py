"""Tests for the itinerary pipeline (mode selection through result assembly)."""

import json
from typing import Any
from unittest.mock import patch

import pytest

from backend.app.config import Settings
from backend.app.errors import AuthorizationError, StructuralMismatchError, TransportError
from backend.app.llm.client import DeterministicStubClient
from backend.app.models.grounding import (
    GroundingChunk,
    MapsSource,
    ModelReply,
    ReviewSnippetRef,
    ToolKind,
    WebSource,
)
from backend.app.models.preferences import PreferenceModel
from backend.app.orchestration.pipeline import AUTH_FAILURE_MESSAGE, generate_itinerary
from backend.app.orchestration.validate import FALLBACK_NOTES

PROSE_REPLY = "Day one: wander Gion and eat street food. Day two: Arashiyama bamboo grove."


@pytest.fixture
def grounding_chunks() -> list[GroundingChunk]:
    """Web entry, then a place with two review snippets."""
    return [
        GroundingChunk(web=WebSource(uri="https://web.example/kyoto", title="Kyoto guide")),
        GroundingChunk(
            maps=MapsSource(
                uri="https://maps.example/nishiki",
                title="Nishiki Market",
                review_snippets=[
                    ReviewSnippetRef(uri="https://maps.example/r1", title="Loved it"),
                    ReviewSnippetRef(uri="https://maps.example/r2"),
                ],
            )
        ),
    ]


@pytest.mark.asyncio
async def test_schema_valid_reply_is_returned_with_citations(
    settings: Settings,
    make_client,
    kyoto_preferences: PreferenceModel,
    kyoto_itinerary_json: dict[str, Any],
    grounding_chunks: list[GroundingChunk],
) -> None:
    """Test the structured happy path end to end."""
    client = make_client(
        reply=ModelReply(text=json.dumps(kyoto_itinerary_json), grounding_chunks=grounding_chunks)
    )

    result = await generate_itinerary(kyoto_preferences, settings=settings, client=client)

    assert result.itinerary_data.model_dump(by_alias=True) == kyoto_itinerary_json
    assert [(c.uri, c.title) for c in result.source_urls] == [
        ("https://web.example/kyoto", "Kyoto guide"),
        ("https://maps.example/nishiki", "Nishiki Market"),
        ("https://maps.example/r1", "Loved it"),
        ("https://maps.example/r2", "Review Link"),
    ]


@pytest.mark.asyncio
async def test_structured_request_uses_schema(
    settings: Settings,
    make_client,
    kyoto_preferences: PreferenceModel,
    kyoto_itinerary_json: dict[str, Any],
) -> None:
    """Test the prompt and settings handed to the model client in structured mode."""
    client = make_client(reply=ModelReply(text=json.dumps(kyoto_itinerary_json)))

    await generate_itinerary(kyoto_preferences, settings=settings, client=client)

    assert len(client.calls) == 1
    prompt, generation = client.calls[0]
    assert "3-day trip to Kyoto" in prompt
    assert "latitude" not in prompt
    assert generation.model == settings.structured_model
    assert generation.response_schema is not None


@pytest.mark.asyncio
async def test_prose_reply_falls_back(
    settings: Settings,
    make_client,
    kyoto_preferences: PreferenceModel,
    grounding_chunks: list[GroundingChunk],
) -> None:
    """Test that an unstructured reply yields the fallback and no citations."""
    client = make_client(reply=ModelReply(text=PROSE_REPLY, grounding_chunks=grounding_chunks))

    result = await generate_itinerary(kyoto_preferences, settings=settings, client=client)

    assert result.itinerary_data.overview == PROSE_REPLY
    assert result.itinerary_data.itinerary == []
    assert result.itinerary_data.packing_suggestions == []
    assert result.itinerary_data.destination == "Kyoto"
    assert result.itinerary_data.duration == 3
    assert result.itinerary_data.notes == FALLBACK_NOTES
    assert result.itinerary_data.budget_summary == "Budget: 500 USD."
    assert result.source_urls == []


@pytest.mark.asyncio
async def test_fenced_reply_in_grounded_mode(
    settings: Settings,
    make_client,
    located_preferences: PreferenceModel,
    kyoto_itinerary_json: dict[str, Any],
    grounding_chunks: list[GroundingChunk],
) -> None:
    """Test that a fenced reply with prose is recovered in grounded mode."""
    text = f"Here is your trip!\n```json\n{json.dumps(kyoto_itinerary_json, indent=2)}\n```\nEnjoy."
    client = make_client(reply=ModelReply(text=text, grounding_chunks=grounding_chunks))

    result = await generate_itinerary(located_preferences, settings=settings, client=client)

    prompt, generation = client.calls[0]
    assert ToolKind.google_maps in generation.tools
    assert generation.response_schema is None
    assert "latitude 35.0116, longitude 135.7681" in prompt

    assert result.itinerary_data.model_dump(by_alias=True) == kyoto_itinerary_json
    assert len(result.source_urls) == 4


@pytest.mark.asyncio
async def test_grounded_structural_mismatch_falls_back(
    settings: Settings,
    make_client,
    located_preferences: PreferenceModel,
    grounding_chunks: list[GroundingChunk],
) -> None:
    """Test that a wrong shape in grounded mode is recovered silently."""
    text = 'Top picks: {"restaurants": ["Ichiran", "Ippudo"]}'
    client = make_client(reply=ModelReply(text=text, grounding_chunks=grounding_chunks))

    result = await generate_itinerary(located_preferences, settings=settings, client=client)

    assert result.itinerary_data.overview == text
    assert result.itinerary_data.itinerary == []
    assert result.source_urls == []


@pytest.mark.asyncio
async def test_structured_structural_mismatch_raises(
    settings: Settings, make_client, kyoto_preferences: PreferenceModel
) -> None:
    """Test that a wrong shape despite the schema is surfaced as an error."""
    client = make_client(reply=ModelReply(text='{"destination": "", "itinerary": []}'))

    with pytest.raises(StructuralMismatchError) as exc_info:
        await generate_itinerary(kyoto_preferences, settings=settings, client=client)

    assert "Invalid JSON response" in exc_info.value.user_message


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"destination": "Kyoto", "itinerary": []},
        {"destination": "Kyoto", "itinerary": [], "notes": None},
        {"destination": "Kyoto", "itinerary": [{"theme": "no day number", "activities": []}]},
        {"destination": "Kyoto", "duration": "3 days", "itinerary": []},
        {
            "destination": "Kyoto",
            "itinerary": [{"day": 1, "activities": [{"time": 9, "description": "Fushimi Inari"}]}],
        },
    ],
)
async def test_structured_loose_reply_is_accepted(
    settings: Settings, make_client, kyoto_preferences: PreferenceModel, payload: dict[str, Any]
) -> None:
    """Test that a reply with destination and an itinerary list is never a mismatch."""
    client = make_client(reply=ModelReply(text=json.dumps(payload)))

    result = await generate_itinerary(kyoto_preferences, settings=settings, client=client)

    assert result.itinerary_data.model_dump(by_alias=True, exclude_unset=True) == payload


@pytest.mark.asyncio
async def test_structured_reply_keeps_extra_keys(
    settings: Settings,
    make_client,
    kyoto_preferences: PreferenceModel,
    kyoto_itinerary_json: dict[str, Any],
) -> None:
    """Test that itineraryData equals the returned JSON, unknown keys included."""
    payload = {**kyoto_itinerary_json, "notes": None, "localPhrases": ["arigatou"]}
    client = make_client(reply=ModelReply(text=json.dumps(payload)))

    result = await generate_itinerary(kyoto_preferences, settings=settings, client=client)

    assert result.itinerary_data.model_dump(by_alias=True) == payload


@pytest.mark.asyncio
async def test_structured_unparseable_reply_falls_back(
    settings: Settings, make_client, kyoto_preferences: PreferenceModel
) -> None:
    """Test that an extraction miss falls back even in structured mode."""
    client = make_client(reply=ModelReply(text='{"destination": "Kyoto", "itinerary": [}'))

    result = await generate_itinerary(kyoto_preferences, settings=settings, client=client)

    assert result.itinerary_data.overview == '{"destination": "Kyoto", "itinerary": [}'
    assert result.source_urls == []


@pytest.mark.asyncio
async def test_reply_text_is_trimmed_before_fallback(
    settings: Settings, make_client, kyoto_preferences: PreferenceModel
) -> None:
    """Test that surrounding whitespace does not end up in the overview."""
    client = make_client(reply=ModelReply(text=f"\n  {PROSE_REPLY}  \n"))

    result = await generate_itinerary(kyoto_preferences, settings=settings, client=client)

    assert result.itinerary_data.overview == PROSE_REPLY


@pytest.mark.asyncio
async def test_transport_error(settings: Settings, make_client, kyoto_preferences: PreferenceModel) -> None:
    """Test that model client failures become TransportError."""
    cause = ConnectionError("connection reset")
    client = make_client(error=cause)

    with pytest.raises(TransportError) as exc_info:
        await generate_itinerary(kyoto_preferences, settings=settings, client=client)

    assert exc_info.value.user_message == "Gemini API error: connection reset"
    assert exc_info.value.__cause__ is cause


@pytest.mark.asyncio
async def test_authorization_error(
    settings: Settings, make_client, kyoto_preferences: PreferenceModel
) -> None:
    """Test that the key-not-found signature becomes AuthorizationError."""
    client = make_client(error=Exception("404 NOT_FOUND. Requested entity was not found."))

    with pytest.raises(AuthorizationError) as exc_info:
        await generate_itinerary(kyoto_preferences, settings=settings, client=client)

    assert exc_info.value.user_message == AUTH_FAILURE_MESSAGE


@pytest.mark.asyncio
async def test_client_is_built_per_invocation(
    settings: Settings, kyoto_preferences: PreferenceModel
) -> None:
    """Test that every run constructs its own model client."""
    with patch(
        "backend.app.orchestration.pipeline.get_model_client",
        side_effect=lambda s: DeterministicStubClient(),
    ) as mock_factory:
        first = await generate_itinerary(kyoto_preferences, settings=settings)
        second = await generate_itinerary(kyoto_preferences, settings=settings)

    assert mock_factory.call_count == 2
    assert first == second
    assert len(first.itinerary_data.itinerary) == 3


@pytest.mark.asyncio
async def test_stub_client_in_grounded_mode(settings: Settings, located_preferences: PreferenceModel) -> None:
    """Test the stub's fenced reply through the grounded path."""
    result = await generate_itinerary(
        located_preferences, settings=settings, client=DeterministicStubClient()
    )

    assert result.itinerary_data.destination == "Kyoto"
    assert [d.day for d in result.itinerary_data.itinerary] == [1, 2, 3]
    assert result.source_urls == []
