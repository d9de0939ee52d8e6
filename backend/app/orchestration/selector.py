"""Request mode selection - grounded (maps) vs structured (schema) generation."""

from dataclasses import dataclass
from enum import Enum

from backend.app.config import Settings
from backend.app.models.grounding import GenerationSettings, LatLng, ToolKind
from backend.app.models.itinerary import ITINERARY_RESPONSE_SCHEMA
from backend.app.models.preferences import PreferenceModel


class RequestMode(str, Enum):
    """How the model is asked for an itinerary."""

    grounded = "grounded"
    structured = "structured"


@dataclass(frozen=True)
class RequestPlan:
    """Selected mode plus the generation settings that go with it."""

    mode: RequestMode
    generation: GenerationSettings

    @property
    def enforces_schema(self) -> bool:
        return self.generation.response_schema is not None


def _coordinate_present(value: float | None, zero_is_present: bool) -> bool:
    if value is None:
        return False
    return zero_is_present or value != 0


def select_request_mode(preferences: PreferenceModel, settings: Settings) -> RequestPlan:
    """Pick grounded mode when both coordinates are present, structured otherwise.

    Grounded mode adds map retrieval centred on the user and drops the response
    schema; structured mode requests the schema and omits map retrieval. Web
    search is attached in both modes.
    """
    zero_ok = settings.zero_coordinate_is_present
    lat, lon = preferences.latitude, preferences.longitude

    if (
        lat is not None
        and lon is not None
        and _coordinate_present(lat, zero_ok)
        and _coordinate_present(lon, zero_ok)
    ):
        generation = GenerationSettings(
            model=settings.grounded_model,
            tools=[ToolKind.google_maps, ToolKind.google_search],
            temperature=settings.temperature,
            top_p=settings.top_p,
            top_k=settings.top_k,
            retrieval_lat_lng=LatLng(latitude=lat, longitude=lon),
        )
        return RequestPlan(mode=RequestMode.grounded, generation=generation)

    generation = GenerationSettings(
        model=settings.structured_model,
        tools=[ToolKind.google_search],
        temperature=settings.temperature,
        top_p=settings.top_p,
        top_k=settings.top_k,
        response_schema=ITINERARY_RESPONSE_SCHEMA,
        response_mime_type="application/json",
    )
    return RequestPlan(mode=RequestMode.structured, generation=generation)
