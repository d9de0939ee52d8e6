"""Models package - re-exports for convenience."""

from backend.app.models.grounding import (
    GenerationSettings,
    GroundingChunk,
    LatLng,
    MapsSource,
    ModelReply,
    ReviewSnippetRef,
    ToolKind,
    WebSource,
)
from backend.app.models.itinerary import (
    ITINERARY_RESPONSE_SCHEMA,
    Activity,
    Citation,
    DayPlan,
    GeneratedItinerary,
    ItineraryResult,
)
from backend.app.models.preferences import PreferenceModel

__all__ = [
    # Preferences
    "PreferenceModel",
    # Itinerary
    "GeneratedItinerary",
    "DayPlan",
    "Activity",
    "Citation",
    "ItineraryResult",
    "ITINERARY_RESPONSE_SCHEMA",
    # Model client contract
    "ToolKind",
    "LatLng",
    "GenerationSettings",
    "ReviewSnippetRef",
    "WebSource",
    "MapsSource",
    "GroundingChunk",
    "ModelReply",
]
