"""Structural validation of parsed model output, and the fallback itinerary."""

from typing import Any

from backend.app.models.itinerary import GeneratedItinerary
from backend.app.models.preferences import PreferenceModel, format_amount

FALLBACK_NOTES = (
    "The itinerary could not be parsed into a structured format. "
    "Please see the overview section for details and check the source links."
)


def validate_itinerary(document: Any) -> GeneratedItinerary | None:
    """Accept `document` when it has a non-empty destination and an itinerary list.

    No further field checks are made: other fields are kept as sent, unknown
    keys included.

    Returns:
        GeneratedItinerary, or None on a structural mismatch
    """
    if not isinstance(document, dict):
        return None

    destination = document.get("destination")
    if not isinstance(destination, str) or not destination.strip():
        return None
    if not isinstance(document.get("itinerary"), list):
        return None

    return GeneratedItinerary.model_validate(document)


def build_fallback_itinerary(preferences: PreferenceModel, raw_text: str) -> GeneratedItinerary:
    """Minimal itinerary carrying the raw reply as its overview. Never raises."""
    return GeneratedItinerary(
        destination=preferences.destination,
        duration=preferences.duration,
        overview=raw_text,
        itinerary=[],
        packing_suggestions=[],
        notes=FALLBACK_NOTES,
        budget_summary=f"Budget: {format_amount(preferences.budget)} {preferences.currency}.",
    )
