"""Itinerary models - structured result returned to the user.

Only `destination` and the `itinerary` list are checked before a document is
accepted. Every other field is typed where the value fits and kept as sent
where it does not, and unknown keys are preserved.
"""

from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    WrapValidator,
)
from pydantic.alias_generators import to_camel

_WIRE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)
_MODEL_OUTPUT_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


def _keep_raw_on_error(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
    try:
        return handler(value)
    except ValidationError:
        return value


KeepRaw = WrapValidator(_keep_raw_on_error)


class Activity(BaseModel):
    """Single activity in a day. `time` is a free-form label, e.g. "9:00 AM"."""

    model_config = _MODEL_OUTPUT_CONFIG

    time: Annotated[str | int | float | None, KeepRaw] = None
    description: Annotated[str | None, KeepRaw] = None


class DayPlan(BaseModel):
    """Plan for a single day."""

    model_config = _MODEL_OUTPUT_CONFIG

    day: Annotated[int | str | None, KeepRaw] = None
    theme: Annotated[str | None, KeepRaw] = None
    activities: Annotated[list[Annotated[Activity, KeepRaw]] | None, KeepRaw] = Field(
        default_factory=list
    )


class GeneratedItinerary(BaseModel):
    """Itinerary as produced by the model (or synthesized by the fallback)."""

    model_config = _MODEL_OUTPUT_CONFIG

    destination: str
    duration: Annotated[int | float | str | None, KeepRaw] = None
    overview: Annotated[str | None, KeepRaw] = None
    itinerary: list[Annotated[DayPlan, KeepRaw]] = Field(default_factory=list)
    packing_suggestions: Annotated[list[Any] | None, KeepRaw] = Field(default_factory=list)
    notes: Annotated[str | None, KeepRaw] = None
    budget_summary: Annotated[str | None, KeepRaw] = None


class Citation(BaseModel):
    """Source the model consulted."""

    model_config = _WIRE_CONFIG

    uri: str
    title: str | None = None


class ItineraryResult(BaseModel):
    """Output of one pipeline run."""

    model_config = _WIRE_CONFIG

    itinerary_data: GeneratedItinerary
    source_urls: list[Citation] = Field(default_factory=list)


# Response schema requested in structured mode (Gemini OpenAPI subset).
ITINERARY_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "destination": {"type": "STRING", "description": "The travel destination."},
        "duration": {"type": "NUMBER", "description": "Duration of the trip in days."},
        "overview": {"type": "STRING", "description": "A brief overview of the trip."},
        "itinerary": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "day": {"type": "NUMBER", "description": "Day number."},
                    "theme": {"type": "STRING", "description": "Theme for the day."},
                    "activities": {
                        "type": "ARRAY",
                        "items": {
                            "type": "OBJECT",
                            "properties": {
                                "time": {
                                    "type": "STRING",
                                    "description": 'Time of the activity (e.g., "9:00 AM").',
                                },
                                "description": {
                                    "type": "STRING",
                                    "description": "Description of the activity.",
                                },
                            },
                            "required": ["time", "description"],
                        },
                    },
                },
                "required": ["day", "theme", "activities"],
            },
        },
        "packingSuggestions": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "Suggestions for what to pack.",
        },
        "notes": {"type": "STRING", "description": "Any additional important notes for the trip."},
        "budgetSummary": {"type": "STRING", "description": "A summary or analysis of the trip budget."},
    },
    "required": [
        "destination",
        "duration",
        "overview",
        "itinerary",
        "packingSuggestions",
        "notes",
        "budgetSummary",
    ],
}
