"""Model client contract types - request configuration and reply shape."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ToolKind(str, Enum):
    """Retrieval tools the model may use."""

    google_search = "google_search"
    google_maps = "google_maps"


class LatLng(BaseModel):
    """Location used to ground map retrieval."""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class GenerationSettings(BaseModel):
    """Everything the model client needs besides the prompt.

    `response_schema` and `retrieval_lat_lng` are mutually exclusive:
    schema-constrained output cannot be combined with map grounding.
    """

    model: str
    tools: list[ToolKind]
    temperature: float
    top_p: float
    top_k: int
    response_schema: dict[str, Any] | None = None
    response_mime_type: str | None = None
    retrieval_lat_lng: LatLng | None = None


class ReviewSnippetRef(BaseModel):
    """Review attached to a map place."""

    uri: str | None = None
    title: str | None = None


class WebSource(BaseModel):
    """Web page used for grounding."""

    uri: str | None = None
    title: str | None = None


class MapsSource(BaseModel):
    """Map place used for grounding."""

    uri: str | None = None
    title: str | None = None
    review_snippets: list[ReviewSnippetRef] = Field(default_factory=list)


class GroundingChunk(BaseModel):
    """One grounding metadata entry; at most one of `web`/`maps` is set."""

    web: WebSource | None = None
    maps: MapsSource | None = None


class ModelReply(BaseModel):
    """Reply text plus grounding metadata, in source order."""

    text: str
    grounding_chunks: list[GroundingChunk] = Field(default_factory=list)
