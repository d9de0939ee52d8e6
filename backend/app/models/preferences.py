"""Preference models - user input for itinerary generation."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class PreferenceModel(BaseModel):
    """Travel preferences collected from the user."""

    model_config = ConfigDict(frozen=True)

    destination: Annotated[str, Field(min_length=1)]
    duration: Annotated[int, Field(ge=1, description="Trip length in days")]
    interests: str = ""
    budget: Annotated[float, Field(ge=0)]
    currency: Annotated[str, Field(min_length=1, max_length=8)] = "USD"
    latitude: Annotated[float, Field(ge=-90, le=90)] | None = None
    longitude: Annotated[float, Field(ge=-180, le=180)] | None = None

    @field_validator("destination")
    @classmethod
    def validate_destination_not_blank(cls, v: str) -> str:
        """Strip whitespace and reject blank destinations."""
        v = v.strip()
        if not v:
            raise ValueError("destination must not be blank")
        return v

    @field_validator("currency")
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        """Upper-case the currency code."""
        return v.strip().upper()

    @model_validator(mode="after")
    def validate_coordinates_paired(self) -> "PreferenceModel":
        """Latitude and longitude are given together or not at all."""
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must both be set or both be omitted")
        return self


def format_amount(amount: float) -> str:
    """Render a budget without a trailing '.0' for whole numbers."""
    if float(amount).is_integer():
        return str(int(amount))
    return f"{amount:.2f}".rstrip("0").rstrip(".")
