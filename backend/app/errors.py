"""Errors surfaced to callers of the itinerary pipeline."""


class ItineraryGenerationError(Exception):
    """Base error; `user_message` is safe to show to end users."""

    def __init__(self, user_message: str):
        super().__init__(user_message)
        self.user_message = user_message


class TransportError(ItineraryGenerationError):
    """Model client call failed (network or service error)."""


class AuthorizationError(ItineraryGenerationError):
    """Model client rejected the configured API key."""


class StructuralMismatchError(ItineraryGenerationError):
    """Schema-constrained reply did not have the itinerary shape."""
