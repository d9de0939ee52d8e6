"""Helper functions for UI - /itinerary client and display formatting."""

from typing import Any

import httpx


class ItineraryRequestError(Exception):
    """Backend rejected or failed the itinerary request."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def format_budget(amount: float, currency: str) -> str:
    """Format a budget like '1,500 USD'."""
    if float(amount).is_integer():
        return f"{int(amount):,} {currency}"
    return f"{amount:,.2f} {currency}"


def build_preferences_payload(
    destination: str,
    duration: int,
    interests: str,
    budget: float,
    currency: str,
    use_location: bool = False,
    latitude: float | None = None,
    longitude: float | None = None,
) -> dict[str, Any]:
    """Build the POST /itinerary body.

    Coordinates are only sent when location sharing is on and both are known.
    """
    payload: dict[str, Any] = {
        "destination": destination.strip(),
        "duration": duration,
        "interests": interests.strip(),
        "budget": budget,
        "currency": currency,
    }
    if use_location and latitude is not None and longitude is not None:
        payload["latitude"] = latitude
        payload["longitude"] = longitude
    return payload


def call_generate_itinerary(
    backend_url: str,
    payload: dict[str, Any],
    timeout: float = 120.0,
) -> dict[str, Any]:
    """Call /itinerary endpoint with user preferences.

    Args:
        backend_url: Backend base URL (e.g. http://localhost:8000)
        payload: Body built by build_preferences_payload
        timeout: Request timeout in seconds (generation with search is slow)

    Returns:
        ItineraryResult dict (camelCase keys)

    Raises:
        ItineraryRequestError: If the backend is unreachable or returns an error
    """
    try:
        response = httpx.post(f"{backend_url}/itinerary", json=payload, timeout=timeout)
    except httpx.HTTPError as e:
        raise ItineraryRequestError(f"Could not reach backend: {e}") from e

    if response.status_code != 200:
        try:
            body = response.json()
        except ValueError:
            body = None
        detail = body.get("detail", response.text) if isinstance(body, dict) else response.text
        if not isinstance(detail, str):
            detail = str(detail)
        raise ItineraryRequestError(detail, status_code=response.status_code)

    result: dict[str, Any] = response.json()
    return result


def build_day_sections(itinerary_data: dict[str, Any]) -> list[str]:
    """Render each day of the itinerary as a markdown block, in the given order."""
    sections: list[str] = []
    for day in itinerary_data.get("itinerary") or []:
        if not isinstance(day, dict):
            continue
        heading = f"### Day {day.get('day') or '?'}"
        if day.get("theme"):
            heading += f": {day['theme']}"
        lines = [heading]
        for activity in day.get("activities") or []:
            if not isinstance(activity, dict):
                continue
            time_label = activity.get("time") or ""
            description = activity.get("description") or ""
            lines.append(f"- **{time_label}** {description}" if time_label else f"- {description}")
        sections.append("\n".join(lines))
    return sections


def build_source_links(source_urls: list[dict[str, Any]]) -> list[str]:
    """Render citations as markdown links; the uri doubles as the label when untitled."""
    return [f"[{src.get('title') or src['uri']}]({src['uri']})" for src in source_urls if src.get("uri")]
