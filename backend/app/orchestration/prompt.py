"""Prompt text for itinerary generation."""

from backend.app.models.preferences import PreferenceModel, format_amount
from backend.app.orchestration.selector import RequestMode


def build_prompt(
    preferences: PreferenceModel,
    mode: RequestMode,
    *,
    regional_focus: str | None = None,
) -> str:
    """Render the instruction text sent to the model.

    Args:
        preferences: User's travel preferences
        mode: Selected request mode; grounded mode adds the user's location
        regional_focus: Optional region to bias general recommendations toward

    Returns:
        Prompt text
    """
    budget = f"{format_amount(preferences.budget)} {preferences.currency}"

    lines = [
        f"Generate a detailed and creative travel itinerary for a {preferences.duration}-day "
        f"trip to {preferences.destination}.",
        f"The travelers are interested in {preferences.interests}. "
        f"They have a budget of {budget}.",
        "",
        "Please include:",
        "- An overview of the trip.",
        "- A day-by-day breakdown with a theme and specific activities (with suggested times).",
        "- Practical packing suggestions.",
        "- Any important notes for the trip.",
        f"- A summary or analysis of how the budget of {budget} might influence the trip "
        "planning or what it can afford.",
        "",
    ]

    if regional_focus:
        lines.append(
            f"Where relevant, include suggestions focused on {regional_focus} "
            "for general recommendations and searches."
        )
        lines.append("")

    lines.append("The itinerary should be in JSON format.")
    prompt = "\n".join(lines)

    if mode is RequestMode.grounded:
        prompt += (
            f" Current user location is approximately latitude {preferences.latitude}, "
            f"longitude {preferences.longitude}."
        )

    return prompt
