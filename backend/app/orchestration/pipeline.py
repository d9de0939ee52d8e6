"""Itinerary pipeline - one request/response cycle against the model client.

preferences -> mode selection -> prompt -> model call -> JSON extraction
-> structural validation -> result (or fallback itinerary), plus citations.
"""

import json
import logging
import time

from backend.app.citations.extract import extract_citations_from_grounding
from backend.app.config import Settings, get_settings
from backend.app.errors import AuthorizationError, StructuralMismatchError, TransportError
from backend.app.llm.client import ModelClient, get_model_client
from backend.app.models.itinerary import ItineraryResult
from backend.app.models.preferences import PreferenceModel
from backend.app.orchestration.extract import extract_json_candidate
from backend.app.orchestration.prompt import build_prompt
from backend.app.orchestration.selector import RequestMode, select_request_mode
from backend.app.orchestration.validate import build_fallback_itinerary, validate_itinerary
from backend.app.utils.metrics import PrometheusPipelineMetrics

logger = logging.getLogger(__name__)

# Message the service returns when the selected API key is missing or invalid
AUTH_FAILURE_SIGNATURE = "Requested entity was not found."

AUTH_FAILURE_MESSAGE = (
    "The API key may be invalid or not selected. Please make sure you have selected "
    "a valid paid API key through the API key selection dialog."
)
STRUCTURAL_MISMATCH_MESSAGE = "Invalid JSON response from the API, or structured data is missing."

_metrics = PrometheusPipelineMetrics()


async def generate_itinerary(
    preferences: PreferenceModel,
    *,
    settings: Settings | None = None,
    client: ModelClient | None = None,
) -> ItineraryResult:
    """Generate an itinerary for the given preferences.

    Args:
        preferences: User's travel preferences
        settings: Settings override (defaults to environment settings)
        client: Model client override; by default a new client is built per call

    Returns:
        ItineraryResult; a fallback itinerary when the reply has no usable structure

    Raises:
        AuthorizationError: API key missing or invalid
        TransportError: Model call failed
        StructuralMismatchError: Schema-constrained reply lacked the itinerary shape
    """
    settings = settings or get_settings()
    plan = select_request_mode(preferences, settings)
    mode = plan.mode.value
    prompt = build_prompt(preferences, plan.mode, regional_focus=settings.regional_focus)

    logger.info(
        f"Generating itinerary: destination={preferences.destination}, "
        f"mode={mode}, model={plan.generation.model}"
    )

    client = client or get_model_client(settings)

    start = time.perf_counter()
    try:
        reply = await client.generate(prompt=prompt, settings=plan.generation)
    except Exception as e:
        _metrics.record_outcome(mode, "error")
        logger.error(f"Model API call failed: {e}")
        if AUTH_FAILURE_SIGNATURE in str(e):
            raise AuthorizationError(AUTH_FAILURE_MESSAGE) from e
        raise TransportError(f"Gemini API error: {e}") from e
    finally:
        _metrics.record_latency(mode, (time.perf_counter() - start) * 1000)

    raw_text = reply.text.strip()
    logger.debug(f"Raw model response: {raw_text}")

    candidate = extract_json_candidate(raw_text)
    if candidate is None:
        logger.warning("Could not extract JSON from model response, using plain-text fallback")
        _metrics.record_outcome(mode, "fallback")
        return ItineraryResult(
            itinerary_data=build_fallback_itinerary(preferences, raw_text),
            source_urls=[],
        )

    itinerary = validate_itinerary(json.loads(candidate))
    if itinerary is None:
        if plan.mode is RequestMode.grounded:
            logger.warning("Grounded response has no itinerary structure, using plain-text fallback")
            _metrics.record_outcome(mode, "fallback")
            return ItineraryResult(
                itinerary_data=build_fallback_itinerary(preferences, raw_text),
                source_urls=[],
            )
        logger.error("Schema-constrained response did not contain a valid itinerary structure")
        _metrics.record_outcome(mode, "error")
        raise StructuralMismatchError(STRUCTURAL_MISMATCH_MESSAGE)

    _metrics.record_outcome(mode, "structured")
    return ItineraryResult(
        itinerary_data=itinerary,
        source_urls=extract_citations_from_grounding(reply.grounding_chunks),
    )
