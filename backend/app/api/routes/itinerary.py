"""Itinerary endpoint - POST /itinerary."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from backend.app.config import Settings, get_settings
from backend.app.errors import AuthorizationError, ItineraryGenerationError
from backend.app.models.itinerary import ItineraryResult
from backend.app.models.preferences import PreferenceModel
from backend.app.orchestration.pipeline import generate_itinerary

router = APIRouter(tags=["itinerary"])
logger = logging.getLogger(__name__)


@router.post("/itinerary", response_model=ItineraryResult, status_code=status.HTTP_200_OK)
async def create_itinerary(
    preferences: PreferenceModel,
    settings: Annotated[Settings, Depends(get_settings)],
) -> ItineraryResult:
    """Generate a travel itinerary from user preferences.

    Args:
        preferences: Destination, duration, interests, budget, optional location
        settings: Application settings

    Returns:
        ItineraryResult with itinerary data and source links

    Raises:
        HTTPException: 401 if the API key is rejected, 502 if generation fails
    """
    logger.info(f"[POST /itinerary] destination={preferences.destination}")

    try:
        result = await generate_itinerary(preferences, settings=settings)
    except AuthorizationError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.user_message) from e
    except ItineraryGenerationError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.user_message) from e

    logger.info(
        f"[POST /itinerary] succeeded, {len(result.itinerary_data.itinerary)} days, "
        f"{len(result.source_urls)} sources"
    )
    return result
