"""Health check endpoints."""

from typing import Any

from fastapi import APIRouter

from backend.app.config import Settings, get_settings

router = APIRouter()


def check_model_client(settings: Settings) -> str:
    """Report which model client the pipeline will build."""
    api_key = settings.gemini_api_key
    if api_key and api_key.get_secret_value():
        return "gemini"
    return "stub"


@router.get("/health")
async def health() -> dict[str, str]:
    """Simple health check for Docker/k8s.

    Returns:
        200 OK always (application is running)
    """
    return {"status": "ok"}


@router.get("/healthz")
async def healthz() -> dict[str, Any]:
    """Health check with component details.

    The pipeline keeps no connections or state between requests, so the only
    component reported is the configured model client.
    """
    settings = get_settings()
    return {"status": "ok", "model_client": check_model_client(settings)}
