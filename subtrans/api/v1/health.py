"""Health check endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from subtrans.core.config import Settings, get_settings
from subtrans.schemas import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
@router.get("/health", response_model=HealthResponse)
async def health_check(
    response: Response,
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Health check endpoint.

    Reports whether the translation provider is configured. Returns 503 when
    it isn't, since no translation request could succeed.

    Args:
        response: FastAPI Response object for setting status code

    Returns:
        HealthResponse: Service health status with component details
    """
    provider_ok = bool(settings.google_api_key)
    components = {
        "translation_provider": {
            "status": "healthy" if provider_ok else "unhealthy",
            "message": (
                f"Google GenAI configured (model: {settings.default_model})"
                if provider_ok
                else "GOOGLE_API_KEY not configured"
            ),
        },
    }

    if not provider_ok:
        response.status_code = 503

    return HealthResponse(
        service=settings.app_name,
        status="running" if provider_ok else "degraded",
        version=settings.app_version,
        authentication="enabled" if settings.api_key else "disabled",
        components=components,
    )
