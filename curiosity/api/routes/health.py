from __future__ import annotations

from fastapi import APIRouter, Depends

from curiosity import __version__
from curiosity.api.deps import get_app_settings
from curiosity.api.schemas import HealthResponse
from curiosity.config.settings import Settings

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_app_settings)):  # noqa: B008
    """Health check with configuration status.

    The server reports ok even when the model is not configured;
    ``config_errors`` lists what is missing.
    """
    config_valid, config_errors = settings.validation_status()
    return HealthResponse(
        status="ok",
        version=__version__,
        model=settings.model,
        config_valid=config_valid,
        config_errors=config_errors or None,
    )
