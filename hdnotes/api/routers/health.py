"""Health (sin auth), salida tipada y estable."""
from datetime import datetime, timezone

from fastapi import APIRouter, status

from hdnotes.api.schemas.health import HealthOut
from hdnotes.core.config import settings
from hdnotes.infrastructure.db.mongo import is_connected


router = APIRouter(tags=["Health"])


@router.get("/health", status_code=status.HTTP_200_OK, response_model=HealthOut, summary="Salud básica")
def health() -> HealthOut:
    return HealthOut(
        message="Server is running",
        timestamp=datetime.now(timezone.utc).isoformat(),
        mongodb="connected" if is_connected() else "disconnected",
        environment=settings.environment,
    )
