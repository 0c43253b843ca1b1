"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from botdesk import __version__
from botdesk.config import Settings, get_settings
from botdesk.core.storage import StorageProvider, get_storage

from .models import DatabaseStatus, HealthResponse

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def get_health(
    storage: StorageProvider = Depends(get_storage),
    settings: Settings = Depends(get_settings),
):
    """
    Report the active store and whether it is reachable.

    Never writes to the store; a failing probe is reported, not raised.
    """
    database = DatabaseStatus(connected=True, type=storage.kind)
    try:
        await storage.ping()
    except Exception as e:
        database = DatabaseStatus(connected=False, type=storage.kind, error=str(e))

    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat(),
        database=database,
        version=__version__,
        environment=settings.app_env,
    )
