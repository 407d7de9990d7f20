"""
Server status endpoint
"""

from fastapi import APIRouter, Depends

from wearable_telemetry.api.deps import get_settings, get_store
from wearable_telemetry.core.config import Settings
from wearable_telemetry.schemas.telemetry import ServerStatusResponse
from wearable_telemetry.storage.ingestion_store import IngestionStore

router = APIRouter()

@router.get("/", response_model=ServerStatusResponse)
async def root(
    store: IngestionStore = Depends(get_store),
    settings: Settings = Depends(get_settings)
):
    """Root endpoint"""

    snapshot = store.snapshot()
    return ServerStatusResponse(
        message=settings.service_name,
        received_messages=snapshot.entry_count,
        devices=list(snapshot.devices),
    )
