"""
Device status endpoints
"""

from fastapi import APIRouter, Depends

from wearable_telemetry.api.deps import get_store
from wearable_telemetry.schemas.device import DeviceListResponse, status_map
from wearable_telemetry.storage.ingestion_store import IngestionStore

router = APIRouter()

@router.get("/devices", response_model=DeviceListResponse)
async def get_devices(store: IngestionStore = Depends(get_store)):
    """Get the latest status of every known device"""

    devices, total = store.list_devices()
    return DeviceListResponse(devices=status_map(devices), total_devices=total)
