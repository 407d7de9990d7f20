"""
Telemetry data endpoints
"""

from fastapi import APIRouter, Depends, Header, Query, Request
from typing import Optional
import structlog

from wearable_telemetry.api.deps import get_store
from wearable_telemetry.api.params import coerce_limit, read_json_body
from wearable_telemetry.schemas.telemetry import ClearResponse, DataQueryResponse, IngestResponse
from wearable_telemetry.storage.ingestion_store import IngestionStore

logger = structlog.get_logger(__name__)
router = APIRouter()

@router.post("/data", response_model=IngestResponse)
async def receive_data(
    request: Request,
    device_id: Optional[str] = Header(None, alias="device-id"),
    store: IngestionStore = Depends(get_store)
):
    """Receive sensor data from a device"""

    payload = await read_json_body(request)

    entry = store.ingest(device_id, payload)

    logger.info("Telemetry received", device_id=entry.device_id, timestamp=entry.timestamp, payload=payload)
    return IngestResponse(device_id=entry.device_id, timestamp=entry.timestamp)

@router.get("/data", response_model=DataQueryResponse)
async def get_data(
    limit: Optional[str] = Query(None),
    device_id: Optional[str] = Query(None),
    store: IngestionStore = Depends(get_store)
):
    """Get the most recent stored entries, optionally for one device"""

    result = store.query(device_id=device_id, limit=coerce_limit(limit, store.default_limit))
    return DataQueryResponse.from_result(result)

@router.delete("/data", response_model=ClearResponse)
async def clear_data(
    device_id: Optional[str] = Query(None),
    store: IngestionStore = Depends(get_store)
):
    """Clear stored data for one device, or everything"""

    store.clear(device_id or None)
    return ClearResponse()
