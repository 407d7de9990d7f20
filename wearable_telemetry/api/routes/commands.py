"""
Device command endpoints

Commands are acknowledged but never delivered: there is no channel back to
the watches yet.
"""

from fastapi import APIRouter, Depends, Request

from wearable_telemetry.api.deps import get_store
from wearable_telemetry.api.params import read_json_body
from wearable_telemetry.schemas.command import CommandRequest, CommandResponse
from wearable_telemetry.storage.ingestion_store import IngestionStore

router = APIRouter()

@router.post("/command", response_model=CommandResponse)
async def send_command(request: Request, store: IngestionStore = Depends(get_store)):
    """Accept a command for a device and echo it back"""

    payload = await read_json_body(request)
    command = CommandRequest(**payload) if isinstance(payload, dict) else CommandRequest()

    ack = store.dispatch(command.device_id, command.command, command.params)
    return CommandResponse(command=ack.command, device_id=ack.device_id)
