"""
Telemetry Pydantic schemas
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List

from wearable_telemetry.models import DataEntry
from wearable_telemetry.schemas.device import DeviceStatusResponse, status_map

class DataEntryResponse(BaseModel):
    """Schema for a stored entry"""
    device_id: str = Field(..., description="Sending device identifier")
    timestamp: str = Field(..., description="Server receipt time, ISO-8601")
    data: Any = Field(None, description="Payload as posted by the device")

    @classmethod
    def from_entry(cls, entry: DataEntry) -> "DataEntryResponse":
        return cls(**entry.to_dict())

class IngestResponse(BaseModel):
    """Schema for an accepted submission"""
    status: str = "success"
    message: str = "Data received successfully"
    device_id: str
    timestamp: str

class DataQueryResponse(BaseModel):
    """Schema for the stored data listing"""
    data: List[DataEntryResponse]
    total: int
    devices: Dict[str, DeviceStatusResponse]

    @classmethod
    def from_result(cls, result) -> "DataQueryResponse":
        return cls(
            data=[DataEntryResponse.from_entry(entry) for entry in result.entries],
            total=result.total,
            devices=status_map(result.devices),
        )

class ClearResponse(BaseModel):
    status: str = "success"
    message: str = "Data cleared successfully"

class ServerStatusResponse(BaseModel):
    """Schema for the root endpoint"""
    message: str
    status: str = "running"
    received_messages: int
    devices: List[str]
