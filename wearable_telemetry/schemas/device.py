"""
Device Pydantic schemas
"""

from pydantic import BaseModel, Field
from typing import Dict, Mapping

from wearable_telemetry.models import DeviceStatus

class DeviceStatusResponse(BaseModel):
    """Schema for one device's latest status"""
    last_seen: str = Field(..., description="Timestamp of the latest submission")
    message_count: int = Field(..., description="Submissions since the last clear")
    connection_type: str = Field(..., description="WiFi or Bluetooth")

class DeviceListResponse(BaseModel):
    """Schema for device list response"""
    devices: Dict[str, DeviceStatusResponse]
    total_devices: int

def status_map(devices: Mapping[str, DeviceStatus]) -> Dict[str, DeviceStatusResponse]:
    return {
        device_id: DeviceStatusResponse(**status.to_dict())
        for device_id, status in devices.items()
    }
