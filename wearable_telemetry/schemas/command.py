"""
Command Pydantic schemas
"""

from pydantic import BaseModel, ConfigDict
from typing import Any, Optional

class CommandRequest(BaseModel):
    """Schema for a command addressed to a device; every field is optional"""
    model_config = ConfigDict(extra="allow")

    device_id: Optional[Any] = None
    command: Optional[Any] = None
    params: Optional[Any] = None

class CommandResponse(BaseModel):
    """Schema for a command acknowledgement"""
    status: str = "success"
    message: str = "Command sent successfully"
    command: Optional[Any] = None
    device_id: Optional[Any] = None
