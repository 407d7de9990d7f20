"""
Data entry model for received telemetry submissions
"""

from dataclasses import dataclass
from typing import Any, Dict

@dataclass(frozen=True)
class DataEntry:
    """One telemetry submission as received from a device"""

    device_id: str
    timestamp: str  # ISO-8601, assigned by the server
    payload: Any

    def to_dict(self) -> Dict[str, Any]:
        return {
            "device_id": self.device_id,
            "timestamp": self.timestamp,
            "data": self.payload,
        }

    def __repr__(self):
        return f"<DataEntry(device_id={self.device_id}, timestamp={self.timestamp})>"
