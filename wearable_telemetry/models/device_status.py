"""
Device status model for the latest known state of a device
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

WIFI = "WiFi"
BLUETOOTH = "Bluetooth"

def classify_connection(payload: Any) -> str:
    """Derive the connection type from the payload's numeric ``type`` field.

    Only a numeric zero means WiFi; a missing field, a boolean, a string or a
    payload that is not an object all count as Bluetooth.
    """
    if not isinstance(payload, dict):
        return BLUETOOTH
    value = payload.get("type")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return BLUETOOTH
    return WIFI if value == 0 else BLUETOOTH

@dataclass(frozen=True)
class DeviceStatus:
    """Latest summary for one device"""

    last_seen: str
    message_count: int
    connection_type: str

    @classmethod
    def first_seen(cls, timestamp: str, payload: Any) -> "DeviceStatus":
        return cls(last_seen=timestamp, message_count=1, connection_type=classify_connection(payload))

    def seen_again(self, timestamp: str, payload: Any) -> "DeviceStatus":
        return replace(
            self,
            last_seen=timestamp,
            message_count=self.message_count + 1,
            connection_type=classify_connection(payload),
        )

    @staticmethod
    def advance(previous: Optional["DeviceStatus"], timestamp: str, payload: Any) -> "DeviceStatus":
        if previous is None:
            return DeviceStatus.first_seen(timestamp, payload)
        return previous.seen_again(timestamp, payload)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "last_seen": self.last_seen,
            "message_count": self.message_count,
            "connection_type": self.connection_type,
        }

    def __repr__(self):
        return f"<DeviceStatus(last_seen={self.last_seen}, count={self.message_count}, connection={self.connection_type})>"
