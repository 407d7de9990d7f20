"""
In-memory ingestion store
Holds the bounded entry log and the per-device status map
"""

from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Callable, Deque, Dict, List, Optional, Tuple
import structlog

from wearable_telemetry.models import DataEntry, DeviceStatus

logger = structlog.get_logger(__name__)

DEFAULT_MAX_ENTRIES = 1000
DEFAULT_QUERY_LIMIT = 50
UNKNOWN_DEVICE_ID = "unknown"

def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix"""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")

@dataclass(frozen=True)
class QueryResult:
    entries: List[DataEntry]
    total: int
    devices: Dict[str, DeviceStatus]

@dataclass(frozen=True)
class StoreSnapshot:
    entry_count: int
    devices: Dict[str, DeviceStatus]

@dataclass(frozen=True)
class CommandAck:
    device_id: Any
    command: Any
    params: Any
    delivered: bool = False

class IngestionStore:
    """Bounded telemetry log plus latest status per device.

    Every operation runs under a single lock, so an ingestion (append,
    eviction and status update) is applied as one unit and readers never
    observe it half done. The log is evicted oldest-first across all
    devices; device statuses are never evicted, only cleared.
    """

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        default_limit: int = DEFAULT_QUERY_LIMIT,
        unknown_device_id: str = UNKNOWN_DEVICE_ID,
        clock: Callable[[], str] = utc_timestamp,
    ):
        if max_entries < 1:
            raise ValueError("max_entries must be positive")
        self.max_entries = max_entries
        self.default_limit = default_limit
        self.unknown_device_id = unknown_device_id
        self._clock = clock
        self._lock = Lock()
        self._entries: Deque[DataEntry] = deque(maxlen=max_entries)
        self._devices: Dict[str, DeviceStatus] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def ingest(self, device_id: Optional[str], payload: Any) -> DataEntry:
        """Store one submission and update the sender's status"""
        device_id = device_id or self.unknown_device_id

        with self._lock:
            timestamp = self._clock()
            entry = DataEntry(device_id=device_id, timestamp=timestamp, payload=payload)
            # deque(maxlen) drops the oldest entry on overflow
            self._entries.append(entry)
            self._devices[device_id] = DeviceStatus.advance(
                self._devices.get(device_id), timestamp, payload
            )

        return entry

    def query(self, device_id: Optional[str] = None, limit: Optional[int] = None) -> QueryResult:
        """Most recent ``limit`` entries, optionally for one device, in submission order"""
        if limit is None or limit < 1:
            limit = self.default_limit

        with self._lock:
            if device_id:
                matching = [entry for entry in self._entries if entry.device_id == device_id]
            else:
                matching = list(self._entries)
            devices = dict(self._devices)

        return QueryResult(entries=matching[-limit:], total=len(matching), devices=devices)

    def list_devices(self) -> Tuple[Dict[str, DeviceStatus], int]:
        with self._lock:
            devices = dict(self._devices)
        return devices, len(devices)

    def snapshot(self) -> StoreSnapshot:
        """Entry count and statuses read together"""
        with self._lock:
            return StoreSnapshot(entry_count=len(self._entries), devices=dict(self._devices))

    def clear(self, device_id: Optional[str] = None) -> None:
        """Drop one device's entries and status, or everything when no device is given"""
        with self._lock:
            if device_id:
                kept = [entry for entry in self._entries if entry.device_id != device_id]
                removed = len(self._entries) - len(kept)
                self._entries = deque(kept, maxlen=self.max_entries)
                self._devices.pop(device_id, None)
            else:
                removed = len(self._entries)
                self._entries.clear()
                self._devices.clear()

        logger.info("Data cleared", device_id=device_id, removed_entries=removed)

    def dispatch(self, device_id: Any, command: Any, params: Any = None) -> CommandAck:
        """Acknowledge a command.

        No device transport exists, so nothing is delivered: the command is
        logged and echoed back with ``delivered=False``.
        """
        logger.info("Command received", device_id=device_id, command=command, params=params)
        return CommandAck(device_id=device_id, command=command, params=params)
