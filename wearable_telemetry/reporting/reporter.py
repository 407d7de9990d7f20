"""
Periodic statistics reporter
Logs a summary of the ingestion store at a fixed interval
"""

import asyncio
import math
import structlog
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional

from wearable_telemetry.storage.ingestion_store import IngestionStore

logger = structlog.get_logger(__name__)

@dataclass(frozen=True)
class DeviceReport:
    device_id: str
    message_count: int
    seconds_since_seen: Optional[int]  # None when last_seen cannot be read

@dataclass(frozen=True)
class StoreReport:
    generated_at: datetime
    total_messages: int
    active_devices: int
    devices: List[DeviceReport]

def _parse_timestamp(value) -> Optional[datetime]:
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed

def build_report(store: IngestionStore, now: Optional[datetime] = None) -> StoreReport:
    """Summarize the store without modifying it"""
    now = now or datetime.now(timezone.utc)
    snapshot = store.snapshot()

    devices = []
    for device_id, status in snapshot.devices.items():
        last_seen = _parse_timestamp(status.last_seen)
        elapsed = math.floor((now - last_seen).total_seconds()) if last_seen else None
        devices.append(DeviceReport(device_id, status.message_count, elapsed))

    return StoreReport(
        generated_at=now,
        total_messages=snapshot.entry_count,
        active_devices=len(snapshot.devices),
        devices=devices,
    )

def log_report(report: StoreReport) -> None:
    logger.info(
        "Server statistics",
        generated_at=report.generated_at.isoformat(),
        total_messages=report.total_messages,
        active_devices=report.active_devices,
    )
    for device in report.devices:
        logger.info(
            "Device statistics",
            device_id=device.device_id,
            message_count=device.message_count,
            last_seen_seconds_ago=device.seconds_since_seen,
        )

class PeriodicReporter:
    """Emits a store report every ``interval`` seconds"""

    def __init__(
        self,
        store: IngestionStore,
        interval: float = 30,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.store = store
        self.interval = interval
        self.clock = clock
        self.running = False
        self._task: Optional[asyncio.Task] = None

    async def start(self):
        """Start the reporting loop in the background"""
        if self.interval <= 0:
            logger.info("Periodic reporter disabled")
            return
        if self._task is not None:
            return
        self.running = True
        self._task = asyncio.create_task(self._report_loop())
        logger.info("Starting periodic reporter", interval=self.interval)

    async def stop(self):
        """Stop the reporting loop"""
        self.running = False
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
            logger.info("Periodic reporter stopped")

    def report_once(self) -> StoreReport:
        report = build_report(self.store, self.clock())
        log_report(report)
        return report

    async def _report_loop(self):
        """Main reporting loop"""
        while self.running:
            await asyncio.sleep(self.interval)
            try:
                self.report_once()
            except Exception as e:
                logger.error("Error in reporting loop", error=str(e))
