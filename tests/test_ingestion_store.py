import unittest
import sys
import os
import threading
from itertools import count

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from wearable_telemetry.models import DeviceStatus, classify_connection
from wearable_telemetry.storage.ingestion_store import IngestionStore, utc_timestamp

def make_clock():
    """Clock returning distinct, increasing timestamps"""
    ticks = count()
    return lambda: f"2026-10-19T12:00:{next(ticks) % 60:02d}.000Z"

class TestIngestionStore(unittest.TestCase):
    """Test cases for the in-memory ingestion store"""

    def setUp(self):
        """Set up test fixtures"""
        self.store = IngestionStore(clock=make_clock())

    def test_ingest_returns_entry_with_server_timestamp(self):
        """Ingest echoes the stored entry"""
        entry = self.store.ingest("w1", {"type": 0, "steps": 12})

        self.assertEqual(entry.device_id, "w1")
        self.assertEqual(entry.timestamp, "2026-10-19T12:00:00.000Z")
        self.assertEqual(entry.payload, {"type": 0, "steps": 12})
        self.assertEqual(len(self.store), 1)

    def test_missing_device_id_becomes_unknown(self):
        """Absent or empty device ids are normalized"""
        self.store.ingest(None, {})
        self.store.ingest("", {})

        devices, total = self.store.list_devices()
        self.assertEqual(total, 1)
        self.assertEqual(devices["unknown"].message_count, 2)

    def test_connection_type_follows_latest_payload(self):
        """type 0 is WiFi, anything else Bluetooth, and the latest wins"""
        self.store.ingest("w1", {"type": 0})
        devices, _ = self.store.list_devices()
        self.assertEqual(devices["w1"].connection_type, "WiFi")

        self.store.ingest("w1", {"type": 1})
        devices, _ = self.store.list_devices()
        self.assertEqual(devices["w1"].connection_type, "Bluetooth")
        self.assertEqual(devices["w1"].message_count, 2)

    def test_eviction_keeps_most_recent_entries(self):
        """Overflow drops the oldest entries but never the device count"""
        for n in range(1005):
            self.store.ingest("w2", {"n": n})

        result = self.store.query(limit=2000)
        self.assertEqual(result.total, 1000)
        self.assertEqual([entry.payload["n"] for entry in result.entries], list(range(5, 1005)))
        self.assertEqual(result.devices["w2"].message_count, 1005)

    def test_eviction_is_global_across_devices(self):
        """A busy device pushes out other devices' entries but not their status"""
        store = IngestionStore(max_entries=3, clock=make_clock())
        store.ingest("quiet", {"n": 0})
        for n in range(3):
            store.ingest("busy", {"n": n})

        self.assertEqual(store.query(device_id="quiet").total, 0)
        devices, _ = store.list_devices()
        self.assertEqual(devices["quiet"].message_count, 1)

    def test_query_filters_and_limits(self):
        """Filtered query returns the tail slice and the full matching count"""
        for n in range(10):
            self.store.ingest("a" if n % 2 == 0 else "b", {"n": n})

        result = self.store.query(device_id="a", limit=3)

        self.assertEqual(result.total, 5)
        self.assertEqual([entry.payload["n"] for entry in result.entries], [4, 6, 8])
        self.assertTrue(all(entry.device_id == "a" for entry in result.entries))
        self.assertEqual(set(result.devices), {"a", "b"})

    def test_query_defaults_limit(self):
        """Missing or non-positive limits fall back to the default of 50"""
        for n in range(60):
            self.store.ingest("w1", {"n": n})

        self.assertEqual(len(self.store.query().entries), 50)
        self.assertEqual(len(self.store.query(limit=0).entries), 50)
        self.assertEqual(len(self.store.query(limit=-3).entries), 50)
        self.assertEqual(self.store.query().entries[0].payload["n"], 10)

    def test_query_unknown_device(self):
        """An unknown filter yields nothing"""
        self.store.ingest("w1", {})

        result = self.store.query(device_id="nobody")
        self.assertEqual(result.entries, [])
        self.assertEqual(result.total, 0)
        self.assertIn("w1", result.devices)

    def test_clear_single_device(self):
        """Clearing one device leaves the others untouched"""
        self.store.ingest("a", {"n": 1})
        self.store.ingest("b", {"n": 2})
        self.store.ingest("a", {"n": 3})

        self.store.clear("a")

        result = self.store.query()
        self.assertEqual([entry.device_id for entry in result.entries], ["b"])
        self.assertEqual(list(result.devices), ["b"])
        self.assertEqual(result.devices["b"].message_count, 1)

    def test_clear_all(self):
        """Clearing without a device resets the store"""
        self.store.ingest("a", {})
        self.store.ingest("b", {})

        self.store.clear()

        self.assertEqual(len(self.store), 0)
        self.assertEqual(self.store.list_devices(), ({}, 0))

    def test_clear_is_idempotent(self):
        """Clearing an unknown device is a no-op"""
        self.store.ingest("a", {})

        self.store.clear("ghost")
        self.store.clear("ghost")

        self.assertEqual(len(self.store), 1)

    def test_clear_resets_message_count(self):
        """Counting restarts after a clear"""
        self.store.ingest("a", {})
        self.store.ingest("a", {})
        self.store.clear("a")
        self.store.ingest("a", {})

        devices, _ = self.store.list_devices()
        self.assertEqual(devices["a"].message_count, 1)

    def test_capacity_survives_device_clear(self):
        """The log stays bounded after it is rebuilt by a device clear"""
        store = IngestionStore(max_entries=2, clock=make_clock())
        store.ingest("a", {})
        store.ingest("b", {})
        store.clear("a")
        for _ in range(5):
            store.ingest("c", {})

        self.assertEqual(len(store), 2)

    def test_dispatch_acknowledges_without_delivery(self):
        """Commands are echoed back, never delivered"""
        ack = self.store.dispatch("w1", "vibrate", {"ms": 200})

        self.assertEqual(ack.device_id, "w1")
        self.assertEqual(ack.command, "vibrate")
        self.assertEqual(ack.params, {"ms": 200})
        self.assertFalse(ack.delivered)
        self.assertEqual(len(self.store), 0)

    def test_snapshot(self):
        """Snapshot reports entry count and statuses together"""
        self.store.ingest("a", {})
        self.store.ingest("b", {})

        snapshot = self.store.snapshot()
        self.assertEqual(snapshot.entry_count, 2)
        self.assertEqual(list(snapshot.devices), ["a", "b"])

    def test_concurrent_ingestion_keeps_counts(self):
        """Parallel ingestion loses no status updates"""
        store = IngestionStore(max_entries=100)

        def worker():
            for _ in range(500):
                store.ingest("shared", {"type": 0})

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        devices, _ = store.list_devices()
        self.assertEqual(devices["shared"].message_count, 4000)
        self.assertEqual(len(store), 100)

    def test_invalid_capacity(self):
        with self.assertRaises(ValueError):
            IngestionStore(max_entries=0)

    def test_utc_timestamp_format(self):
        """Server timestamps are ISO-8601 UTC with milliseconds"""
        stamp = utc_timestamp()
        self.assertTrue(stamp.endswith("Z"))
        self.assertRegex(stamp, r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")

class TestConnectionClassification(unittest.TestCase):
    """Test cases for the connection type discriminator"""

    def test_numeric_zero_is_wifi(self):
        self.assertEqual(classify_connection({"type": 0}), "WiFi")
        self.assertEqual(classify_connection({"type": 0.0}), "WiFi")

    def test_everything_else_is_bluetooth(self):
        for payload in ({"type": 1}, {"type": "0"}, {"type": False}, {"type": None}, {}, [0], "raw", None):
            self.assertEqual(classify_connection(payload), "Bluetooth", payload)

    def test_advance_from_nothing(self):
        status = DeviceStatus.advance(None, "t1", {"type": 0})
        self.assertEqual(status.to_dict(), {"last_seen": "t1", "message_count": 1, "connection_type": "WiFi"})

if __name__ == '__main__':
    unittest.main()
