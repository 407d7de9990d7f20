# Models package
from .data_entry import DataEntry
from .device_status import DeviceStatus, classify_connection, WIFI, BLUETOOTH

__all__ = ['DataEntry', 'DeviceStatus', 'classify_connection', 'WIFI', 'BLUETOOTH']
