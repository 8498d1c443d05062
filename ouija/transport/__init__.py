"""
Transport layer for device communication.

This package provides transport implementations for moving frames to the
device over various physical links.

Available transports:
- AsyncSerialTransport: Async serial port using pyserial-asyncio
- BleTransport: BLE characteristic writes using bleak
- MockTransport: Mock transport for testing without hardware

Discovery helpers: list_serial_ports() for serial ports, scan_ble_devices()
for BLE addresses.

Example:
    >>> from ouija.transport import AsyncSerialTransport, SerialSettings
    >>> transport = AsyncSerialTransport(SerialSettings(baudrate=115200))
    >>> reply = await transport.transfer("/dev/ttyUSB0", frame)

Testing Example:
    >>> from ouija.transport import MockTransport
    >>> mock = MockTransport()
    >>> mock.add_response(bytes([0x00]))  # accepted
"""

from ouija.transport.abc import ChunkedTransport, Transport
from ouija.transport.ble import BleTransport
from ouija.transport.mock import MockTransport, ScriptedMockTransport
from ouija.transport.ports import SerialPortInfo, list_serial_ports
from ouija.transport.scan import BleDeviceInfo, scan_ble_devices
from ouija.transport.serial_async import AsyncSerialTransport
from ouija.transport.settings import BleSettings, Handshake, SerialSettings

__all__ = [
    "Transport",
    "ChunkedTransport",
    "AsyncSerialTransport",
    "BleTransport",
    "MockTransport",
    "ScriptedMockTransport",
    "SerialSettings",
    "BleSettings",
    "Handshake",
    "SerialPortInfo",
    "list_serial_ports",
    "BleDeviceInfo",
    "scan_ble_devices",
]
