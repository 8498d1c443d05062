"""
Protocol command types and constants.

Frame layout (single-byte fields, no endianness concerns):

    offset 0      0xAA          magic 1
    offset 1      0x55          magic 2
    offset 2      0x01          protocol version
    offset 3      command type
    offset 4      payload length L (0..255)
    offset 5..    payload (L bytes)
    offset 5+L    checksum (XOR of every preceding byte)
"""

from __future__ import annotations

from enum import IntEnum
from typing import Final


class CommandType(IntEnum):
    """
    Command type byte sent at offset 3 of every frame.

    The device firmware interprets these; the protocol itself carries any
    byte value, so values outside this enumeration are still encodable.
    """

    CHECK_STATUS = 0x00
    """Liveness probe, no payload."""

    PLAY_ONCE = 0x01
    """Play the payload sequence once."""

    PLAY_REPEAT = 0x02
    """Play the payload sequence in a loop."""

    STOP = 0x03
    """Stop playback."""

    YES = 0x04
    """Show the YES answer."""

    NO = 0x05
    """Show the NO answer."""


class ProtocolConstants:
    """Protocol constants used across the codec and the transports."""

    # ===== Framing =====

    MAGIC1: Final[int] = 0xAA
    """First magic byte."""

    MAGIC2: Final[int] = 0x55
    """Second magic byte."""

    PROTOCOL_VERSION: Final[int] = 0x01
    """Fixed protocol version byte."""

    HEADER_SIZE: Final[int] = 5
    """Magic (2) + version + command type + length."""

    FRAME_OVERHEAD: Final[int] = 6
    """Header plus trailing checksum byte."""

    MAX_PAYLOAD_LENGTH: Final[int] = 255
    """Largest payload the 1-byte length field can describe."""

    MAX_FRAME_LENGTH: Final[int] = 261
    """FRAME_OVERHEAD + MAX_PAYLOAD_LENGTH."""

    # ===== Responses =====

    STATUS_OK: Final[int] = 0x00
    """Response status signalling acceptance."""

    # ===== Serial Port Configuration =====

    DEFAULT_BAUD_RATE: Final[int] = 115200
    """Default baud rate for serial communication."""

    DEFAULT_DATA_BITS: Final[int] = 8
    """Default data bits."""

    DEFAULT_STOP_BITS: Final[int] = 1
    """Default stop bits."""

    DEFAULT_READ_TIMEOUT: Final[float] = 1.0
    """Seconds without a first byte before the reply is considered empty."""

    DEFAULT_WRITE_TIMEOUT: Final[float] = 1.0
    """Seconds allowed for a frame to drain to the port."""

    DEFAULT_IDLE_GAP: Final[float] = 0.02
    """Silence after received data that marks the end of a reply."""

    READ_CHUNK_SIZE: Final[int] = 1024
    """Bytes requested per serial read."""

    # ===== BLE Configuration =====

    DEFAULT_BLE_CHUNK_SIZE: Final[int] = 20
    """Conservative ATT write size when the negotiated MTU is unknown."""

    DEFAULT_BLE_CONNECT_TIMEOUT: Final[float] = 10.0
    """Seconds allowed for BLE connection setup."""

    DEFAULT_BLE_RESPONSE_TIMEOUT: Final[float] = 1.0
    """Seconds to wait for the first notification after the last chunk is written."""

    DEFAULT_BLE_IDLE_GAP: Final[float] = 0.1
    """Silence between notifications that marks the end of a reply."""

    DEFAULT_BLE_SCAN_TIMEOUT: Final[float] = 5.0
    """Seconds a device discovery scan runs."""

    NUS_WRITE_CHARACTERISTIC: Final[str] = "6e400002-b5a3-f393-e0a9-e50e24dcca9e"
    """Nordic UART Service RX characteristic (host writes here)."""

    NUS_NOTIFY_CHARACTERISTIC: Final[str] = "6e400003-b5a3-f393-e0a9-e50e24dcca9e"
    """Nordic UART Service TX characteristic (device notifies here)."""


PLAY_COMMANDS: Final[frozenset[int]] = frozenset({
    CommandType.PLAY_ONCE,
    CommandType.PLAY_REPEAT,
})
"""Command types that need a non-empty message."""
