"""
ouija - Python library for controlling the Ouija display/playback device.

This library encodes commands into the device's framed binary protocol
(magic bytes, length-prefixed payload, XOR checksum), exchanges them over a
serial or BLE link, and turns every outcome into a result record.

Example:
    >>> from ouija import DeviceClient
    >>> from ouija.transport import AsyncSerialTransport
    >>>
    >>> async def main():
    ...     client = DeviceClient(AsyncSerialTransport())
    ...     status = await client.check_status("/dev/ttyUSB0")
    ...     if status.online:
    ...         await client.play("/dev/ttyUSB0", "да", repeat=True)
"""

from ouija.client import DeviceClient
from ouija.exceptions import (
    ChecksumError,
    ConnectionError,
    DecodingError,
    EmptyInput,
    EncodingError,
    FrameError,
    InvalidByteValue,
    OuijaError,
    PayloadTooLarge,
    ProtocolViolation,
    TimeoutError,
    TransportError,
    UnsupportedCharacter,
)
from ouija.models.records import (
    Command,
    DeviceResponse,
    FailureReason,
    PayloadEncoding,
    StatusResult,
    TransferResult,
)
from ouija.protocol.constants import CommandType
from ouija.protocol.decoder import FramedResponseDecoder, StatusByteDecoder
from ouija.protocol.encoder import FrameEncoder
from ouija.protocol.validation import ResponseValidator
from ouija.transport import AsyncSerialTransport, BleTransport, Transport

__version__ = "0.1.0"
__all__ = [
    # Client
    "DeviceClient",
    # Models
    "Command",
    "CommandType",
    "PayloadEncoding",
    "DeviceResponse",
    "StatusResult",
    "TransferResult",
    "FailureReason",
    # Codec
    "FrameEncoder",
    "StatusByteDecoder",
    "FramedResponseDecoder",
    "ResponseValidator",
    # Exceptions
    "OuijaError",
    "EncodingError",
    "PayloadTooLarge",
    "UnsupportedCharacter",
    "DecodingError",
    "EmptyInput",
    "InvalidByteValue",
    "FrameError",
    "ChecksumError",
    "TransportError",
    "ConnectionError",
    "TimeoutError",
    "ProtocolViolation",
    # Transport
    "Transport",
    "AsyncSerialTransport",
    "BleTransport",
    # Version
    "__version__",
]
