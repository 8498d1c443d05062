"""
Transport contract consumed by DeviceClient.

A transport moves one request frame to a device and returns whatever the
device answered. Transports are structural (``typing.Protocol``): any object
with a matching ``transfer`` coroutine qualifies, no base class required.

The transport is the serialization boundary: implementations must ensure
that at most one exchange is in flight per device connection.

Implementations:
- AsyncSerialTransport: pyserial-asyncio, port opened per transfer
- BleTransport: bleak, chunked characteristic writes
- MockTransport: scripted replies for testing without hardware
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Transport(Protocol):
    """
    Byte exchange with a device.

    Example:
        >>> transport: Transport = AsyncSerialTransport()
        >>> reply = await transport.transfer("/dev/ttyUSB0", frame)
    """

    async def transfer(self, port: str, data: bytes) -> bytes | None:
        """
        Send a frame and collect the device's reply.

        Args:
            port: Device identifier (serial port name or BLE address).
            data: Complete frame to send.

        Returns:
            Reply bytes. Empty bytes and None both mean "no response".

        Raises:
            TransportError: If the exchange fails.
            ConnectionError: If the device cannot be reached.
            TimeoutError: If the exchange does not complete in time.
        """
        ...


@runtime_checkable
class ChunkedTransport(Transport, Protocol):
    """Transport whose writes are bounded by a maximum write size."""

    async def max_write_length(self, port: str) -> int:
        """
        Get the largest single write the link accepts.

        Args:
            port: Device identifier.

        Returns:
            Maximum bytes per write.
        """
        ...
