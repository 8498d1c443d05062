"""
BLE transport using bleak.

Frames are written to a GATT characteristic in chunks no larger than the
link's maximum write size; replies arrive as notifications on a second
characteristic. Defaults target the Nordic UART Service.

Per transfer:
1. Connect to the device address
2. Subscribe to the notify characteristic
3. Write the frame chunk by chunk
4. Collect notifications until the link goes quiet
5. Unsubscribe and disconnect

The maximum write size is taken from ``BleSettings.chunk_size`` when set,
otherwise from what the write characteristic reports once connected, and
never below the conservative 20-byte default.

Example:
    >>> transport = BleTransport(BleSettings(chunk_size=180))
    >>> reply = await transport.transfer("AA:BB:CC:DD:EE:FF", frame)
"""

from __future__ import annotations

import asyncio
import logging

from bleak import BleakClient
from bleak.exc import BleakError

from ouija.exceptions import ConnectionError, TimeoutError, TransportError
from ouija.protocol.constants import ProtocolConstants
from ouija.transport.settings import BleSettings

logger = logging.getLogger(__name__)


class BleTransport:
    """
    Chunked-write BLE transport.

    Only one exchange per device address is in flight at a time.

    Attributes:
        settings: BLE link configuration used for every transfer.
    """

    def __init__(self, settings: BleSettings | None = None) -> None:
        self._settings = settings or BleSettings()
        self._locks: dict[str, asyncio.Lock] = {}
        self._write_lengths: dict[str, int] = {}

    @property
    def settings(self) -> BleSettings:
        """Get the BLE configuration."""
        return self._settings

    async def max_write_length(self, port: str) -> int:
        """
        Get the largest single write for a device.

        Returns the size negotiated during the last transfer to this
        address, the configured chunk size, or the 20-byte default.
        """
        if self._settings.chunk_size is not None:
            return self._settings.chunk_size
        return self._write_lengths.get(port, ProtocolConstants.DEFAULT_BLE_CHUNK_SIZE)

    async def transfer(self, port: str, data: bytes) -> bytes:
        """
        Send a frame to a BLE device and return its notified reply.

        Args:
            port: Device address (MAC on Linux/Windows, UUID on macOS).
            data: Frame to send.

        Returns:
            Concatenated notification payloads; empty when the device
            stayed silent or no notify characteristic is configured.

        Raises:
            ValueError: If port is blank or data is None.
            ConnectionError: If the device cannot be connected or lacks
                the write characteristic.
            TimeoutError: If connecting times out.
            TransportError: If a GATT operation fails.
        """
        if not port or not port.strip():
            raise ValueError("port is required")
        if data is None:
            raise ValueError("data is required")

        async with self._lock_for(port):
            client = BleakClient(port, timeout=self._settings.connect_timeout)
            await self._connect(client, port)
            try:
                return await self._exchange(client, port, bytes(data))
            except BleakError as e:
                raise TransportError(f"BLE exchange with {port} failed: {e}") from e
            finally:
                await self._disconnect(client, port)

    def _lock_for(self, port: str) -> asyncio.Lock:
        return self._locks.setdefault(port, asyncio.Lock())

    async def _connect(self, client: BleakClient, port: str) -> None:
        try:
            await client.connect()
        except asyncio.TimeoutError:
            raise TimeoutError(
                f"Timeout connecting to {port}",
                timeout_seconds=self._settings.connect_timeout,
            ) from None
        except (BleakError, OSError) as e:
            raise ConnectionError(f"Failed to connect to {port}: {e}") from e
        logger.info("Connected to %s", port)

    async def _exchange(self, client: BleakClient, port: str, data: bytes) -> bytes:
        settings = self._settings
        notifications: asyncio.Queue[bytes] = asyncio.Queue()

        def on_notify(_sender: object, payload: bytearray) -> None:
            notifications.put_nowait(bytes(payload))

        chunk_size = self._negotiate_chunk_size(client, port)

        if settings.notify_characteristic:
            await client.start_notify(settings.notify_characteristic, on_notify)

        for offset in range(0, len(data), chunk_size):
            chunk = data[offset:offset + chunk_size]
            await client.write_gatt_char(
                settings.write_characteristic,
                chunk,
                response=settings.write_with_response,
            )
        logger.debug("TX %s (%d-byte chunks): %s", port, chunk_size, data.hex(" "))

        if not settings.notify_characteristic:
            return b""

        reply = await self._collect_reply(notifications)
        await client.stop_notify(settings.notify_characteristic)
        logger.debug("RX %s: %s", port, reply.hex(" ") or "(none)")
        return reply

    def _negotiate_chunk_size(self, client: BleakClient, port: str) -> int:
        settings = self._settings
        characteristic = client.services.get_characteristic(settings.write_characteristic)
        if characteristic is None:
            raise ConnectionError(f"Write characteristic not found: {settings.write_characteristic}")

        if settings.chunk_size is not None:
            return settings.chunk_size

        # Applies to acknowledged writes too; see BleSettings.
        size = max(
            ProtocolConstants.DEFAULT_BLE_CHUNK_SIZE,
            characteristic.max_write_without_response_size,
        )
        self._write_lengths[port] = size
        return size

    async def _collect_reply(self, notifications: asyncio.Queue[bytes]) -> bytes:
        reply = bytearray()
        timeout = self._settings.response_timeout

        while True:
            try:
                chunk = await asyncio.wait_for(notifications.get(), timeout=timeout)
            except asyncio.TimeoutError:
                break
            reply.extend(chunk)
            timeout = self._settings.idle_gap

        return bytes(reply)

    async def _disconnect(self, client: BleakClient, port: str) -> None:
        try:
            await client.disconnect()
        except (BleakError, OSError) as e:
            logger.debug("Error disconnecting %s: %s", port, e)
        logger.info("Disconnected from %s", port)

    def __repr__(self) -> str:
        return f"BleTransport(write={self._settings.write_characteristic!r})"
