"""
Async serial transport using pyserial-asyncio.

This module provides the primary transport implementation for talking to
the device over a USB/UART serial link.

Serial Configuration (defaults):
- Baud rate: 115200
- Data bits: 8
- Parity: None
- Stop bits: 1
- Flow control: None
- Read/write timeouts: 1.0 s

Each transfer opens the port, writes the frame, reads until the line goes
quiet and closes the port again. The reply has no terminator, so "quiet" is
the only end-of-message signal: no first byte within ``read_timeout`` means
no reply, and once data arrives a silence of ``idle_gap`` ends it.

Example:
    >>> transport = AsyncSerialTransport(SerialSettings(baudrate=115200))
    >>> reply = await transport.transfer("/dev/ttyUSB0", frame)
"""

from __future__ import annotations

import asyncio
import logging

import serial
import serial_asyncio

from ouija.exceptions import ConnectionError, TimeoutError, TransportError
from ouija.transport.settings import SerialSettings

logger = logging.getLogger(__name__)


class AsyncSerialTransport:
    """
    Async serial transport using pyserial-asyncio.

    Concurrent transfers to the same port name are serialized with a
    per-port lock; transfers to different ports run independently.

    Attributes:
        settings: Serial line configuration used for every transfer.

    Example:
        >>> transport = AsyncSerialTransport()
        >>> reply = await transport.transfer("COM3", bytes.fromhex("aa55010000fe"))
    """

    def __init__(self, settings: SerialSettings | None = None) -> None:
        """
        Initialize the async serial transport.

        Args:
            settings: Serial configuration (default: SerialSettings()).
        """
        self._settings = settings or SerialSettings()
        self._locks: dict[str, asyncio.Lock] = {}

    @property
    def settings(self) -> SerialSettings:
        """Get the serial configuration."""
        return self._settings

    async def transfer(self, port: str, data: bytes) -> bytes:
        """
        Send a frame and return the raw reply.

        Args:
            port: Serial port path (e.g., "/dev/ttyUSB0", "COM3").
            data: Frame to send.

        Returns:
            Reply bytes; empty when the device stayed silent.

        Raises:
            ValueError: If port is blank or data is None.
            ConnectionError: If the port cannot be opened.
            TimeoutError: If the frame cannot be written in time.
            TransportError: If reading or writing fails.
        """
        if not port or not port.strip():
            raise ValueError("port is required")
        if data is None:
            raise ValueError("data is required")

        async with self._lock_for(port):
            reader, writer = await self._open(port)
            try:
                self._discard_buffers(writer)
                if data:
                    await self._write(writer, data)
                    logger.debug("TX %s: %s", port, bytes(data).hex(" "))
                reply = await self._read_reply(reader)
                logger.debug("RX %s: %s", port, reply.hex(" ") or "(none)")
                return reply
            finally:
                await self._close(port, writer)

    def _lock_for(self, port: str) -> asyncio.Lock:
        return self._locks.setdefault(port, asyncio.Lock())

    async def _open(self, port: str) -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
        settings = self._settings
        try:
            reader, writer = await serial_asyncio.open_serial_connection(
                url=port,
                baudrate=settings.baudrate,
                parity=settings.parity,
                stopbits=settings.stopbits,
                bytesize=settings.bytesize,
                xonxoff=settings.handshake.xonxoff,
                rtscts=settings.handshake.rtscts,
                dsrdtr=False,
            )
        except serial.SerialException as e:
            raise ConnectionError(f"Failed to open serial port {port}: {e}") from e
        except OSError as e:
            raise ConnectionError(f"OS error opening {port}: {e}") from e

        logger.info("Opened %s at %d baud", port, settings.baudrate)
        return reader, writer

    async def _write(self, writer: asyncio.StreamWriter, data: bytes) -> None:
        timeout = self._settings.write_timeout
        try:
            writer.write(data)
            await asyncio.wait_for(writer.drain(), timeout=timeout)
        except asyncio.TimeoutError:
            raise TimeoutError("Timeout writing frame", timeout_seconds=timeout) from None
        except Exception as e:
            raise TransportError(f"Write failed: {e}") from e

    async def _read_reply(self, reader: asyncio.StreamReader) -> bytes:
        settings = self._settings
        reply = bytearray()
        timeout = settings.read_timeout

        while True:
            try:
                chunk = await asyncio.wait_for(
                    reader.read(settings.read_chunk_size),
                    timeout=timeout,
                )
            except asyncio.TimeoutError:
                # read timeout -> transmission complete
                break
            except Exception as e:
                raise TransportError(f"Read failed: {e}") from e

            if not chunk:
                break
            reply.extend(chunk)
            timeout = settings.idle_gap

        return bytes(reply)

    def _discard_buffers(self, writer: asyncio.StreamWriter) -> None:
        serial_instance = getattr(writer.transport, "serial", None)
        if serial_instance is None:
            return
        try:
            serial_instance.reset_input_buffer()
            serial_instance.reset_output_buffer()
        except serial.SerialException as e:
            logger.debug("Could not reset buffers: %s", e)

    async def _close(self, port: str, writer: asyncio.StreamWriter) -> None:
        try:
            writer.close()
            await writer.wait_closed()
        except (serial.SerialException, OSError) as e:
            logger.debug("Error closing %s: %s", port, e)
        logger.info("Closed %s", port)

    def __repr__(self) -> str:
        return f"AsyncSerialTransport(baudrate={self._settings.baudrate})"
