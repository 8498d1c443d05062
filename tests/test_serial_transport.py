"""Tests for AsyncSerialTransport with a fake pyserial-asyncio connection."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
import serial

from ouija.exceptions import ConnectionError, TimeoutError
from ouija.transport import serial_async
from ouija.transport.abc import Transport
from ouija.transport.serial_async import AsyncSerialTransport
from ouija.transport.settings import Handshake, SerialSettings

FAST = SerialSettings(read_timeout=0.05, idle_gap=0.01, write_timeout=0.05)


class FakeReader:
    """StreamReader stand-in that serves queued chunks."""

    def __init__(self):
        self._chunks = []
        self._eof = False

    def feed_data(self, data):
        self._chunks.append(bytes(data))

    def feed_eof(self):
        self._eof = True

    async def read(self, n=-1):
        if self._chunks:
            return self._chunks.pop(0)
        if self._eof:
            return b""
        await asyncio.sleep(3600)


def make_writer():
    """Create a StreamWriter stand-in."""
    writer = MagicMock()
    writer.drain = AsyncMock()
    writer.wait_closed = AsyncMock()
    return writer


@pytest.fixture
def connection(monkeypatch):
    """Patch open_serial_connection and return (reader, writer, open_mock)."""
    reader = FakeReader()
    writer = make_writer()
    open_mock = AsyncMock(return_value=(reader, writer))
    monkeypatch.setattr(serial_async.serial_asyncio, "open_serial_connection", open_mock)
    return reader, writer, open_mock


class TestAsyncSerialTransport:
    """Tests for AsyncSerialTransport."""

    def test_is_transport(self):
        """Test the serial transport satisfies the transport contract."""
        assert isinstance(AsyncSerialTransport(), Transport)

    def test_default_settings(self):
        """Test default line configuration."""
        settings = AsyncSerialTransport().settings
        assert settings.baudrate == 115200
        assert settings.bytesize == 8
        assert settings.parity == "N"
        assert settings.stopbits == 1
        assert settings.handshake == Handshake.NONE

    @pytest.mark.asyncio
    async def test_transfer_returns_reply(self, connection):
        """Test the frame is written and the reply read."""
        reader, writer, open_mock = connection
        reader.feed_data(b"\x00")

        reply = await AsyncSerialTransport(FAST).transfer("/dev/ttyUSB0", b"\xAA\x55")

        assert reply == b"\x00"
        writer.write.assert_called_once_with(b"\xAA\x55")
        writer.close.assert_called_once()
        assert open_mock.call_args.kwargs["url"] == "/dev/ttyUSB0"
        assert open_mock.call_args.kwargs["baudrate"] == 115200

    @pytest.mark.asyncio
    async def test_reply_ends_at_eof(self, connection):
        """Test multiple chunks are joined until the stream ends."""
        reader, _, _ = connection
        reader.feed_data(b"\x00\x01")
        reader.feed_data(b"\x02")
        reader.feed_eof()

        reply = await AsyncSerialTransport(FAST).transfer("COM3", b"\x01")

        assert reply == b"\x00\x01\x02"

    @pytest.mark.asyncio
    async def test_silent_device(self, connection):
        """Test the read timeout ends the reply with no data."""
        reply = await AsyncSerialTransport(FAST).transfer("COM3", b"\x01")

        assert reply == b""

    @pytest.mark.asyncio
    async def test_handshake_flags(self, connection):
        """Test flow control settings reach pyserial."""
        _, _, open_mock = connection
        settings = SerialSettings(
            handshake=Handshake.RTS_CTS,
            read_timeout=0.01,
            idle_gap=0.01,
        )

        await AsyncSerialTransport(settings).transfer("COM3", b"\x01")

        assert open_mock.call_args.kwargs["rtscts"] is True
        assert open_mock.call_args.kwargs["xonxoff"] is False

    @pytest.mark.asyncio
    async def test_open_failure(self, monkeypatch):
        """Test SerialException on open becomes ConnectionError."""
        open_mock = AsyncMock(side_effect=serial.SerialException("could not open port"))
        monkeypatch.setattr(serial_async.serial_asyncio, "open_serial_connection", open_mock)

        with pytest.raises(ConnectionError, match="could not open port"):
            await AsyncSerialTransport(FAST).transfer("COM99", b"\x01")

    @pytest.mark.asyncio
    async def test_write_timeout(self, connection):
        """Test a drain that never completes raises TimeoutError."""
        _, writer, _ = connection

        async def never_drains():
            await asyncio.sleep(1)

        writer.drain = never_drains

        with pytest.raises(TimeoutError):
            await AsyncSerialTransport(FAST).transfer("COM3", b"\x01")
        writer.close.assert_called_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("port", ["", "   "])
    async def test_blank_port(self, port):
        """Test blank port names are rejected."""
        with pytest.raises(ValueError):
            await AsyncSerialTransport(FAST).transfer(port, b"\x01")

    @pytest.mark.asyncio
    async def test_none_data(self):
        """Test None data is rejected."""
        with pytest.raises(ValueError):
            await AsyncSerialTransport(FAST).transfer("COM3", None)

    @pytest.mark.asyncio
    async def test_transfers_on_one_port_are_serialized(self, monkeypatch):
        """Test concurrent transfers to one port never overlap."""
        active = 0
        peak = 0

        async def fake_open(**kwargs):
            nonlocal active, peak
            active += 1
            peak = max(peak, active)
            reader = FakeReader()
            reader.feed_data(b"\x00")
            reader.feed_eof()
            writer = make_writer()

            async def closed():
                nonlocal active
                active -= 1

            writer.wait_closed = closed
            await asyncio.sleep(0.01)
            return reader, writer

        monkeypatch.setattr(serial_async.serial_asyncio, "open_serial_connection", fake_open)
        transport = AsyncSerialTransport(FAST)

        replies = await asyncio.gather(*(transport.transfer("COM3", b"\x01") for _ in range(3)))

        assert replies == [b"\x00"] * 3
        assert peak == 1
