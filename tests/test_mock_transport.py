"""Tests for MockTransport."""

import pytest

from ouija.exceptions import ConnectionError, TransportError
from ouija.transport.abc import Transport
from ouija.transport.mock import MockTransport, ScriptedMockTransport


class TestMockTransport:
    """Tests for MockTransport class."""

    @pytest.fixture
    def transport(self):
        """Create a MockTransport instance."""
        return MockTransport()

    def test_is_transport(self, transport):
        """Test the mock satisfies the transport contract."""
        assert isinstance(transport, Transport)

    @pytest.mark.asyncio
    async def test_queued_responses_in_order(self, transport):
        """Test replies are returned FIFO."""
        transport.add_responses(b"\x00", b"\x01")

        assert await transport.transfer("COM1", b"a") == b"\x00"
        assert await transport.transfer("COM1", b"b") == b"\x01"

    @pytest.mark.asyncio
    async def test_empty_queue_returns_empty_bytes(self, transport):
        """Test silence when nothing is queued."""
        assert await transport.transfer("COM1", b"a") == b""

    @pytest.mark.asyncio
    async def test_null_reply(self, transport):
        """Test a queued None is returned as-is."""
        transport.add_response(None)

        assert await transport.transfer("COM1", b"a") is None

    @pytest.mark.asyncio
    async def test_queued_error(self, transport):
        """Test queued exceptions are raised once."""
        transport.add_error(ConnectionError("unplugged"))
        transport.add_response(b"\x00")

        with pytest.raises(ConnectionError):
            await transport.transfer("COM1", b"a")
        assert await transport.transfer("COM1", b"b") == b"\x00"

    @pytest.mark.asyncio
    async def test_records_writes_and_ports(self, transport):
        """Test frames and ports are recorded."""
        await transport.transfer("COM1", b"first")
        await transport.transfer("COM2", bytearray(b"second"))

        assert transport.written_data == [b"first", b"second"]
        assert transport.last_written == b"second"
        assert transport.ports == ["COM1", "COM2"]
        transport.assert_written(b"first", index=0)
        transport.assert_write_count(2)

    @pytest.mark.asyncio
    async def test_assertions_fail(self, transport):
        """Test assertion helpers report mismatches."""
        with pytest.raises(AssertionError):
            transport.assert_written(b"x")

        await transport.transfer("COM1", b"a")

        with pytest.raises(AssertionError):
            transport.assert_written(b"b")
        with pytest.raises(AssertionError):
            transport.assert_write_count(2)

    @pytest.mark.asyncio
    async def test_response_callback(self, transport):
        """Test callback replies take precedence over the queue."""
        transport.add_response(b"\x09")
        transport.set_response_callback(lambda data: b"\x00" if data == b"ok" else None)

        assert await transport.transfer("COM1", b"ok") == b"\x00"
        assert await transport.transfer("COM1", b"other") == b"\x09"

    @pytest.mark.asyncio
    async def test_none_data(self, transport):
        """Test None data raises TransportError."""
        with pytest.raises(TransportError):
            await transport.transfer("COM1", None)

    @pytest.mark.asyncio
    async def test_clear(self, transport):
        """Test clear resets recorded and pending state."""
        transport.add_response(b"\x00")
        await transport.transfer("COM1", b"a")
        transport.add_response(b"\x01")

        transport.clear()

        assert transport.written_data == []
        assert transport.ports == []
        assert await transport.transfer("COM1", b"b") == b""


class TestScriptedMockTransport:
    """Tests for ScriptedMockTransport class."""

    @pytest.mark.asyncio
    async def test_script_followed(self):
        """Test matching requests receive scripted replies."""
        transport = ScriptedMockTransport()
        transport.expect(request=b"one", response=b"\x00")
        transport.expect(response=b"\x01")

        assert await transport.transfer("COM1", b"one") == b"\x00"
        assert await transport.transfer("COM1", b"anything") == b"\x01"
        assert await transport.transfer("COM1", b"extra") == b""

    @pytest.mark.asyncio
    async def test_script_mismatch(self):
        """Test unexpected requests fail the script."""
        transport = ScriptedMockTransport()
        transport.expect(request=b"one", response=b"\x00")

        with pytest.raises(AssertionError, match="step 0"):
            await transport.transfer("COM1", b"two")

    @pytest.mark.asyncio
    async def test_reset_and_clear_script(self):
        """Test the script can be replayed and cleared."""
        transport = ScriptedMockTransport()
        transport.expect(response=b"\x00")

        await transport.transfer("COM1", b"a")
        transport.reset_script()
        assert await transport.transfer("COM1", b"a") == b"\x00"

        transport.clear_script()
        assert await transport.transfer("COM1", b"a") == b""
