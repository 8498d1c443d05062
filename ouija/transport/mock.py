"""
Mock transport for testing.

This module provides a mock transport implementation that allows testing
DeviceClient without actual hardware. Replies can be pre-configured,
generated by a callback, or replaced by an exception to simulate link
failures.

Example:
    >>> from ouija.transport import MockTransport
    >>> from ouija import DeviceClient
    >>>
    >>> mock = MockTransport()
    >>> mock.add_response(bytes([0x00]))  # accepted
    >>>
    >>> client = DeviceClient(mock)
    >>> result = await client.check_status("mock://test")
"""

from __future__ import annotations

from collections import deque
from typing import Callable

from ouija.exceptions import TransportError


class MockTransport:
    """
    Mock transport for testing without hardware.

    Every transfer is recorded. Queued items are consumed in FIFO order, one
    per transfer: bytes are returned, None is returned as-is, and exception
    instances are raised. With nothing queued the transfer returns b"".

    Attributes:
        written_data: List of all frames passed to transfer().
        ports: List of port identifiers passed to transfer().

    Example:
        >>> mock = MockTransport()
        >>> mock.add_response(b"\\x00")
        >>> mock.add_error(ConnectionError("unplugged"))
        >>> await mock.transfer("COM1", b"frame")
        b'\\x00'
    """

    def __init__(self, default_port: str = "mock://test") -> None:
        """
        Initialize the mock transport.

        Args:
            default_port: Identifier reported by repr().
        """
        self._default_port = default_port
        self._responses: deque[bytes | BaseException | None] = deque()
        self._written_data: list[bytes] = []
        self._ports: list[str] = []
        self._response_callback: Callable[[bytes], bytes | None] | None = None

    @property
    def written_data(self) -> list[bytes]:
        """Get all data written to the transport."""
        return self._written_data.copy()

    @property
    def last_written(self) -> bytes | None:
        """Get the most recently written data."""
        return self._written_data[-1] if self._written_data else None

    @property
    def ports(self) -> list[str]:
        """Get the port identifiers of all transfers."""
        return self._ports.copy()

    def add_response(self, response: bytes | None) -> None:
        """
        Add a reply to the queue.

        Args:
            response: Bytes to return on the next transfer (None for a null reply).
        """
        self._responses.append(response)

    def add_responses(self, *responses: bytes | None) -> None:
        """
        Add multiple replies to the queue.

        Args:
            *responses: Multiple byte replies to add.
        """
        for response in responses:
            self._responses.append(response)

    def add_error(self, error: BaseException) -> None:
        """
        Queue an exception to raise on the next transfer.

        Args:
            error: Exception instance to raise.
        """
        self._responses.append(error)

    def set_response_callback(
        self,
        callback: Callable[[bytes], bytes | None] | None,
    ) -> None:
        """
        Set a callback to dynamically generate replies.

        The callback receives the written data and should return the reply
        bytes. If it returns None, the next queued reply is used instead.

        Args:
            callback: Function that takes written bytes and returns a reply.
        """
        self._response_callback = callback

    def clear(self) -> None:
        """Clear all written data and pending replies."""
        self._written_data.clear()
        self._ports.clear()
        self._responses.clear()

    async def transfer(self, port: str, data: bytes) -> bytes | None:
        """
        Record the frame and return the next reply.

        Raises:
            TransportError: If data is None.
            BaseException: Whatever was queued with add_error().
        """
        if data is None:
            raise TransportError("Mock transport received no data")

        self._written_data.append(bytes(data))
        self._ports.append(port)

        if self._response_callback:
            response = self._response_callback(bytes(data))
            if response is not None:
                return response

        return self._next_response()

    def _next_response(self) -> bytes | None:
        if not self._responses:
            return b""
        response = self._responses.popleft()
        if isinstance(response, BaseException):
            raise response
        return response

    def assert_written(self, expected: bytes, index: int = -1) -> None:
        """
        Assert that specific data was written.

        Args:
            expected: Expected bytes.
            index: Index in written_data list (-1 for last).

        Raises:
            AssertionError: If data doesn't match.
        """
        if not self._written_data:
            raise AssertionError("No data written to mock transport")

        actual = self._written_data[index]
        if actual != expected:
            raise AssertionError(f"Written data mismatch: expected {expected!r}, got {actual!r}")

    def assert_write_count(self, expected: int) -> None:
        """
        Assert number of transfers.

        Args:
            expected: Expected number of transfers.

        Raises:
            AssertionError: If count doesn't match.
        """
        actual = len(self._written_data)
        if actual != expected:
            raise AssertionError(f"Write count mismatch: expected {expected}, got {actual}")

    def __repr__(self) -> str:
        return f"MockTransport({self._default_port!r}, pending={len(self._responses)})"


class ScriptedMockTransport(MockTransport):
    """
    Mock transport with scripted request/response pairs.

    This variant allows defining expected request/response sequences
    for more structured testing scenarios.

    Example:
        >>> mock = ScriptedMockTransport()
        >>> mock.expect(request=bytes.fromhex("aa 55 01 00 00 fe"), response=b"\\x00")
    """

    def __init__(self, default_port: str = "mock://scripted") -> None:
        super().__init__(default_port)
        self._script: list[tuple[bytes | None, bytes | None]] = []
        self._script_index = 0

    def expect(
        self,
        response: bytes | None,
        request: bytes | None = None,
    ) -> None:
        """
        Add an expected request/response pair.

        Args:
            response: Reply to return.
            request: Expected frame (None to match any).
        """
        self._script.append((request, response))

    async def transfer(self, port: str, data: bytes) -> bytes | None:
        """Transfer with script validation."""
        if data is None:
            raise TransportError("Mock transport received no data")

        self._written_data.append(bytes(data))
        self._ports.append(port)

        if self._script_index >= len(self._script):
            return b""

        expected_request, response = self._script[self._script_index]
        if expected_request is not None and data != expected_request:
            raise AssertionError(
                f"Script mismatch at step {self._script_index}: "
                f"expected {expected_request!r}, got {data!r}"
            )

        self._script_index += 1
        return response

    def reset_script(self) -> None:
        """Reset script to beginning."""
        self._script_index = 0

    def clear_script(self) -> None:
        """Clear all scripted expectations."""
        self._script.clear()
        self._script_index = 0
