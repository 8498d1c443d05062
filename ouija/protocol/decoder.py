"""
Inbound reply decoding.

Two decoders share the ``decode(data) -> DeviceResponse`` interface:

- StatusByteDecoder: the byte the device answers with first is the status.
  No framing is checked. This is what deployed firmware is known to send
  and what DeviceClient uses by default.
- FramedResponseDecoder: the reply is a full frame. Magic, version, length
  and checksum are verified with FrameReader; the type slot carries the
  status and the payload is kept.
"""

from __future__ import annotations

from ouija.exceptions import ChecksumError, EmptyInput, FrameError
from ouija.models.records import DeviceResponse
from ouija.protocol.frame_reader import (
    DEFAULT_FRAME_READER,
    FrameParseResult,
    FrameReader,
    ParsedFrame,
)


class StatusByteDecoder:
    """Decoder that reads the status from byte 0 of the reply."""

    def decode(self, data: bytes | bytearray | None) -> DeviceResponse:
        """
        Decode a reply.

        Raises:
            EmptyInput: If the buffer is empty or None.
        """
        if not data:
            raise EmptyInput()
        return DeviceResponse(response_status=data[0])


class FramedResponseDecoder:
    """
    Decoder that verifies the reply as a complete frame.

    Args:
        reader: Frame parser to use (default: module-level FrameReader).
    """

    def __init__(self, reader: FrameReader = DEFAULT_FRAME_READER) -> None:
        self._reader = reader

    def decode(self, data: bytes | bytearray | None) -> DeviceResponse:
        """
        Decode and verify a framed reply.

        Raises:
            EmptyInput: If the buffer is empty or None.
            ChecksumError: If the checksum byte does not match.
            FrameError: If magic, version or length are wrong.
        """
        if not data:
            raise EmptyInput()

        result, parsed = self._reader.parse(data)
        if isinstance(parsed, ParsedFrame):
            return DeviceResponse(response_status=parsed.command_type, payload=parsed.payload)

        if result == FrameParseResult.INVALID_CHECKSUM:
            raise ChecksumError(expected=parsed.expected, received=parsed.received)
        if result == FrameParseResult.EMPTY_BUFFER:
            raise EmptyInput()
        raise FrameError(f"{parsed.message} ({result.name})")


# Module-level convenience instance
DEFAULT_DECODER: StatusByteDecoder = StatusByteDecoder()
"""Default decoder used by DeviceClient."""
