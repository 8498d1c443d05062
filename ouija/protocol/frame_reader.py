"""
Strict frame parsing.

This module verifies complete frames received from the wire:

    [0xAA][0x55][VERSION][TYPE][LEN][PAYLOAD (LEN bytes)][CS]

Checks, in order:
1. Buffer is not empty
2. Both magic bytes match
3. Version byte matches the protocol version
4. Buffer holds at least 6 + LEN bytes
5. Checksum byte equals the XOR of every byte before it

Bytes after the checksum are left unconsumed; ``bytes_consumed`` tells the
caller where the next frame would start.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from ouija.protocol.checksums import calculate_checksum
from ouija.protocol.constants import CommandType, ProtocolConstants


class FrameParseResult(Enum):
    """
    Result codes for frame parsing operations.

    These indicate the outcome of attempting to parse a frame from
    a byte buffer.
    """

    SUCCESS = auto()
    """Frame was successfully parsed and validated."""

    EMPTY_BUFFER = auto()
    """Buffer is empty, no data to parse."""

    INCOMPLETE_FRAME = auto()
    """Buffer contains partial frame data, more bytes needed."""

    INVALID_MAGIC = auto()
    """Buffer does not start with the magic bytes."""

    UNSUPPORTED_VERSION = auto()
    """Version byte differs from the protocol version."""

    INVALID_CHECKSUM = auto()
    """Frame checksum validation failed (data corruption)."""


@dataclass(frozen=True)
class ParsedFrame:
    """
    A successfully parsed protocol frame.

    Attributes:
        command_type: Byte at offset 3.
        payload: Payload bytes (LEN bytes from offset 5).
        raw_frame: Complete raw frame bytes including checksum.
        bytes_consumed: Number of bytes consumed from input buffer.
    """

    command_type: int
    payload: bytes
    raw_frame: bytes
    bytes_consumed: int

    @property
    def command(self) -> CommandType | int:
        """
        Get command as CommandType enum if recognized, else raw int.
        """
        try:
            return CommandType(self.command_type)
        except ValueError:
            return self.command_type

    def __repr__(self) -> str:
        cmd_name = self.command.name if isinstance(self.command, CommandType) else f"0x{self.command_type:02X}"
        if self.payload:
            return f"ParsedFrame({cmd_name}, payload={len(self.payload)} bytes)"
        return f"ParsedFrame({cmd_name})"


@dataclass(frozen=True)
class FrameParseError:
    """
    Details about a frame parsing failure.

    Provides diagnostic information when parsing fails.
    """

    result: FrameParseResult
    message: str
    position: int = 0
    expected: int | None = None
    received: int | None = None


class FrameReader:
    """
    Protocol frame parser.

    The parser is stateless and can be reused for multiple parse operations.

    Example:
        >>> reader = FrameReader()
        >>> result, frame = reader.parse(bytes([0xAA, 0x55, 0x01, 0x00, 0x00, 0xFE]))
        >>> assert result == FrameParseResult.SUCCESS
        >>> assert frame.command_type == 0x00
    """

    def parse(
        self,
        buffer: bytes | bytearray | memoryview,
    ) -> tuple[FrameParseResult, ParsedFrame | FrameParseError]:
        """
        Parse a frame from the start of the input buffer.

        Args:
            buffer: Input buffer containing frame data.

        Returns:
            Tuple of (result, frame_or_error):
            - On success: (SUCCESS, ParsedFrame)
            - On failure: (error_code, FrameParseError)
        """
        if not buffer:
            return FrameParseResult.EMPTY_BUFFER, FrameParseError(
                result=FrameParseResult.EMPTY_BUFFER,
                message="Buffer is empty",
            )

        magic = (ProtocolConstants.MAGIC1, ProtocolConstants.MAGIC2)
        for position, expected in enumerate(magic):
            if position >= len(buffer):
                return FrameParseResult.INCOMPLETE_FRAME, FrameParseError(
                    result=FrameParseResult.INCOMPLETE_FRAME,
                    message="Buffer ends inside the magic bytes",
                    position=position,
                )
            if buffer[position] != expected:
                return FrameParseResult.INVALID_MAGIC, FrameParseError(
                    result=FrameParseResult.INVALID_MAGIC,
                    message=f"Invalid magic byte 0x{buffer[position]:02X} at offset {position}",
                    position=position,
                    expected=expected,
                    received=buffer[position],
                )

        if len(buffer) < ProtocolConstants.HEADER_SIZE:
            return FrameParseResult.INCOMPLETE_FRAME, FrameParseError(
                result=FrameParseResult.INCOMPLETE_FRAME,
                message=f"Buffer too small for header (need {ProtocolConstants.HEADER_SIZE}, have {len(buffer)})",
                position=len(buffer),
            )

        version = buffer[2]
        if version != ProtocolConstants.PROTOCOL_VERSION:
            return FrameParseResult.UNSUPPORTED_VERSION, FrameParseError(
                result=FrameParseResult.UNSUPPORTED_VERSION,
                message=f"Unsupported protocol version 0x{version:02X}",
                position=2,
                expected=ProtocolConstants.PROTOCOL_VERSION,
                received=version,
            )

        payload_length = buffer[4]
        expected_size = ProtocolConstants.FRAME_OVERHEAD + payload_length
        if len(buffer) < expected_size:
            return FrameParseResult.INCOMPLETE_FRAME, FrameParseError(
                result=FrameParseResult.INCOMPLETE_FRAME,
                message=f"Incomplete frame (need {expected_size}, have {len(buffer)})",
                position=len(buffer),
            )

        cs_pos = expected_size - 1
        expected_cs = calculate_checksum(buffer[:cs_pos])
        received_cs = buffer[cs_pos]
        if expected_cs != received_cs:
            return FrameParseResult.INVALID_CHECKSUM, FrameParseError(
                result=FrameParseResult.INVALID_CHECKSUM,
                message="Checksum mismatch",
                position=cs_pos,
                expected=expected_cs,
                received=received_cs,
            )

        frame = ParsedFrame(
            command_type=buffer[3],
            payload=bytes(buffer[ProtocolConstants.HEADER_SIZE:cs_pos]),
            raw_frame=bytes(buffer[:expected_size]),
            bytes_consumed=expected_size,
        )
        return FrameParseResult.SUCCESS, frame


# Module-level convenience instance
DEFAULT_FRAME_READER: FrameReader = FrameReader()
"""Default FrameReader instance for convenience."""


def parse_frame(
    buffer: bytes | bytearray | memoryview,
) -> tuple[FrameParseResult, ParsedFrame | FrameParseError]:
    """
    Parse a frame using the default frame reader.

    Args:
        buffer: Input buffer containing frame data.

    Returns:
        Tuple of (result, frame_or_error).
    """
    return DEFAULT_FRAME_READER.parse(buffer)
