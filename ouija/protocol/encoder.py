"""
Outbound frame construction.

Frame format: [MAGIC1][MAGIC2][VERSION][TYPE][LEN][PAYLOAD...][CS]
- MAGIC1/MAGIC2: 0xAA 0x55
- VERSION: 0x01
- TYPE: command type byte
- LEN: payload length (0-255)
- CS: XOR of every preceding byte

The payload comes from the command message, encoded with the strategy the
command selects (see PayloadEncoding).
"""

from __future__ import annotations

from typing import Final

from ouija.exceptions import PayloadTooLarge
from ouija.models.records import Command, PayloadEncoding
from ouija.protocol.checksums import append_checksum
from ouija.protocol.constants import ProtocolConstants
from ouija.protocol.text_codec import encode_ascii, encode_text

_TEXT_ENCODERS: Final = {
    PayloadEncoding.ASCII: encode_ascii,
    PayloadEncoding.ALPHABET: encode_text,
}


def encode_payload(
    message: str | bytes | bytearray | None,
    encoding: PayloadEncoding = PayloadEncoding.ASCII,
) -> bytes:
    """
    Turn a command message into payload bytes.

    Args:
        message: Text to encode, pre-encoded bytes, or None.
        encoding: Codec applied to text messages.

    Returns:
        Payload bytes (empty when message is None or empty).

    Raises:
        UnsupportedCharacter: If the text cannot be represented.
    """
    if message is None:
        return b""
    if isinstance(message, (bytes, bytearray)):
        return bytes(message)
    return _TEXT_ENCODERS[encoding](message)


def build_frame(command_type: int, payload: bytes = b"") -> bytes:
    """
    Build a complete frame around a payload.

    Args:
        command_type: Command type byte (0-255).
        payload: Encoded payload bytes.

    Returns:
        Frame of exactly 6 + len(payload) bytes.

    Raises:
        PayloadTooLarge: If the payload exceeds 255 bytes.
        ValueError: If command_type is not a byte value.

    Example:
        >>> build_frame(0x04).hex(" ")
        'aa 55 01 04 00 05'
    """
    if not 0 <= command_type <= 255:
        raise ValueError(f"Command type must be 0-255, got {command_type}")
    if len(payload) > ProtocolConstants.MAX_PAYLOAD_LENGTH:
        raise PayloadTooLarge(len(payload), ProtocolConstants.MAX_PAYLOAD_LENGTH)

    frame = bytearray((
        ProtocolConstants.MAGIC1,
        ProtocolConstants.MAGIC2,
        ProtocolConstants.PROTOCOL_VERSION,
        command_type,
        len(payload),
    ))
    frame.extend(payload)
    return append_checksum(frame)


class FrameEncoder:
    """
    Serializes commands into frames.

    The encoder is stateless and deterministic: the same command always
    produces the same bytes.

    Example:
        >>> encoder = FrameEncoder()
        >>> encoder.encode(Command(command_type=CommandType.YES)).hex(" ")
        'aa 55 01 04 00 05'
    """

    def encode(self, command: Command) -> bytes:
        """
        Encode a command into a frame.

        Raises:
            PayloadTooLarge: If the encoded payload exceeds 255 bytes.
            UnsupportedCharacter: If the message cannot be encoded.
            ValueError: If command is None.
        """
        if command is None:
            raise ValueError("command is required")

        payload = encode_payload(command.message, command.encoding)
        return build_frame(command.command_type, payload)


# Module-level convenience instance
DEFAULT_ENCODER: FrameEncoder = FrameEncoder()
"""Default FrameEncoder instance for convenience."""
