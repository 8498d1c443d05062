"""
Protocol layer for device communication.

This package contains the wire-level protocol handling:
- Command types and protocol constants
- XOR checksum calculation and validation
- Text codecs for payloads (alphabet index codec, uppercase ASCII)
- Strict frame parsing

Frame encoding, reply decoding and status validation depend on the models
package and are imported from their modules directly:
``ouija.protocol.encoder``, ``ouija.protocol.decoder``,
``ouija.protocol.validation``.
"""

from ouija.protocol.checksums import append_checksum, calculate_checksum, validate_checksum
from ouija.protocol.constants import PLAY_COMMANDS, CommandType, ProtocolConstants
from ouija.protocol.frame_reader import (
    DEFAULT_FRAME_READER,
    FrameParseError,
    FrameParseResult,
    FrameReader,
    ParsedFrame,
    parse_frame,
)
from ouija.protocol.text_codec import ALPHABET, decode_text, encode_ascii, encode_text

__all__ = [
    # Constants
    "CommandType",
    "ProtocolConstants",
    "PLAY_COMMANDS",
    # Checksums
    "calculate_checksum",
    "validate_checksum",
    "append_checksum",
    # Text codecs
    "ALPHABET",
    "encode_text",
    "decode_text",
    "encode_ascii",
    # Frame Parsing
    "FrameReader",
    "FrameParseResult",
    "ParsedFrame",
    "FrameParseError",
    "parse_frame",
    "DEFAULT_FRAME_READER",
]
