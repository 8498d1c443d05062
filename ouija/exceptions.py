"""
Exception hierarchy for ouija.

All exceptions inherit from OuijaError, providing a clean hierarchy
for error handling. The design follows these principles:

1. Encoding errors (payload size, unsupported characters) are distinct from
   decoding errors (empty or malformed replies)
2. Transport errors cover everything between the frame and the device
3. A device-side rejection carries the original status byte for diagnostics
4. All exceptions provide meaningful error messages
"""

from __future__ import annotations


class OuijaError(Exception):
    """
    Base exception for all ouija errors.

    All library-specific exceptions inherit from this class, allowing
    callers to catch all ouija errors with a single except clause.
    """

    pass


class EncodingError(OuijaError):
    """
    Outbound encoding failure.

    Raised when a command cannot be turned into a frame, such as:
    - Payload longer than the 1-byte length field allows
    - Message text containing characters the selected codec cannot map
    """

    pass


class PayloadTooLarge(EncodingError):
    """Encoded payload does not fit in a single frame."""

    def __init__(self, length: int, limit: int = 255) -> None:
        self.length = length
        self.limit = limit
        super().__init__(
            f"Encoded payload length {length} exceeds maximum allowed size {limit}"
        )


class UnsupportedCharacter(EncodingError):
    """
    Character cannot be represented by the selected payload codec.

    Attributes:
        character: The offending character (after upper-casing).
        position: Zero-based index of the character in the input text.
    """

    def __init__(self, character: str, position: int, message: str | None = None) -> None:
        self.character = character
        self.position = position
        super().__init__(
            message or f"Unsupported character {character!r} at position {position}"
        )


class DecodingError(OuijaError):
    """
    Inbound decoding failure.

    Raised when bytes received from the device cannot be turned into a
    response or text.
    """

    pass


class EmptyInput(DecodingError):
    """Decoder was handed a zero-length buffer."""

    def __init__(self, message: str = "Input must contain at least one byte") -> None:
        super().__init__(message)


class InvalidByteValue(DecodingError):
    """
    Byte falls outside the range of the text codec.

    Attributes:
        value: The offending byte value.
        position: Zero-based index of the byte in the input.
    """

    def __init__(self, value: int, position: int, highest: int) -> None:
        self.value = value
        self.position = position
        self.highest = highest
        super().__init__(
            f"Invalid byte value 0x{value:02X} at position {position} "
            f"(expected 0x00-0x{highest:02X})"
        )


class FrameError(DecodingError):
    """
    Frame verification error.

    Raised by the strict decoder when a reply is not a well-formed frame:
    - Wrong magic bytes or protocol version
    - Length byte inconsistent with the buffer
    """

    pass


class ChecksumError(FrameError):
    """
    Checksum validation failure.

    Raised when a received frame's checksum doesn't match the calculated value.
    This typically indicates data corruption during transmission.
    """

    def __init__(
        self,
        message: str = "Checksum validation failed",
        *,
        expected: int | None = None,
        received: int | None = None,
    ) -> None:
        super().__init__(message)
        self.expected = expected
        self.received = received

    def __str__(self) -> str:
        base = super().__str__()
        if self.expected is not None and self.received is not None:
            return f"{base} (expected 0x{self.expected:02X}, got 0x{self.received:02X})"
        return base


class TransportError(OuijaError):
    """
    Transport-level error.

    Raised for low-level transport issues:
    - Serial port or BLE errors
    - I/O errors
    - Hardware communication failures
    """

    pass


class ConnectionError(TransportError):  # noqa: A001 - intentionally shadows builtin
    """
    Device connection error.

    Raised when:
    - The serial port cannot be opened
    - The BLE device cannot be found or connected
    - A required GATT characteristic is missing
    """

    pass


class TimeoutError(TransportError):  # noqa: A001 - intentionally shadows builtin
    """
    Communication timeout.

    Raised when a write or an exchange does not complete in time.
    """

    def __init__(
        self,
        message: str = "Communication timeout",
        *,
        timeout_seconds: float | None = None,
    ) -> None:
        super().__init__(message)
        self.timeout_seconds = timeout_seconds

    def __str__(self) -> str:
        base = super().__str__()
        if self.timeout_seconds is not None:
            return f"{base} (after {self.timeout_seconds:.1f}s)"
        return base


class ProtocolViolation(OuijaError):
    """
    Device rejected a command.

    Raised by the strict validator when the response status is non-zero.
    The status attribute holds the raw byte for diagnostics.
    """

    def __init__(self, status: int, message: str | None = None) -> None:
        self.status = status
        super().__init__(message or f"Device rejected command with status {status} (0x{status:02X})")
