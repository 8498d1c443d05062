"""
Pydantic models for commands, responses and client results.

This module defines the core data structures used throughout the library,
implemented as immutable Pydantic models with validation.

Design principles:
- All models are frozen (immutable)
- Byte-sized fields are range-checked on construction
- Result records never carry wire bytes
- Every failure path is named by a FailureReason member
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ouija.protocol.constants import PLAY_COMMANDS, CommandType


class PayloadEncoding(Enum):
    """How a text message becomes payload bytes."""

    ASCII = "ascii"
    """Upper-case the text and send it as ASCII bytes."""

    ALPHABET = "alphabet"
    """Send one index byte per digit or alphabet letter."""


class FailureReason(Enum):
    """Why a client operation did not succeed."""

    MISSING_MESSAGE = "missing_message"
    """Play command without a message."""

    ENCODING = "encoding"
    """Command could not be encoded into a frame."""

    TRANSPORT = "transport"
    """Transport raised during the exchange."""

    NO_RESPONSE = "no_response"
    """Transport returned no bytes."""

    DECODING = "decoding"
    """Reply could not be decoded."""

    REJECTED = "rejected"
    """Device answered with a non-zero status."""

    VALIDATION = "validation"
    """Validator failed on a decoded reply."""


class Command(BaseModel):
    """
    A command to send to the device.

    ``message`` may be text, encoded with ``encoding`` when the frame is
    built, or bytes, which are carried verbatim as an already-encoded
    payload.

    Example:
        >>> Command(command_type=CommandType.PLAY_ONCE, message="123АБВ",
        ...         encoding=PayloadEncoding.ALPHABET)
    """

    model_config = ConfigDict(frozen=True)

    command_type: int = Field(ge=0, le=255, description="Command type byte")
    message: str | bytes | None = None
    encoding: PayloadEncoding = PayloadEncoding.ASCII

    @property
    def requires_message(self) -> bool:
        """Check if the device expects a non-empty message for this type."""
        return self.command_type in PLAY_COMMANDS

    @property
    def has_message(self) -> bool:
        """Check if a non-empty message is present."""
        return bool(self.message)

    def __repr__(self) -> str:
        try:
            name = CommandType(self.command_type).name
        except ValueError:
            name = f"0x{self.command_type:02X}"
        if self.message is None:
            return f"Command({name})"
        return f"Command({name}, message={self.message!r}, encoding={self.encoding.name})"


class DeviceResponse(BaseModel):
    """
    Decoded reply from the device.

    Created fresh for each transfer and discarded after validation.
    """

    model_config = ConfigDict(frozen=True)

    response_status: int = Field(ge=0, le=255, description="Status byte; 0 means accepted")
    payload: bytes = b""


class StatusResult(BaseModel):
    """Outcome of a status check."""

    model_config = ConfigDict(frozen=True)

    online: bool
    succeeded: bool
    message: str = ""
    failure: FailureReason | None = None

    @classmethod
    def failed(cls, failure: FailureReason, message: str) -> StatusResult:
        """Create an offline, unsuccessful result."""
        return cls(online=False, succeeded=False, message=message, failure=failure)


class TransferResult(BaseModel):
    """
    Outcome of sending a command.

    ``status`` is only set when the device rejected the command.
    """

    model_config = ConfigDict(frozen=True)

    succeeded: bool
    message: str = ""
    failure: FailureReason | None = None
    status: int | None = None

    @classmethod
    def ok(cls) -> TransferResult:
        """Create a successful result."""
        return cls(succeeded=True)

    @classmethod
    def failed(
        cls,
        failure: FailureReason,
        message: str,
        status: int | None = None,
    ) -> TransferResult:
        """Create an unsuccessful result."""
        return cls(succeeded=False, message=message, failure=failure, status=status)
