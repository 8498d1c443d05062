"""
Transport configuration.

Settings are immutable and passed to a transport at construction; they are
read-only for the duration of every transfer.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ouija.protocol.constants import ProtocolConstants


class Handshake(Enum):
    """Serial flow control."""

    NONE = "none"
    XON_XOFF = "xonxoff"
    RTS_CTS = "rtscts"
    RTS_CTS_XON_XOFF = "rtscts_xonxoff"

    @property
    def xonxoff(self) -> bool:
        """Whether software flow control is enabled."""
        return self in (Handshake.XON_XOFF, Handshake.RTS_CTS_XON_XOFF)

    @property
    def rtscts(self) -> bool:
        """Whether hardware flow control is enabled."""
        return self in (Handshake.RTS_CTS, Handshake.RTS_CTS_XON_XOFF)


class SerialSettings(BaseModel):
    """
    Serial line configuration.

    Timeouts are in seconds. ``parity`` uses pyserial's single-letter codes
    ("N", "E", "O", "M", "S").

    Example:
        >>> SerialSettings(baudrate=9600, read_timeout=2.0)
    """

    model_config = ConfigDict(frozen=True)

    baudrate: int = Field(default=ProtocolConstants.DEFAULT_BAUD_RATE, gt=0)
    parity: str = Field(default="N", pattern=r"^[NEOMS]$")
    bytesize: int = Field(default=ProtocolConstants.DEFAULT_DATA_BITS, ge=5, le=8)
    stopbits: float = Field(default=ProtocolConstants.DEFAULT_STOP_BITS)
    handshake: Handshake = Handshake.NONE
    read_timeout: float = Field(default=ProtocolConstants.DEFAULT_READ_TIMEOUT, gt=0)
    write_timeout: float = Field(default=ProtocolConstants.DEFAULT_WRITE_TIMEOUT, gt=0)
    idle_gap: float = Field(default=ProtocolConstants.DEFAULT_IDLE_GAP, gt=0)
    read_chunk_size: int = Field(default=ProtocolConstants.READ_CHUNK_SIZE, gt=0)


class BleSettings(BaseModel):
    """
    BLE link configuration.

    Defaults target the Nordic UART Service. ``chunk_size`` of None means
    the maximum write size is not known and the conservative default of
    20 bytes applies unless the characteristic reports a larger one.

    The reported size is the write characteristic's
    ``max_write_without_response_size``. It bounds chunks in both write
    modes, including ``write_with_response=True``; bleak reports no separate
    limit for acknowledged writes. Set ``chunk_size`` to override it.
    """

    model_config = ConfigDict(frozen=True)

    write_characteristic: str = ProtocolConstants.NUS_WRITE_CHARACTERISTIC
    notify_characteristic: str | None = ProtocolConstants.NUS_NOTIFY_CHARACTERISTIC
    chunk_size: int | None = Field(default=None, gt=0)
    connect_timeout: float = Field(default=ProtocolConstants.DEFAULT_BLE_CONNECT_TIMEOUT, gt=0)
    response_timeout: float = Field(default=ProtocolConstants.DEFAULT_BLE_RESPONSE_TIMEOUT, gt=0)
    idle_gap: float = Field(default=ProtocolConstants.DEFAULT_BLE_IDLE_GAP, gt=0)
    write_with_response: bool = True
