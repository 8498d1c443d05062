"""
Device client.

This module provides the main client interface for controlling the device.
Each operation is a fixed pipeline:

    Command -> encoder -> transport.transfer() -> decoder -> validator -> result

Every failure after argument checking is converted into a result record
naming a FailureReason, so callers always get a definite outcome and never
an exception from a collaborator. Contract violations (a None command or
collaborator) raise ValueError. Cancellation is never absorbed.

No retries are performed; a caller that wants them wraps the client.

Example:
    >>> from ouija import DeviceClient
    >>> from ouija.transport import AsyncSerialTransport
    >>>
    >>> async def main():
    ...     client = DeviceClient(AsyncSerialTransport())
    ...     status = await client.check_status("/dev/ttyUSB0")
    ...     if status.online:
    ...         result = await client.play("/dev/ttyUSB0", "привет")
    ...         print(result.succeeded, result.message)
"""

from __future__ import annotations

import logging

from ouija.exceptions import ProtocolViolation
from ouija.models.records import (
    Command,
    FailureReason,
    PayloadEncoding,
    StatusResult,
    TransferResult,
)
from ouija.protocol.constants import CommandType
from ouija.protocol.decoder import DEFAULT_DECODER, StatusByteDecoder
from ouija.protocol.encoder import DEFAULT_ENCODER, FrameEncoder
from ouija.protocol.validation import DEFAULT_VALIDATOR, ResponseValidator
from ouija.transport.abc import Transport

# Module logger
logger = logging.getLogger(__name__)

NO_RESPONSE_MESSAGE = "no response from device"
MISSING_MESSAGE_MESSAGE = "message required for play command"


def _detail(error: BaseException) -> str:
    return str(error) or type(error).__name__


class DeviceClient:
    """
    Client for the display/playback device.

    The client holds no protocol state between calls; it is safe to share
    between tasks. Serializing exchanges on one device is the transport's
    job.

    Attributes:
        transport: The underlying transport.

    Example:
        >>> client = DeviceClient(MockTransport())
        >>> result = await client.send_command("COM3", Command(command_type=CommandType.STOP))
    """

    def __init__(
        self,
        transport: Transport,
        *,
        encoder: FrameEncoder = DEFAULT_ENCODER,
        decoder: StatusByteDecoder = DEFAULT_DECODER,
        validator: ResponseValidator = DEFAULT_VALIDATOR,
    ) -> None:
        """
        Initialize the device client.

        Args:
            transport: Transport used for every exchange.
            encoder: Frame encoder.
            decoder: Reply decoder; pass a FramedResponseDecoder for strict
                frame verification.
            validator: Response validator.

        Raises:
            ValueError: If any collaborator is None.
            TypeError: If transport has no transfer() coroutine.
        """
        for name, collaborator in (
            ("transport", transport),
            ("encoder", encoder),
            ("decoder", decoder),
            ("validator", validator),
        ):
            if collaborator is None:
                raise ValueError(f"{name} is required")
        if not isinstance(transport, Transport):
            raise TypeError(f"{type(transport).__name__} does not implement transfer()")

        self._transport = transport
        self._encoder = encoder
        self._decoder = decoder
        self._validator = validator

    @property
    def transport(self) -> Transport:
        """Get the underlying transport."""
        return self._transport

    async def check_status(self, port: str) -> StatusResult:
        """
        Ask the device whether it is online.

        A device that answers with a non-zero status is reported as
        reachable but offline (``succeeded=True, online=False``).

        Args:
            port: Device identifier passed to the transport.

        Returns:
            StatusResult; never raises for link or reply problems.
        """
        frame = self._encoder.encode(Command(command_type=CommandType.CHECK_STATUS))

        try:
            reply = await self._transport.transfer(port, frame)
        except Exception as e:
            logger.warning("Status check on %s failed: %s", port, _detail(e))
            return StatusResult.failed(FailureReason.TRANSPORT, f"connection error: {_detail(e)}")

        if not reply:
            logger.info("No status reply from %s", port)
            return StatusResult.failed(FailureReason.NO_RESPONSE, NO_RESPONSE_MESSAGE)

        try:
            response = self._decoder.decode(reply)
        except Exception as e:
            logger.warning("Undecodable status reply from %s: %s", port, _detail(e))
            return StatusResult.failed(FailureReason.DECODING, f"decoding error: {_detail(e)}")

        try:
            online = self._validator.validate(response)
        except ProtocolViolation as e:
            logger.info("Device on %s reported status 0x%02X", port, e.status)
            return StatusResult(online=False, succeeded=True)
        except Exception as e:
            logger.warning("Cannot validate status reply from %s: %s", port, _detail(e))
            return StatusResult.failed(FailureReason.VALIDATION, f"validation error: {_detail(e)}")

        logger.debug("Status of %s: 0x%02X (online=%s)", port, response.response_status, online)
        return StatusResult(online=online, succeeded=True)

    async def send_command(self, port: str, command: Command) -> TransferResult:
        """
        Send a command and report whether the device accepted it.

        Args:
            port: Device identifier passed to the transport.
            command: Command to send.

        Returns:
            TransferResult; never raises for encoding, link or reply problems.

        Raises:
            ValueError: If command is None.
        """
        if command is None:
            raise ValueError("command is required")

        if command.requires_message and not command.has_message:
            logger.warning("Refusing %r without a message", command)
            return TransferResult.failed(FailureReason.MISSING_MESSAGE, MISSING_MESSAGE_MESSAGE)

        try:
            frame = self._encoder.encode(command)
        except Exception as e:
            logger.warning("Cannot encode %r: %s", command, _detail(e))
            return TransferResult.failed(FailureReason.ENCODING, f"encoding error: {_detail(e)}")

        try:
            reply = await self._transport.transfer(port, frame)
        except Exception as e:
            logger.warning("Transfer to %s failed: %s", port, _detail(e))
            return TransferResult.failed(FailureReason.TRANSPORT, f"transport error: {_detail(e)}")

        if not reply:
            logger.info("No reply from %s to %r", port, command)
            return TransferResult.failed(FailureReason.NO_RESPONSE, NO_RESPONSE_MESSAGE)

        try:
            response = self._decoder.decode(reply)
        except Exception as e:
            logger.warning("Undecodable reply from %s: %s", port, _detail(e))
            return TransferResult.failed(FailureReason.DECODING, f"decoding error: {_detail(e)}")

        try:
            valid = self._validator.validate(response)
        except ProtocolViolation as e:
            return self._rejected(port, command, e.status)
        except Exception as e:
            logger.warning("Cannot validate reply from %s: %s", port, _detail(e))
            return TransferResult.failed(FailureReason.VALIDATION, f"validation error: {_detail(e)}")

        if not valid:
            return self._rejected(port, command, response.response_status)

        logger.info("Device on %s accepted %r", port, command)
        return TransferResult.ok()

    def _rejected(self, port: str, command: Command, status: int) -> TransferResult:
        logger.warning("Device on %s rejected %r with status %d", port, command, status)
        return TransferResult.failed(
            FailureReason.REJECTED,
            f"invalid response status: {status}",
            status=status,
        )

    async def play(
        self,
        port: str,
        text: str,
        *,
        repeat: bool = False,
        encoding: PayloadEncoding = PayloadEncoding.ALPHABET,
    ) -> TransferResult:
        """
        Play a text sequence once or in a loop.

        Args:
            port: Device identifier.
            text: Sequence to play.
            repeat: Loop the sequence instead of playing it once.
            encoding: Payload codec for the text.
        """
        command_type = CommandType.PLAY_REPEAT if repeat else CommandType.PLAY_ONCE
        return await self.send_command(
            port,
            Command(command_type=command_type, message=text, encoding=encoding),
        )

    async def stop(self, port: str) -> TransferResult:
        """Stop playback."""
        return await self.send_command(port, Command(command_type=CommandType.STOP))

    async def answer(self, port: str, yes: bool) -> TransferResult:
        """Show the YES or NO answer."""
        command_type = CommandType.YES if yes else CommandType.NO
        return await self.send_command(port, Command(command_type=command_type))

    def __repr__(self) -> str:
        return f"DeviceClient(transport={self._transport!r})"
