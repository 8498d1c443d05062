"""
Data models for commands, device replies and client results.

This module contains Pydantic models representing:

- Commands sent to the device and their payload encoding choice
- Decoded device responses
- Result records returned by DeviceClient
"""

from ouija.models.records import (
    Command,
    DeviceResponse,
    FailureReason,
    PayloadEncoding,
    StatusResult,
    TransferResult,
)

__all__ = [
    # Commands
    "Command",
    "PayloadEncoding",
    # Responses
    "DeviceResponse",
    # Results
    "StatusResult",
    "TransferResult",
    "FailureReason",
]
