"""
Response status validation.

A status of 0 means the device accepted the command. Any other value is a
device-side rejection, reported either as ``False`` (``validate``) or as a
ProtocolViolation (``ensure_valid``).
"""

from __future__ import annotations

from ouija.exceptions import ProtocolViolation
from ouija.models.records import DeviceResponse
from ouija.protocol.constants import ProtocolConstants


class ResponseValidator:
    """Judges decoded device responses. Stateless."""

    def validate(self, response: DeviceResponse) -> bool:
        """Return True iff the response status is 0."""
        if response is None:
            raise ValueError("response is required")
        return response.response_status == ProtocolConstants.STATUS_OK

    def ensure_valid(self, response: DeviceResponse) -> None:
        """
        Raise if the device rejected the command.

        Raises:
            ProtocolViolation: If the status is non-zero.
        """
        if not self.validate(response):
            raise ProtocolViolation(response.response_status)


DEFAULT_VALIDATOR: ResponseValidator = ResponseValidator()
