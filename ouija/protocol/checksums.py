"""
8-bit XOR checksum calculation and validation.

The protocol uses a running XOR over the frame:
- XOR every byte from the first magic byte up to the end of the payload
- Seed is 0, so an empty range yields 0
- The result is placed as a single raw byte at the end of the frame
"""

from __future__ import annotations

from functools import reduce
from operator import xor


def calculate_checksum(data: bytes | bytearray | memoryview) -> int:
    """
    Calculate 8-bit XOR checksum over the specified data.

    Args:
        data: Data to checksum (everything except the checksum slot).

    Returns:
        8-bit checksum value (0-255).

    Example:
        >>> calculate_checksum(b"\\xaa\\x55\\x01\\x04\\x00")
        5
    """
    return reduce(xor, data, 0)


def validate_checksum(frame: bytes | bytearray | memoryview) -> bool:
    """
    Validate that the last byte of the frame is the XOR of all others.

    Args:
        frame: Complete frame including the trailing checksum byte.

    Returns:
        True if checksum is valid, False otherwise.
    """
    if len(frame) < 1:
        return False
    return calculate_checksum(frame[:-1]) == frame[-1]


def append_checksum(data: bytes | bytearray) -> bytes:
    """
    Calculate checksum and append it as a single raw byte.

    Args:
        data: Data to checksum.

    Returns:
        Original data with the checksum byte appended.

    Example:
        >>> append_checksum(b"\\xaa\\x55\\x01\\x04\\x00")
        b'\\xaaU\\x01\\x04\\x00\\x05'
    """
    return bytes(data) + bytes([calculate_checksum(data)])
