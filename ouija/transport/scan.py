"""
BLE device discovery.

Finds advertising devices whose address can be handed to
``BleTransport.transfer``.

Example:
    >>> devices = await scan_ble_devices(timeout=5.0, name_contains="ouija")
    >>> for device in devices:
    ...     print(device, device.rssi_display)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from bleak import BleakScanner
from bleak.exc import BleakError

from ouija.exceptions import TransportError
from ouija.protocol.constants import ProtocolConstants

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BleDeviceInfo:
    """
    A BLE device seen during a scan.

    Attributes:
        address: Device address to pass to a transport (MAC, or UUID on macOS).
        name: Advertised name, if any.
        rssi: Signal strength in dBm, if reported.
        service_uuids: Service UUIDs in the advertisement.
    """

    address: str
    name: str | None = None
    rssi: int | None = None
    service_uuids: tuple[str, ...] = ()

    @property
    def display_name(self) -> str:
        """Get the name to show to a user."""
        if not self.name or not self.name.strip():
            return "(Unnamed device)"
        return self.name

    @property
    def rssi_display(self) -> str:
        """Get the signal strength as text ("" when unknown)."""
        return "" if self.rssi is None else f"{self.rssi} dBm"

    def __str__(self) -> str:
        return f"{self.display_name} [{self.address}]"


async def scan_ble_devices(
    *,
    timeout: float = ProtocolConstants.DEFAULT_BLE_SCAN_TIMEOUT,
    name_contains: str | None = None,
    service_uuids: tuple[str, ...] | list[str] = (),
) -> list[BleDeviceInfo]:
    """
    Scan for advertising BLE devices.

    Each address is reported once. Results are sorted strongest signal
    first, then by address; devices without an RSSI come last.

    Args:
        timeout: Scan duration in seconds.
        name_contains: Keep only devices whose name contains this text
            (case-insensitive).
        service_uuids: Keep only devices advertising one of these services;
            passed to the scanner as a filter.

    Returns:
        Devices found.

    Raises:
        ValueError: If timeout is not positive.
        TransportError: If the Bluetooth adapter cannot scan.
    """
    if timeout <= 0:
        raise ValueError(f"timeout must be positive, got {timeout}")

    try:
        found = await BleakScanner.discover(
            timeout=timeout,
            service_uuids=list(service_uuids) or None,
            return_adv=True,
        )
    except (BleakError, OSError) as e:
        raise TransportError(f"BLE scan failed: {e}") from e

    needle = name_contains.casefold() if name_contains else None
    devices = []
    for address, (device, advertisement) in found.items():
        name = device.name or advertisement.local_name
        if needle is not None and (not name or needle not in name.casefold()):
            continue
        devices.append(
            BleDeviceInfo(
                address=address,
                name=name,
                rssi=advertisement.rssi,
                service_uuids=tuple(advertisement.service_uuids),
            )
        )

    logger.info("BLE scan found %d device(s)", len(devices))
    return sorted(
        devices,
        key=lambda info: (info.rssi is None, -(info.rssi or 0), info.address),
    )
