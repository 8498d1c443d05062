"""Serial port enumeration."""

from __future__ import annotations

from dataclasses import dataclass

import serial.tools.list_ports


@dataclass(frozen=True)
class SerialPortInfo:
    """
    A serial port available on this machine.

    Attributes:
        port_name: Device path or name to pass to a transport ("COM3", "/dev/ttyUSB0").
        description: Human-friendly label; the port name when the OS gives none.
    """

    port_name: str
    description: str

    def __str__(self) -> str:
        if self.description == self.port_name:
            return self.port_name
        return f"{self.port_name} ({self.description})"


def list_serial_ports() -> list[SerialPortInfo]:
    """
    List serial ports, sorted by name.

    Returns:
        One SerialPortInfo per port reported by the OS.
    """
    ports = []
    for port in serial.tools.list_ports.comports():
        description = port.description
        if not description or description == "n/a":
            description = port.device
        ports.append(SerialPortInfo(port_name=port.device, description=description))
    return sorted(ports, key=lambda info: info.port_name)
