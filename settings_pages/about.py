"""Information about the system shown on the "About" page."""

from __future__ import annotations

import os
import socket
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

import psutil

PathLike = Union[str, "os.PathLike[str]"]

DMI_DIR = "/sys/devices/virtual/dmi/id/"
VERSION_IGNORING_PRODUCTS = ("Dev One",)

_BINARY_UNITS = ("KiB", "MiB", "GiB", "TiB", "PiB", "EiB")


@dataclass
class SystemInfo:
    """Facts about the running system."""

    desktop_environment: str = ""
    device_name: str = ""
    disk_capacity: str = ""
    graphics: list[str] = field(default_factory=list)
    hardware_model: str = ""
    memory: str = ""
    operating_system: str = ""
    os_architecture: str = ""
    processor: str = ""
    windowing_system: str = ""

    @classmethod
    def load(cls) -> SystemInfo:
        """Gather the information from the running system."""
        info = cls(
            os_architecture=architecture(),
            hardware_model=hardware_model(),
            operating_system=operating_system(),
            processor=processor_name(),
        )
        info.disk_capacity = format_size(_total_disk_capacity())
        info.device_name = socket.gethostname()
        info.memory = format_size(psutil.virtual_memory().total)

        session = os.environ.get("XDG_SESSION_TYPE")
        if session is not None:
            info.windowing_system = _capitalize_ascii(session)

        session = os.environ.get("DESKTOP_SESSION")
        if session is not None:
            info.desktop_environment = _capitalize_ascii(session)

        info.graphics = _graphics_cards()
        return info


def _capitalize_ascii(text: str) -> str:
    if text and text[0].isascii():
        return text[0].upper() + text[1:]
    return text


def _total_disk_capacity() -> int:
    total = 0
    for partition in psutil.disk_partitions():
        try:
            total += psutil.disk_usage(partition.mountpoint).total
        except OSError:
            continue
    return total


def _graphics_cards() -> list[str]:
    try:
        output = subprocess.run(["lspci"], capture_output=True, check=False)
    except OSError:
        return []
    try:
        stdout = output.stdout.decode("utf-8")
    except UnicodeDecodeError:
        return []

    cards = []
    for line in stdout.splitlines():
        pos = line.find("VGA")
        if pos == -1:
            continue
        rest = line[pos + 3:]
        sep = rest.find(": ")
        if sep != -1:
            cards.append(rest[sep + 2:])
    return cards


def read_to_string(path: PathLike) -> Optional[str]:
    """The file's contents as UTF-8 text, or None if unreadable or not UTF-8."""
    try:
        data = Path(path).read_bytes()
    except OSError:
        return None
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return None


def architecture(path: PathLike = "/proc/sys/kernel/arch") -> str:
    """The kernel's architecture name."""
    value = read_to_string(path)
    return "" if value is None else value.strip()


def hardware_model(dmi_dir: PathLike = DMI_DIR) -> str:
    """Vendor, board name and board version, e.g. ``Vendor Board (1.0)``."""
    directory = Path(dmi_dir)
    sys_vendor = read_to_string(directory / "sys_vendor")
    if sys_vendor is None:
        return ""
    sys_vendor = sys_vendor.strip()
    model = sys_vendor

    name = read_to_string(directory / "board_name")
    if name is None:
        return model
    name = name.strip()

    if name and name != sys_vendor:
        # Keep the vendor from appearing twice.
        if name.startswith(sys_vendor):
            name = name[len(sys_vendor):].strip()
        model += " " + name

    version = read_to_string(directory / "board_version")
    if version is not None:
        version = version.strip()
        if version and name not in VERSION_IGNORING_PRODUCTS:
            model += f" ({version})"
    return model


def operating_system(path: PathLike = "/etc/os-release") -> str:
    """The ``PRETTY_NAME`` of the operating system."""
    os_release = read_to_string(path)
    if os_release is None:
        return ""
    for line in os_release.splitlines():
        if line.startswith("PRETTY_NAME="):
            value = line[len("PRETTY_NAME="):]
            if value.startswith('"'):
                value = value[1:]
            if value.endswith('"'):
                value = value[:-1]
            return value.strip()
    return ""


def processor_name(path: PathLike = "/proc/cpuinfo") -> str:
    """The model name of the first processor listed."""
    cpuinfo = read_to_string(path)
    if cpuinfo is None:
        return ""
    for line in cpuinfo.splitlines():
        if line.startswith("model name"):
            rest = line[len("model name"):].lstrip()
            if rest.startswith(":"):
                return rest[1:].strip()
            return ""
    return ""


def format_size(size: int) -> str:
    """Format a byte count in the largest binary unit that keeps it at least 1."""
    if size < 1024:
        return f"{size} B"
    value = float(size)
    unit = "B"
    for candidate in _BINARY_UNITS:
        if value < 1024:
            break
        value /= 1024
        unit = candidate
    return f"{value:.2f} {unit}"