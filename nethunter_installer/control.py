"""Capability interfaces for the two device control-planes.

The orchestrator only talks to these protocols; ``lib.adb`` and
``lib.fastboot`` provide the implementations backed by the platform tools.
Every mutating call is a real device operation and must not be retried
blindly.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol


class DeviceStatus(Enum):
    NO_DEVICE = "no_device"
    UNAUTHORIZED = "unauthorized"
    NO_PERMISSIONS = "no_permissions"
    READY = "ready"


class ControlMode(Enum):
    """Which control-plane the run believes is currently addressable."""

    UNKNOWN = "unknown"
    USER = "user"
    BOOTLOADER = "bootloader"


class UserModeControl(Protocol):
    """adb-like plane, available while Android or a recovery is running."""

    def status(self) -> DeviceStatus:
        ...

    def shell(self, command: str) -> str:
        ...

    def push(self, local_path: str, remote_dir: str) -> None:
        ...

    def reboot(self, target: str = "") -> None:
        ...

    def sideload(self, path: str) -> None:
        ...


class BootloaderControl(Protocol):
    """fastboot-like plane, available before the OS boots."""

    def status(self) -> DeviceStatus:
        ...

    def product(self) -> str:
        ...

    def unlocked(self) -> bool:
        ...

    def unlock(self) -> None:
        ...

    def flash_recovery(self, image_path: str) -> None:
        ...

    def boot(self, image_path: str) -> None:
        ...

    def reboot(self) -> None:
        ...
