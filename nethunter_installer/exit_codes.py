from __future__ import annotations

from enum import IntEnum

SUCCESS_BASE = 1 << 5
ERROR_BASE = 1 << 6


class ExitCode(IntEnum):
    """Process exit codes.

    Successful outcomes other than a full install live above SUCCESS_BASE,
    errors above ERROR_BASE, so calling scripts can branch on ranges.
    """

    SUCCESS = 0

    SUCCESS_USER_ABORT = SUCCESS_BASE + 1
    SUCCESS_BOOTLOADER_UNLOCKED = SUCCESS_BASE + 2

    ERROR_PREREQS = ERROR_BASE + 1
    ERROR_USER_INPUT = ERROR_BASE + 2
    ERROR_USB_PERMS = ERROR_BASE + 3
    ERROR_ADB = ERROR_BASE + 4
    ERROR_FASTBOOT = ERROR_BASE + 5
    ERROR_REMOTE = ERROR_BASE + 6
    ERROR_TWRP = ERROR_BASE + 7
    ERROR_UNSUPPORTED_DEVICE = ERROR_BASE + 8

    @property
    def is_success(self) -> bool:
        return self < ERROR_BASE
