from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..control import DeviceStatus
from ..errors import CommandError, FastbootError
from .command import CmdResult, run_cmd

logger = logging.getLogger(__name__)

DEFAULT_UNLOCK_ARGS = ("oem", "unlock")


def parse_devices(output: str) -> DeviceStatus:
    """Map `fastboot devices` output to the status of the first listed device."""

    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue
        low = line.lower()
        if "no permissions" in low or low.startswith("no_permissions"):
            return DeviceStatus.NO_PERMISSIONS
        return DeviceStatus.READY
    return DeviceStatus.NO_DEVICE


def parse_getvar(output: str, name: str) -> Optional[str]:
    prefix = f"{name}:"
    for line in output.splitlines():
        line = line.strip()
        if line.lower().startswith(prefix):
            return line[len(prefix):].strip() or None
    return None


class FastbootClient:
    def __init__(
        self,
        fastboot_path: str = "fastboot",
        *,
        serial: Optional[str] = None,
        unlock_args: Sequence[str] = DEFAULT_UNLOCK_ARGS,
        timeout: float = 600.0,
    ) -> None:
        self.fastboot_path = fastboot_path
        self.serial = serial
        self.unlock_args = list(unlock_args)
        self.timeout = timeout

    def _argv(self, args: List[str]) -> List[str]:
        argv = [self.fastboot_path]
        if self.serial:
            argv.extend(["-s", self.serial])
        argv.extend(args)
        return argv

    def _run(self, args: List[str], *, timeout: Optional[float] = None) -> CmdResult:
        try:
            return run_cmd(self._argv(args), timeout=timeout or self.timeout)
        except CommandError as e:
            raise FastbootError(str(e)) from e

    def status(self) -> DeviceStatus:
        r = run_cmd([self.fastboot_path, "devices"], timeout=30)
        status = parse_devices(r.stdout)
        logger.debug("fastboot status: %s", status.value)
        return status

    def getvar(self, name: str) -> str:
        r = self._run(["getvar", name], timeout=30)
        value = parse_getvar(r.output, name)
        if value is None:
            raise FastbootError(f"Bootloader did not report {name}")
        return value

    def product(self) -> str:
        return self.getvar("product")

    def unlocked(self) -> bool:
        value = self.getvar("unlocked").lower()
        if value not in {"yes", "no"}:
            raise FastbootError(f"Unexpected unlocked value: {value}")
        return value == "yes"

    def unlock(self) -> None:
        self._run(self.unlock_args)

    def flash_recovery(self, image_path: str) -> None:
        self._run(["flash", "recovery", image_path])

    def boot(self, image_path: str) -> None:
        self._run(["boot", image_path])

    def reboot(self) -> None:
        self._run(["reboot"], timeout=60)
