from __future__ import annotations

import logging
from typing import List, Optional

from ..control import DeviceStatus
from ..errors import AdbError, CommandError
from .command import CmdResult, run_cmd

logger = logging.getLogger(__name__)

# States reported by `adb devices` in which the device accepts commands.
_READY_STATES = {"device", "recovery", "sideload"}


def parse_devices(output: str) -> DeviceStatus:
    """Map `adb devices` output to the status of the first listed device."""

    for line in output.splitlines():
        line = line.strip()
        if not line or line.startswith("List of devices") or line.startswith("*"):
            continue
        parts = line.split(None, 1)
        state = parts[1].strip().lower() if len(parts) > 1 else ""
        if state.startswith("no permissions"):
            return DeviceStatus.NO_PERMISSIONS
        if state in _READY_STATES:
            return DeviceStatus.READY
        # unauthorized, offline, authorizing ...
        return DeviceStatus.UNAUTHORIZED
    return DeviceStatus.NO_DEVICE


class AdbClient:
    def __init__(self, adb_path: str = "adb", *, serial: Optional[str] = None, timeout: float = 600.0) -> None:
        self.adb_path = adb_path
        self.serial = serial
        self.timeout = timeout

    def _argv(self, args: List[str]) -> List[str]:
        argv = [self.adb_path]
        if self.serial:
            argv.extend(["-s", self.serial])
        argv.extend(args)
        return argv

    def _run(self, args: List[str], *, timeout: Optional[float] = None) -> CmdResult:
        try:
            return run_cmd(self._argv(args), timeout=timeout or self.timeout)
        except CommandError as e:
            raise AdbError(str(e)) from e

    def status(self) -> DeviceStatus:
        # `devices` is a host-side query; the serial filter does not apply.
        r = run_cmd([self.adb_path, "devices"], timeout=30)
        status = parse_devices(r.stdout)
        logger.debug("adb status: %s", status.value)
        return status

    def shell(self, command: str) -> str:
        r = self._run(["shell", command])
        return r.stdout

    def push(self, local_path: str, remote_dir: str) -> None:
        self._run(["push", local_path, remote_dir.rstrip("/") + "/"])

    def reboot(self, target: str = "") -> None:
        args = ["reboot"]
        if target:
            args.append(target)
        self._run(args, timeout=60)

    def sideload(self, path: str) -> None:
        self._run(["sideload", path])
