from __future__ import annotations

import logging

from .. import messages
from ..control import ControlMode
from ..errors import AdbError, InstallerExit
from ..exit_codes import ExitCode
from ..pipeline import InstallContext

logger = logging.getLogger(__name__)


class RebootStep:
    requires = ControlMode.USER
    error_code = ExitCode.ERROR_ADB

    def __init__(self, step_id: str = "90_reboot", message: str = "Rebooting your device...") -> None:
        self.step_id = step_id
        self.message = message

    def run(self, ctx: InstallContext) -> None:
        ctx.say(self.message)
        try:
            ctx.adb.reboot("")
        except AdbError as e:
            raise InstallerExit(
                ExitCode.ERROR_ADB,
                f"Failed to reboot: {e}\n\n{messages.MSG_MANUAL_REBOOT}",
            ) from e
        ctx.run.mode = ControlMode.UNKNOWN
