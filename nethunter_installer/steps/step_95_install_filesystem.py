from __future__ import annotations

import logging

from ..control import ControlMode
from ..exit_codes import ExitCode
from ..pipeline import InstallContext

logger = logging.getLogger(__name__)


class InstallFilesystemStep:
    step_id = "95_install_filesystem"
    requires = ControlMode.USER
    error_code = ExitCode.ERROR_TWRP

    def run(self, ctx: InstallContext) -> None:
        ctx.sleep(ctx.config.wait("recovery_settle"))
        ctx.say("Installing NetHunter filesystem, please keep your device connected...")
        ctx.adb.shell(f"twrp install {ctx.remote_path('filesystem')}")
        ctx.sleep(ctx.config.wait("filesystem_install_pause"))
