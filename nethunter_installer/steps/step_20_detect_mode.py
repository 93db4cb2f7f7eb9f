from __future__ import annotations

import logging

from ..control import ControlMode, DeviceStatus
from ..errors import CommandError, ControlPlaneError, InstallerExit
from ..exit_codes import ExitCode
from ..pipeline import InstallContext, enter_bootloader, verify_bootloader_ready, verify_user_ready

logger = logging.getLogger(__name__)


class DetectModeStep:
    """Get the device into the bootloader, wherever it currently is."""

    step_id = "20_detect_mode"
    requires = None
    error_code = ExitCode.ERROR_ADB

    def run(self, ctx: InstallContext) -> None:
        ctx.say("Checking USB permissions...")
        try:
            status = ctx.fastboot.status()
        except (ControlPlaneError, CommandError) as e:
            raise InstallerExit(ExitCode.ERROR_FASTBOOT, f"Failed to get fastboot status: {e}") from e

        if status == DeviceStatus.NO_DEVICE:
            # Not in the bootloader: normal boot or recovery, reachable over adb.
            logger.info("No bootloader device; assuming user mode")
            ctx.run.mode = ControlMode.USER
            verify_user_ready(ctx)
            enter_bootloader(ctx, ctx.config.wait("bootloader_settle"))

        verify_bootloader_ready(ctx)
