from __future__ import annotations

import logging

from .. import messages
from ..control import ControlMode
from ..errors import FastbootError, InstallerExit
from ..exit_codes import ExitCode
from ..pipeline import InstallContext

logger = logging.getLogger(__name__)


class UnlockBootloaderStep:
    """Unlock if needed. A fresh unlock wipes the device and ends this run."""

    step_id = "40_unlock_bootloader"
    requires = ControlMode.BOOTLOADER
    error_code = ExitCode.ERROR_FASTBOOT

    def run(self, ctx: InstallContext) -> None:
        if ctx.config.confirm_mode_changes:
            ctx.operator.acknowledge(
                "Press enter to continue with the bootloader unlock check. "
                "Unlocking will wipe the device the first time and requires a restart."
            )

        try:
            unlocked = ctx.fastboot.unlocked()
        except FastbootError as e:
            # Unknown lock state is handled as locked.
            logger.warning("Unable to determine bootloader lock state: %s", e)
            ctx.operator.echo(f"Warning: unable to determine bootloader lock state: {e}")
            unlocked = False

        if unlocked:
            logger.info("Bootloader already unlocked")
            return

        ctx.say("Unlocking bootloader, you will need to confirm this on your device...")
        ctx.fastboot.unlock()
        try:
            ctx.fastboot.reboot()
        except FastbootError as e:
            logger.warning("Reboot after unlock failed (device reboots on its own): %s", e)
        ctx.run.mode = ControlMode.UNKNOWN
        raise InstallerExit(ExitCode.SUCCESS_BOOTLOADER_UNLOCKED, messages.MSG_UNLOCK_SUCCESS)
