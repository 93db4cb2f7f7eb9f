from __future__ import annotations

import logging

from ..control import ControlMode
from ..exit_codes import ExitCode
from ..pipeline import InstallContext

logger = logging.getLogger(__name__)


class FlashRecoveryStep:
    step_id = "60_flash_recovery"
    requires = ControlMode.BOOTLOADER
    error_code = ExitCode.ERROR_TWRP

    def run(self, ctx: InstallContext) -> None:
        if ctx.config.confirm_mode_changes:
            ctx.operator.acknowledge("Press enter to start the installation")
        ctx.say("Flashing TWRP recovery...")
        ctx.fastboot.flash_recovery(str(ctx.run.artifact("recovery")))
