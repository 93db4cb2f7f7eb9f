from __future__ import annotations

import logging

from ..control import ControlMode
from ..exit_codes import ExitCode
from ..pipeline import InstallContext

logger = logging.getLogger(__name__)


class BootRecoveryStep:
    requires = ControlMode.BOOTLOADER
    error_code = ExitCode.ERROR_TWRP

    def __init__(self, step_id: str = "65_boot_recovery") -> None:
        self.step_id = step_id

    def run(self, ctx: InstallContext) -> None:
        ctx.say("Booting TWRP to flash the NetHunter update zips.\n Swipe to allow system modification in TWRP and wait")
        ctx.fastboot.boot(str(ctx.run.artifact("recovery")))
        ctx.run.mode = ControlMode.USER
        ctx.operator.acknowledge("Press enter when TWRP is fully loaded & ready")
