from __future__ import annotations

import logging

from ..control import ControlMode
from ..exit_codes import ExitCode
from ..pipeline import InstallContext

logger = logging.getLogger(__name__)

WIPE_PARTITIONS = ("dalvik", "data", "system")


class WipeStep:
    step_id = "70_wipe"
    requires = ControlMode.USER
    error_code = ExitCode.ERROR_TWRP

    def run(self, ctx: InstallContext) -> None:
        ctx.say("Removing previous installations")
        for part in WIPE_PARTITIONS:
            ctx.say(f"Wiping {part}...")
            # TWRP drops commands issued back to back.
            ctx.sleep(ctx.config.wait("wipe_pause"))
            ctx.adb.shell(f"twrp wipe {part}")
