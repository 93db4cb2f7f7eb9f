from __future__ import annotations

import logging

from ..control import ControlMode
from ..exit_codes import ExitCode
from ..pipeline import InstallContext

logger = logging.getLogger(__name__)


class PostInstallWipeStep:
    step_id = "85_post_install_wipe"
    requires = ControlMode.USER
    error_code = ExitCode.ERROR_TWRP

    def run(self, ctx: InstallContext) -> None:
        # Recovery needs a moment after installs before it accepts more commands.
        ctx.sleep(ctx.config.wait("post_install_pause"))
        ctx.say("Wiping your device without wiping /data/media...")
        ctx.adb.shell("twrp wipe cache")
        ctx.sleep(ctx.config.wait("wipe_pause"))
        ctx.adb.shell("twrp wipe dalvik")
