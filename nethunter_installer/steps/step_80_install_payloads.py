from __future__ import annotations

import logging

from ..control import ControlMode
from ..exit_codes import ExitCode
from ..pipeline import InstallContext

logger = logging.getLogger(__name__)


class InstallPayloadsStep:
    """Install extra (if any), the OS payload, then optionally the companion bundle.

    Extras (device firmware, baseband) go first or the OS install fails.
    """

    step_id = "80_install_payloads"
    requires = ControlMode.USER
    error_code = ExitCode.ERROR_TWRP

    def _install(self, ctx: InstallContext, role: str, sideload: bool) -> None:
        if sideload:
            ctx.adb.shell("twrp sideload")
            ctx.sleep(ctx.config.wait("sideload_settle"))
            ctx.adb.sideload(str(ctx.run.artifact(role)))
        else:
            ctx.adb.shell(f"twrp install {ctx.remote_path(role)}")

    def _want_companion(self, ctx: InstallContext) -> bool:
        policy = ctx.config.companion
        if policy == "ask":
            return ctx.operator.confirm("Install companion apps (GApps)?")
        return policy == "always"

    def run(self, ctx: InstallContext) -> None:
        profile = ctx.run.require_profile()

        if profile.extra is not None:
            ctx.say("Installing extra zip (firmware/baseband/etc) please keep your device connected...")
            self._install(ctx, "extra", profile.sideload)

        ctx.say("Installing NetHunter OS please keep your device connected...")
        self._install(ctx, "os", profile.sideload)

        if profile.companion is None:
            return
        if self._want_companion(ctx):
            ctx.say("Installing companion apps...")
            self._install(ctx, "companion", False)
        else:
            ctx.say("Skipping companion apps install")
