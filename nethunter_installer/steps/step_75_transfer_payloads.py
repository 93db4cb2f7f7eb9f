from __future__ import annotations

import logging

from ..control import ControlMode
from ..exit_codes import ExitCode
from ..pipeline import InstallContext

logger = logging.getLogger(__name__)

# Sideloaded payloads are streamed at install time instead.
SIDELOAD_ROLES = ("extra", "os")

_LABELS = {
    "extra": "extra zip (firmware/etc)",
    "os": "NetHunter OS zip",
    "filesystem": "NetHunter filesystem zip",
    "companion": "companion apps zip",
}


class TransferPayloadsStep:
    step_id = "75_transfer_payloads"
    requires = ControlMode.USER
    error_code = ExitCode.ERROR_ADB

    def run(self, ctx: InstallContext) -> None:
        profile = ctx.run.require_profile()
        for role, _art in profile.artifacts():
            if role == "recovery":
                continue
            if profile.sideload and role in SIDELOAD_ROLES:
                continue
            ctx.say(f"Transferring the {_LABELS[role]} to your device...")
            ctx.adb.push(str(ctx.run.artifact(role)), ctx.config.remote_dir)
