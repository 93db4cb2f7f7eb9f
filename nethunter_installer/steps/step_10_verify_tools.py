from __future__ import annotations

import logging

from .. import messages
from ..errors import CommandError, InstallerExit, ToolNotFoundError
from ..exit_codes import ExitCode
from ..pipeline import InstallContext

logger = logging.getLogger(__name__)


class VerifyToolsStep:
    step_id = "10_verify_tools"
    requires = None
    error_code = ExitCode.ERROR_PREREQS

    def run(self, ctx: InstallContext) -> None:
        ctx.say("\nVerifying installer tools...")
        for name, plane in (("adb", ctx.adb), ("fastboot", ctx.fastboot)):
            try:
                plane.status()
            except (ToolNotFoundError, CommandError) as e:
                raise InstallerExit(
                    ExitCode.ERROR_PREREQS,
                    f"Failed to run {name}: {e}\n{messages.MSG_INCOMPLETE_TOOLS}",
                ) from e
