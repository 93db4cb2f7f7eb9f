from __future__ import annotations

import logging

from .. import messages
from ..errors import InstallerExit
from ..exit_codes import ExitCode
from ..operator import YES
from ..pipeline import InstallContext

logger = logging.getLogger(__name__)


class WelcomeStep:
    step_id = "00_welcome"
    requires = None
    error_code = ExitCode.ERROR_USER_INPUT

    def run(self, ctx: InstallContext) -> None:
        ctx.operator.echo(messages.MSG_WELCOME)
        ctx.operator.echo("The installer supports the following devices:")
        for p in ctx.registry.profiles:
            ctx.operator.echo(f"    - {p.name} ({p.hardware_id})")

        answer = ctx.operator.ask("\nAre you ready to install NetHunter? (yes/no): ")
        if answer.strip().lower() not in YES:
            ctx.operator.echo("")
            raise InstallerExit(ExitCode.SUCCESS_USER_ABORT, "Aborting installation.")
