from __future__ import annotations

import logging

from .. import messages
from ..exit_codes import ExitCode
from ..pipeline import InstallContext, enter_bootloader, verify_user_ready

logger = logging.getLogger(__name__)


class ReturnToBootloaderStep:
    """Second cycle: the filesystem payload installs only after the OS booted once."""

    step_id = "91_return_to_bootloader"
    requires = None
    error_code = ExitCode.ERROR_ADB

    def run(self, ctx: InstallContext) -> None:
        ctx.operator.echo(messages.MSG_REENABLE)
        ctx.operator.acknowledge("Press enter when ADB is reenabled")
        verify_user_ready(ctx)
        enter_bootloader(ctx, ctx.config.wait("second_cycle_settle"))
