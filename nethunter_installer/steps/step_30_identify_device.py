from __future__ import annotations

import logging

from ..control import ControlMode
from ..errors import InstallerExit
from ..exit_codes import ExitCode
from ..pipeline import InstallContext

logger = logging.getLogger(__name__)


class IdentifyDeviceStep:
    step_id = "30_identify_device"
    requires = ControlMode.BOOTLOADER
    error_code = ExitCode.ERROR_FASTBOOT

    def run(self, ctx: InstallContext) -> None:
        ctx.say("Identifying your device...")
        product = ctx.fastboot.product()

        candidates = ctx.registry.candidates(product)
        if not candidates:
            raise InstallerExit(
                ExitCode.ERROR_UNSUPPORTED_DEVICE,
                f"Device config not found for {product!r}! Bye.",
            )

        name = None
        if len(candidates) > 1:
            # Several models report the same board name; only the operator can tell them apart.
            names = [p.name for p in candidates]
            picked = ctx.operator.choose(f"Detected {product} device. Select which device:", names)
            name = names[picked]
            logger.info("Operator selected %s for %s", name, product)

        profile = ctx.registry.resolve(product, name=name)
        ctx.run.profile = profile
        ctx.say(f"Device and config found, using {profile.name} ({profile.hardware_id}) configuration and endpoints")
