from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Protocol, Sequence

from . import messages
from .control import BootloaderControl, ControlMode, DeviceStatus, UserModeControl
from .errors import (
    CommandError,
    ControlPlaneError,
    DownloadError,
    InstallerExit,
    ToolNotFoundError,
    UserInputError,
)
from .exit_codes import ExitCode
from .installer_config import InstallerConfig
from .operator import Operator
from .profiles import DeviceProfile, ProfileRegistry

logger = logging.getLogger(__name__)

Fetch = Callable[[str, Path], Path]


@dataclass
class InstallationRun:
    """Working state of one invocation. Never persisted."""

    profile: Optional[DeviceProfile] = None
    stage_index: int = -1
    current_stage: Optional[str] = None
    completed: List[str] = field(default_factory=list)
    artifacts: Dict[str, Path] = field(default_factory=dict)
    mode: ControlMode = ControlMode.UNKNOWN

    def require_profile(self) -> DeviceProfile:
        if self.profile is None:
            raise RuntimeError("No device profile resolved; run identification first")
        return self.profile

    def artifact(self, role: str) -> Path:
        if role not in self.artifacts:
            raise RuntimeError(f"Artifact {role} was not staged")
        return self.artifacts[role]


@dataclass
class InstallContext:
    config: InstallerConfig
    registry: ProfileRegistry
    adb: UserModeControl
    fastboot: BootloaderControl
    operator: Operator
    fetch: Fetch
    sleep: Callable[[float], None] = time.sleep
    run: InstallationRun = field(default_factory=InstallationRun)

    def say(self, message: str) -> None:
        logger.info("%s", message.strip())
        self.operator.echo(message)

    def remote_path(self, role: str) -> str:
        return f"{self.config.remote_dir.rstrip('/')}/{self.run.artifact(role).name}"


class Step(Protocol):
    """One stage of the fixed procedure.

    ``requires`` names the control-plane that must report ready before the
    stage starts; ``error_code`` classifies control-plane failures inside it.
    """

    step_id: str
    requires: Optional[ControlMode]
    error_code: ExitCode

    def run(self, ctx: InstallContext) -> None:
        ...


@dataclass(frozen=True)
class PipelineResult:
    run: InstallationRun
    ran_steps: List[str]


def verify_user_ready(ctx: InstallContext) -> None:
    try:
        status = ctx.adb.status()
    except (ControlPlaneError, CommandError) as e:
        raise InstallerExit(ExitCode.ERROR_ADB, f"Failed to get adb status: {e}") from e

    if status in (DeviceStatus.NO_DEVICE, DeviceStatus.UNAUTHORIZED):
        raise InstallerExit(ExitCode.ERROR_ADB, messages.MSG_ADB_ISSUE)
    if status == DeviceStatus.NO_PERMISSIONS:
        raise InstallerExit(ExitCode.ERROR_USB_PERMS, messages.MSG_FIX_PERMS)
    ctx.run.mode = ControlMode.USER


def verify_bootloader_ready(ctx: InstallContext) -> None:
    try:
        status = ctx.fastboot.status()
    except (ControlPlaneError, CommandError) as e:
        raise InstallerExit(ExitCode.ERROR_FASTBOOT, f"Failed to get fastboot status: {e}") from e

    if status == DeviceStatus.NO_PERMISSIONS:
        raise InstallerExit(ExitCode.ERROR_USB_PERMS, messages.MSG_FIX_PERMS)
    if status != DeviceStatus.READY:
        raise InstallerExit(ExitCode.ERROR_FASTBOOT, messages.MSG_FASTBOOT_NO_DEVICE)
    ctx.run.mode = ControlMode.BOOTLOADER


def await_bootloader(ctx: InstallContext, settle: float) -> None:
    """Wait for a requested reboot into the bootloader to land.

    Sleeps ``settle`` seconds and checks fastboot exactly once. There is no
    second wait: a device that is not back by then aborts the run.
    """

    logger.info("Waiting %.1fs for the bootloader", settle)
    ctx.sleep(settle)
    try:
        status = ctx.fastboot.status()
    except (ControlPlaneError, CommandError) as e:
        raise InstallerExit(ExitCode.ERROR_ADB, f"Failed to reboot device into bootloader: {e}") from e

    if status == DeviceStatus.NO_PERMISSIONS:
        raise InstallerExit(ExitCode.ERROR_USB_PERMS, messages.MSG_FIX_PERMS)
    if status != DeviceStatus.READY:
        raise InstallerExit(ExitCode.ERROR_ADB, "Failed to reboot device into bootloader!")
    ctx.run.mode = ControlMode.BOOTLOADER


def enter_bootloader(ctx: InstallContext, settle: float) -> None:
    ctx.say("Rebooting your device into bootloader...")
    try:
        ctx.adb.reboot("bootloader")
    except (ControlPlaneError, CommandError) as e:
        raise InstallerExit(ExitCode.ERROR_ADB, f"Failed to reboot into bootloader: {e}") from e
    ctx.run.mode = ControlMode.UNKNOWN
    await_bootloader(ctx, settle)


def check_precondition(ctx: InstallContext, requires: Optional[ControlMode]) -> None:
    # Always queried live; the recorded mode is only a hint for logging.
    if requires == ControlMode.BOOTLOADER:
        verify_bootloader_ready(ctx)
    elif requires == ControlMode.USER:
        verify_user_ready(ctx)


def run_pipeline(ctx: InstallContext, steps: Sequence[Step]) -> PipelineResult:
    """Run steps strictly in order; the first failure ends the run.

    Every failure surfaces as InstallerExit carrying its classification, so
    no later step can start after an abort.
    """

    ran: List[str] = []

    for index, step in enumerate(steps):
        ctx.run.stage_index = index
        ctx.run.current_stage = step.step_id
        logger.info("Running step %s (mode=%s)", step.step_id, ctx.run.mode.value)

        try:
            check_precondition(ctx, step.requires)
            step.run(ctx)
        except InstallerExit:
            logger.info("Step %s ended the run", step.step_id)
            raise
        except ToolNotFoundError as e:
            raise InstallerExit(ExitCode.ERROR_PREREQS, f"{e}\n{messages.MSG_INCOMPLETE_TOOLS}") from e
        except UserInputError as e:
            raise InstallerExit(ExitCode.ERROR_USER_INPUT, f"Failed to read input: {e}") from e
        except DownloadError as e:
            raise InstallerExit(ExitCode.ERROR_REMOTE, f"Failed to download artifacts: {e}") from e
        except (ControlPlaneError, CommandError) as e:
            logger.error("Step %s failed: %s", step.step_id, e)
            raise InstallerExit(step.error_code, f"Step {step.step_id} failed: {e}") from e

        ctx.run.completed.append(step.step_id)
        ran.append(step.step_id)

    ctx.run.current_stage = None
    return PipelineResult(run=ctx.run, ran_steps=ran)
