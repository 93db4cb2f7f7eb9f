from __future__ import annotations

import argparse
import logging
import os
import platform
from typing import List, Optional

from . import __version__, messages
from .errors import InstallerExit, ProfileError, UserInputError
from .exit_codes import ExitCode
from .installer_config import InstallerConfig, load_installer_config
from .lib.adb import AdbClient
from .lib.fastboot import FastbootClient
from .lib.net import Downloader
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .operator import ConsoleOperator, Operator
from .pipeline import InstallContext, Step, run_pipeline
from .profiles import load_registry
from .steps import (
    BootRecoveryStep,
    DetectModeStep,
    FlashRecoveryStep,
    IdentifyDeviceStep,
    InstallFilesystemStep,
    InstallPayloadsStep,
    PostInstallWipeStep,
    RebootStep,
    ReturnToBootloaderStep,
    StageArtifactsStep,
    TransferPayloadsStep,
    UnlockBootloaderStep,
    VerifyToolsStep,
    WelcomeStep,
    WipeStep,
)

logger = logging.getLogger(__name__)


def build_steps() -> List[Step]:
    return [
        WelcomeStep(),
        VerifyToolsStep(),
        DetectModeStep(),
        IdentifyDeviceStep(),
        UnlockBootloaderStep(),
        StageArtifactsStep(),
        FlashRecoveryStep(),
        BootRecoveryStep(),
        WipeStep(),
        TransferPayloadsStep(),
        InstallPayloadsStep(),
        PostInstallWipeStep(),
        RebootStep("90_reboot", "Rebooting into NetHunter OS..."),
        # Second cycle: the filesystem payload needs the OS to have booted once.
        ReturnToBootloaderStep(),
        BootRecoveryStep("92_boot_recovery"),
        InstallFilesystemStep(),
        RebootStep("99_reboot", messages.MSG_SUCCESS),
    ]


def run(ctx: InstallContext, steps: Optional[List[Step]] = None) -> ExitCode:
    """Run the installer procedure and return its classification."""

    try:
        result = run_pipeline(ctx, steps if steps is not None else build_steps())
    except InstallerExit as e:
        if e.message:
            ctx.operator.echo(e.message)
        log = logger.info if e.code.is_success else logger.error
        log("Run ended at %s with %s", ctx.run.current_stage, e.code.name)
        return e.code

    logger.info("Installation finished (%d steps)", len(result.ran_steps))
    return ExitCode.SUCCESS


def _with_path_overrides(cfg: InstallerConfig, **paths: Optional[str]) -> InstallerConfig:
    overrides = {k: v for k, v in paths.items() if v}
    if not overrides:
        return cfg
    raw = dict(cfg.raw)
    raw["paths"] = dict(raw.get("paths") or {}, **overrides)
    return InstallerConfig(raw=raw)


def exit_pause(operator: Operator) -> None:
    # A console window opened by double-clicking closes as soon as the
    # process exits; keep the last messages on screen.
    if platform.system() != "Windows":
        return
    try:
        operator.acknowledge("\nPress [Enter] to exit...")
    except UserInputError as e:
        logger.debug("No acknowledgement before exit: %s", e)


def main(argv: Optional[list[str]] = None, operator: Optional[Operator] = None) -> int:
    p = argparse.ArgumentParser(prog="nethunter-installer")
    p.add_argument("--version", action="store_true", help="Print the program version")
    p.add_argument("--config", default=None, help="Path to installer config (yaml)")
    p.add_argument("--devices", default=None, help="Path to device profile table (yaml)")
    p.add_argument("--workdir", default=None, help="Directory for downloaded artifacts")
    p.add_argument("--tools-dir", default=None, help="Directory holding adb/fastboot, prepended to PATH")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to installer log")
    p.add_argument("--verbose", action="store_true", help="Also log to the console")

    args = p.parse_args(argv)
    operator = operator or ConsoleOperator()

    if args.version:
        operator.echo(
            f"NetHunter installer version {__version__} {platform.system().lower()}/{platform.machine().lower()}"
        )
        return int(ExitCode.SUCCESS)

    configure_logging(log_path=args.log, also_console=bool(args.verbose))

    if args.tools_dir:
        # Bundled platform tools take precedence over system ones.
        os.environ["PATH"] = os.pathsep.join([os.path.abspath(args.tools_dir), os.environ.get("PATH", "")])

    code = _run_cli(args, operator)
    exit_pause(operator)
    return int(code)


def _run_cli(args: argparse.Namespace, operator: Operator) -> ExitCode:
    try:
        cfg = _with_path_overrides(
            load_installer_config(args.config),
            workdir=args.workdir,
            devices=args.devices,
        )
        registry = load_registry(cfg.devices_path)
    except (OSError, ValueError, ProfileError) as e:
        logger.exception("Failed to load installer configuration")
        operator.echo(f"Failed to load installer configuration: {e}")
        return ExitCode.ERROR_PREREQS

    ctx = InstallContext(
        config=cfg,
        registry=registry,
        adb=AdbClient(cfg.adb_path),
        fastboot=FastbootClient(cfg.fastboot_path, unlock_args=cfg.unlock_args),
        operator=operator,
        fetch=Downloader().fetch,
    )
    return run(ctx)


if __name__ == "__main__":
    raise SystemExit(main())
