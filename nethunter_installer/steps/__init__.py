from .step_00_welcome import WelcomeStep
from .step_10_verify_tools import VerifyToolsStep
from .step_20_detect_mode import DetectModeStep
from .step_30_identify_device import IdentifyDeviceStep
from .step_40_unlock_bootloader import UnlockBootloaderStep
from .step_50_stage_artifacts import StageArtifactsStep
from .step_60_flash_recovery import FlashRecoveryStep
from .step_65_boot_recovery import BootRecoveryStep
from .step_70_wipe import WipeStep
from .step_75_transfer_payloads import TransferPayloadsStep
from .step_80_install_payloads import InstallPayloadsStep
from .step_85_post_install_wipe import PostInstallWipeStep
from .step_90_reboot import RebootStep
from .step_91_return_to_bootloader import ReturnToBootloaderStep
from .step_95_install_filesystem import InstallFilesystemStep

__all__ = [
    "WelcomeStep",
    "VerifyToolsStep",
    "DetectModeStep",
    "IdentifyDeviceStep",
    "UnlockBootloaderStep",
    "StageArtifactsStep",
    "FlashRecoveryStep",
    "BootRecoveryStep",
    "WipeStep",
    "TransferPayloadsStep",
    "InstallPayloadsStep",
    "PostInstallWipeStep",
    "RebootStep",
    "ReturnToBootloaderStep",
    "InstallFilesystemStep",
]
