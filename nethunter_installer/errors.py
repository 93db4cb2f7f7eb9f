"""Exception types raised by the installer and its collaborators."""

from __future__ import annotations

from typing import Sequence, TYPE_CHECKING

from .exit_codes import ExitCode

if TYPE_CHECKING:
    from .profiles import DeviceProfile


class InstallerError(Exception):
    """Base exception for installer failures."""


class CommandError(InstallerError):
    """A subprocess exited non-zero."""

    def __init__(self, message: str, *, returncode: int = -1, stderr: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class ToolNotFoundError(InstallerError):
    """A required executable (adb, fastboot) could not be started."""


class ControlPlaneError(InstallerError):
    """A device-side command, transfer or reboot failed."""


class AdbError(ControlPlaneError):
    pass


class FastbootError(ControlPlaneError):
    pass


class DownloadError(InstallerError):
    """An artifact could not be retrieved."""


class UserInputError(InstallerError):
    """Operator input could not be read or parsed."""


class ProfileError(InstallerError):
    """The device profile table is invalid."""


class ProfileNotFoundError(ProfileError):
    pass


class AmbiguousProfileError(ProfileError):
    """Several profiles share one hardware identifier."""

    def __init__(self, hardware_id: str, candidates: Sequence["DeviceProfile"]) -> None:
        names = ", ".join(p.name for p in candidates)
        super().__init__(f"{hardware_id} matches several devices: {names}")
        self.hardware_id = hardware_id
        self.candidates = list(candidates)


class InstallerExit(Exception):
    """Ends the run with a classified outcome."""

    def __init__(self, code: ExitCode, message: str = "") -> None:
        super().__init__(message or code.name)
        self.code = code
        self.message = message
