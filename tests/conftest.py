"""Shared fixtures: scripted control-planes and operator."""

from pathlib import Path
from typing import Dict, List, Optional

import pytest

from nethunter_installer.control import DeviceStatus
from nethunter_installer.errors import UserInputError
from nethunter_installer.installer_config import InstallerConfig
from nethunter_installer.pipeline import InstallContext
from nethunter_installer.profiles import Artifact, DeviceProfile, ProfileRegistry

# Operations that change device state; everything else is a query.
MUTATING = {
    "adb.shell",
    "adb.push",
    "adb.reboot",
    "adb.sideload",
    "fastboot.unlock",
    "fastboot.flash_recovery",
    "fastboot.boot",
    "fastboot.reboot",
}


class Journal(list):
    def ops(self) -> List[str]:
        return [entry[0] for entry in self]

    def mutations(self) -> List[tuple]:
        return [entry for entry in self if entry[0] in MUTATING]


class _FakePlane:
    prefix = ""

    def __init__(self, journal: Journal, statuses: Optional[List[DeviceStatus]] = None) -> None:
        self.journal = journal
        # The last status repeats once the script runs out.
        self.statuses = list(statuses or [DeviceStatus.READY])
        self.failures: Dict[str, Exception] = {}

    def _call(self, op: str, *args):
        self.journal.append((f"{self.prefix}.{op}",) + args)
        exc = self.failures.get(op)
        if exc is not None:
            raise exc

    def status(self) -> DeviceStatus:
        self._call("status")
        if len(self.statuses) > 1:
            return self.statuses.pop(0)
        return self.statuses[0]


class FakeAdb(_FakePlane):
    prefix = "adb"

    def shell(self, command: str) -> str:
        self._call("shell", command)
        return ""

    def push(self, local_path: str, remote_dir: str) -> None:
        self._call("push", Path(local_path).name, remote_dir)

    def reboot(self, target: str = "") -> None:
        self._call("reboot", target)

    def sideload(self, path: str) -> None:
        self._call("sideload", Path(path).name)


class FakeFastboot(_FakePlane):
    prefix = "fastboot"

    def __init__(self, journal: Journal, statuses=None, *, product: str = "hammerhead", unlocked: bool = True) -> None:
        super().__init__(journal, statuses)
        self._product = product
        self._unlocked = unlocked

    def product(self) -> str:
        self._call("product")
        return self._product

    def unlocked(self) -> bool:
        self._call("unlocked")
        return self._unlocked

    def unlock(self) -> None:
        self._call("unlock")

    def flash_recovery(self, image_path: str) -> None:
        self._call("flash_recovery", Path(image_path).name)

    def boot(self, image_path: str) -> None:
        self._call("boot", Path(image_path).name)

    def reboot(self) -> None:
        self._call("reboot")


class ScriptedOperator:
    """Operator that answers from pre-recorded scripts."""

    def __init__(self, answers=None, confirms=None, choices=None) -> None:
        self.answers = list(answers or [])
        self.confirms = list(confirms or [])
        self.choices = list(choices or [])
        self.output: List[str] = []
        self.acknowledged: List[str] = []
        self.menus: List[tuple] = []

    def echo(self, message: str = "") -> None:
        self.output.append(message)

    def ask(self, prompt: str) -> str:
        if not self.answers:
            raise UserInputError("no scripted answer")
        return self.answers.pop(0)

    def confirm(self, prompt: str) -> bool:
        if not self.confirms:
            raise UserInputError("no scripted confirmation")
        return self.confirms.pop(0)

    def choose(self, title: str, options, default=None) -> int:
        self.menus.append((title, list(options)))
        if not self.choices:
            raise UserInputError("no scripted choice")
        return self.choices.pop(0)

    def acknowledge(self, prompt: str) -> None:
        self.acknowledged.append(prompt)

    @property
    def text(self) -> str:
        return "\n".join(self.output)


def make_profile(name: str = "Nexus 5", hardware_id: str = "hammerhead", *, extra: bool = False,
                 companion: bool = True, install_method: str = "push") -> DeviceProfile:
    slug = name.lower().replace(" ", "")
    return DeviceProfile(
        name=name,
        hardware_id=hardware_id,
        os=Artifact(f"{slug}-os.zip", f"https://example.invalid/{slug}-os.zip"),
        filesystem=Artifact(f"{slug}-fs.zip", f"https://example.invalid/{slug}-fs.zip"),
        recovery=Artifact(f"{slug}-twrp.img", f"https://example.invalid/{slug}-twrp.img"),
        companion=Artifact(f"{slug}-gapps.zip", f"https://example.invalid/{slug}-gapps.zip") if companion else None,
        extra=Artifact(f"{slug}-firmware.zip", f"https://example.invalid/{slug}-firmware.zip") if extra else None,
        install_method=install_method,
    )


def stage_files(workdir: Path, profile: DeviceProfile) -> None:
    for _role, art in profile.artifacts():
        (workdir / art.file).write_bytes(b"payload")


class FakeFetcher:
    def __init__(self) -> None:
        self.calls: List[tuple] = []
        self.error: Optional[Exception] = None

    def __call__(self, url: str, dest: Path) -> Path:
        self.calls.append((url, Path(dest).name))
        if self.error is not None:
            raise self.error
        Path(dest).write_bytes(b"downloaded")
        return Path(dest)


@pytest.fixture
def journal():
    return Journal()


@pytest.fixture
def adb(journal):
    return FakeAdb(journal)


@pytest.fixture
def fastboot(journal):
    return FakeFastboot(journal)


@pytest.fixture
def operator():
    return ScriptedOperator(answers=["yes"], confirms=[True])


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def profile():
    return make_profile()


@pytest.fixture
def make_ctx(tmp_path, adb, fastboot, operator, fetcher, sleeps, profile):
    def _make(profiles=None, *, install: Optional[dict] = None, stage: bool = True) -> InstallContext:
        profiles = profiles if profiles is not None else [profile]
        raw = {"paths": {"workdir": str(tmp_path)}}
        if install:
            raw["install"] = install
        if stage:
            for p in profiles:
                stage_files(tmp_path, p)
        return InstallContext(
            config=InstallerConfig(raw=raw),
            registry=ProfileRegistry(profiles),
            adb=adb,
            fastboot=fastboot,
            operator=operator,
            fetch=fetcher,
            sleep=sleeps.append,
        )

    return _make
