"""Device profiles and the registry that resolves them.

Profiles are declarative: artifact names/URLs plus a couple of install
switches. They never execute logic.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml

from .errors import AmbiguousProfileError, ProfileError, ProfileNotFoundError

logger = logging.getLogger(__name__)

BUNDLED_DEVICES = Path(__file__).resolve().parent / "manifests" / "devices.yaml"

# Install precedence: extra (firmware/baseband) must land before the OS payload.
ARTIFACT_ROLES = ("extra", "os", "filesystem", "companion", "recovery")
REQUIRED_ROLES = frozenset({"os", "filesystem", "recovery"})
INSTALL_METHODS = frozenset({"push", "sideload"})


@dataclass(frozen=True)
class Artifact:
    file: str
    url: str = ""


@dataclass(frozen=True)
class DeviceProfile:
    name: str
    hardware_id: str
    os: Artifact
    filesystem: Artifact
    recovery: Artifact
    companion: Optional[Artifact] = None
    extra: Optional[Artifact] = None
    install_method: str = "push"

    def artifacts(self) -> List[Tuple[str, Artifact]]:
        """Declared artifacts as (role, artifact), in install precedence order."""
        out: List[Tuple[str, Artifact]] = []
        for role in ARTIFACT_ROLES:
            art = getattr(self, role)
            if art is not None:
                out.append((role, art))
        return out

    @property
    def sideload(self) -> bool:
        return self.install_method == "sideload"


def _parse_artifact(name: str, role: str, raw: Any) -> Optional[Artifact]:
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ProfileError(f"{name}: {role} must be a mapping with file/url")

    file = str(raw.get("file") or "").strip()
    url = str(raw.get("url") or "").strip()

    if role in REQUIRED_ROLES:
        if not file:
            raise ProfileError(f"{name}: {role}.file is required")
        return Artifact(file=file, url=url)

    if not file and not url:
        return None
    if not file:
        raise ProfileError(f"{name}: {role}.file is required when {role}.url is set")
    if not url:
        # Supplied locally; staging fails if the file is missing.
        logger.info("%s for %s has no URL, expecting %s locally", role, name, file)
    return Artifact(file=file, url=url)


def parse_profile(raw: Dict[str, Any]) -> DeviceProfile:
    if not isinstance(raw, dict):
        raise ProfileError(f"Device entry must be a mapping, got {type(raw).__name__}")

    name = str(raw.get("name") or "").strip()
    hardware_id = str(raw.get("hardware_id") or "").strip()
    if not name or not hardware_id:
        raise ProfileError(f"Device entry needs name and hardware_id: {raw!r}")

    install_method = str(raw.get("install_method") or "push").lower()
    if install_method not in INSTALL_METHODS:
        raise ProfileError(f"{name}: unknown install_method {install_method!r}")

    artifacts = {role: _parse_artifact(name, role, raw.get(role)) for role in ARTIFACT_ROLES}

    files = [a.file for a in artifacts.values() if a is not None]
    dupes = sorted({f for f in files if files.count(f) > 1})
    if dupes:
        raise ProfileError(f"{name}: artifact file names must be unique ({', '.join(dupes)})")

    return DeviceProfile(
        name=name,
        hardware_id=hardware_id,
        os=artifacts["os"],
        filesystem=artifacts["filesystem"],
        recovery=artifacts["recovery"],
        companion=artifacts["companion"],
        extra=artifacts["extra"],
        install_method=install_method,
    )


class ProfileRegistry:
    """Known device profiles, resolved by exact hardware identifier."""

    def __init__(self, profiles: Sequence[DeviceProfile]) -> None:
        names = [p.name for p in profiles]
        dupes = sorted({n for n in names if names.count(n) > 1})
        if dupes:
            raise ProfileError(f"Duplicate device names: {', '.join(dupes)}")
        self._profiles = list(profiles)

    @property
    def profiles(self) -> List[DeviceProfile]:
        return list(self._profiles)

    def candidates(self, hardware_id: str) -> List[DeviceProfile]:
        return [p for p in self._profiles if p.hardware_id == hardware_id]

    def resolve(self, hardware_id: str, name: Optional[str] = None) -> DeviceProfile:
        """Return the single profile for hardware_id.

        When several devices share the identifier, the caller must pass the
        operator's choice as ``name``; nothing is picked implicitly.
        """

        matches = self.candidates(hardware_id)
        if not matches:
            raise ProfileNotFoundError(f"No device profile for {hardware_id!r}")

        if name is not None:
            for p in matches:
                if p.name == name:
                    return p
            raise ProfileNotFoundError(f"No device profile named {name!r} for {hardware_id!r}")

        if len(matches) > 1:
            raise AmbiguousProfileError(hardware_id, matches)
        return matches[0]


def load_registry(path: Optional[str] = None) -> ProfileRegistry:
    p = Path(path) if path else BUNDLED_DEVICES
    if not p.exists():
        raise FileNotFoundError(str(p))

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ProfileError(f"Device table is not valid YAML: {p}: {e}") from e
    if not isinstance(raw, dict):
        raise ProfileError(f"Device table must be a mapping: {p}")

    entries = raw.get("devices") or []
    if not isinstance(entries, list):
        raise ProfileError(f"devices must be a list: {p}")

    registry = ProfileRegistry([parse_profile(e) for e in entries])
    logger.info("Loaded %d device profiles from %s", len(registry.profiles), p)
    return registry
