from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

COMPANION_POLICIES = {"ask", "always", "never"}

# Seconds. Device boot and recovery start-up times vary by hardware; these are
# the values the installer has been used with on OnePlus/Nexus devices.
DEFAULT_WAITS: Dict[str, float] = {
    "bootloader_settle": 7.0,
    "second_cycle_settle": 30.0,
    "wipe_pause": 1.0,
    "post_install_pause": 10.0,
    "recovery_settle": 20.0,
    "filesystem_install_pause": 30.0,
    "sideload_settle": 2.0,
}


@dataclass(frozen=True)
class InstallerConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    def _section(self, name: str) -> Dict[str, Any]:
        return self.raw.get(name) or {}

    def wait(self, name: str) -> float:
        if name not in DEFAULT_WAITS:
            raise KeyError(name)
        return float(self._section("waits").get(name, DEFAULT_WAITS[name]))

    def validate(self) -> None:
        """Check every value a step will read, before any device is touched."""
        for section in ("paths", "tools", "install", "waits"):
            if not isinstance(self._section(section), dict):
                raise ValueError(f"{section} must be a mapping/object")

        for name, value in self._section("waits").items():
            if name not in DEFAULT_WAITS:
                raise ValueError(f"Unknown wait {name!r}; expected one of {sorted(DEFAULT_WAITS)}")
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
                raise ValueError(f"waits.{name} must be a non-negative number of seconds, got {value!r}")
        logger.debug("Companion policy: %s", self.companion)

    @property
    def workdir(self) -> str:
        return str(((self.raw.get("paths") or {}).get("workdir")) or ".")

    @property
    def remote_dir(self) -> str:
        return str(((self.raw.get("paths") or {}).get("remote_dir")) or "/sdcard")

    @property
    def devices_path(self) -> Optional[str]:
        p = (self.raw.get("paths") or {}).get("devices")
        return str(p) if p else None

    @property
    def adb_path(self) -> str:
        return str(self._section("tools").get("adb") or "adb")

    @property
    def fastboot_path(self) -> str:
        return str(self._section("tools").get("fastboot") or "fastboot")

    @property
    def unlock_args(self) -> List[str]:
        raw = self._section("tools").get("unlock_command") or "oem unlock"
        return str(raw).split()

    @property
    def companion(self) -> str:
        """ask: prompt the operator; always/never: fixed-device behaviour."""
        policy = str(self._section("install").get("companion") or "ask").lower()
        if policy not in COMPANION_POLICIES:
            raise ValueError(f"install.companion must be one of {sorted(COMPANION_POLICIES)}, got {policy}")
        return policy

    @property
    def confirm_mode_changes(self) -> bool:
        return bool(self._section("install").get("confirm_mode_changes", True))


def load_installer_config(path: Optional[str] = None) -> InstallerConfig:
    if not path:
        return InstallerConfig()

    p = Path(path)
    if not p.exists():
        logger.warning("Config %s not found, using defaults", p)
        return InstallerConfig()

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("installer config must be YAML")

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"installer config is not valid YAML: {e}") from e
    if not isinstance(raw, dict):
        raise ValueError("installer config must contain a mapping/object")

    cfg = InstallerConfig(raw=raw)
    cfg.validate()
    logger.info("Config loaded from %s (companion=%s, confirm_mode_changes=%s)", p, cfg.companion, cfg.confirm_mode_changes)
    return cfg
