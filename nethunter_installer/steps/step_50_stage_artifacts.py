from __future__ import annotations

import logging
from pathlib import Path

from ..errors import DownloadError
from ..exit_codes import ExitCode
from ..pipeline import InstallContext

logger = logging.getLogger(__name__)

_LABELS = {
    "extra": "extra zip (firmware/etc)",
    "os": "NetHunter OS zip",
    "filesystem": "NetHunter filesystem zip",
    "companion": "companion apps zip",
    "recovery": "recovery image",
}


class StageArtifactsStep:
    step_id = "50_stage_artifacts"
    requires = None
    error_code = ExitCode.ERROR_REMOTE

    def run(self, ctx: InstallContext) -> None:
        profile = ctx.run.require_profile()
        workdir = Path(ctx.config.workdir)

        for role, art in profile.artifacts():
            path = workdir / art.file
            if path.exists():
                logger.info("Using local %s: %s", role, path)
            else:
                if not art.url:
                    raise DownloadError(f"{art.file} is missing and has no download URL")
                ctx.say(f"Downloading {_LABELS.get(role, role)}...")
                ctx.fetch(art.url, path)
                if not path.exists():
                    raise DownloadError(f"{art.file} was not written by the download")
            ctx.run.artifacts[role] = path
