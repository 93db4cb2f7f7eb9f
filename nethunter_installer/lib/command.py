from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Mapping, Sequence

from ..errors import CommandError, ToolNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def output(self) -> str:
        """stdout and stderr joined; fastboot reports most things on stderr."""
        return "\n".join(s for s in (self.stdout, self.stderr) if s)


def _fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    env: Mapping[str, str] | None = None,
    cwd: str | None = None,
    timeout: float | None = None,
) -> CmdResult:
    """Run a command with consistent logging.

    - Always logs the command.
    - Captures stdout/stderr; both are logged at DEBUG.
    - A missing executable raises ToolNotFoundError, a non-zero exit
      CommandError (when check is set).
    """

    argv_list = list(argv)
    logger.info("CMD %s", _fmt_argv(argv_list))

    try:
        p = subprocess.run(
            argv_list,
            text=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            cwd=cwd,
            env=dict(os.environ, **(env or {})),
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise ToolNotFoundError(f"{argv_list[0]}: executable not found") from e
    except PermissionError as e:
        raise ToolNotFoundError(f"{argv_list[0]}: not executable") from e
    except subprocess.TimeoutExpired as e:
        raise CommandError(f"Command timed out after {timeout}s: {_fmt_argv(argv_list)}") from e

    if p.stdout:
        logger.debug("STDOUT %s", p.stdout.strip())
    if p.stderr:
        logger.debug("STDERR %s", p.stderr.strip())

    if check and p.returncode != 0:
        detail = (p.stderr or p.stdout or "").strip()
        raise CommandError(
            f"Command failed ({p.returncode}): {_fmt_argv(argv_list)}\n{detail}",
            returncode=p.returncode,
            stderr=p.stderr or "",
        )

    return CmdResult(argv=argv_list, returncode=p.returncode, stdout=p.stdout or "", stderr=p.stderr or "")
