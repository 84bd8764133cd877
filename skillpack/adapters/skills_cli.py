"""
skills CLI adapter — runs ``npx skills <args>`` and captures its output.

This is the SINGLE PLACE where the installer process is spawned.
"""

from __future__ import annotations

import logging
import os
import subprocess
import time

from skillpack.adapters.base import CommandResult, InstallerAdapter

logger = logging.getLogger(__name__)

# Overrides the npx executable (name on PATH or absolute path)
NPX_ENV_VAR = "SKILLPACK_NPX"


class SkillsCliAdapter(InstallerAdapter):
    """Invoke the skills.sh CLI through npx."""

    def __init__(self, npx: str | None = None):
        self._npx = npx or os.environ.get(NPX_ENV_VAR) or "npx"

    @property
    def name(self) -> str:
        return "skills-cli"

    @property
    def program(self) -> list[str]:
        return [self._npx, "skills"]

    def run(self, args: list[str], timeout: float) -> CommandResult:
        cmd = [*self.program, *args]
        logger.debug("Executing: %s (timeout=%ss)", self.command_line(args), timeout)
        start = time.monotonic()

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                encoding="utf-8",
                errors="replace",   # installer output is not guaranteed UTF-8
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            return CommandResult(
                command=cmd,
                error=f"timeout: installer did not finish within {timeout:g}s",
                duration_ms=_elapsed_ms(start),
            )
        except OSError as e:
            return CommandResult(
                command=cmd,
                error=f"failed to start {self._npx}: {e}",
                duration_ms=_elapsed_ms(start),
            )

        return CommandResult(
            command=cmd,
            exit_code=result.returncode,
            stdout=(result.stdout or "").strip(),
            stderr=(result.stderr or "").strip(),
            duration_ms=_elapsed_ms(start),
        )


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)
