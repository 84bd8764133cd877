"""
Adapter base — the contract between the engine and the installer tool.

The engine never spawns processes itself.  It hands an argument list
to an ``InstallerAdapter`` and gets a ``CommandResult`` back.  Adapters
never raise: spawn errors and timeouts are captured in the result.
"""

from __future__ import annotations

import shlex
import time
from abc import ABC, abstractmethod

from pydantic import BaseModel, Field


class CommandResult(BaseModel):
    """Observed result of one installer invocation.

    ``error`` is set when the process could not run to completion
    (missing executable, timeout); ``exit_code`` is then None.
    """

    command: list[str] = Field(default_factory=list)
    exit_code: int | None = None
    stdout: str = ""
    stderr: str = ""
    error: str | None = None
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        """Whether the process ran and exited 0."""
        return self.error is None and self.exit_code == 0

    @property
    def combined_output(self) -> str:
        return self.stdout + self.stderr


class InstallerAdapter(ABC):
    """Abstract base class for installer backends.

    To create a new adapter:
        1. Subclass InstallerAdapter
        2. Implement name, program, run
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'skills-cli', 'mock')."""

    @property
    @abstractmethod
    def program(self) -> list[str]:
        """Executable and fixed leading arguments, e.g. ``["npx", "skills"]``."""

    @abstractmethod
    def run(self, args: list[str], timeout: float) -> CommandResult:
        """Invoke the tool with ``args`` appended to ``program``.

        MUST never raise exceptions.  Spawn failures and timeouts are
        reported through ``CommandResult.error``.
        """

    def command_line(self, args: list[str]) -> str:
        """Shell-style rendering of the full command, for logs and dry runs."""
        return shlex.join([*self.program, *args])

    def resolve_commit(self, source_id: str) -> str:
        """Provenance marker recorded in the lockfile for ``source_id``.

        The skills CLI does not report what it fetched, so the default
        is a timestamp surrogate.  Adapters that can see the installed
        revision should override this.
        """
        return f"installed-{int(time.time() * 1000)}"

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
