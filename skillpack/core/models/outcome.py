"""
Install outcome — the per-skill result of a task.

Outcomes feed the run summary and the ``--json`` report.  They are
never persisted.  Failures are data here, not exceptions: the executor
always returns outcomes, whatever the installer did.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

OutcomeStatus = Literal["installed", "skipped", "failed"]


class InstallOutcome(BaseModel):
    """Result of installing one skill (or "all skills") from a source."""

    source_id: str
    skill: str                      # skill name or "all skills"
    status: OutcomeStatus
    detail: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the installer reported a fresh install."""
        return self.status == "installed"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @classmethod
    def skipped(cls, source_id: str, skill: str, reason: str = "") -> InstallOutcome:
        """A skip that never reached the installer."""
        return cls(source_id=source_id, skill=skill, status="skipped", detail=reason or None)
