"""
Lockfile model — the installation ledger.

Serialized to ``skillpack.lock`` next to the manifest:

    {
      "generated": "2026-01-01T00:00:00+00:00",
      "installations": {
        "owner/repo": {
          "commit": "...",
          "skills": ["a", "b"],
          "agents": ["claude-code"],
          "installedAt": "2026-01-01T00:00:00+00:00"
        }
      }
    }

One entry per source.  A request for every skill is recorded with an
empty ``skills`` list, so an "all" request is never considered
satisfied by a previous run.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class LockfileEntry(BaseModel):
    """What was installed from one source."""

    commit: str
    skills: list[str] = Field(default_factory=list)
    agents: list[str] = Field(default_factory=list)
    installed_at: str | None = Field(default=None, alias="installedAt")

    model_config = ConfigDict(populate_by_name=True)


class Lockfile(BaseModel):
    """Root ledger model — serialized to skillpack.lock.

    ``generated`` records when the ledger was first created and is
    never re-stamped.
    """

    generated: str = Field(default_factory=_now_iso)
    installations: dict[str, LockfileEntry] = Field(default_factory=dict)

    def get(self, source_id: str) -> LockfileEntry | None:
        """Look up the entry for a source."""
        return self.installations.get(source_id)

    def with_entry(self, source_id: str, entry: LockfileEntry) -> Lockfile:
        """Return a copy with ``source_id`` replaced by ``entry``.

        Other sources are carried over untouched, in their original order.
        """
        installations = dict(self.installations)
        installations[source_id] = entry
        return self.model_copy(update={"installations": installations})

    def to_json_dict(self) -> dict:
        """Serialize using the on-disk key names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def create_lockfile() -> Lockfile:
    """A fresh, empty ledger stamped with the current time."""
    return Lockfile()
