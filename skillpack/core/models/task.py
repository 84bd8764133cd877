"""
Installation task — one normalized unit of work per manifest source.

Tasks are derived by the planner and never persisted.  The skill
selection is a tagged variant: either every skill in the source
(``AllSkills``) or an ordered set of names (``NamedSkills``).
"""

from __future__ import annotations

from dataclasses import dataclass

ALL_SKILLS_LABEL = "all skills"


@dataclass(frozen=True)
class AllSkills:
    """Select every skill the source provides."""

    @property
    def label(self) -> str:
        return ALL_SKILLS_LABEL


@dataclass(frozen=True)
class NamedSkills:
    """Select specific skills by name (ordered, distinct, non-empty)."""

    names: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.names:
            raise ValueError("NamedSkills requires at least one name")
        if len(set(self.names)) != len(self.names):
            raise ValueError(f"Duplicate skill names: {self.names}")

    @property
    def label(self) -> str:
        return ", ".join(self.names)


SkillSelector = AllSkills | NamedSkills

ALL = AllSkills()


@dataclass(frozen=True)
class InstallationTask:
    """A request to install ``skills`` from ``source_id`` into ``agents``."""

    source_id: str                  # owner/repo
    skills: SkillSelector
    agents: tuple[str, ...]
    ref: str | None = None          # None = latest

    @property
    def skill_label(self) -> str:
        """Human-readable skill selection ("all skills" or "a, b")."""
        return self.skills.label

    @property
    def skill_names(self) -> tuple[str, ...]:
        """Requested names, empty when every skill is selected."""
        if isinstance(self.skills, NamedSkills):
            return self.skills.names
        return ()
