"""
Planner — turns a validated manifest into an ordered worklist.

One task per source entry, in manifest declaration order.  Entries
whose source id is not ``owner/repo`` never become tasks; they are
collected in ``invalid_sources`` so the caller can warn about them
without aborting the run.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from skillpack.core.data import AGENT_WILDCARD, SUPPORTED_AGENTS
from skillpack.core.models.manifest import SkillpackConfig, SkillSpec
from skillpack.core.models.task import ALL, InstallationTask, NamedSkills, SkillSelector

logger = logging.getLogger(__name__)

_SOURCE_ID_RE = re.compile(r"[A-Za-z0-9_-]+/[A-Za-z0-9_-]+")


@dataclass
class PlanResult:
    """Tasks to run plus the source ids that were rejected."""

    tasks: list[InstallationTask] = field(default_factory=list)
    invalid_sources: list[str] = field(default_factory=list)

    @property
    def total_tasks(self) -> int:
        return len(self.tasks)


def is_valid_source_id(source_id: str) -> bool:
    """Whether ``source_id`` has the ``owner/repo`` form."""
    return _SOURCE_ID_RE.fullmatch(source_id) is not None


def resolve_agents(agents: list[str]) -> tuple[str, ...]:
    """Expand the wildcard to the full catalog, else de-duplicate in order.

    Unknown agent names are passed through; the installer decides
    whether it supports them.
    """
    if AGENT_WILDCARD in agents:
        return SUPPORTED_AGENTS
    return tuple(dict.fromkeys(agents))


def resolve_skills(spec: SkillSpec) -> SkillSelector:
    if spec.all:
        return ALL
    return NamedSkills(tuple(dict.fromkeys(spec.skills)))


def normalize(config: SkillpackConfig) -> PlanResult:
    """Build the ordered task list for a manifest.

    Args:
        config: A manifest that already passed schema validation.

    Returns:
        PlanResult with tasks in declaration order and rejected ids.
    """
    plan = PlanResult()
    agents = resolve_agents(config.agents)

    for source_id, spec in config.skills.items():
        if not is_valid_source_id(source_id):
            logger.debug("Rejecting source '%s': not owner/repo", source_id)
            plan.invalid_sources.append(source_id)
            continue

        plan.tasks.append(
            InstallationTask(
                source_id=source_id,
                skills=resolve_skills(spec),
                agents=agents,
                ref=spec.ref,
            )
        )

    logger.debug(
        "Planned %d task(s), %d invalid source(s)",
        plan.total_tasks,
        len(plan.invalid_sources),
    )
    return plan
