"""
Domain models — manifest schema, tasks, outcomes and the lockfile.

All models are re-exported here for convenient access:

    from skillpack.core.models import SkillpackConfig, InstallationTask, Lockfile
"""

from skillpack.core.models.lockfile import Lockfile, LockfileEntry, create_lockfile
from skillpack.core.models.manifest import SkillpackConfig, SkillSpec
from skillpack.core.models.outcome import InstallOutcome, OutcomeStatus
from skillpack.core.models.task import (
    ALL,
    ALL_SKILLS_LABEL,
    AllSkills,
    InstallationTask,
    NamedSkills,
    SkillSelector,
)

__all__ = [
    # lockfile.py
    "Lockfile",
    "LockfileEntry",
    "create_lockfile",
    # manifest.py
    "SkillSpec",
    "SkillpackConfig",
    # outcome.py
    "InstallOutcome",
    "OutcomeStatus",
    # task.py
    "ALL",
    "ALL_SKILLS_LABEL",
    "AllSkills",
    "InstallationTask",
    "NamedSkills",
    "SkillSelector",
]
