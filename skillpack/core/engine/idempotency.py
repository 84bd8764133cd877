"""
Idempotency check — is a task already covered by the lockfile?

Pure function over an immutable lockfile snapshot.  A request for
every skill in a source is never considered satisfied: the recorded
set is finite and the source may have gained skills since.
"""

from __future__ import annotations

from collections.abc import Iterable

from skillpack.core.models.lockfile import Lockfile
from skillpack.core.models.task import AllSkills, SkillSelector


def is_satisfied(
    lockfile: Lockfile | None,
    source_id: str,
    skills: SkillSelector,
    agents: Iterable[str],
) -> bool:
    """Whether a previous install of ``source_id`` covers this request.

    True iff the lockfile has an entry for the source whose recorded
    skills contain every requested skill and whose recorded agents
    contain every requested agent.  Extra recorded items do not matter.
    """
    if lockfile is None:
        return False

    entry = lockfile.get(source_id)
    if entry is None:
        return False

    if isinstance(skills, AllSkills):
        return False

    return set(skills.names) <= set(entry.skills) and set(agents) <= set(entry.agents)
