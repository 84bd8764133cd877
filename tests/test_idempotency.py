"""
Tests for the idempotency check against the lockfile.
"""

import pytest

from skillpack.core.engine.idempotency import is_satisfied
from skillpack.core.models.lockfile import Lockfile, LockfileEntry, create_lockfile
from skillpack.core.models.task import ALL, NamedSkills


def _lockfile(skills: list[str], agents: list[str], source_id: str = "org/repo") -> Lockfile:
    return create_lockfile().with_entry(
        source_id,
        LockfileEntry(commit="abc", skills=skills, agents=agents),
    )


class TestIsSatisfied:
    def test_no_lockfile(self):
        assert not is_satisfied(None, "org/repo", NamedSkills(("skill1",)), ["claude-code"])

    def test_source_not_recorded(self):
        assert not is_satisfied(create_lockfile(), "org/repo", NamedSkills(("skill1",)), ["claude-code"])

    def test_other_source_recorded(self):
        lockfile = _lockfile(["skill1"], ["claude-code"], source_id="org/other")
        assert not is_satisfied(lockfile, "org/repo", NamedSkills(("skill1",)), ["claude-code"])

    def test_subset_is_satisfied(self):
        lockfile = _lockfile(["skill1", "skill2"], ["claude-code", "cursor"])
        assert is_satisfied(lockfile, "org/repo", NamedSkills(("skill1",)), ["claude-code"])

    def test_exact_match_is_satisfied(self):
        lockfile = _lockfile(["skill1", "skill2"], ["claude-code"])
        assert is_satisfied(lockfile, "org/repo", NamedSkills(("skill2", "skill1")), ["claude-code"])

    def test_missing_agent(self):
        lockfile = _lockfile(["skill1"], ["claude-code"])
        assert not is_satisfied(lockfile, "org/repo", NamedSkills(("skill1",)), ["cursor"])

    def test_missing_skill(self):
        lockfile = _lockfile(["skill1"], ["claude-code"])
        assert not is_satisfied(lockfile, "org/repo", NamedSkills(("skill2",)), ["claude-code"])

    def test_extra_requested_skill(self):
        lockfile = _lockfile(["skill1"], ["claude-code"])
        assert not is_satisfied(
            lockfile, "org/repo", NamedSkills(("skill1", "skill2")), ["claude-code"]
        )

    def test_extra_requested_agent(self):
        lockfile = _lockfile(["skill1"], ["claude-code"])
        assert not is_satisfied(
            lockfile, "org/repo", NamedSkills(("skill1",)), ["claude-code", "cursor"]
        )

    @pytest.mark.parametrize(
        "recorded_skills",
        [[], ["skill1"], ["skill1", "skill2", "skill3"]],
    )
    def test_all_never_satisfied(self, recorded_skills: list[str]):
        lockfile = _lockfile(recorded_skills, ["claude-code", "cursor"])
        assert not is_satisfied(lockfile, "org/repo", ALL, ["claude-code"])

    def test_does_not_mutate(self):
        lockfile = _lockfile(["skill1"], ["claude-code"])
        before = lockfile.model_dump()
        is_satisfied(lockfile, "org/repo", NamedSkills(("skill1",)), ["claude-code"])
        assert lockfile.model_dump() == before
