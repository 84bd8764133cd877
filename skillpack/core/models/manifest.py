"""
Manifest model — the declarative shape of skillpack.yaml.

A manifest names the target agents and, per source repository, which
skills to install:

    agents: [claude-code, cursor]
    skills:
      owner/repo: all                       # every skill in the repo
      owner/other: [skill-a, skill-b]       # specific skills
      owner/pinned:                         # pinned ref
        ref: v1.0.0
        skills: [skill-c]

Shape rules are enforced here.  Source id format is NOT checked by the
schema: malformed ids are reported per entry by the planner so that one
bad key does not reject the whole file.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

ALL_SKILLS_TOKEN = "all"


class SkillSpec(BaseModel):
    """One entry of the ``skills`` mapping, normalized to object form.

    Accepts the three YAML spellings (``"all"``, a list of names, or a
    ``{ref, skills}`` mapping) and stores them uniformly.
    """

    all: bool = False
    ref: str | None = None
    skills: list[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="before")
    @classmethod
    def _normalize_shorthand(cls, data: Any) -> Any:
        if data == ALL_SKILLS_TOKEN:
            return {"all": True}
        if isinstance(data, list):
            return {"skills": data}
        if isinstance(data, dict):
            # ``all`` is only reachable through the bare "all" spelling
            if "all" in data:
                raise ValueError(
                    f"unknown key 'all'; write `owner/repo: {ALL_SKILLS_TOKEN}` "
                    "to install every skill"
                )
            return data
        raise ValueError(
            f"expected '{ALL_SKILLS_TOKEN}', a list of skill names, "
            "or a mapping with 'skills' (and optional 'ref')"
        )

    @model_validator(mode="after")
    def _require_skills(self) -> SkillSpec:
        if not self.all and not self.skills:
            raise ValueError("at least one skill must be listed")
        return self


class SkillpackConfig(BaseModel):
    """Root manifest model — loaded from skillpack.yaml."""

    agents: list[str] = Field(min_length=1)
    skills: dict[str, SkillSpec]
    global_: bool = Field(default=False, alias="global")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("agents", mode="before")
    @classmethod
    def _wrap_single_agent(cls, value: Any) -> Any:
        # ``agents: "*"`` is accepted as shorthand for ``agents: ["*"]``
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("agents")
    @classmethod
    def _reject_blank_agents(cls, value: list[str]) -> list[str]:
        if any(not agent.strip() for agent in value):
            raise ValueError("agent names must not be empty")
        return value
