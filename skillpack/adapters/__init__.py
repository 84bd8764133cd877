"""Adapters — bindings for the external installer tool.

Public re-exports for convenient access.
"""

from skillpack.adapters.base import CommandResult, InstallerAdapter
from skillpack.adapters.mock import MockInstaller
from skillpack.adapters.skills_cli import SkillsCliAdapter

__all__ = [
    "CommandResult",
    "InstallerAdapter",
    "MockInstaller",
    "SkillsCliAdapter",
]
