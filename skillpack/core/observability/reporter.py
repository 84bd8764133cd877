"""
Reporter — the install use case's only channel to the user.

The use case never prints.  It calls a ``Reporter``; the CLI passes a
terminal implementation, tests and ``--json`` mode pass
``NullReporter`` (or a recording subclass).
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from skillpack.core.models.outcome import InstallOutcome
from skillpack.core.models.task import InstallationTask


class Reporter(ABC):
    """Progress and result sink for an install run."""

    @abstractmethod
    def info(self, message: str) -> None:
        """General progress message."""

    @abstractmethod
    def warning(self, message: str) -> None:
        """Something the user should fix, but the run continues."""

    @abstractmethod
    def error(self, message: str) -> None:
        """Something that stopped the run."""

    @abstractmethod
    def task_started(self, task: InstallationTask, dry_run: bool) -> None:
        """A task is about to be handed to the installer."""

    @abstractmethod
    def task_finished(
        self,
        task: InstallationTask,
        outcomes: list[InstallOutcome],
        dry_run: bool,
    ) -> None:
        """A task has finished (any status)."""

    @abstractmethod
    def summary(self, installed: int, skipped: int, failed: int) -> None:
        """Final tally for the run."""


class NullReporter(Reporter):
    """Reporter that discards everything."""

    def info(self, message: str) -> None:
        pass

    def warning(self, message: str) -> None:
        pass

    def error(self, message: str) -> None:
        pass

    def task_started(self, task: InstallationTask, dry_run: bool) -> None:
        pass

    def task_finished(
        self,
        task: InstallationTask,
        outcomes: list[InstallOutcome],
        dry_run: bool,
    ) -> None:
        pass

    def summary(self, installed: int, skipped: int, failed: int) -> None:
        pass
