"""
Task executor — runs one installation task through the installer.

Each task becomes exactly one installer invocation, whatever the
number of requested skills.  The invocation's observed result is
classified as installed / skipped / failure, transient failures are
retried according to the ``RetryPolicy``, and the final status is
fanned out to one outcome per requested skill so the summary reads
per skill.

Flow:
    task → build args → (dry run? describe : invoke → classify → retry?) → outcomes
"""

from __future__ import annotations

import logging
import shlex
import time
from collections.abc import Callable
from dataclasses import dataclass

from skillpack.adapters.base import CommandResult, InstallerAdapter
from skillpack.core.models.outcome import InstallOutcome, OutcomeStatus
from skillpack.core.models.task import InstallationTask, NamedSkills
from skillpack.core.reliability.retry_policy import RetryPolicy

logger = logging.getLogger(__name__)

# Wall-clock limit for a single installer invocation, in seconds
INSTALL_TIMEOUT = 120

# Installer output that means "nothing to do" (matched case-insensitively)
ALREADY_INSTALLED_MARKER = "already installed"


@dataclass(frozen=True)
class Attempt:
    """Classification of one installer invocation."""

    status: OutcomeStatus
    detail: str | None = None

    @property
    def failed(self) -> bool:
        return self.status == "failed"


def build_install_args(task: InstallationTask, global_scope: bool = False) -> list[str]:
    """Arguments for ``skills``: add, source, confirm, [global], agents, [skills].

    Skill flags are omitted when every skill is requested.
    """
    args = ["add", task.source_id, "-y"]

    if global_scope:
        args.append("-g")

    for agent in task.agents:
        args.extend(["-a", agent])

    for skill in task.skill_names:
        args.extend(["-s", skill])

    return args


def classify(result: CommandResult) -> Attempt:
    """Map an installer result to installed / skipped / failed."""
    if result.error is not None:
        return Attempt("failed", result.error)

    if result.ok:
        return Attempt("installed")

    if ALREADY_INSTALLED_MARKER in result.combined_output.lower():
        return Attempt("skipped", ALREADY_INSTALLED_MARKER)

    return Attempt("failed", result.stderr or result.stdout or f"exit code {result.exit_code}")


class TaskExecutor:
    """Execute installation tasks sequentially through an adapter.

    Args:
        adapter: Installer backend (default: the skills CLI via npx).
        policy: Retry policy for transient failures.
        sleep: Called with the backoff delay between attempts.
        timeout: Per-invocation timeout in seconds.
    """

    def __init__(
        self,
        adapter: InstallerAdapter | None = None,
        policy: RetryPolicy | None = None,
        sleep: Callable[[float], None] = time.sleep,
        timeout: float = INSTALL_TIMEOUT,
    ):
        if adapter is None:
            from skillpack.adapters.skills_cli import SkillsCliAdapter

            adapter = SkillsCliAdapter()
        self.adapter = adapter
        self.policy = policy or RetryPolicy()
        self._sleep = sleep
        self._timeout = timeout

    def command_line(self, task: InstallationTask, global_scope: bool = False) -> str:
        """The full installer command for ``task``, shell-quoted."""
        return self.adapter.command_line(build_install_args(task, global_scope))

    def execute(
        self,
        task: InstallationTask,
        dry_run: bool = False,
        global_scope: bool = False,
    ) -> list[InstallOutcome]:
        """Install ``task`` and return one outcome per requested skill.

        Never raises for installer failures; they come back as
        ``failed`` outcomes.
        """
        args = build_install_args(task, global_scope)

        if dry_run:
            attempt = Attempt("skipped", f"would run: {self.adapter.command_line(args)}")
        else:
            if task.ref:
                logger.info("%s is pinned to %s", task.source_id, task.ref)
            attempt = self._run_with_retry(task, args)

        return _fan_out(task, attempt)

    def provenance(self, task: InstallationTask) -> str:
        """Provenance marker to record for a successful install of ``task``."""
        return self.adapter.resolve_commit(task.source_id)

    def _run_with_retry(self, task: InstallationTask, args: list[str]) -> Attempt:
        attempt_no = 0
        while True:
            attempt_no += 1
            logger.info("Running: %s", self.adapter.command_line(args))
            result = self.adapter.run(args, timeout=self._timeout)
            logger.debug(
                "%s exited %s after %dms",
                shlex.join(result.command),
                result.exit_code if result.error is None else result.error,
                result.duration_ms,
            )
            attempt = classify(result)

            if not attempt.failed:
                return attempt

            if not self.policy.should_retry(attempt_no, attempt.detail):
                if attempt_no > 1:
                    logger.warning(
                        "%s failed after %d attempts: %s",
                        task.source_id,
                        attempt_no,
                        attempt.detail,
                    )
                return attempt

            logger.info(
                "Retrying %s (attempt %d/%d) after transient error: %s",
                task.source_id,
                attempt_no + 1,
                self.policy.max_attempts,
                attempt.detail,
            )
            self._sleep(self.policy.delay)


def _fan_out(task: InstallationTask, attempt: Attempt) -> list[InstallOutcome]:
    labels = task.skills.names if isinstance(task.skills, NamedSkills) else (task.skill_label,)
    return [
        InstallOutcome(
            source_id=task.source_id,
            skill=label,
            status=attempt.status,
            detail=attempt.detail,
        )
        for label in labels
    ]
