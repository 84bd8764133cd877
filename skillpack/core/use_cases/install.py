"""
Install use case — the run coordinator.

Loads the manifest, plans tasks, drops the ones the lockfile already
covers, runs the rest through the task executor one at a time, merges
successes into the lockfile and writes it once at the end.

Phases:
    LOADING → NORMALIZING → FILTERING → EXECUTING → MERGING → SUMMARIZING → DONE
    LOADING / NORMALIZING → ABORTED   (missing/invalid manifest, nothing to do)

Configuration problems stop the run before any installer process is
started.  Everything after that is scoped to its task: a failed task
is reported in the summary and never stops its siblings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path

from skillpack.core.config.loader import MANIFEST_FILE, ConfigError, find_manifest, load_manifest
from skillpack.core.engine.executor import TaskExecutor
from skillpack.core.engine.idempotency import is_satisfied
from skillpack.core.engine.planner import normalize
from skillpack.core.models.lockfile import Lockfile, LockfileEntry, create_lockfile
from skillpack.core.models.outcome import InstallOutcome
from skillpack.core.models.task import InstallationTask
from skillpack.core.observability.reporter import NullReporter, Reporter
from skillpack.core.persistence.lockfile import load_lockfile, lockfile_path, save_lockfile

logger = logging.getLogger(__name__)

SKIP_REASON_LOCKED = "already in lockfile"


class RunPhase(str, Enum):
    LOADING = "loading"
    NORMALIZING = "normalizing"
    FILTERING = "filtering"
    EXECUTING = "executing"
    MERGING = "merging"
    SUMMARIZING = "summarizing"
    DONE = "done"
    ABORTED = "aborted"


@dataclass
class InstallOptions:
    """Flags for an install run (mirrors the CLI)."""

    config_path: Path | None = None
    dry_run: bool = False
    force: bool = False
    no_lock: bool = False
    global_scope: bool = False
    start_dir: Path | None = None   # where manifest discovery begins (default: cwd)


@dataclass
class InstallResult:
    """Result of an install run."""

    phase: RunPhase = RunPhase.LOADING
    config_path: Path | None = None
    lockfile_path: Path | None = None
    agents: list[str] = field(default_factory=list)
    tasks: list[InstallationTask] = field(default_factory=list)
    invalid_sources: list[str] = field(default_factory=list)
    outcomes: list[InstallOutcome] = field(default_factory=list)
    lockfile_written: bool = False
    dry_run: bool = False
    error: str | None = None

    @property
    def installed(self) -> int:
        return sum(1 for o in self.outcomes if o.status == "installed")

    @property
    def skipped(self) -> int:
        return sum(1 for o in self.outcomes if o.status == "skipped")

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if o.status == "failed")

    @property
    def failures(self) -> list[InstallOutcome]:
        return [o for o in self.outcomes if o.failed]

    @property
    def exit_code(self) -> int:
        """0 on success (including nothing to do), 1 otherwise."""
        if self.error or self.failed:
            return 1
        if self.phase is RunPhase.ABORTED and self.invalid_sources:
            # Sources were declared but none of them could be used
            return 1
        return 0

    def to_dict(self) -> dict:
        result: dict = {"phase": self.phase.value, "exit_code": self.exit_code}
        if self.error:
            result["error"] = self.error
            if self.phase is RunPhase.ABORTED:
                return result

        result["config_path"] = str(self.config_path) if self.config_path else None
        result["lockfile_path"] = str(self.lockfile_path) if self.lockfile_path else None
        result["lockfile_written"] = self.lockfile_written
        result["dry_run"] = self.dry_run
        result["agents"] = self.agents
        result["invalid_sources"] = self.invalid_sources
        result["summary"] = {
            "installed": self.installed,
            "skipped": self.skipped,
            "failed": self.failed,
        }
        result["outcomes"] = [o.model_dump(mode="json") for o in self.outcomes]
        return result


def run_install(
    options: InstallOptions,
    reporter: Reporter | None = None,
    executor: TaskExecutor | None = None,
) -> InstallResult:
    """Install every skill the manifest asks for.

    Args:
        options: Run flags.
        reporter: Progress sink (default: discard).
        executor: Task executor (default: the skills CLI via npx).

    Returns:
        InstallResult.  Configuration failures are reported through
        ``error`` rather than raised.
    """
    reporter = reporter or NullReporter()
    executor = executor or TaskExecutor()
    result = InstallResult(dry_run=options.dry_run)

    # ── Load manifest ────────────────────────────────────────────
    config_path = options.config_path or find_manifest(options.start_dir)
    if config_path is None:
        return _abort(result, reporter, f"No {MANIFEST_FILE} found. Run 'skillpack init' to create one.")

    try:
        config = load_manifest(config_path)
    except ConfigError as e:
        return _abort(result, reporter, str(e))

    result.config_path = config_path
    logger.info("Using config: %s", config_path)

    # ── Normalize ────────────────────────────────────────────────
    _enter(result, RunPhase.NORMALIZING)
    plan = normalize(config)
    result.tasks = plan.tasks
    result.invalid_sources = plan.invalid_sources
    result.agents = list(plan.tasks[0].agents) if plan.tasks else list(config.agents)

    for source_id in plan.invalid_sources:
        reporter.warning(f'Invalid repo format: "{source_id}". Expected "owner/repo" format.')

    if not plan.tasks:
        reporter.warning(
            f"No valid skill sources in {MANIFEST_FILE}"
            if plan.invalid_sources
            else f"No skills defined in {MANIFEST_FILE}"
        )
        _enter(result, RunPhase.ABORTED)
        return result

    reporter.info(
        f"Found {plan.total_tasks} skill source(s) for agents: {', '.join(result.agents)}"
    )

    # ── Filter against the lockfile ──────────────────────────────
    _enter(result, RunPhase.FILTERING)
    global_scope = options.global_scope or config.global_
    result.lockfile_path = lockfile_path(config_path)

    snapshot: Lockfile | None = None
    if not options.no_lock:
        snapshot = load_lockfile(result.lockfile_path)
        if snapshot is not None:
            logger.info("Using existing lockfile %s", result.lockfile_path)

    pending: list[InstallationTask] = []
    for task in plan.tasks:
        if not options.force and is_satisfied(snapshot, task.source_id, task.skills, task.agents):
            reporter.info(f"Skipping {task.source_id} ({task.skill_label}) - already installed")
            result.outcomes.extend(
                InstallOutcome.skipped(task.source_id, label, SKIP_REASON_LOCKED)
                for label in (task.skill_names or (task.skill_label,))
            )
            continue
        pending.append(task)

    # ── Execute, one task at a time ──────────────────────────────
    _enter(result, RunPhase.EXECUTING)
    succeeded: list[InstallationTask] = []
    for task in pending:
        reporter.task_started(task, options.dry_run)
        outcomes = executor.execute(task, dry_run=options.dry_run, global_scope=global_scope)
        result.outcomes.extend(outcomes)
        reporter.task_finished(task, outcomes, options.dry_run)

        if not options.dry_run and any(o.ok for o in outcomes):
            succeeded.append(task)

    # ── Merge successes into the lockfile ────────────────────────
    _enter(result, RunPhase.MERGING)
    working = snapshot.model_copy(deep=True) if snapshot is not None else create_lockfile()
    for task in succeeded:
        working = _merge(working, task, executor.provenance(task))

    # ── Summarize + persist ──────────────────────────────────────
    _enter(result, RunPhase.SUMMARIZING)
    if not options.dry_run and not options.no_lock:
        try:
            save_lockfile(working, result.lockfile_path)
        except OSError as e:
            # The summary below is still reported
            result.error = f"Failed to write {result.lockfile_path.name}: {e}"
            reporter.error(result.error)
        else:
            result.lockfile_written = True
            logger.info("Updated %s", result.lockfile_path)

    reporter.summary(result.installed, result.skipped, result.failed)
    _enter(result, RunPhase.DONE)
    return result


def _merge(lockfile: Lockfile, task: InstallationTask, commit: str) -> Lockfile:
    """Replace the lockfile entry for ``task`` with what was just installed.

    A request for every skill is recorded with an empty skill list.
    """
    logger.debug("Recording %s (commit=%s)", task.source_id, commit)
    entry = LockfileEntry(
        commit=commit,
        skills=list(task.skill_names),
        agents=list(task.agents),
        installed_at=datetime.now(UTC).isoformat(),
    )
    return lockfile.with_entry(task.source_id, entry)


def _abort(result: InstallResult, reporter: Reporter, message: str) -> InstallResult:
    result.error = message
    reporter.error(message)
    _enter(result, RunPhase.ABORTED)
    return result


def _enter(result: InstallResult, phase: RunPhase) -> None:
    logger.debug("Phase: %s → %s", result.phase.value, phase.value)
    result.phase = phase
