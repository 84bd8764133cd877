"""
Terminal reporter — renders install progress with click.

Thin presentation layer over ``skillpack.core.observability.reporter``.
"""

from __future__ import annotations

import click

from skillpack.core.models.outcome import InstallOutcome
from skillpack.core.models.task import InstallationTask
from skillpack.core.observability.reporter import Reporter


class ClickReporter(Reporter):
    """Human-readable progress on stdout, errors on stderr."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def info(self, message: str) -> None:
        click.secho("ℹ ", fg="blue", nl=False)
        click.echo(message)

    def warning(self, message: str) -> None:
        click.secho(f"⚠️  {message}", fg="yellow")

    def error(self, message: str) -> None:
        click.secho(f"❌ {message}", fg="red", err=True)

    def task_started(self, task: InstallationTask, dry_run: bool) -> None:
        if dry_run:
            return
        ref = f" @ {task.ref}" if task.ref else ""
        click.secho(f"→ Installing {task.source_id}{ref} ({task.skill_label})", fg="cyan")

    def task_finished(
        self,
        task: InstallationTask,
        outcomes: list[InstallOutcome],
        dry_run: bool,
    ) -> None:
        if dry_run:
            # Every outcome carries the same would-be command
            if outcomes and outcomes[0].detail:
                click.secho("ℹ ", fg="blue", nl=False)
                click.echo(outcomes[0].detail.replace("would run:", "Would run:", 1))
            return

        failed = [o for o in outcomes if o.failed]
        if failed:
            click.secho(f"   ✗ Failed: {task.source_id}", fg="red")
            for outcome in failed:
                lines = (outcome.detail or "").split("\n")
                if not self.verbose:
                    lines = lines[:5]
                click.echo(f"     │ {outcome.skill}: {lines[0]}")
                for line in lines[1:]:
                    click.echo(f"     │   {line}")
        elif any(o.ok for o in outcomes):
            click.secho(f"   ✓ Installed {task.source_id}", fg="green")
        else:
            reason = outcomes[0].detail if outcomes and outcomes[0].detail else "skipped"
            click.secho(f"   ⊘ Skipped {task.source_id} ", fg="yellow", nl=False)
            click.echo(f"({reason})")

    def summary(self, installed: int, skipped: int, failed: int) -> None:
        click.echo()
        click.secho("Summary: ", bold=True, nl=False)

        parts = []
        if installed:
            parts.append(click.style(f"{installed} installed", fg="green"))
        if skipped:
            parts.append(click.style(f"{skipped} skipped", fg="yellow"))
        if failed:
            parts.append(click.style(f"{failed} failed", fg="red"))
        if not parts:
            parts.append(click.style("nothing to install", dim=True))

        click.echo(", ".join(parts))
