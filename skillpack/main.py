"""
skillpack — CLI entrypoint.

Usage:
    skillpack --help
    skillpack init
    skillpack install --dry-run
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from skillpack import __version__
from skillpack.core.observability.logging_config import (
    LOG_FILE_ENV,
    LOG_FILE_LEVEL_ENV,
    resolve_level,
    setup_logging,
)


def _configure_logging(ctx: click.Context, verbose: bool = False) -> None:
    setup_logging(
        level=resolve_level(
            debug=ctx.obj["debug"],
            verbose=verbose,
            quiet=ctx.obj["quiet"],
        ),
        log_file=os.environ.get(LOG_FILE_ENV),
        log_file_level=os.environ.get(LOG_FILE_LEVEL_ENV),
    )


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="skillpack")
@click.option("--quiet", "-q", is_flag=True, help="Only log errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.pass_context
def cli(ctx: click.Context, quiet: bool, debug: bool) -> None:
    """skillpack — batch install skills.sh skills into your AI agents."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug

    _configure_logging(ctx)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)


@cli.command()
@click.option("--dry-run", is_flag=True, help="Show what would be installed without installing.")
@click.option("--force", is_flag=True, help="Reinstall even if already present.")
@click.option("--verbose", "-v", is_flag=True, help="Detailed output.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to skillpack.yaml (default: search upward from cwd).",
)
@click.option("--no-lock", is_flag=True, help="Ignore the lockfile and install latest.")
@click.option("--global", "-g", "global_scope", is_flag=True, help="Install skills globally.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def install(
    ctx: click.Context,
    dry_run: bool,
    force: bool,
    verbose: bool,
    config_path: Path | None,
    no_lock: bool,
    global_scope: bool,
    as_json: bool,
) -> None:
    """Install all skills from skillpack.yaml.

    Examples:

        skillpack install

        skillpack install --dry-run

        skillpack install --force --config ./team/skillpack.yaml
    """
    from skillpack.core.observability.reporter import NullReporter
    from skillpack.core.use_cases.install import InstallOptions, run_install
    from skillpack.ui.cli.reporter import ClickReporter

    if verbose:
        _configure_logging(ctx, verbose=True)

    options = InstallOptions(
        config_path=config_path,
        dry_run=dry_run,
        force=force,
        no_lock=no_lock,
        global_scope=global_scope,
    )

    if as_json:
        result = run_install(options, reporter=NullReporter())
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(result.exit_code)

    if dry_run:
        click.secho("[dry-run] Nothing will be installed.", fg="yellow")

    result = run_install(options, reporter=ClickReporter(verbose=verbose))
    sys.exit(result.exit_code)


@cli.command()
@click.option("--force", is_flag=True, help="Overwrite existing skillpack.yaml.")
def init(force: bool) -> None:
    """Create a skillpack.yaml template in the current directory."""
    from skillpack.core.use_cases.init import init_manifest

    result = init_manifest(force=force)

    if result.error:
        click.secho(f"⚠️  {result.error}", fg="yellow")
        sys.exit(1)

    label = "Overwrote" if result.overwritten else "Created"
    click.secho(f"✅ {label} {result.path.name}", fg="green")
    click.echo("   Edit the file to add your skills, then run: skillpack install")


if __name__ == "__main__":
    cli()
