"""
Tests for the CLI commands — invoked through click's CliRunner.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from skillpack.adapters.mock import MockInstaller
from skillpack.core.engine.executor import TaskExecutor
from skillpack.main import cli

MANIFEST = """\
    agents: [claude-code]
    skills:
      acme/tools: [lint, format]
"""


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def in_tmp(tmp_path: Path, monkeypatch) -> Path:
    """Run the command from an empty temporary directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def patched_executor(mock_installer: MockInstaller):
    """Make run_install use the mock installer instead of npx."""
    with patch(
        "skillpack.core.use_cases.install.TaskExecutor",
        lambda: TaskExecutor(adapter=mock_installer, sleep=lambda s: None),
    ):
        yield mock_installer


class TestCliBasics:
    """Basic CLI invocation tests."""

    def test_no_args_shows_help(self, runner):
        result = runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "install" in result.output
        assert "init" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "skills.sh" in result.output

    def test_install_help_lists_flags(self, runner):
        result = runner.invoke(cli, ["install", "--help"])
        assert result.exit_code == 0
        for flag in ("--dry-run", "--force", "--verbose", "--config", "--no-lock", "--global", "--json"):
            assert flag in result.output


class TestInitCommand:
    def test_creates_manifest(self, runner, in_tmp: Path):
        result = runner.invoke(cli, ["init"])
        assert result.exit_code == 0
        assert "Created skillpack.yaml" in result.output
        content = (in_tmp / "skillpack.yaml").read_text()
        assert "agents:" in content
        assert "skills:" in content

    def test_refuses_to_overwrite(self, runner, in_tmp: Path):
        (in_tmp / "skillpack.yaml").write_text("mine\n")
        result = runner.invoke(cli, ["init"])
        assert result.exit_code == 1
        assert "already exists" in result.output
        assert (in_tmp / "skillpack.yaml").read_text() == "mine\n"

    def test_force_overwrites(self, runner, in_tmp: Path):
        (in_tmp / "skillpack.yaml").write_text("mine\n")
        result = runner.invoke(cli, ["init", "--force"])
        assert result.exit_code == 0
        assert "Overwrote" in result.output
        assert (in_tmp / "skillpack.yaml").read_text() != "mine\n"

    def test_template_is_installable(self, runner, in_tmp: Path, patched_executor):
        runner.invoke(cli, ["init"])
        result = runner.invoke(cli, ["install", "--dry-run"])
        assert result.exit_code == 0
        assert patched_executor.call_count == 0


class TestInstallCommand:
    def test_missing_config(self, runner, tmp_path: Path, patched_executor):
        result = runner.invoke(cli, ["install", "--config", str(tmp_path / "nope.yaml")])
        assert result.exit_code == 1
        assert "not found" in result.output
        assert patched_executor.call_count == 0

    def test_install(self, runner, write_manifest, patched_executor):
        manifest = write_manifest(MANIFEST)
        result = runner.invoke(cli, ["install", "--config", str(manifest)])
        assert result.exit_code == 0, result.output
        assert "Installing acme/tools (lint, format)" in result.output
        assert "✓ Installed acme/tools" in result.output
        assert "2 installed" in result.output
        assert (manifest.parent / "skillpack.lock").is_file()

    def test_second_run_skips(self, runner, write_manifest, patched_executor):
        manifest = write_manifest(MANIFEST)
        runner.invoke(cli, ["install", "--config", str(manifest)])
        result = runner.invoke(cli, ["install", "--config", str(manifest)])
        assert result.exit_code == 0
        assert "already installed" in result.output
        assert "2 skipped" in result.output
        assert patched_executor.call_count == 1

    def test_dry_run(self, runner, write_manifest, patched_executor):
        manifest = write_manifest(MANIFEST)
        result = runner.invoke(cli, ["install", "--dry-run", "--config", str(manifest)])
        assert result.exit_code == 0
        assert "[dry-run]" in result.output
        assert "Would run: npx skills add acme/tools -y -a claude-code -s lint -s format" in result.output
        assert not (manifest.parent / "skillpack.lock").exists()

    def test_failure_exit_code(self, runner, write_manifest, patched_executor):
        manifest = write_manifest(MANIFEST)
        patched_executor.queue_exit("acme/tools", 1, stderr="Repository not found")
        result = runner.invoke(cli, ["install", "--config", str(manifest)])
        assert result.exit_code == 1
        assert "✗ Failed: acme/tools" in result.output
        assert "lint: Repository not found" in result.output
        assert "2 failed" in result.output

    def test_lockfile_write_error(self, runner, write_manifest, patched_executor):
        manifest = write_manifest(MANIFEST)
        (manifest.parent / "skillpack.lock").mkdir()
        result = runner.invoke(cli, ["install", "--config", str(manifest)])
        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "Failed to write skillpack.lock" in result.output
        assert "2 installed" in result.output

    def test_global_flag(self, runner, write_manifest, patched_executor):
        manifest = write_manifest(MANIFEST)
        runner.invoke(cli, ["install", "-g", "--config", str(manifest)])
        assert "-g" in patched_executor.call_log[0]

    def test_invalid_source_warning(self, runner, write_manifest, patched_executor):
        manifest = write_manifest("""\
            agents: [claude-code]
            skills:
              bogus: all
              acme/tools: [lint]
        """)
        result = runner.invoke(cli, ["install", "--config", str(manifest)])
        assert result.exit_code == 0
        assert 'Invalid repo format: "bogus"' in result.output

    def test_json_output(self, runner, write_manifest, patched_executor):
        manifest = write_manifest(MANIFEST)
        result = runner.invoke(cli, ["install", "--json", "--config", str(manifest)])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["phase"] == "done"
        assert data["summary"] == {"installed": 2, "skipped": 0, "failed": 0}
        assert data["lockfile_written"] is True

    def test_json_output_error(self, runner, tmp_path: Path, patched_executor):
        result = runner.invoke(cli, ["install", "--json", "--config", str(tmp_path / "nope.yaml")])
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["phase"] == "aborted"
        assert "error" in data
