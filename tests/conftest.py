"""
Shared test fixtures and configuration.
"""

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from skillpack.adapters.mock import MockInstaller
from skillpack.core.engine.executor import TaskExecutor


@pytest.fixture
def mock_installer() -> MockInstaller:
    """Scripted installer; every call succeeds unless told otherwise."""
    return MockInstaller()


@pytest.fixture
def sleeps() -> list[float]:
    """Backoff delays requested by the executor (nothing actually sleeps)."""
    return []


@pytest.fixture
def executor(mock_installer: MockInstaller, sleeps: list[float]) -> TaskExecutor:
    """Task executor wired to the mock installer, with a recording sleep."""
    return TaskExecutor(adapter=mock_installer, sleep=sleeps.append)


@pytest.fixture
def write_manifest(tmp_path: Path) -> Callable[[str], Path]:
    """Write a skillpack.yaml into tmp_path and return its path."""

    def _write(content: str, directory: Path | None = None) -> Path:
        target = (directory or tmp_path) / "skillpack.yaml"
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(textwrap.dedent(content), encoding="utf-8")
        return target

    return _write
