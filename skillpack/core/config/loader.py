"""
Configuration loader — reads skillpack.yaml into the manifest model.

This is the primary entry point for loading the manifest.  It reads
YAML, validates against the Pydantic schema, and returns a typed
``SkillpackConfig``.  Every failure surfaces as a single ``ConfigError``
whose message is ready to show to the user.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from skillpack.core.models.manifest import SkillpackConfig

logger = logging.getLogger(__name__)

# Default manifest filename
MANIFEST_FILE = "skillpack.yaml"


class ConfigError(Exception):
    """Raised when the manifest is missing, unreadable or invalid."""


def find_manifest(start_dir: Path | None = None) -> Path | None:
    """Search for skillpack.yaml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to skillpack.yaml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        candidate = current / MANIFEST_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            return None  # filesystem root
        current = parent


def load_manifest(path: Path | None = None) -> SkillpackConfig:
    """Load and validate the manifest.

    Args:
        path: Explicit path to skillpack.yaml. If None, searches upward.

    Returns:
        Validated SkillpackConfig model.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if path is None:
        path = find_manifest()

    if path is None:
        raise ConfigError(
            f"No {MANIFEST_FILE} found. "
            "Run 'skillpack init' to create one, or specify --config."
        )

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading manifest from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = SkillpackConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid {MANIFEST_FILE}:\n{format_validation_errors(e)}") from e

    logger.info(
        "Loaded manifest with %d source(s) for %d agent(s)",
        len(config.skills),
        len(config.agents),
    )
    return config


def format_validation_errors(error: ValidationError) -> str:
    """Render schema violations one per line as ``  - path: message``."""
    lines = []
    for issue in error.errors():
        path = ".".join(str(part) for part in issue["loc"]) or "(root)"
        message = issue["msg"].removeprefix("Value error, ")
        lines.append(f"  - {path}: {message}")
    return "\n".join(lines)
