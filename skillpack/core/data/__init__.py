"""
Static data — the supported agent catalog and the manifest template.

Everything here is fixed at release time.  The template lives next to
this module as ``skillpack.yaml`` and ships as package data.

Usage::

    from skillpack.core.data import SUPPORTED_AGENTS, load_manifest_template

    agents = SUPPORTED_AGENTS           # tuple[str, ...], sorted
    text = load_manifest_template()     # str
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).parent

MANIFEST_TEMPLATE_FILE = "skillpack.yaml"

# Agents understood by the skills CLI.  Kept sorted.
SUPPORTED_AGENTS: tuple[str, ...] = (
    "amp",
    "antigravity",
    "claude-code",
    "clawdbot",
    "cline",
    "codex",
    "command-code",
    "cursor",
    "droid",
    "gemini-cli",
    "github-copilot",
    "goose",
    "kilo",
    "kiro-cli",
    "mcpjam",
    "neovate",
    "opencode",
    "openhands",
    "pi",
    "qoder",
    "qwen-code",
    "roo",
    "trae",
    "windsurf",
    "zencoder",
)

# Agent token that expands to the full catalog
AGENT_WILDCARD = "*"


def load_manifest_template() -> str:
    """Return the text of the starter ``skillpack.yaml``."""
    path = _DATA_DIR / MANIFEST_TEMPLATE_FILE
    logger.debug("Loading manifest template from %s", path)
    return path.read_text(encoding="utf-8")
