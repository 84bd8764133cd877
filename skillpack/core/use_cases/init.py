"""
Init use case — write a starter skillpack.yaml.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from skillpack.core.config.loader import MANIFEST_FILE
from skillpack.core.data import load_manifest_template

logger = logging.getLogger(__name__)


@dataclass
class InitResult:
    """Result of writing the manifest template."""

    path: Path
    created: bool = False
    overwritten: bool = False
    error: str | None = None

    def to_dict(self) -> dict:
        result: dict = {"path": str(self.path), "created": self.created}
        if self.overwritten:
            result["overwritten"] = True
        if self.error:
            result["error"] = self.error
        return result


def init_manifest(target_dir: Path | None = None, force: bool = False) -> InitResult:
    """Write the template manifest into ``target_dir`` (default: cwd).

    Refuses to replace an existing manifest unless ``force`` is set.
    """
    path = (target_dir or Path.cwd()) / MANIFEST_FILE
    result = InitResult(path=path)

    existed = path.exists()
    if existed and not force:
        result.error = f"{MANIFEST_FILE} already exists. Use --force to overwrite."
        return result

    path.write_text(load_manifest_template(), encoding="utf-8")
    result.created = True
    result.overwritten = existed
    logger.info("Wrote %s%s", path, " (overwritten)" if existed else "")
    return result
