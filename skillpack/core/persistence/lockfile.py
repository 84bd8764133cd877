"""
Lockfile persistence — atomic read/write for the installation ledger.

The lockfile lives next to the manifest as ``skillpack.lock``.  Writes
are atomic (write to temp file, then rename) so an interrupted run
leaves either the previous ledger or the new one, never a torn file.
"""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path

from pydantic import ValidationError

from skillpack.core.models.lockfile import Lockfile

logger = logging.getLogger(__name__)

LOCKFILE_NAME = "skillpack.lock"


def lockfile_path(manifest_path: Path) -> Path:
    """Get the lockfile path for a manifest."""
    return manifest_path.resolve().parent / LOCKFILE_NAME


def load_lockfile(path: Path) -> Lockfile | None:
    """Load the ledger from a JSON file.

    Args:
        path: Path to the lockfile.

    Returns:
        Lockfile model, or None if the file doesn't exist or can't be
        used.  An unusable file is treated as "nothing installed yet".
    """
    if not path.is_file():
        logger.info("No lockfile at %s — starting fresh", path)
        return None

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        lockfile = Lockfile.model_validate(data)
    except json.JSONDecodeError as e:
        logger.warning("Corrupt lockfile %s: %s — ignoring it", path, e)
        return None
    except (OSError, ValidationError) as e:
        logger.warning("Cannot load lockfile %s: %s — ignoring it", path, e)
        return None

    logger.debug(
        "Loaded lockfile %s (%d installation(s))",
        path,
        len(lockfile.installations),
    )
    return lockfile


def save_lockfile(lockfile: Lockfile, path: Path) -> None:
    """Save the ledger to a JSON file (atomic write).

    ``generated`` is written as-is; saving never re-stamps it.

    Args:
        lockfile: The ledger to save.
        path: Target path for the lockfile.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    content = json.dumps(lockfile.to_json_dict(), indent=2, ensure_ascii=False) + "\n"

    # Atomic write: temp file in same directory, then rename
    try:
        fd, tmp_path = tempfile.mkstemp(
            dir=path.parent,
            prefix=".skillpack_",
            suffix=".tmp",
        )
        tmp = Path(tmp_path)
        try:
            with open(fd, "w", encoding="utf-8") as f:
                f.write(content)
            tmp.replace(path)
            logger.debug("Lockfile saved to %s", path)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise
    except Exception as e:
        logger.error("Failed to save lockfile to %s: %s", path, e)
        raise
