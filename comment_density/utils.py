"""
File helpers for the command-line host.

The host plays the editor's part: it loads the document, shows a diff and
applies the edit batch as a single atomic file replacement.
"""

import difflib
import logging
import os
import shutil
from pathlib import Path
from typing import Optional

from comment_density.exceptions import NoActiveContextError

logger = logging.getLogger(__name__)


def read_document(file_path: str) -> str:
    """
    Read a source file exactly as stored, line endings included.

    Raises NoActiveContextError when the file cannot be opened or decoded,
    which the command treats as "no document".
    """
    path = Path(file_path)
    if not path.is_file():
        raise NoActiveContextError(f"file not found: {file_path}")
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise NoActiveContextError(f"cannot read {file_path}: {e}")


def atomic_write(file_path: str, content: str) -> None:
    """
    Write to a temp file first, then move it over the target, so the
    document holds either all of the edits or none of them.
    """
    path = Path(file_path)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        with open(tmp_path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        shutil.copymode(path, tmp_path)
        os.replace(tmp_path, path)
    except OSError as e:
        logger.error(f"Failed to write file {path}: {e}")
        if tmp_path.exists():
            os.remove(tmp_path)
        raise


def backup_file(file_path: str, backup_dir: str) -> Optional[Path]:
    """Copy a file into ``backup_dir`` before modification; keeps the first copy."""
    path = Path(file_path)
    dest_path = Path(backup_dir) / path.name
    dest_path.parent.mkdir(parents=True, exist_ok=True)
    if dest_path.exists():
        logger.info(f"Backup already present at {dest_path}")
        return dest_path
    shutil.copy2(path, dest_path)
    logger.info(f"Backed up {path} to {dest_path}")
    return dest_path


def unified_diff(original: str, updated: str, name: str = "source") -> str:
    """Unified diff between two versions of a document."""
    diff = difflib.unified_diff(
        original.splitlines(keepends=True),
        updated.splitlines(keepends=True),
        fromfile=f"a/{name}",
        tofile=f"b/{name}",
    )
    return "".join(diff)
