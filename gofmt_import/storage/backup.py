"""Backup-before-write for files rewritten in place."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


def backup_file(path: Path, data: str, perm: int) -> Path:
    """
    Write data to a new, uniquely named file next to path (<name>.<random>) with mode perm.

    Returns the backup path. The caller removes it once the real write succeeded.
    """
    fd, name = tempfile.mkstemp(prefix=path.name + ".", dir=path.parent)
    backup = Path(name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(data)
        os.chmod(backup, perm)
    except OSError:
        backup.unlink(missing_ok=True)
        raise
    return backup


def write_with_backup(path: Path, original: str, new_content: str) -> None:
    """
    Replace path's content with new_content, keeping a temporary backup of original.

    On a failed write the backup is moved back over path; after a successful
    one it is deleted.
    """
    perm = path.stat().st_mode & 0o777
    backup = backup_file(path, original, perm)
    try:
        path.write_text(new_content, encoding="utf-8", newline="")
    except OSError:
        os.replace(backup, path)
        raise
    backup.unlink()
