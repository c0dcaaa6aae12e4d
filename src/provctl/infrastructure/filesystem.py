"""Filesystem helpers shared by the writers in this package.

Writers that replace a file go through :func:`atomic_write_text` so a
failed run never leaves a truncated document behind.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path, PurePath

TEMP_PREFIX = ".tmp-"


def is_hidden(relative: PurePath) -> bool:
    """Return True if any component of *relative* starts with a dot."""
    return any(part.startswith(".") for part in relative.parts)


def temp_sibling(path: Path, *, suffix: str = "") -> Path:
    """Create an empty hidden temp file next to *path* and return its path.

    Creates parent directories if they don't exist.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, name = tempfile.mkstemp(prefix=TEMP_PREFIX, suffix=suffix, dir=path.parent)
    os.close(fd)
    os.chmod(name, 0o644)
    return Path(name)


def atomic_write_text(path: Path, text: str) -> None:
    """Write *text* to *path* via a temp file renamed into place."""
    tmp_path = temp_sibling(path)
    try:
        with tmp_path.open("w", encoding="utf-8", newline="\n") as fh:
            fh.write(text)
            fh.flush()
            os.fsync(fh.fileno())
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
