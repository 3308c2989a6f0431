"""File and directory copying for gotfiles."""

from __future__ import annotations

import os
import shutil
import stat
from pathlib import Path


def copy_file(src: Path, dst: Path) -> None:
    """Copy the contents of a single file.

    Parent directories of ``dst`` are created as needed. The destination is
    created with default permissions; the source mode is not copied. An
    existing destination file is overwritten.

    Raises:
        OSError: If the source cannot be read or the destination written.
    """
    dst.parent.mkdir(mode=0o755, parents=True, exist_ok=True)
    shutil.copyfile(src, dst)


def copy_dir(src: Path, dst: Path) -> None:
    """Recursively copy a directory tree.

    Each destination directory is created with its source directory's
    permission bits, and so is every missing ancestor of ``dst``. Entries are
    classified without following symlinks, and anything that is not a
    directory is copied as file contents.

    Raises:
        OSError: On the first stat, read or write failure.
    """
    mode = stat.S_IMODE(src.stat().st_mode)
    for parent in reversed(dst.parents):
        if not parent.exists():
            parent.mkdir(mode=mode, exist_ok=True)
    dst.mkdir(mode=mode, exist_ok=True)

    with os.scandir(src) as entries:
        for entry in sorted(entries, key=lambda e: e.name):
            src_path = src / entry.name
            dst_path = dst / entry.name
            if entry.is_dir(follow_symlinks=False):
                copy_dir(src_path, dst_path)
            else:
                copy_file(src_path, dst_path)


def copy_path(src: Path, dst: Path) -> None:
    """Copy a file or a directory tree from ``src`` to ``dst``."""
    if src.is_dir():
        copy_dir(src, dst)
    else:
        copy_file(src, dst)
