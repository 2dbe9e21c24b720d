"""File transfer primitives.

Thin wrappers over os/shutil used to move payloads in and out of the
trash. Symlinks are always transferred as links, never followed.
"""

import errno
import logging
import os
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def recursive_copy(src: Path, dst: Path) -> None:
    """Copy a file, symlink or directory tree to a new location.

    The destination must not exist yet. Directory trees are copied with
    their structure, symlinks inside them are recreated as links.

    Args:
        src: Source path.
        dst: Destination path (must not exist).

    Raises:
        OSError: If any part of the copy fails.
    """
    if src.is_symlink():
        os.symlink(os.readlink(src), dst)
    elif src.is_dir():
        shutil.copytree(src, dst, symlinks=True)
    else:
        shutil.copy2(src, dst)


def remove_tree(path: Path) -> None:
    """Remove a file, symlink or directory tree.

    Args:
        path: Path to remove.

    Raises:
        OSError: If removal fails.
    """
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def copy_then_remove(src: Path, dst: Path) -> None:
    """Copy src to dst, then remove src.

    Not atomic: an interruption can leave both the source and a partial
    destination on disk.

    Args:
        src: Source path.
        dst: Destination path (must not exist).

    Raises:
        OSError: If the copy or the removal fails.
    """
    recursive_copy(src, dst)
    remove_tree(src)


def move(src: Path, dst: Path) -> None:
    """Rename src to dst, copying across filesystems when needed.

    Args:
        src: Source path.
        dst: Destination path.

    Raises:
        OSError: If both the rename and the fallback copy fail.
    """
    try:
        os.rename(src, dst)
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise
        logger.debug("Cross-device rename of %s, copying instead", src)
        copy_then_remove(src, dst)
