"""Path helpers shared by the trash engine."""

import os
from pathlib import Path


def into_absolute(path: str | os.PathLike[str]) -> Path:
    """Make a path absolute without resolving symlinks.

    Relative paths are joined onto the canonical current directory;
    absolute paths are returned unchanged.

    Args:
        path: Path to make absolute.

    Returns:
        Absolute path.

    Raises:
        OSError: If the current directory cannot be determined.
    """
    path = Path(path)
    if path.is_absolute():
        return path
    return Path.cwd().resolve() / path


def normalize(path: Path) -> Path:
    """Collapse '.' and '..' components lexically."""
    return Path(os.path.normpath(path))


def is_dot_dir(path: str | os.PathLike[str]) -> bool:
    """Check whether a path names the current directory or its parent.

    Args:
        path: Path as given by the caller.

    Returns:
        True for '.', '..' and any spelling that normalizes to the
        current directory or its parent.
    """
    target = normalize(into_absolute(path))
    current = Path.cwd().resolve()
    return target in (current, current.parent)


def get_uid() -> int:
    """Return the real user id of this process."""
    return os.getuid()
