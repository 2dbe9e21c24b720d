"""Trash directories and enumeration of their records.

A trash directory is a root holding two subdirectories::

    <root>/files/<entry>             the trashed payload
    <root>/info/<entry>.trashinfo    its record

Both are created on first use.
"""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from garbage.core.paths import HOME_TRASH_NAME
from garbage.trash.errors import TrashError, TrashIOError, TrashWalkError
from garbage.trash.record import INFO_SUFFIX, TrashRecord

logger = logging.getLogger(__name__)

FILES_DIR = "files"
INFO_DIR = "info"


def _ensure_subdir(path: Path) -> Path:
    """Create a trash subdirectory and its ancestors if missing."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        msg = f"Cannot create trash directory {path}: {e}"
        raise TrashIOError(msg) from e
    return path


class TrashDirectory:
    """A single trash root identified by its path.

    Example:
        >>> trash = TrashDirectory(Path("~/.local/share/Trash").expanduser())
        >>> for item in trash.iterate():
        ...     if isinstance(item, TrashRecord):
        ...         print(item.path)
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @classmethod
    def home(cls, data_home: Path) -> "TrashDirectory":
        """The home trash below a user data directory ($XDG_DATA_HOME/Trash)."""
        return cls(data_home / HOME_TRASH_NAME)

    @classmethod
    def from_optional(cls, path: Path | None, home: "TrashDirectory") -> "TrashDirectory":
        """Select an explicit trash directory, falling back to the home trash."""
        if path is None:
            return home
        return cls(path)

    @property
    def path(self) -> Path:
        """Root path of this trash directory."""
        return self._path

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TrashDirectory):
            return NotImplemented
        return self._path == other._path

    def __hash__(self) -> int:
        return hash(self._path)

    def __repr__(self) -> str:
        return f"TrashDirectory({str(self._path)!r})"

    def exists(self) -> bool:
        """Check whether the root exists as a directory."""
        return self._path.is_dir()

    def create(self) -> None:
        """Create the root directory (and ancestors) if missing.

        Raises:
            TrashIOError: If the directory cannot be created.
        """
        _ensure_subdir(self._path)

    def files_dir(self) -> Path:
        """Return the files/ directory, creating it if missing.

        Raises:
            TrashIOError: If the directory cannot be created.
        """
        return _ensure_subdir(self._path / FILES_DIR)

    def info_dir(self) -> Path:
        """Return the info/ directory, creating it if missing.

        Raises:
            TrashIOError: If the directory cannot be created.
        """
        return _ensure_subdir(self._path / INFO_DIR)

    def check_info_dir(self) -> Path | None:
        """Return the info/ directory if it exists, without creating it."""
        target = self._path / INFO_DIR
        return target if target.is_dir() else None

    def payload_path(self, info_name: str) -> Path:
        """Compute the payload path matching a record file name."""
        return self._path / FILES_DIR / info_name.removesuffix(INFO_SUFFIX)

    def iterate(self) -> Iterator[TrashRecord | TrashError]:
        """Lazily yield the records stored in this trash.

        Walks info/ depth-first, yielding a directory's contents before
        moving on. Only entries named '*.trashinfo' are considered; other
        files and directories are skipped. Records that fail to parse are
        yielded as errors and iteration continues. A failure to list a
        directory is yielded as a TrashWalkError and ends iteration.

        Items come in filesystem order, not deletion order.

        Yields:
            TrashRecord for each valid record, or the error for a bad one.

        Raises:
            TrashIOError: If info/ cannot be created.
        """
        info_dir = self.info_dir()
        walker = self._walk(info_dir)
        while True:
            try:
                record_file = next(walker)
            except StopIteration:
                return
            except OSError as e:
                yield TrashWalkError(Path(e.filename or info_dir), e)
                return

            try:
                yield TrashRecord.from_files(record_file, self.payload_path(record_file.name))
            except TrashError as e:
                logger.debug("Bad trash record %s: %s", record_file, e)
                yield e

    def _walk(self, directory: Path) -> Iterator[Path]:
        """Yield record files below a directory, contents first.

        Raises:
            OSError: If a directory cannot be listed.
        """
        with os.scandir(directory) as entries:
            for entry in entries:
                if not entry.name.endswith(INFO_SUFFIX):
                    continue
                if entry.is_dir(follow_symlinks=False):
                    yield from self._walk(Path(entry.path))
                else:
                    yield Path(entry.path)
