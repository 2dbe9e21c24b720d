"""Trash directory selection and the deletion itself.

For each path to trash, the selector decides which trash directory to
use and whether the payload can be renamed into it or has to be copied,
following the FreeDesktop Trash specification:

1. same mount as the home trash: move into the home trash;
2. $topdir/.Trash exists, is not a symlink and has the sticky bit:
   move into $topdir/.Trash/$uid;
3. $topdir/.Trash-$uid exists or can be created: move into it;
4. otherwise copy into the home trash and remove the source.
"""

import logging
import os
import stat
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from garbage.core.context import TrashContext
from garbage.trash.directory import TrashDirectory
from garbage.trash.errors import (
    CancelledByUserError,
    DotDirError,
    NoMountPointError,
    TrashError,
    TrashIOError,
)
from garbage.trash.record import INFO_SUFFIX, TrashRecord
from garbage.utils.paths import into_absolute, is_dot_dir
from garbage.utils.transfer import copy_then_remove, move

logger = logging.getLogger(__name__)

TOPDIR_TRASH = ".Trash"
TOPDIR_FALLBACK_PREFIX = ".Trash-"


class StrategyKind(str, Enum):
    """How a path gets into its trash directory.

    Attributes:
        FIXED: Caller-chosen trash directory; may need a copy.
        MOVE_TO: Trash on the same filesystem; atomic rename.
        COPY_TO: Trash on another filesystem; copy, then remove the source.
    """

    FIXED = "fixed"
    MOVE_TO = "move"
    COPY_TO = "copy"


@dataclass(frozen=True, slots=True)
class DeletionStrategy:
    """Destination trash directory plus transfer mode for one path.

    Attributes:
        kind: Transfer mode.
        trash_dir: Destination trash directory.
    """

    kind: StrategyKind
    trash_dir: TrashDirectory

    @classmethod
    def fixed(cls, trash_dir: TrashDirectory) -> "DeletionStrategy":
        return cls(StrategyKind.FIXED, trash_dir)

    @classmethod
    def move_to(cls, trash_dir: TrashDirectory) -> "DeletionStrategy":
        return cls(StrategyKind.MOVE_TO, trash_dir)

    @classmethod
    def copy_to(cls, trash_dir: TrashDirectory) -> "DeletionStrategy":
        return cls(StrategyKind.COPY_TO, trash_dir)

    @property
    def requires_copy(self) -> bool:
        """Whether this strategy may need an expensive recursive copy.

        A fixed trash directory can live on any filesystem, so it is
        treated as potentially copying.
        """
        return self.kind in (StrategyKind.FIXED, StrategyKind.COPY_TO)


# Called before a potentially copying deletion; returns False to cancel.
ConfirmCallback = Callable[[Path, DeletionStrategy], bool]


class StrategySelector:
    """Picks the deletion strategy for each path.

    Args:
        context: Run context providing the mount table, home trash and uid.
    """

    def __init__(self, context: TrashContext) -> None:
        self._context = context

    def pick(self, target: Path, *, create: bool = True) -> DeletionStrategy:
        """Pick the strategy for trashing one path.

        Args:
            target: Path about to be trashed.
            create: Create the per-mount trash directory when it is
                missing. With False nothing is written; a missing
                directory counts as usable if its parent is writable.

        Returns:
            The DeletionStrategy to use.

        Raises:
            NoMountPointError: If the path's mount point cannot be found.
        """
        context = self._context
        mount = context.mounts.get_mount_point(target)
        if mount is None:
            raise NoMountPointError(target)

        if mount == context.home_mount:
            logger.debug("%s is on the home trash mount %s", target, mount)
            return DeletionStrategy.move_to(context.home_trash)

        shared = self._shared_topdir_trash(mount, create)
        if shared is not None:
            logger.debug("Using shared trash %s for %s", shared.path, target)
            return DeletionStrategy.move_to(shared)

        private = self._private_topdir_trash(mount, create)
        if private is not None:
            logger.debug("Using private trash %s for %s", private.path, target)
            return DeletionStrategy.move_to(private)

        logger.debug("No trash on mount %s, falling back to copying %s", mount, target)
        return DeletionStrategy.copy_to(context.home_trash)

    def _shared_topdir_trash(self, mount: Path, create: bool) -> TrashDirectory | None:
        """Use $topdir/.Trash/$uid if $topdir/.Trash is a valid shared trash.

        $topdir/.Trash is never created. It must be a real directory (not
        a symlink) with the sticky bit set.
        """
        shared_root = mount / TOPDIR_TRASH
        try:
            mode = shared_root.lstat().st_mode
        except OSError:
            return None

        if stat.S_ISLNK(mode) or not stat.S_ISDIR(mode):
            logger.debug("%s is not a plain directory, ignoring", shared_root)
            return None
        if not mode & stat.S_ISVTX:
            logger.debug("%s has no sticky bit, ignoring", shared_root)
            return None

        trash_dir = TrashDirectory(shared_root / str(self._context.uid))
        if not _prepare(trash_dir, create):
            logger.warning("Cannot use shared trash %s", trash_dir.path)
            return None
        return trash_dir

    def _private_topdir_trash(self, mount: Path, create: bool) -> TrashDirectory | None:
        """Use $topdir/.Trash-$uid, creating it when missing."""
        trash_dir = TrashDirectory(mount / f"{TOPDIR_FALLBACK_PREFIX}{self._context.uid}")
        if not _prepare(trash_dir, create):
            logger.debug("Cannot use private trash %s", trash_dir.path)
            return None
        return trash_dir


def _prepare(trash_dir: TrashDirectory, create: bool) -> bool:
    """Make sure a trash root exists, or only check that it could.

    Returns:
        Whether the trash root is usable.
    """
    if create:
        try:
            trash_dir.create()
        except TrashIOError as e:
            logger.debug("Cannot create %s: %s", trash_dir.path, e)
            return False
        return True

    if trash_dir.exists():
        return True
    if os.path.lexists(trash_dir.path):
        return False
    return os.access(trash_dir.path.parent, os.W_OK)


def make_entry_name(target: Path, now: datetime) -> str:
    """Build the '<unix-millis>.<basename>' name shared by payload and record."""
    millis = int(now.timestamp()) * 1000 + now.microsecond // 1000
    return f"{millis}.{target.name}"


def delete(
    strategy: DeletionStrategy,
    target: Path,
    *,
    force: bool = False,
    confirm: ConfirmCallback | None = None,
    now: datetime | None = None,
) -> TrashRecord:
    """Trash one path according to a strategy.

    The record is written first, then the payload is transferred. If the
    transfer fails the record is left behind without a payload; nothing
    is rolled back. An interrupted copy can likewise leave both the
    source and a partial copy on disk.

    Args:
        strategy: Strategy picked for this path.
        target: Path to trash.
        force: Skip the confirmation for copying strategies.
        confirm: Asked before a copying strategy proceeds, unless force.
        now: Deletion time; defaults to the current local time.

    Returns:
        The TrashRecord written for the item.

    Raises:
        DotDirError: If target is the current directory or its parent.
        CancelledByUserError: If confirm declined the deletion.
        TrashIOError: If the path cannot be resolved, or writing the record
            or moving the payload fails.
    """
    try:
        dot_dir = is_dot_dir(target)
        original_path = into_absolute(target)
    except OSError as e:
        msg = f"Cannot resolve {target}: {e}"
        raise TrashIOError(msg) from e
    if dot_dir:
        raise DotDirError()

    if strategy.requires_copy and not force and confirm is not None:
        if not confirm(target, strategy):
            raise CancelledByUserError()

    if now is None:
        now = datetime.now()

    trash_dir = strategy.trash_dir
    entry_name = make_entry_name(target, now)
    record = TrashRecord(
        path=original_path,
        deletion_date=now.replace(microsecond=0),
        deleted_path=trash_dir.files_dir() / entry_name,
        info_path=trash_dir.info_dir() / f"{entry_name}{INFO_SUFFIX}",
    )

    try:
        with open(record.info_path, "x", encoding="utf-8", errors="surrogateescape") as f:
            record.write(f)
    except OSError as e:
        msg = f"Cannot write trash record {record.info_path}: {e}"
        raise TrashIOError(msg) from e

    try:
        _transfer(strategy, target, record.deleted_path)
    except OSError as e:
        msg = f"Cannot move {target} to {record.deleted_path}: {e}"
        raise TrashIOError(msg) from e

    logger.info("Trashed %s into %s (%s)", target, trash_dir.path, strategy.kind.value)
    return record


def _transfer(strategy: DeletionStrategy, target: Path, destination: Path) -> None:
    """Move the payload into files/ according to the strategy kind."""
    if strategy.kind == StrategyKind.MOVE_TO:
        target.rename(destination)
    elif strategy.kind == StrategyKind.FIXED:
        move(target, destination)
    elif strategy.kind == StrategyKind.COPY_TO:
        copy_then_remove(target, destination)
    else:
        msg = f"Unknown deletion strategy: {strategy.kind}"
        raise TrashError(msg)
