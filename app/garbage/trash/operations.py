"""Trash operations: put, list, restore and empty.

These functions glue the mount table, strategy selector and trash
directories together. Each returns result objects describing what
happened instead of printing, so the CLI decides how to display them.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path

from garbage.core.context import TrashContext
from garbage.trash.directory import TrashDirectory
from garbage.trash.errors import (
    DotDirError,
    InvalidSelectionError,
    MissingPayloadError,
    MissingRecursiveOptionError,
    NoTrashDirectoryError,
    RestoreConflictError,
    TrashError,
    TrashIOError,
)
from garbage.trash.record import TrashRecord
from garbage.trash.strategy import (
    ConfirmCallback,
    DeletionStrategy,
    StrategyKind,
    StrategySelector,
    delete,
)
from garbage.utils.paths import is_dot_dir
from garbage.utils.transfer import move, remove_tree

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PutResult:
    """Result of trashing a single path.

    Attributes:
        path: Path as given by the caller.
        success: Whether the path was trashed.
        strategy: Kind of strategy used (None if selection failed).
        record: Record written for the item (None on failure or dry-run).
        error: Error message if the operation failed.
        dry_run: Whether this was a dry-run.
    """

    path: Path
    success: bool
    strategy: StrategyKind | None = None
    record: TrashRecord | None = None
    error: str | None = None
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class RecordListing:
    """Records of one trash directory, oldest first.

    Attributes:
        records: Valid records sorted by deletion date ascending.
        errors: Problems met while reading (bad records, walk failures).
    """

    records: list[TrashRecord] = field(default_factory=list)
    errors: list[TrashError] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class RestoreResult:
    """Result of restoring one record.

    Attributes:
        record: The restored record.
        destination: Where the payload was moved back to.
    """

    record: TrashRecord
    destination: Path


@dataclass(frozen=True, slots=True)
class PurgeResult:
    """Result of purging one record while emptying the trash.

    Attributes:
        record: The record considered.
        success: Whether record and payload were removed.
        error: Error message if removal failed.
        dry_run: Whether this was a dry-run.
    """

    record: TrashRecord
    success: bool
    error: str | None = None
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class EmptyResult:
    """Result of emptying a trash directory.

    Attributes:
        purged: One result per record old enough to be purged.
        kept: Number of records newer than the cutoff.
        errors: Records that could not be read and were skipped.
    """

    purged: list[PurgeResult] = field(default_factory=list)
    kept: int = 0
    errors: list[TrashError] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        """Whether any purge failed."""
        return any(not r.success for r in self.purged)


def put(
    context: TrashContext,
    paths: Iterable[Path],
    *,
    recursive: bool = False,
    force: bool = False,
    dry_run: bool = False,
    trash_dir: Path | None = None,
    confirm: ConfirmCallback | None = None,
) -> list[PutResult]:
    """Trash several paths, one at a time, in the given order.

    A failure on one path is recorded in its result and processing
    continues with the next path.

    Args:
        context: Run context.
        paths: Paths to trash.
        recursive: Allow trashing directories.
        force: Do not ask before copying strategies.
        dry_run: Only report the strategy that would be used.
        trash_dir: Put everything into this trash directory instead of
            picking one per path.
        confirm: Confirmation callback for copying strategies.

    Returns:
        One PutResult per input path.
    """
    selector = StrategySelector(context)
    results: list[PutResult] = []

    for path in paths:
        path = Path(path)
        try:
            results.append(
                _put_single(
                    selector,
                    path,
                    recursive=recursive,
                    force=force,
                    dry_run=dry_run,
                    trash_dir=trash_dir,
                    confirm=confirm,
                )
            )
        except TrashError as e:
            logger.debug("Failed to trash %s: %s", path, e)
            results.append(PutResult(path=path, success=False, error=str(e)))

    return results


def _put_single(
    selector: StrategySelector,
    path: Path,
    *,
    recursive: bool,
    force: bool,
    dry_run: bool,
    trash_dir: Path | None,
    confirm: ConfirmCallback | None,
) -> PutResult:
    """Trash one path.

    '.' and '..' are refused before anything else, dry-run or not.

    Raises:
        TrashError: If the path cannot be trashed.
    """
    try:
        if is_dot_dir(path):
            raise DotDirError()
        exists = path.exists() or path.is_symlink()
        is_directory = exists and path.is_dir() and not path.is_symlink()
    except OSError as e:
        msg = f"Cannot inspect {path}: {e}"
        raise TrashIOError(msg) from e

    if not exists:
        msg = f"Path does not exist: {path}"
        raise TrashError(msg)

    if is_directory and not recursive:
        raise MissingRecursiveOptionError(path)

    if trash_dir is not None:
        strategy = DeletionStrategy.fixed(TrashDirectory(trash_dir))
    else:
        strategy = selector.pick(path, create=not dry_run)

    if dry_run:
        logger.info("Dry-run: would trash %s into %s", path, strategy.trash_dir.path)
        return PutResult(path=path, success=True, strategy=strategy.kind, dry_run=True)

    record = delete(strategy, path, force=force, confirm=confirm)
    return PutResult(path=path, success=True, strategy=strategy.kind, record=record)


def _require_trash(trash_dir: TrashDirectory, explicit: bool) -> None:
    """Reject explicit trash directories that do not exist.

    Raises:
        NoTrashDirectoryError: If an explicitly selected directory is missing.
    """
    if explicit and not trash_dir.exists():
        raise NoTrashDirectoryError(trash_dir.path)


def list_records(trash_dir: TrashDirectory, *, explicit: bool = False) -> RecordListing:
    """Collect the records of a trash directory, oldest first.

    Unreadable records are collected as errors instead of aborting.

    Args:
        trash_dir: Trash directory to read.
        explicit: Whether the directory was chosen explicitly by the user.

    Returns:
        RecordListing with sorted records and skipped errors.

    Raises:
        NoTrashDirectoryError: If an explicit directory does not exist.
        TrashIOError: If the info/ directory cannot be created.
    """
    _require_trash(trash_dir, explicit)

    listing = RecordListing()
    for item in trash_dir.iterate():
        if isinstance(item, TrashRecord):
            listing.records.append(item)
        else:
            logger.debug("Skipping trash entry: %s", item)
            listing.errors.append(item)

    listing.records.sort(key=lambda r: r.deletion_date)
    return listing


def restore(
    trash_dir: TrashDirectory,
    index: int,
    *,
    overwrite: bool = False,
    explicit: bool = False,
) -> RestoreResult:
    """Restore the index-th record (oldest first) to its original path.

    The payload is moved back and the record is deleted.

    Args:
        trash_dir: Trash directory to restore from.
        index: Position in the listing returned by list_records.
        overwrite: Replace an existing file at the original path.
        explicit: Whether the directory was chosen explicitly by the user.

    Returns:
        RestoreResult for the restored record.

    Raises:
        NoTrashDirectoryError: If an explicit directory does not exist.
        InvalidSelectionError: If index is out of range.
        MissingPayloadError: If the payload is gone.
        RestoreConflictError: If the destination exists and overwrite is False.
        TrashIOError: If moving the payload or deleting the record fails.
    """
    records = list_records(trash_dir, explicit=explicit).records
    if not 0 <= index < len(records):
        raise InvalidSelectionError(index, len(records))

    record = records[index]
    destination = record.path

    if not record.deleted_path.exists() and not record.deleted_path.is_symlink():
        raise MissingPayloadError(record.deleted_path)

    if destination.exists() or destination.is_symlink():
        if not overwrite:
            raise RestoreConflictError(destination)
        try:
            remove_tree(destination)
        except OSError as e:
            msg = f"Cannot replace {destination}: {e}"
            raise TrashIOError(msg) from e

    try:
        move(record.deleted_path, destination)
    except OSError as e:
        msg = f"Cannot restore {record.deleted_path} to {destination}: {e}"
        raise TrashIOError(msg) from e

    try:
        record.info_path.unlink()
    except OSError as e:
        msg = f"Restored {destination} but cannot remove record {record.info_path}: {e}"
        raise TrashIOError(msg) from e

    logger.info("Restored %s", destination)
    return RestoreResult(record=record, destination=destination)


def empty(
    trash_dir: TrashDirectory,
    *,
    dry_run: bool = False,
    older_than_days: int | None = None,
    explicit: bool = False,
    now: datetime | None = None,
) -> EmptyResult:
    """Permanently delete records and payloads from a trash directory.

    Every record whose deletion date is not later than the cutoff
    (now minus older_than_days, or now) is purged. A missing payload is
    not an error; the record is still removed.

    Args:
        trash_dir: Trash directory to empty.
        dry_run: Only report what would be purged.
        older_than_days: Keep items deleted within this many days.
        explicit: Whether the directory was chosen explicitly by the user.
        now: Reference time; defaults to the current local time.

    Returns:
        EmptyResult describing purged and kept items.

    Raises:
        NoTrashDirectoryError: If an explicit directory does not exist.
    """
    _require_trash(trash_dir, explicit)
    if trash_dir.check_info_dir() is None:
        logger.debug("No info directory in %s, nothing to empty", trash_dir.path)
        return EmptyResult()

    cutoff = now or datetime.now()
    if older_than_days is not None:
        cutoff -= timedelta(days=older_than_days)

    purged: list[PurgeResult] = []
    errors: list[TrashError] = []
    kept = 0
    for item in trash_dir.iterate():
        if not isinstance(item, TrashRecord):
            logger.debug("Skipping trash entry: %s", item)
            errors.append(item)
            continue

        if item.deletion_date > cutoff:
            kept += 1
            continue

        if dry_run:
            logger.info("Dry-run: would purge %s", item.path)
            purged.append(PurgeResult(record=item, success=True, dry_run=True))
            continue

        purged.append(_purge(item))

    return EmptyResult(purged=purged, kept=kept, errors=errors)


def _purge(record: TrashRecord) -> PurgeResult:
    """Remove a record and its payload."""
    try:
        if record.deleted_path.exists() or record.deleted_path.is_symlink():
            remove_tree(record.deleted_path)
        else:
            logger.debug("Payload already gone: %s", record.deleted_path)
        record.info_path.unlink()
    except OSError as e:
        return PurgeResult(record=record, success=False, error=str(e))

    logger.info("Purged %s", record.path)
    return PurgeResult(record=record, success=True)
