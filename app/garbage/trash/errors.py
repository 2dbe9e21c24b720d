"""Exceptions raised by the trash engine.

Every error derives from TrashError so callers can catch the whole
family at once. Record parse failures derive from BadRecordError, which
lets enumeration consumers skip-and-warn on exactly that subset.
"""

from pathlib import Path


class TrashError(Exception):
    """Base exception for all trash engine errors."""


class TrashIOError(TrashError):
    """Raised when a filesystem operation on the trash fails."""


class TrashWalkError(TrashError):
    """Raised (or yielded) when walking a trash info directory fails.

    Attributes:
        path: Directory whose listing failed.
    """

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        super().__init__(f"Cannot read trash directory {path}: {cause.strerror or cause}")


class BadRecordError(TrashError):
    """Base exception for malformed .trashinfo records.

    Attributes:
        info_path: Record file that failed to parse, if known.
    """

    reason = "malformed trash record"

    def __init__(self, info_path: Path | None = None, detail: str | None = None) -> None:
        self.info_path = info_path
        message = self.reason
        if detail:
            message = f"{message}: {detail}"
        if info_path is not None:
            message = f"{message} ({info_path})"
        super().__init__(message)


class MissingHeaderError(BadRecordError):
    """Raised when the first line is not '[Trash Info]'."""

    reason = "missing [Trash Info] header"


class MissingPathError(BadRecordError):
    """Raised when a record has no Path key."""

    reason = "missing Path"


class MissingDateError(BadRecordError):
    """Raised when a record has no DeletionDate key."""

    reason = "missing DeletionDate"


class RecordDateError(BadRecordError):
    """Raised when DeletionDate does not match the record date format."""

    reason = "invalid DeletionDate"


class MountTableError(TrashError):
    """Raised when the mount table cannot be read."""


class MountTableParseError(MountTableError):
    """Raised when a mount table line is malformed."""


class NoMountPointError(TrashError):
    """Raised when no mount point owns a path."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Couldn't get mount point for {path}")


class DotDirError(TrashError):
    """Raised when asked to trash the current directory or its parent."""

    def __init__(self) -> None:
        super().__init__("Refusing to remove '.' or '..', skipping...")


class MissingRecursiveOptionError(TrashError):
    """Raised when a directory is trashed without the recursive option."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Refusing to remove directory {path} without '-r' option")


class CancelledByUserError(TrashError):
    """Raised when the user declines a confirmation prompt."""

    def __init__(self) -> None:
        super().__init__("Cancelled by user.")


class NoTrashDirectoryError(TrashError):
    """Raised when the selected trash directory does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"No trash directory selected: {path} does not exist")


class InvalidSelectionError(TrashError):
    """Raised when a restore index is out of range."""

    def __init__(self, index: int, count: int) -> None:
        self.index = index
        self.count = count
        if count == 0:
            detail = "the trash is empty"
        else:
            detail = f"expected 0..{count - 1}"
        super().__init__(f"Invalid number {index}: {detail}")


class MissingPayloadError(TrashError):
    """Raised when a record's payload is not present in files/."""

    def __init__(self, deleted_path: Path) -> None:
        self.deleted_path = deleted_path
        super().__init__(f"Trashed file is missing: {deleted_path}")


class RestoreConflictError(TrashError):
    """Raised when the restore destination already exists."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Refusing to overwrite existing path {path}")
