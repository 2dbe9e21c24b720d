"""FreeDesktop trash engine.

This package provides mount table parsing, the .trashinfo record
format, trash directory enumeration, trash directory selection and the
put/list/restore/empty operations built on them.
"""

from garbage.trash.directory import TrashDirectory
from garbage.trash.errors import (
    BadRecordError,
    MissingDateError,
    MissingHeaderError,
    MissingPathError,
    RecordDateError,
    TrashError,
)
from garbage.trash.mounts import MountPoint, MountTable
from garbage.trash.record import TrashRecord, parse_trashinfo

__all__ = [
    "BadRecordError",
    "MissingDateError",
    "MissingHeaderError",
    "MissingPathError",
    "MountPoint",
    "MountTable",
    "RecordDateError",
    "TrashDirectory",
    "TrashError",
    "TrashRecord",
    "parse_trashinfo",
]
