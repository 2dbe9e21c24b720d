"""The .trashinfo record format.

Each trashed item has a companion record in the trash's info/ directory::

    [Trash Info]
    Path=/home/user/doc.txt
    DeletionDate=2024-05-01T13:45:10

Path is stored verbatim and DeletionDate is local time with second
precision. Other trash tools may add more keys; they are ignored on read
and never written.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import TextIO

from garbage.trash.errors import (
    MissingDateError,
    MissingHeaderError,
    MissingPathError,
    RecordDateError,
    TrashIOError,
)

HEADER = "[Trash Info]"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"
INFO_SUFFIX = ".trashinfo"

_KEY_VALUE_PATTERN = re.compile(r"([A-Za-z]+)\s*=\s*(.*)")


def parse_trashinfo(text: str, info_path: Path | None = None) -> tuple[Path, datetime]:
    """Parse the text of a .trashinfo record.

    Args:
        text: Record content.
        info_path: Record location, only used in error messages.

    Returns:
        Tuple of (original path, deletion date).

    Raises:
        MissingHeaderError: If the first line is not exactly '[Trash Info]'.
        MissingPathError: If no Path key is present.
        MissingDateError: If no DeletionDate key is present.
        RecordDateError: If DeletionDate does not match DATE_FORMAT.
    """
    lines = [line.removesuffix("\r") for line in text.split("\n")]
    if lines[0] != HEADER:
        raise MissingHeaderError(info_path)

    values: dict[str, str] = {}
    for line in lines[1:]:
        match = _KEY_VALUE_PATTERN.fullmatch(line)
        if match is None:
            continue
        key, value = match.group(1), match.group(2)
        if key in ("Path", "DeletionDate"):
            values[key] = value

    if "Path" not in values:
        raise MissingPathError(info_path)
    if "DeletionDate" not in values:
        raise MissingDateError(info_path)

    try:
        deletion_date = datetime.strptime(values["DeletionDate"], DATE_FORMAT)
    except ValueError as e:
        raise RecordDateError(info_path, repr(values["DeletionDate"])) from e

    return Path(values["Path"]), deletion_date


@dataclass(frozen=True, slots=True)
class TrashRecord:
    """Metadata of one trashed item.

    Attributes:
        path: Original absolute location of the item.
        deletion_date: Local time of deletion, second precision.
        deleted_path: Location of the payload inside files/.
        info_path: Location of the .trashinfo record inside info/.
    """

    path: Path
    deletion_date: datetime
    deleted_path: Path
    info_path: Path

    @classmethod
    def from_text(cls, text: str, info_path: Path, deleted_path: Path) -> "TrashRecord":
        """Build a record from its serialized form and its locations.

        Raises:
            BadRecordError: If the text is not a valid record.
        """
        path, deletion_date = parse_trashinfo(text, info_path)
        return cls(
            path=path,
            deletion_date=deletion_date,
            deleted_path=deleted_path,
            info_path=info_path,
        )

    @classmethod
    def from_files(cls, info_path: Path, deleted_path: Path) -> "TrashRecord":
        """Read a record file from disk.

        The payload is not checked; it may have been removed by another tool.

        Args:
            info_path: Path of the .trashinfo file.
            deleted_path: Path of the matching payload in files/.

        Returns:
            Parsed TrashRecord.

        Raises:
            TrashIOError: If the record file cannot be read.
            BadRecordError: If the record is malformed.
        """
        try:
            text = info_path.read_text(encoding="utf-8", errors="surrogateescape")
        except OSError as e:
            msg = f"Cannot read trash record {info_path}: {e}"
            raise TrashIOError(msg) from e
        return cls.from_text(text, info_path, deleted_path)

    @property
    def name(self) -> str:
        """Entry name shared by the payload and the record (without suffix)."""
        return self.deleted_path.name

    def to_text(self) -> str:
        """Serialize to the .trashinfo format."""
        return (
            f"{HEADER}\n"
            f"Path={self.path}\n"
            f"DeletionDate={self.deletion_date.strftime(DATE_FORMAT)}\n"
        )

    def write(self, out: TextIO) -> None:
        """Write the serialized record to an open text stream."""
        out.write(self.to_text())
