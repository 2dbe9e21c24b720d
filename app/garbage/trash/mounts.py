"""Mount table parsing and mount point lookup.

Reads the kernel's per-process mountinfo table (proc(5)) and answers
which mount point owns a given path via longest-prefix matching.

Each mountinfo line looks like::

    36 35 98:0 /mnt1 /mnt2 rw,noatime master:1 - ext3 /dev/root rw,errors=continue
    (1)(2)(3)   (4)   (5)      (6)      (7)   (8) (9)   (10)         (11)

Fields 7 are optional and terminated by the single '-' separator.
"""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path

from garbage.trash.errors import MountTableError, MountTableParseError
from garbage.utils.paths import into_absolute

logger = logging.getLogger(__name__)

# Octal escapes the kernel applies to space, tab, newline and backslash
_ESCAPE_PATTERN = re.compile(r"\\([0-7]{3})")


def _unescape(field: str) -> str:
    """Decode the octal escapes used in mountinfo path fields."""
    return _ESCAPE_PATTERN.sub(lambda m: chr(int(m.group(1), 8)), field)


@dataclass(frozen=True, slots=True)
class MountPoint:
    """Snapshot of one kernel-reported mount.

    Attributes:
        mount_id: Unique id of the mount.
        parent_id: Id of the parent mount.
        major: Device major number.
        minor: Device minor number.
        root: Root of the mount within the filesystem.
        mount_point: Mount point relative to the process root.
        fs_type: Filesystem type (e.g., "ext4").
        source: Mount source (e.g., "/dev/sda1"), if reported.
    """

    mount_id: int
    parent_id: int
    major: int
    minor: int
    root: Path
    mount_point: Path
    fs_type: str = ""
    source: str | None = None

    @classmethod
    def from_line(cls, line: str) -> "MountPoint":
        """Parse one mountinfo line.

        Args:
            line: A single line of /proc/<pid>/mountinfo.

        Returns:
            Parsed MountPoint.

        Raises:
            MountTableParseError: If the line is malformed.
        """
        fields = line.split()
        if len(fields) < 7:
            msg = f"Expected at least 7 fields, got {len(fields)}: {line!r}"
            raise MountTableParseError(msg)

        try:
            mount_id = int(fields[0])
            parent_id = int(fields[1])
            major_str, minor_str = fields[2].split(":")
            major = int(major_str)
            minor = int(minor_str)
        except ValueError as e:
            msg = f"Invalid numeric field in mount line {line!r}"
            raise MountTableParseError(msg) from e

        try:
            separator = fields.index("-", 6)
        except ValueError as e:
            msg = f"Missing '-' separator in mount line {line!r}"
            raise MountTableParseError(msg) from e

        trailing = fields[separator + 1 :]
        if not trailing:
            msg = f"Missing filesystem type in mount line {line!r}"
            raise MountTableParseError(msg)

        return cls(
            mount_id=mount_id,
            parent_id=parent_id,
            major=major,
            minor=minor,
            root=Path(_unescape(fields[3])),
            mount_point=Path(_unescape(fields[4])),
            fs_type=trailing[0],
            source=_unescape(trailing[1]) if len(trailing) > 1 else None,
        )


class MountTable:
    """Ordered, immutable snapshot of the process mount table.

    The table is never invalidated. Callers that care about mounts
    changing during a long run should read a new table.

    Example:
        >>> table = MountTable.read()
        >>> table.get_mount_point("/home/user/file.txt")
        PosixPath('/home')
    """

    def __init__(self, mounts: list[MountPoint] | tuple[MountPoint, ...]) -> None:
        self._mounts = tuple(mounts)

    @property
    def mounts(self) -> tuple[MountPoint, ...]:
        """Mount points in table order."""
        return self._mounts

    def __len__(self) -> int:
        return len(self._mounts)

    @classmethod
    def parse(cls, text: str) -> "MountTable":
        """Parse mountinfo text into a table.

        Blank lines are ignored; any malformed line aborts the parse.

        Args:
            text: Content in /proc/<pid>/mountinfo format.

        Returns:
            Parsed MountTable.

        Raises:
            MountTableParseError: If any line is malformed.
        """
        mounts = [MountPoint.from_line(line) for line in text.splitlines() if line.strip()]
        return cls(mounts)

    @classmethod
    def read(cls, path: Path | None = None) -> "MountTable":
        """Read the mount table of the running process.

        Args:
            path: Alternate mountinfo file. Defaults to /proc/<pid>/mountinfo.

        Returns:
            Parsed MountTable.

        Raises:
            MountTableError: If the file cannot be read.
            MountTableParseError: If any line is malformed.
        """
        source = path or Path("/proc") / str(os.getpid()) / "mountinfo"
        try:
            text = source.read_text(encoding="utf-8", errors="surrogateescape")
        except OSError as e:
            msg = f"Cannot read mount table {source}: {e}"
            raise MountTableError(msg) from e

        table = cls.parse(text)
        logger.debug("Read %d mount points from %s", len(table), source)
        return table

    def get_mount_point(self, path: str | os.PathLike[str]) -> Path | None:
        """Find the mount point that owns a path.

        The owning mount is the one whose mount point is a component-wise
        prefix of the path with the most components. Equal lengths keep
        the entry that comes first in the table.

        Args:
            path: Path to resolve; relative paths are made absolute first.

        Returns:
            The owning mount point, or None if the path cannot be made
            absolute or no mount matches.
        """
        try:
            absolute = into_absolute(path)
        except OSError:
            return None

        best: MountPoint | None = None
        for mount in self._mounts:
            if not absolute.is_relative_to(mount.mount_point):
                continue
            if best is None or len(mount.mount_point.parts) > len(best.mount_point.parts):
                best = mount

        return best.mount_point if best is not None else None
