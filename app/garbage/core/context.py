"""Run context for the trash engine.

Bundles the values that every trash operation needs and that should be
computed only once per run: the mount table, the home trash and the
mount point owning it, and the current user id. The context is built at
startup and passed explicitly to the components that need it.
"""

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path

from garbage.core.paths import get_data_home
from garbage.trash.directory import TrashDirectory
from garbage.trash.mounts import MountTable
from garbage.utils.paths import get_uid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrashContext:
    """Immutable per-run environment for trash operations.

    Attributes:
        mounts: Snapshot of the mount table.
        home_trash: The user's home trash directory.
        uid: User id used to name per-mount trash directories.
        home_mount: Mount point owning the home trash (derived).
    """

    mounts: MountTable
    home_trash: TrashDirectory
    uid: int
    home_mount: Path | None = field(init=False)

    def __post_init__(self) -> None:
        """Resolve the mount owning the home trash once."""
        home_mount = self.mounts.get_mount_point(self.home_trash.path)
        if home_mount is None:
            logger.warning("No mount point found for home trash %s", self.home_trash.path)
        object.__setattr__(self, "home_mount", home_mount)

    @classmethod
    def load(
        cls,
        *,
        data_home: Path | None = None,
        mountinfo: Path | None = None,
    ) -> "TrashContext":
        """Build the context for the running process.

        Args:
            data_home: Override for $XDG_DATA_HOME.
            mountinfo: Override for the mountinfo file.

        Returns:
            A freshly loaded TrashContext.

        Raises:
            MountTableError: If the mount table cannot be read.
        """
        return cls(
            mounts=MountTable.read(mountinfo),
            home_trash=TrashDirectory.home(data_home or get_data_home()),
            uid=get_uid(),
        )

    def refresh(self, mountinfo: Path | None = None) -> "TrashContext":
        """Return a copy of this context with a re-read mount table.

        Raises:
            MountTableError: If the mount table cannot be read.
        """
        return replace(self, mounts=MountTable.read(mountinfo))
