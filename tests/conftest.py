"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import os
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import pytest
from garbage.core.context import TrashContext
from garbage.trash.directory import TrashDirectory
from garbage.trash.mounts import MountPoint, MountTable


def _make_mount(mount_id: int, mount_point: str | Path, parent_id: int = 1) -> MountPoint:
    """Create a MountPoint for tests."""
    return MountPoint(
        mount_id=mount_id,
        parent_id=parent_id,
        major=8,
        minor=mount_id,
        root=Path("/"),
        mount_point=Path(mount_point),
        fs_type="ext4",
        source=f"/dev/sda{mount_id}",
    )


def _write_record(
    trash: Path,
    name: str,
    original: str,
    date: str = "2024-01-15T10:00:00",
    payload: bool = True,
) -> Path:
    """Write a .trashinfo record (and optionally its payload) into a trash root."""
    (trash / "info").mkdir(parents=True, exist_ok=True)
    (trash / "files").mkdir(parents=True, exist_ok=True)
    info = trash / "info" / f"{name}.trashinfo"
    info.write_text(f"[Trash Info]\nPath={original}\nDeletionDate={date}\n")
    if payload:
        (trash / "files" / name).write_text("payload")
    return info


@pytest.fixture(autouse=True)
def isolated_xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point XDG data and config homes into the test directory."""
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg-data"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))


@pytest.fixture
def make_mount() -> Callable[..., MountPoint]:
    """Factory for MountPoint instances."""
    return _make_mount


@pytest.fixture
def write_record() -> Callable[..., Path]:
    """Factory writing records into a trash root."""
    return _write_record


@pytest.fixture
def sample_mountinfo() -> str:
    """Sample /proc/<pid>/mountinfo content."""
    return (
        "22 1 8:1 / / rw,relatime shared:1 - ext4 /dev/sda1 rw,errors=remount-ro\n"
        "23 22 0:21 / /proc rw,nosuid,nodev,noexec,relatime shared:12 - proc proc rw\n"
        "35 22 8:17 / /home rw,relatime shared:20 - ext4 /dev/sdb1 rw\n"
        "41 22 8:33 / /mnt/data rw,noatime - xfs /dev/sdc1 rw,attr2\n"
        "42 41 8:49 /sub /mnt/data/my\\040disk rw master:3 - vfat /dev/sdd1 rw\n"
    )


@pytest.fixture
def home_trash(tmp_path: Path) -> TrashDirectory:
    """Home trash located under the test directory."""
    return TrashDirectory(tmp_path / "data" / "Trash")


@pytest.fixture
def foreign_mount(tmp_path: Path) -> Path:
    """A directory that the test mount table reports as a separate mount."""
    mount = tmp_path / "ext"
    mount.mkdir()
    return mount


@pytest.fixture
def trash_context(home_trash: TrashDirectory, foreign_mount: Path) -> TrashContext:
    """Context with '/' (owning the home trash) and one foreign mount."""
    mounts = MountTable([_make_mount(1, "/", parent_id=0), _make_mount(2, foreign_mount)])
    return TrashContext(mounts=mounts, home_trash=home_trash, uid=os.getuid())


@pytest.fixture
def fixed_now() -> datetime:
    """A fixed local deletion time."""
    return datetime(2024, 5, 1, 13, 45, 10, 123000)
