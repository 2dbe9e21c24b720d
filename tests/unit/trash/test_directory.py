"""Unit tests for trash directories and record enumeration."""

import errno
from pathlib import Path
from unittest.mock import patch

import pytest
from garbage.trash.directory import TrashDirectory
from garbage.trash.errors import (
    MissingHeaderError,
    RecordDateError,
    TrashIOError,
    TrashWalkError,
)
from garbage.trash.record import TrashRecord


class TestTrashDirectory:
    """Tests for TrashDirectory basics."""

    def test_home(self, tmp_path: Path) -> None:
        """The home trash lives in <data home>/Trash."""
        assert TrashDirectory.home(tmp_path).path == tmp_path / "Trash"

    def test_from_optional(self, tmp_path: Path) -> None:
        """An explicit path wins over the home trash."""
        home = TrashDirectory(tmp_path / "home")
        assert TrashDirectory.from_optional(None, home) is home
        assert TrashDirectory.from_optional(tmp_path / "x", home).path == tmp_path / "x"

    def test_equality(self, tmp_path: Path) -> None:
        """Directories compare by path."""
        assert TrashDirectory(tmp_path) == TrashDirectory(tmp_path)
        assert TrashDirectory(tmp_path) != TrashDirectory(tmp_path / "other")
        assert len({TrashDirectory(tmp_path), TrashDirectory(tmp_path)}) == 1

    def test_subdirs_created_on_demand(self, tmp_path: Path) -> None:
        """files/ and info/ are created when first requested."""
        trash = TrashDirectory(tmp_path / "Trash")
        assert not trash.exists()
        assert trash.check_info_dir() is None

        assert trash.files_dir() == tmp_path / "Trash" / "files"
        assert trash.info_dir().is_dir()
        assert trash.exists()
        assert trash.check_info_dir() == tmp_path / "Trash" / "info"

    def test_create_fails_on_file(self, tmp_path: Path) -> None:
        """A regular file in the way raises TrashIOError."""
        blocker = tmp_path / "Trash"
        blocker.write_text("not a directory")
        with pytest.raises(TrashIOError, match="Cannot create trash directory"):
            TrashDirectory(blocker).create()

    def test_payload_path(self, tmp_path: Path) -> None:
        """The payload shares the record's name without the suffix."""
        trash = TrashDirectory(tmp_path)
        assert trash.payload_path("123.a.txt.trashinfo") == tmp_path / "files" / "123.a.txt"


class TestIterate:
    """Tests for TrashDirectory.iterate."""

    def test_empty_trash(self, tmp_path: Path) -> None:
        """A new trash yields nothing and gets an info/ directory."""
        trash = TrashDirectory(tmp_path / "Trash")
        assert list(trash.iterate()) == []
        assert (tmp_path / "Trash" / "info").is_dir()

    def test_yields_records(self, tmp_path: Path, write_record) -> None:
        """Each valid record is yielded with its payload path."""
        root = tmp_path / "Trash"
        write_record(root, "1.a.txt", "/home/u/a.txt")
        write_record(root, "2.b.txt", "/home/u/b.txt")

        items = list(TrashDirectory(root).iterate())

        assert all(isinstance(i, TrashRecord) for i in items)
        assert sorted(str(i.path) for i in items) == ["/home/u/a.txt", "/home/u/b.txt"]
        by_name = {i.name: i for i in items}
        assert by_name["1.a.txt"].deleted_path == root / "files" / "1.a.txt"

    def test_missing_payload_still_yielded(self, tmp_path: Path, write_record) -> None:
        """Records are yielded even when their payload is gone."""
        root = tmp_path / "Trash"
        write_record(root, "1.a.txt", "/home/u/a.txt", payload=False)

        items = list(TrashDirectory(root).iterate())

        assert len(items) == 1
        assert isinstance(items[0], TrashRecord)

    def test_skips_other_files(self, tmp_path: Path, write_record) -> None:
        """Names without the .trashinfo suffix are ignored."""
        root = tmp_path / "Trash"
        write_record(root, "1.a.txt", "/home/u/a.txt")
        (root / "info" / "README").write_text("hello")
        (root / "info" / "subdir").mkdir()
        (root / "info" / "subdir" / "9.z.trashinfo").write_text("[Trash Info]\n")

        items = list(TrashDirectory(root).iterate())

        assert len(items) == 1

    def test_bad_records_yielded_as_errors(self, tmp_path: Path, write_record) -> None:
        """Malformed records become error items and iteration continues."""
        root = tmp_path / "Trash"
        write_record(root, "1.a.txt", "/home/u/a.txt")
        (root / "info" / "2.bad.trashinfo").write_text("no header\n")
        (root / "info" / "3.date.trashinfo").write_text(
            "[Trash Info]\nPath=/x\nDeletionDate=yesterday\n"
        )

        items = list(TrashDirectory(root).iterate())

        assert len(items) == 3
        kinds = {type(i) for i in items}
        assert kinds == {TrashRecord, MissingHeaderError, RecordDateError}

    def test_walk_error_ends_iteration(self, tmp_path: Path) -> None:
        """A directory that cannot be listed yields one TrashWalkError."""
        trash = TrashDirectory(tmp_path / "Trash")
        info_dir = str(tmp_path / "Trash" / "info")
        error = PermissionError(errno.EACCES, "Permission denied", info_dir)

        with patch("garbage.trash.directory.os.scandir", side_effect=error):
            items = list(trash.iterate())

        assert len(items) == 1
        assert isinstance(items[0], TrashWalkError)
        assert items[0].path == Path(info_dir)
        assert "Permission denied" in str(items[0])

    def test_is_lazy(self, tmp_path: Path, write_record) -> None:
        """Nothing is read before the first item is requested."""
        root = tmp_path / "Trash"
        write_record(root, "1.a.txt", "/home/u/a.txt")

        with patch("garbage.trash.directory.os.scandir") as mock_scandir:
            iterator = TrashDirectory(root).iterate()
            mock_scandir.assert_not_called()
            del iterator

    def test_descends_into_matching_directories(self, tmp_path: Path, write_record) -> None:
        """Directories named '*.trashinfo' are walked."""
        root = tmp_path / "Trash"
        write_record(root, "1.a.txt", "/home/u/a.txt")
        nested = root / "info" / "nested.trashinfo"
        nested.mkdir()
        (nested / "5.c.trashinfo").write_text(
            "[Trash Info]\nPath=/home/u/c\nDeletionDate=2024-01-15T10:00:00\n"
        )

        items = list(TrashDirectory(root).iterate())

        assert sorted(str(i.path) for i in items) == ["/home/u/a.txt", "/home/u/c"]
        nested_record = next(i for i in items if str(i.path) == "/home/u/c")
        assert nested_record.deleted_path == root / "files" / "5.c"
