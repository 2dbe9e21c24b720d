"""Unit tests for the put command."""

from pathlib import Path
from unittest.mock import patch

import pytest
from garbage.cli.main import app
from garbage.core.context import TrashContext
from garbage.trash.errors import MountTableError
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture(autouse=True)
def patched_context(trash_context: TrashContext):
    """Use the test mount table instead of the real one."""
    with patch("garbage.cli.types.TrashContext.load", return_value=trash_context):
        yield trash_context


class TestPutCommand:
    """Tests for garbage put."""

    def test_trashes_file(self, tmp_path: Path, trash_context: TrashContext) -> None:
        """A file is moved to the home trash."""
        target = tmp_path / "a.txt"
        target.write_text("a")

        result = runner.invoke(app, ["put", str(target)])

        assert result.exit_code == 0
        assert "1 path(s) moved to the trash." in result.output
        assert not target.exists()
        assert len(list(trash_context.home_trash.iterate())) == 1

    def test_quiet(self, tmp_path: Path) -> None:
        """--quiet hides the success summary."""
        target = tmp_path / "a.txt"
        target.write_text("a")

        result = runner.invoke(app, ["--quiet", "put", str(target)])

        assert result.exit_code == 0
        assert "moved to the trash" not in result.output
        assert not target.exists()

    def test_missing_path(self, tmp_path: Path) -> None:
        """A missing path fails with exit code 1."""
        result = runner.invoke(app, ["put", str(tmp_path / "missing")])

        assert result.exit_code == 1
        assert "does not exist" in result.output

    def test_partial_failure_still_trashes_others(self, tmp_path: Path) -> None:
        """Valid paths are trashed even when another one fails."""
        target = tmp_path / "a.txt"
        target.write_text("a")

        result = runner.invoke(app, ["put", str(tmp_path / "missing"), str(target)])

        assert result.exit_code == 1
        assert not target.exists()

    def test_directory_needs_recursive(self, tmp_path: Path) -> None:
        """Directories need -r."""
        folder = tmp_path / "folder"
        folder.mkdir()

        result = runner.invoke(app, ["put", str(folder)])
        assert result.exit_code == 1
        assert folder.exists()

        result = runner.invoke(app, ["put", "-r", str(folder)])
        assert result.exit_code == 0
        assert not folder.exists()

    def test_dry_run(self, tmp_path: Path) -> None:
        """--dry-run shows the plan and leaves files alone."""
        target = tmp_path / "a.txt"
        target.write_text("a")

        result = runner.invoke(app, ["put", "--dry-run", str(target)])

        assert result.exit_code == 0
        assert "Planned Trash (dry-run)" in result.output
        assert "move" in result.output
        assert target.exists()

    def test_copy_confirmation_declined(
        self, foreign_mount: Path, trash_context: TrashContext
    ) -> None:
        """Answering no to the copy prompt keeps the file."""
        (foreign_mount / f".Trash-{trash_context.uid}").write_text("in the way")
        target = foreign_mount / "a.txt"
        target.write_text("a")

        result = runner.invoke(app, ["put", str(target)], input="n\n")

        assert result.exit_code == 1
        assert "Cancelled by user." in result.output
        assert target.exists()

    def test_copy_confirmation_skipped_with_force(
        self, foreign_mount: Path, trash_context: TrashContext
    ) -> None:
        """--force copies without asking."""
        (foreign_mount / f".Trash-{trash_context.uid}").write_text("in the way")
        target = foreign_mount / "a.txt"
        target.write_text("a")

        result = runner.invoke(app, ["put", "--force", str(target)])

        assert result.exit_code == 0
        assert not target.exists()
        assert len(list(trash_context.home_trash.iterate())) == 1

    def test_copy_confirmation_disabled_in_config(
        self, foreign_mount: Path, trash_context: TrashContext, tmp_path: Path
    ) -> None:
        """confirm_copy = false in the config skips the prompt."""
        config_path = tmp_path / "xdg-config" / "garbage" / "config.toml"
        config_path.parent.mkdir(parents=True)
        config_path.write_text("confirm_copy = false\n")
        (foreign_mount / f".Trash-{trash_context.uid}").write_text("in the way")
        target = foreign_mount / "a.txt"
        target.write_text("a")

        result = runner.invoke(app, ["put", str(target)])

        assert result.exit_code == 0
        assert not target.exists()

    def test_explicit_trash_dir(self, tmp_path: Path) -> None:
        """--trash-dir puts everything in the given directory."""
        target = tmp_path / "a.txt"
        target.write_text("a")
        custom = tmp_path / "custom"

        result = runner.invoke(app, ["put", "--trash-dir", str(custom), str(target)], input="y\n")

        assert result.exit_code == 0
        assert len(list((custom / "info").iterdir())) == 1

    def test_mount_table_unreadable(self, tmp_path: Path) -> None:
        """A missing mount table is fatal."""
        target = tmp_path / "a.txt"
        target.write_text("a")

        with patch(
            "garbage.cli.types.TrashContext.load",
            side_effect=MountTableError("Cannot read mount table"),
        ):
            result = runner.invoke(app, ["put", str(target)])

        assert result.exit_code == 1
        assert "Cannot read mount table" in result.output
        assert target.exists()
