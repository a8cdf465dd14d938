"""Unit tests for whitelist commands."""

from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner
from winsweep.cli.main import app
from winsweep.whitelist.store import DEFAULT_WHITELIST_PATTERNS, WhitelistStore

runner = CliRunner()


def _stored(config_home: Path) -> list[str]:
    return WhitelistStore(config_home / "whitelist.txt").load()


class TestWhitelistList:
    """Tests for winsweep whitelist list."""

    def test_lists_defaults(self, config_home: Path) -> None:
        """A fresh install shows the default patterns."""
        result = runner.invoke(app, ["whitelist", "list"])

        assert result.exit_code == 0
        assert "default" in result.output
        assert "custom" not in result.output

    def test_marks_custom_patterns(self, config_home: Path) -> None:
        """User patterns are marked as custom."""
        config_home.mkdir(parents=True)
        (config_home / "whitelist.txt").write_text("C:\\Keep\n", encoding="utf-8")

        result = runner.invoke(app, ["whitelist", "list"])

        assert result.exit_code == 0
        assert "C:\\Keep" in result.output
        assert "custom" in result.output


class TestWhitelistAdd:
    """Tests for winsweep whitelist add."""

    def test_add(self, config_home: Path) -> None:
        """Added patterns are persisted."""
        result = runner.invoke(app, ["whitelist", "add", "C:\\Keep"])

        assert result.exit_code == 0
        assert "Added to whitelist" in result.output
        assert "C:\\Keep" in _stored(config_home)

    def test_add_duplicate(self, config_home: Path) -> None:
        """Adding twice reports the pattern is already there."""
        runner.invoke(app, ["whitelist", "add", "C:\\Keep"])

        result = runner.invoke(app, ["whitelist", "add", "C:\\Keep"])

        assert result.exit_code == 0
        assert "Already whitelisted" in result.output

    def test_add_empty(self, config_home: Path) -> None:
        """Empty patterns fail with exit code 1."""
        result = runner.invoke(app, ["whitelist", "add", "  "])

        assert result.exit_code == 1
        assert "cannot be empty" in result.output

    def test_add_write_failure_warns(self, config_home: Path) -> None:
        """A failed write is reported but does not fail the command."""
        with patch.object(Path, "write_text", side_effect=OSError("read-only")):
            result = runner.invoke(app, ["whitelist", "add", "C:\\Keep"])

        assert result.exit_code == 0
        assert "Change not saved" in result.output

    def test_config_dir_failure_is_not_fatal(self, config_home: Path) -> None:
        """An uncreatable config directory degrades to a warning."""
        with (
            patch(
                "winsweep.cli.commands.whitelist.ensure_config_dir",
                side_effect=RuntimeError("Cannot create config directory"),
            ),
            patch.object(Path, "write_text", side_effect=OSError("read-only")),
        ):
            result = runner.invoke(app, ["whitelist", "add", "C:\\Keep"])

        assert result.exit_code == 0
        assert "Cannot create config directory" in result.output
        assert "Added to whitelist" in result.output


class TestWhitelistRemove:
    """Tests for winsweep whitelist remove."""

    def test_remove(self, config_home: Path) -> None:
        """Removed patterns are gone from the file."""
        runner.invoke(app, ["whitelist", "add", "C:\\Keep"])

        result = runner.invoke(app, ["whitelist", "remove", "C:\\Keep"])

        assert result.exit_code == 0
        assert "Removed from whitelist" in result.output
        assert "C:\\Keep" not in _stored(config_home)

    def test_remove_missing(self, config_home: Path) -> None:
        """Removing an unknown pattern warns without failing."""
        result = runner.invoke(app, ["whitelist", "remove", "C:\\Nope"])

        assert result.exit_code == 0
        assert "not in whitelist" in result.output


class TestWhitelistReset:
    """Tests for winsweep whitelist reset."""

    def test_reset_with_yes(self, config_home: Path) -> None:
        """--yes restores the defaults without prompting."""
        runner.invoke(app, ["whitelist", "add", "C:\\Keep"])

        result = runner.invoke(app, ["whitelist", "reset", "--yes"])

        assert result.exit_code == 0
        assert _stored(config_home) == list(DEFAULT_WHITELIST_PATTERNS)

    def test_reset_declined(self, config_home: Path) -> None:
        """Declining the prompt keeps custom patterns."""
        runner.invoke(app, ["whitelist", "add", "C:\\Keep"])

        result = runner.invoke(app, ["whitelist", "reset"], input="n\n")

        assert result.exit_code == 0
        assert "Aborted." in result.output
        assert "C:\\Keep" in _stored(config_home)


class TestWhitelistStats:
    """Tests for winsweep whitelist stats and path."""

    def test_stats(self, config_home: Path) -> None:
        """Stats show total, default and custom counts."""
        runner.invoke(app, ["whitelist", "add", "C:\\Keep"])

        result = runner.invoke(app, ["whitelist", "stats"])

        total = len(DEFAULT_WHITELIST_PATTERNS) + 1
        assert result.exit_code == 0
        assert f"Total: {total}" in result.output
        assert "Custom: 1" in result.output

    def test_path(self, config_home: Path) -> None:
        """path prints the whitelist file location."""
        result = runner.invoke(app, ["whitelist", "path"])

        assert result.exit_code == 0
        assert result.output.strip() == str(config_home / "whitelist.txt")
