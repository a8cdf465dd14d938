"""Unit tests for the check command and global options."""

from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner
from winsweep import __version__
from winsweep.cli.main import app
from winsweep.safety.classifier import PROTECTED_APP_DATA_PATTERNS, critical_system_paths
from winsweep.whitelist.store import DEFAULT_WHITELIST_PATTERNS

runner = CliRunner()


class TestGlobalOptions:
    """Tests for options on the main application."""

    def test_version(self) -> None:
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"winsweep version {__version__}" in result.output

    def test_no_args_shows_help(self) -> None:
        """Running without a command prints usage."""
        result = runner.invoke(app, [])

        assert "Usage" in result.output

    def test_debug_configures_logging(self, config_home: Path) -> None:
        """--debug switches logging to debug level."""
        with patch("winsweep.cli.main.configure_logging") as mock_logging:
            runner.invoke(app, ["--debug", "check", "C:\\Temp\\x"])

        mock_logging.assert_called_once_with(True)


class TestCheckCommand:
    """Tests for winsweep check."""

    def test_allowed_path(self, config_home: Path) -> None:
        """An ordinary cache path is allowed and exits 0."""
        result = runner.invoke(app, ["check", "C:\\Temp\\x"])

        assert result.exit_code == 0
        assert "allowed" in result.output

    def test_critical_path_refused(self, config_home: Path) -> None:
        """A critical path is refused and exits 1."""
        result = runner.invoke(app, ["check", "C:\\Windows"])

        assert result.exit_code == 1
        assert "refused" in result.output
        assert "Critical system path" in result.output

    def test_mixed_paths(self, config_home: Path) -> None:
        """One refusal among several paths fails the command."""
        result = runner.invoke(app, ["check", "C:\\Temp\\x", "relative\\path"])

        assert result.exit_code == 1
        assert "allowed" in result.output
        assert "refused" in result.output

    def test_uses_whitelist(self, config_home: Path) -> None:
        """Paths covered by the stored whitelist are refused."""
        config_home.mkdir(parents=True)
        (config_home / "whitelist.txt").write_text("C:\\Temp\n", encoding="utf-8")

        result = runner.invoke(app, ["check", "C:\\Temp\\x"])

        assert result.exit_code == 1
        assert "whitelisted" in result.output

    def test_expands_variables(self, config_home: Path) -> None:
        """Environment variables in arguments are expanded."""
        result = runner.invoke(app, ["check", "%SYSTEMROOT%\\System32"])

        assert result.exit_code == 1
        assert "Critical system path" in result.output


class TestRulesCommand:
    """Tests for winsweep rules."""

    def test_lists_every_category(self, config_home: Path) -> None:
        """Built-in rules and whitelist patterns are listed with their category."""
        config_home.mkdir(parents=True)
        (config_home / "whitelist.txt").write_text("C:\\Keep\n", encoding="utf-8")

        result = runner.invoke(app, ["rules"])

        assert result.exit_code == 0
        assert "critical_system" in result.output
        assert "protected_data" in result.output
        assert "whitelist_custom" in result.output
        assert "whitelist_default" not in result.output
        total = len(critical_system_paths()) + len(PROTECTED_APP_DATA_PATTERNS) + 1
        assert f"{total} rule(s)" in result.output

    def test_default_whitelist_tagged(self, config_home: Path) -> None:
        """A fresh install lists the default whitelist."""
        result = runner.invoke(app, ["rules"])

        total = (
            len(critical_system_paths())
            + len(PROTECTED_APP_DATA_PATTERNS)
            + len(DEFAULT_WHITELIST_PATTERNS)
        )
        assert result.exit_code == 0
        assert "whitelist_default" in result.output
        assert f"{total} rule(s)" in result.output
