"""Unit tests for the built-in cleanup target tables."""

import pytest
from winsweep.cleanup.models import ItemType
from winsweep.safety.classifier import should_protect
from winsweep.safety.gate import validate_for_deletion
from winsweep.targets.catalog import (
    ALL_GROUPS,
    TargetGroup,
    get_candidates,
    get_sweep_targets,
)


class TestGetCandidates:
    """Tests for get_candidates function."""

    def test_all_groups_by_default(self) -> None:
        """Every group contributes candidates."""
        all_candidates = get_candidates()

        for group in ALL_GROUPS:
            assert set(get_candidates([group])) <= set(all_candidates)
        assert len(all_candidates) == sum(len(get_candidates([g])) for g in ALL_GROUPS)

    def test_locations_follow_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Paths are built from the environment at call time."""
        monkeypatch.setenv("TEMP", "E:\\Scratch")

        paths = [c.path for c in get_candidates([TargetGroup.SYSTEM])]

        assert "E:\\Scratch\\*" in paths
        assert "C:\\Windows\\Temp\\*" in paths

    def test_profile_fallback(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Missing app-data variables fall back to the profile layout."""
        monkeypatch.delenv("LOCALAPPDATA")

        paths = [c.path for c in get_candidates([TargetGroup.DEVELOPER])]

        assert "C:\\Users\\tester\\AppData\\Local\\pip\\cache\\*" in paths

    def test_duplicate_groups_collapse(self) -> None:
        """Listing a group twice does not duplicate its candidates."""
        once = get_candidates([TargetGroup.BROWSERS])
        twice = get_candidates([TargetGroup.BROWSERS, TargetGroup.BROWSERS])

        assert once == twice

    def test_browser_candidates_target_caches_only(self) -> None:
        """Browser candidates never point at protected profile data."""
        for candidate in get_candidates([TargetGroup.BROWSERS]):
            concrete = candidate.path.replace("*", "Default")
            assert not should_protect(concrete), candidate.path

    def test_candidates_outside_critical_paths(self) -> None:
        """Every candidate location would pass the safety gate."""
        for candidate in get_candidates():
            concrete = candidate.path.replace("*", "entry")
            assert validate_for_deletion(concrete).allowed, candidate.path


class TestGetSweepTargets:
    """Tests for get_sweep_targets function."""

    def test_system_sweeps(self) -> None:
        """System group sweeps dump and temp files."""
        targets = get_sweep_targets([TargetGroup.SYSTEM])

        assert {t.name_pattern for t in targets} == {"*.dmp", "*.tmp"}
        assert all(t.item_type == ItemType.FILE for t in targets)

    def test_developer_sweeps_directories(self) -> None:
        """Developer group sweeps bytecode cache directories."""
        targets = get_sweep_targets([TargetGroup.DEVELOPER])

        assert len(targets) == 1
        assert targets[0].item_type == ItemType.DIRECTORY
        assert targets[0].name_pattern == "__pycache__"

    def test_browsers_have_no_sweeps(self) -> None:
        """Browser caches are covered by candidates alone."""
        assert get_sweep_targets([TargetGroup.BROWSERS]) == []
