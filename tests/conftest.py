"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest

WINDOWS_ENV = {
    "SYSTEMDRIVE": "C:",
    "SYSTEMROOT": "C:\\Windows",
    "PROGRAMFILES": "C:\\Program Files",
    "PROGRAMFILES(X86)": "C:\\Program Files (x86)",
    "PROGRAMDATA": "C:\\ProgramData",
    "USERPROFILE": "C:\\Users\\tester",
    "LOCALAPPDATA": "C:\\Users\\tester\\AppData\\Local",
    "APPDATA": "C:\\Users\\tester\\AppData\\Roaming",
    "TEMP": "C:\\Users\\tester\\AppData\\Local\\Temp",
}


@pytest.fixture(autouse=True)
def windows_env(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Pin the Windows location variables to a standard layout."""
    for name, value in WINDOWS_ENV.items():
        monkeypatch.setenv(name, value)
    return WINDOWS_ENV


@pytest.fixture
def config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the config directory at a temporary location."""
    base = tmp_path / "config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(base))
    return base / "winsweep"


@pytest.fixture
def sized_files(tmp_path: Path) -> Path:
    """Directory holding three log files of 10, 20 and 30 bytes."""
    root = tmp_path / "cache"
    root.mkdir()
    for name, size in (("a.log", 10), ("b.log", 20), ("c.log", 30)):
        (root / name).write_bytes(b"x" * size)
    return root
