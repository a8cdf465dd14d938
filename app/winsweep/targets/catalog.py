"""Built-in cleanup targets.

Well-known cache and temp locations for Windows, browsers and developer
tooling. Locations are derived from the standard environment variables
(%TEMP%, %LOCALAPPDATA%, %APPDATA%, %SYSTEMROOT%, %PROGRAMDATA%) with
profile-based fallbacks, and are resolved when the tables are built.
"""

import os
from enum import Enum
from pathlib import Path

from winsweep.cleanup.models import CleanupCandidate, ItemType, SweepTarget


class TargetGroup(str, Enum):
    """Groups of cleanup targets selectable from the CLI."""

    SYSTEM = "system"
    BROWSERS = "browsers"
    DEVELOPER = "developer"


ALL_GROUPS: tuple[TargetGroup, ...] = tuple(TargetGroup)


def _env(name: str, fallback: str) -> str:
    return os.environ.get(name) or fallback


def _profile() -> str:
    return _env("USERPROFILE", str(Path.home()))


def _local_appdata() -> str:
    return _env("LOCALAPPDATA", f"{_profile()}\\AppData\\Local")


def _roaming_appdata() -> str:
    return _env("APPDATA", f"{_profile()}\\AppData\\Roaming")


def _system_root() -> str:
    return _env("SYSTEMROOT", f"{_env('SYSTEMDRIVE', 'C:')}\\Windows")


def _program_data() -> str:
    return _env("PROGRAMDATA", f"{_env('SYSTEMDRIVE', 'C:')}\\ProgramData")


def _system_candidates() -> list[CleanupCandidate]:
    local = _local_appdata()
    temp = _env("TEMP", f"{local}\\Temp")
    system_root = _system_root()
    program_data = _program_data()
    return [
        CleanupCandidate(f"{temp}\\*", "User temp files"),
        CleanupCandidate(f"{system_root}\\Temp\\*", "Windows temp files"),
        CleanupCandidate(f"{system_root}\\Prefetch\\*.pf", "Prefetch data", age_days=30),
        CleanupCandidate(
            f"{system_root}\\SoftwareDistribution\\Download\\*",
            "Windows Update download cache",
            age_days=14,
        ),
        CleanupCandidate(f"{system_root}\\Logs\\CBS\\*.log", "Component servicing logs"),
        CleanupCandidate(
            f"{local}\\Microsoft\\Windows\\INetCache\\*", "Internet cache", age_days=0
        ),
        CleanupCandidate(
            f"{local}\\Microsoft\\Windows\\Explorer\\thumbcache_*.db",
            "Thumbnail cache",
            age_days=0,
        ),
        CleanupCandidate(f"{local}\\CrashDumps\\*", "Application crash dumps", age_days=0),
        CleanupCandidate(
            f"{program_data}\\Microsoft\\Windows\\WER\\ReportArchive\\*",
            "Windows Error Reporting archive",
        ),
        CleanupCandidate(
            f"{program_data}\\Microsoft\\Windows\\WER\\ReportQueue\\*",
            "Windows Error Reporting queue",
        ),
    ]


def _browser_candidates() -> list[CleanupCandidate]:
    local = _local_appdata()
    chromium = {
        "Chrome": f"{local}\\Google\\Chrome\\User Data",
        "Edge": f"{local}\\Microsoft\\Edge\\User Data",
        "Brave": f"{local}\\BraveSoftware\\Brave-Browser\\User Data",
        "Vivaldi": f"{local}\\Vivaldi\\User Data",
    }
    candidates: list[CleanupCandidate] = []
    for name, user_data in chromium.items():
        candidates.extend(
            [
                CleanupCandidate(f"{user_data}\\*\\Cache\\*", f"{name} cache", age_days=0),
                CleanupCandidate(
                    f"{user_data}\\*\\Code Cache\\*", f"{name} code cache", age_days=0
                ),
                CleanupCandidate(f"{user_data}\\*\\GPUCache\\*", f"{name} GPU cache", age_days=0),
                CleanupCandidate(
                    f"{user_data}\\*\\Service Worker\\CacheStorage\\*",
                    f"{name} service worker cache",
                    age_days=0,
                ),
            ]
        )
    candidates.extend(
        [
            CleanupCandidate(
                f"{local}\\Mozilla\\Firefox\\Profiles\\*\\cache2\\*",
                "Firefox cache",
                age_days=0,
            ),
            CleanupCandidate(
                f"{local}\\Mozilla\\Firefox\\Profiles\\*\\startupCache\\*",
                "Firefox startup cache",
                age_days=0,
            ),
        ]
    )
    return candidates


def _developer_candidates() -> list[CleanupCandidate]:
    local = _local_appdata()
    roaming = _roaming_appdata()
    profile = _profile()
    return [
        CleanupCandidate(f"{local}\\npm-cache\\_cacache\\*", "npm cache"),
        CleanupCandidate(f"{roaming}\\npm-cache\\_cacache\\*", "npm cache (roaming)"),
        CleanupCandidate(f"{local}\\pip\\cache\\*", "pip cache"),
        CleanupCandidate(f"{local}\\Yarn\\Cache\\*", "Yarn cache"),
        CleanupCandidate(f"{local}\\pnpm-cache\\*", "pnpm cache"),
        CleanupCandidate(f"{local}\\go-build\\*", "Go build cache"),
        CleanupCandidate(f"{local}\\NuGet\\v3-cache\\*", "NuGet HTTP cache"),
        CleanupCandidate(f"{profile}\\.gradle\\caches\\*", "Gradle caches", age_days=30),
        CleanupCandidate(f"{profile}\\.cargo\\registry\\cache\\*", "Cargo registry cache"),
        CleanupCandidate(f"{local}\\Temp\\VSFeedbackIntelliCodeLogs\\*", "Visual Studio logs"),
    ]


_CANDIDATE_BUILDERS = {
    TargetGroup.SYSTEM: _system_candidates,
    TargetGroup.BROWSERS: _browser_candidates,
    TargetGroup.DEVELOPER: _developer_candidates,
}


def get_candidates(
    groups: tuple[TargetGroup, ...] | list[TargetGroup] = ALL_GROUPS,
) -> list[CleanupCandidate]:
    """Build cleanup candidates for the selected groups.

    Args:
        groups: Target groups to include, in order.

    Returns:
        Candidates in group order.
    """
    candidates: list[CleanupCandidate] = []
    for group in dict.fromkeys(groups):
        candidates.extend(_CANDIDATE_BUILDERS[group]())
    return candidates


def get_sweep_targets(
    groups: tuple[TargetGroup, ...] | list[TargetGroup] = ALL_GROUPS,
) -> list[SweepTarget]:
    """Build recursive sweep targets for the selected groups.

    Args:
        groups: Target groups to include.

    Returns:
        Sweep targets in group order.
    """
    selected = set(groups)
    local = _local_appdata()
    profile = _profile()
    targets: list[SweepTarget] = []

    if TargetGroup.SYSTEM in selected:
        targets.extend(
            [
                SweepTarget(local, "*.dmp", "Stray memory dumps", age_days=7, max_depth=3),
                SweepTarget(
                    _env("TEMP", f"{local}\\Temp"),
                    "*.tmp",
                    "Nested temp files",
                    age_days=7,
                    max_depth=4,
                ),
            ]
        )

    if TargetGroup.DEVELOPER in selected:
        targets.append(
            SweepTarget(
                f"{profile}\\source\\repos",
                "__pycache__",
                "Python bytecode caches",
                age_days=0,
                item_type=ItemType.DIRECTORY,
                max_depth=6,
            )
        )

    return targets
