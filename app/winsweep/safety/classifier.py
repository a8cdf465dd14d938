"""Path classification predicates.

Pure, side-effect-free checks over a single path string that decide
whether a path belongs to the operating system, to security-sensitive
application data, or to the user's whitelist.

Critical system paths protect in both directions: a path is critical when
it is a listed directory, lies inside one, or contains one. Deleting a
folder that merely holds something critical is refused as well.
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from winsweep.safety.globmatch import (
    expand_path,
    glob_match,
    is_ancestor,
    is_descendant,
    normalize_path,
    split_segments,
)


class ProtectionCategory(str, Enum):
    """Origin of a protection rule.

    Attributes:
        CRITICAL_SYSTEM: Directory required by the OS or protected user libraries.
        PROTECTED_DATA: Security-sensitive application data.
        WHITELIST_CUSTOM: Pattern added by the user.
        WHITELIST_DEFAULT: Pattern from the built-in whitelist defaults.
    """

    CRITICAL_SYSTEM = "critical_system"
    PROTECTED_DATA = "protected_data"
    WHITELIST_CUSTOM = "whitelist_custom"
    WHITELIST_DEFAULT = "whitelist_default"


@dataclass(frozen=True, slots=True)
class ProtectionPattern:
    """A single protection rule.

    Attributes:
        pattern: Glob or path-prefix string.
        category: Where the rule comes from.
    """

    pattern: str
    category: ProtectionCategory

    def __post_init__(self) -> None:
        """Validate pattern data after initialization."""
        if not self.pattern.strip():
            msg = "Protection pattern cannot be empty"
            raise ValueError(msg)


# Application data that must survive even when it sits inside a cache-like
# folder. Matched case-insensitively against the whole path, so a trailing
# ``*`` also covers everything below the match.
PROTECTED_APP_DATA_PATTERNS: tuple[str, ...] = (
    # Password managers
    "*\\KeePass*",
    "*\\KeePassXC*",
    "*\\1Password*",
    "*\\Bitwarden*",
    "*\\LastPass*",
    "*\\Dashlane*",
    "*\\Enpass*",
    # IDE settings and workspaces
    "*\\Code\\User*",
    "*\\Code - Insiders\\User*",
    "*\\JetBrains\\*\\options*",
    "*\\.vscode\\settings.json",
    "*\\.idea\\*",
    "*\\Visual Studio\\*\\Settings*",
    # VPN clients
    "*\\NordVPN*",
    "*\\OpenVPN*",
    "*\\WireGuard*",
    "*\\ProtonVPN*",
    # Cloud sync
    "*\\OneDrive\\settings*",
    "*\\Dropbox\\instance*",
    "*\\Google\\DriveFS*",
    # Communication apps
    "*\\Signal\\sql*",
    "*\\Telegram Desktop\\tdata*",
    "*\\Thunderbird\\Profiles*",
    "*\\Microsoft\\Outlook*",
    # Browser profile data (never the Cache folders next to it)
    "*\\User Data\\*\\Bookmarks*",
    "*\\User Data\\*\\Login Data*",
    "*\\User Data\\*\\Preferences",
    "*\\User Data\\*\\Secure Preferences",
    "*\\User Data\\*\\Cookies*",
    "*\\User Data\\*\\Network\\Cookies*",
    "*\\User Data\\*\\History",
    "*\\User Data\\*\\Web Data*",
    "*\\User Data\\*\\Extensions*",
    "*\\User Data\\Local State",
    "*\\Firefox\\Profiles\\*\\places.sqlite*",
    "*\\Firefox\\Profiles\\*\\logins.json",
    "*\\Firefox\\Profiles\\*\\key4.db",
    "*\\Firefox\\Profiles\\*\\cookies.sqlite*",
    "*\\Firefox\\Profiles\\*\\prefs.js",
    "*\\Firefox\\Profiles\\*\\extensions*",
)

# Folders inside the user profile that hold user documents or credentials.
_PROFILE_CRITICAL_SUBDIRS: tuple[str, ...] = (
    "Documents",
    "Desktop",
    "Downloads",
    "Pictures",
    "Music",
    "Videos",
    "Favorites",
    "Contacts",
    "Saved Games",
    ".ssh",
    ".gnupg",
    "AppData\\Roaming\\Microsoft\\Credentials",
    "AppData\\Roaming\\Microsoft\\Protect",
    "AppData\\Roaming\\Microsoft\\Crypto",
    "AppData\\Roaming\\Microsoft\\SystemCertificates",
    "AppData\\Local\\Microsoft\\Credentials",
    "AppData\\Local\\Microsoft\\Vault",
)

# Directories under %SYSTEMROOT%; %SYSTEMROOT% itself is covered as an ancestor.
_SYSTEMROOT_CRITICAL_SUBDIRS: tuple[str, ...] = (
    "System32",
    "SysWOW64",
    "WinSxS",
    "Boot",
    "Fonts",
    "servicing",
    "assembly",
    "Microsoft.NET",
    "SystemApps",
    "SystemResources",
    "security",
)


def get_user_profile() -> str:
    """Get the user profile root (%USERPROFILE%, falling back to the home directory)."""
    return os.environ.get("USERPROFILE") or str(Path.home())


def critical_system_paths() -> tuple[str, ...]:
    """Build the list of critical system directories.

    Locations are read from the environment at call time and default to
    the standard Windows layout.

    Returns:
        Tuple of absolute directory paths.
    """
    system_drive = os.environ.get("SYSTEMDRIVE", "C:")
    system_root = os.environ.get("SYSTEMROOT", f"{system_drive}\\Windows")
    program_files = os.environ.get("PROGRAMFILES", f"{system_drive}\\Program Files")
    program_files_x86 = os.environ.get(
        "PROGRAMFILES(X86)", f"{system_drive}\\Program Files (x86)"
    )
    program_data = os.environ.get("PROGRAMDATA", f"{system_drive}\\ProgramData")
    profile = get_user_profile()

    paths: list[str] = [f"{system_root}\\{sub}" for sub in _SYSTEMROOT_CRITICAL_SUBDIRS]
    paths.extend(
        [
            program_files,
            program_files_x86,
            f"{program_data}\\Microsoft\\Crypto",
            f"{program_data}\\Microsoft\\Windows Defender",
            f"{system_drive}\\System Volume Information",
            f"{system_drive}\\$Recycle.Bin",
            f"{system_drive}\\Recovery",
            f"{system_drive}\\Boot",
        ]
    )
    paths.extend(f"{profile}\\{sub}" for sub in _PROFILE_CRITICAL_SUBDIRS)
    return tuple(paths)


def protection_patterns() -> tuple[ProtectionPattern, ...]:
    """Expose the built-in rules as tagged patterns (critical first)."""
    critical = (
        ProtectionPattern(path, ProtectionCategory.CRITICAL_SYSTEM)
        for path in critical_system_paths()
    )
    protected = (
        ProtectionPattern(pattern, ProtectionCategory.PROTECTED_DATA)
        for pattern in PROTECTED_APP_DATA_PATTERNS
    )
    return (*critical, *protected)


def is_critical_system_path(path: str) -> bool:
    """Check if a path is, lies inside, or contains a critical system directory.

    Comparison is case-insensitive and ignores trailing separators.

    Args:
        path: Absolute path to check.

    Returns:
        True if the path must never be deleted.
    """
    if not path.strip():
        return False

    segments = split_segments(path)
    for critical in critical_system_paths():
        critical_segments = split_segments(critical)
        if segments == critical_segments:
            return True
        if is_descendant(segments, critical_segments):
            return True
        if is_ancestor(segments, critical_segments):
            return True
    return False


def is_protected_application_data(path: str) -> bool:
    """Check if a path matches a security-sensitive application data pattern.

    Args:
        path: Absolute path to check.

    Returns:
        True if the path matches any protected application data pattern.
    """
    return any(glob_match(pattern, path) for pattern in PROTECTED_APP_DATA_PATTERNS)


def is_whitelisted(path: str, patterns: tuple[str, ...] | list[str]) -> bool:
    """Check if a path is covered by a whitelist pattern.

    A path is whitelisted when it equals or glob-matches a pattern, lies
    inside a pattern, or contains a pattern. Patterns may use ``~`` and
    environment variables.

    Args:
        path: Absolute path to check.
        patterns: Whitelist pattern snapshot.

    Returns:
        True if any pattern protects the path.
    """
    if not path.strip():
        return False

    segments = split_segments(path)
    for raw in patterns:
        if not raw.strip():
            continue
        pattern = expand_path(raw)
        if normalize_path(pattern) == normalize_path(path):
            return True
        if glob_match(pattern, path):
            return True
        pattern_segments = split_segments(pattern)
        if is_descendant(segments, pattern_segments):
            return True
        if is_ancestor(segments, pattern_segments):
            return True
    return False


def should_protect(path: str) -> bool:
    """Check if a path is protected by the built-in rules.

    The whitelist is not part of this check; callers test
    it separately against their own snapshot.

    Args:
        path: Path to check.

    Returns:
        True for empty paths, critical system paths, protected application
        data, and the user profile root itself.
    """
    if not path or not path.strip():
        return True
    if is_critical_system_path(path):
        return True
    if is_protected_application_data(path):
        return True
    return normalize_path(path) == normalize_path(get_user_profile())
