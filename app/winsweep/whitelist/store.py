"""Persistent, user-editable whitelist.

The whitelist is a UTF-8 text file with one glob pattern per line in the
config directory. Lines starting with ``#`` and blank lines are ignored.
When the file is missing, unreadable, or empty, the built-in defaults
apply.

The store never feeds the classifier directly: commands take a
``patterns`` snapshot and push it into their run context.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from winsweep.core.paths import get_whitelist_path
from winsweep.safety.classifier import ProtectionCategory, ProtectionPattern

logger = logging.getLogger(__name__)

DEFAULT_WHITELIST_PATTERNS: tuple[str, ...] = (
    # Browser profile essentials
    "~\\AppData\\Local\\Google\\Chrome\\User Data\\*\\Bookmarks",
    "~\\AppData\\Local\\Google\\Chrome\\User Data\\*\\Login Data",
    "~\\AppData\\Local\\Microsoft\\Edge\\User Data\\*\\Bookmarks",
    "~\\AppData\\Local\\Microsoft\\Edge\\User Data\\*\\Login Data",
    "~\\AppData\\Roaming\\Mozilla\\Firefox\\Profiles\\*\\places.sqlite",
    "~\\AppData\\Roaming\\Mozilla\\Firefox\\Profiles\\*\\logins.json",
    # IDE settings
    "~\\AppData\\Roaming\\Code\\User",
    "~\\AppData\\Roaming\\JetBrains",
    "~\\.vscode\\extensions",
    # Cloud sync folders
    "~\\OneDrive",
    "~\\Dropbox",
    "~\\Google Drive",
    # Local AI model caches
    "~\\.ollama\\models",
    "~\\.cache\\huggingface",
    "~\\.lmstudio\\models",
)

_HEADER = (
    "# winsweep whitelist\n"
    "# One glob pattern per line (* and ? wildcards, ~ and %VARS% expanded).\n"
    "# Paths matching a pattern, inside one, or containing one are never deleted.\n"
)


@dataclass(frozen=True, slots=True)
class WhitelistStats:
    """Breakdown of the current whitelist.

    Attributes:
        total: Number of patterns in effect.
        default: Patterns that are part of the built-in defaults.
        custom: Patterns added by the user.
    """

    total: int
    default: int
    custom: int


def parse_whitelist(text: str) -> list[str]:
    """Parse whitelist file content into patterns.

    Args:
        text: Raw file content.

    Returns:
        Patterns in file order, comments and blank lines dropped.
    """
    patterns: list[str] = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        patterns.append(stripped)
    return patterns


def _dedupe(patterns: list[str] | tuple[str, ...]) -> list[str]:
    return list(dict.fromkeys(p.strip() for p in patterns if p.strip()))


class WhitelistStore:
    """Manages the whitelist file.

    Storage location: ~/.config/winsweep/whitelist.txt

    Patterns are loaded lazily on first access and mutations apply to
    that in-memory set. Every mutation is persisted immediately; a failed
    write keeps the in-memory change, and later mutations build on it.
    """

    def __init__(self, path: Path | None = None) -> None:
        """Initialize WhitelistStore.

        Args:
            path: Optional override for the whitelist file.
                  Default: ~/.config/winsweep/whitelist.txt
        """
        self._path = path if path is not None else get_whitelist_path()
        self._patterns: list[str] | None = None
        self._persisted = True

    @property
    def path(self) -> Path:
        """Path to the whitelist file."""
        return self._path

    @property
    def persisted(self) -> bool:
        """Whether the last save reached the disk."""
        return self._persisted

    @property
    def patterns(self) -> tuple[str, ...]:
        """Snapshot of the current patterns (loads on first access)."""
        if self._patterns is None:
            self.load()
        return tuple(self._patterns or ())

    def load(self) -> list[str]:
        """Read patterns from disk, falling back to the defaults.

        Returns:
            Patterns in effect.
        """
        patterns: list[str] = []
        try:
            patterns = _dedupe(parse_whitelist(self._path.read_text(encoding="utf-8")))
        except FileNotFoundError:
            logger.debug("No whitelist at %s, using defaults", self._path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Cannot read whitelist %s, using defaults: %s", self._path, e)

        if not patterns:
            patterns = list(DEFAULT_WHITELIST_PATTERNS)

        self._patterns = patterns
        return list(patterns)

    def save(self, patterns: list[str] | tuple[str, ...]) -> bool:
        """Write patterns to disk, de-duplicated, under a comment header.

        The in-memory pattern set is updated even when writing fails.

        Args:
            patterns: Patterns to persist.

        Returns:
            True if the file was written, False otherwise.
        """
        unique = _dedupe(patterns)
        self._patterns = unique
        content = _HEADER + "".join(f"{p}\n" for p in unique)

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(content, encoding="utf-8")
        except OSError as e:
            logger.warning("Cannot write whitelist %s: %s", self._path, e)
            self._persisted = False
            return False
        self._persisted = True
        return True

    def add(self, pattern: str) -> bool:
        """Add a pattern and persist the whitelist.

        Args:
            pattern: Glob pattern to add.

        Returns:
            True if the pattern was added, False if it was already present.
            Check ``persisted`` to see whether the change reached the disk.

        Raises:
            ValueError: If the pattern is empty.
        """
        pattern = pattern.strip()
        if not pattern:
            msg = "Whitelist pattern cannot be empty"
            raise ValueError(msg)

        current = list(self.patterns)
        if pattern in current:
            logger.info("Pattern already whitelisted: %s", pattern)
            return False
        self.save([*current, pattern])
        return True

    def remove(self, pattern: str) -> bool:
        """Remove a pattern and persist the whitelist.

        Args:
            pattern: Pattern to remove.

        Returns:
            True if the pattern was removed, False if it was not present.
            Check ``persisted`` to see whether the change reached the disk.
        """
        pattern = pattern.strip()
        current = list(self.patterns)
        if pattern not in current:
            logger.warning("Pattern not in whitelist: %s", pattern)
            return False
        self.save([p for p in current if p != pattern])
        return True

    def reset(self) -> bool:
        """Replace the whitelist with the built-in defaults.

        Returns:
            True if the file was written.
        """
        return self.save(list(DEFAULT_WHITELIST_PATTERNS))

    def tagged(self) -> tuple[ProtectionPattern, ...]:
        """Tag each current pattern as a built-in default or a user addition."""
        defaults = set(DEFAULT_WHITELIST_PATTERNS)
        return tuple(
            ProtectionPattern(
                p,
                ProtectionCategory.WHITELIST_DEFAULT
                if p in defaults
                else ProtectionCategory.WHITELIST_CUSTOM,
            )
            for p in self.patterns
        )

    def stats(self) -> WhitelistStats:
        """Partition the current patterns into defaults and custom entries."""
        tagged = self.tagged()
        default_count = sum(
            1 for p in tagged if p.category == ProtectionCategory.WHITELIST_DEFAULT
        )
        return WhitelistStats(
            total=len(tagged),
            default=default_count,
            custom=len(tagged) - default_count,
        )
