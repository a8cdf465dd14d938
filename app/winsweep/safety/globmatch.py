"""Shared path normalisation and glob matching.

Every protection check (critical paths, protected application data,
whitelist) compares paths through these helpers so that matching is
uniformly case-insensitive and separator-agnostic.

Supported wildcards:
- ``*`` matches any run of characters, including separators
- ``?`` matches exactly one character
"""

import functools
import os
import re
from pathlib import Path

_SEPARATORS = re.compile(r"[\\/]+")
_WILDCARDS = frozenset("*?")
_ENV_PERCENT = re.compile(r"%([^%\\/]+)%")


def normalize_path(path: str) -> str:
    """Normalise a path for comparison.

    Backslashes become forward slashes, repeated separators collapse,
    trailing separators are trimmed and the result is lower-cased.
    A bare root ("/" or "C:\\") normalises to "" or "c:" respectively.

    Args:
        path: Path string in Windows or POSIX form.

    Returns:
        Normalised comparison key.
    """
    return _SEPARATORS.sub("/", path.strip()).rstrip("/").lower()


def split_segments(path: str) -> list[str]:
    """Split a normalised path into its segments.

    A leading empty segment is kept for POSIX roots so that "/tmp" and
    "tmp" never compare equal.
    """
    normalized = normalize_path(path)
    if not normalized:
        return [""]
    return normalized.split("/")


def has_wildcard(pattern: str) -> bool:
    """Check if a pattern contains glob wildcards."""
    return any(ch in _WILDCARDS for ch in pattern)


@functools.lru_cache(maxsize=1024)
def _compile(pattern: str) -> re.Pattern[str]:
    parts: list[str] = []
    for ch in pattern:
        if ch == "*":
            parts.append(".*")
        elif ch == "?":
            parts.append(".")
        else:
            parts.append(re.escape(ch))
    return re.compile("".join(parts), re.DOTALL)


def glob_match(pattern: str, path: str) -> bool:
    """Case-insensitive glob match of a whole path against a pattern.

    Both sides are normalised first, so "C:\\Temp\\*" matches
    "c:/temp/a/b.txt".

    Args:
        pattern: Glob pattern using ``*`` and ``?``.
        path: Path to test.

    Returns:
        True if the entire path matches the pattern.
    """
    return _compile(normalize_path(pattern)).fullmatch(normalize_path(path)) is not None


def segment_match(pattern_segment: str, segment: str) -> bool:
    """Match a single path segment; ``*`` never crosses a separator here."""
    if not has_wildcard(pattern_segment):
        return pattern_segment == segment
    return _compile(pattern_segment).fullmatch(segment) is not None


def is_descendant(path_segments: list[str], base_segments: list[str]) -> bool:
    """Check if a path lies strictly inside a base (segment-wise)."""
    if len(path_segments) <= len(base_segments):
        return False
    return all(segment_match(b, p) for b, p in zip(base_segments, path_segments, strict=False))


def is_ancestor(path_segments: list[str], base_segments: list[str]) -> bool:
    """Check if a path strictly contains a base (segment-wise)."""
    if len(path_segments) >= len(base_segments):
        return False
    return all(segment_match(b, p) for b, p in zip(base_segments, path_segments, strict=False))


def expand_path(path: str) -> str:
    """Expand a leading ``~`` and environment variables in a path.

    Both ``%VAR%`` (Windows) and ``$VAR`` forms are expanded. Unknown
    variables are left untouched.
    """
    expanded = path.strip()
    if expanded == "~" or expanded[:2] in ("~\\", "~/"):
        expanded = str(Path.home()) + expanded[1:]
    expanded = _ENV_PERCENT.sub(lambda m: os.environ.get(m.group(1), m.group(0)), expanded)
    return os.path.expandvars(expanded)
