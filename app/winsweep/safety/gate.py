"""Safety gate run before every filesystem mutation.

``validate_for_deletion`` is the single choke point: it classifies a path
and never touches the filesystem beyond resolving ``..`` segments.
Decisions are not cached, since the whitelist snapshot may change between
runs.
"""

import logging
import ntpath
import os
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from winsweep.safety.classifier import (
    is_critical_system_path,
    is_whitelisted,
    should_protect,
)

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[\\/]+")


class RejectionReason(str, Enum):
    """Why a path was refused.

    Attributes:
        EMPTY: Path is empty or whitespace only.
        NOT_ABSOLUTE: Path has no drive, UNC or root designator.
        TRAVERSAL: Path contains ``..`` that does not resolve to a real path.
        CONTROL_CHARACTERS: Path contains characters below 0x20.
        CRITICAL_SYSTEM_PATH: Path is, contains, or lies inside a critical directory.
        PROTECTED: Path is protected application data or the profile root.
        WHITELISTED: Path is covered by the user's whitelist.
        REPARSE_POINT: Path is a symlink or junction (elevated removal and sweeps).
    """

    EMPTY = "empty"
    NOT_ABSOLUTE = "not_absolute"
    TRAVERSAL = "traversal"
    CONTROL_CHARACTERS = "control_characters"
    CRITICAL_SYSTEM_PATH = "critical_system_path"
    PROTECTED = "protected"
    WHITELISTED = "whitelisted"
    REPARSE_POINT = "reparse_point"


_REASON_MESSAGES: dict[RejectionReason, str] = {
    RejectionReason.EMPTY: "Path is empty",
    RejectionReason.NOT_ABSOLUTE: "Path is not absolute",
    RejectionReason.TRAVERSAL: "Path traversal does not resolve to a real path",
    RejectionReason.CONTROL_CHARACTERS: "Path contains control characters",
    RejectionReason.CRITICAL_SYSTEM_PATH: "Critical system path",
    RejectionReason.PROTECTED: "Protected application data",
    RejectionReason.WHITELISTED: "Path is whitelisted",
    RejectionReason.REPARSE_POINT: "Path is a symbolic link or junction",
}


@dataclass(frozen=True, slots=True)
class GateDecision:
    """Outcome of running a path through the safety gate.

    Attributes:
        path: Path as supplied by the caller.
        reason: Rejection reason, or None when the path may be deleted.
        resolved: Path the remaining checks ran against (differs from
            ``path`` only when ``..`` segments were resolved).
    """

    path: str
    reason: RejectionReason | None = None
    resolved: str | None = None

    @property
    def allowed(self) -> bool:
        """Check if deletion is allowed."""
        return self.reason is None

    @property
    def message(self) -> str:
        """Human-readable explanation of the decision."""
        if self.reason is None:
            return "Allowed"
        return _REASON_MESSAGES[self.reason]


def reject(path: str, reason: RejectionReason) -> GateDecision:
    """Build a rejecting decision for a path."""
    return GateDecision(path=path, reason=reason)


def is_absolute(path: str) -> bool:
    """Check if a path carries a drive/volume designator or a POSIX root.

    Drive-relative forms such as ``C:temp`` and rooted-but-driveless
    forms such as ``\\temp`` are not absolute on Windows.
    """
    drive, rest = ntpath.splitdrive(path)
    if drive:
        if drive.startswith(("\\\\", "//")):
            return True
        return rest[:1] in ("\\", "/")
    return os.name != "nt" and path.startswith("/")


def has_traversal(path: str) -> bool:
    """Check if a path contains a literal ``..`` segment."""
    return ".." in _SEPARATORS.split(path)


def _resolve(path: str) -> str | None:
    """Resolve ``..`` segments against the real filesystem.

    Only the parent directory is resolved; the final component is kept
    as written, so a link named by the path is never replaced with its
    target.

    Returns:
        Resolved path, or None when it cannot be resolved or does not exist.
    """
    candidate = Path(path)
    try:
        if candidate.name in ("", ".."):
            resolved = candidate.resolve(strict=True)
        else:
            resolved = candidate.parent.resolve(strict=True) / candidate.name
    except (OSError, RuntimeError, ValueError):
        return None
    if not os.path.lexists(resolved):
        return None
    return str(resolved)


def validate_for_deletion(
    path: str | None,
    whitelist: tuple[str, ...] | list[str] = (),
) -> GateDecision:
    """Decide whether a path may be deleted.

    Checks run in order and the first failure wins:

    1. empty or whitespace-only
    2. not absolute
    3. ``..`` segments that do not resolve to an existing path
    4. control characters
    5. critical system path
    6. any other built-in protection (application data, profile root)
    7. whitelisted

    A ``..`` that resolves cleanly is accepted and the resolved path is
    used for checks 5-7, so traversal into a critical directory is still
    refused. The final component is never dereferenced.

    Args:
        path: Candidate path.
        whitelist: Whitelist pattern snapshot for this run.

    Returns:
        GateDecision describing the outcome.
    """
    if path is None or not path.strip():
        return reject(path or "", RejectionReason.EMPTY)

    if not is_absolute(path):
        return reject(path, RejectionReason.NOT_ABSOLUTE)

    target = path
    if has_traversal(path):
        resolved = _resolve(path)
        if resolved is None:
            return reject(path, RejectionReason.TRAVERSAL)
        logger.debug("Resolved %s -> %s", path, resolved)
        target = resolved

    if any(ord(ch) < 0x20 for ch in path):
        return reject(path, RejectionReason.CONTROL_CHARACTERS)

    if is_critical_system_path(target):
        return GateDecision(path, RejectionReason.CRITICAL_SYSTEM_PATH, target)

    if should_protect(target):
        return GateDecision(path, RejectionReason.PROTECTED, target)

    if is_whitelisted(target, whitelist):
        return GateDecision(path, RejectionReason.WHITELISTED, target)

    return GateDecision(path=path, resolved=target)
