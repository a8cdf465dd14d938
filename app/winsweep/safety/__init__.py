"""Path-safety subsystem.

This package provides the shared glob matcher, the path classifier
predicates and the safety gate every deletion must pass.
"""

from winsweep.safety.classifier import (
    PROTECTED_APP_DATA_PATTERNS,
    ProtectionCategory,
    ProtectionPattern,
    critical_system_paths,
    is_critical_system_path,
    is_protected_application_data,
    is_whitelisted,
    should_protect,
)
from winsweep.safety.gate import GateDecision, RejectionReason, validate_for_deletion
from winsweep.safety.globmatch import glob_match

__all__ = [
    "PROTECTED_APP_DATA_PATTERNS",
    "GateDecision",
    "ProtectionCategory",
    "ProtectionPattern",
    "RejectionReason",
    "critical_system_paths",
    "glob_match",
    "is_critical_system_path",
    "is_protected_application_data",
    "is_whitelisted",
    "should_protect",
    "validate_for_deletion",
]
