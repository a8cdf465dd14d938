"""User-editable whitelist persistence."""

from winsweep.whitelist.store import (
    DEFAULT_WHITELIST_PATTERNS,
    WhitelistStats,
    WhitelistStore,
    parse_whitelist,
)

__all__ = [
    "DEFAULT_WHITELIST_PATTERNS",
    "WhitelistStats",
    "WhitelistStore",
    "parse_whitelist",
]
