"""Built-in cleanup target tables."""

from winsweep.targets.catalog import (
    ALL_GROUPS,
    TargetGroup,
    get_candidates,
    get_sweep_targets,
)

__all__ = ["ALL_GROUPS", "TargetGroup", "get_candidates", "get_sweep_targets"]
