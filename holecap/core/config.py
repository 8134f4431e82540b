"""Configuration objects for cap detection and removal."""
from __future__ import annotations

from dataclasses import dataclass, asdict, fields
from typing import Any, Dict

from .constants import DEFAULT_THRESHOLD


@dataclass
class CapRemovalConfig:
    """Parameters of a cap removal run.

    Attributes
    ----------
    threshold : float
        Border threshold L. A vertex is a border candidate when the ratio
        between its largest and smallest incident connectivity length
        exceeds this value.
    index_base : int
        0 for 0-based triangle indices, 1 for 1-based. The cleaned mesh is
        returned in the same base.
    warn_low_threshold : bool
        Log a warning when 0 < threshold <= 1.
    strict_threshold : bool
        Raise on a non-positive threshold. When False the run proceeds and
        simply flags every vertex with an incident size disparity.
    """
    threshold: float = DEFAULT_THRESHOLD
    index_base: int = 0
    warn_low_threshold: bool = True
    strict_threshold: bool = True

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> 'CapRemovalConfig':
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise TypeError(f"Unknown CapRemovalConfig option(s): {', '.join(unknown)}")
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ['CapRemovalConfig']
