"""Run statistics for cap removal and their presentation."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class CapRemovalStats:
    n_vertices: int = 0
    n_triangles_in: int = 0
    n_triangles_out: int = 0
    n_border_vertices: int = 0
    n_isolated_vertices: int = 0
    n_degenerate_triangles: int = 0
    threshold: float = 0.0
    # Timing (seconds)
    time_total: float = 0.0

    @property
    def n_removed(self) -> int:
        return self.n_triangles_in - self.n_triangles_out

    @property
    def removal_rate(self) -> float:
        return (self.n_removed / self.n_triangles_in) if self.n_triangles_in else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'n_vertices': self.n_vertices,
            'n_triangles_in': self.n_triangles_in,
            'n_triangles_out': self.n_triangles_out,
            'n_removed': self.n_removed,
            'removal_rate': self.removal_rate,
            'n_border_vertices': self.n_border_vertices,
            'n_isolated_vertices': self.n_isolated_vertices,
            'n_degenerate_triangles': self.n_degenerate_triangles,
            'threshold': self.threshold,
            'time_total': self.time_total,
        }

    def summary(self) -> str:
        return (
            f"removed {self.n_removed}/{self.n_triangles_in} cap triangle(s) "
            f"(L={self.threshold:g}, border vertices={self.n_border_vertices}, "
            f"isolated={self.n_isolated_vertices}, degenerate={self.n_degenerate_triangles}, "
            f"{self.time_total * 1e3:.2f} ms)"
        )


__all__ = ['CapRemovalStats']
