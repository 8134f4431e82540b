"""Central thresholds and numeric constants for cap detection.

Kept in one place so the pipeline, the CLI and the tests refer to the same
values instead of scattering literals.
"""
from __future__ import annotations

# Border classification
DEFAULT_THRESHOLD: float = 2.5        # max/min incident length ratio (usual range 2-3)
MIN_SENSIBLE_THRESHOLD: float = 1.0   # ratio is always >= 1, so L <= 1 flags every irregular vertex

# Lengths at or below this value are excluded from the per-vertex minimum
EPS_LENGTH: float = 0.0

__all__ = [
    'DEFAULT_THRESHOLD',
    'MIN_SENSIBLE_THRESHOLD',
    'EPS_LENGTH',
]
