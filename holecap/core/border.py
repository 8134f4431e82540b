"""Border candidate classification from incident length ratios."""
from __future__ import annotations

import numpy as np

__all__ = ['length_ratios', 'classify_border_vertices']


def length_ratios(max_len, min_len):
    """Per-vertex max/min incident length ratio; NaN where undefined."""
    max_len = np.asarray(max_len, dtype=np.float64)
    min_len = np.asarray(min_len, dtype=np.float64)
    ratios = np.full(max_len.shape, np.nan)
    defined = np.isfinite(max_len) & np.isfinite(min_len) & (min_len > 0.0)
    ratios[defined] = max_len[defined] / min_len[defined]
    return ratios


def classify_border_vertices(ratios, threshold: float):
    """Flag vertices whose ratio exceeds `threshold`.

    Undefined (NaN) ratios are never flagged, which covers isolated vertices.
    """
    ratios = np.asarray(ratios, dtype=np.float64)
    flags = np.zeros(ratios.shape, dtype=bool)
    defined = ~np.isnan(ratios)
    flags[defined] = ratios[defined] > float(threshold)
    return flags
