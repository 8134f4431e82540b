"""Input normalization and validation for the cap removal pipeline.

Every public pipeline function funnels its inputs through these helpers so
that malformed meshes fail up front with a precise error instead of deep
inside numpy indexing.
"""
from __future__ import annotations

import math
from typing import Tuple

import numpy as np

from .constants import MIN_SENSIBLE_THRESHOLD
from .errors import InvalidThresholdError, MeshValidationError, TriangleIndexError
from .logging_utils import get_logger

logger = get_logger('holecap.validation')

__all__ = ['as_points', 'as_triangles', 'check_threshold', 'validate_mesh']


def as_points(points) -> np.ndarray:
    """Return points as a contiguous (N, 3) float64 array.

    (N, 2) input is lifted to the z = 0 plane.
    """
    try:
        pts = np.asarray(points, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise MeshValidationError(f"points must be a numeric (N, 3) array: {e}") from e
    if pts.ndim != 2 or pts.shape[1] not in (2, 3):
        raise MeshValidationError(f"points must be (N, 2) or (N, 3), got shape {pts.shape}")
    if not np.all(np.isfinite(pts)):
        raise MeshValidationError("points contain NaN or infinite coordinates")
    if pts.shape[1] == 2:
        pts = np.column_stack([pts, np.zeros(len(pts))])
    return np.ascontiguousarray(pts)


def as_triangles(triangles, n_vertices: int, index_base: int = 0) -> np.ndarray:
    """Return triangles as a contiguous 0-based (M, 3) int64 array.

    Raises TriangleIndexError listing the offending triangles when any index
    falls outside [index_base, n_vertices - 1 + index_base].
    """
    if index_base not in (0, 1):
        raise MeshValidationError(f"index_base must be 0 or 1, got {index_base!r}")
    try:
        raw = np.asarray(triangles)
    except (TypeError, ValueError) as e:
        raise MeshValidationError(f"triangles must be an (M, 3) array of indices: {e}") from e
    if raw.size == 0:
        return np.empty((0, 3), dtype=np.int64)
    if raw.ndim != 2 or raw.shape[1] != 3:
        raise MeshValidationError(f"triangles must be (M, 3), got shape {raw.shape}")
    if raw.dtype.kind == 'f':
        if not np.all(np.isfinite(raw)) or np.any(raw != np.round(raw)):
            raise MeshValidationError("triangles must hold integer vertex indices")
    elif raw.dtype.kind not in 'iu':
        raise MeshValidationError(f"triangles must hold integer vertex indices, got dtype {raw.dtype}")
    tris = raw.astype(np.int64) - index_base
    bad = np.any((tris < 0) | (tris >= n_vertices), axis=1)
    if np.any(bad):
        bad_idx = np.nonzero(bad)[0]
        first = int(bad_idx[0])
        raise TriangleIndexError(
            f"{bad_idx.size} triangle(s) reference vertices outside "
            f"[{index_base}, {n_vertices - 1 + index_base}]; first is triangle {first}: "
            f"{raw[first].tolist()}",
            triangles=bad_idx.tolist(),
        )
    return np.ascontiguousarray(tris)


def check_threshold(threshold, strict: bool = True, warn_low: bool = True) -> float:
    """Validate the border threshold L and return it as a float."""
    try:
        value = float(threshold)
    except (TypeError, ValueError) as e:
        raise InvalidThresholdError(f"threshold must be a number, got {threshold!r}") from e
    if math.isnan(value):
        raise InvalidThresholdError("threshold must not be NaN")
    if value <= 0.0:
        if strict:
            raise InvalidThresholdError(f"threshold must be > 0, got {value}")
        logger.warning('Non-positive threshold %g: every vertex with incident triangles will be flagged', value)
    elif warn_low and value <= MIN_SENSIBLE_THRESHOLD:
        logger.warning('Threshold %g <= %g flags every irregular vertex, including well-formed ones',
                       value, MIN_SENSIBLE_THRESHOLD)
    return value


def validate_mesh(points, triangles, index_base: int = 0) -> Tuple[np.ndarray, np.ndarray]:
    """Normalize a (points, triangles) pair; triangles are returned 0-based."""
    pts = as_points(points)
    tris = as_triangles(triangles, pts.shape[0], index_base=index_base)
    return pts, tris
