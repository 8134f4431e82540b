"""Per-triangle size measures.

Triangles are measured by their connectivity length, the sum of their three
edge lengths. All functions take 0-based (M, 3) index arrays and (N, 3)
coordinates and are pure numpy.
"""
from __future__ import annotations

import numpy as np

__all__ = ['edge_lengths', 'connectivity_lengths', 'degenerate_triangle_mask']


def edge_lengths(points, triangles):
    """Return (M, 3) edge lengths for edges (v0,v1), (v1,v2), (v2,v0)."""
    pts = np.asarray(points, dtype=np.float64)
    tris = np.asarray(triangles, dtype=np.int64)
    if tris.size == 0:
        return np.empty((0, 3), dtype=np.float64)
    p0 = pts[tris[:, 0]]
    p1 = pts[tris[:, 1]]
    p2 = pts[tris[:, 2]]
    return np.column_stack([
        np.linalg.norm(p0 - p1, axis=1),
        np.linalg.norm(p1 - p2, axis=1),
        np.linalg.norm(p2 - p0, axis=1),
    ])


def connectivity_lengths(points, triangles):
    """Connectivity length (perimeter) of every triangle, shape (M,).

    A triangle with a repeated vertex index contributes a zero edge; a fully
    collapsed triangle has length 0.
    """
    return edge_lengths(points, triangles).sum(axis=1)


def degenerate_triangle_mask(triangles):
    """Boolean mask of triangles that reference the same vertex twice."""
    tris = np.asarray(triangles)
    if tris.size == 0:
        return np.zeros(0, dtype=bool)
    return (tris[:, 0] == tris[:, 1]) | (tris[:, 1] == tris[:, 2]) | (tris[:, 2] == tris[:, 0])
