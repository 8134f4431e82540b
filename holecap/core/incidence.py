"""Vertex-to-triangle incidence and per-vertex length extrema.

The incidence relation is sparse (each triangle touches three vertices), so
it is stored as an (N, M) CSR matrix. Extrema are folded directly over the
stored entries of each row: a vertex with no incident triangle keeps NaN and
never takes part in classification.
"""
from __future__ import annotations

from typing import Tuple

import numpy as np
from scipy import sparse

from .constants import EPS_LENGTH

__all__ = [
    'build_vertex_incidence', 'incident_length_extrema', 'incident_triangle_counts',
]


def build_vertex_incidence(triangles, n_vertices: int) -> sparse.csr_matrix:
    """Build the (n_vertices, M) vertex-triangle incidence matrix.

    Entry (v, t) counts how many slots of triangle t hold vertex v, so a
    regular triangle contributes three entries equal to 1 and a degenerate
    one fewer entries with larger counts.
    """
    tris = np.asarray(triangles, dtype=np.int64)
    n_tris = int(tris.shape[0]) if tris.ndim == 2 else 0
    if n_tris == 0:
        return sparse.csr_matrix((n_vertices, 0), dtype=np.int32)
    rows = tris.ravel()
    cols = np.repeat(np.arange(n_tris, dtype=np.int64), 3)
    data = np.ones(rows.size, dtype=np.int32)
    inc = sparse.coo_matrix((data, (rows, cols)), shape=(n_vertices, n_tris)).tocsr()
    inc.sum_duplicates()
    return inc


def incident_triangle_counts(incidence: sparse.csr_matrix) -> np.ndarray:
    """Number of distinct triangles incident to each vertex."""
    return np.diff(incidence.indptr).astype(np.int64)


def incident_length_extrema(incidence: sparse.csr_matrix, lengths) -> Tuple[np.ndarray, np.ndarray]:
    """Return (max_len, min_len) of the incident connectivity lengths per vertex.

    min_len only considers strictly positive lengths. Both are NaN for a
    vertex without incident triangles; min_len is also NaN when every
    incident triangle is fully collapsed.
    """
    lengths = np.asarray(lengths, dtype=np.float64)
    n_vertices = incidence.shape[0]
    max_len = np.full(n_vertices, np.nan)
    min_len = np.full(n_vertices, np.nan)
    if incidence.nnz == 0:
        return max_len, min_len
    rows = np.repeat(np.arange(n_vertices), np.diff(incidence.indptr))
    vals = lengths[incidence.indices]
    # fmax/fmin ignore the NaN initial value
    np.fmax.at(max_len, rows, vals)
    positive = vals > EPS_LENGTH
    np.fmin.at(min_len, rows[positive], vals[positive])
    return max_len, min_len
