"""Cap triangle detection and removal.

A cap is a triangle whose three vertices are all border candidates: it most
likely bridges a hole that the raw triangulation closed by mistake. The
pipeline runs once, front to back:

    connectivity lengths -> incidence extrema -> border flags -> cap filter

`remove_cap_triangles` is the plain entry point; `detect_caps` runs the same
pipeline and keeps every intermediate array for inspection.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional

import numpy as np
from scipy import sparse

from .border import classify_border_vertices, length_ratios
from .config import CapRemovalConfig
from .constants import DEFAULT_THRESHOLD
from .geometry import connectivity_lengths, degenerate_triangle_mask
from .incidence import build_vertex_incidence, incident_length_extrema, incident_triangle_counts
from .logging_utils import get_logger
from .stats import CapRemovalStats
from .validation import check_threshold, validate_mesh

logger = get_logger('holecap.caps')

__all__ = [
    'CapDetection', 'border_counts', 'cap_triangle_mask',
    'detect_caps', 'remove_cap_triangles',
]


@dataclass
class CapDetection:
    """All intermediate results of one cap detection run.

    Vertex arrays have length N and triangle arrays length M (the input
    triangle count). `triangles` is the cleaned mesh in the caller's index
    base; `cap_mask` marks the rows of the input that were removed.
    """
    points: np.ndarray
    input_triangles: np.ndarray
    lengths: np.ndarray
    incidence: sparse.csr_matrix
    max_len: np.ndarray
    min_len: np.ndarray
    ratios: np.ndarray
    is_border: np.ndarray
    border_counts: np.ndarray
    cap_mask: np.ndarray
    triangles: np.ndarray
    index_base: int
    stats: CapRemovalStats

    @property
    def border_vertices(self) -> np.ndarray:
        """Border candidate vertex indices in the caller's index base."""
        return np.nonzero(self.is_border)[0] + self.index_base

    @property
    def removed_indices(self) -> np.ndarray:
        """Row indices (0-based) of the removed triangles in the input array."""
        return np.nonzero(self.cap_mask)[0]

    @property
    def removed_triangles(self) -> np.ndarray:
        return self.input_triangles[self.cap_mask]


def border_counts(triangles, is_border) -> np.ndarray:
    """Number of slots of each triangle whose vertex is a border candidate."""
    tris = np.asarray(triangles, dtype=np.int64)
    if tris.size == 0:
        return np.zeros(0, dtype=np.int64)
    return np.asarray(is_border, dtype=bool)[tris].sum(axis=1)


def cap_triangle_mask(triangles, is_border) -> np.ndarray:
    """Mask of triangles whose three vertices are all border candidates."""
    return border_counts(triangles, is_border) == 3


def detect_caps(points, triangles, threshold: float = DEFAULT_THRESHOLD, *,
                index_base: int = 0, config: Optional[CapRemovalConfig] = None) -> CapDetection:
    """Run the full cap detection pipeline and return every intermediate.

    Parameters
    ----------
    points : (N, 3) or (N, 2) array_like
        Point cloud; never modified.
    triangles : (M, 3) array_like of int
        Raw triangulation of `points`; never modified.
    threshold : float
        Border threshold L (typically 2 to 3).
    index_base : {0, 1}
        Base of the indices in `triangles`.
    config : CapRemovalConfig, optional
        When given, its threshold, index base and threshold policy override
        the keyword arguments; conflicting explicit values are logged as a
        warning.

    Raises
    ------
    MeshValidationError
        Malformed points or triangles.
    TriangleIndexError
        A triangle references a vertex outside the point cloud.
    InvalidThresholdError
        Non-positive or non-numeric threshold (strict policy).
    """
    if config is None:
        cfg = CapRemovalConfig(threshold=threshold, index_base=index_base)
    else:
        cfg = config
        ignored = []
        if threshold != DEFAULT_THRESHOLD and threshold != cfg.threshold:
            ignored.append(f'threshold={threshold!r}')
        if index_base != 0 and index_base != cfg.index_base:
            ignored.append(f'index_base={index_base!r}')
        if ignored:
            logger.warning('config overrides explicit argument(s) %s', ', '.join(ignored))
    t0 = time.perf_counter()
    L = check_threshold(cfg.threshold, strict=cfg.strict_threshold, warn_low=cfg.warn_low_threshold)
    pts, tris = validate_mesh(points, triangles, index_base=cfg.index_base)
    n_vertices = pts.shape[0]
    n_tris = tris.shape[0]

    lengths = connectivity_lengths(pts, tris)
    n_degenerate = int(np.count_nonzero(degenerate_triangle_mask(tris)))
    if n_degenerate:
        logger.debug('%d degenerate triangle(s) with repeated vertices', n_degenerate)

    incidence = build_vertex_incidence(tris, n_vertices)
    max_len, min_len = incident_length_extrema(incidence, lengths)
    n_isolated = int(np.count_nonzero(incident_triangle_counts(incidence) == 0))
    logger.debug('incidence: %d vertices, %d triangles, %d isolated vertices',
                 n_vertices, n_tris, n_isolated)

    ratios = length_ratios(max_len, min_len)
    is_border = classify_border_vertices(ratios, L)

    counts = border_counts(tris, is_border)
    cap_mask = counts == 3
    input_tris = np.asarray(triangles)
    if input_tris.size == 0:
        input_tris = input_tris.reshape(0, 3)
    cleaned = np.ascontiguousarray(input_tris[~cap_mask])

    stats = CapRemovalStats(
        n_vertices=n_vertices,
        n_triangles_in=n_tris,
        n_triangles_out=int(cleaned.shape[0]),
        n_border_vertices=int(np.count_nonzero(is_border)),
        n_isolated_vertices=n_isolated,
        n_degenerate_triangles=n_degenerate,
        threshold=L,
        time_total=time.perf_counter() - t0,
    )
    logger.info(stats.summary())
    return CapDetection(
        points=pts,
        input_triangles=input_tris,
        lengths=lengths,
        incidence=incidence,
        max_len=max_len,
        min_len=min_len,
        ratios=ratios,
        is_border=is_border,
        border_counts=counts,
        cap_mask=cap_mask,
        triangles=cleaned,
        index_base=cfg.index_base,
        stats=stats,
    )


def remove_cap_triangles(points, triangles, threshold: float = DEFAULT_THRESHOLD, *,
                         index_base: int = 0, config: Optional[CapRemovalConfig] = None) -> np.ndarray:
    """Return `triangles` without the cap triangles.

    Surviving rows keep their order and their vertex indices (in the same
    base as the input). The point cloud is left untouched and vertices that
    become unreferenced are not removed.
    """
    return detect_caps(points, triangles, threshold, index_base=index_base, config=config).triangles
