"""Visualization of cap detection results.

Renders the kept surface, the removed caps and the border candidates in a
single 3D view; intended for quick inspection of a threshold choice.
"""
from __future__ import annotations

import os as _os
import matplotlib as _mpl
# Ensure a non-interactive backend in headless environments before importing pyplot
if not _os.environ.get('MPLBACKEND'):
    _mpl.use('Agg')
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Patch as _MPatch
from mpl_toolkits.mplot3d.art3d import Poly3DCollection

from .diagnostics import extract_boundary_loops
from .logging_utils import get_logger

logger = get_logger('holecap.viz')

__all__ = ['plot_cap_detection']


def plot_cap_detection(
    detection,
    outname="caps.png",
    show_border_vertices: bool = True,
    highlight_boundary_loops: bool = True,
    elev: float = 30.0,
    azim: float = -60.0,
):
    """Plot a CapDetection: kept faces in grey, removed caps in red.

    Args:
        detection: result of holecap.detect_caps
        outname: output image path
        show_border_vertices: scatter border candidate vertices on top
        highlight_boundary_loops: draw the boundary loops of the cleaned mesh
        elev, azim: camera angles passed to the 3D axes
    """
    pts = np.asarray(detection.points)
    base = detection.index_base
    tris = np.asarray(detection.input_triangles, dtype=np.int64).reshape(-1, 3) - base
    cap_mask = np.asarray(detection.cap_mask, dtype=bool)
    kept = tris[~cap_mask]
    caps = tris[cap_mask]

    fig = plt.figure(figsize=(7, 6))
    ax = fig.add_subplot(111, projection='3d')
    if kept.size:
        ax.add_collection3d(Poly3DCollection(pts[kept], facecolor=(0.75, 0.75, 0.78), edgecolor=(0.3, 0.3, 0.3),
                                             linewidths=0.3, alpha=0.6))
    if caps.size:
        ax.add_collection3d(Poly3DCollection(pts[caps], facecolor=(0.85, 0.2, 0.2), edgecolor='k',
                                             linewidths=0.5, alpha=0.8))
    if show_border_vertices and np.any(detection.is_border):
        b = pts[np.asarray(detection.is_border, dtype=bool)]
        ax.scatter(b[:, 0], b[:, 1], b[:, 2], s=8, color=(0.1, 0.3, 0.85))
    if highlight_boundary_loops and kept.size:
        loops = extract_boundary_loops(kept)
        logger.debug('plotting %d boundary loop(s)', len(loops))
        for loop in loops:
            ring = pts[loop + [loop[0]]]
            ax.plot(ring[:, 0], ring[:, 1], ring[:, 2], color=(0.2, 0.6, 0.2), linewidth=1.2)

    if pts.size:
        lo = pts.min(axis=0); hi = pts.max(axis=0)
        ax.set_xlim(lo[0], hi[0]); ax.set_ylim(lo[1], hi[1]); ax.set_zlim(lo[2], hi[2])
    ax.view_init(elev=elev, azim=azim)
    legend = [
        _MPatch(facecolor=(0.75, 0.75, 0.78), edgecolor='none', label=f'kept (n={len(kept)})'),
        _MPatch(facecolor=(0.85, 0.2, 0.2), edgecolor='none', label=f'caps (n={len(caps)})'),
    ]
    ax.legend(handles=legend, loc='upper right', fontsize=8)
    ax.set_title(f"L={detection.stats.threshold:g}")
    fig.savefig(outname, dpi=150)
    plt.close(fig)
