"""Boundary diagnostics for cleaned meshes.

After cap removal the real holes show up as boundary loops: cycles of edges
used by exactly one triangle. These helpers report them (and vertices left
unreferenced) without modifying the mesh.
"""
from __future__ import annotations

from collections import defaultdict, deque
from typing import List

import numpy as np

__all__ = [
    'boundary_edges', 'extract_boundary_loops', 'count_boundary_loops',
    'unreferenced_vertices',
]


def boundary_edges(tris) -> np.ndarray:
    """Return unique boundary edges (K, 2), each sorted, edges used exactly once."""
    tris = np.asarray(tris, dtype=np.int64)
    if tris.size == 0:
        return np.empty((0, 2), dtype=np.int64)
    a = tris[:, [0, 1]]; b = tris[:, [1, 2]]; c = tris[:, [2, 0]]
    edges = np.vstack((a, b, c))
    edges.sort(axis=1)
    # collapsed edges of degenerate triangles are not boundary
    edges = edges[edges[:, 0] != edges[:, 1]]
    if edges.size == 0:
        return np.empty((0, 2), dtype=np.int64)
    uniq, counts = np.unique(edges, axis=0, return_counts=True)
    return uniq[counts == 1]


def extract_boundary_loops(tris) -> List[List[int]]:
    """Return boundary loops as lists of vertex indices.

    Each loop is a connected component of boundary edges. Vertices are
    ordered by walking the component greedily from its smallest vertex; a
    vertex appears once per loop.
    """
    edges = boundary_edges(tris)
    if edges.size == 0:
        return []
    adj = defaultdict(list)
    for a, b in edges:
        a = int(a); b = int(b)
        adj[a].append(b)
        adj[b].append(a)
    visited = set()
    loops: List[List[int]] = []
    for v in sorted(adj):
        if v in visited:
            continue
        comp = {v}
        dq = deque([v])
        while dq:
            u = dq.popleft()
            for w in adj[u]:
                if w not in comp:
                    comp.add(w)
                    dq.append(w)
        visited |= comp
        ordered = [v]
        used = {v}
        cur = v
        while True:
            nxt = next((nb for nb in sorted(adj[cur]) if nb not in used), None)
            if nxt is None:
                break
            ordered.append(nxt)
            used.add(nxt)
            cur = nxt
        # branching components (non-manifold) may leave vertices off the walk
        ordered.extend(sorted(comp - used))
        loops.append(ordered)
    return loops


def count_boundary_loops(tris) -> int:
    """Return number of connected boundary loops in the mesh."""
    return len(extract_boundary_loops(tris))


def unreferenced_vertices(triangles, n_vertices: int) -> np.ndarray:
    """Indices in [0, n_vertices) not referenced by any triangle."""
    tris = np.asarray(triangles, dtype=np.int64)
    used = np.zeros(n_vertices, dtype=bool)
    if tris.size:
        used[tris.ravel()] = True
    return np.nonzero(~used)[0]
