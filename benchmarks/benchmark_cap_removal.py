"""Benchmark cap detection stages on growing naive triangulations."""
import time

import numpy as np
from scipy.spatial import Delaunay

from holecap.core.border import classify_border_vertices, length_ratios
from holecap.core.caps import cap_triangle_mask, detect_caps
from holecap.core.geometry import connectivity_lengths
from holecap.core.incidence import build_vertex_incidence, incident_length_extrema


def create_mesh_with_holes(n_points=10000, seed=0):
    """Height field sampled with three circular gaps, triangulated over (x, y)."""
    rng = np.random.default_rng(seed)
    xy = rng.uniform(0.0, 1.0, size=(n_points, 2))
    keep = np.ones(len(xy), dtype=bool)
    for cx, cy in [(0.3, 0.3), (0.7, 0.7), (0.5, 0.5)]:
        keep &= np.hypot(xy[:, 0] - cx, xy[:, 1] - cy) > 0.08
    xy = xy[keep]
    points = np.column_stack([xy, 0.05 * np.sin(6.0 * xy[:, 0])])
    return points, Delaunay(xy).simplices.astype(np.int64)


def benchmark_function(func, *args, n_runs=20):
    """Benchmark a function with multiple runs."""
    for _ in range(2):
        func(*args)
    times = []
    for _ in range(n_runs):
        start = time.perf_counter()
        result = func(*args)
        times.append(time.perf_counter() - start)
    return np.median(times) * 1000, np.std(times) * 1000, result


def main():
    print("=" * 80)
    print("CAP REMOVAL BENCHMARK")
    print("=" * 80)
    for n in (1_000, 10_000, 100_000):
        points, tris = create_mesh_with_holes(n)
        print(f"\n{len(points)} points, {len(tris)} triangles")
        med, std, lengths = benchmark_function(connectivity_lengths, points, tris)
        print(f"  connectivity lengths : {med:8.3f} ms (+/- {std:.3f})")
        med, std, inc = benchmark_function(build_vertex_incidence, tris, len(points))
        print(f"  incidence matrix     : {med:8.3f} ms (+/- {std:.3f})")
        med, std, (mx, mn) = benchmark_function(incident_length_extrema, inc, lengths)
        print(f"  incidence extrema    : {med:8.3f} ms (+/- {std:.3f})")
        border = classify_border_vertices(length_ratios(mx, mn), 2.5)
        med, std, mask = benchmark_function(cap_triangle_mask, tris, border)
        print(f"  cap filter           : {med:8.3f} ms (+/- {std:.3f})")
        med, std, det = benchmark_function(detect_caps, points, tris, 2.5, n_runs=5)
        print(f"  full pipeline        : {med:8.3f} ms (+/- {std:.3f}), removed {det.stats.n_removed}")


if __name__ == "__main__":
    main()
