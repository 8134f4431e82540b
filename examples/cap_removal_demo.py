"""
holecap example: removing caps from a naive triangulation

This example demonstrates the basic workflow:
1. Sample a wavy surface with a circular gap
2. Triangulate it naively (2D Delaunay over x, y), which bridges the gap
3. Detect and remove the cap triangles for a few thresholds
4. Visualize the result

Perfect for: choosing a threshold L for a new data set
"""

import numpy as np
from scipy.spatial import Delaunay

from holecap import configure_logging, count_boundary_loops, detect_caps
from holecap.core.visualization import plot_cap_detection


def main():
    configure_logging('INFO')
    print("=" * 60)
    print("holecap example: cap removal on a surface with a hole")
    print("=" * 60)

    print("\n[1] Sampling surface...")
    rng = np.random.default_rng(7)
    xy = rng.uniform(-1.0, 1.0, size=(1500, 2))
    xy = xy[np.hypot(xy[:, 0] - 0.2, xy[:, 1]) > 0.3]
    z = 0.15 * np.sin(3.0 * xy[:, 0]) * np.cos(2.0 * xy[:, 1])
    points = np.column_stack([xy, z])
    print(f"  {len(points)} points")

    print("\n[2] Naive triangulation...")
    triangles = Delaunay(xy).simplices
    print(f"  {len(triangles)} triangles, {count_boundary_loops(triangles)} boundary loop(s)")

    print("\n[3] Cap detection...")
    for L in (2.0, 2.5, 3.0):
        det = detect_caps(points, triangles, L)
        print(f"  L={L}: removed {det.stats.n_removed}, "
              f"boundary loops after removal: {count_boundary_loops(det.triangles)}")

    print("\n[4] Creating visualization...")
    det = detect_caps(points, triangles, 2.5)
    plot_cap_detection(det, outname="cap_removal_demo.png")
    print("  Saved cap_removal_demo.png")


if __name__ == "__main__":
    main()
