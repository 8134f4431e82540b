import sys

import numpy as np
import pytest

if sys.version_info < (3, 8):
    pytest.exit("Python >= 3.8 is required to run tests. Current version: {}".format(sys.version.replace("\n", " ")))


def make_grid_mesh(nx, ny):
    """Rectangular grid of 3-4-5 right triangles (every perimeter is exactly 12).

    Returns (points, triangles); point (i, j) has index j * (nx + 1) + i.
    """
    xs, ys = np.meshgrid(np.arange(nx + 1) * 3.0, np.arange(ny + 1) * 4.0)
    points = np.column_stack([xs.ravel(), ys.ravel(), np.zeros(xs.size)])
    tris = []
    for j in range(ny):
        for i in range(nx):
            a = j * (nx + 1) + i
            b = a + 1
            c = a + nx + 2
            d = a + nx + 1
            tris.append([a, b, c])
            tris.append([a, c, d])
    return points, np.array(tris, dtype=np.int64)


def make_cap_mesh():
    """A central triangle whose vertices each also touch one tiny and one huge triangle.

    Triangle 0 is the cap; the other six triangles each hold a single border vertex.
    """
    base = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.5, 0.866, 0.2]])
    pts = [p for p in base]
    tris = [[0, 1, 2]]
    for i, p in enumerate(base):
        k = len(pts)
        pts += [p + [0.01, 0.0, 0.0], p + [0.0, 0.01, 0.005]]
        tris.append([i, k, k + 1])
        k = len(pts)
        pts += [p + [10.0, 0.0, 0.0], p + [0.0, 10.0, 5.0]]
        tris.append([i, k, k + 1])
    return np.array(pts), np.array(tris, dtype=np.int64)


def make_sliver_mesh():
    """Equilateral triangle (perimeter 3) sharing edge 0-1 with a sliver (perimeter 15).

    Point 4 is isolated.
    """
    points = np.array([
        [0.0, 0.0, 0.0],                   # 0 shared
        [1.0, 0.0, 0.0],                   # 1 shared
        [0.5, np.sqrt(3.0) / 2.0, 0.0],    # 2 normal triangle only
        [0.5, -np.sqrt(48.75), 0.0],       # 3 sliver only
        [5.0, 5.0, 5.0],                   # 4 isolated
    ])
    triangles = np.array([[0, 1, 2], [0, 1, 3]], dtype=np.int64)
    return points, triangles


def make_holey_surface(seed=0, n=400, hole_radius=0.25):
    """Delaunay triangulation of a wavy height field sampled with a circular gap.

    scipy's Delaunay covers the convex hull, so the gap is bridged by large
    triangles, the kind of raw triangulation cap removal is meant for.
    """
    from scipy.spatial import Delaunay
    rng = np.random.default_rng(seed)
    xy = rng.uniform(-1.0, 1.0, size=(n, 2))
    xy = xy[np.hypot(xy[:, 0], xy[:, 1]) > hole_radius]
    z = 0.1 * np.sin(3.0 * xy[:, 0]) * np.cos(2.0 * xy[:, 1])
    points = np.column_stack([xy, z])
    triangles = Delaunay(xy).simplices.astype(np.int64)
    return points, triangles


@pytest.fixture
def grid_mesh():
    return make_grid_mesh(4, 3)


@pytest.fixture
def cap_mesh():
    return make_cap_mesh()


@pytest.fixture
def sliver_mesh():
    return make_sliver_mesh()


@pytest.fixture
def holey_surface():
    return make_holey_surface()


@pytest.fixture(autouse=True)
def _restore_holecap_logger():
    """Save and restore the 'holecap' logger state so one test cannot leak into the next."""
    import logging
    pkg = logging.getLogger('holecap')
    handlers, level, propagate = list(pkg.handlers), pkg.level, pkg.propagate
    yield
    pkg.handlers[:] = handlers
    pkg.setLevel(level)
    pkg.propagate = propagate
