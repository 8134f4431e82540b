"""Lightweight mesh file I/O for holecap.

Provides readers/writers used by the command line tool; the cap removal
pipeline itself never touches files.

- read_obj / write_obj: Wavefront OBJ (vertex and face records only)
- write_vtk: legacy VTK format for ParaView/VisIt visualization

All functions use the canonical in-memory format:
    points: (N, 3) float64 array
    triangles: (M, 3) int64 array, 0-indexed
"""
from __future__ import annotations

from typing import Dict, Optional, Tuple

import numpy as np

from .errors import MeshValidationError
from .logging_utils import get_logger

logger = get_logger('holecap.io')

__all__ = ['read_obj', 'write_obj', 'write_vtk']


def _obj_index(token: str, n_vertices: int, lineno: int) -> int:
    # 'v', 'v/vt', 'v//vn' and 'v/vt/vn' all start with the vertex index
    raw = token.split('/')[0]
    try:
        idx = int(raw)
    except ValueError as e:
        raise MeshValidationError(f"line {lineno}: bad face index {token!r}") from e
    if idx > 0:
        return idx - 1
    if idx < 0:
        # negative indices count back from the latest vertex
        return n_vertices + idx
    raise MeshValidationError(f"line {lineno}: OBJ face indices are 1-based, got 0")


def read_obj(filepath: str) -> Tuple[np.ndarray, np.ndarray]:
    """Read vertices and triangular faces from a Wavefront OBJ file.

    Parameters
    ----------
    filepath : str
        Path to .obj file

    Returns
    -------
    points : (N, 3) ndarray of float64
    triangles : (M, 3) ndarray of int64, 0-indexed

    Raises
    ------
    MeshValidationError
        If a record cannot be parsed or the file holds no vertices
    FileNotFoundError
        If file doesn't exist

    Notes
    -----
    Faces with more than three vertices are skipped with a warning; the
    tool works on raw triangulations and never re-triangulates polygons.
    """
    vertices = []
    faces = []
    skipped = 0
    with open(filepath, 'r') as f:
        for lineno, line in enumerate(f, start=1):
            parts = line.split()
            if not parts or parts[0].startswith('#'):
                continue
            if parts[0] == 'v':
                if len(parts) < 4:
                    raise MeshValidationError(f"line {lineno}: vertex needs 3 coordinates")
                try:
                    vertices.append([float(c) for c in parts[1:4]])
                except ValueError as e:
                    raise MeshValidationError(f"line {lineno}: bad vertex coordinates") from e
            elif parts[0] == 'f':
                if len(parts) != 4:
                    skipped += 1
                    continue
                faces.append([_obj_index(tok, len(vertices), lineno) for tok in parts[1:]])
    if not vertices:
        raise MeshValidationError(f"No vertices found in {filepath}")
    if skipped:
        logger.warning('Skipped %d non-triangular face(s) in %s', skipped, filepath)
    points = np.array(vertices, dtype=np.float64)
    triangles = np.array(faces, dtype=np.int64).reshape(-1, 3)
    logger.debug('Read %d vertices and %d triangles from %s', len(points), len(triangles), filepath)
    return points, triangles


def write_obj(filepath: str, points: np.ndarray, triangles: np.ndarray,
              header: Optional[str] = None) -> None:
    """Write points and 0-indexed triangles to a Wavefront OBJ file.

    Every point is written, referenced or not, so vertex numbering on disk
    matches the input point cloud.
    """
    points = np.asarray(points, dtype=np.float64)
    triangles = np.asarray(triangles, dtype=np.int64).reshape(-1, 3)
    if points.ndim != 2 or points.shape[1] not in (2, 3):
        raise ValueError(f"points must be (N, 2) or (N, 3), got shape {points.shape}")
    if points.shape[1] == 2:
        points = np.column_stack([points, np.zeros(len(points))])
    with open(filepath, 'w') as f:
        if header:
            for line in header.splitlines():
                f.write(f"# {line}\n")
        for pt in points:
            f.write(f"v {pt[0]:.17g} {pt[1]:.17g} {pt[2]:.17g}\n")
        for tri in triangles:
            f.write(f"f {tri[0] + 1} {tri[1] + 1} {tri[2] + 1}\n")


def _write_fields(f, data_map: Dict[str, np.ndarray], count: int, kind: str) -> None:
    for name, data in data_map.items():
        data = np.asarray(data)
        if data.shape[0] != count:
            raise ValueError(f"{kind}['{name}'] has {data.shape[0]} values, expected {count}")
        if data.dtype == bool:
            data = data.astype(np.int32)
        if data.ndim == 1:
            f.write(f"SCALARS {name} double 1\n")
            f.write("LOOKUP_TABLE default\n")
            for val in data:
                f.write(f"{float(val):.16e}\n")
        elif data.ndim == 2 and data.shape[1] == 3:
            f.write(f"VECTORS {name} double\n")
            for vec in data:
                f.write(f"{vec[0]:.16e} {vec[1]:.16e} {vec[2]:.16e}\n")
        else:
            logger.warning("Skipping %s['%s'] with unsupported shape %s", kind, name, data.shape)


def write_vtk(filepath: str,
              points: np.ndarray,
              triangles: np.ndarray,
              point_data: Optional[Dict[str, np.ndarray]] = None,
              cell_data: Optional[Dict[str, np.ndarray]] = None,
              title: str = "holecap mesh") -> None:
    """Write a triangular surface mesh to legacy VTK format (ASCII).

    Parameters
    ----------
    filepath : str
        Output .vtk file path
    points : (N, 3) or (N, 2) ndarray
        Vertex coordinates. If 2D, z=0 is added.
    triangles : (M, 3) ndarray
        Triangle connectivity (0-indexed)
    point_data : dict, optional
        Per-vertex fields, (N,) scalars or (N, 3) vectors. Boolean arrays
        (e.g. border flags) are written as 0/1 scalars.
    cell_data : dict, optional
        Per-triangle fields, (M,) scalars or (M, 3) vectors.
    title : str
        Dataset title/description

    Examples
    --------
    >>> det = detect_caps(points, triangles, 2.5)
    >>> write_vtk('caps.vtk', points, triangles,
    ...           point_data={'border': det.is_border, 'ratio': det.ratios},
    ...           cell_data={'cap': det.cap_mask})
    """
    points = np.asarray(points, dtype=np.float64)
    triangles = np.asarray(triangles, dtype=np.int64).reshape(-1, 3)
    if points.ndim != 2 or points.shape[1] not in (2, 3):
        raise ValueError(f"points must be (N, 2) or (N, 3), got shape {points.shape}")
    if points.shape[1] == 2:
        points = np.column_stack([points, np.zeros(len(points))])

    num_points = len(points)
    num_triangles = len(triangles)

    with open(filepath, 'w') as f:
        f.write("# vtk DataFile Version 2.0\n")
        f.write(f"{title}\n")
        f.write("ASCII\n")
        f.write("DATASET UNSTRUCTURED_GRID\n")

        f.write(f"POINTS {num_points} double\n")
        for pt in points:
            f.write(f"{pt[0]:.16e} {pt[1]:.16e} {pt[2]:.16e}\n")

        f.write(f"\nCELLS {num_triangles} {num_triangles * 4}\n")
        for tri in triangles:
            f.write(f"3 {tri[0]} {tri[1]} {tri[2]}\n")

        # 5 = VTK_TRIANGLE
        f.write(f"\nCELL_TYPES {num_triangles}\n")
        for _ in range(num_triangles):
            f.write("5\n")

        if point_data:
            f.write(f"\nPOINT_DATA {num_points}\n")
            _write_fields(f, point_data, num_points, 'point_data')
        if cell_data:
            f.write(f"\nCELL_DATA {num_triangles}\n")
            _write_fields(f, cell_data, num_triangles, 'cell_data')
