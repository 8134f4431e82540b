"""Public package API for holecap.

Detects and removes "cap" triangles: spurious triangles of a raw surface
triangulation that close what should be an open hole. A vertex is a border
candidate when its incident triangles differ too much in size (ratio of the
largest to the smallest perimeter above a threshold L); a triangle whose
three vertices are all border candidates is removed.

Example
-------
    from holecap import remove_cap_triangles
    cleaned = remove_cap_triangles(points, triangles, threshold=2.5)

The deeper modules (``holecap.core.*``) are considered internal and may
change; rely on this layer for public symbols.
"""
import logging as _logging

from importlib.metadata import version as _pkg_version, PackageNotFoundError as _NotFound

try:
    __version__ = _pkg_version("holecap")
except _NotFound:  # pragma: no cover - running from a source checkout
    __version__ = "0.0.0+dev"

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

from .core.border import classify_border_vertices, length_ratios
from .core.caps import CapDetection, border_counts, cap_triangle_mask, detect_caps, remove_cap_triangles
from .core.config import CapRemovalConfig
from .core.constants import DEFAULT_THRESHOLD
from .core.diagnostics import boundary_edges, count_boundary_loops, extract_boundary_loops, unreferenced_vertices
from .core.errors import HolecapError, InvalidThresholdError, MeshValidationError, TriangleIndexError
from .core.geometry import connectivity_lengths, edge_lengths
from .core.incidence import build_vertex_incidence, incident_length_extrema
from .core.io import read_obj, write_obj, write_vtk
from .core.logging_utils import configure_logging, get_logger
from .core.stats import CapRemovalStats

__all__ = [
    '__version__',
    # pipeline
    'remove_cap_triangles', 'detect_caps', 'CapDetection', 'CapRemovalConfig', 'CapRemovalStats',
    'DEFAULT_THRESHOLD',
    # stages
    'edge_lengths', 'connectivity_lengths',
    'build_vertex_incidence', 'incident_length_extrema',
    'length_ratios', 'classify_border_vertices',
    'border_counts', 'cap_triangle_mask',
    # diagnostics
    'boundary_edges', 'extract_boundary_loops', 'count_boundary_loops', 'unreferenced_vertices',
    # errors
    'HolecapError', 'MeshValidationError', 'TriangleIndexError', 'InvalidThresholdError',
    # io / logging
    'read_obj', 'write_obj', 'write_vtk', 'configure_logging', 'get_logger',
]
