"""Exception hierarchy raised by input validation."""
from __future__ import annotations


class HolecapError(Exception):
    """Base class for every error raised by holecap."""


class MeshValidationError(HolecapError, ValueError):
    """Points or triangles have the wrong shape, dtype or values."""


class TriangleIndexError(MeshValidationError, IndexError):
    """A triangle references a vertex outside the point cloud."""

    def __init__(self, message: str, triangles=None):
        super().__init__(message)
        self.triangles = [] if triangles is None else list(triangles)


class InvalidThresholdError(HolecapError, ValueError):
    """Border threshold is not a positive finite number."""


__all__ = [
    'HolecapError',
    'MeshValidationError',
    'TriangleIndexError',
    'InvalidThresholdError',
]
