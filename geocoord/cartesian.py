"""
Representation of a point in an earth-centered, earth-fixed Cartesian frame
"""

__all__ = ['CartesianPoint']

from typing import Tuple

import numpy as np
from numpy.linalg import norm
from pydantic import validate_call

from geocoord.exceptions import DegenerateGeometryError


class CartesianPoint:
    """
    A 3-D Euclidean point (or vector), in meters, with the origin at the center of the
    reference surface.

    Args:
        x:
            Component along the axis through (0°N, 0°E)

        y:
            Component along the axis through (0°N, 90°E)

        z:
            Component along the polar axis
    """

    __slots__ = ('_x', '_y', '_z')

    @validate_call(config=dict(arbitrary_types_allowed=True))
    def __init__(self, x: float, y: float, z: float):
        object.__setattr__(self, '_x', x)
        object.__setattr__(self, '_y', y)
        object.__setattr__(self, '_z', z)

    def __setattr__(self, key, value):
        raise AttributeError(f'{self.__class__.__name__} is immutable')

    def __eq__(self, other):
        if not isinstance(other, CartesianPoint):
            return False

        return self.x == other.x and self.y == other.y and self.z == other.z

    def __hash__(self):
        return hash((self.x, self.y, self.z))

    def __repr__(self):
        return f'<CartesianPoint({self.x}, {self.y}, {self.z})>'

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    @property
    def z(self) -> float:
        return self._z

    @classmethod
    def _from_array(cls, arr: np.ndarray) -> 'CartesianPoint':
        return cls(*arr.tolist())

    def to_array(self) -> np.ndarray:
        """Returns the point as a numpy array of [x, y, z]"""
        return np.array([self.x, self.y, self.z])

    def to_float(self) -> Tuple[float, float, float]:
        return self.x, self.y, self.z

    def dot(self, other: 'CartesianPoint') -> float:
        """Dot product with another point"""
        return float(np.dot(self.to_array(), other.to_array()))

    def cross(self, other: 'CartesianPoint') -> 'CartesianPoint':
        """Cross product with another point (self x other)"""
        return self._from_array(np.cross(self.to_array(), other.to_array()))

    @property
    def magnitude(self) -> float:
        return float(norm(self.to_array()))

    def normalize(self) -> 'CartesianPoint':
        """
        Scale the vector to unit length.

        Raises:
            DegenerateGeometryError: if the vector has zero magnitude

        Returns:
            CartesianPoint
        """
        mag = self.magnitude
        if mag == 0:
            raise DegenerateGeometryError('Cannot normalize a zero-length vector')

        return self._from_array(self.to_array() / mag)
