"""
Reference ellipsoid definitions
"""

__all__ = ['Ellipsoid', 'WGS84']

import math

from pydantic import validate_call

from geocoord._const import WGS84_A, WGS84_INVERSE_FLATTENING
from geocoord.exceptions import InvalidEllipsoidError


class Ellipsoid:
    """
    An immutable reference ellipsoid, defined by its semi-major axis and inverse flattening.

    Derived quantities (flattening, eccentricity, etc.) are computed on access.

    Args:
        semi_major_axis:
            The equatorial radius, in meters

        inverse_flattening:
            The reciprocal of the flattening, 1/f
    """

    __slots__ = ('_semi_major_axis', '_inverse_flattening')

    @validate_call(config=dict(arbitrary_types_allowed=True))
    def __init__(self, semi_major_axis: float, inverse_flattening: float):
        for name, value in (
            ('semi-major axis', semi_major_axis),
            ('inverse flattening', inverse_flattening)
        ):
            if not math.isfinite(value) or value <= 0:
                raise InvalidEllipsoidError(
                    f'Ellipsoid {name} must be a positive finite number, not {value}'
                )

        object.__setattr__(self, '_semi_major_axis', semi_major_axis)
        object.__setattr__(self, '_inverse_flattening', inverse_flattening)

    def __setattr__(self, key, value):
        raise AttributeError(f'{self.__class__.__name__} is immutable')

    def __eq__(self, other):
        if not isinstance(other, Ellipsoid):
            return False

        return (
            self.semi_major_axis == other.semi_major_axis and
            self.inverse_flattening == other.inverse_flattening
        )

    def __hash__(self):
        return hash((self.semi_major_axis, self.inverse_flattening))

    def __repr__(self):
        return f'<Ellipsoid(a={self.semi_major_axis}, 1/f={self.inverse_flattening})>'

    @property
    def semi_major_axis(self) -> float:
        return self._semi_major_axis

    @property
    def inverse_flattening(self) -> float:
        return self._inverse_flattening

    @property
    def flattening(self) -> float:
        return 1. / self._inverse_flattening

    @property
    def semi_minor_axis(self) -> float:
        return self._semi_major_axis * (1. - self.flattening)

    @property
    def eccentricity_squared(self) -> float:
        """First eccentricity squared, e² = 2f - f²"""
        flat = self.flattening
        return 2. * flat - flat * flat

    @property
    def second_eccentricity_squared(self) -> float:
        """Second eccentricity squared, e'² = e² / (1 - e²)"""
        ecc2 = self.eccentricity_squared
        return ecc2 / (1. - ecc2)


WGS84 = Ellipsoid(WGS84_A, WGS84_INVERSE_FLATTENING)
