"""
Representation of a specific point on earth
"""

__all__ = ['GeoPoint', 'normalize_longitude']

import math
from typing import Tuple

from pydantic import validate_call

from geocoord._const import CARTESIAN_MAX_ITERATIONS, EARTH_RADIUS, EPSILON
from geocoord.cartesian import CartesianPoint
from geocoord.ellipsoid import Ellipsoid, WGS84
from geocoord.exceptions import DegenerateGeometryError, NonConvergenceError
from geocoord.utils.logging import LOGGER, warn_once


def normalize_longitude(longitude: float) -> float:
    """
    Wraps a longitude into the range [-180, 180).

    Args:
        longitude:
            A longitude in degrees, of any magnitude

    Returns:
        float
    """
    if -180. <= longitude < 180.:
        return longitude

    return (longitude + 180.) % 360. - 180.


class GeoPoint:
    """
    Representation of a coordinate on the globe (i.e., a lat/lon pair), in degrees.

    Longitude is stored as given; every operation that produces a new GeoPoint normalizes
    its longitude to [-180, 180). Latitude is expected to fall within [-90, 90] but is not
    enforced.

    Args:
        latitude:
            Degrees north of the equator

        longitude:
            Degrees east of the prime meridian
    """

    __slots__ = ('_latitude', '_longitude')

    @validate_call(config=dict(arbitrary_types_allowed=True))
    def __init__(self, latitude: float, longitude: float):
        if not -90. <= latitude <= 90.:
            warn_once(
                'Latitudes outside [-90, 90] do not produce meaningful results. '
                '(this warning will not repeat)'
            )

        object.__setattr__(self, '_latitude', latitude)
        object.__setattr__(self, '_longitude', longitude)

    def __setattr__(self, key, value):
        raise AttributeError(f'{self.__class__.__name__} is immutable')

    def __eq__(self, other):
        if not isinstance(other, GeoPoint):
            return False

        return self.latitude == other.latitude and self.longitude == other.longitude

    def __hash__(self):
        return hash((self.latitude, self.longitude))

    def __repr__(self):
        return f'<GeoPoint({self.latitude}, {self.longitude})>'

    @property
    def latitude(self) -> float:
        return self._latitude

    @property
    def longitude(self) -> float:
        return self._longitude

    def to_float(self, reverse: bool = False) -> Tuple[float, float]:
        """
        Converts the point to a tuple of floats (latitude, longitude).

        Args:
            reverse: (bool)
                (Default False) If True, reverses the order to (longitude, latitude)

        Returns:
            Tuple[float, float]
        """
        if reverse:
            return self.longitude, self.latitude

        return self.latitude, self.longitude

    def to_cartesian(self, ellipsoid: Ellipsoid = WGS84) -> CartesianPoint:
        """
        Converts the point to earth-centered Cartesian coordinates on the surface of
        the ellipsoid.

        Args:
            ellipsoid:
                (Default WGS84) The reference ellipsoid

        Returns:
            CartesianPoint, in meters
        """
        ecc2 = ellipsoid.eccentricity_squared
        lat, lon = math.radians(self.latitude), math.radians(self.longitude)
        sin_lat, cos_lat = math.sin(lat), math.cos(lat)

        # Radius of curvature in the prime vertical
        n = ellipsoid.semi_major_axis / math.sqrt(1. - ecc2 * sin_lat * sin_lat)
        return CartesianPoint(
            n * math.cos(lon) * cos_lat,
            n * math.sin(lon) * cos_lat,
            n * (1. - ecc2) * sin_lat,
        )

    @classmethod
    def from_cartesian(
        cls,
        point: CartesianPoint,
        ellipsoid: Ellipsoid = WGS84,
        max_iterations: int = CARTESIAN_MAX_ITERATIONS,
    ) -> 'GeoPoint':
        """
        Converts earth-centered Cartesian coordinates back to a GeoPoint, using
        fixed-point iteration on the tangent of the latitude.

        Args:
            point:
                The Cartesian point, in meters

            ellipsoid:
                (Default WGS84) The reference ellipsoid

            max_iterations:
                (Default 20) Iteration cap for the latitude solve

        Raises:
            DegenerateGeometryError: if the point lies at the center of the ellipsoid
            NonConvergenceError: if the latitude fails to converge within max_iterations

        Returns:
            GeoPoint
        """
        ecc2 = ellipsoid.eccentricity_squared
        r = ellipsoid.semi_major_axis * ecc2
        p = math.hypot(point.x, point.y)

        if p == 0.:
            if point.z == 0.:
                raise DegenerateGeometryError(
                    'The center of the ellipsoid has no geographic coordinates'
                )
            # On the polar axis; longitude is arbitrary
            return cls(math.copysign(90., point.z), 0.)

        tan_lat = point.z / (p * (1. - ecc2))
        delta = None
        for iteration in range(1, max_iterations + 1):
            last = tan_lat
            tan_lat = point.z / (p - r / math.sqrt(1. + (1. - ecc2) * tan_lat * tan_lat))
            delta = abs(last - tan_lat)
            # Threshold scales with |tan(lat)| near the poles
            if delta <= EPSILON * max(1., abs(tan_lat)):
                LOGGER.debug('Cartesian inverse converged after %d iterations', iteration)
                break
        else:
            LOGGER.warning(
                'Cartesian inverse failed to converge after %d iterations', max_iterations
            )
            raise NonConvergenceError(
                f'Latitude did not converge after {max_iterations} iterations',
                iterations=max_iterations,
                delta=delta,
            )

        return cls(
            math.degrees(math.atan(tan_lat)),
            normalize_longitude(math.degrees(math.atan2(point.y, point.x))),
        )

    def to_spherical_cartesian(self, radius: float = EARTH_RADIUS) -> CartesianPoint:
        """
        Converts the point to earth-centered Cartesian coordinates on a sphere.

        Args:
            radius:
                (Default EARTH_RADIUS) The sphere radius, in meters

        Returns:
            CartesianPoint, in meters
        """
        lat, lon = math.radians(self.latitude), math.radians(self.longitude)
        return CartesianPoint(
            radius * math.cos(lon) * math.cos(lat),
            radius * math.sin(lon) * math.cos(lat),
            radius * math.sin(lat),
        )

    @classmethod
    def from_spherical_cartesian(cls, point: CartesianPoint) -> 'GeoPoint':
        """
        Converts Cartesian coordinates back to a GeoPoint by projecting onto a sphere.
        The sphere radius does not affect the result.

        Args:
            point:
                The Cartesian point

        Returns:
            GeoPoint
        """
        return cls(
            math.degrees(math.atan2(point.z, math.hypot(point.x, point.y))),
            normalize_longitude(math.degrees(math.atan2(point.y, point.x))),
        )
