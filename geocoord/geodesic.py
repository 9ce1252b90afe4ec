# geocoord/geodesic.py
"""
Geodesic calculations on the reference ellipsoid, plus a dispatch layer that selects
between spherical (great-circle), Vincenty (ellipsoid) and Karney (ellipsoid) algorithms.
"""

__all__ = [
    'GeodesicInverse',
    'karney_bearing', 'karney_destination', 'karney_distance',
    'vincenty_bearing', 'vincenty_direct', 'vincenty_distance', 'vincenty_inverse',
    'bearing_degrees', 'destination_point', 'distance_meters', 'set_geodesic_algorithm',
]

import math
from typing import Literal, NamedTuple, Tuple

from geocoord._const import EPSILON, VINCENTY_MAX_ITERATIONS
from geocoord.coordinates import GeoPoint, normalize_longitude
from geocoord.ellipsoid import Ellipsoid, WGS84
from geocoord.exceptions import NonConvergenceError
from geocoord.spherical import spherical_bearing, spherical_distance, spherical_projection
from geocoord.utils.logging import LOGGER


class GeodesicInverse(NamedTuple):
    """Solution of the inverse geodesic problem"""
    distance: float  # meters
    forward_azimuth: float  # degrees [0, 360), at the first point
    reverse_azimuth: float  # degrees [0, 360), at the second point, back toward the first


def _normalize_azimuth(degrees: float) -> float:
    azimuth = degrees % 360.
    return 0. if azimuth == 360. else azimuth


def _series_coefficients(u_sq: float) -> Tuple[float, float]:
    """Vincenty's A and B coefficients (eqs. 3 and 4)"""
    a_coef = 1. + u_sq / 16384. * (4096. + u_sq * (-768. + u_sq * (320. - 175. * u_sq)))
    b_coef = u_sq / 1024. * (256. + u_sq * (-128. + u_sq * (74. - 47. * u_sq)))
    return a_coef, b_coef


def _delta_sigma(
    b_coef: float, sin_sigma: float, cos_sigma: float, cos_2sigma_m: float
) -> float:
    """eq. 6"""
    return b_coef * sin_sigma * (
        cos_2sigma_m + b_coef / 4. * (
            cos_sigma * (-1. + 2. * cos_2sigma_m ** 2) -
            b_coef / 6. * cos_2sigma_m * (-3. + 4. * sin_sigma ** 2) *
            (-3. + 4. * cos_2sigma_m ** 2)
        )
    )


def _lambda_correction(
    flat: float,
    sin_alpha: float,
    cos_sq_alpha: float,
    sigma: float,
    sin_sigma: float,
    cos_sigma: float,
    cos_2sigma_m: float,
) -> float:
    """Difference between longitude on the auxiliary sphere and on the ellipsoid (eqs. 10, 11)"""
    c = flat / 16. * cos_sq_alpha * (4. + flat * (4. - 3. * cos_sq_alpha))
    return (1. - c) * flat * sin_alpha * (
        sigma + c * sin_sigma * (cos_2sigma_m + c * cos_sigma * (-1. + 2. * cos_2sigma_m ** 2))
    )


# -------------------------------------------------------------------------
# Vincenty Implementation (Ellipsoidal)
# -------------------------------------------------------------------------

def vincenty_inverse(
    p1: GeoPoint,
    p2: GeoPoint,
    ellipsoid: Ellipsoid = WGS84,
    max_iterations: int = VINCENTY_MAX_ITERATIONS,
) -> GeodesicInverse:
    """
    Solve the inverse geodesic problem using Vincenty's formulae: the distance between
    two points, and the azimuths of the geodesic joining them.

    Args:
        p1:
            The start point

        p2:
            The end point

        ellipsoid:
            (Default WGS84) The reference ellipsoid

        max_iterations:
            (Default 200) Iteration cap for the longitude solve

    Raises:
        NonConvergenceError: if the solve fails to converge; expected for antipodal
            and nearly antipodal points

    Returns:
        GeodesicInverse of (distance in meters, forward azimuth, reverse azimuth)
    """
    if p1.latitude == p2.latitude and p1.longitude == p2.longitude:
        return GeodesicInverse(0., 0., 0.)

    a0 = ellipsoid.semi_major_axis
    b0 = ellipsoid.semi_minor_axis
    flat = ellipsoid.flattening

    lat1, lat2 = math.radians(p1.latitude), math.radians(p2.latitude)
    omega = math.radians(normalize_longitude(p2.longitude - p1.longitude))

    # Reduced latitudes
    u1 = math.atan((1. - flat) * math.tan(lat1))
    u2 = math.atan((1. - flat) * math.tan(lat2))
    sin_u1, cos_u1 = math.sin(u1), math.cos(u1)
    sin_u2, cos_u2 = math.sin(u2), math.cos(u2)

    lam = omega
    delta = None
    for iteration in range(1, max_iterations + 1):
        sin_lam, cos_lam = math.sin(lam), math.cos(lam)

        # eq. 14
        sin_sigma = math.hypot(cos_u2 * sin_lam, cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lam)
        # eq. 15
        cos_sigma = sin_u1 * sin_u2 + cos_u1 * cos_u2 * cos_lam

        if sin_sigma == 0.:
            if cos_sigma > 0.:
                # Same point, written differently
                return GeodesicInverse(0., 0., 0.)

            LOGGER.warning('Vincenty inverse given antipodal points %r, %r', p1, p2)
            raise NonConvergenceError(
                'Geodesic between antipodal points is undefined', iterations=iteration
            )

        # eq. 16
        sigma = math.atan2(sin_sigma, cos_sigma)

        # eq. 17
        sin_alpha = cos_u1 * cos_u2 * sin_lam / sin_sigma
        cos_sq_alpha = 1. - sin_alpha ** 2

        # eq. 18; both points on the equator when cos_sq_alpha == 0
        if cos_sq_alpha != 0.:
            cos_2sigma_m = cos_sigma - 2. * sin_u1 * sin_u2 / cos_sq_alpha
        else:
            cos_2sigma_m = 0.

        last = lam
        lam = omega + _lambda_correction(
            flat, sin_alpha, cos_sq_alpha, sigma, sin_sigma, cos_sigma, cos_2sigma_m
        )
        delta = abs(last - lam)
        if delta <= EPSILON:
            LOGGER.debug('Vincenty inverse converged after %d iterations', iteration)
            break
    else:
        LOGGER.warning(
            'Vincenty inverse failed to converge after %d iterations (%r, %r)',
            max_iterations, p1, p2
        )
        raise NonConvergenceError(
            f'Vincenty inverse did not converge after {max_iterations} iterations',
            iterations=max_iterations,
            delta=delta,
        )

    u_sq = cos_sq_alpha * (a0 * a0 - b0 * b0) / (b0 * b0)
    a_coef, b_coef = _series_coefficients(u_sq)
    distance = b0 * a_coef * (
        sigma - _delta_sigma(b_coef, sin_sigma, cos_sigma, cos_2sigma_m)
    )

    # eq. 20
    sin_lam, cos_lam = math.sin(lam), math.cos(lam)
    alpha12 = math.atan2(cos_u2 * sin_lam, cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lam)
    alpha21 = math.atan2(cos_u1 * sin_lam, -sin_u1 * cos_u2 + cos_u1 * sin_u2 * cos_lam)

    return GeodesicInverse(
        distance,
        _normalize_azimuth(math.degrees(alpha12)),
        _normalize_azimuth(math.degrees(alpha21) + 180.),
    )


def vincenty_distance(p1: GeoPoint, p2: GeoPoint, ellipsoid: Ellipsoid = WGS84) -> float:
    """Distance in meters between two points, via Vincenty's inverse formula"""
    return vincenty_inverse(p1, p2, ellipsoid).distance


def vincenty_bearing(start: GeoPoint, end: GeoPoint, ellipsoid: Ellipsoid = WGS84) -> float:
    """
    Calculate the initial bearing (forward azimuth) using Vincenty's inverse formula.

    Args:
        start: The starting GeoPoint
        end: The ending GeoPoint
        ellipsoid: (Default WGS84) The reference ellipsoid

    Returns:
        float: Bearing in degrees [0, 360)
    """
    return vincenty_inverse(start, end, ellipsoid).forward_azimuth


def vincenty_direct(
    origin: GeoPoint,
    azimuth: float,
    distance: float,
    ellipsoid: Ellipsoid = WGS84,
    max_iterations: int = VINCENTY_MAX_ITERATIONS,
) -> GeoPoint:
    """
    Solve the direct geodesic problem using Vincenty's formulae: given a start location,
    a direction of travel (in degrees clockwise from North) and a distance, returns the
    finish location.

    Args:
        origin:
            The starting location

        azimuth:
            The forward azimuth, in degrees

        distance:
            The distance of travel along the geodesic, in meters

        ellipsoid:
            (Default WGS84) The reference ellipsoid

        max_iterations:
            (Default 200) Iteration cap for the arc-length solve

    Raises:
        NonConvergenceError: if the solve fails to converge

    Returns:
        GeoPoint
    """
    if distance == 0.:
        return GeoPoint(origin.latitude, normalize_longitude(origin.longitude))

    a0 = ellipsoid.semi_major_axis
    b0 = ellipsoid.semi_minor_axis
    flat = ellipsoid.flattening

    lat1, lon1 = math.radians(origin.latitude), math.radians(origin.longitude)
    alpha1 = math.radians(azimuth)
    sin_alpha1, cos_alpha1 = math.sin(alpha1), math.cos(alpha1)

    tan_u1 = (1. - flat) * math.tan(lat1)
    u1 = math.atan(tan_u1)
    sin_u1, cos_u1 = math.sin(u1), math.cos(u1)

    # eq. 1
    sigma1 = math.atan2(tan_u1, cos_alpha1)
    # eq. 2
    sin_alpha = cos_u1 * sin_alpha1
    cos_sq_alpha = 1. - sin_alpha ** 2

    u_sq = cos_sq_alpha * (a0 * a0 - b0 * b0) / (b0 * b0)
    a_coef, b_coef = _series_coefficients(u_sq)

    first_sigma = distance / (b0 * a_coef)
    sigma = first_sigma
    delta = None
    for iteration in range(1, max_iterations + 1):
        last = sigma
        cos_2sigma_m = math.cos(2. * sigma1 + sigma)
        sigma = first_sigma + _delta_sigma(
            b_coef, math.sin(sigma), math.cos(sigma), cos_2sigma_m
        )
        delta = abs(sigma - last)
        if delta <= EPSILON:
            LOGGER.debug('Vincenty direct converged after %d iterations', iteration)
            break
    else:
        LOGGER.warning(
            'Vincenty direct failed to converge after %d iterations (%r, %s, %s)',
            max_iterations, origin, azimuth, distance
        )
        raise NonConvergenceError(
            f'Vincenty direct did not converge after {max_iterations} iterations',
            iterations=max_iterations,
            delta=delta,
        )

    sin_sigma, cos_sigma = math.sin(sigma), math.cos(sigma)
    cos_2sigma_m = math.cos(2. * sigma1 + sigma)

    # eq. 8
    tmp = sin_u1 * sin_sigma - cos_u1 * cos_sigma * cos_alpha1
    lat2 = math.atan2(
        sin_u1 * cos_sigma + cos_u1 * sin_sigma * cos_alpha1,
        (1. - flat) * math.sqrt(sin_alpha ** 2 + tmp ** 2)
    )

    # eq. 9
    lam = math.atan2(
        sin_sigma * sin_alpha1,
        cos_u1 * cos_sigma - sin_u1 * sin_sigma * cos_alpha1
    )
    lon2 = lon1 + lam - _lambda_correction(
        flat, sin_alpha, cos_sq_alpha, sigma, sin_sigma, cos_sigma, cos_2sigma_m
    )

    return GeoPoint(math.degrees(lat2), normalize_longitude(math.degrees(lon2)))


# -------------------------------------------------------------------------
# Karney Implementation (Ellipsoidal)
# -------------------------------------------------------------------------

def _karney_geodesic(ellipsoid: Ellipsoid):
    from geographiclib.geodesic import Geodesic  # pylint: disable=import-outside-toplevel

    if ellipsoid == WGS84:
        return Geodesic.WGS84

    return Geodesic(ellipsoid.semi_major_axis, ellipsoid.flattening)


def karney_distance(p1: GeoPoint, p2: GeoPoint, ellipsoid: Ellipsoid = WGS84) -> float:
    """
    Calculate distance using Karney's algorithm (via geographiclib).
    Robust against antipodal points and convergence failures.
    """
    res = _karney_geodesic(ellipsoid).Inverse(
        p1.latitude, p1.longitude,
        p2.latitude, p2.longitude
    )
    return res['s12']


def karney_destination(
    origin: GeoPoint, azimuth: float, distance: float, ellipsoid: Ellipsoid = WGS84
) -> GeoPoint:
    """
    Calculate destination using Karney's algorithm (via geographiclib).
    """
    res = _karney_geodesic(ellipsoid).Direct(
        origin.latitude, origin.longitude,
        azimuth, distance
    )
    return GeoPoint(res['lat2'], normalize_longitude(res['lon2']))


def karney_bearing(start: GeoPoint, end: GeoPoint, ellipsoid: Ellipsoid = WGS84) -> float:
    """
    Calculate initial bearing using Karney's algorithm (via geographiclib).
    """
    res = _karney_geodesic(ellipsoid).Inverse(
        start.latitude, start.longitude,
        end.latitude, end.longitude
    )

    # geographiclib returns azimuth in range [-180, 180]; normalize to [0, 360)
    return _normalize_azimuth(res['azi1'])


# -------------------------------------------------------------------------
# Dynamic Dispatch & Configuration
# -------------------------------------------------------------------------

# These declare the geodesic algorithm in use (default vincenty)
distance_meters = vincenty_distance
destination_point = vincenty_direct
bearing_degrees = vincenty_bearing


_ALGORITHMS = {
    'spherical': (
        spherical_distance,
        spherical_projection,
        spherical_bearing,
    ),
    'vincenty': (
        vincenty_distance,
        vincenty_direct,
        vincenty_bearing,
    ),
    'karney': (
        karney_distance,
        karney_destination,
        karney_bearing,
    ),
}


def set_geodesic_algorithm(algorithm: Literal['spherical', 'vincenty', 'karney']):
    """
    Set the global geodesic calculation method used by distance_meters,
    destination_point and bearing_degrees.

    Args:
        algorithm: 'spherical', 'vincenty' or 'karney'
    """
    global distance_meters, destination_point, bearing_degrees  # pylint: disable=global-statement

    if algorithm not in _ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{algorithm}'. Options: {list(_ALGORITHMS.keys())}")

    LOGGER.debug('Geodesic algorithm set to %s', algorithm)
    distance_meters, destination_point, bearing_degrees = _ALGORITHMS[algorithm]
