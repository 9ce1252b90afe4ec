""" Great-circle calculations on a sphere of fixed radius """

__all__ = [
    'cross_track_distance', 'is_between', 'spherical_bearing', 'spherical_cross',
    'spherical_distance', 'spherical_projection',
]

import math

from geocoord._const import EARTH_RADIUS
from geocoord.cartesian import CartesianPoint
from geocoord.coordinates import GeoPoint, normalize_longitude
from geocoord.exceptions import DegenerateGeometryError

# Below this distance (meters) the law of cosines loses precision
_SMALL_DISTANCE = .01

# Smallest sine of the angle between two points that still defines a great circle
_MIN_SEPARATION = 1e-12


def _wrap_radians(angle: float) -> float:
    """Wraps an angle difference into [-pi, pi)"""
    return (angle + math.pi) % (2 * math.pi) - math.pi


def spherical_distance(p1: GeoPoint, p2: GeoPoint, radius: float = EARTH_RADIUS) -> float:
    """
    Calculate the great-circle distance between two points. The central angle is taken
    from the sine (magnitude of the cross product, see spherical_cross) and cosine (the
    spherical law of cosines) of the angle, which stays accurate for nearby points.

    Distances under 1 cm are recomputed with a planar approximation.

    Args:
        p1:
            A GeoPoint

        p2:
            A second GeoPoint

        radius:
            (Default EARTH_RADIUS) The sphere radius, in meters

    Returns:
        (float) the distance in meters
    """
    d_lon = math.radians(p1.longitude - p2.longitude)
    lat1, lat2 = math.radians(p1.latitude), math.radians(p2.latitude)
    d_lat = lat1 - lat2

    cos_angle = (
        math.sin(lat1) * math.sin(lat2) +
        math.cos(lat1) * math.cos(lat2) * math.cos(d_lon)
    )
    sin_angle = spherical_cross(p1, p2).magnitude
    distance = radius * math.atan2(sin_angle, cos_angle)

    if distance < _SMALL_DISTANCE:
        d_lon = _wrap_radians(d_lon) * math.cos(lat2)
        distance = radius * math.sqrt(d_lat * d_lat + d_lon * d_lon)

    return distance


def spherical_projection(
    origin: GeoPoint,
    azimuth: float,
    distance: float,
    radius: float = EARTH_RADIUS
) -> GeoPoint:
    """
    Given a start location, a direction of travel (in degrees clockwise from North), and a
    distance of travel along a great circle, returns the finish location.

    Args:
        origin:
            The starting location

        azimuth:
            The forward azimuth, in degrees

        distance:
            The distance of travel, in meters

        radius:
            (Default EARTH_RADIUS) The sphere radius, in meters

    Returns:
        GeoPoint, with longitude in [-180, 180); a destination on the antimeridian
        comes back as -180, not 180
    """
    azimuth = math.radians(azimuth)
    lat1, lon1 = math.radians(origin.latitude), math.radians(origin.longitude)
    ang_dist = distance / radius

    lat2 = math.asin(
        math.sin(lat1) * math.cos(ang_dist) +
        math.cos(lat1) * math.sin(ang_dist) * math.cos(azimuth)
    )
    lon2 = lon1 + math.atan2(
        math.sin(azimuth) * math.sin(ang_dist) * math.cos(lat1),
        math.cos(ang_dist) - math.sin(lat1) * math.sin(lat2)
    )

    return GeoPoint(math.degrees(lat2), normalize_longitude(math.degrees(lon2)))


def spherical_bearing(start: GeoPoint, end: GeoPoint) -> float:
    """Calculate the initial great-circle bearing, in degrees [0, 360)"""
    lat1, lat2 = math.radians(start.latitude), math.radians(end.latitude)
    d_lon = math.radians(end.longitude - start.longitude)

    y = math.sin(d_lon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(d_lon)

    return math.degrees(math.atan2(y, x)) % 360.


def spherical_cross(p1: GeoPoint, p2: GeoPoint) -> CartesianPoint:
    """
    Cross product of the unit vectors of two points, i.e. the (un-normalized) normal of
    the great circle through them.

    Computed from sums and differences of the angles rather than by multiplying out
    the vectors, which keeps precision when the points are close together.

    Args:
        p1:
            The first GeoPoint

        p2:
            The second GeoPoint

    Returns:
        CartesianPoint, dimensionless
    """
    lat1, lon1 = math.radians(p1.latitude), math.radians(p1.longitude)
    lat2, lon2 = math.radians(p2.latitude), math.radians(p2.longitude)

    d_lat = lat1 - lat2
    sum_lat = lat1 + lat2
    half_d_lon = (lon1 - lon2) / 2.
    avg_lon = (lon1 + lon2) / 2.

    return CartesianPoint(
        math.sin(sum_lat) * math.cos(avg_lon) * math.sin(half_d_lon)
        - math.sin(d_lat) * math.sin(avg_lon) * math.cos(half_d_lon),
        math.sin(d_lat) * math.cos(avg_lon) * math.cos(half_d_lon)
        + math.sin(sum_lat) * math.sin(avg_lon) * math.sin(half_d_lon),
        math.cos(lat1) * math.cos(lat2) * math.sin(-2. * half_d_lon),
    )


def is_between(point: GeoPoint, p1: GeoPoint, p2: GeoPoint) -> bool:
    """
    Approximate test of whether a point lies between p1 and p2.

    The point is projected onto the segment p1-p2 in a locally flattened plane (longitude
    differences scaled by the cosine of the point's latitude), and the projection parameter
    is tested against [0, 1). The approximation is only valid for short segments.

    Args:
        point:
            The GeoPoint to test

        p1:
            The start of the segment

        p2:
            The end of the segment

    Raises:
        DegenerateGeometryError: if p1 and p2 coincide

    Returns:
        bool
    """
    cos_lat_sq = math.cos(math.radians(point.latitude)) ** 2
    seg_lon = math.degrees(_wrap_radians(math.radians(p2.longitude - p1.longitude)))
    seg_lat = p2.latitude - p1.latitude
    rel_lon = math.degrees(_wrap_radians(math.radians(point.longitude - p1.longitude)))
    rel_lat = point.latitude - p1.latitude

    denominator = seg_lon * seg_lon * cos_lat_sq + seg_lat * seg_lat
    if denominator == 0.:
        raise DegenerateGeometryError('Segment endpoints coincide; cannot test betweenness')

    u = (rel_lon * seg_lon * cos_lat_sq + rel_lat * seg_lat) / denominator
    return 0. <= u < 1.


def cross_track_distance(
    point: GeoPoint,
    p1: GeoPoint,
    p2: GeoPoint,
    radius: float = EARTH_RADIUS
) -> float:
    """
    Calculate the distance from a point to the great circle through p1 and p2.

    The sign does not indicate the side of the line: the distance is negative when the
    point does not lie between p1 and p2 (see is_between), positive otherwise.

    Args:
        point:
            The GeoPoint to measure from

        p1:
            The first point defining the great circle

        p2:
            The second point defining the great circle

        radius:
            (Default EARTH_RADIUS) The sphere radius, in meters

    Raises:
        DegenerateGeometryError: if p1 and p2 coincide or are antipodal

    Returns:
        (float) the signed distance in meters
    """
    sign = 1. if is_between(point, p1, p2) else -1.

    normal = spherical_cross(p1, p2)
    if normal.magnitude < _MIN_SEPARATION:
        raise DegenerateGeometryError(
            'Coincident or antipodal points do not define a unique great circle'
        )

    normal = normal.normalize()
    unit = point.to_spherical_cartesian(1.)
    cos_angle = max(-1., min(1., normal.dot(unit)))

    return sign * abs(radius * (math.pi / 2. - math.acos(cos_angle)))
