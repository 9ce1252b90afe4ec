"""
Conversions between geographic coordinates and Universal Transverse Mercator grid references
"""

__all__ = ['UTMReference', 'from_utm', 'to_utm', 'utm_zone', 'utm_zone_letter']

import math
from typing import NamedTuple

from pydantic import validate_call

from geocoord._const import (
    UTM_FALSE_EASTING, UTM_FALSE_NORTHING_SOUTH, UTM_SCALE_FACTOR, ZONE_LETTERS
)
from geocoord.coordinates import GeoPoint, normalize_longitude
from geocoord.ellipsoid import Ellipsoid, WGS84
from geocoord.exceptions import UnrecognizedZoneLetterError
from geocoord.utils.logging import LOGGER, warn_once

# Letter assigned to latitudes outside the lettered bands (south of 80°S, north of 84°N)
_OUT_OF_BAND_LETTER = 'Z'


class UTMReference(NamedTuple):
    """A UTM grid reference. Easting and northing are in meters."""
    zone_number: int
    zone_letter: str
    easting: float
    northing: float

    def to_geopoint(
        self,
        ellipsoid: Ellipsoid = WGS84,
        false_northing: float = UTM_FALSE_NORTHING_SOUTH,
    ) -> GeoPoint:
        """Convert this grid reference back to a GeoPoint"""
        return from_utm(
            self.zone_number, self.zone_letter, self.easting, self.northing,
            ellipsoid=ellipsoid, false_northing=false_northing,
        )


def _meridian_factor(ecc2: float) -> float:
    return 1. - ecc2 / 4. - 3. * ecc2 ** 2 / 64. - 5. * ecc2 ** 3 / 256.


def _meridional_arc(a: float, ecc2: float, phi: float) -> float:
    """Distance along the meridian from the equator to latitude phi (radians)"""
    return a * (
        _meridian_factor(ecc2) * phi
        - (3. * ecc2 / 8. + 3. * ecc2 ** 2 / 32. + 45. * ecc2 ** 3 / 1024.) * math.sin(2. * phi)
        + (15. * ecc2 ** 2 / 256. + 45. * ecc2 ** 3 / 1024.) * math.sin(4. * phi)
        - (35. * ecc2 ** 3 / 3072.) * math.sin(6. * phi)
    )


def _central_meridian(zone_number: int) -> float:
    """Central meridian of a zone, in radians"""
    return math.radians((zone_number - 1) * 6. - 180. + 3.)


def utm_zone(point: GeoPoint) -> int:
    """
    Determine the UTM zone number of a point, including the irregular zones around
    southwestern Norway and Svalbard.

    A point exactly on a zone boundary belongs to the zone to its east.

    Args:
        point:
            A GeoPoint

    Returns:
        int in [1, 60]
    """
    lat, lon = point.latitude, normalize_longitude(point.longitude)
    zone = int(math.floor((lon + 180.) / 6.)) % 60 + 1

    if 56. < lat <= 64. and 3. < lon <= 12.:
        zone = 32

    if 72. < lat < 84.:
        if 0. <= lon < 9.:
            zone = 31
        elif 9. <= lon < 21.:
            zone = 33
        elif 21. <= lon < 33.:
            zone = 35
        elif 33. <= lon < 42.:
            zone = 37

    return zone


def utm_zone_letter(latitude: float) -> str:
    """
    Determine the UTM latitude band letter. Band X is stretched to cover 72°N - 84°N.

    Args:
        latitude:
            Latitude in degrees

    Returns:
        str; 'Z' for latitudes outside the lettered bands
    """
    if 72. <= latitude <= 84.:
        return 'X'

    idx = int(math.floor((latitude + 80.) / 8.))
    if 0 <= idx < len(ZONE_LETTERS):
        return ZONE_LETTERS[idx]

    return _OUT_OF_BAND_LETTER


def to_utm(
    point: GeoPoint,
    ellipsoid: Ellipsoid = WGS84,
    false_northing: float = UTM_FALSE_NORTHING_SOUTH,
) -> UTMReference:
    """
    Convert a GeoPoint to a UTM grid reference, using the transverse Mercator series
    expansion. Easting and northing are rounded to the nearest meter.

    Args:
        point:
            The GeoPoint to convert

        ellipsoid:
            (Default WGS84) The reference ellipsoid

        false_northing:
            (Default 10,000,000) Offset added to southern hemisphere northings

    Returns:
        UTMReference
    """
    zone = utm_zone(point)
    letter = utm_zone_letter(point.latitude)
    if letter == _OUT_OF_BAND_LETTER:
        warn_once(
            'Latitudes outside 80°S - 84°N have no UTM band letter; '
            f"'{_OUT_OF_BAND_LETTER}' will be used. (this warning will not repeat)"
        )

    a = ellipsoid.semi_major_axis
    ecc2 = ellipsoid.eccentricity_squared
    ecc12 = ellipsoid.second_eccentricity_squared
    k0 = UTM_SCALE_FACTOR

    phi = math.radians(point.latitude)
    lam = math.radians(normalize_longitude(point.longitude))
    sin_phi, cos_phi, tan_phi = math.sin(phi), math.cos(phi), math.tan(phi)

    n = a / math.sqrt(1. - ecc2 * sin_phi * sin_phi)
    t = tan_phi * tan_phi
    c = ecc12 * cos_phi * cos_phi
    A = cos_phi * (lam - _central_meridian(zone))
    m = _meridional_arc(a, ecc2, phi)

    easting = k0 * n * (
        A
        + (1. - t + c) * A ** 3 / 6.
        + (5. - 18. * t + t * t + 72. * c - 58. * ecc12) * A ** 5 / 120.
    ) + UTM_FALSE_EASTING

    northing = k0 * (m + n * tan_phi * (
        A ** 2 / 2.
        + (5. - t + 9. * c + 4. * c * c) * A ** 4 / 24.
        + (61. - 58. * t + t * t + 600. * c - 330. * ecc12) * A ** 6 / 720.
    ))
    if point.latitude < 0.:
        northing += false_northing

    LOGGER.debug('%r -> zone %d%s, E %.3f, N %.3f', point, zone, letter, easting, northing)
    return UTMReference(
        zone,
        letter,
        float(math.floor(easting + .5)),
        float(math.floor(northing + .5)),
    )


@validate_call(config=dict(arbitrary_types_allowed=True))
def from_utm(
    zone_number: int,
    zone_letter: str,
    easting: float,
    northing: float,
    ellipsoid: Ellipsoid = WGS84,
    false_northing: float = UTM_FALSE_NORTHING_SOUTH,
) -> GeoPoint:
    """
    Convert a UTM grid reference to a GeoPoint, via the footpoint latitude and the inverse
    transverse Mercator series.

    Args:
        zone_number:
            The UTM zone, 1 through 60

        zone_letter:
            The latitude band letter (case-insensitive). Letters before 'N' denote the
            southern hemisphere.

        easting:
            Easting in meters

        northing:
            Northing in meters

        ellipsoid:
            (Default WGS84) The reference ellipsoid

        false_northing:
            (Default 10,000,000) Offset removed from southern hemisphere northings

    Raises:
        UnrecognizedZoneLetterError: if the zone letter is not a UTM band letter
        ValueError: if the zone number is outside [1, 60]

    Returns:
        GeoPoint
    """
    letter = zone_letter.upper()
    if len(letter) != 1 or letter not in ZONE_LETTERS:
        raise UnrecognizedZoneLetterError(zone_letter)

    if not 1 <= zone_number <= 60:
        raise ValueError(f'UTM zone number must be between 1 and 60, not {zone_number}')

    a = ellipsoid.semi_major_axis
    ecc2 = ellipsoid.eccentricity_squared
    ecc12 = ellipsoid.second_eccentricity_squared
    k0 = UTM_SCALE_FACTOR

    x = easting - UTM_FALSE_EASTING
    y = northing
    if letter < 'N':
        y -= false_northing

    # Footpoint latitude
    mu = y / k0 / (a * _meridian_factor(ecc2))
    e1 = (1. - math.sqrt(1. - ecc2)) / (1. + math.sqrt(1. - ecc2))
    phi1 = (
        mu
        + (3. * e1 / 2. - 27. * e1 ** 3 / 32.) * math.sin(2. * mu)
        + (21. * e1 ** 2 / 16. - 55. * e1 ** 4 / 32.) * math.sin(4. * mu)
        + (151. * e1 ** 3 / 96.) * math.sin(6. * mu)
    )

    sin_phi1, cos_phi1, tan_phi1 = math.sin(phi1), math.cos(phi1), math.tan(phi1)
    n1 = a / math.sqrt(1. - ecc2 * sin_phi1 * sin_phi1)
    t1 = tan_phi1 * tan_phi1
    c1 = ecc12 * cos_phi1 * cos_phi1
    r1 = a * (1. - ecc2) / (1. - ecc2 * sin_phi1 * sin_phi1) ** 1.5
    d = x / (n1 * k0)

    lat = phi1 - (n1 * tan_phi1 / r1) * (
        d ** 2 / 2.
        - (5. + 3. * t1 + 10. * c1 - 4. * c1 * c1 - 9. * ecc12) * d ** 4 / 24.
        + (61. + 90. * t1 + 298. * c1 + 45. * t1 * t1 - 252. * ecc12 - 3. * c1 * c1)
        * d ** 6 / 720.
    )
    lon = (
        d
        - (1. + 2. * t1 + c1) * d ** 3 / 6.
        + (5. - 2. * c1 + 28. * t1 - 3. * c1 * c1 + 8. * ecc12 + 24. * t1 * t1) * d ** 5 / 120.
    ) / cos_phi1

    return GeoPoint(
        math.degrees(lat),
        normalize_longitude(math.degrees(_central_meridian(zone_number) + lon)),
    )
