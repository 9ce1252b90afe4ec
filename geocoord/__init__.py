from geocoord._version import __version__  # noqa: F401
from geocoord.utils.logging import LOGGER
from geocoord.cartesian import CartesianPoint
from geocoord.coordinates import GeoPoint, normalize_longitude
from geocoord.ellipsoid import Ellipsoid, WGS84
from geocoord.exceptions import (
    DegenerateGeometryError, GeocoordError, InvalidEllipsoidError, NonConvergenceError,
    UnrecognizedZoneLetterError
)
from geocoord.geodesic import (
    GeodesicInverse, set_geodesic_algorithm, vincenty_direct, vincenty_inverse
)
from geocoord.spherical import (
    cross_track_distance, is_between, spherical_distance, spherical_projection
)
from geocoord.utm import UTMReference, from_utm, to_utm

__all__ = [
    'CartesianPoint',
    'DegenerateGeometryError',
    'Ellipsoid',
    'GeoPoint',
    'GeocoordError',
    'GeodesicInverse',
    'InvalidEllipsoidError',
    'NonConvergenceError',
    'UTMReference',
    'UnrecognizedZoneLetterError',
    'WGS84',
    'cross_track_distance',
    'from_utm',
    'is_between',
    'normalize_longitude',
    'set_geodesic_algorithm',
    'spherical_distance',
    'spherical_projection',
    'to_utm',
    'vincenty_direct',
    'vincenty_inverse',
    'LOGGER',
]
