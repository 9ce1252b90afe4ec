"""
Constants declarations for geocoord
"""

# WGS84 Ellipsoid Constants
WGS84_A = 6378137.00  # Semi-major axis (meters)
WGS84_INVERSE_FLATTENING = 298.257223563

# Mean Earth Radius used by the spherical routines
EARTH_RADIUS = 6366707.01896486

# Convergence threshold (radians) shared by every iterative solver
EPSILON = 5.e-14

CARTESIAN_MAX_ITERATIONS = 20
VINCENTY_MAX_ITERATIONS = 200

# UTM
ZONE_LETTERS = 'CDEFGHJKLMNPQRSTUVWX'
UTM_SCALE_FACTOR = 0.9996
UTM_FALSE_EASTING = 500_000.0
UTM_FALSE_NORTHING_SOUTH = 10_000_000.0
UTM_LEGACY_FALSE_NORTHING_SOUTH = 1_000_000.0
