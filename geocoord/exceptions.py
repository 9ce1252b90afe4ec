"""
Error types raised by geocoord
"""

__all__ = [
    'DegenerateGeometryError', 'GeocoordError', 'InvalidEllipsoidError',
    'NonConvergenceError', 'UnrecognizedZoneLetterError'
]

from typing import Optional


class GeocoordError(Exception):
    """Base class for all geocoord errors"""


class InvalidEllipsoidError(GeocoordError, ValueError):
    """Raised when an ellipsoid is defined with non-positive parameters"""


class NonConvergenceError(GeocoordError, ArithmeticError):
    """
    Raised when an iterative solver exceeds its iteration cap.

    Args:
        message:
            A description of the failed solve

        iterations:
            The number of iterations performed before giving up

        delta:
            The last difference between successive estimates, if one was computed
    """

    def __init__(self, message: str, iterations: int, delta: Optional[float] = None):
        super().__init__(message)
        self.iterations = iterations
        self.delta = delta


class UnrecognizedZoneLetterError(GeocoordError, ValueError):
    """Raised when a UTM zone letter is not one of the lettered latitude bands"""

    def __init__(self, zone_letter: str):
        super().__init__(f"Unrecognized UTM zone letter '{zone_letter}'")
        self.zone_letter = zone_letter


class DegenerateGeometryError(GeocoordError, ZeroDivisionError):
    """Raised when a computation is undefined for the given geometry (e.g. zero-length segment)"""
