import math

import pytest
from pytest import approx

from geocoord import Ellipsoid, GeoPoint, NonConvergenceError
from geocoord import geodesic
from geocoord.geodesic import *
from geocoord.spherical import spherical_bearing, spherical_distance, spherical_projection

from tests.functions import assert_geopoints_equal

LANDS_END = GeoPoint(50.0667, -5.7167)
JOHN_O_GROATS = GeoPoint(58.6439, -3.07)


def test_vincenty_inverse_identity():
    p = GeoPoint(12.34, 56.78)
    assert vincenty_inverse(p, p) == GeodesicInverse(0., 0., 0.)
    assert vincenty_inverse(p, GeoPoint(12.34, 56.78)) == (0., 0., 0.)

    # Same place, different longitude representation
    assert vincenty_inverse(GeoPoint(10., 20.), GeoPoint(10., 380.)) == (0., 0., 0.)


def test_vincenty_distance():
    # Checked against geographiclib results
    expected = 156.903472
    actual = vincenty_distance(GeoPoint(0.0, 0.0), GeoPoint(0.001, 0.001))
    assert expected == approx(actual, abs=1e-6)

    expected = 156_899.568291
    actual = vincenty_distance(GeoPoint(0.0, 0.0), GeoPoint(1.0, 1.0))
    assert expected == approx(actual, abs=1e-5)

    # Antimeridian test
    expected = 222_638.981586
    actual = vincenty_distance(GeoPoint(0., 179.), GeoPoint(0., -179.))
    assert expected == approx(actual, abs=1e-5)

    # Follow equator exactly
    expected = 111_319.490793
    actual = vincenty_distance(GeoPoint(0.0, 0.0), GeoPoint(0.0, 1.0))
    assert expected == approx(actual, abs=1e-5)


def test_vincenty_distance_lands_end():
    actual = vincenty_distance(LANDS_END, JOHN_O_GROATS)
    assert actual == approx(969_950, abs=200)

    # Ellipsoidal distance runs longer than the mean-radius great circle along this meridian
    assert actual > spherical_distance(LANDS_END, JOHN_O_GROATS, radius=6_371_000.)


def test_vincenty_inverse_symmetry():
    pairs = [
        (LANDS_END, JOHN_O_GROATS),
        (GeoPoint(-33.8568, 151.2153), GeoPoint(40.7128, -74.006)),
        (GeoPoint(0., 0.), GeoPoint(1., 1.)),
        (GeoPoint(-45., 170.), GeoPoint(-40., -170.)),
    ]
    for p1, p2 in pairs:
        forward, backward = vincenty_inverse(p1, p2), vincenty_inverse(p2, p1)
        assert forward.distance == approx(backward.distance, rel=1e-12)

        # Azimuth back toward p1 at p2 is the forward azimuth of the return trip
        assert forward.reverse_azimuth == approx(backward.forward_azimuth, abs=1e-8)
        assert backward.reverse_azimuth == approx(forward.forward_azimuth, abs=1e-8)


def test_vincenty_inverse_azimuths():
    # Due east along the equator
    result = vincenty_inverse(GeoPoint(0., 0.), GeoPoint(0., 1.))
    assert result.forward_azimuth == 90.
    assert result.reverse_azimuth == 270.

    # Due north along a meridian
    result = vincenty_inverse(GeoPoint(0., 0.), GeoPoint(1., 0.))
    assert result.forward_azimuth == approx(0., abs=1e-12)
    assert result.reverse_azimuth == approx(180., abs=1e-12)

    for p1, p2 in [(LANDS_END, JOHN_O_GROATS), (JOHN_O_GROATS, LANDS_END)]:
        result = vincenty_inverse(p1, p2)
        assert 0. <= result.forward_azimuth < 360.
        assert 0. <= result.reverse_azimuth < 360.


def test_vincenty_bearing():
    c1 = GeoPoint(0.0, 0.0)
    expected = 45.192423
    actual = vincenty_bearing(c1, GeoPoint(0.001, 0.001))
    assert actual == approx(expected, abs=1e-6)

    assert vincenty_bearing(c1, c1) == 0.

    # Follow equator exactly - cos^2(alpha) is zero
    assert vincenty_bearing(GeoPoint(0.0, 0.0), GeoPoint(0.0, 1.0)) == 90


def test_vincenty_inverse_antipodal():
    # Failure to converge - antipodal
    with pytest.raises(NonConvergenceError):
        vincenty_inverse(GeoPoint(0., 0.), GeoPoint(0., 180.))

    with pytest.raises(ArithmeticError):
        vincenty_distance(GeoPoint(0., 0.), GeoPoint(0., 180.))


def test_vincenty_inverse_nearly_antipodal():
    # Fails to converge within the default iteration cap
    with pytest.raises(NonConvergenceError) as exc:
        vincenty_inverse(GeoPoint(0.4725, 0.), GeoPoint(-0.7030, 179.388))

    assert exc.value.iterations == 200
    assert exc.value.delta > 0


def test_vincenty_inverse_iteration_cap():
    with pytest.raises(NonConvergenceError) as exc:
        vincenty_inverse(LANDS_END, JOHN_O_GROATS, max_iterations=1)

    assert exc.value.iterations == 1
    assert exc.value.delta > 0


def test_vincenty_direct():
    expected = GeoPoint(0.709811, 0.705113)
    actual = vincenty_direct(GeoPoint(0.0, 0.0), 45., 111_000)
    assert_geopoints_equal(expected, actual, abs_tol=1e-6)

    c1 = GeoPoint(0., 0.)
    assert vincenty_direct(c1, 90., 0.) == c1

    # Output longitude is normalized
    assert vincenty_direct(GeoPoint(0., 370.), 90., 0.) == GeoPoint(0., 10.)
    actual = vincenty_direct(GeoPoint(0., 179.5), 90., 111_319.490793)
    assert_geopoints_equal(actual, GeoPoint(0., -179.5), abs_tol=1e-9)


def test_vincenty_direct_iteration_cap():
    with pytest.raises(NonConvergenceError) as exc:
        vincenty_direct(LANDS_END, 10., 1_000_000., max_iterations=1)

    assert exc.value.iterations == 1


@pytest.mark.parametrize('azimuth', [30., 135., 250., 315.])
@pytest.mark.parametrize('distance', [1., 10_000., 1_000_000., 5_000_000., 10_000_000.])
def test_vincenty_direct_inverse_consistency(azimuth, distance):
    origin = GeoPoint(40., -75.)
    dest = vincenty_direct(origin, azimuth, distance)
    result = vincenty_inverse(origin, dest)

    assert result.distance == approx(distance, abs=1e-3)
    if distance >= 10_000.:
        # Shorter lines are limited by the float resolution of the endpoint
        assert result.forward_azimuth == approx(azimuth, abs=1e-6)


def test_vincenty_custom_ellipsoid():
    # With negligible flattening the geodesic is a great circle
    sphere = Ellipsoid(6_371_000., 1e15)
    p1, p2 = GeoPoint(0., 0.), GeoPoint(0., 90.)
    assert vincenty_distance(p1, p2, sphere) == approx(6_371_000. * math.pi / 2, rel=1e-9)
    assert vincenty_distance(LANDS_END, JOHN_O_GROATS, sphere) == approx(
        spherical_distance(LANDS_END, JOHN_O_GROATS, radius=6_371_000.), rel=1e-9
    )

    assert_geopoints_equal(
        vincenty_direct(LANDS_END, 20., 500_000., ellipsoid=sphere),
        spherical_projection(LANDS_END, 20., 500_000., radius=6_371_000.),
        abs_tol=1e-8,
    )


def test_vincenty_against_karney():
    pytest.importorskip('geographiclib')

    pairs = [
        (LANDS_END, JOHN_O_GROATS),
        (GeoPoint(-33.8568, 151.2153), GeoPoint(40.7128, -74.006)),
        (GeoPoint(0., 179.), GeoPoint(0., -179.)),
        (GeoPoint(89., 0.), GeoPoint(-60., 10.)),
        (GeoPoint(0., 0.), GeoPoint(0.001, 0.001)),
    ]
    for p1, p2 in pairs:
        assert vincenty_distance(p1, p2) == approx(karney_distance(p1, p2), abs=1e-3)
        assert vincenty_bearing(p1, p2) == approx(karney_bearing(p1, p2), abs=1e-7)

    for azimuth in (0., 45., 200.):
        assert_geopoints_equal(
            vincenty_direct(LANDS_END, azimuth, 2_000_000.),
            karney_destination(LANDS_END, azimuth, 2_000_000.),
            abs_tol=1e-8,
        )


def test_karney_bearing():
    pytest.importorskip('geographiclib')
    expected = 45.192423
    actual = karney_bearing(GeoPoint(0.0, 0.0), GeoPoint(0.001, 0.001))
    assert actual == approx(expected, abs=1e-6)

    # West is 270, not -90
    assert karney_bearing(GeoPoint(0., 0.), GeoPoint(0., -1.)) == approx(270.)


def test_karney_distance():
    pytest.importorskip('geographiclib')
    expected = 156_899.568291
    actual = karney_distance(GeoPoint(0.0, 0.0), GeoPoint(1.0, 1.0))
    assert expected == approx(actual, abs=1e-5)

    # Antipodal points are handled
    assert karney_distance(GeoPoint(0., 0.), GeoPoint(0., 180.)) == approx(
        20_003_931.4586, abs=1e-3
    )

    # Custom ellipsoid
    sphere = Ellipsoid(6_371_000., 1e15)
    assert karney_distance(GeoPoint(0., 0.), GeoPoint(0., 90.), sphere) == approx(
        6_371_000. * math.pi / 2, rel=1e-9
    )


def test_karney_destination():
    pytest.importorskip('geographiclib')
    expected = GeoPoint(0.709811, 0.705113)
    actual = karney_destination(GeoPoint(0.0, 0.0), 45., 111_000)
    assert_geopoints_equal(expected, actual, abs_tol=1e-6)


def test_set_geodesic_algorithm():
    c1, c2 = GeoPoint(0., 0.), GeoPoint(0.1, 0.1)
    try:
        # Default
        assert geodesic.distance_meters is vincenty_distance
        assert geodesic.destination_point is vincenty_direct
        assert geodesic.bearing_degrees is vincenty_bearing

        set_geodesic_algorithm('spherical')
        assert geodesic.distance_meters(c1, c2) == spherical_distance(c1, c2)
        assert geodesic.bearing_degrees(c1, c2) == spherical_bearing(c1, c2)
        assert geodesic.destination_point(c1, 90, 100) == spherical_projection(c1, 90, 100)

        set_geodesic_algorithm('karney')
        assert geodesic.distance_meters is karney_distance
        assert geodesic.destination_point is karney_destination
        assert geodesic.bearing_degrees is karney_bearing

        set_geodesic_algorithm('vincenty')
        assert geodesic.distance_meters(c1, c2) == vincenty_distance(c1, c2)
        assert geodesic.bearing_degrees(c1, c2) == vincenty_bearing(c1, c2)
        assert geodesic.destination_point(c1, 90, 100) == vincenty_direct(c1, 90, 100)

        with pytest.raises(ValueError):
            set_geodesic_algorithm('made up')
    finally:
        # Clean up - reset to default
        set_geodesic_algorithm('vincenty')
