# -*- coding: utf-8 -*-
"""Tests for the ellipsoid model and geodetic transforms."""
import numpy as np
import pytest
from bsar_toolbox.geometry.ellipsoid import (
    Ellipsoid,
    LineIntersection,
    WGS84,
    geodetic_to_cartesian,
    cartesian_to_geodetic,
)
from bsar_toolbox.geometry.geopoint import GeographicPoint
from bsar_toolbox.utils.constants import WGS84_A, WGS84_B, WGS84_F, WGS84_E2


class TestEllipsoidParameters:
    def test_wgs84_defaults(self):
        assert WGS84.equatorial_radius_m == WGS84_A
        assert WGS84.first_flattening == WGS84_F
        assert abs(WGS84.polar_radius_m - WGS84_B) < 1e-6
        assert abs(WGS84.eccentricity_squared - WGS84_E2) < 1e-15
        assert abs(WGS84.eccentricity ** 2 - WGS84_E2) < 1e-15

    def test_from_radii(self):
        ell = Ellipsoid.from_radii(WGS84_A, WGS84_B)
        assert abs(ell.first_flattening - WGS84_F) < 1e-12

    def test_sphere(self):
        sphere = Ellipsoid.from_radii(1000.0, 1000.0)
        assert sphere.first_flattening == 0.0
        assert sphere.eccentricity_squared == 0.0

    def test_inner_validity_limit(self):
        """About -6314 km below the WGS-84 surface."""
        assert -6.32e6 < WGS84.inner_validity_limit_m < -6.31e6

    @pytest.mark.parametrize("a, f", [(0.0, 0.0), (-1.0, 0.1), (6378137.0, 1.0), (6378137.0, -0.1)])
    def test_invalid_parameters(self, a, f):
        with pytest.raises(ValueError):
            Ellipsoid(a, f)

    def test_invalid_radii(self):
        with pytest.raises(ValueError):
            Ellipsoid.from_radii(0.0, 1.0)
        with pytest.raises(ValueError):
            Ellipsoid.from_radii(1.0, -1.0)


class TestForwardTransform:
    def test_origin(self):
        """lon = lat = 0 lies on the equatorial X axis."""
        np.testing.assert_allclose(
            WGS84.to_cartesian(GeographicPoint.origin()), [WGS84_A, 0.0, 0.0], atol=1e-9
        )

    def test_north_pole(self):
        np.testing.assert_allclose(
            WGS84.to_cartesian(GeographicPoint.from_degrees(0.0, 90.0)), [0.0, 0.0, WGS84_B], atol=1e-6
        )

    def test_height_along_normal_at_equator(self):
        ecef = WGS84.to_cartesian(GeographicPoint.from_degrees(90.0, 0.0, 1000.0))
        np.testing.assert_allclose(ecef, [0.0, WGS84_A + 1000.0, 0.0], atol=1e-6)

    def test_vectorized(self):
        lon = np.radians([0.0, 90.0, -45.0])
        lat = np.radians([0.0, 0.0, 30.0])
        h = np.array([0.0, 10.0, 500.0])
        x, y, z = geodetic_to_cartesian(lon, lat, h)
        assert x.shape == (3,)
        ecef = WGS84.to_cartesian(GeographicPoint(lon[2], lat[2], h[2]))
        np.testing.assert_allclose([x[2], y[2], z[2]], ecef)


class TestRoundTrip:
    @pytest.mark.parametrize("lon, lat, h", [
        (0.0, 0.0, 0.0),
        (2.3522, 48.8566, 35.0),  # Paris
        (-77.0365, 38.8977, 100.0),
        (139.6917, -35.6895, 12000.0),
        (179.9, 89.9, 400e3),
        (-120.0, -60.0, -1000e3),
    ])
    def test_geographic_roundtrip(self, lon, lat, h):
        point = GeographicPoint.from_degrees(lon, lat, h)
        back = WGS84.to_geographic(WGS84.to_cartesian(point))
        assert abs(back.lon_rad - point.lon_rad) < 1e-11
        assert abs(back.lat_rad - point.lat_rad) < 1e-11
        # Nanometre level at usual heights, looser far from the surface
        tol = 1e-8 if abs(h) < 1e5 else 1e-7
        assert abs(back.height_m - point.height_m) < tol

    def test_array_roundtrip(self):
        llh = np.column_stack([
            np.radians([10.0, -100.0, 45.0]),
            np.radians([-20.0, 70.0, 0.0]),
            [0.0, 2000.0, -100.0],
        ])
        np.testing.assert_allclose(
            WGS84.to_geographic_array(WGS84.to_cartesian_array(llh)), llh, atol=1e-6
        )

    def test_functional_roundtrip(self):
        x, y, z = geodetic_to_cartesian(0.3, 0.7, 123.0)
        lon, lat, h = cartesian_to_geodetic(x, y, z)
        assert abs(lon - 0.3) < 1e-12
        assert abs(lat - 0.7) < 1e-12
        assert abs(h - 123.0) < 1e-8

    def test_bad_shape(self):
        with pytest.raises(ValueError):
            WGS84.to_geographic(np.zeros(4))


class TestLineIntersection:
    def test_nearest_root_from_outside(self):
        result = WGS84.line_intersection(np.array([2.0 * WGS84_A, 0.0, 0.0]), np.array([-1.0, 0.0, 0.0]))
        assert result.found
        np.testing.assert_allclose(result.point, [WGS84_A, 0.0, 0.0], atol=1e-6)
        assert abs(result.distance - WGS84_A) < 1e-6

    def test_backward_root(self):
        """The nearest root may lie behind the origin."""
        result = WGS84.line_intersection(np.array([2.0 * WGS84_A, 0.0, 0.0]), np.array([1.0, 0.0, 0.0]))
        assert result.found
        assert result.distance < 0.0
        np.testing.assert_allclose(result.point, [WGS84_A, 0.0, 0.0], atol=1e-6)

    def test_polar_axis(self):
        result = WGS84.line_intersection(np.zeros(3), np.array([0.0, 0.0, 1.0]))
        assert result.found
        assert abs(abs(result.point[2]) - WGS84_B) < 1e-6

    def test_miss(self):
        result = WGS84.line_intersection(np.array([2.0 * WGS84_A, 0.0, 0.0]), np.array([0.0, 0.0, 1.0]))
        assert isinstance(result, LineIntersection)
        assert not result.found
        assert result.point is None
        assert np.isnan(result.distance)
