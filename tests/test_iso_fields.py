# -*- coding: utf-8 -*-
"""Tests for iso-range and iso-Doppler ground fields."""
import numpy as np
import pytest
from bsar_toolbox.geometry.bistatic import bistatic_range, doppler_frequency
from bsar_toolbox.visualization.iso_fields import (
    GroundGridField,
    IsoDopplerField,
    IsoRangeField,
    trace_levels,
)


TX = np.array([-1000.0, 0.0, 1000.0])
RX = np.array([500.0, 0.0, 500.0])
WAVELENGTH = 0.03


class TestGroundGrid:
    def test_ground_points_corners(self):
        points = GroundGridField.ground_points(100.0, 5, 3)
        assert points.shape == (3, 5, 3)
        np.testing.assert_array_equal(points[0, 0], [-50.0, 50.0, 0.0])
        np.testing.assert_array_equal(points[-1, -1], [50.0, -50.0, 0.0])
        np.testing.assert_array_equal(points[1, 2], [0.0, 0.0, 0.0])

    def test_spacing_and_coordinates(self):
        field = GroundGridField(np.zeros((3, 5)), 100.0)
        assert field.spacing == (25.0, -50.0)
        assert field.ground_coordinates(0, 0) == (-50.0, 50.0)
        assert field.ground_coordinates(4, 2) == (50.0, -50.0)
        assert field.ground_coordinates(1.5, 0.5) == (-12.5, 25.0)

    @pytest.mark.parametrize("extent, width, height", [(0.0, 5, 5), (-1.0, 5, 5), (10.0, 1, 5), (10.0, 5, 1)])
    def test_invalid_grid(self, extent, width, height):
        with pytest.raises(ValueError):
            GroundGridField.ground_points(extent, width, height)

    def test_levels(self):
        field = GroundGridField(np.array([[0.0, 1.0], [2.0, 4.0]]), 10.0)
        assert field.levels(5) == [0.0, 1.0, 2.0, 3.0, 4.0]
        assert field.levels(1) == [0.0]

    def test_levels_ignore_nan(self):
        field = GroundGridField(np.array([[np.nan, 1.0], [2.0, 3.0]]), 10.0)
        assert field.levels(3) == [1.0, 2.0, 3.0]

    def test_levels_all_nan(self):
        assert GroundGridField(np.full((3, 3), np.nan), 10.0).levels(4) == []

    def test_levels_invalid_count(self):
        with pytest.raises(ValueError):
            GroundGridField(np.zeros((3, 3)), 10.0).levels(0)


class TestIsoRangeField:
    @pytest.fixture
    def field(self):
        return IsoRangeField(TX, RX, 2000.0, width=21, height=21)

    def test_values(self, field):
        assert field.dimensions() == (21, 21)
        expected = bistatic_range(-TX, -RX)
        assert abs(field.z_at(10, 10) - expected) < 1e-9
        corner = np.array([-1000.0, 1000.0, 0.0])
        assert abs(field.z_at(0, 0) - bistatic_range(corner - TX, corner - RX)) < 1e-9

    def test_minimum_at_specular_point(self, field):
        """Reflecting Rx below the ground puts the minimum at the origin."""
        row, col = np.unravel_index(np.argmin(field.data), field.data.shape)
        assert (row, col) == (10, 10)
        assert abs(field.data.min() - np.linalg.norm(TX - RX * [1.0, 1.0, -1.0])) < 1e-6

    def test_levels_whole_meters(self, field):
        levels = field.levels(6)
        assert len(levels) == 6
        assert levels[0] == np.ceil(field.data.min())
        assert levels[-1] == np.floor(field.data.max())

    def test_trace_levels(self, field):
        traced = trace_levels(field, field.levels(5)[1:-1])
        assert len(traced) == 3
        for level, contours in traced:
            assert isinstance(level, float)
            assert len(contours) >= 1
            for line in contours:
                points = np.array(line)
                assert np.all((points >= 0.0) & (points <= 20.0))


class TestIsoDopplerField:
    def test_stationary_is_zero(self):
        field = IsoDopplerField(TX, np.zeros(3), RX, np.zeros(3), WAVELENGTH, 2000.0, width=11, height=11)
        np.testing.assert_array_equal(field.data, 0.0)
        assert field.levels(3) == [0.0, 0.0, 0.0]

    def test_values(self):
        vtx, vrx = np.array([0.0, 100.0, 0.0]), np.array([50.0, 0.0, 0.0])
        field = IsoDopplerField(TX, vtx, RX, vrx, WAVELENGTH, 2000.0, width=11, height=11)
        expected = doppler_frequency(WAVELENGTH, -TX, vtx, -RX, vrx)
        assert abs(field.z_at(5, 5) - expected) < 1e-9
        levels = field.levels(4)
        assert levels[0] == field.data.min()
        assert levels[-1] == field.data.max()

    def test_invalid_wavelength(self):
        with pytest.raises(ValueError):
            IsoDopplerField(TX, np.zeros(3), RX, np.zeros(3), 0.0, 2000.0)
