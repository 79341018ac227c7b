# -*- coding: utf-8 -*-
"""Tests for marching squares contour tracing."""
import numpy as np
import pytest
from scipy.spatial import Delaunay
from bsar_toolbox.visualization.contour import (
    ArrayField,
    FramedField,
    ScalarField,
    build_contours,
    cell_cases,
    fraction,
    march,
)


def _bump(size=41, sigma=8.0):
    c = (size - 1) / 2.0
    yy, xx = np.mgrid[0:size, 0:size]
    return np.exp(-((xx - c) ** 2 + (yy - c) ** 2) / sigma**2)


class FunctionField(ScalarField):
    """Field evaluated point by point, without an array override."""

    def __init__(self, func, width, height):
        self.func = func
        self.width = width
        self.height = height

    def dimensions(self):
        return self.width, self.height

    def z_at(self, x, y):
        return float(self.func(x, y))


class TestFraction:
    def test_midpoint(self):
        assert fraction(0.5, 0.0, 1.0) == 0.5
        assert fraction(0.25, 1.0, 0.0) == 0.75

    def test_equal_ends(self):
        assert fraction(3.0, 2.0, 2.0) == 0.5

    def test_clamped(self):
        assert fraction(5.0, 0.0, 1.0) == 1.0
        assert fraction(-5.0, 0.0, 1.0) == 0.0


class TestCellCases:
    def test_corner_bits(self):
        z = 0.5
        assert cell_cases(np.array([[0.0, 0.0], [1.0, 0.0]]), z)[0, 0] == 1
        assert cell_cases(np.array([[0.0, 0.0], [0.0, 1.0]]), z)[0, 0] == 2
        assert cell_cases(np.array([[0.0, 1.0], [0.0, 0.0]]), z)[0, 0] == 4
        assert cell_cases(np.array([[1.0, 0.0], [0.0, 0.0]]), z)[0, 0] == 8
        assert cell_cases(np.ones((2, 2)), z)[0, 0] == 15

    def test_shape(self):
        assert cell_cases(np.zeros((5, 7)), 0.0).shape == (4, 6)

    def test_threshold_is_strict(self):
        assert cell_cases(np.full((2, 2), 0.5), 0.5)[0, 0] == 0

    def test_non_finite_corner(self):
        """Any NaN or infinite corner makes the cell empty."""
        values = np.array([[np.nan, 0.0, 0.0], [1.0, 1.0, 0.0], [0.0, np.inf, 0.0]])
        cases = cell_cases(values, 0.5)
        np.testing.assert_array_equal(cases, [[0, 1], [0, 0]])


class TestFields:
    def test_array_field(self):
        field = ArrayField(np.arange(6.0).reshape(2, 3))
        assert field.dimensions() == (3, 2)
        assert field.z_at(2, 1) == 5.0

    def test_array_field_rejects_1d(self):
        with pytest.raises(ValueError):
            ArrayField(np.zeros(4))

    def test_default_as_array(self):
        field = FunctionField(lambda x, y: 10 * y + x, 3, 2)
        np.testing.assert_array_equal(field.as_array(), [[0.0, 1.0, 2.0], [10.0, 11.0, 12.0]])

    def test_framed_border(self):
        field = ArrayField(np.full((4, 5), 7.0)).framed(2.0)
        assert isinstance(field, FramedField)
        assert field.z_at(0, 2) == 2.0 + 1e-9
        assert field.z_at(4, 3) == 2.0 + 1e-9
        assert field.z_at(2, 1) == 7.0

    def test_framed_array_matches_points(self):
        framed = FunctionField(lambda x, y: x * y, 6, 5).framed(-1.0)
        expected = np.array([[framed.z_at(x, y) for x in range(6)] for y in range(5)])
        np.testing.assert_array_equal(framed.as_array(), expected)


class TestMarch:
    def test_single_cell(self):
        contours = march(ArrayField(np.array([[0.0, 0.0], [1.0, 0.0]])), 0.5)
        assert contours == [[(0.5, 1.0), (0.0, 0.5)]]

    def test_saddle_gives_two_segments(self):
        contours = march(ArrayField(np.array([[1.0, 0.0], [0.0, 1.0]])), 0.5)
        assert len(contours) == 2
        assert all(len(c) == 2 for c in contours)

    @pytest.mark.parametrize("data", [np.ones((6, 6)), np.zeros((0, 0)), np.ones((1, 8)), np.ones((8, 1))])
    def test_no_contours(self, data):
        assert march(ArrayField(data), 0.5) == []

    def test_open_ramp(self):
        """A ramp touching the border gives one open line across the field."""
        ramp = np.tile(np.arange(10.0), (10, 1))
        contours = march(ArrayField(ramp), 4.5)
        assert len(contours) == 1
        line = contours[0]
        assert len(line) == 10
        assert all(x == 4.5 for x, _ in line)
        assert {line[0][1], line[-1][1]} == {0.0, 9.0}

    def test_framed_ramp_is_closed(self):
        ramp = np.tile(np.arange(10.0), (10, 1))
        contours = march(ArrayField(ramp).framed(-1.0), 4.5)
        assert len(contours) == 1
        assert contours[0][0] == contours[0][-1]

    def test_nan_inside_crossing_cell(self):
        """A NaN node only removes the cells around it."""
        ramp = np.tile(np.arange(10.0), (10, 1))
        ramp[4, 5] = np.nan
        contours = march(ArrayField(ramp), 4.5)
        points = [p for line in contours for p in line]
        assert len(contours) == 2
        assert all(np.isfinite(x) and np.isfinite(y) for x, y in points)
        assert all(x == 4.5 for x, _ in points)
        # Cells (4, 3) and (4, 4) share the NaN node and are skipped
        assert all(not (3.0 < y < 5.0) for _, y in points)

    def test_all_nan(self):
        assert march(ArrayField(np.full((5, 5), np.nan)), 0.0) == []

    def test_matches_point_evaluated_field(self):
        data = _bump(21, 4.0)
        from_array = march(ArrayField(data), 0.5)
        from_points = march(FunctionField(lambda x, y: data[y, x], 21, 21), 0.5)
        assert from_array == from_points


class TestNestedRings:
    @pytest.fixture
    def rings(self):
        field = ArrayField(_bump()).framed(0.0)
        return {level: march(field, level) for level in (0.25, 0.5, 0.75)}

    def test_one_closed_ring_per_level(self, rings):
        for contours in rings.values():
            assert len(contours) == 1
            ring = contours[0]
            assert len(ring) > 4
            assert ring[0] == ring[-1]

    def test_radius(self, rings):
        for level, contours in rings.items():
            points = np.array(contours[0])
            radius = np.hypot(points[:, 0] - 20.0, points[:, 1] - 20.0)
            np.testing.assert_allclose(radius, 8.0 * np.sqrt(-np.log(level)), atol=0.3)

    def test_nesting(self, rings):
        outer = np.array(rings[0.25][0][:-1])
        for level in (0.5, 0.75):
            inner = np.array(rings[level][0])
            assert np.all(Delaunay(outer).find_simplex(inner) >= 0)


class TestBuildContours:
    def test_chains_across_cells(self):
        segments = {
            (1, 1): [((1.5, 1.0), (2.0, 1.5))],
            (2, 1): [((2.0, 1.5), (2.5, 2.0))],
        }
        contours = build_contours(segments, (5, 5))
        assert contours == [[(1.5, 1.0), (2.0, 1.5), (2.5, 2.0)]]
        assert segments == {}

    def test_starts_on_boundary(self):
        segments = {
            (2, 1): [((2.0, 1.5), (2.5, 2.0))],
            (1, 0): [((1.5, 0.0), (2.0, 1.5))],
        }
        contours = build_contours(segments, (5, 5))
        assert contours == [[(1.5, 0.0), (2.0, 1.5), (2.5, 2.0)]]

    def test_disjoint_segments(self):
        segments = {
            (1, 1): [((1.5, 1.0), (1.0, 1.5))],
            (0, 0): [((0.2, 0.0), (0.0, 0.2))],
        }
        contours = build_contours(segments, (4, 4))
        assert len(contours) == 2

    def test_empty_buckets_are_dropped(self):
        segments = {
            (0, 0): [],
            (1, 1): [((1.5, 1.0), (1.0, 1.5))],
            (2, 2): [],
        }
        contours = build_contours(segments, (4, 4))
        assert contours == [[(1.5, 1.0), (1.0, 1.5)]]
        assert segments == {}
