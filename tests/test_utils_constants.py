# -*- coding: utf-8 -*-
"""
Tests for constants module.

Tests physical constants, WGS-84 parameters, the sinc width constant and
the frequency / resolution helpers.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

import pytest
import math

from bsar_toolbox.utils import constants


class TestPhysicalConstants:
    """Test physical constants values."""

    def test_speed_of_light(self):
        """Speed of light should be exact SI value."""
        assert constants.SPEED_OF_LIGHT == 299792458.0

    def test_pi_value(self):
        assert abs(constants.PI - math.pi) < 1e-15

    def test_two_pi(self):
        assert abs(constants.TWO_PI - 2 * math.pi) < 1e-15


class TestUnitConversions:
    """Test unit conversion constants."""

    def test_deg_to_rad(self):
        assert abs(constants.DEG_TO_RAD - math.pi / 180.0) < 1e-15

    def test_rad_to_deg(self):
        assert abs(constants.RAD_TO_DEG - 180.0 / math.pi) < 1e-10

    def test_deg_rad_reciprocal(self):
        assert abs(constants.DEG_TO_RAD * constants.RAD_TO_DEG - 1.0) < 1e-10

    def test_frequency_units(self):
        assert constants.GHZ_TO_HZ == 1e9
        assert constants.MHZ_TO_HZ == 1e6


class TestWGS84Parameters:
    """Test WGS-84 ellipsoid parameters."""

    def test_wgs84_semi_major_axis(self):
        assert constants.WGS84_A == 6378137.0

    def test_wgs84_flattening(self):
        assert abs(constants.WGS84_F - 1.0 / 298.257223563) < 1e-15

    def test_wgs84_semi_minor_axis(self):
        """WGS-84 polar radius."""
        assert abs(constants.WGS84_B - 6356752.314245) < 1e-6
        f_calculated = (constants.WGS84_A - constants.WGS84_B) / constants.WGS84_A
        assert abs(constants.WGS84_F - f_calculated) < 1e-15

    def test_wgs84_first_eccentricity_squared(self):
        e2_calculated = (constants.WGS84_A**2 - constants.WGS84_B**2) / constants.WGS84_A**2
        assert abs(constants.WGS84_E2 - e2_calculated) < 1e-15


class TestSincWidth:
    """Test the half-power width of the squared sinc."""

    def test_half_power(self):
        """sinc² at half the width should be 1/2."""
        x = 0.5 * constants.SINC_WIDTH_AT_HALF_POWER
        sinc = math.sin(math.pi * x) / (math.pi * x)
        assert abs(sinc**2 - 0.5) < 1e-12

    def test_squared_value(self):
        assert abs(
            constants.SINC_WIDTH_AT_HALF_POWER**2 - constants.SINC_WIDTH_AT_HALF_POWER_SQUARED
        ) < 1e-15


class TestHelperFunctions:
    """Test helper conversion functions."""

    def test_wavelength_from_frequency_xband(self):
        """Wavelength from X-band frequency (10 GHz)."""
        wavelength = constants.wavelength_from_frequency(10e9)
        assert abs(wavelength - 0.0299792458) < 1e-12

    def test_frequency_from_wavelength_xband(self):
        frequency = constants.frequency_from_wavelength(0.03)
        assert abs(frequency - constants.SPEED_OF_LIGHT / 0.03) < 1e-6

    def test_wavelength_frequency_roundtrip(self):
        freq = 9.6e9
        freq_back = constants.frequency_from_wavelength(constants.wavelength_from_frequency(freq))
        assert abs(freq - freq_back) < 1e-3

    def test_monostatic_range_resolution(self):
        """800 MHz monostatic resolution is about 16.6 cm."""
        res = constants.bistatic_range_resolution(800e6)
        expected = constants.SINC_WIDTH_AT_HALF_POWER * constants.SPEED_OF_LIGHT / (2.0 * 800e6)
        assert abs(res - expected) < 1e-12
        assert abs(res - 0.16599) < 1e-4

    def test_range_resolution_inverse_bandwidth(self):
        """Doubling the bandwidth halves the resolution."""
        res_1 = constants.bistatic_range_resolution(400e6, 1.5)
        res_2 = constants.bistatic_range_resolution(800e6, 1.5)
        assert abs(res_2 - res_1 / 2.0) < 1e-12


class TestConstantsDictionary:
    """Test the CONSTANTS dictionary."""

    def test_constants_dict_has_speed_of_light(self):
        assert constants.CONSTANTS['SPEED_OF_LIGHT'] == constants.SPEED_OF_LIGHT

    def test_constants_dict_has_footprint_size(self):
        assert constants.CONSTANTS['FOOTPRINT_SIZE'] == 2501

    def test_constants_dict_values_match(self):
        """Dictionary values should match module constants."""
        for key, value in constants.CONSTANTS.items():
            assert value == getattr(constants, key)


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
