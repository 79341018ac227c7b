# -*- coding: utf-8 -*-
"""
Utilities - Constants and helper functions.

Physical constants, WGS-84 parameters, and utility functions for BSAR
geometry.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

from bsar_toolbox.utils.constants import (
    SPEED_OF_LIGHT,
    DEG_TO_RAD,
    RAD_TO_DEG,
    WGS84_A,
    WGS84_B,
    WGS84_F,
    WGS84_E2,
    SINC_WIDTH_AT_HALF_POWER,
    SINC_WIDTH_AT_HALF_POWER_SQUARED,
    FOOTPRINT_SIZE,
    wavelength_from_frequency,
    frequency_from_wavelength,
    bistatic_range_resolution,
)

from bsar_toolbox.utils.misc import (
    dd_to_dms,
    dms_to_dd,
    dd_to_dms_string,
    normalize_or_zero,
    safe_divide,
    ground_projection,
)

__all__ = [
    "SPEED_OF_LIGHT",
    "DEG_TO_RAD",
    "RAD_TO_DEG",
    "WGS84_A",
    "WGS84_B",
    "WGS84_F",
    "WGS84_E2",
    "SINC_WIDTH_AT_HALF_POWER",
    "SINC_WIDTH_AT_HALF_POWER_SQUARED",
    "FOOTPRINT_SIZE",
    "wavelength_from_frequency",
    "frequency_from_wavelength",
    "bistatic_range_resolution",
    "dd_to_dms",
    "dms_to_dd",
    "dd_to_dms_string",
    "normalize_or_zero",
    "safe_divide",
    "ground_projection",
]
