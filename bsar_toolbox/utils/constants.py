# -*- coding: utf-8 -*-
"""
Physical Constants - Physical, geodetic and radar constants for BSAR geometry.

Provides commonly used constants including:
- Speed of light
- Unit conversions
- WGS-84 ellipsoid parameters
- Half-power width of the squared normalized sinc

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

# ===================================================================
# Physical Constants
# ===================================================================

#: Speed of light in vacuum (meters per second)
#: Exact value as defined by SI units (CODATA)
SPEED_OF_LIGHT = 299792458.0  # m/s

# ===================================================================
# Unit Conversions
# ===================================================================

#: Degrees to radians conversion factor
DEG_TO_RAD = 0.017453292519943295  # π/180

#: Radians to degrees conversion factor
RAD_TO_DEG = 57.29577951308232  # 180/π

#: Gigahertz to hertz
GHZ_TO_HZ = 1e9

#: Megahertz to hertz
MHZ_TO_HZ = 1e6

# ===================================================================
# WGS-84 Ellipsoid Parameters
# ===================================================================

#: WGS-84 semi-major axis (equatorial radius) in meters
WGS84_A = 6378137.0  # m

#: WGS-84 first flattening (defining parameter)
WGS84_F = 1.0 / 298.257223563

#: WGS-84 semi-minor axis (polar radius) in meters
WGS84_B = (1.0 - WGS84_F) * WGS84_A  # ~6356752.314245 m

#: WGS-84 first eccentricity squared (e² = f(2-f))
WGS84_E2 = WGS84_F * (2.0 - WGS84_F)  # ~0.00669437999014

# ===================================================================
# BSAR Constants
# ===================================================================

#: Width of the squared normalized sinc at half power.
#: Twice the positive solution of sinc²(x) = 1/2.
SINC_WIDTH_AT_HALF_POWER = 0.885892941378904715150369091935531

#: Square of SINC_WIDTH_AT_HALF_POWER
SINC_WIDTH_AT_HALF_POWER_SQUARED = 0.784806303584967506070224247343716

#: Number of ground points sampled on an antenna beam footprint
FOOTPRINT_SIZE = 2501

#: Default size (cells per side) of iso-range / iso-Doppler grids
DEFAULT_GRID_SIZE = 251

#: Default number of contour levels per iso family
DEFAULT_N_LEVELS = 50

# ===================================================================
# Mathematical Constants
# ===================================================================

#: Pi (for convenience, also available as math.pi or np.pi)
PI = 3.141592653589793

#: Two times Pi (2π)
TWO_PI = 2.0 * PI

# ===================================================================
# Helper Functions
# ===================================================================

def wavelength_from_frequency(frequency_hz: float) -> float:
    """
    Compute wavelength from frequency.

    Parameters
    ----------
    frequency_hz : float
        Electromagnetic frequency in Hertz.

    Returns
    -------
    float
        Wavelength in meters.

    Examples
    --------
    >>> # X-band at 10 GHz
    >>> wavelength_from_frequency(10e9)
    0.0299792458
    """
    return SPEED_OF_LIGHT / frequency_hz


def frequency_from_wavelength(wavelength_m: float) -> float:
    """
    Compute frequency from wavelength.

    Parameters
    ----------
    wavelength_m : float
        Wavelength in meters.

    Returns
    -------
    float
        Frequency in Hertz.
    """
    return SPEED_OF_LIGHT / wavelength_m


def bistatic_range_resolution(bandwidth_hz: float, bisector_norm: float = 2.0) -> float:
    """
    Compute the slant range resolution of a bistatic pair.

    The resolution is K*c/(B*|beta|) with K the half-power sinc width and
    |beta| the norm of the bisector vector. The monostatic case is
    |beta| = 2.

    Parameters
    ----------
    bandwidth_hz : float
        Signal bandwidth in Hertz.
    bisector_norm : float
        Norm of the bisector vector, in [0, 2]. Default 2 (monostatic).

    Returns
    -------
    float
        Range resolution in meters.

    Examples
    --------
    >>> # 800 MHz bandwidth, monostatic
    >>> round(bistatic_range_resolution(800e6), 6)
    0.16599
    """
    return SINC_WIDTH_AT_HALF_POWER * SPEED_OF_LIGHT / (bandwidth_hz * bisector_norm)


# ===================================================================
# Constants Dictionary (for programmatic access)
# ===================================================================

CONSTANTS = {
    'SPEED_OF_LIGHT': SPEED_OF_LIGHT,
    'DEG_TO_RAD': DEG_TO_RAD,
    'RAD_TO_DEG': RAD_TO_DEG,
    'GHZ_TO_HZ': GHZ_TO_HZ,
    'MHZ_TO_HZ': MHZ_TO_HZ,
    'WGS84_A': WGS84_A,
    'WGS84_B': WGS84_B,
    'WGS84_F': WGS84_F,
    'WGS84_E2': WGS84_E2,
    'SINC_WIDTH_AT_HALF_POWER': SINC_WIDTH_AT_HALF_POWER,
    'SINC_WIDTH_AT_HALF_POWER_SQUARED': SINC_WIDTH_AT_HALF_POWER_SQUARED,
    'FOOTPRINT_SIZE': FOOTPRINT_SIZE,
    'DEFAULT_GRID_SIZE': DEFAULT_GRID_SIZE,
    'DEFAULT_N_LEVELS': DEFAULT_N_LEVELS,
    'PI': PI,
    'TWO_PI': TWO_PI,
}

__all__ = [
    # Physical constants
    'SPEED_OF_LIGHT',
    # Unit conversions
    'DEG_TO_RAD',
    'RAD_TO_DEG',
    'GHZ_TO_HZ',
    'MHZ_TO_HZ',
    # WGS-84 parameters
    'WGS84_A',
    'WGS84_B',
    'WGS84_F',
    'WGS84_E2',
    # BSAR
    'SINC_WIDTH_AT_HALF_POWER',
    'SINC_WIDTH_AT_HALF_POWER_SQUARED',
    'FOOTPRINT_SIZE',
    'DEFAULT_GRID_SIZE',
    'DEFAULT_N_LEVELS',
    # Mathematical
    'PI',
    'TWO_PI',
    # Helper functions
    'wavelength_from_frequency',
    'frequency_from_wavelength',
    'bistatic_range_resolution',
    # Dictionary
    'CONSTANTS',
]
