# -*- coding: utf-8 -*-
"""
BSAR Geometry - Earth model, local frames, footprints and bistatic figures.

Provides:
- Ellipsoid model with geodetic <-> ECEF transforms and line intersection
- Local NED/ENU frames anchored on the ellipsoid
- Carrier / antenna attitude and antenna beam footprints on the ground
- Bistatic SAR angles, ranges, resolutions and Doppler

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

from bsar_toolbox.geometry.geopoint import GeographicPoint

from bsar_toolbox.geometry.ellipsoid import (
    Ellipsoid,
    LineIntersection,
    WGS84,
    geodetic_to_cartesian,
    cartesian_to_geodetic,
)

from bsar_toolbox.geometry.coordinates import (
    LocalFrame,
    ned_to_enu,
    enu_to_ned,
    ned_ecef_rotation_matrix,
)

from bsar_toolbox.geometry.platform import (
    Orientation,
    AntennaBeam,
    PlatformState,
    carrier_rotation,
    antenna_rotation,
    carrier_position_from_pointing,
    velocity_from_heading,
)

from bsar_toolbox.geometry.footprint import (
    FootprintPolygon,
    compute_footprint,
)

from bsar_toolbox.geometry.bistatic import (
    IntegrationMode,
    BistaticReport,
    compute_bistatic_report,
    bistatic_angle,
    bistatic_range,
    doppler_frequency,
    select_range_footprint,
    IsoRangeEllipsoid,
    iso_range_ellipsoid,
)

__all__ = [
    # Ellipsoid
    "GeographicPoint",
    "Ellipsoid",
    "LineIntersection",
    "WGS84",
    "geodetic_to_cartesian",
    "cartesian_to_geodetic",
    # Coordinates
    "LocalFrame",
    "ned_to_enu",
    "enu_to_ned",
    "ned_ecef_rotation_matrix",
    # Platform
    "Orientation",
    "AntennaBeam",
    "PlatformState",
    "carrier_rotation",
    "antenna_rotation",
    "carrier_position_from_pointing",
    "velocity_from_heading",
    # Footprint
    "FootprintPolygon",
    "compute_footprint",
    # Bistatic
    "IntegrationMode",
    "BistaticReport",
    "compute_bistatic_report",
    "bistatic_angle",
    "bistatic_range",
    "doppler_frequency",
    "select_range_footprint",
    "IsoRangeEllipsoid",
    "iso_range_ellipsoid",
]
