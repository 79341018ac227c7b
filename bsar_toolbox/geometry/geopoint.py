# -*- coding: utf-8 -*-
"""
Geographic Point - Longitude, latitude and height on an ellipsoid.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

# Standard library
from dataclasses import dataclass
from typing import Tuple

# Third-party
import numpy as np

# BSAR internal
from bsar_toolbox.utils.misc import dd_to_dms


@dataclass(frozen=True)
class GeographicPoint:
    """
    A geodetic point on an ellipsoid of revolution.

    Attributes
    ----------
    lon_rad : float
        Geodetic longitude in radians.
    lat_rad : float
        Geodetic latitude in radians.
    height_m : float
        Height above the ellipsoid in meters.
    """
    lon_rad: float = 0.0
    lat_rad: float = 0.0
    height_m: float = 0.0

    @classmethod
    def from_degrees(cls, lon_deg: float, lat_deg: float, height_m: float = 0.0) -> "GeographicPoint":
        """Create a GeographicPoint from longitude and latitude in degrees."""
        return cls(float(np.radians(lon_deg)), float(np.radians(lat_deg)), float(height_m))

    @classmethod
    def origin(cls) -> "GeographicPoint":
        """Intersection of the Greenwich meridian and the equator, at 0 m."""
        return cls()

    @property
    def lon_deg(self) -> float:
        return float(np.degrees(self.lon_rad))

    @property
    def lat_deg(self) -> float:
        return float(np.degrees(self.lat_rad))

    @property
    def lon_dms(self) -> Tuple[float, float, float]:
        """Longitude as (degrees, minutes, seconds)."""
        return dd_to_dms(self.lon_deg)

    @property
    def lat_dms(self) -> Tuple[float, float, float]:
        """Latitude as (degrees, minutes, seconds)."""
        return dd_to_dms(self.lat_deg)

    def as_array(self) -> np.ndarray:
        """Coordinates as [lon_rad, lat_rad, height_m]."""
        return np.array([self.lon_rad, self.lat_rad, self.height_m], dtype=np.float64)


__all__ = ["GeographicPoint"]
