# -*- coding: utf-8 -*-
"""
Coordinate Transformations - Local tangent plane (NED/ENU) frames on an ellipsoid.

Implements a local Cartesian frame anchored at a geodetic origin, with
point transforms (rotation + translation) and vector transforms (rotation
only) between local North-East-Down / East-North-Up coordinates, ECEF
coordinates, and geographic coordinates.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

from typing import Optional
import numpy as np

from bsar_toolbox.geometry.ellipsoid import Ellipsoid, WGS84
from bsar_toolbox.geometry.geopoint import GeographicPoint


# ===================================================================
# ENU <-> NED
# ===================================================================

def _as_rows(value: np.ndarray) -> np.ndarray:
    """Validate a (3,) or (N, 3) array of coordinates."""
    value = np.asarray(value, dtype=np.float64)
    if value.shape[-1:] != (3,) or value.ndim > 2:
        raise ValueError(f"Invalid coordinate shape {value.shape}. Expected (3,) or (N, 3)")
    return value


def ned_to_enu(value: np.ndarray) -> np.ndarray:
    """
    Swap local NED coordinates to ENU: (x, y, z) -> (y, x, -z).

    The swap is its own inverse and applies equally to points and vectors.

    Parameters
    ----------
    value : np.ndarray
        Shape (3,) or (N, 3).

    Returns
    -------
    np.ndarray
        Same shape as value.
    """
    value = _as_rows(value)
    return np.stack([value[..., 1], value[..., 0], -value[..., 2]], axis=-1)


def enu_to_ned(value: np.ndarray) -> np.ndarray:
    """Swap local ENU coordinates to NED: (x, y, z) -> (y, x, -z)."""
    return ned_to_enu(value)


# ===================================================================
# NED -> ECEF rotation
# ===================================================================

def ned_ecef_rotation_matrix(origin: GeographicPoint) -> np.ndarray:
    """
    Compute the NED to ECEF rotation matrix at a geodetic origin.

    Columns are the local North, East and Down unit vectors expressed in
    ECEF.

    Parameters
    ----------
    origin : GeographicPoint
        Origin of the local frame.

    Returns
    -------
    np.ndarray
        3x3 rotation matrix from NED to ECEF. Its transpose rotates ECEF
        to NED.
    """
    sin_lon, cos_lon = np.sin(origin.lon_rad), np.cos(origin.lon_rad)
    sin_lat, cos_lat = np.sin(origin.lat_rad), np.cos(origin.lat_rad)

    north = [-cos_lon * sin_lat, -sin_lon * sin_lat, cos_lat]
    east = [-sin_lon, cos_lon, 0.0]
    down = [-cos_lon * cos_lat, -sin_lon * cos_lat, -sin_lat]

    return np.column_stack([north, east, down])


# ===================================================================
# Local Frame
# ===================================================================

class LocalFrame:
    """
    A local Cartesian (NED / ENU) frame anchored on an ellipsoid.

    The frame stores its origin both as a GeographicPoint and as an ECEF
    point together with the NED -> ECEF isometry and its inverse. The
    origin only changes through :meth:`set_origin_from_geographic` and
    :meth:`set_origin_from_cartesian`, which replace origin and transforms
    in a single assignment.

    Parameters
    ----------
    origin : GeographicPoint, optional
        Origin of the frame. Default (0°, 0°, 0 m).
    ellipsoid : Ellipsoid, optional
        Reference ellipsoid. Default WGS-84.

    Examples
    --------
    >>> frame = LocalFrame(GeographicPoint.from_degrees(2.35, 48.85, 35.0))
    >>> ecef = frame.enu_to_ecef(np.array([100.0, 0.0, 0.0]))  # 100 m east
    >>> frame.ecef_to_enu(ecef)
    array([100.,   0.,   0.])
    """

    def __init__(
        self,
        origin: Optional[GeographicPoint] = None,
        ellipsoid: Ellipsoid = WGS84
    ):
        self._ellipsoid = ellipsoid
        self._state = None
        self.set_origin_from_geographic(origin if origin is not None else GeographicPoint.origin())

    @classmethod
    def from_geographic(cls, origin: GeographicPoint, ellipsoid: Ellipsoid = WGS84) -> "LocalFrame":
        """Create a LocalFrame with its origin at a GeographicPoint."""
        return cls(origin, ellipsoid)

    @classmethod
    def from_cartesian(cls, origin: np.ndarray, ellipsoid: Ellipsoid = WGS84) -> "LocalFrame":
        """Create a LocalFrame with its origin at an ECEF point."""
        frame = cls(ellipsoid=ellipsoid)
        frame.set_origin_from_cartesian(origin)
        return frame

    # ---------------------------------------------------------------
    # Origin
    # ---------------------------------------------------------------

    def set_origin_from_geographic(self, origin: GeographicPoint) -> "LocalFrame":
        """Move the frame origin to a GeographicPoint."""
        cartesian = self._ellipsoid.to_cartesian(origin)
        self._state = self._build_state(origin, cartesian)
        return self

    def set_origin_from_cartesian(self, origin: np.ndarray) -> "LocalFrame":
        """Move the frame origin to an ECEF point."""
        cartesian = np.asarray(origin, dtype=np.float64).ravel().copy()
        geographic = self._ellipsoid.to_geographic(cartesian)
        self._state = self._build_state(geographic, cartesian)
        return self

    @staticmethod
    def _build_state(geographic: GeographicPoint, cartesian: np.ndarray):
        rotation = ned_ecef_rotation_matrix(geographic)
        cartesian.setflags(write=False)
        rotation.setflags(write=False)
        return geographic, cartesian, rotation

    @property
    def ellipsoid(self) -> Ellipsoid:
        return self._ellipsoid

    @property
    def origin_geographic(self) -> GeographicPoint:
        return self._state[0]

    @property
    def origin_cartesian(self) -> np.ndarray:
        return self._state[1]

    @property
    def ned_to_ecef_rotation(self) -> np.ndarray:
        """3x3 rotation matrix from local NED to ECEF."""
        return self._state[2]

    # ---------------------------------------------------------------
    # NED <-> ECEF
    # ---------------------------------------------------------------

    def ned_to_ecef(self, point: np.ndarray) -> np.ndarray:
        """Transform NED point(s), shape (3,) or (N, 3), to ECEF."""
        _, cartesian, rotation = self._state
        return _as_rows(point) @ rotation.T + cartesian

    def ecef_to_ned(self, point: np.ndarray) -> np.ndarray:
        """Transform ECEF point(s), shape (3,) or (N, 3), to NED."""
        _, cartesian, rotation = self._state
        return (_as_rows(point) - cartesian) @ rotation

    def ned_vector_to_ecef(self, vector: np.ndarray) -> np.ndarray:
        """Rotate NED vector(s) to ECEF (no translation)."""
        return _as_rows(vector) @ self._state[2].T

    def ecef_vector_to_ned(self, vector: np.ndarray) -> np.ndarray:
        """Rotate ECEF vector(s) to NED (no translation)."""
        return _as_rows(vector) @ self._state[2]

    # ---------------------------------------------------------------
    # ENU <-> ECEF
    # ---------------------------------------------------------------

    def enu_to_ecef(self, point: np.ndarray) -> np.ndarray:
        """Transform ENU point(s) to ECEF."""
        return self.ned_to_ecef(enu_to_ned(point))

    def ecef_to_enu(self, point: np.ndarray) -> np.ndarray:
        """Transform ECEF point(s) to ENU."""
        return ned_to_enu(self.ecef_to_ned(point))

    def enu_vector_to_ecef(self, vector: np.ndarray) -> np.ndarray:
        """Rotate ENU vector(s) to ECEF (no translation)."""
        return self.ned_vector_to_ecef(enu_to_ned(vector))

    def ecef_vector_to_enu(self, vector: np.ndarray) -> np.ndarray:
        """Rotate ECEF vector(s) to ENU (no translation)."""
        return ned_to_enu(self.ecef_vector_to_ned(vector))

    # ---------------------------------------------------------------
    # NED / ENU <-> Geographic
    # ---------------------------------------------------------------

    def ned_to_geographic(self, point: np.ndarray) -> GeographicPoint:
        """Transform a single NED point to a GeographicPoint."""
        return self._ellipsoid.to_geographic(self.ned_to_ecef(point))

    def geographic_to_ned(self, point: GeographicPoint) -> np.ndarray:
        """Transform a GeographicPoint to a NED point."""
        return self.ecef_to_ned(self._ellipsoid.to_cartesian(point))

    def enu_to_geographic(self, point: np.ndarray) -> GeographicPoint:
        """Transform a single ENU point to a GeographicPoint."""
        return self._ellipsoid.to_geographic(self.enu_to_ecef(point))

    def geographic_to_enu(self, point: GeographicPoint) -> np.ndarray:
        """Transform a GeographicPoint to an ENU point."""
        return ned_to_enu(self.geographic_to_ned(point))

    def __repr__(self) -> str:
        origin = self.origin_geographic
        return (
            f"LocalFrame(lon={origin.lon_deg:.9f} deg, lat={origin.lat_deg:.9f} deg, "
            f"height={origin.height_m:.3f} m)"
        )


__all__ = [
    "LocalFrame",
    "ned_to_enu",
    "enu_to_ned",
    "ned_ecef_rotation_matrix",
]
