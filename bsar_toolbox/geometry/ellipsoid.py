# -*- coding: utf-8 -*-
"""
Ellipsoid - Geodetic reference surface and ECEF <-> geodetic transforms.

Implements an ellipsoid of revolution (spheroid) used to model the Earth,
with the closed-form geodetic to Earth-Centered Earth-Fixed (ECEF)
transform, Vermeille's non-iterative inverse, and line/surface
intersection.

References
----------
Vermeille, H., "Direct transformation from geocentric coordinates to
geodetic coordinates." Journal of Geodesy 76, 451-454 (2002).
https://doi.org/10.1007/s00190-002-0273-6

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

# Standard library
from dataclasses import dataclass
from typing import Optional, Tuple

# Third-party
import numpy as np

# BSAR internal
from bsar_toolbox.geometry.geopoint import GeographicPoint
from bsar_toolbox.utils.constants import WGS84_A, WGS84_F


# ===================================================================
# Vectorized transforms
# ===================================================================

def geodetic_to_cartesian(
    lon_rad: np.ndarray,
    lat_rad: np.ndarray,
    height_m: np.ndarray,
    equatorial_radius_m: float = WGS84_A,
    eccentricity_squared: float = WGS84_F * (2.0 - WGS84_F)
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Convert geodetic coordinates to ECEF coordinates.

    Uses the prime vertical radius of curvature
    nu = a / sqrt(1 - e² sin²(lat)).

    Parameters
    ----------
    lon_rad : np.ndarray
        Geodetic longitude(s) in radians.
    lat_rad : np.ndarray
        Geodetic latitude(s) in radians.
    height_m : np.ndarray
        Height(s) above the ellipsoid in meters.
    equatorial_radius_m : float
        Semi-major axis. Default WGS-84.
    eccentricity_squared : float
        First eccentricity squared. Default WGS-84.

    Returns
    -------
    x, y, z : np.ndarray
        ECEF coordinates in meters.
    """
    lon_rad = np.asarray(lon_rad, dtype=np.float64)
    lat_rad = np.asarray(lat_rad, dtype=np.float64)
    height_m = np.asarray(height_m, dtype=np.float64)

    sin_lat = np.sin(lat_rad)
    cos_lat = np.cos(lat_rad)

    nu = equatorial_radius_m / np.sqrt(1.0 - eccentricity_squared * sin_lat * sin_lat)
    nu_h_cos_lat = (nu + height_m) * cos_lat

    x = nu_h_cos_lat * np.cos(lon_rad)
    y = nu_h_cos_lat * np.sin(lon_rad)
    z = ((1.0 - eccentricity_squared) * nu + height_m) * sin_lat
    return x, y, z


def cartesian_to_geodetic(
    x: np.ndarray,
    y: np.ndarray,
    z: np.ndarray,
    equatorial_radius_m: float = WGS84_A,
    eccentricity_squared: float = WGS84_F * (2.0 - WGS84_F)
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Convert ECEF coordinates to geodetic coordinates (Vermeille, 2002).

    The final height accuracy is of the order of nanometers. The evolute
    sign check of the full algorithm is not performed: results are only
    valid for heights above ``-(b - a*e²/sqrt(1-e²))`` (about -6314 km for
    WGS-84).
    Points deeper than that bound give undefined results, they are not
    detected.

    Parameters
    ----------
    x, y, z : np.ndarray
        ECEF coordinates in meters.
    equatorial_radius_m : float
        Semi-major axis. Default WGS-84.
    eccentricity_squared : float
        First eccentricity squared. Default WGS-84.

    Returns
    -------
    lon_rad, lat_rad, height_m : np.ndarray
        Geodetic longitude and latitude in radians, height in meters.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    z = np.asarray(z, dtype=np.float64)

    e2 = eccentricity_squared
    e4 = e2 * e2
    inv_a2 = 1.0 / (equatorial_radius_m * equatorial_radius_m)

    # Distance from the rotation axis
    dist = np.hypot(x, y)
    p = dist * dist * inv_a2
    q = (1.0 - e2) * z * z * inv_a2
    r = (p + q - e4) / 6.0
    r2 = r * r

    cbrt = np.cbrt(np.sqrt(8.0 * r2 * r + e4 * p * q) + e2 * np.sqrt(p * q))
    cbrt = cbrt * cbrt  # ^(2/3)

    u = r + 0.5 * cbrt + 2.0 * r2 / cbrt
    v = np.sqrt(u * u + e4 * q)
    uv = u + v
    w = 0.5 * e2 * (uv - q) / v
    k = uv / (w + np.sqrt(w * w + uv))
    d = k * dist / (k + e2)
    hypot_dz = np.hypot(d, z)

    lon = np.arctan2(y, x)
    lat = 2.0 * np.arctan(z / (d + hypot_dz))
    height = (k + e2 - 1.0) * hypot_dz / k
    return lon, lat, height


# ===================================================================
# Data Structures
# ===================================================================

@dataclass(frozen=True)
class LineIntersection:
    """
    Result of a line / ellipsoid intersection.

    Attributes
    ----------
    found : bool
        False when the line misses the ellipsoid.
    point : np.ndarray or None
        ECEF intersection point, None when not found.
    distance : float
        Signed abscissa of the point along the line axis (meters),
        NaN when not found.
    """
    found: bool
    point: Optional[np.ndarray] = None
    distance: float = float('nan')

    @classmethod
    def missed(cls) -> "LineIntersection":
        """Intersection result for a line that misses the surface."""
        return cls(found=False)


@dataclass(frozen=True)
class Ellipsoid:
    """
    An ellipsoid of revolution defined by its equatorial radius and flattening.

    Attributes
    ----------
    equatorial_radius_m : float
        Semi-major axis a in meters, must be positive.
    first_flattening : float
        First flattening f = (a - b) / a, in [0, 1).

    Examples
    --------
    >>> # Clarke 1880 (EPSG:7034), defined by its radii in feet
    >>> clarke = Ellipsoid.from_radii(20926202.0 * 0.3047972654,
    ...                               20854895.0 * 0.3047972654)
    """
    equatorial_radius_m: float = WGS84_A
    first_flattening: float = WGS84_F

    def __post_init__(self):
        if not np.isfinite(self.equatorial_radius_m) or self.equatorial_radius_m <= 0.0:
            raise ValueError(
                f"equatorial_radius_m must be positive, got {self.equatorial_radius_m}"
            )
        if not 0.0 <= self.first_flattening < 1.0:
            raise ValueError(
                f"first_flattening must be in [0, 1), got {self.first_flattening}"
            )

    @staticmethod
    def first_flattening_from_radii(equatorial_radius_m: float, polar_radius_m: float) -> float:
        """First flattening from equatorial and polar radii."""
        return (equatorial_radius_m - polar_radius_m) / equatorial_radius_m

    @classmethod
    def from_radii(cls, equatorial_radius_m: float, polar_radius_m: float) -> "Ellipsoid":
        """Create an Ellipsoid from its equatorial and polar radii in meters."""
        if equatorial_radius_m <= 0.0 or polar_radius_m <= 0.0:
            raise ValueError(
                f"Radii must be positive, got a={equatorial_radius_m}, b={polar_radius_m}"
            )
        return cls(
            equatorial_radius_m,
            cls.first_flattening_from_radii(equatorial_radius_m, polar_radius_m),
        )

    @property
    def polar_radius_m(self) -> float:
        """Semi-minor axis b in meters."""
        return (1.0 - self.first_flattening) * self.equatorial_radius_m

    @property
    def eccentricity_squared(self) -> float:
        """First eccentricity squared e² = f(2 - f)."""
        return self.first_flattening * (2.0 - self.first_flattening)

    @property
    def eccentricity(self) -> float:
        """First eccentricity e."""
        return float(np.sqrt(self.eccentricity_squared))

    @property
    def inner_validity_limit_m(self) -> float:
        """
        Lowest height for which :meth:`to_geographic` is valid.

        Equals -(b - a*e²/sqrt(1-e²)), about -6314 km for WGS-84.
        """
        e2 = self.eccentricity_squared
        return float(self.equatorial_radius_m * e2 / np.sqrt(1.0 - e2) - self.polar_radius_m)

    # ---------------------------------------------------------------
    # Point transforms
    # ---------------------------------------------------------------

    def to_cartesian(self, point: GeographicPoint) -> np.ndarray:
        """
        Transform a GeographicPoint to an ECEF point.

        Parameters
        ----------
        point : GeographicPoint

        Returns
        -------
        np.ndarray
            ECEF position, shape (3,).
        """
        x, y, z = geodetic_to_cartesian(
            point.lon_rad, point.lat_rad, point.height_m,
            self.equatorial_radius_m, self.eccentricity_squared
        )
        return np.array([x, y, z], dtype=np.float64)

    def to_geographic(self, cartesian: np.ndarray) -> GeographicPoint:
        """
        Transform an ECEF point to a GeographicPoint (Vermeille).

        See :func:`cartesian_to_geodetic` for the validity domain.

        Parameters
        ----------
        cartesian : np.ndarray
            ECEF position, shape (3,).

        Returns
        -------
        GeographicPoint
        """
        cartesian = np.asarray(cartesian, dtype=np.float64).ravel()
        if cartesian.size != 3:
            raise ValueError(f"Invalid ECEF shape {cartesian.shape}. Expected (3,)")
        lon, lat, height = cartesian_to_geodetic(
            cartesian[0], cartesian[1], cartesian[2],
            self.equatorial_radius_m, self.eccentricity_squared
        )
        return GeographicPoint(float(lon), float(lat), float(height))

    def to_cartesian_array(self, lon_lat_height: np.ndarray) -> np.ndarray:
        """Transform (N, 3) [lon_rad, lat_rad, height_m] rows to (N, 3) ECEF rows."""
        llh = np.atleast_2d(np.asarray(lon_lat_height, dtype=np.float64))
        x, y, z = geodetic_to_cartesian(
            llh[:, 0], llh[:, 1], llh[:, 2],
            self.equatorial_radius_m, self.eccentricity_squared
        )
        return np.column_stack([x, y, z])

    def to_geographic_array(self, cartesian: np.ndarray) -> np.ndarray:
        """Transform (N, 3) ECEF rows to (N, 3) [lon_rad, lat_rad, height_m] rows."""
        xyz = np.atleast_2d(np.asarray(cartesian, dtype=np.float64))
        lon, lat, height = cartesian_to_geodetic(
            xyz[:, 0], xyz[:, 1], xyz[:, 2],
            self.equatorial_radius_m, self.eccentricity_squared
        )
        return np.column_stack([lon, lat, height])

    # ---------------------------------------------------------------
    # Intersection
    # ---------------------------------------------------------------

    def line_intersection(
        self,
        origin: np.ndarray,
        normalized_axis: np.ndarray
    ) -> LineIntersection:
        """
        Intersect a line with the ellipsoid surface.

        Of the two roots, the one of smaller magnitude is kept, i.e. the
        intersection nearest to ``origin`` whether it lies forward or
        backward along the axis.

        Parameters
        ----------
        origin : np.ndarray
            A point of the line in ECEF, shape (3,).
        normalized_axis : np.ndarray
            Unit direction of the line, shape (3,).

        Returns
        -------
        LineIntersection
            ``found`` is False when the line misses the ellipsoid.
        """
        pos = np.asarray(origin, dtype=np.float64).ravel()
        axis = np.asarray(normalized_axis, dtype=np.float64).ravel()
        if pos.size != 3 or axis.size != 3:
            raise ValueError(
                f"origin and normalized_axis must have shape (3,), "
                f"got {pos.shape} and {axis.shape}"
            )

        b = self.polar_radius_m
        ratio2 = (b / self.equatorial_radius_m) ** 2

        denom = ratio2 * (axis[0] ** 2 + axis[1] ** 2) + axis[2] ** 2
        if denom == 0.0:
            return LineIntersection.missed()

        half_b = (ratio2 * (pos[0] * axis[0] + pos[1] * axis[1]) + pos[2] * axis[2]) / denom
        c = (ratio2 * (pos[0] ** 2 + pos[1] ** 2) + pos[2] ** 2 - b * b) / denom

        delta = half_b * half_b - c
        if delta < 0.0:
            return LineIntersection.missed()

        delta = np.sqrt(delta)
        t_plus = -half_b + delta
        t_minus = -half_b - delta
        t = t_plus if abs(t_plus) <= abs(t_minus) else t_minus

        return LineIntersection(found=True, point=pos + t * axis, distance=float(t))


#: WGS-84 reference ellipsoid
WGS84 = Ellipsoid()


__all__ = [
    "Ellipsoid",
    "LineIntersection",
    "WGS84",
    "geodetic_to_cartesian",
    "cartesian_to_geodetic",
]
