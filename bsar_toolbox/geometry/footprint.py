# -*- coding: utf-8 -*-
"""
Antenna Footprint - Ground intersection of an elliptical antenna beam.

Samples the half-power cone of an antenna as a closed polygon on the
ground plane (z = 0) of the ENU world frame and derives the single-platform
footprint metrics: slant ranges, local incidence angles, ground range
swath, area, squint, illumination time and ground angular velocity.

The cone is parameterized in antenna axes by an angle theta: a point at
boresight distance r lies at (r, tan(az/2) cos(theta) r,
tan(el/2) sin(theta) r). Intersecting with the ground plane gives r in
closed form.

Notes
-----
If the beam axis or a cone edge grazes or exceeds the horizon, the
cone/plane denominator approaches zero or changes sign and footprint points
diverge or become NaN. No recovery is attempted.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

# Standard library
import logging
from dataclasses import dataclass, field
from typing import Tuple

# Third-party
import numpy as np
from scipy.spatial.transform import Rotation

# BSAR internal
from bsar_toolbox.geometry.platform import PlatformState, BORESIGHT_AXIS, UP_AXIS
from bsar_toolbox.utils.constants import FOOTPRINT_SIZE, TWO_PI, PI
from bsar_toolbox.utils.misc import normalize_or_zero, ground_projection

logger = logging.getLogger(__name__)


# ===================================================================
# Data Structures
# ===================================================================

@dataclass(frozen=True)
class FootprintPolygon:
    """
    Ground footprint of an antenna beam and its derived metrics. Array
    fields are read-only.

    Attributes
    ----------
    points : np.ndarray
        Footprint polygon (N, 3) in meters, world frame, z = 0. The polygon
        is closed by periodicity (the last point connects to the first).
    center : np.ndarray
        Ground intersection (3,) of the antenna boresight.
    elevation_line : np.ndarray
        The two footprint points (2, 3) on the elevation principal plane.
    azimuth_line : np.ndarray
        The two footprint points (2, 3) on the azimuth principal plane.
    range_min, range_center, range_max : float
        Slant range (m) from the carrier to the nearest illuminated point,
        to the boresight ground point, and to the farthest footprint point.
    range_min_index, range_max_index : int
        Indices of the nearest and farthest polygon points.
    nadir_inside : bool
        Whether the carrier nadir lies inside the footprint.
    incidence_min_deg, incidence_center_deg, incidence_max_deg : float
        Local incidence angles (degrees) at the min / center / max range.
    ground_range_swath : float
        Ground distance (m) between the nearest and farthest polygon points.
    area : float
        Footprint area (m²).
    squint_deg : float
        Antenna squint (degrees) relative to the carrier velocity.
    illumination_time : float
        Time (s) for a ground point to cross the footprint, NaN if unavailable.
    ground_angular_velocity_degps : float
        Angular rate (deg/s) of the carrier as seen from the scene origin.
    ground_max_coord : float
        Largest absolute horizontal coordinate (m) of the polygon.
    """
    points: np.ndarray = field(compare=False)
    center: np.ndarray = field(compare=False)
    elevation_line: np.ndarray = field(compare=False)
    azimuth_line: np.ndarray = field(compare=False)
    range_min: float
    range_center: float
    range_max: float
    range_min_index: int
    range_max_index: int
    nadir_inside: bool
    incidence_min_deg: float
    incidence_center_deg: float
    incidence_max_deg: float
    ground_range_swath: float
    area: float
    squint_deg: float
    illumination_time: float
    ground_angular_velocity_degps: float
    ground_max_coord: float

    def __post_init__(self):
        for name in ("points", "center", "elevation_line", "azimuth_line"):
            value = np.array(getattr(self, name), dtype=np.float64)
            value.setflags(write=False)
            object.__setattr__(self, name, value)

    @property
    def size(self) -> int:
        return int(self.points.shape[0])

    @property
    def range_min_point(self) -> np.ndarray:
        return self.points[self.range_min_index]

    @property
    def range_max_point(self) -> np.ndarray:
        return self.points[self.range_max_index]


# ===================================================================
# Polygon metrics
# ===================================================================

def local_incidence_deg(carrier_position: np.ndarray, ground_point: np.ndarray) -> np.ndarray:
    """
    Local incidence angle at ground point(s) on a flat ground.

    Parameters
    ----------
    carrier_position : np.ndarray
        Carrier position (3,).
    ground_point : np.ndarray
        Ground point(s), shape (3,) or (N, 3).

    Returns
    -------
    float or np.ndarray
        arccos(up . unit(carrier - p)) in degrees.
    """
    los = normalize_or_zero(np.asarray(carrier_position) - np.asarray(ground_point))
    cos_inc = np.clip(los @ UP_AXIS, -1.0, 1.0)
    return np.degrees(np.arccos(cos_inc))


def polygon_area(points: np.ndarray) -> float:
    """Shoelace area of a closed polygon given as (N, 2+) points."""
    x, y = points[:, 0], points[:, 1]
    return float(0.5 * abs(np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y)))


def point_in_polygon(point: np.ndarray, polygon: np.ndarray) -> bool:
    """
    Even-odd ray casting test of a horizontal point against a polygon.

    Parameters
    ----------
    point : np.ndarray
        Point with at least x, y components.
    polygon : np.ndarray
        Closed polygon (N, 2+) given without repeating the first vertex.

    Returns
    -------
    bool
    """
    px, py = float(point[0]), float(point[1])
    xi, yi = polygon[:, 0], polygon[:, 1]
    xj, yj = np.roll(xi, 1), np.roll(yi, 1)

    straddles = (yi > py) != (yj > py)
    with np.errstate(divide='ignore', invalid='ignore'):
        x_cross = (xj - xi) * (py - yi) / (yj - yi) + xi
    crossings = np.count_nonzero(straddles & (px < x_cross))
    return bool(crossings % 2)


def antenna_squint_deg(boresight: np.ndarray, velocity: np.ndarray) -> float:
    """
    Squint of an antenna relative to the carrier velocity.

    Returns -asin(unit(axis) . unit(velocity)) in degrees, 0 when the
    velocity is zero.
    """
    sin_squint = float(np.dot(normalize_or_zero(boresight), normalize_or_zero(velocity)))
    return float(-np.degrees(np.arcsin(np.clip(sin_squint, -1.0, 1.0))))


def _cross2d(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return a[..., 0] * b[..., 1] - a[..., 1] * b[..., 0]


def illumination_time(points: np.ndarray, anchor: np.ndarray, velocity: np.ndarray) -> float:
    """
    Time for the footprint to sweep across a ground point.

    The ground velocity defines a line through ``anchor``. Every polygon
    edge is tested against that line and the first two intersections bound
    a chord, whose length divided by the ground speed gives the time.

    Parameters
    ----------
    points : np.ndarray
        Closed footprint polygon (N, 3).
    anchor : np.ndarray
        Point (3,) the line passes through (boresight ground point).
    velocity : np.ndarray
        Carrier velocity (3,).

    Returns
    -------
    float
        Illumination time in seconds; 0 for zero ground speed, NaN when
        fewer than two intersections exist.
    """
    ground_velocity = ground_projection(velocity)[:2]
    speed = float(np.linalg.norm(ground_velocity))
    if speed == 0.0:
        return 0.0

    direction = ground_velocity / speed
    start = points[:, :2]
    edges = np.roll(start, -1, axis=0) - start
    offsets = start - np.asarray(anchor, dtype=np.float64)[:2]

    denom = _cross2d(direction, edges)
    with np.errstate(divide='ignore', invalid='ignore'):
        s = _cross2d(offsets, direction) / denom
        t = _cross2d(offsets, edges) / denom

    hits = np.flatnonzero((denom != 0.0) & (s >= 0.0) & (s < 1.0))
    if hits.size < 2:
        logger.warning("Ground track crosses the footprint %d time(s); illumination time unavailable",
                       hits.size)
        return float('nan')

    chord = abs(t[hits[0]] - t[hits[1]])
    return float(chord / speed)


def ground_angular_velocity_degps(position: np.ndarray, velocity: np.ndarray) -> float:
    """|g x v_g| / |g|² in degrees/s, with g, v_g the ground projections."""
    g = ground_projection(position)
    vg = ground_projection(velocity)
    g_norm2 = float(np.dot(g, g))
    if g_norm2 == 0.0:
        return 0.0
    return float(np.degrees(abs(_cross2d(g, vg)) / g_norm2))


# ===================================================================
# Footprint computation
# ===================================================================

def _cone_ground_points(
    rotation: Rotation,
    position: np.ndarray,
    tan_half_azimuth: float,
    tan_half_elevation: float,
    theta: np.ndarray
) -> np.ndarray:
    """Intersect cone generatrices at angles theta with the ground plane."""
    normal = rotation.inv().apply(UP_AXIS)
    d = -float(np.dot(normal, rotation.inv().apply(position)))

    ty = tan_half_azimuth * np.cos(theta)
    tz = tan_half_elevation * np.sin(theta)
    with np.errstate(divide='ignore', invalid='ignore'):
        r = d / (normal[0] + normal[1] * ty + normal[2] * tz)

    local = np.column_stack([r, ty * r, tz * r])
    world = rotation.apply(local) + position
    world[:, 2] = 0.0
    return world


def _boresight_ground_point(rotation: Rotation, position: np.ndarray) -> np.ndarray:
    axis = rotation.apply(BORESIGHT_AXIS)
    with np.errstate(divide='ignore', invalid='ignore'):
        t = -position[2] / axis[2]
    center = position + t * axis
    center[2] = 0.0
    return center


def compute_footprint(state: PlatformState, size: int = FOOTPRINT_SIZE) -> FootprintPolygon:
    """
    Compute the ground footprint of a platform's antenna beam.

    Parameters
    ----------
    state : PlatformState
        Carrier pose, velocity, antenna attitude and beam.
    size : int
        Number of polygon points. Default 2501.

    Returns
    -------
    FootprintPolygon

    Examples
    --------
    >>> from bsar_toolbox.geometry.platform import AntennaBeam, Orientation
    >>> state = PlatformState.from_pointing(
    ...     3000.0, 100.0, Orientation(), Orientation.from_degrees(90.0, -45.0),
    ...     AntennaBeam.from_degrees(20.0, 20.0))
    >>> fp = compute_footprint(state)
    >>> fp.size
    2501
    """
    if size < 3:
        raise ValueError(f"Footprint size must be at least 3, got {size}")

    rotation = state.rotation
    position = state.position
    height = state.height
    ty, tz = state.beam.tan_half_azimuth, state.beam.tan_half_elevation

    theta = np.arange(size) * (TWO_PI / size)
    points = _cone_ground_points(rotation, position, ty, tz, theta)
    elevation_line = _cone_ground_points(rotation, position, ty, tz, np.array([0.5 * PI, 1.5 * PI]))
    azimuth_line = _cone_ground_points(rotation, position, ty, tz, np.array([0.0, PI]))
    center = _boresight_ground_point(rotation, position)

    ranges = np.linalg.norm(points - position, axis=1)
    i_min = int(np.argmin(ranges))
    i_max = int(np.argmax(ranges))

    nadir_inside = point_in_polygon(position, points)
    range_min = abs(height) if nadir_inside else float(ranges[i_min])
    range_center = float(np.linalg.norm(center - position))
    range_max = float(ranges[i_max])

    if nadir_inside:
        incidence_min = 0.0
    else:
        incidence_min = float(local_incidence_deg(position, points[i_min]))

    ground_max_coord = float(np.max(np.abs(points[:, :2])))

    footprint = FootprintPolygon(
        points=points,
        center=center,
        elevation_line=elevation_line,
        azimuth_line=azimuth_line,
        range_min=range_min,
        range_center=range_center,
        range_max=range_max,
        range_min_index=i_min,
        range_max_index=i_max,
        nadir_inside=nadir_inside,
        incidence_min_deg=incidence_min,
        incidence_center_deg=float(local_incidence_deg(position, center)),
        incidence_max_deg=float(local_incidence_deg(position, points[i_max])),
        ground_range_swath=float(np.linalg.norm(points[i_min] - points[i_max])),
        area=polygon_area(points),
        squint_deg=antenna_squint_deg(state.boresight, state.velocity),
        illumination_time=illumination_time(points, center, state.velocity),
        ground_angular_velocity_degps=ground_angular_velocity_degps(position, state.velocity),
        ground_max_coord=ground_max_coord,
    )

    logger.debug(
        "Footprint: range [%.1f, %.1f, %.1f] m, swath %.1f m, area %.1f m2",
        footprint.range_min, footprint.range_center, footprint.range_max,
        footprint.ground_range_swath, footprint.area
    )
    return footprint


__all__ = [
    "FootprintPolygon",
    "compute_footprint",
    "local_incidence_deg",
    "polygon_area",
    "point_in_polygon",
    "antenna_squint_deg",
    "illumination_time",
    "ground_angular_velocity_degps",
]
