# -*- coding: utf-8 -*-
"""
Bistatic Geometry - BSAR angles, ranges, resolutions and Doppler.

Computes the bistatic SAR (BSAR) performance figures for a ground point of
interest P from the Transmitter -> P and Receiver -> P vectors
(TxP = OP - OTx, RxP = OP - ORx) and the platform velocities, using the
bisector vector beta = unit(TxP) + unit(RxP) and its time derivative.

Resolutions use the -3 dB width of the squared sinc response,
K = 0.885892941378904715.

Values that cannot be computed (zero range vectors, zero denominators) are
NaN. Nothing degenerate is reported as zero or infinity.

References
----------
Cardillo, G. P., "On the use of the gradient to determine bistatic SAR
resolution." Antennas and Propagation Society Symposium (1990).

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

# Standard library
import logging
from dataclasses import dataclass, asdict, field
from enum import Enum
from typing import Dict, Optional, Union

# Third-party
import numpy as np
from scipy.spatial.transform import Rotation

# BSAR internal
from bsar_toolbox.geometry.footprint import FootprintPolygon
from bsar_toolbox.utils.constants import (
    SPEED_OF_LIGHT,
    SINC_WIDTH_AT_HALF_POWER,
    SINC_WIDTH_AT_HALF_POWER_SQUARED,
)
from bsar_toolbox.utils.misc import normalize_or_zero, safe_divide, ground_projection

logger = logging.getLogger(__name__)


# ===================================================================
# Integration mode
# ===================================================================

class IntegrationMode(Enum):
    """How the integration time of a BSAR acquisition is chosen."""
    GROUND = "ground"  # square ground resolution cell
    SLANT = "slant"  # square slant resolution cell
    MANUAL = "manual"  # explicit integration time

    @classmethod
    def from_string(cls, value: str) -> "IntegrationMode":
        """Parse a mode name, case-insensitive."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown integration mode '{value}'. Expected one of: {valid}") from None


# ===================================================================
# Report
# ===================================================================

@dataclass(frozen=True)
class BistaticReport:
    """
    BSAR figures for one ground point of interest.

    Every field is a finite float or NaN ("unavailable").

    Attributes
    ----------
    range_min, range_center, range_max : float
        Bistatic range |TxP| + |RxP| (m) over the footprint and at P.
    direct_range : float
        Transmitter to receiver distance (m).
    bistatic_angle_deg : float
        Angle Tx - P - Rx in degrees.
    slant_range_resolution, ground_range_resolution : float
        Range resolution (m) in the slant and ground planes.
    slant_lateral_resolution, ground_lateral_resolution : float
        Lateral (Doppler) resolution (m) in the slant and ground planes.
    resolution_area : float
        Ground resolution cell area (m²).
    doppler_frequency : float
        Doppler frequency (Hz).
    doppler_rate : float
        Doppler rate (Hz/s).
    integration_time : float
        Integration time (s).
    processed_doppler_bandwidth : float
        Doppler bandwidth (Hz) processed over the integration time.
    """
    range_min: float = float('nan')
    range_center: float = float('nan')
    range_max: float = float('nan')
    direct_range: float = float('nan')
    bistatic_angle_deg: float = float('nan')
    slant_range_resolution: float = float('nan')
    ground_range_resolution: float = float('nan')
    slant_lateral_resolution: float = float('nan')
    ground_lateral_resolution: float = float('nan')
    resolution_area: float = float('nan')
    doppler_frequency: float = float('nan')
    doppler_rate: float = float('nan')
    integration_time: float = float('nan')
    processed_doppler_bandwidth: float = float('nan')

    @classmethod
    def unavailable(cls) -> "BistaticReport":
        """Report with every field unavailable."""
        return cls()

    @property
    def is_available(self) -> bool:
        return not np.isnan(self.range_center)

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


# ===================================================================
# Scalar helpers
# ===================================================================

def bistatic_angle(txp: np.ndarray, rxp: np.ndarray) -> Union[float, np.ndarray]:
    """
    Bistatic angle of the triangle Transmitter - P - Receiver.

    Parameters
    ----------
    txp : np.ndarray
        Transmitter -> P vector(s), shape (3,) or (..., 3).
    rxp : np.ndarray
        Receiver -> P vector(s), same shape.

    Returns
    -------
    float or np.ndarray
        Angle in radians, 0 where either vector is zero.
    """
    txp = np.asarray(txp, dtype=np.float64)
    rxp = np.asarray(rxp, dtype=np.float64)
    beta = normalize_or_zero(txp) + normalize_or_zero(rxp)
    # 0.5|beta| above 1 is rounding overshoot of a monostatic pair: 0 deg
    arg = np.minimum(0.5 * np.linalg.norm(beta, axis=-1), 1.0)
    degenerate = (np.linalg.norm(txp, axis=-1) == 0.0) | (np.linalg.norm(rxp, axis=-1) == 0.0)
    angle = np.where(degenerate, 0.0, 2.0 * np.arccos(arg))
    return float(angle) if angle.ndim == 0 else angle


def bistatic_range(txp: np.ndarray, rxp: np.ndarray) -> Union[float, np.ndarray]:
    """Bistatic range |TxP| + |RxP| in meters."""
    total = (np.linalg.norm(np.asarray(txp, dtype=np.float64), axis=-1)
             + np.linalg.norm(np.asarray(rxp, dtype=np.float64), axis=-1))
    return float(total) if np.ndim(total) == 0 else total


def doppler_frequency(
    wavelength: float,
    txp: np.ndarray,
    vtx: np.ndarray,
    rxp: np.ndarray,
    vrx: np.ndarray
) -> Union[float, np.ndarray]:
    """
    Doppler frequency (vtx . unit(TxP) + vrx . unit(RxP)) / wavelength.

    Parameters
    ----------
    wavelength : float
        Carrier wavelength in meters.
    txp, rxp : np.ndarray
        Transmitter -> P and Receiver -> P vector(s), (3,) or (..., 3).
    vtx, vrx : np.ndarray
        Transmitter and receiver velocities, broadcastable to txp / rxp.

    Returns
    -------
    float or np.ndarray
        Doppler frequency in Hz, NaN where either range vector is zero.
    """
    txp = np.asarray(txp, dtype=np.float64)
    rxp = np.asarray(rxp, dtype=np.float64)
    projected = (np.sum(np.asarray(vtx) * normalize_or_zero(txp), axis=-1)
                 + np.sum(np.asarray(vrx) * normalize_or_zero(rxp), axis=-1))
    degenerate = (np.linalg.norm(txp, axis=-1) == 0.0) | (np.linalg.norm(rxp, axis=-1) == 0.0)
    freq = np.where(degenerate, np.nan, projected / wavelength)
    return float(freq) if freq.ndim == 0 else freq


def select_range_footprint(first: FootprintPolygon, second: FootprintPolygon) -> FootprintPolygon:
    """Pick the footprint with the smaller ground range swath."""
    if second.ground_range_swath < first.ground_range_swath:
        return second
    return first


# ===================================================================
# BSAR report
# ===================================================================

def compute_bistatic_report(
    txp: np.ndarray,
    vtx: np.ndarray,
    rxp: np.ndarray,
    vrx: np.ndarray,
    center_frequency_hz: float,
    bandwidth_hz: float,
    integration_mode: IntegrationMode = IntegrationMode.GROUND,
    integration_time_s: Optional[float] = None,
    footprint_points: Optional[np.ndarray] = None
) -> BistaticReport:
    """
    Compute the BSAR report for a ground point of interest.

    Parameters
    ----------
    txp : np.ndarray
        Transmitter -> P vector (3,), TxP = OP - OTx, in meters.
    vtx : np.ndarray
        Transmitter velocity (3,) in m/s.
    rxp : np.ndarray
        Receiver -> P vector (3,), RxP = OP - ORx, in meters.
    vrx : np.ndarray
        Receiver velocity (3,) in m/s.
    center_frequency_hz : float
        Carrier frequency f0, > 0.
    bandwidth_hz : float
        Signal bandwidth B, >= 0.
    integration_mode : IntegrationMode
        GROUND or SLANT derive the integration time that gives a square
        resolution cell in that plane: T = (B / f0) |beta| / |dbeta|.
        MANUAL requires ``integration_time_s``.
    integration_time_s : float, optional
        Explicit integration time, >= 0. Takes precedence over the mode.
    footprint_points : np.ndarray, optional
        Footprint polygon (N, 3) relative to P, used for the bistatic range
        extent. Without it range_min and range_max are NaN.

    Returns
    -------
    BistaticReport
        Fully unavailable if TxP or RxP is a zero vector.

    Raises
    ------
    ValueError
        If the bandwidth is negative, the center frequency not positive, the
        explicit integration time negative, or MANUAL mode is used without
        an integration time.
    """
    if bandwidth_hz < 0.0:
        raise ValueError(f"Bandwidth must be >= 0, got {bandwidth_hz}")
    if center_frequency_hz <= 0.0:
        raise ValueError(f"Center frequency must be > 0, got {center_frequency_hz}")
    if integration_time_s is not None and integration_time_s < 0.0:
        raise ValueError(f"Integration time must be >= 0, got {integration_time_s}")
    if integration_mode is IntegrationMode.MANUAL and integration_time_s is None:
        raise ValueError("MANUAL integration mode requires integration_time_s")

    txp = np.asarray(txp, dtype=np.float64)
    rxp = np.asarray(rxp, dtype=np.float64)
    vtx = np.asarray(vtx, dtype=np.float64)
    vrx = np.asarray(vrx, dtype=np.float64)

    txp_norm = float(np.linalg.norm(txp))
    rxp_norm = float(np.linalg.norm(rxp))
    if txp_norm == 0.0 or rxp_norm == 0.0:
        logger.warning("Zero range vector (|TxP|=%g, |RxP|=%g); BSAR report unavailable",
                       txp_norm, rxp_norm)
        return BistaticReport.unavailable()

    utx = txp / txp_norm
    urx = rxp / rxp_norm

    # Bisector vector and its first time derivative
    beta = utx + urx
    dbeta = -((vtx - np.dot(vtx, utx) * utx) / txp_norm
              + (vrx - np.dot(vrx, urx) * urx) / rxp_norm)
    beta_g = ground_projection(beta)
    dbeta_g = ground_projection(dbeta)

    beta_norm = float(np.linalg.norm(beta))
    dbeta_norm = float(np.linalg.norm(dbeta))
    beta_g_norm = float(np.linalg.norm(beta_g))
    dbeta_g_norm = float(np.linalg.norm(dbeta_g))

    wavelength = SPEED_OF_LIGHT / center_frequency_hz
    fractional_bandwidth = bandwidth_hz / center_frequency_hz

    if integration_time_s is not None:
        integration_time = float(integration_time_s)
    elif integration_mode is IntegrationMode.SLANT:
        integration_time = fractional_bandwidth * safe_divide(beta_norm, dbeta_norm)
    else:
        integration_time = fractional_bandwidth * safe_divide(beta_g_norm, dbeta_g_norm)

    # Bistatic ranges
    range_min = range_max = float('nan')
    if footprint_points is not None and len(footprint_points) > 0:
        points = np.asarray(footprint_points, dtype=np.float64)
        ranges = (np.linalg.norm(txp + points, axis=1)
                  + np.linalg.norm(rxp + points, axis=1))
        range_min = float(np.min(ranges))
        range_max = float(np.max(ranges))

    # Rounding can push 0.5|beta| past 1; clamping keeps the monostatic
    # angle at 0 deg instead of wrapping to 180 deg
    arg = min(0.5 * beta_norm, 1.0)

    k = SINC_WIDTH_AT_HALF_POWER
    sin_gamma_tx = float(np.dot(normalize_or_zero(vtx), utx))
    sin_gamma_rx = float(np.dot(normalize_or_zero(vrx), urx))
    doppler_rate = -(np.dot(vtx, vtx) * (1.0 - sin_gamma_tx ** 2) / txp_norm
                     + np.dot(vrx, vrx) * (1.0 - sin_gamma_rx ** 2) / rxp_norm) / wavelength

    return BistaticReport(
        range_min=range_min,
        range_center=txp_norm + rxp_norm,
        range_max=range_max,
        direct_range=float(np.linalg.norm(txp - rxp)),
        bistatic_angle_deg=float(np.degrees(2.0 * np.arccos(arg))),
        slant_range_resolution=safe_divide(k * SPEED_OF_LIGHT, bandwidth_hz * beta_norm),
        ground_range_resolution=safe_divide(k * SPEED_OF_LIGHT, bandwidth_hz * beta_g_norm),
        slant_lateral_resolution=safe_divide(k * wavelength, integration_time * dbeta_norm),
        ground_lateral_resolution=safe_divide(k * wavelength, integration_time * dbeta_g_norm),
        resolution_area=safe_divide(
            SINC_WIDTH_AT_HALF_POWER_SQUARED * SPEED_OF_LIGHT * wavelength,
            bandwidth_hz * integration_time * float(np.linalg.norm(np.cross(beta_g, dbeta_g)))
        ),
        doppler_frequency=float((np.dot(vtx, utx) + np.dot(vrx, urx)) / wavelength),
        doppler_rate=float(doppler_rate),
        integration_time=float(integration_time),
        processed_doppler_bandwidth=float(integration_time * abs(doppler_rate)),
    )


# ===================================================================
# Iso-range ellipsoid
# ===================================================================

@dataclass(frozen=True)
class IsoRangeEllipsoid:
    """
    Ellipsoid of constant bistatic range through the scene origin.

    Attributes
    ----------
    center : np.ndarray
        Midpoint (3,) between transmitter and receiver.
    axes : np.ndarray
        Orthonormal axes (3, 3) as rows; the first lies along Tx -> Rx.
    radii : np.ndarray
        Semi-axes (3,): semi-major, then the two equal semi-minor axes.
    """
    center: np.ndarray = field(compare=False)
    axes: np.ndarray = field(compare=False)
    radii: np.ndarray = field(compare=False)

    def as_rotation(self) -> Rotation:
        """Rotation taking world axes onto the ellipsoid axes."""
        return Rotation.from_matrix(self.axes.T)

    def contains(self, point: np.ndarray, rtol: float = 1e-9) -> bool:
        """Whether a point lies on the ellipsoid surface."""
        local = self.axes @ (np.asarray(point, dtype=np.float64) - self.center)
        return bool(np.isclose(np.sum((local / self.radii) ** 2), 1.0, rtol=rtol))


def iso_range_ellipsoid(tx_position: np.ndarray, rx_position: np.ndarray) -> IsoRangeEllipsoid:
    """
    Iso-range ellipsoid with foci at Tx and Rx passing through the origin.

    Parameters
    ----------
    tx_position : np.ndarray
        Transmitter position OT (3,).
    rx_position : np.ndarray
        Receiver position OR (3,).

    Returns
    -------
    IsoRangeEllipsoid
        In the monostatic case (Tx and Rx closer than 1e-10 m) the axes are
        the world X, Y, Z axes.
    """
    ot = np.asarray(tx_position, dtype=np.float64)
    orx = np.asarray(rx_position, dtype=np.float64)
    baseline = orx - ot
    ot_norm = float(np.linalg.norm(ot))
    or_norm = float(np.linalg.norm(orx))

    center = ot + 0.5 * baseline
    semi_major = 0.5 * (ot_norm + or_norm)
    semi_minor = float(np.sqrt(max(0.5 * (ot_norm * or_norm + np.dot(ot, orx)), 0.0)))

    if np.linalg.norm(baseline) < 1e-10:
        axes = np.eye(3)
    else:
        u = baseline / np.linalg.norm(baseline)
        v = np.cross([0.0, 0.0, 1.0], u)
        if np.linalg.norm(v) == 0.0:
            v = np.array([1.0, 0.0, 0.0])
        else:
            v = v / np.linalg.norm(v)
        w = np.cross(u, v)
        axes = np.vstack([u, v, w])

    return IsoRangeEllipsoid(
        center=center,
        axes=axes,
        radii=np.array([semi_major, semi_minor, semi_minor]),
    )


__all__ = [
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
