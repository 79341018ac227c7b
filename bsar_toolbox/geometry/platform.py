# -*- coding: utf-8 -*-
"""
Platform - Carrier and antenna attitude, beam, and kinematic state.

The world frame is a local East-North-Up (ENU) frame centered on the scene
origin, with the ground modelled as the plane z = 0. Carrier and antenna
attitudes are expressed as Z-Y-X (heading, elevation, bank) Euler angles in
the North-East-Down (NED) convention. The antenna boresight is the local +X
axis, so an elevation of -90° looks at nadir.

Dependencies
------------
scipy.spatial.transform - Rotation composition and Euler angles

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

# Standard library
import logging
from dataclasses import dataclass, field

# Third-party
import numpy as np
from scipy.spatial.transform import Rotation

# BSAR internal
from bsar_toolbox.utils.constants import PI

logger = logging.getLogger(__name__)


# Rotation taking NED components to ENU components: (x, y, z) -> (y, x, -z).
# Scalar-last quaternion of a half turn about (1, 1, 0) / sqrt(2).
ENU_TO_NED = Rotation.from_quat([np.sqrt(0.5), np.sqrt(0.5), 0.0, 0.0])

BORESIGHT_AXIS = np.array([1.0, 0.0, 0.0])

UP_AXIS = np.array([0.0, 0.0, 1.0])


# ===================================================================
# Attitude and beam
# ===================================================================

@dataclass(frozen=True)
class Orientation:
    """
    Z-Y-X Euler attitude in the NED convention.

    Attributes
    ----------
    heading_rad : float
        Rotation about the down axis, clockwise from north.
    elevation_rad : float
        Rotation about the rotated east axis, positive nose up.
    bank_rad : float
        Rotation about the rotated north axis.
    """
    heading_rad: float = 0.0
    elevation_rad: float = 0.0
    bank_rad: float = 0.0

    @classmethod
    def from_degrees(cls, heading_deg: float = 0.0, elevation_deg: float = 0.0,
                     bank_deg: float = 0.0) -> "Orientation":
        return cls(
            float(np.radians(heading_deg)),
            float(np.radians(elevation_deg)),
            float(np.radians(bank_deg)),
        )

    def as_rotation(self) -> Rotation:
        """Intrinsic Z-Y-X rotation for this attitude."""
        return Rotation.from_euler('ZYX', [self.heading_rad, self.elevation_rad, self.bank_rad])


@dataclass(frozen=True)
class AntennaBeam:
    """
    Half-power beam widths of an antenna.

    Attributes
    ----------
    elevation_width_rad : float
        Full beam width in the elevation plane, in (0, π).
    azimuth_width_rad : float
        Full beam width in the azimuth plane, in (0, π).
    """
    elevation_width_rad: float
    azimuth_width_rad: float

    def __post_init__(self):
        for name in ("elevation_width_rad", "azimuth_width_rad"):
            value = getattr(self, name)
            if not (0.0 < value < PI):
                raise ValueError(f"{name} must be in (0, pi), got {value}")

    @classmethod
    def from_degrees(cls, elevation_width_deg: float, azimuth_width_deg: float) -> "AntennaBeam":
        return cls(float(np.radians(elevation_width_deg)), float(np.radians(azimuth_width_deg)))

    @property
    def tan_half_elevation(self) -> float:
        return float(np.tan(0.5 * self.elevation_width_rad))

    @property
    def tan_half_azimuth(self) -> float:
        return float(np.tan(0.5 * self.azimuth_width_rad))


# ===================================================================
# Rotations
# ===================================================================

def carrier_rotation(orientation: Orientation) -> Rotation:
    """
    Rotation from carrier body axes to the ENU world frame.

    Parameters
    ----------
    orientation : Orientation
        Carrier attitude (NED convention).

    Returns
    -------
    Rotation
        ``ENU_TO_NED * EulerZYX(heading, elevation, bank)``.
    """
    return ENU_TO_NED * orientation.as_rotation()


def antenna_rotation(orientation: Orientation) -> Rotation:
    """Rotation from antenna axes to carrier body axes."""
    return orientation.as_rotation()


def carrier_position_from_pointing(
    height_m: float,
    carrier: Orientation,
    antenna: Orientation
) -> np.ndarray:
    """
    Place a carrier at a height so that its antenna boresight hits the origin.

    Parameters
    ----------
    height_m : float
        Carrier height above the ground plane.
    carrier : Orientation
        Carrier attitude.
    antenna : Orientation
        Antenna attitude relative to the carrier.

    Returns
    -------
    np.ndarray
        Carrier position (3,) in the world frame. A height <= 0 places the
        carrier at (0, 0, height). When the boresight does not point below
        the horizon the carrier is placed directly above the origin.
    """
    axis = (carrier_rotation(carrier) * antenna_rotation(antenna)).apply(BORESIGHT_AXIS)

    if height_m <= 0.0:
        return np.array([0.0, 0.0, height_m])

    if axis[2] >= 0.0:
        logger.warning(
            "Boresight %s does not point below the horizon; placing carrier over the origin",
            np.array2string(axis, precision=4)
        )
        return np.array([0.0, 0.0, height_m])

    t = height_m / axis[2]
    return np.array([t * axis[0], t * axis[1], height_m])


def velocity_from_heading(speed_mps: float, carrier: Orientation) -> np.ndarray:
    """Velocity (3,) along the carrier forward axis in the world frame."""
    return speed_mps * carrier_rotation(carrier).apply(BORESIGHT_AXIS)


# ===================================================================
# Platform state
# ===================================================================

@dataclass(frozen=True)
class PlatformState:
    """
    Snapshot of a radar platform. Position and velocity are stored as
    read-only copies.

    Attributes
    ----------
    position : np.ndarray
        Carrier position (3,) in meters, world ENU frame.
    velocity : np.ndarray
        Carrier velocity (3,) in m/s, world ENU frame.
    carrier : Orientation
        Carrier attitude.
    antenna : Orientation
        Antenna attitude relative to the carrier.
    beam : AntennaBeam
        Antenna half-power beam widths.
    """
    position: np.ndarray = field(compare=False)
    velocity: np.ndarray = field(compare=False)
    carrier: Orientation
    antenna: Orientation
    beam: AntennaBeam

    def __post_init__(self):
        for name in ("position", "velocity"):
            value = np.array(getattr(self, name), dtype=np.float64)
            if value.shape != (3,):
                raise ValueError(f"{name} must have shape (3,), got {value.shape}")
            value.setflags(write=False)
            object.__setattr__(self, name, value)

    @classmethod
    def from_pointing(
        cls,
        height_m: float,
        speed_mps: float,
        carrier: Orientation,
        antenna: Orientation,
        beam: AntennaBeam
    ) -> "PlatformState":
        """
        Build a state whose antenna boresight points at the scene origin.

        The carrier flies along its forward axis at ``speed_mps``.
        """
        return cls(
            position=carrier_position_from_pointing(height_m, carrier, antenna),
            velocity=velocity_from_heading(speed_mps, carrier),
            carrier=carrier,
            antenna=antenna,
            beam=beam,
        )

    @property
    def carrier_rotation(self) -> Rotation:
        return carrier_rotation(self.carrier)

    @property
    def rotation(self) -> Rotation:
        """Rotation from antenna axes to the world frame."""
        return self.carrier_rotation * antenna_rotation(self.antenna)

    @property
    def boresight(self) -> np.ndarray:
        """Unit antenna boresight (3,) in the world frame."""
        return self.rotation.apply(BORESIGHT_AXIS)

    @property
    def height(self) -> float:
        return float(self.position[2])

    @property
    def speed(self) -> float:
        return float(np.linalg.norm(self.velocity))


__all__ = [
    "ENU_TO_NED",
    "BORESIGHT_AXIS",
    "UP_AXIS",
    "Orientation",
    "AntennaBeam",
    "PlatformState",
    "carrier_rotation",
    "antenna_rotation",
    "carrier_position_from_pointing",
    "velocity_from_heading",
]
