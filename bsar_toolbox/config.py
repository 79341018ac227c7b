# -*- coding: utf-8 -*-
"""
Scenario Configuration - Transmitter, receiver, radar and scene settings.

Configuration values use operator units (degrees, GHz, MHz); conversion to
SI happens through the properties of :class:`ScenarioConfig` and the
platform helpers. A nested dictionary can be deep-merged over the defaults
with :meth:`ScenarioConfig.from_dict`.

Examples
--------
>>> config = ScenarioConfig.from_dict({"rx": {"carrier": {"height_m": 1500.0}}})
>>> config.rx.carrier.height_m
1500.0
>>> config.tx.carrier.height_m
3000.0

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

# Standard library
import copy
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Mapping, Optional

# BSAR internal
from bsar_toolbox.geometry.bistatic import IntegrationMode
from bsar_toolbox.geometry.geopoint import GeographicPoint
from bsar_toolbox.geometry.platform import AntennaBeam, Orientation
from bsar_toolbox.utils.constants import (
    GHZ_TO_HZ,
    MHZ_TO_HZ,
    DEFAULT_GRID_SIZE,
    DEFAULT_N_LEVELS,
    wavelength_from_frequency,
)


# ===================================================================
# Platform
# ===================================================================

@dataclass
class CarrierConfig:
    """Carrier altitude, speed and attitude."""
    height_m: float = 3000.0
    speed_mps: float = 100.0
    heading_deg: float = 0.0
    elevation_deg: float = 0.0
    bank_deg: float = 0.0

    def orientation(self) -> Orientation:
        return Orientation.from_degrees(self.heading_deg, self.elevation_deg, self.bank_deg)


@dataclass
class AntennaConfig:
    """Antenna attitude relative to the carrier and half-power beam widths."""
    heading_deg: float = 90.0  # right-looking
    elevation_deg: float = -45.0
    bank_deg: float = 0.0
    elevation_beam_width_deg: float = 20.0
    azimuth_beam_width_deg: float = 20.0

    def orientation(self) -> Orientation:
        return Orientation.from_degrees(self.heading_deg, self.elevation_deg, self.bank_deg)

    def beam(self) -> AntennaBeam:
        return AntennaBeam.from_degrees(self.elevation_beam_width_deg, self.azimuth_beam_width_deg)


@dataclass
class PlatformConfig:
    """One radar platform: carrier plus antenna."""
    carrier: CarrierConfig = field(default_factory=CarrierConfig)
    antenna: AntennaConfig = field(default_factory=AntennaConfig)

    def validate(self, name: str) -> List[str]:
        """Return the problems found in this platform's settings."""
        errors = []
        if self.carrier.speed_mps < 0.0:
            errors.append(f"{name}.carrier.speed_mps must be >= 0, got {self.carrier.speed_mps}")
        for attr in ("elevation_beam_width_deg", "azimuth_beam_width_deg"):
            value = getattr(self.antenna, attr)
            if not (0.0 < value < 180.0):
                errors.append(f"{name}.antenna.{attr} must be in (0, 180), got {value}")
        return errors


def _default_tx() -> PlatformConfig:
    return PlatformConfig(
        carrier=CarrierConfig(height_m=3000.0, speed_mps=100.0),
        antenna=AntennaConfig(heading_deg=90.0, elevation_deg=-45.0,
                              elevation_beam_width_deg=20.0, azimuth_beam_width_deg=20.0),
    )


def _default_rx() -> PlatformConfig:
    return PlatformConfig(
        carrier=CarrierConfig(height_m=1000.0, speed_mps=50.0),
        antenna=AntennaConfig(heading_deg=90.0, elevation_deg=-60.0,
                              elevation_beam_width_deg=16.0, azimuth_beam_width_deg=16.0),
    )


# ===================================================================
# Radar and scene
# ===================================================================

@dataclass
class RadarConfig:
    """Waveform and integration settings."""
    center_frequency_ghz: float = 10.0
    bandwidth_mhz: float = 800.0
    integration_mode: IntegrationMode = IntegrationMode.GROUND
    integration_time_s: Optional[float] = None

    def __post_init__(self):
        if isinstance(self.integration_mode, str):
            self.integration_mode = IntegrationMode.from_string(self.integration_mode)

    @property
    def center_frequency_hz(self) -> float:
        return self.center_frequency_ghz * GHZ_TO_HZ

    @property
    def bandwidth_hz(self) -> float:
        return self.bandwidth_mhz * MHZ_TO_HZ

    @property
    def wavelength_m(self) -> float:
        return wavelength_from_frequency(self.center_frequency_hz)


@dataclass
class SceneConfig:
    """Scene origin on the ellipsoid and iso-line grid settings."""
    origin_lon_deg: float = 0.0
    origin_lat_deg: float = 0.0
    origin_height_m: float = 0.0
    grid_size: int = DEFAULT_GRID_SIZE
    n_levels: int = DEFAULT_N_LEVELS

    def origin(self) -> GeographicPoint:
        return GeographicPoint.from_degrees(self.origin_lon_deg, self.origin_lat_deg, self.origin_height_m)


# ===================================================================
# Scenario
# ===================================================================

@dataclass
class ScenarioConfig:
    """Complete BSAR scenario: transmitter, receiver, radar and scene."""
    tx: PlatformConfig = field(default_factory=_default_tx)
    rx: PlatformConfig = field(default_factory=_default_rx)
    radar: RadarConfig = field(default_factory=RadarConfig)
    scene: SceneConfig = field(default_factory=SceneConfig)

    @property
    def center_frequency_hz(self) -> float:
        return self.radar.center_frequency_hz

    @property
    def bandwidth_hz(self) -> float:
        return self.radar.bandwidth_hz

    @property
    def wavelength_m(self) -> float:
        return self.radar.wavelength_m

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]] = None) -> "ScenarioConfig":
        """
        Build a configuration by deep-merging ``data`` over the defaults.

        Parameters
        ----------
        data : mapping, optional
            Nested dictionary with any subset of the ``tx``, ``rx``,
            ``radar`` and ``scene`` sections.

        Raises
        ------
        ValueError
            On unknown sections or keys, or an unknown integration mode.
        """
        merged = _deep_merge(cls().to_dict(), dict(data or {}))
        return cls(
            tx=_platform_from_dict(merged["tx"]),
            rx=_platform_from_dict(merged["rx"]),
            radar=RadarConfig(**merged["radar"]),
            scene=SceneConfig(**merged["scene"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["radar"]["integration_mode"] = self.radar.integration_mode.value
        return data

    def validate(self) -> "ScenarioConfig":
        """
        Check every setting and raise once with all problems found.

        Raises
        ------
        ValueError
            Listing every invalid setting.
        """
        errors = self.tx.validate("tx") + self.rx.validate("rx")

        if self.radar.center_frequency_ghz <= 0.0:
            errors.append(f"radar.center_frequency_ghz must be > 0, got {self.radar.center_frequency_ghz}")
        if self.radar.bandwidth_mhz < 0.0:
            errors.append(f"radar.bandwidth_mhz must be >= 0, got {self.radar.bandwidth_mhz}")
        if self.radar.integration_time_s is not None and self.radar.integration_time_s < 0.0:
            errors.append(f"radar.integration_time_s must be >= 0, got {self.radar.integration_time_s}")
        if self.radar.integration_mode is IntegrationMode.MANUAL and self.radar.integration_time_s is None:
            errors.append("radar.integration_time_s is required in manual integration mode")

        if not -90.0 <= self.scene.origin_lat_deg <= 90.0:
            errors.append(f"scene.origin_lat_deg must be in [-90, 90], got {self.scene.origin_lat_deg}")
        if self.scene.grid_size < 2:
            errors.append(f"scene.grid_size must be >= 2, got {self.scene.grid_size}")
        if self.scene.n_levels < 1:
            errors.append(f"scene.n_levels must be >= 1, got {self.scene.n_levels}")

        if errors:
            raise ValueError("Invalid scenario configuration:\n  " + "\n  ".join(errors))
        return self


def _deep_merge(base: Dict[str, Any], override: Mapping[str, Any], path: str = "") -> Dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if key not in merged:
            raise ValueError(f"Unknown configuration key '{path}{key}'")
        if isinstance(merged[key], dict):
            if not isinstance(value, Mapping):
                raise ValueError(f"Configuration section '{path}{key}' must be a mapping")
            merged[key] = _deep_merge(merged[key], value, f"{path}{key}.")
        else:
            merged[key] = value
    return merged


def _platform_from_dict(data: Dict[str, Any]) -> PlatformConfig:
    return PlatformConfig(
        carrier=CarrierConfig(**data["carrier"]),
        antenna=AntennaConfig(**data["antenna"]),
    )


__all__ = [
    "IntegrationMode",
    "CarrierConfig",
    "AntennaConfig",
    "PlatformConfig",
    "RadarConfig",
    "SceneConfig",
    "ScenarioConfig",
]
