# -*- coding: utf-8 -*-
"""
Scenario Pipeline - One consistent snapshot of a BSAR configuration.

Evaluates, from a :class:`~bsar_toolbox.config.ScenarioConfig`, the
transmitter and receiver platform states, both antenna footprints, the
BSAR report for the scene origin, the iso-range ellipsoid, the geographic
positions of both carriers and, optionally, the iso-range and iso-Doppler
contours on the ground.

Everything is recomputed from scratch on each call and returned as an
immutable snapshot.

Examples
--------
>>> snapshot = compute_scenario(ScenarioConfig(), with_contours=False)
>>> snapshot.report.is_available
True

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

# Standard library
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

# Third-party
import numpy as np

# BSAR internal
from bsar_toolbox.config import ScenarioConfig, PlatformConfig
from bsar_toolbox.geometry.bistatic import (
    BistaticReport,
    IsoRangeEllipsoid,
    compute_bistatic_report,
    iso_range_ellipsoid,
    select_range_footprint,
)
from bsar_toolbox.geometry.coordinates import LocalFrame
from bsar_toolbox.geometry.footprint import FootprintPolygon, compute_footprint
from bsar_toolbox.geometry.geopoint import GeographicPoint
from bsar_toolbox.geometry.platform import PlatformState
from bsar_toolbox.visualization.contour import Contours
from bsar_toolbox.visualization.iso_fields import IsoDopplerField, IsoRangeField, trace_levels

logger = logging.getLogger(__name__)

# Iso grid side relative to the largest footprint coordinate
GRID_EXTENT_FACTOR = 2.1


@dataclass(frozen=True)
class ScenarioSnapshot:
    """
    Results of one scenario evaluation.

    Attributes
    ----------
    tx_state, rx_state : PlatformState
        Transmitter and receiver platforms in the world ENU frame.
    tx_footprint, rx_footprint : FootprintPolygon
        Antenna footprints on the ground.
    report : BistaticReport
        BSAR figures at the scene origin.
    iso_range_ellipsoid : IsoRangeEllipsoid
        Constant bistatic range surface through the scene origin.
    tx_geographic, rx_geographic : GeographicPoint
        Carrier positions on the ellipsoid.
    extent : float
        Side length (m) of the iso-line ground grid.
    iso_range_field, iso_doppler_field : optional
        Sampled fields, None when contours were not requested.
    iso_range_contours, iso_doppler_contours : list
        (level, contours) pairs, empty when contours were not requested.
    """
    tx_state: PlatformState
    rx_state: PlatformState
    tx_footprint: FootprintPolygon
    rx_footprint: FootprintPolygon
    report: BistaticReport
    iso_range_ellipsoid: IsoRangeEllipsoid
    tx_geographic: GeographicPoint
    rx_geographic: GeographicPoint
    extent: float
    iso_range_field: Optional[IsoRangeField] = field(default=None, compare=False)
    iso_doppler_field: Optional[IsoDopplerField] = field(default=None, compare=False)
    iso_range_contours: List[Tuple[float, Contours]] = field(default_factory=list, compare=False)
    iso_doppler_contours: List[Tuple[float, Contours]] = field(default_factory=list, compare=False)


def platform_state(platform: PlatformConfig) -> PlatformState:
    """Platform state whose antenna boresight points at the scene origin."""
    return PlatformState.from_pointing(
        platform.carrier.height_m,
        platform.carrier.speed_mps,
        platform.carrier.orientation(),
        platform.antenna.orientation(),
        platform.antenna.beam(),
    )


def compute_scenario(config: Optional[ScenarioConfig] = None, with_contours: bool = True) -> ScenarioSnapshot:
    """
    Evaluate a BSAR scenario.

    Parameters
    ----------
    config : ScenarioConfig, optional
        Scenario settings. Default configuration when omitted.
    with_contours : bool
        Also sample the iso-range / iso-Doppler fields and trace their
        contours. Default True.

    Returns
    -------
    ScenarioSnapshot

    Raises
    ------
    ValueError
        If the configuration is invalid.
    """
    config = (config or ScenarioConfig()).validate()
    radar = config.radar

    tx_state = platform_state(config.tx)
    rx_state = platform_state(config.rx)
    tx_footprint = compute_footprint(tx_state)
    rx_footprint = compute_footprint(rx_state)

    # Ground point of interest is the scene origin: TxP = -OTx, RxP = -ORx
    report = compute_bistatic_report(
        -tx_state.position, tx_state.velocity,
        -rx_state.position, rx_state.velocity,
        center_frequency_hz=radar.center_frequency_hz,
        bandwidth_hz=radar.bandwidth_hz,
        integration_mode=radar.integration_mode,
        integration_time_s=radar.integration_time_s,
        footprint_points=select_range_footprint(tx_footprint, rx_footprint).points,
    )

    frame = LocalFrame(config.scene.origin())
    extent = GRID_EXTENT_FACTOR * max(tx_footprint.ground_max_coord, rx_footprint.ground_max_coord)

    snapshot = dict(
        tx_state=tx_state,
        rx_state=rx_state,
        tx_footprint=tx_footprint,
        rx_footprint=rx_footprint,
        report=report,
        iso_range_ellipsoid=iso_range_ellipsoid(tx_state.position, rx_state.position),
        tx_geographic=frame.enu_to_geographic(tx_state.position),
        rx_geographic=frame.enu_to_geographic(rx_state.position),
        extent=float(extent),
    )

    if with_contours:
        if np.isfinite(extent) and extent > 0.0:
            size = config.scene.grid_size
            iso_range = IsoRangeField(tx_state.position, rx_state.position, extent, size, size)
            iso_doppler = IsoDopplerField(
                tx_state.position, tx_state.velocity,
                rx_state.position, rx_state.velocity,
                config.wavelength_m, extent, size, size,
            )
            n_levels = config.scene.n_levels
            snapshot.update(
                iso_range_field=iso_range,
                iso_doppler_field=iso_doppler,
                iso_range_contours=trace_levels(iso_range, iso_range.levels(n_levels)),
                iso_doppler_contours=trace_levels(iso_doppler, iso_doppler.levels(n_levels)),
            )
        else:
            logger.warning("Footprint extent %s is not usable; iso-lines skipped", extent)

    return ScenarioSnapshot(**snapshot)


__all__ = [
    "ScenarioSnapshot",
    "platform_state",
    "compute_scenario",
]
