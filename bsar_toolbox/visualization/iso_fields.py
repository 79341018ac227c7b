# -*- coding: utf-8 -*-
"""
Iso Fields - Bistatic range and Doppler sampled on a ground grid.

Evaluates the bistatic range and the Doppler frequency of every cell of a
square ground grid centered on the scene origin, producing scalar fields
that the contour tracer turns into iso-range and iso-Doppler lines.

The grid starts at the top-left corner (-extent/2, +extent/2): x grows
with the column index and y decreases with the row index.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

# Standard library
import logging
from typing import List, Tuple

# Third-party
import numpy as np

# BSAR internal
from bsar_toolbox.geometry.bistatic import bistatic_range, doppler_frequency
from bsar_toolbox.utils.constants import DEFAULT_GRID_SIZE
from bsar_toolbox.visualization.contour import ArrayField, Contours, ScalarField, march

logger = logging.getLogger(__name__)


# ===================================================================
# Ground grid
# ===================================================================

class GroundGridField(ArrayField):
    """
    Scalar field sampled on a square ground grid.

    Parameters
    ----------
    data : np.ndarray
        Values (height, width) on the grid.
    extent : float
        Side length of the grid in meters.
    """

    def __init__(self, data: np.ndarray, extent: float):
        super().__init__(data)
        width, height = self.dimensions()
        _check_grid(extent, width, height)
        self.extent = float(extent)

    @staticmethod
    def ground_points(extent: float, width: int, height: int) -> np.ndarray:
        """
        Ground coordinates of every grid cell.

        Returns
        -------
        np.ndarray
            Points (height, width, 3) with z = 0.
        """
        _check_grid(extent, width, height)
        x_axis = -0.5 * extent + np.arange(width) * (extent / (width - 1))
        y_axis = 0.5 * extent - np.arange(height) * (extent / (height - 1))
        xx, yy = np.meshgrid(x_axis, y_axis)
        return np.stack([xx, yy, np.zeros_like(xx)], axis=-1)

    @property
    def spacing(self) -> Tuple[float, float]:
        """Grid steps (dx, dy) in meters; dy is negative."""
        width, height = self.dimensions()
        return self.extent / (width - 1), -self.extent / (height - 1)

    def ground_coordinates(self, x: float, y: float) -> Tuple[float, float]:
        """Map (fractional) field indices to ground coordinates in meters."""
        dx, dy = self.spacing
        return -0.5 * self.extent + x * dx, 0.5 * self.extent + y * dy

    def _level_bounds(self, finite: np.ndarray) -> Tuple[float, float]:
        return float(np.min(finite)), float(np.max(finite))

    def levels(self, n_levels: int) -> List[float]:
        """
        Evenly spaced contour thresholds over the field range.

        Parameters
        ----------
        n_levels : int
            Number of thresholds, >= 1.

        Returns
        -------
        list of float
            Empty when the field has no finite value.
        """
        if n_levels < 1:
            raise ValueError(f"n_levels must be >= 1, got {n_levels}")
        finite = self.data[np.isfinite(self.data)]
        if finite.size == 0:
            return []
        low, high = self._level_bounds(finite)
        return np.linspace(low, high, n_levels).tolist()


def _check_grid(extent: float, width: int, height: int):
    if width < 2 or height < 2:
        raise ValueError(f"Grid must be at least 2x2, got {width}x{height}")
    if not extent > 0.0:
        raise ValueError(f"Grid extent must be > 0, got {extent}")


# ===================================================================
# Iso-range / iso-Doppler
# ===================================================================

class IsoRangeField(GroundGridField):
    """
    Bistatic range |P - OT| + |P - OR| of every ground cell.

    Parameters
    ----------
    tx_position : np.ndarray
        Transmitter position OT (3,).
    rx_position : np.ndarray
        Receiver position OR (3,).
    extent : float
        Grid side length in meters.
    width, height : int
        Grid size. Default 251 x 251.
    """

    def __init__(
        self,
        tx_position: np.ndarray,
        rx_position: np.ndarray,
        extent: float,
        width: int = DEFAULT_GRID_SIZE,
        height: int = DEFAULT_GRID_SIZE
    ):
        points = self.ground_points(extent, width, height)
        data = bistatic_range(points - np.asarray(tx_position), points - np.asarray(rx_position))
        super().__init__(data, extent)

    def _level_bounds(self, finite: np.ndarray) -> Tuple[float, float]:
        # whole meters inside the sampled range
        return float(np.ceil(np.min(finite))), float(np.floor(np.max(finite)))


class IsoDopplerField(GroundGridField):
    """
    Doppler frequency of every ground cell.

    Parameters
    ----------
    tx_position, tx_velocity : np.ndarray
        Transmitter position OT and velocity (3,).
    rx_position, rx_velocity : np.ndarray
        Receiver position OR and velocity (3,).
    wavelength : float
        Carrier wavelength in meters.
    extent : float
        Grid side length in meters.
    width, height : int
        Grid size. Default 251 x 251.
    """

    def __init__(
        self,
        tx_position: np.ndarray,
        tx_velocity: np.ndarray,
        rx_position: np.ndarray,
        rx_velocity: np.ndarray,
        wavelength: float,
        extent: float,
        width: int = DEFAULT_GRID_SIZE,
        height: int = DEFAULT_GRID_SIZE
    ):
        if not wavelength > 0.0:
            raise ValueError(f"Wavelength must be > 0, got {wavelength}")
        points = self.ground_points(extent, width, height)
        data = doppler_frequency(
            wavelength,
            points - np.asarray(tx_position), np.asarray(tx_velocity),
            points - np.asarray(rx_position), np.asarray(rx_velocity),
        )
        super().__init__(data, extent)


def trace_levels(field: ScalarField, levels: List[float]) -> List[Tuple[float, Contours]]:
    """Contours of ``field`` at every threshold of ``levels``."""
    traced = [(float(level), march(field, level)) for level in levels]
    logger.debug("Traced %d levels, %d polylines", len(traced), sum(len(c) for _, c in traced))
    return traced


__all__ = [
    "GroundGridField",
    "IsoRangeField",
    "IsoDopplerField",
    "trace_levels",
]
