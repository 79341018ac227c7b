# -*- coding: utf-8 -*-
"""
Contour Tracing - Marching squares iso-lines of a 2D scalar field.

Cells whose four corner values straddle a threshold produce line segments
with linearly interpolated endpoints. Segments are indexed by the integer
part of their start point and then chained greedily into polylines,
starting preferably on the field boundary so that open paths are not
split.

Notes
-----
The saddle cases (5 and 10) always emit the same pair of segments. No
cell-center disambiguation is performed, so contours of a saddle may
connect differently from the underlying surface.

Contours are returned in field index space: x along columns, y along
rows.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

# Standard library
import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Dict, List, Tuple

# Third-party
import numpy as np

logger = logging.getLogger(__name__)

Point = Tuple[float, float]

Contours = List[List[Point]]

SegmentsMap = Dict[Tuple[int, int], List[Tuple[Point, Point]]]

# Offset added to the border value of a framed field so that border cells
# are strictly above a threshold equal to it.
FRAME_EPSILON = 1e-9


# ===================================================================
# Scalar fields
# ===================================================================

class ScalarField(ABC):
    """ABC for scalar fields sampled on an integer (x, y) grid."""

    @abstractmethod
    def dimensions(self) -> Tuple[int, int]:
        """Return (width, height) of the field."""

    @abstractmethod
    def z_at(self, x: int, y: int) -> float:
        """Value at column ``x`` and row ``y``, both inside ``dimensions()``."""

    def as_array(self) -> np.ndarray:
        """
        All field values as a (height, width) array.

        Subclasses holding their samples in memory should override this.
        """
        width, height = self.dimensions()
        return np.array(
            [[self.z_at(x, y) for x in range(width)] for y in range(height)],
            dtype=np.float64
        ).reshape(height, width)

    def framed(self, border_z: float) -> "FramedField":
        """View of this field with every border cell set above ``border_z``."""
        return FramedField(self, border_z)


class ArrayField(ScalarField):
    """
    Scalar field backed by a 2D array.

    Parameters
    ----------
    data : np.ndarray
        Values with shape (height, width); rows are y, columns are x.
    """

    def __init__(self, data: np.ndarray):
        data = np.asarray(data, dtype=np.float64)
        if data.ndim != 2:
            raise ValueError(f"Field data must be 2D, got shape {data.shape}")
        self._data = data

    def dimensions(self) -> Tuple[int, int]:
        return self._data.shape[1], self._data.shape[0]

    def z_at(self, x: int, y: int) -> float:
        return float(self._data[y, x])

    def as_array(self) -> np.ndarray:
        return self._data

    @property
    def data(self) -> np.ndarray:
        return self._data


class FramedField(ScalarField):
    """Wrap a field so that its border cells read ``border_z + 1e-9``."""

    def __init__(self, field: ScalarField, border_z: float):
        self._field = field
        self.border_z = float(border_z)

    def dimensions(self) -> Tuple[int, int]:
        return self._field.dimensions()

    def z_at(self, x: int, y: int) -> float:
        width, height = self.dimensions()
        if x == 0 or x == max(width - 1, 0) or y == 0 or y == max(height - 1, 0):
            return self.border_z + FRAME_EPSILON
        return self._field.z_at(x, y)

    def as_array(self) -> np.ndarray:
        framed = np.array(self._field.as_array(), dtype=np.float64, copy=True)
        if framed.size:
            border = self.border_z + FRAME_EPSILON
            framed[0, :] = border
            framed[-1, :] = border
            framed[:, 0] = border
            framed[:, -1] = border
        return framed


# ===================================================================
# Marching squares
# ===================================================================

def fraction(z: float, z0: float, z1: float) -> float:
    """
    Position of ``z`` between ``z0`` and ``z1`` as a fraction in [0, 1].

    Returns 0.5 when both ends are equal.
    """
    if z0 == z1:
        return 0.5
    t = (z - z0) / (z1 - z0)
    return min(max(t, 0.0), 1.0)


def cell_cases(values: np.ndarray, z: float) -> np.ndarray:
    """
    Marching squares case code of every 2x2 cell.

    Corners above ``z`` set bits: bottom-left 1, bottom-right 2,
    upper-right 4, upper-left 8.

    Parameters
    ----------
    values : np.ndarray
        Field values (height, width).
    z : float
        Threshold.

    Returns
    -------
    np.ndarray
        Integer codes (height - 1, width - 1). Cells with a non-finite
        corner get code 0 and produce no segment.
    """
    finite = np.isfinite(values)
    with np.errstate(invalid='ignore'):
        above = values > z
    cases = (above[1:, :-1] * 1
             | above[1:, 1:] * 2
             | above[:-1, 1:] * 4
             | above[:-1, :-1] * 8)
    cases[~(finite[1:, :-1] & finite[1:, 1:] & finite[:-1, 1:] & finite[:-1, :-1])] = 0
    return cases


def march(field: ScalarField, z: float) -> Contours:
    """
    Find the iso-lines of a scalar field at threshold ``z``.

    Parameters
    ----------
    field : ScalarField
        Field to contour. Frame it with ``field.framed(border)`` to get
        only closed contours.
    z : float
        Threshold value.

    Returns
    -------
    Contours
        List of polylines, each a list of (x, y) points in field index
        space. Empty for fields smaller than 2x2 or with no crossing.
        Cells touching a NaN or infinite value are skipped, so contours
        stop at the edge of the undefined region.
    """
    width, height = field.dimensions()
    if width < 2 or height < 2:
        return []

    values = field.as_array()
    cases = cell_cases(values, z)
    rows = values.tolist()

    segments: SegmentsMap = defaultdict(list)

    def add_seg(start: Point, end: Point):
        segments[(int(start[0]), int(start[1]))].append((start, end))

    for y, x in zip(*np.nonzero((cases != 0) & (cases != 15))):
        y, x = int(y), int(x)
        case = int(cases[y, x])

        ulz, urz = rows[y][x], rows[y][x + 1]
        blz, brz = rows[y + 1][x], rows[y + 1][x + 1]
        fx, fy = float(x), float(y)

        top = (fx + fraction(z, ulz, urz), fy)
        bottom = (fx + fraction(z, blz, brz), fy + 1.0)
        left = (fx, fy + fraction(z, ulz, blz))
        right = (fx + 1.0, fy + fraction(z, urz, brz))

        if case == 1:
            add_seg(bottom, left)
        elif case == 2:
            add_seg(right, bottom)
        elif case == 3:
            add_seg(right, left)
        elif case == 4:
            add_seg(top, right)
        elif case == 5:
            add_seg(top, left)
            add_seg(bottom, right)
        elif case == 6:
            add_seg(top, bottom)
        elif case == 7:
            add_seg(top, left)
        elif case == 8:
            add_seg(left, top)
        elif case == 9:
            add_seg(bottom, top)
        elif case == 10:
            add_seg(left, bottom)
            add_seg(right, top)
        elif case == 11:
            add_seg(right, top)
        elif case == 12:
            add_seg(left, right)
        elif case == 13:
            add_seg(bottom, right)
        elif case == 14:
            add_seg(left, bottom)

    return build_contours(dict(segments), (width, height))


def build_contours(segments: SegmentsMap, dimensions: Tuple[int, int]) -> Contours:
    """
    Chain segments into polylines, consuming ``segments``.

    Each polyline starts from a segment on the field boundary when one
    remains, then repeatedly appends the segment starting exactly at its
    current end.

    Parameters
    ----------
    segments : SegmentsMap
        Segments keyed by the integer part of their start point.
    dimensions : tuple of int
        Field (width, height).

    Returns
    -------
    Contours
    """
    width, height = dimensions
    boundaries = {
        k for k in segments
        if k[0] == 0 or k[0] == width - 1 or k[1] == 0 or k[1] == height - 1
    }
    n_segments = sum(len(v) for v in segments.values())
    contours: Contours = []

    while segments:
        first_k = next(iter(boundaries)) if boundaries else next(iter(segments))
        bucket = segments.get(first_k)
        if not bucket:
            boundaries.discard(first_k)
            segments.pop(first_k, None)
            continue

        start, end = bucket.pop()
        if not bucket:
            del segments[first_k]
            boundaries.discard(first_k)

        contour = [start, end]
        while True:
            prev = contour[-1]
            key = (int(prev[0]), int(prev[1]))
            bucket = segments.get(key)
            if not bucket:
                break

            index = next((i for i, (s, _) in enumerate(bucket) if s == prev), None)
            if index is None:
                break

            contour.append(bucket[index][1])
            bucket[index] = bucket[-1]
            bucket.pop()
            if not bucket:
                del segments[key]
                boundaries.discard(key)

        contours.append(contour)

    logger.debug("Chained %d segments into %d contours", n_segments, len(contours))
    return contours


__all__ = [
    "Contours",
    "ScalarField",
    "ArrayField",
    "FramedField",
    "fraction",
    "cell_cases",
    "march",
    "build_contours",
]
