# -*- coding: utf-8 -*-
"""
BSAR Visualization - Contour tracing and iso-range / iso-Doppler fields.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

from bsar_toolbox.visualization.contour import (
    Contours,
    ScalarField,
    ArrayField,
    FramedField,
    fraction,
    cell_cases,
    march,
    build_contours,
)

from bsar_toolbox.visualization.iso_fields import (
    GroundGridField,
    IsoRangeField,
    IsoDopplerField,
    trace_levels,
)

__all__ = [
    # Contours
    "Contours",
    "ScalarField",
    "ArrayField",
    "FramedField",
    "fraction",
    "cell_cases",
    "march",
    "build_contours",
    # Iso fields
    "GroundGridField",
    "IsoRangeField",
    "IsoDopplerField",
    "trace_levels",
]
