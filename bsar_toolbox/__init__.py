# -*- coding: utf-8 -*-
"""
bsar-toolbox - Bistatic SAR acquisition geometry.

Earth model and local frames, antenna footprints, bistatic SAR
resolutions and Doppler, and iso-range / iso-Doppler contours, evaluated
with NumPy/SciPy.

Modules
-------
geometry : Ellipsoid, local frames, platforms, footprints and bistatic figures
visualization : Marching squares contours and iso-range / iso-Doppler fields
config : Scenario configuration
scenario : Snapshot pipeline evaluating a full scenario
utils : Constants and helper functions

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

__version__ = "0.1.0"

from bsar_toolbox import geometry, visualization, utils
from bsar_toolbox.config import ScenarioConfig
from bsar_toolbox.scenario import ScenarioSnapshot, compute_scenario

__all__ = [
    "geometry",
    "visualization",
    "utils",
    "ScenarioConfig",
    "ScenarioSnapshot",
    "compute_scenario",
    "__version__",
]
