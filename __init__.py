"""
Robot Joint Tracking Models
===========================

Stochastic models and construction logic for blocked particle filtering
of robot joint states.

Modules:
--------
- core: Distributions and process models (damped Wiener, occlusion,
        linear joint transitions)
- tracker: Kinematics interface, joint model builder, sampling blocks,
           configuration factory and CLI
- utils: Configuration & logging utilities
- tests: Unit and integration tests

Quick Start:
-----------
from utils import load_config, setup_logging
from tracker import JointKinematics, TrackerModelFactory

setup_logging("logs/")
config = load_config("config/robot_tracker.yaml")
models = TrackerModelFactory(config, JointKinematics(joint_names)).create()

for block in models.sampling_blocks:
    ...  # resample joints of this block

Version: 1.0.0
Author: Robot Tracking Team
Date: October 2026
"""

__version__ = "1.0.0"
__author__ = "Robot Tracking Team"
__date__ = "2026-10-19"
__all__ = [
    "core",
    "tracker",
    "tests",
    "utils",
]
