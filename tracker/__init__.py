"""
Robot Tracking Tracker Module - Initialization
==============================================

Construction-time logic that configures the blocked particle filter.

Components:
-----------
1. kinematics.py       - Kinematics interface, JointKinematics, RobotState
2. builders.py         - JointTransitionModelBuilder (per-joint models)
3. sampling_blocks.py  - SamplingBlockAssembler (merge / resolve)
4. factory.py          - TrackerModelFactory (config -> models)
5. cli.py              - robot-tracker-setup command

Usage:
------
from tracker import JointKinematics, TrackerModelFactory
from utils import load_config

kinematics = JointKinematics(["shoulder", "elbow", "wrist"])
models = TrackerModelFactory(load_config("config/robot_tracker.yaml"),
                             kinematics).create()

Version: 1.0.0
Author: Robot Tracking Team
Date: October 2026
"""

from .kinematics import (
    Kinematics,
    JointKinematics,
    RobotState,
)

from .builders import (
    JointTransitionParameters,
    JointTransitionModelBuilder,
    BuildResult,
)

from .sampling_blocks import (
    SamplingBlockAssembler,
    normalize_definition,
)

from .factory import (
    TrackerModels,
    TrackerModelFactory,
)

__all__ = [
    # Kinematics
    "Kinematics",
    "JointKinematics",
    "RobotState",
    # Builders
    "JointTransitionParameters",
    "JointTransitionModelBuilder",
    "BuildResult",
    # Sampling blocks
    "SamplingBlockAssembler",
    "normalize_definition",
    # Factory
    "TrackerModels",
    "TrackerModelFactory",
]

__version__ = "1.0.0"
__author__ = "Robot Tracking Team"
__date__ = "2026-10-19"
