"""
Robot Tracking Core Module - Initialization
===========================================

Core module provides the stochastic models used by the joint tracker's
blocked particle filter.

Components:
-----------
1. distributions.py - Gaussian, TruncatedGaussian, BoundedProbabilityTransform
2. processes.py     - DampedWienerProcess, occlusion process models
3. state_space.py   - LinearStateTransitionModel (per-joint dynamics)
4. exceptions.py    - Configuration / index error taxonomy

Usage:
------
from core import DampedWienerProcess, ContinuousOcclusionProcessModel

# Pose dynamics
process = DampedWienerProcess(damping=1.0, noise_covariance=np.eye(6))
x_next = process.condition(dt, x, u).map_gaussian(rng.standard_normal(6))

# Occlusion score of one pixel
occlusion = ContinuousOcclusionProcessModel(0.1, 0.7, sigma=0.2)
score = occlusion.condition(dt, score).map_standard_gaussian(rng.standard_normal())

Version: 1.0.0
Author: Robot Tracking Team
Date: October 2026
"""

from .distributions import (
    BoundedProbabilityTransform,
    Gaussian,
    TruncatedGaussian,
)

from .processes import (
    DampedWienerProcess,
    OcclusionTransitionModel,
    ConditionedOcclusion,
    ContinuousOcclusionProcessModel,
)

from .state_space import (
    LinearStateTransitionModel,
)

from .exceptions import (
    ErrorKind,
    TrackingModelError,
    ConfigurationError,
    InvalidJointSigmaCountError,
    JointIndexOutOfBoundsError,
    UnknownJointError,
    ModelParameterError,
)

__all__ = [
    # Distributions
    "BoundedProbabilityTransform",
    "Gaussian",
    "TruncatedGaussian",
    # Processes
    "DampedWienerProcess",
    "OcclusionTransitionModel",
    "ConditionedOcclusion",
    "ContinuousOcclusionProcessModel",
    # Transitions
    "LinearStateTransitionModel",
    # Errors
    "ErrorKind",
    "TrackingModelError",
    "ConfigurationError",
    "InvalidJointSigmaCountError",
    "JointIndexOutOfBoundsError",
    "UnknownJointError",
    "ModelParameterError",
]

__version__ = "1.0.0"
__author__ = "Robot Tracking Team"
__date__ = "2026-10-19"
