"""
Robot Tracking Core - Error Taxonomy
====================================

Exceptions raised while validating configuration and building models.

Hierarchy:
----------
TrackingModelError
├── ConfigurationError
│   ├── InvalidJointSigmaCountError   (len(joint_sigmas) != joint_count)
│   ├── UnknownJointError             (joint name not known to kinematics)
│   └── ModelParameterError           (damping, covariance, probabilities...)
└── JointIndexOutOfBoundsError        (joint index outside [0, joint_count))

Every exception carries an ``ErrorKind`` so callers can branch on the kind
of failure without string matching. Numeric edge cases (vanishing damping,
zero elapsed time, zero occlusion sigma) are not errors and never raise.

Author: Robot Tracking Team
Date: October 2026
"""

from enum import Enum


class ErrorKind(Enum):
    """Kinds of construction-time failures."""
    INVALID_JOINT_SIGMA_COUNT = "invalid_joint_sigma_count"
    JOINT_INDEX_OUT_OF_BOUNDS = "joint_index_out_of_bounds"
    UNKNOWN_JOINT = "unknown_joint"
    INVALID_PARAMETER = "invalid_parameter"
    INVALID_CONFIGURATION = "invalid_configuration"


class TrackingModelError(Exception):
    """Base class for all model construction errors."""
    kind = None


class ConfigurationError(TrackingModelError):
    """Configuration values do not describe a valid model."""
    kind = ErrorKind.INVALID_CONFIGURATION


class InvalidJointSigmaCountError(ConfigurationError):
    """Number of joint sigmas does not match the number of joints."""
    kind = ErrorKind.INVALID_JOINT_SIGMA_COUNT

    def __init__(self, sigma_count: int, joint_count: int):
        self.sigma_count = sigma_count
        self.joint_count = joint_count
        super().__init__(
            f"Number of joint sigmas ({sigma_count}) does not match "
            f"joint count ({joint_count})"
        )


class JointIndexOutOfBoundsError(TrackingModelError, IndexError):
    """Joint index outside the valid range."""
    kind = ErrorKind.JOINT_INDEX_OUT_OF_BOUNDS

    def __init__(self, joint_index: int, joint_count: int):
        self.joint_index = joint_index
        self.joint_count = joint_count
        super().__init__(
            f"Joint index {joint_index} out of bounds [0, {joint_count})"
        )


class UnknownJointError(ConfigurationError, KeyError):
    """Joint name has no kinematic index."""
    kind = ErrorKind.UNKNOWN_JOINT

    def __init__(self, joint_name: str):
        self.joint_name = joint_name
        super().__init__(f"Unknown joint name: {joint_name!r}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class ModelParameterError(ConfigurationError, ValueError):
    """Invalid numeric model parameter."""
    kind = ErrorKind.INVALID_PARAMETER
