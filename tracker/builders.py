"""
Robot Tracking - Joint Transition Model Builder
===============================================

Builds one independent linear-Gaussian transition model per joint.

Per-joint model (1-dimensional):
--------------------------------
    x_j(k+1) = x_j(k) + σ_j n(k) + u_j(k),     n ~ N(0, 1)

    dynamics matrix A = I
    noise matrix    B = σ_j I
    input matrix    C = I

Validation runs on every ``build`` call, not once at construction, so a
parameter object edited after the builder was created is still checked:

    len(joint_sigmas) != joint_count   -> InvalidJointSigmaCountError
    index < 0 or index >= joint_count  -> JointIndexOutOfBoundsError

``try_build`` performs the same checks but returns the error kind instead
of raising.

Author: Robot Tracking Team
Date: October 2026
"""

import operator
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional
import numpy as np
import logging

from core.exceptions import (
    ErrorKind,
    InvalidJointSigmaCountError,
    JointIndexOutOfBoundsError,
    TrackingModelError,
)
from core.state_space import LinearStateTransitionModel

logger = logging.getLogger(__name__)


@dataclass
class JointTransitionParameters:
    """
    Joint transition parameters.

    Attributes:
        joint_sigmas: Noise scale per joint, indexed by joint index
        joint_count: Number of joints (from kinematics)
    """
    joint_sigmas: List[float] = field(default_factory=list)
    joint_count: int = 0


class BuildResult(NamedTuple):
    """Outcome of ``try_build``: exactly one of model / error is set."""
    model: Optional[LinearStateTransitionModel]
    error: Optional[ErrorKind]

    @property
    def ok(self) -> bool:
        return self.error is None


class JointTransitionModelBuilder:
    """
    Builder of per-joint transition models.

    Example:
    --------
    >>> params = JointTransitionParameters(joint_sigmas=[0.1, 0.2], joint_count=2)
    >>> builder = JointTransitionModelBuilder(params)
    >>> builder.build(1).noise_matrix
    array([[0.2]])
    """

    STATE_DIMENSION = 1
    NOISE_DIMENSION = 1
    INPUT_DIMENSION = 1

    def __init__(self, parameters: JointTransitionParameters):
        self.parameters = parameters

    def validate_sigma_count(self) -> None:
        sigma_count = len(self.parameters.joint_sigmas)
        if sigma_count != self.parameters.joint_count:
            raise InvalidJointSigmaCountError(sigma_count, self.parameters.joint_count)

    def validate(self, joint_index: int) -> None:
        """Raise if a model for ``joint_index`` cannot be built."""
        self.validate_sigma_count()

        joint_count = self.parameters.joint_count
        joint_index = operator.index(joint_index)
        if joint_index < 0 or joint_index >= joint_count:
            raise JointIndexOutOfBoundsError(joint_index, joint_count)

    def build(self, joint_index: int) -> LinearStateTransitionModel:
        """
        Build the transition model of one joint.

        Args:
            joint_index: Index of the joint in the state vector

        Returns:
            1-dimensional LinearStateTransitionModel

        Raises:
            InvalidJointSigmaCountError: sigma list length != joint count
            JointIndexOutOfBoundsError: index outside [0, joint_count)
        """
        self.validate(joint_index)

        sigma = float(self.parameters.joint_sigmas[joint_index])

        A = np.eye(self.STATE_DIMENSION)
        B = sigma * np.eye(self.STATE_DIMENSION, self.NOISE_DIMENSION)
        C = np.eye(self.STATE_DIMENSION, self.INPUT_DIMENSION)

        logger.debug(f"Built transition model for joint {joint_index}: sigma={sigma}")
        return LinearStateTransitionModel(A, B, C)

    def try_build(self, joint_index: int) -> BuildResult:
        """Like ``build`` but returns the error kind instead of raising."""
        try:
            return BuildResult(self.build(joint_index), None)
        except TrackingModelError as e:
            logger.debug(f"Joint {joint_index} transition model rejected: {e}")
            return BuildResult(None, e.kind)

    def build_all(self) -> List[LinearStateTransitionModel]:
        """Build models for every joint in index order."""
        self.validate_sigma_count()
        models = [self.build(i) for i in range(self.parameters.joint_count)]
        logger.info(f"Built {len(models)} joint transition models")
        return models
