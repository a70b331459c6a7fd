"""
Robot Tracking - Kinematics Interface
=====================================

Narrow interface to the robot kinematics collaborator.

URDF parsing and forward kinematics live outside this package. The models
here only need to know how many joints there are and how joint names map
to state indices:

    num_joints()            -> int
    name_to_index(name)     -> int   (raises on unknown names)

The kinematics object is passed explicitly to everything that needs it;
there is no process-wide kinematics instance.

Author: Robot Tracking Team
Date: October 2026
"""

import numpy as np
from typing import Dict, List, Optional, Protocol, Sequence, runtime_checkable
import logging

from core.exceptions import ConfigurationError, UnknownJointError

logger = logging.getLogger(__name__)


@runtime_checkable
class Kinematics(Protocol):
    """Kinematics collaborator as seen by the model builders."""

    def num_joints(self) -> int:
        ...

    def name_to_index(self, joint_name: str) -> int:
        ...


class JointKinematics:
    """
    Minimal kinematics backed by an ordered joint-name list.

    The index of a joint is its position in ``joint_names``, matching the
    layout of the joint state vector.

    Example:
    --------
    >>> kinematics = JointKinematics(["shoulder", "elbow", "wrist"])
    >>> kinematics.num_joints()
    3
    >>> kinematics.name_to_index("elbow")
    1
    """

    def __init__(self, joint_names: Sequence[str]):
        if isinstance(joint_names, str):
            raise ConfigurationError("joint_names must be a sequence of names, not a string")

        names = list(joint_names)
        index = {}
        for i, name in enumerate(names):
            if name in index:
                raise ConfigurationError(f"Duplicate joint name: {name!r}")
            index[name] = i

        self._joint_names = names
        self._index = index
        logger.debug(f"Kinematics with {len(names)} joints")

    def num_joints(self) -> int:
        return len(self._joint_names)

    def name_to_index(self, joint_name: str) -> int:
        try:
            return self._index[joint_name]
        except KeyError:
            raise UnknownJointError(joint_name) from None

    def index_to_name(self, joint_index: int) -> str:
        return self._joint_names[joint_index]

    def joint_names(self) -> List[str]:
        return list(self._joint_names)


class RobotState:
    """
    Joint state vector bound to the kinematics that defines its layout.

    Args:
        vector: Joint values, one per kinematic joint
        kinematics: Kinematics collaborator
    """

    def __init__(self, vector, kinematics: Kinematics):
        vector = np.array(vector, dtype=float).reshape(-1)
        if vector.shape[0] != kinematics.num_joints():
            raise ConfigurationError(
                f"State has {vector.shape[0]} entries, "
                f"kinematics has {kinematics.num_joints()} joints"
            )
        vector.setflags(write=False)

        self.vector = vector
        self.kinematics = kinematics

    def __len__(self) -> int:
        return self.vector.shape[0]

    def joint(self, joint_name: str) -> float:
        """Value of a single named joint."""
        return float(self.vector[self.kinematics.name_to_index(joint_name)])

    def joint_positions(self, joint_names: Optional[Sequence[str]] = None) -> Dict[str, float]:
        """
        Map joint names to their values.

        Args:
            joint_names: Joints to report; defaults to all joints if the
                kinematics can list them

        Returns:
            Dictionary {joint_name: value}
        """
        if joint_names is None:
            if not hasattr(self.kinematics, "joint_names"):
                raise ConfigurationError(
                    "Kinematics cannot list joint names; pass joint_names explicitly"
                )
            joint_names = self.kinematics.joint_names()

        return {name: self.joint(name) for name in joint_names}
