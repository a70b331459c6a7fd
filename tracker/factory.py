"""
Robot Tracking - Tracker Model Factory
======================================

Assembles every model the blocked particle filter needs from an already
parsed configuration and the kinematics collaborator.

Construction Order:
-------------------
1. Validate configuration (utils.config.validate_config)
2. Joint transition: JointTransitionParameters(joint_sigmas, num_joints)
   -> JointTransitionModelBuilder -> one model per joint
3. Observation: ContinuousOcclusionProcessModel and the initial occlusion
   score logit(initial_occlusion_prob)
4. Pose dynamics (optional): DampedWienerProcess
5. Sampling blocks: merge(sampling_blocks, camera_offset.sampling_blocks)
   -> resolve against kinematics

Any configuration error aborts construction.

Example:
--------
>>> config = load_config("config/robot_tracker.yaml")
>>> kinematics = JointKinematics(joint_names)
>>> models = TrackerModelFactory(config, kinematics).create()
>>> models.sampling_blocks
[[0, 1, 2], [3]]

Author: Robot Tracking Team
Date: October 2026
"""

from typing import Any, Dict, List, Optional
import numpy as np
import logging

from core.distributions import BoundedProbabilityTransform
from core.processes import ContinuousOcclusionProcessModel, DampedWienerProcess
from core.state_space import LinearStateTransitionModel
from utils.config import get_config_value, validate_config
from utils.logging import log_joint_models, log_sampling_blocks

from .builders import JointTransitionModelBuilder, JointTransitionParameters
from .kinematics import Kinematics
from .sampling_blocks import SamplingBlockAssembler

logger = logging.getLogger(__name__)

# 6 Hz depth camera frame period
DEFAULT_DELTA_TIME = 1.0 / 6.0


class TrackerModels:
    """Models and parameters handed to the outer particle filter."""

    def __init__(self,
                 transition_builder: JointTransitionModelBuilder,
                 joint_models: List[LinearStateTransitionModel],
                 occlusion_model: ContinuousOcclusionProcessModel,
                 initial_occlusion_score: float,
                 sampling_blocks: List[List[int]],
                 pose_process: Optional[DampedWienerProcess] = None,
                 delta_time: float = DEFAULT_DELTA_TIME,
                 moving_average_update_rate: float = 0.0,
                 max_kl_divergence: float = 0.0):
        self.transition_builder = transition_builder
        self.joint_models = joint_models
        self.occlusion_model = occlusion_model
        self.initial_occlusion_score = initial_occlusion_score
        self.sampling_blocks = sampling_blocks
        self.pose_process = pose_process
        self.delta_time = delta_time
        self.moving_average_update_rate = moving_average_update_rate
        self.max_kl_divergence = max_kl_divergence

    @property
    def joint_count(self) -> int:
        return len(self.joint_models)


class TrackerModelFactory:
    """
    Creates tracker models from configuration.

    Args:
        config: Parsed configuration dictionary
        kinematics: Kinematics collaborator (num_joints, name_to_index)
    """

    def __init__(self, config: Dict[str, Any], kinematics: Kinematics):
        validate_config(config)

        self.config = config
        self.kinematics = kinematics
        self.assembler = SamplingBlockAssembler()
        self.transform = BoundedProbabilityTransform()

    def create_transition_builder(self) -> JointTransitionModelBuilder:
        parameters = JointTransitionParameters(
            joint_sigmas=list(get_config_value(self.config, "joint_transition.joint_sigmas")),
            joint_count=self.kinematics.num_joints(),
        )
        logger.info(
            f"Transition parameters loaded: {len(parameters.joint_sigmas)} sigmas, "
            f"{parameters.joint_count} joints"
        )
        return JointTransitionModelBuilder(parameters)

    def create_occlusion_model(self) -> ContinuousOcclusionProcessModel:
        occlusion = get_config_value(self.config, "observation.occlusion")
        model = ContinuousOcclusionProcessModel(
            p_occluded_visible=occlusion["p_occluded_visible"],
            p_occluded_occluded=occlusion["p_occluded_occluded"],
            sigma=occlusion.get("sigma", 0.0),
            transform=self.transform,
        )
        logger.info(
            f"Occlusion model created: p_ov={model.transition_model.p_occluded_visible}, "
            f"p_oo={model.transition_model.p_occluded_occluded}, sigma={model.sigma}"
        )
        return model

    def initial_occlusion_score(self) -> float:
        """Initial occlusion probability in logit space."""
        probability = get_config_value(
            self.config, "observation.occlusion.initial_occlusion_prob")
        return self.transform.logit(probability)

    def create_pose_process(self) -> Optional[DampedWienerProcess]:
        section = self.config.get("pose_transition")
        if section is None:
            return None

        noise_covariance = np.asarray(section["noise_covariance"], dtype=float)
        if noise_covariance.ndim == 1:
            # diagonal given as a list
            noise_covariance = np.diag(noise_covariance)

        process = DampedWienerProcess(
            damping=section["damping"],
            noise_covariance=noise_covariance,
            dimension=section.get("dimension"),
        )
        logger.info(
            f"Pose process created: damping={section['damping']}, "
            f"dimension={process.dimension}"
        )
        return process

    def create_sampling_blocks(self) -> List[List[int]]:
        merged = self.assembler.merge(
            self.config["sampling_blocks"],
            get_config_value(self.config, "camera_offset.sampling_blocks"),
        )
        blocks = self.assembler.resolve(merged, self.kinematics)
        log_sampling_blocks(blocks, list(merged))
        return blocks

    def create(self) -> TrackerModels:
        """Build all tracker models."""
        transition_builder = self.create_transition_builder()
        joint_models = transition_builder.build_all()
        log_joint_models(transition_builder.parameters.joint_sigmas,
                         self._joint_names())

        models = TrackerModels(
            transition_builder=transition_builder,
            joint_models=joint_models,
            occlusion_model=self.create_occlusion_model(),
            initial_occlusion_score=self.initial_occlusion_score(),
            sampling_blocks=self.create_sampling_blocks(),
            pose_process=self.create_pose_process(),
            delta_time=get_config_value(self.config, "observation.delta_time",
                                        DEFAULT_DELTA_TIME),
            moving_average_update_rate=self.config.get("moving_average_update_rate", 0.0),
            max_kl_divergence=self.config.get("max_kl_divergence", 0.0),
        )

        logger.info(
            f"Tracker models created: {models.joint_count} joints, "
            f"{len(models.sampling_blocks)} sampling blocks"
        )
        return models

    def _joint_names(self) -> Optional[List[str]]:
        if hasattr(self.kinematics, "joint_names"):
            return self.kinematics.joint_names()
        return None
