"""
Robot Tracking Tests - Joint Transition Builder
===============================================

Unit tests for:
- LinearStateTransitionModel (A x + B n + C u)
- JointTransitionModelBuilder (validation, try_build, build_all)
- JointKinematics / RobotState

Author: Robot Tracking Team
Date: October 2026
"""

import unittest
import numpy as np
import logging

from core.state_space import LinearStateTransitionModel
from core.exceptions import (
    ConfigurationError,
    ErrorKind,
    InvalidJointSigmaCountError,
    JointIndexOutOfBoundsError,
    ModelParameterError,
    UnknownJointError,
)
from tracker.builders import (
    BuildResult,
    JointTransitionModelBuilder,
    JointTransitionParameters,
)
from tracker.kinematics import JointKinematics, Kinematics, RobotState

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class TestLinearStateTransitionModel(unittest.TestCase):
    """Test linear transition arithmetic."""

    def setUp(self):
        self.model = LinearStateTransitionModel(
            dynamics_matrix=np.array([[1.0, 0.1],
                                      [0.0, 1.0]]),
            noise_matrix=np.array([[0.5],
                                   [1.0]]),
            input_matrix=np.array([[0.0],
                                   [2.0]]),
        )

    def test_dimensions(self):
        self.assertEqual(self.model.state_dimension, 2)
        self.assertEqual(self.model.noise_dimension, 1)
        self.assertEqual(self.model.input_dimension, 1)

    def test_expected_state(self):
        np.testing.assert_allclose(self.model.expected_state([1.0, 2.0], u=[0.5]),
                                   [1.2, 3.0])
        np.testing.assert_allclose(self.model.expected_state([1.0, 2.0]), [1.2, 2.0])

    def test_state_with_noise(self):
        np.testing.assert_allclose(self.model.state([1.0, 2.0], noise=[2.0], u=[0.5]),
                                   [2.2, 5.0])

    def test_condition(self):
        g = self.model.condition([1.0, 2.0])

        np.testing.assert_allclose(g.mean, [1.2, 2.0])
        np.testing.assert_allclose(g.covariance, [[0.25, 0.5],
                                                  [0.5, 1.0]])

    def test_matrices_read_only(self):
        with self.assertRaises(ValueError):
            self.model.dynamics_matrix[0, 0] = 5.0

    def test_default_input_matrix(self):
        model = LinearStateTransitionModel(np.eye(2), np.eye(2))
        np.testing.assert_array_equal(model.input_matrix, np.zeros((2, 1)))

    def test_shape_validation(self):
        with self.assertRaises(ModelParameterError):
            LinearStateTransitionModel(np.ones((2, 3)), np.eye(2))
        with self.assertRaises(ModelParameterError):
            LinearStateTransitionModel(np.eye(2), np.eye(3))
        with self.assertRaises(ModelParameterError):
            LinearStateTransitionModel(np.eye(2), np.eye(2), np.eye(3))


class TestJointTransitionModelBuilder(unittest.TestCase):
    """Test per-joint model construction."""

    def setUp(self):
        self.params = JointTransitionParameters(joint_sigmas=[0.1, 0.2, 0.3],
                                                joint_count=3)
        self.builder = JointTransitionModelBuilder(self.params)

    def test_build_matrices(self):
        model = self.builder.build(1)

        np.testing.assert_array_equal(model.dynamics_matrix, np.eye(1))
        np.testing.assert_allclose(model.noise_matrix, 0.2 * np.eye(1))
        np.testing.assert_array_equal(model.input_matrix, np.eye(1))
        np.testing.assert_allclose(model.noise_covariance, [[0.04]])

    def test_random_walk_step(self):
        """x' = x + σ n + u for every joint."""
        model = self.builder.build(2)
        np.testing.assert_allclose(model.state([1.0], noise=[2.0], u=[-0.5]), [1.1])

    def test_sigma_count_mismatch(self):
        params = JointTransitionParameters(joint_sigmas=[0.1, 0.2], joint_count=3)
        builder = JointTransitionModelBuilder(params)

        # every index fails, valid or not
        for joint_index in (0, 1, 2, 5, -1):
            with self.assertRaises(InvalidJointSigmaCountError) as ctx:
                builder.build(joint_index)
            self.assertEqual(ctx.exception.sigma_count, 2)
            self.assertEqual(ctx.exception.joint_count, 3)

    def test_index_out_of_bounds(self):
        for joint_index in (-1, 3, 10):
            with self.assertRaises(JointIndexOutOfBoundsError):
                self.builder.build(joint_index)

    def test_out_of_bounds_is_index_error(self):
        with self.assertRaises(IndexError):
            self.builder.build(3)

    def test_validation_on_every_build(self):
        """Parameters edited after construction are re-validated."""
        self.builder.build(0)
        self.params.joint_sigmas.append(0.4)

        with self.assertRaises(InvalidJointSigmaCountError):
            self.builder.build(0)

    def test_non_integer_index(self):
        with self.assertRaises(TypeError):
            self.builder.build(1.5)

    def test_try_build(self):
        result = self.builder.try_build(0)
        self.assertIsInstance(result, BuildResult)
        self.assertTrue(result.ok)
        self.assertIsNotNone(result.model)

        result = self.builder.try_build(3)
        self.assertFalse(result.ok)
        self.assertIsNone(result.model)
        self.assertEqual(result.error, ErrorKind.JOINT_INDEX_OUT_OF_BOUNDS)

        bad = JointTransitionModelBuilder(
            JointTransitionParameters(joint_sigmas=[0.1], joint_count=2))
        self.assertEqual(bad.try_build(0).error, ErrorKind.INVALID_JOINT_SIGMA_COUNT)

    def test_build_all(self):
        models = self.builder.build_all()

        self.assertEqual(len(models), 3)
        for sigma, model in zip([0.1, 0.2, 0.3], models):
            self.assertAlmostEqual(model.noise_matrix[0, 0], sigma)

    def test_build_all_validates_empty(self):
        builder = JointTransitionModelBuilder(
            JointTransitionParameters(joint_sigmas=[0.1], joint_count=0))

        with self.assertRaises(InvalidJointSigmaCountError):
            builder.build_all()

    def test_models_are_independent(self):
        first = self.builder.build(0)
        second = self.builder.build(0)
        self.assertIsNot(first, second)


class TestKinematics(unittest.TestCase):
    """Test kinematics collaborator and robot state."""

    def setUp(self):
        self.kinematics = JointKinematics(["shoulder", "elbow", "wrist"])

    def test_protocol(self):
        self.assertIsInstance(self.kinematics, Kinematics)

    def test_indices(self):
        self.assertEqual(self.kinematics.num_joints(), 3)
        self.assertEqual(self.kinematics.name_to_index("wrist"), 2)
        self.assertEqual(self.kinematics.index_to_name(1), "elbow")

    def test_unknown_joint(self):
        with self.assertRaises(UnknownJointError) as ctx:
            self.kinematics.name_to_index("ankle")

        self.assertEqual(ctx.exception.kind, ErrorKind.UNKNOWN_JOINT)
        self.assertIn("ankle", str(ctx.exception))

    def test_unknown_joint_is_key_error(self):
        with self.assertRaises(KeyError):
            self.kinematics.name_to_index("ankle")

    def test_invalid_names(self):
        with self.assertRaises(ConfigurationError):
            JointKinematics("shoulder")
        with self.assertRaises(ConfigurationError):
            JointKinematics(["a", "b", "a"])

    def test_robot_state(self):
        state = RobotState([0.1, 0.2, 0.3], self.kinematics)

        self.assertEqual(len(state), 3)
        self.assertAlmostEqual(state.joint("elbow"), 0.2)
        self.assertEqual(state.joint_positions(["wrist"]), {"wrist": 0.3})
        self.assertEqual(list(state.joint_positions()), ["shoulder", "elbow", "wrist"])

    def test_robot_state_read_only(self):
        state = RobotState([0.1, 0.2, 0.3], self.kinematics)
        with self.assertRaises(ValueError):
            state.vector[0] = 1.0

    def test_robot_state_length_mismatch(self):
        with self.assertRaises(ConfigurationError):
            RobotState([0.1, 0.2], self.kinematics)


if __name__ == "__main__":
    unittest.main()
