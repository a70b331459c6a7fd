"""
Robot Tracking Tests - Model Factory & CLI
==========================================

Integration tests for:
- TrackerModelFactory (configuration -> models)
- robot-tracker-setup command line entry point

Author: Robot Tracking Team
Date: October 2026
"""

import copy
import io
import logging
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest.mock import Mock

import numpy as np
import yaml

from core.exceptions import (
    InvalidJointSigmaCountError,
    ModelParameterError,
    UnknownJointError,
)
from tracker.factory import DEFAULT_DELTA_TIME, TrackerModelFactory
from tracker.kinematics import JointKinematics
from utils.config import ConfigError

logger = logging.getLogger(__name__)


def make_config():
    return {
        "joint_transition": {"joint_sigmas": [0.1, 0.2, 0.3, 0.4]},
        "pose_transition": {
            "damping": 1.0,
            "noise_covariance": [0.1, 0.2],
            "dimension": 2,
        },
        "observation": {
            "delta_time": 0.1,
            "occlusion": {
                "p_occluded_visible": 0.1,
                "p_occluded_occluded": 0.7,
                "initial_occlusion_prob": 0.1,
                "sigma": 0.2,
            },
        },
        "sampling_blocks": [{"arm": ["j1", "j2"]}],
        "camera_offset": {
            "sampling_blocks": [{"arm": ["j3"]}, {"offset": ["j4"]}],
        },
        "moving_average_update_rate": 0.05,
        "max_kl_divergence": 2.0,
    }


class TestTrackerModelFactory(unittest.TestCase):
    """Test configuration driven model assembly."""

    def setUp(self):
        self.config = make_config()
        self.kinematics = JointKinematics(["j1", "j2", "j3", "j4"])

    def test_create(self):
        models = TrackerModelFactory(self.config, self.kinematics).create()

        self.assertEqual(models.joint_count, 4)
        self.assertEqual(models.sampling_blocks, [[0, 1, 2], [3]])
        self.assertAlmostEqual(models.delta_time, 0.1)
        self.assertAlmostEqual(models.moving_average_update_rate, 0.05)
        self.assertAlmostEqual(models.max_kl_divergence, 2.0)
        self.assertAlmostEqual(models.initial_occlusion_score, np.log(0.1 / 0.9))

        for sigma, model in zip([0.1, 0.2, 0.3, 0.4], models.joint_models):
            self.assertAlmostEqual(model.noise_matrix[0, 0], sigma)

    def test_occlusion_model(self):
        models = TrackerModelFactory(self.config, self.kinematics).create()
        occlusion = models.occlusion_model

        self.assertAlmostEqual(occlusion.sigma, 0.2)
        self.assertAlmostEqual(occlusion.transition_model.steady_state, 0.25)

    def test_pose_process(self):
        models = TrackerModelFactory(self.config, self.kinematics).create()

        self.assertEqual(models.pose_process.dimension, 2)
        np.testing.assert_allclose(models.pose_process.noise_covariance,
                                   np.diag([0.1, 0.2]))

    def test_optional_sections(self):
        del self.config["pose_transition"]
        del self.config["camera_offset"]
        del self.config["observation"]["delta_time"]
        del self.config["observation"]["occlusion"]["sigma"]

        models = TrackerModelFactory(self.config, self.kinematics).create()

        self.assertIsNone(models.pose_process)
        self.assertEqual(models.sampling_blocks, [[0, 1]])
        self.assertEqual(models.delta_time, DEFAULT_DELTA_TIME)
        self.assertEqual(models.occlusion_model.sigma, 0.0)

    def test_sigma_count_mismatch(self):
        kinematics = JointKinematics(["j1", "j2", "j3"])
        self.config["camera_offset"] = {"sampling_blocks": {"arm": ["j3"]}}

        with self.assertRaises(InvalidJointSigmaCountError):
            TrackerModelFactory(self.config, kinematics).create()

    def test_unknown_joint_in_blocks(self):
        self.config["camera_offset"]["sampling_blocks"].append({"offset": ["j9"]})

        with self.assertRaises(UnknownJointError):
            TrackerModelFactory(self.config, self.kinematics).create()

    def test_invalid_occlusion_chain(self):
        self.config["observation"]["occlusion"]["p_occluded_occluded"] = 0.05

        with self.assertRaises(ModelParameterError):
            TrackerModelFactory(self.config, self.kinematics).create()

    def test_config_validated_on_construction(self):
        del self.config["sampling_blocks"]

        with self.assertRaises(ConfigError):
            TrackerModelFactory(self.config, self.kinematics)

    def test_config_not_mutated(self):
        before = copy.deepcopy(self.config)
        TrackerModelFactory(self.config, self.kinematics).create()
        self.assertEqual(self.config, before)

    def test_minimal_kinematics(self):
        """Any object with num_joints / name_to_index will do."""
        names = ["j1", "j2", "j3", "j4"]
        kinematics = Mock(spec=["num_joints", "name_to_index"])
        kinematics.num_joints.return_value = 4
        kinematics.name_to_index.side_effect = names.index

        models = TrackerModelFactory(self.config, kinematics).create()

        self.assertEqual(models.sampling_blocks, [[0, 1, 2], [3]])


class TestCommandLine(unittest.TestCase):
    """Test robot-tracker-setup entry point."""

    def setUp(self):
        root = logging.getLogger()
        self._handlers = root.handlers[:]
        self._level = root.level

        self.tmpdir = tempfile.TemporaryDirectory()
        self.config_path = Path(self.tmpdir.name) / "tracker.yaml"
        with open(self.config_path, "w") as f:
            yaml.safe_dump(make_config(), f)

    def tearDown(self):
        root = logging.getLogger()
        for handler in root.handlers[:]:
            root.removeHandler(handler)
        for handler in self._handlers:
            root.addHandler(handler)
        root.setLevel(self._level)
        self.tmpdir.cleanup()

    def run_cli(self, *args):
        from tracker.cli import main

        output = io.StringIO()
        with redirect_stdout(output):
            code = main([str(self.config_path), *args,
                         "--no-log-file", "--log-level", "CRITICAL"])
        return code, output.getvalue()

    def test_joint_list(self):
        code, output = self.run_cli("--joints", "j1", "j2", "j3", "j4")

        self.assertEqual(code, 0)
        self.assertIn("Sampling blocks:", output)
        self.assertIn("  [0, 1, 2]", output)
        self.assertIn("  [3]", output)
        self.assertIn("  j2: 0.2", output)
        self.assertIn("Initial occlusion score: -2.197225", output)

    def test_joint_file(self):
        joint_file = Path(self.tmpdir.name) / "joints.yaml"
        with open(joint_file, "w") as f:
            yaml.safe_dump(["j1", "j2", "j3", "j4"], f)

        code, output = self.run_cli("--joint-file", str(joint_file))

        self.assertEqual(code, 0)
        self.assertIn("  j4: 0.4", output)

    def test_sigma_mismatch_fails(self):
        code, output = self.run_cli("--joints", "j1", "j2", "j3")

        self.assertEqual(code, 1)
        self.assertEqual(output, "")

    def test_missing_config_fails(self):
        self.config_path = Path(self.tmpdir.name) / "missing.yaml"

        code, _ = self.run_cli("--joints", "j1")

        self.assertEqual(code, 1)

    def test_invalid_joint_file_fails(self):
        joint_file = Path(self.tmpdir.name) / "joints.yaml"
        with open(joint_file, "w") as f:
            yaml.safe_dump({"j1": 0}, f)

        code, _ = self.run_cli("--joint-file", str(joint_file))

        self.assertEqual(code, 1)


if __name__ == "__main__":
    unittest.main()
