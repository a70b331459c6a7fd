"""
Robot Tracking - Command Line Interface
=======================================

Checks a tracker configuration against a joint list and prints the
resulting sampling blocks and per-joint transition noise.

Usage:
------
robot-tracker-setup config/robot_tracker.yaml --joints j1 j2 j3 j4
robot-tracker-setup config/robot_tracker.yaml --joint-file joints.yaml

``--joint-file`` points to a YAML list of joint names in state order.

Author: Robot Tracking Team
Date: October 2026
"""

import argparse
import sys
from typing import List, Optional

import yaml

from core.exceptions import TrackingModelError
from utils.config import ConfigError, load_config
from utils.logging import get_logger, log_error, set_log_level, setup_logging

from .factory import TrackerModelFactory
from .kinematics import JointKinematics


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="robot-tracker-setup",
        description="Assemble robot tracker models from a YAML configuration",
    )
    parser.add_argument("config", help="Tracker YAML configuration")

    joints = parser.add_mutually_exclusive_group(required=True)
    joints.add_argument("--joints", nargs="+", help="Joint names in state order")
    joints.add_argument("--joint-file", help="YAML file with a list of joint names")

    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    parser.add_argument("--log-dir", default="logs")
    parser.add_argument("--no-log-file", action="store_true",
                        help="Log to the console only")
    parser.add_argument("--debug-module", action="append", default=[],
                        help="Logger name to run at DEBUG level (repeatable)")
    return parser.parse_args(argv)


def load_joint_names(path: str) -> List[str]:
    try:
        with open(path, "r") as f:
            names = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read joint file {path}: {e}") from e

    if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
        raise ConfigError(f"Joint file {path} must contain a list of joint names")
    return names


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    setup_logging(args.log_dir, level=args.log_level,
                  file_output=not args.no_log_file)
    for name in args.debug_module:
        set_log_level(name, "DEBUG")

    logger = get_logger(__name__)

    try:
        joint_names = args.joints if args.joints else load_joint_names(args.joint_file)
        kinematics = JointKinematics(joint_names)
        config = load_config(args.config)
        models = TrackerModelFactory(config, kinematics).create()
    except TrackingModelError as e:
        log_error(e, context="Tracker model construction failed")
        return 1

    logger.info(f"Configuration {args.config} is valid")

    print("Sampling blocks:")
    for block in models.sampling_blocks:
        print(f"  [{', '.join(str(i) for i in block)}]")

    print("Joint transition noise:")
    for name, model in zip(joint_names, models.joint_models):
        print(f"  {name}: {model.noise_matrix[0, 0]:g}")

    print(f"Initial occlusion score: {models.initial_occlusion_score:.6f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
