"""
Robot Tracking Utils Module - Initialization
============================================

Utility functions and helpers for the robot tracking models.

Submodules:
-----------
1. config.py   - Configuration loading and validation
2. logging.py  - Logging setup and diagnostics

Functions:
----------
1. Configuration Management
   - load_config()        - Load YAML config
   - validate_config()    - Validate tracker config structure
   - merge_configs()      - Override defaults
   - get_config_value()   - Dot-path lookup

2. Logging & Diagnostics
   - setup_logging()       - Configure logging
   - get_logger()          - Get module logger
   - log_sampling_blocks() - Log sampling block partition
   - log_joint_models()    - Log per-joint noise

Usage:
------
from utils import load_config, validate_config, setup_logging

setup_logging("logs/", level="INFO")
config = load_config("config/robot_tracker.yaml")
validate_config(config)

Version: 1.0.0
Author: Robot Tracking Team
Date: October 2026
"""

from pathlib import Path

from .config import (
    load_config,
    validate_config,
    merge_configs,
    get_config_value,
    ConfigError,
)

from .logging import (
    StructuredFormatter,
    setup_logging,
    get_logger,
    log_sampling_blocks,
    log_joint_models,
    log_error,
    set_log_level,
)

__all__ = [
    # Config functions
    "load_config",
    "validate_config",
    "merge_configs",
    "get_config_value",
    "ConfigError",
    # Logging functions
    "StructuredFormatter",
    "setup_logging",
    "get_logger",
    "log_sampling_blocks",
    "log_joint_models",
    "log_error",
    "set_log_level",
]

__version__ = "1.0.0"
__author__ = "Robot Tracking Team"
__date__ = "2026-10-19"

# Default paths
PROJECT_ROOT = Path(__file__).parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"
LOGS_DIR = PROJECT_ROOT / "logs"
