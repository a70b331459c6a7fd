"""
Robot Tracking Utils - Configuration Management
===============================================

Configuration loading, validation, and merging utilities.

Features:
---------
1. YAML Loading
   - Load configuration from YAML files
   - Environment variable substitution (${VAR:default})

2. Validation
   - Required sections and keys
   - Type checking
   - Probability / positivity bounds

3. Merging
   - Override defaults with custom configs
   - Deep merge of nested sections

Configuration Structure:
-----------------------
joint_transition:
  joint_sigmas: [0.01, 0.01, 0.02]

pose_transition:             # optional
  damping: 1.0
  noise_covariance: 0.001    # scalar, diagonal list or full matrix
  dimension: 6

observation:
  delta_time: 0.1666
  occlusion:
    p_occluded_visible: 0.1
    p_occluded_occluded: 0.7
    initial_occlusion_prob: 0.1
    sigma: 0.2               # optional, default 0

sampling_blocks:
  - arm: [shoulder, elbow]
  - hand: [wrist]

camera_offset:               # optional
  sampling_blocks:
    - camera: [cam_x, cam_y, cam_z]

moving_average_update_rate: 0.0
max_kl_divergence: 2.0

Example:
--------
>>> from utils import load_config, validate_config
>>>
>>> config = load_config("config/robot_tracker.yaml")
>>> validate_config(config)
True

Author: Robot Tracking Team
Date: October 2026
"""

import yaml
import os
import re
from pathlib import Path
from typing import Dict, Any, List
import logging

from core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_ENV_PATTERN = re.compile(r'\$\{(\w+)(?::([^}]*))?\}')


class ConfigError(ConfigurationError):
    """Configuration file or schema error."""
    pass


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to YAML config file

    Returns:
        Configuration dictionary

    Raises:
        ConfigError: If file not found or invalid YAML
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Error loading config: {e}") from e

    if config is None:
        raise ConfigError(f"Empty config file: {config_path}")

    config = _substitute_env_vars(config)

    logger.info(f"Loaded config from {config_path}")

    return config


def _substitute_env_vars(obj: Any) -> Any:
    """
    Recursively substitute environment variables in config.

    Supports format: ${VAR_NAME:default_value}. A string consisting of a
    single placeholder is re-parsed as YAML so numbers stay numbers.
    """
    if isinstance(obj, dict):
        return {k: _substitute_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_substitute_env_vars(item) for item in obj]
    elif isinstance(obj, str):
        def replace_var(match):
            var_name = match.group(1)
            default = match.group(2) or ""
            return os.environ.get(var_name, default)

        substituted = _ENV_PATTERN.sub(replace_var, obj)
        if substituted != obj and _ENV_PATTERN.fullmatch(obj):
            return yaml.safe_load(substituted) if substituted else substituted
        return substituted
    else:
        return obj


def validate_config(config: Dict[str, Any]) -> bool:
    """
    Validate tracker configuration structure and values.

    Args:
        config: Configuration dictionary

    Returns:
        True if valid

    Raises:
        ConfigError: If validation fails
    """
    if not isinstance(config, dict):
        raise ConfigError("Config must be a dictionary")

    required_keys = ["joint_transition", "observation", "sampling_blocks"]

    for key in required_keys:
        if key not in config:
            raise ConfigError(f"Missing required key: {key}")

    _validate_joint_transition(config["joint_transition"])
    _validate_observation(config["observation"])
    _validate_sampling_blocks("sampling_blocks", config["sampling_blocks"])

    if "camera_offset" in config:
        camera_offset = config["camera_offset"]
        if not isinstance(camera_offset, dict):
            raise ConfigError("camera_offset must be a dictionary")
        _validate_sampling_blocks(
            "camera_offset.sampling_blocks", camera_offset.get("sampling_blocks"))

    if "pose_transition" in config:
        _validate_pose_transition(config["pose_transition"])

    for key in ("moving_average_update_rate", "max_kl_divergence"):
        if key in config and not _is_number(config[key]):
            raise ConfigError(f"{key} must be numeric")

    logger.info("Configuration validation passed")
    return True


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _validate_joint_transition(section: Dict[str, Any]) -> None:
    """Validate per-joint transition parameters."""
    if not isinstance(section, dict):
        raise ConfigError("joint_transition config must be a dictionary")

    sigmas = section.get("joint_sigmas")
    if not isinstance(sigmas, list):
        raise ConfigError("joint_transition.joint_sigmas must be a list")

    for i, sigma in enumerate(sigmas):
        if not _is_number(sigma):
            raise ConfigError(f"joint_sigmas[{i}] must be numeric, got {sigma!r}")
        if sigma < 0:
            raise ConfigError(f"joint_sigmas[{i}] must be non-negative, got {sigma}")


def _validate_observation(section: Dict[str, Any]) -> None:
    """Validate observation and occlusion parameters."""
    if not isinstance(section, dict):
        raise ConfigError("observation config must be a dictionary")

    if "delta_time" in section:
        delta_time = section["delta_time"]
        if not _is_number(delta_time) or delta_time <= 0:
            raise ConfigError("observation.delta_time must be positive")

    occlusion = section.get("occlusion")
    if not isinstance(occlusion, dict):
        raise ConfigError("observation.occlusion must be a dictionary")

    for key in ("p_occluded_visible", "p_occluded_occluded", "initial_occlusion_prob"):
        if key not in occlusion:
            raise ConfigError(f"Missing required key: observation.occlusion.{key}")
        value = occlusion[key]
        if not _is_number(value) or not (0.0 <= value <= 1.0):
            raise ConfigError(f"observation.occlusion.{key} must be in [0, 1]")

    sigma = occlusion.get("sigma", 0.0)
    if not _is_number(sigma) or sigma < 0:
        raise ConfigError("observation.occlusion.sigma must be non-negative")


def _validate_sampling_blocks(name: str, blocks: Any) -> None:
    """Validate a sampling block definition (mapping or list of mappings)."""
    if isinstance(blocks, dict):
        entries: List[Dict[str, Any]] = [blocks]
    elif isinstance(blocks, list):
        entries = blocks
    else:
        raise ConfigError(f"{name} must be a mapping or a list of mappings")

    for entry in entries:
        if not isinstance(entry, dict):
            raise ConfigError(f"{name} entries must be mappings, got {entry!r}")
        for block_name, joints in entry.items():
            if not isinstance(joints, list) or not all(isinstance(j, str) for j in joints):
                raise ConfigError(
                    f"{name}.{block_name} must be a list of joint names"
                )


def _validate_pose_transition(section: Dict[str, Any]) -> None:
    """Validate damped pose process parameters."""
    if not isinstance(section, dict):
        raise ConfigError("pose_transition config must be a dictionary")

    damping = section.get("damping")
    if not _is_number(damping) or damping < 0:
        raise ConfigError("pose_transition.damping must be non-negative")

    if "noise_covariance" not in section:
        raise ConfigError("Missing required key: pose_transition.noise_covariance")

    if "dimension" in section:
        dimension = section["dimension"]
        if not isinstance(dimension, int) or isinstance(dimension, bool) or dimension <= 0:
            raise ConfigError("pose_transition.dimension must be a positive integer")


def merge_configs(base: Dict[str, Any],
                 override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep merge override config into base config.

    Args:
        base: Base configuration
        override: Configuration to merge in (overrides base)

    Returns:
        Merged configuration

    Example:
        >>> config1 = {"a": 1, "b": {"c": 2}}
        >>> config2 = {"b": {"d": 3}}
        >>> merge_configs(config1, config2)
        {'a': 1, 'b': {'c': 2, 'd': 3}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value

    logger.debug(f"Merged {len(override)} config keys")
    return result


def get_config_value(config: Dict[str, Any],
                    key_path: str,
                    default: Any = None) -> Any:
    """
    Get nested config value using dot notation.

    Args:
        config: Configuration dictionary
        key_path: Dot-separated path (e.g., "observation.occlusion.sigma")
        default: Default value if not found

    Returns:
        Config value or default
    """
    keys = key_path.split(".")
    value = config

    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default

    return value
