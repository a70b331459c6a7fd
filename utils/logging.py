"""
Robot Tracking Utils - Logging & Diagnostics
============================================

Logging setup and model-construction diagnostics.

Features:
---------
1. Logging Setup
   - Console and rotating file handlers
   - Structured log format

2. Module Loggers
   - Get loggers for specific modules
   - Hierarchical logger organization

3. Construction Logging
   - Sampling block partition of the joint state
   - Per-joint transition noise

Log Format:
-----------
[2026-10-19 12:30:45.123] [INFO    ] [tracker.factory] Message here
[TIMESTAMP] [LEVEL] [MODULE] Message

Example:
--------
>>> from utils import setup_logging, get_logger
>>>
>>> setup_logging("logs/", level="INFO")
>>> logger = get_logger(__name__)
>>> logger.info("Tracker models created")

Author: Robot Tracking Team
Date: October 2026
"""

import logging
import logging.handlers
from pathlib import Path
from typing import List, Optional, Sequence
from datetime import datetime


# Module logger cache
_loggers = {}


class StructuredFormatter(logging.Formatter):
    """Structured logging formatter."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime(
            "%Y-%m-%d %H:%M:%S.%f"
        )[:-3]

        message = (
            f"[{timestamp}] [{record.levelname:8}] "
            f"[{record.name}] {record.getMessage()}"
        )
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def setup_logging(log_dir: str = "logs",
                 level: str = "INFO",
                 console_output: bool = True,
                 file_output: bool = True) -> Optional[Path]:
    """
    Set up logging configuration.

    Args:
        log_dir: Directory for log files
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console_output: Enable console output
        file_output: Enable file output

    Returns:
        Path of the log file, or None without file output
    """
    log_level = getattr(logging, level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = StructuredFormatter()

    if console_output:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    log_file = None
    if file_output:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"robot_tracker_{timestamp}.log"

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10*1024*1024,  # 10 MB
            backupCount=5,
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.info(f"Logging configured: level={level}, dir={log_dir}")
    return log_file


def get_logger(name: str) -> logging.Logger:
    """
    Get logger for a module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance
    """
    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)

    return _loggers[name]


def log_sampling_blocks(blocks: Sequence[Sequence[int]],
                        names: Optional[Sequence[str]] = None) -> None:
    """
    Log the sampling block partition of the joint state.

    Args:
        blocks: Joint index blocks in sweep order
        names: Optional block names, parallel to ``blocks``
    """
    logger = get_logger(__name__)

    logger.info(f"{len(blocks)} sampling blocks")
    for i, block in enumerate(blocks):
        label = names[i] if names is not None else f"#{i}"
        logger.info(f"  block {label}: {list(block)}")


def log_joint_models(joint_sigmas: Sequence[float],
                     joint_names: Optional[List[str]] = None) -> None:
    """Log per-joint transition noise at DEBUG level."""
    logger = get_logger(__name__)

    for i, sigma in enumerate(joint_sigmas):
        name = joint_names[i] if joint_names is not None else str(i)
        logger.debug(f"  joint {name}: sigma={sigma:.6f}")


def log_error(error: Exception,
             context: str = "") -> None:
    """
    Log an error with context.

    Args:
        error: Exception that occurred
        context: Context information
    """
    logger = get_logger(__name__)

    if context:
        logger.error(f"{context}: {str(error)}")
    else:
        logger.error(f"Error: {str(error)}")

    logger.debug("", exc_info=error)


def set_log_level(name: str,
                 level: str) -> None:
    """
    Set log level for specific logger.

    Example:
        >>> set_log_level("tracker.sampling_blocks", "DEBUG")
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))
