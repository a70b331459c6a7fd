"""
Robot Tracking Tests Module - Initialization
============================================

Unit and integration tests for the robot tracking models.

Test Organization:
------------------
1. test_distributions.py    - Gaussian, TruncatedGaussian, logit/sigmoid
2. test_processes.py        - Damped Wiener and occlusion process models
3. test_builders.py         - Joint transition model builder, kinematics
4. test_sampling_blocks.py  - Sampling block merge / resolve
5. test_factory.py          - Config-driven model assembly and CLI
6. test_utils.py            - Configuration and logging utilities

Example Test Run:
-----------------
>>> import unittest
>>> from tests import create_test_suite
>>>
>>> runner = unittest.TextTestRunner(verbosity=2)
>>> result = runner.run(create_test_suite())

Version: 1.0.0
Author: Robot Tracking Team
Date: October 2026
"""

import unittest
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Import test modules
from . import test_distributions
from . import test_processes
from . import test_builders
from . import test_sampling_blocks
from . import test_factory
from . import test_utils

__all__ = [
    "test_distributions",
    "test_processes",
    "test_builders",
    "test_sampling_blocks",
    "test_factory",
    "test_utils",
]

__version__ = "1.0.0"
__author__ = "Robot Tracking Team"
__date__ = "2026-10-19"


def create_test_suite():
    """
    Create comprehensive test suite.

    Returns:
        unittest.TestSuite with all tests
    """
    loader = unittest.TestLoader()
    suite = unittest.TestSuite()

    for module in (test_distributions, test_processes, test_builders,
                   test_sampling_blocks, test_factory, test_utils):
        suite.addTests(loader.loadTestsFromModule(module))

    return suite


def run_tests(verbosity: int = 2):
    """
    Run all tests.

    Args:
        verbosity: Output verbosity level

    Returns:
        unittest.TestResult
    """
    suite = create_test_suite()
    runner = unittest.TextTestRunner(verbosity=verbosity)
    return runner.run(suite)


if __name__ == "__main__":
    result = run_tests()
    sys.exit(0 if result.wasSuccessful() else 1)
