"""
Robot Tracking Core - Linear State Transition Models
====================================================

Linear-Gaussian state transition used for the per-joint dynamics.

State-Space Formulation:
------------------------
x(k+1) = A x(k) + B n(k) + C u(k)

where:
- x(k): Joint state (angle)
- n(k): Standard-normal process noise, n ~ N(0, I)
- u(k): Input (e.g. commanded joint velocity), passed through C
- A:    Dynamics matrix
- B:    Noise matrix, process covariance Q = B Bᵀ
- C:    Input matrix

For the per-joint models A = I, B = σ_j I and C = I, i.e. a random walk
with joint specific noise and an unscaled input.

Author: Robot Tracking Team
Date: October 2026
"""

import numpy as np
from typing import Optional
import logging

from .distributions import Gaussian
from .exceptions import ModelParameterError

logger = logging.getLogger(__name__)


class LinearStateTransitionModel:
    """
    Linear state transition x' = A x + B n + C u.

    Example:
    --------
    >>> model = LinearStateTransitionModel(
    ...     dynamics_matrix=np.eye(1),
    ...     noise_matrix=0.2 * np.eye(1),
    ...     input_matrix=np.eye(1),
    ... )
    >>> model.state([0.3], noise=[1.0], u=[0.1])
    array([0.6])
    """

    def __init__(self,
                 dynamics_matrix: np.ndarray,
                 noise_matrix: np.ndarray,
                 input_matrix: Optional[np.ndarray] = None):
        """
        Initialize linear transition.

        Args:
            dynamics_matrix: A (n_states x n_states)
            noise_matrix: B (n_states x n_noise)
            input_matrix: C (n_states x n_inputs), zero input if omitted
        """
        A = np.atleast_2d(np.asarray(dynamics_matrix, dtype=float))
        B = np.atleast_2d(np.asarray(noise_matrix, dtype=float))
        n_states = A.shape[0]

        if A.shape != (n_states, n_states):
            raise ModelParameterError(f"Dynamics matrix must be square, got {A.shape}")
        if B.shape[0] != n_states:
            raise ModelParameterError(
                f"Noise matrix rows {B.shape[0]} do not match state dimension {n_states}"
            )

        if input_matrix is None:
            C = np.zeros((n_states, 1))
        else:
            C = np.atleast_2d(np.asarray(input_matrix, dtype=float))
            if C.shape[0] != n_states:
                raise ModelParameterError(
                    f"Input matrix rows {C.shape[0]} do not match state dimension {n_states}"
                )

        # Read-only so a model can be shared across worker threads
        for matrix in (A, B, C):
            matrix.setflags(write=False)

        self.A = A
        self.B = B
        self.C = C

    @property
    def dynamics_matrix(self) -> np.ndarray:
        return self.A

    @property
    def noise_matrix(self) -> np.ndarray:
        return self.B

    @property
    def input_matrix(self) -> np.ndarray:
        return self.C

    @property
    def state_dimension(self) -> int:
        return self.A.shape[0]

    @property
    def noise_dimension(self) -> int:
        return self.B.shape[1]

    @property
    def input_dimension(self) -> int:
        return self.C.shape[1]

    @property
    def noise_covariance(self) -> np.ndarray:
        """Process noise covariance Q = B Bᵀ."""
        return self.B @ self.B.T

    def expected_state(self, state, u=None) -> np.ndarray:
        """Noise-free transition A x + C u."""
        x = np.atleast_1d(np.asarray(state, dtype=float))
        if u is None:
            return self.A @ x
        return self.A @ x + self.C @ np.atleast_1d(np.asarray(u, dtype=float))

    def state(self, state, noise, u=None) -> np.ndarray:
        """Transition with a standard-normal noise sample: A x + B n + C u."""
        n = np.atleast_1d(np.asarray(noise, dtype=float))
        return self.expected_state(state, u) + self.B @ n

    def condition(self, state, u=None) -> Gaussian:
        """Distribution of the next state, N(A x + C u, B Bᵀ)."""
        return Gaussian(self.expected_state(state, u), self.noise_covariance)

    def __repr__(self) -> str:
        return (
            f"LinearStateTransitionModel(state_dimension={self.state_dimension}, "
            f"noise_dimension={self.noise_dimension}, "
            f"input_dimension={self.input_dimension})"
        )
