"""
Robot Tracking Core - Stochastic Process Models
===============================================

Continuous-time process models used to propagate particles between frames.

1. DAMPED WIENER PROCESS
   Mean-reverting process for pose/velocity dynamics:

       dx = (u - λ x) dt + dW,     Cov[dW] = Q dt

   Conditional distribution after Δt:

       E[x(Δt)]   = (1 - e^(-λΔt)) / λ · u + e^(-λΔt) · x
       Cov[x(Δt)] = (1 - e^(-2λΔt)) / (2λ) · Q

   As λ → 0 this degrades to the random walk
       E[x(Δt)] = x + Δt · u,   Cov[x(Δt)] = Δt · Q
   and the limit is substituted whenever the closed form is not finite.

2. OCCLUSION TRANSITION
   Two-state (occluded / visible) Markov chain parameterized by the
   probabilities of being occluded one second after being visible (p_ov)
   or occluded (p_oo). With c = p_oo - p_ov:

       p* = p_ov / (1 - c)                  (steady state)
       p(Δt) = p* + c^Δt · (p(0) - p*)

   At Δt = 1 this reproduces p_ov from a visible and p_oo from an occluded
   start.

3. CONTINUOUS OCCLUSION PROCESS
   Occlusion is carried as a logit score. Conditioning maps the score to a
   probability, applies the occlusion transition and wraps the result in a
   truncated Gaussian on [0, 1] with sigma · sqrt(Δt); mapped samples are
   returned in logit space.

All models hold only construction-time parameters. ``condition`` returns a
new distribution object and never mutates the model.

Author: Robot Tracking Team
Date: October 2026
"""

import numpy as np
from typing import Optional
import logging

from .distributions import (
    ArrayLike,
    BoundedProbabilityTransform,
    Gaussian,
    TruncatedGaussian,
)
from .exceptions import ModelParameterError

logger = logging.getLogger(__name__)


def _check_delta_time(delta_time: float) -> float:
    delta_time = float(delta_time)
    if not (np.isfinite(delta_time) and delta_time >= 0.0):
        raise ValueError(f"delta_time must be finite and >= 0, got {delta_time}")
    return delta_time


def _check_probability(name: str, value: float) -> float:
    value = float(value)
    if not (0.0 <= value <= 1.0):
        raise ModelParameterError(f"{name} must be in [0, 1], got {value}")
    return value


class DampedWienerProcess:
    """
    Damped Wiener (Ornstein-Uhlenbeck type) process model.

    Example:
    --------
    >>> process = DampedWienerProcess(damping=1.0, noise_covariance=[[1.0]])
    >>> g = process.condition(1.0, state=[0.0], u=[2.0])
    >>> g.mean      # (1 - e^-1) * 2
    array([1.26424112])
    >>> g.covariance  # (1 - e^-2) / 2
    array([[0.43233236]])
    """

    def __init__(self,
                 damping: float,
                 noise_covariance,
                 dimension: Optional[int] = None):
        """
        Initialize process model.

        Args:
            damping: Mean-reversion rate λ >= 0 (0 gives a random walk)
            noise_covariance: Symmetric PSD matrix Q, or a scalar times
                identity (requires ``dimension``)
            dimension: State dimension, only needed for scalar covariances
        """
        damping = float(damping)
        if not (np.isfinite(damping) and damping >= 0.0):
            raise ModelParameterError(f"Damping must be finite and >= 0, got {damping}")

        noise_covariance = np.asarray(noise_covariance, dtype=float)
        if noise_covariance.ndim == 0:
            if dimension is None:
                raise ModelParameterError(
                    "Scalar noise covariance requires an explicit dimension"
                )
            noise_covariance = noise_covariance * np.eye(dimension)

        if (noise_covariance.ndim != 2 or
                noise_covariance.shape[0] != noise_covariance.shape[1]):
            raise ModelParameterError(
                f"Noise covariance must be square, got shape {noise_covariance.shape}"
            )
        if dimension is not None and noise_covariance.shape[0] != dimension:
            raise ModelParameterError(
                f"Noise covariance dimension {noise_covariance.shape[0]} "
                f"does not match state dimension {dimension}"
            )
        if not np.allclose(noise_covariance, noise_covariance.T):
            raise ModelParameterError("Noise covariance must be symmetric")

        self.damping = np.float64(damping)
        self.noise_covariance = noise_covariance

    @property
    def dimension(self) -> int:
        return self.noise_covariance.shape[0]

    def condition(self,
                  delta_time: float,
                  state,
                  u=None) -> Gaussian:
        """
        Conditional distribution of the state after ``delta_time``.

        Args:
            delta_time: Elapsed time Δt >= 0
            state: Current state x
            u: Constant drift input (zero if omitted)

        Returns:
            Gaussian with the conditional mean and covariance
        """
        delta_time = _check_delta_time(delta_time)
        state = self._as_vector(state, "state")
        u = (np.zeros(self.dimension) if u is None
             else self._as_vector(u, "input"))

        return Gaussian(self.mean(delta_time, state, u),
                        self.covariance(delta_time))

    def sample(self, delta_time: float, state, u, standard_normal_sample) -> np.ndarray:
        """Condition and map a standard-normal sample in one call."""
        return self.condition(delta_time, state, u).map_gaussian(standard_normal_sample)

    def mean(self, delta_time: float, state: np.ndarray, u: np.ndarray) -> np.ndarray:
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            decay = np.exp(-self.damping * delta_time)
            gain = -np.expm1(-self.damping * delta_time) / self.damping
            expectation = gain * u + decay * state

        # vanishing damping: random-walk limit
        if not np.all(np.isfinite(expectation)):
            expectation = state + delta_time * u

        return expectation

    def covariance(self, delta_time: float) -> np.ndarray:
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            factor = -np.expm1(-2.0 * self.damping * delta_time) / (2.0 * self.damping)

        if not np.isfinite(factor):
            factor = delta_time

        return factor * self.noise_covariance

    def _as_vector(self, value, name: str) -> np.ndarray:
        vector = np.atleast_1d(np.asarray(value, dtype=float))
        if vector.shape != (self.dimension,):
            raise ValueError(
                f"{name} shape {vector.shape} does not match "
                f"process dimension {self.dimension}"
            )
        return vector


class OcclusionTransitionModel:
    """
    Two-state occlusion Markov chain in continuous time.

    Args:
        p_occluded_visible: P(occluded at t+1s | visible at t)
        p_occluded_occluded: P(occluded at t+1s | occluded at t)
    """

    def __init__(self, p_occluded_visible: float, p_occluded_occluded: float):
        self.p_occluded_visible = _check_probability(
            "p_occluded_visible", p_occluded_visible)
        self.p_occluded_occluded = _check_probability(
            "p_occluded_occluded", p_occluded_occluded)

        # c is the per-second eigenvalue of the chain; c^Δt needs c >= 0
        self.c = self.p_occluded_occluded - self.p_occluded_visible
        if self.c < 0.0:
            raise ModelParameterError(
                f"p_occluded_occluded ({p_occluded_occluded}) must not be smaller "
                f"than p_occluded_visible ({p_occluded_visible})"
            )

    @property
    def steady_state(self) -> Optional[float]:
        """Long-run occlusion probability (None if the chain never mixes)."""
        if self.c == 1.0:
            return None
        return self.p_occluded_visible / (1.0 - self.c)

    def transition(self, delta_time: float, occlusion_probability: ArrayLike) -> ArrayLike:
        """Occlusion probability after ``delta_time`` seconds."""
        delta_time = _check_delta_time(delta_time)
        probability = np.asarray(occlusion_probability, dtype=float)

        if self.c == 1.0:
            return probability if probability.ndim else float(probability)

        steady = self.p_occluded_visible / (1.0 - self.c)
        transitioned = steady + self.c ** delta_time * (probability - steady)
        transitioned = np.clip(transitioned, 0.0, 1.0)
        return transitioned if transitioned.ndim else float(transitioned)


class ConditionedOcclusion:
    """Occlusion distribution after conditioning on elapsed time and prior."""

    def __init__(self,
                 probability: TruncatedGaussian,
                 transform: BoundedProbabilityTransform):
        self.probability = probability
        self.transform = transform

    @property
    def mean_probability(self) -> float:
        """Transitioned occlusion probability before truncation noise."""
        return self.probability.mean

    def map_standard_gaussian(self, sample: ArrayLike) -> ArrayLike:
        """Map standard-normal sample(s) to occlusion score(s) in logit space."""
        return self.transform.logit(self.probability.map_standard_gaussian(sample))


class ContinuousOcclusionProcessModel:
    """
    Process model for a per-pixel occlusion score.

    Example:
    --------
    >>> model = ContinuousOcclusionProcessModel(0.1, 0.7, sigma=0.2)
    >>> conditioned = model.condition(1.0 / 30.0, occlusion_score=-2.0)
    >>> score = conditioned.map_standard_gaussian(0.3)
    """

    def __init__(self,
                 p_occluded_visible: float,
                 p_occluded_occluded: float,
                 sigma: float,
                 transform: Optional[BoundedProbabilityTransform] = None):
        """
        Initialize occlusion process.

        Args:
            p_occluded_visible: P(occluded after 1s | visible)
            p_occluded_occluded: P(occluded after 1s | occluded)
            sigma: Diffusion of the occlusion probability per sqrt(second)
            transform: Probability/score transform (default logit/sigmoid)
        """
        sigma = float(sigma)
        if not (np.isfinite(sigma) and sigma >= 0.0):
            raise ModelParameterError(f"Occlusion sigma must be finite and >= 0, got {sigma}")

        self.transition_model = OcclusionTransitionModel(
            p_occluded_visible, p_occluded_occluded)
        self.sigma = sigma
        self.transform = transform if transform is not None else BoundedProbabilityTransform()

    def condition(self, delta_time: float, occlusion_score: float) -> ConditionedOcclusion:
        """
        Condition on elapsed time and the prior occlusion score.

        Args:
            delta_time: Elapsed time Δt >= 0
            occlusion_score: Prior occlusion in logit space

        Returns:
            ConditionedOcclusion mapping samples to new scores
        """
        delta_time = _check_delta_time(delta_time)
        prior = self.transform.sigmoid(float(occlusion_score))
        mean = self.transition_model.transition(delta_time, prior)

        return ConditionedOcclusion(
            TruncatedGaussian(mean, self.sigma * np.sqrt(delta_time), 0.0, 1.0),
            self.transform,
        )

    def sample(self, delta_time: float, occlusion_score: float,
               standard_normal_sample: ArrayLike) -> ArrayLike:
        """Condition and map a standard-normal sample in one call."""
        return self.condition(delta_time, occlusion_score).map_standard_gaussian(
            standard_normal_sample)
