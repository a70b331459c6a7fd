"""
Robot Tracking Core - Distributions
===================================

Distribution primitives shared by the process models.

1. BOUNDED PROBABILITY TRANSFORM
   - logit/sigmoid bijection between (0, 1) and the real line
   - Keeps bounded quantities compatible with Gaussian arithmetic

2. GAUSSIAN
   - Immutable multivariate normal N(mean, covariance)
   - Affine map of standard-normal samples: x = mean + L ε, L Lᵀ = Σ

3. TRUNCATED GAUSSIAN
   - Normal restricted to [lower, upper] and renormalized
   - Maps standard-normal samples through the inverse CDF

Sampling by Mapping:
--------------------
Particle filters draw ε ~ N(0, I) once and push it through a model. All
distributions here therefore expose ``map_gaussian`` / ``map_standard_gaussian``
instead of drawing their own random numbers; ``sample`` helpers are thin
wrappers taking a ``numpy.random.Generator``.

Author: Robot Tracking Team
Date: October 2026
"""

import numpy as np
from typing import Optional, Union
import logging
from scipy.linalg import cholesky
from scipy.special import expit, logit, ndtr
from scipy.stats import truncnorm

from .exceptions import ModelParameterError

logger = logging.getLogger(__name__)

ArrayLike = Union[float, np.ndarray]


def _as_output(value: np.ndarray) -> ArrayLike:
    """Return Python floats for scalar results, arrays otherwise."""
    value = np.asarray(value, dtype=float)
    return float(value) if value.ndim == 0 else value


class BoundedProbabilityTransform:
    """
    Bijection between probabilities in (0, 1) and unconstrained reals.

    sigmoid(s) = 1 / (1 + exp(-s))
    logit(p)   = log(p / (1 - p))

    Probabilities are clamped to [epsilon, 1 - epsilon] before the logit so
    the resulting score is always finite, even for the bounds 0 and 1.

    Example:
    --------
    >>> transform = BoundedProbabilityTransform()
    >>> transform.logit(0.5)
    0.0
    >>> transform.sigmoid(0.0)
    0.5
    """

    def __init__(self, epsilon: float = 1e-12):
        if not (0.0 < epsilon < 0.5):
            raise ModelParameterError(f"epsilon must be in (0, 0.5), got {epsilon}")
        self.epsilon = epsilon

    def sigmoid(self, score: ArrayLike) -> ArrayLike:
        """Map an unconstrained score to a probability."""
        return _as_output(expit(np.asarray(score, dtype=float)))

    def logit(self, probability: ArrayLike) -> ArrayLike:
        """Map a probability to an unconstrained score."""
        clipped = np.clip(np.asarray(probability, dtype=float),
                          self.epsilon, 1.0 - self.epsilon)
        return _as_output(logit(clipped))


class Gaussian:
    """
    Multivariate Gaussian N(mean, covariance).

    The square root of the covariance is computed once at construction so
    that ``map_gaussian`` is a pure affine map and the object can be shared
    between threads.

    Example:
    --------
    >>> g = Gaussian(mean=[0.0, 1.0], covariance=np.diag([4.0, 9.0]))
    >>> g.map_gaussian([1.0, -1.0])
    array([ 2., -2.])
    """

    def __init__(self, mean, covariance):
        """
        Args:
            mean: Mean vector (scalars are promoted to 1-vectors)
            covariance: Covariance matrix, or a scalar multiplying identity
        """
        self.mean = np.atleast_1d(np.asarray(mean, dtype=float))
        dim = self.mean.shape[0]

        covariance = np.asarray(covariance, dtype=float)
        if covariance.ndim == 0:
            covariance = covariance * np.eye(dim)
        if covariance.shape != (dim, dim):
            raise ModelParameterError(
                f"Covariance shape {covariance.shape} does not match "
                f"mean dimension {dim}"
            )
        self.covariance = covariance
        self.square_root = self._square_root(covariance)

    @staticmethod
    def _square_root(covariance: np.ndarray) -> np.ndarray:
        try:
            return cholesky(covariance, lower=True)
        except np.linalg.LinAlgError:
            # Positive semi-definite (e.g. zero noise): fall back to eigh
            logger.debug("Covariance not positive definite, using eigendecomposition")
            eigvals, eigvecs = np.linalg.eigh(covariance)
            return eigvecs @ np.diag(np.sqrt(np.maximum(eigvals, 0.0)))

    @property
    def dimension(self) -> int:
        return self.mean.shape[0]

    def map_gaussian(self, sample) -> np.ndarray:
        """
        Map standard-normal sample(s) to this Gaussian.

        Args:
            sample: Shape (dimension,) or (n_samples, dimension)

        Returns:
            mean + L @ sample, with the same leading shape as ``sample``
        """
        sample = np.asarray(sample, dtype=float)
        if sample.shape[-1:] != (self.dimension,):
            raise ValueError(
                f"Sample dimension {sample.shape} does not match "
                f"Gaussian dimension {self.dimension}"
            )
        return self.mean + sample @ self.square_root.T

    def sample(self, rng: np.random.Generator,
               size: Optional[int] = None) -> np.ndarray:
        """Draw sample(s) using ``rng``."""
        shape = (self.dimension,) if size is None else (size, self.dimension)
        return self.map_gaussian(rng.standard_normal(shape))

    def __repr__(self) -> str:
        return f"Gaussian(mean={self.mean!r}, covariance={self.covariance!r})"


class TruncatedGaussian:
    """
    Gaussian restricted to the interval [lower, upper].

    A standard-normal sample ε is mapped to the uniform u = Φ(ε) and then to
    the truncated quantile F⁻¹(u). Zero sigma (or an empty interval)
    collapses the distribution to a point mass at the mean clipped into the
    interval.

    Example:
    --------
    >>> tg = TruncatedGaussian(mean=0.5, sigma=0.1, lower=0.0, upper=1.0)
    >>> round(tg.map_standard_gaussian(0.0), 6)
    0.5
    """

    def __init__(self,
                 mean: float = 0.0,
                 sigma: float = 1.0,
                 lower: float = -np.inf,
                 upper: float = np.inf):
        if not np.isfinite(mean):
            raise ModelParameterError(f"Mean must be finite, got {mean}")
        if not (np.isfinite(sigma) and sigma >= 0.0):
            raise ModelParameterError(f"Sigma must be finite and >= 0, got {sigma}")
        if lower > upper:
            raise ModelParameterError(f"Lower bound {lower} exceeds upper bound {upper}")

        self.mean = float(mean)
        self.sigma = float(sigma)
        self.lower = float(lower)
        self.upper = float(upper)
        self.point_mass = float(np.clip(self.mean, self.lower, self.upper))

        if self.sigma == 0.0 or self.lower == self.upper:
            self._distribution = None
        else:
            a = (self.lower - self.mean) / self.sigma
            b = (self.upper - self.mean) / self.sigma
            self._distribution = truncnorm(a, b, loc=self.mean, scale=self.sigma)

    @property
    def is_degenerate(self) -> bool:
        """True if all mass sits on a single point."""
        return self._distribution is None

    def map_standard_gaussian(self, sample: ArrayLike) -> ArrayLike:
        """Map standard-normal sample(s) into the truncated domain."""
        sample = np.asarray(sample, dtype=float)

        if self._distribution is None:
            return _as_output(np.full(sample.shape, self.point_mass))

        value = self._distribution.ppf(ndtr(sample))
        # far-tail quantiles can underflow to nan
        value = np.where(np.isnan(value), self.point_mass, value)
        return _as_output(np.clip(value, self.lower, self.upper))

    def sample(self, rng: np.random.Generator,
               size: Optional[int] = None) -> ArrayLike:
        return self.map_standard_gaussian(rng.standard_normal(size))

    def __repr__(self) -> str:
        return (
            f"TruncatedGaussian(mean={self.mean}, sigma={self.sigma}, "
            f"lower={self.lower}, upper={self.upper})"
        )
