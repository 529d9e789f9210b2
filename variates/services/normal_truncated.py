"""The truncated normal distribution.

Follows Robert, Christian P. (1995). "Simulation of truncated normal
variables". Statistics and Computing 5(2), 121-125.

One of three strategies is chosen at construction from where the
standardized bounds sit relative to the mean:

- REJECTION: draw untruncated normals until one lands in the interval.
  Used when the interval holds a large share of the normal's mass.
- ONE_SIDED: Robert's translated-exponential proposal on ``[a, inf)``,
  rejecting proposals beyond a finite far bound if there is one. Used for
  tails, and for intervals both wide and far from the mean.
- TWO_SIDED: a uniform proposal on ``[a, b)``. Used for narrow intervals.

The thresholds between strategies come from :mod:`variates.core.config`;
every choice samples the exact law, they only change the expected number of
loop iterations. No loop has an iteration cap.
"""

from __future__ import annotations

import logging
import math
import sys
from enum import Enum

from numpy.typing import DTypeLike

from variates.core.config import settings
from variates.core.exceptions import InvalidBoundsError, InvalidMeanError, InvalidStdDevError
from variates.models.params import NormalTruncatedParams
from variates.services.base import BaseDistribution
from variates.services.primitives import Exponential, Normal
from variates.services.rng import RandomSource, standard_uniform, uniform_range
from variates.utils import floats

logger = logging.getLogger(__name__)

# Narrowest standardized interval, in ulps of its bounds, sampled in standardized units
_RESOLUTION_ULPS = 2.0**20


class TruncationMethod(str, Enum):
    """Sampling strategy selected for a truncated normal distribution."""

    REJECTION = "rejection"
    ONE_SIDED = "one_sided"
    TWO_SIDED = "two_sided"


class _Rejection:
    """Naive rejection from the untruncated normal."""

    __slots__ = ("normal", "lower", "upper")

    def __init__(self, mean: float, std_dev: float, lower: float, upper: float):
        self.normal = Normal(mean, std_dev)
        self.lower = lower
        self.upper = upper

    def sample(self, rng: RandomSource) -> float:
        while True:
            x = self.normal.sample(rng)
            if self.lower <= x <= self.upper:
                return x


class _OneSided:
    """Robert's exponential proposal for ``z >= std_lower``.

    ``std_upper`` may be finite, in which case proposals beyond it are
    rejected; this keeps the law exact while the exponential proposal keeps
    the acceptance rate high far from the mean.
    """

    __slots__ = ("mu", "sigma", "lower", "upper", "std_lower", "std_upper", "alpha_star", "exp")

    def __init__(
        self,
        mu: float,
        sigma: float,
        lower: float,
        upper: float,
        std_lower: float,
        std_upper: float,
    ):
        self.mu = mu
        self.sigma = sigma
        self.lower = lower
        self.upper = upper
        self.std_lower = std_lower
        self.std_upper = std_upper
        # (b + sqrt(b^2 + 4)) / 2, without overflowing b^2
        self.alpha_star = 0.5 * std_lower + 0.5 * math.hypot(std_lower, 2.0)
        self.exp = Exponential(self.alpha_star)

    def sample(self, rng: RandomSource) -> float:
        while True:
            z = self.exp.sample(rng) + self.std_lower
            if z > self.std_upper:
                continue
            u = standard_uniform(rng)
            dz = z - self.alpha_star
            rho = math.exp(-0.5 * dz * dz)
            if u <= rho:
                x = floats.shift_scale(self.mu, self.sigma, z)
                return floats.clamp(x, self.lower, self.upper)


class _TwoSided:
    """Uniform proposal on ``[std_lower, std_upper)``.

    If the standardized interval is narrower than a few ulps of its bounds
    (e.g. both bounds underflowed towards zero), a uniform draw in
    standardized units can only hit the bounds themselves. The proposal is
    then drawn on ``[lower, upper)`` and the acceptance ratio is taken from
    the offset to the bound nearest zero.
    """

    __slots__ = ("mu", "sigma", "lower", "upper", "std_lower", "std_upper", "unresolved")

    def __init__(
        self,
        mu: float,
        sigma: float,
        lower: float,
        upper: float,
        std_lower: float,
        std_upper: float,
    ):
        self.mu = mu
        self.sigma = sigma
        self.lower = lower
        self.upper = upper
        self.std_lower = std_lower
        self.std_upper = std_upper
        resolution = max(
            sys.float_info.min,
            _RESOLUTION_ULPS * math.ulp(max(abs(std_lower), abs(std_upper))),
        )
        self.unresolved = not (std_upper - std_lower >= resolution)

    def _log_rho(self, z: float) -> float:
        a = self.std_lower
        b = self.std_upper
        if a <= 0.0 <= b:
            return -0.5 * z * z
        # (c^2 - z^2) / 2 for the bound c nearest zero, factored so it cannot overflow
        c = b if b < 0.0 else a
        return (c - z) * (0.5 * c + 0.5 * z)

    def _log_rho_unresolved(self, x: float) -> float:
        a = self.std_lower
        b = self.std_upper
        if a <= 0.0 <= b:
            # |z| is below the smallest normal float here, the density is flat
            return 0.0
        if b < 0.0:
            c = b
            dz = (x - self.upper) / self.sigma
        else:
            c = a
            dz = (x - self.lower) / self.sigma
        return -dz * (c + 0.5 * dz)

    def sample(self, rng: RandomSource) -> float:
        if self.unresolved:
            while True:
                x = uniform_range(rng, self.lower, self.upper)
                u = standard_uniform(rng)
                if u <= math.exp(self._log_rho_unresolved(x)):
                    return floats.clamp(x, self.lower, self.upper)
        while True:
            z = uniform_range(rng, self.std_lower, self.std_upper)
            u = standard_uniform(rng)
            if u <= math.exp(self._log_rho(z)):
                x = floats.shift_scale(self.mu, self.sigma, z)
                return floats.clamp(x, self.lower, self.upper)


def _standardize(bound: float, mean: float, std_dev: float) -> float:
    if math.isinf(bound):
        return bound
    diff = bound - mean
    if math.isinf(diff):
        # bound and mean on opposite sides of zero, both near the float limit
        return floats.clamp_finite(bound / std_dev - mean / std_dev)
    # A finite bound stays finite so the strategies below never see inf - inf
    return floats.clamp_finite(diff / std_dev)


class NormalTruncated(BaseDistribution):
    """The normal distribution ``N(mean, std_dev²)`` truncated to ``[lower, upper]``.

    Either bound may be infinite. Every sample lies in ``[lower, upper]``.

    Example:
        >>> import numpy as np
        >>> dist = NormalTruncated(0.0, 1.0, 2.0, math.inf)
        >>> v = dist.sample(np.random.default_rng(42))
    """

    name = "normal_truncated"
    display_name = "Truncated Normal"
    description = "Normal distribution truncated to the interval [lower, upper]"
    category = "continuous"
    support = "[lower, upper]"
    params_model = NormalTruncatedParams

    __slots__ = ("_mean", "_std_dev", "_lower", "_upper", "_method", "_mirrored", "_impl")

    def __init__(
        self,
        mean: float,
        std_dev: float,
        lower: float,
        upper: float,
        dtype: DTypeLike | None = None,
    ):
        if not (0.0 < std_dev < math.inf):
            raise InvalidStdDevError(mean=mean, std_dev=std_dev, lower=lower, upper=upper)
        if not (lower < upper):
            raise InvalidBoundsError(mean=mean, std_dev=std_dev, lower=lower, upper=upper)
        if not math.isfinite(mean):
            raise InvalidMeanError(mean=mean, std_dev=std_dev, lower=lower, upper=upper)
        super().__init__(dtype)
        self._mean = float(mean)
        self._std_dev = float(std_dev)
        self._lower = float(lower)
        self._upper = float(upper)

        std_lower = _standardize(lower, mean, std_dev)
        std_upper = _standardize(upper, mean, std_dev)
        self._method, self._mirrored = self._select_method(std_lower, std_upper)

        if self._method is TruncationMethod.REJECTION:
            self._impl = _Rejection(mean, std_dev, lower, upper)
        elif self._method is TruncationMethod.ONE_SIDED and self._mirrored:
            # Sample the reflection about zero, then negate
            self._impl = _OneSided(-mean, std_dev, -upper, -lower, -std_upper, -std_lower)
        elif self._method is TruncationMethod.ONE_SIDED:
            self._impl = _OneSided(mean, std_dev, lower, upper, std_lower, std_upper)
        else:
            self._impl = _TwoSided(mean, std_dev, lower, upper, std_lower, std_upper)

        logger.debug(
            "NormalTruncated(mean=%r, std_dev=%r, lower=%r, upper=%r) using %s method%s",
            mean,
            std_dev,
            lower,
            upper,
            self._method.value,
            " (mirrored)" if self._mirrored else "",
        )

    @staticmethod
    def _select_method(std_lower: float, std_upper: float) -> tuple[TruncationMethod, bool]:
        """Choose a strategy from the standardized bounds.

        Returns:
            Tuple of (method, mirrored); mirrored one-sided sampling works on
            the negated interval.
        """
        one_sided_threshold = settings.truncnorm_one_sided_threshold

        if std_upper == math.inf:
            if std_lower >= one_sided_threshold:
                return TruncationMethod.ONE_SIDED, False
            # Also catches the case where both bounds are infinite
            return TruncationMethod.REJECTION, False

        if std_lower == -math.inf:
            if std_upper <= -one_sided_threshold:
                return TruncationMethod.ONE_SIDED, True
            return TruncationMethod.REJECTION, False

        width = std_upper - std_lower
        reach = settings.truncnorm_rejection_reach
        if width >= settings.truncnorm_rejection_width and std_lower <= reach and std_upper >= -reach:
            return TruncationMethod.REJECTION, False

        if std_lower <= 0.0 <= std_upper:
            near = 0.0
        else:
            near = min(abs(std_lower), abs(std_upper))
        # The uniform proposal accepts roughly 1 / (near * width) of draws once that product is large
        if near * width <= settings.truncnorm_uniform_efficiency:
            return TruncationMethod.TWO_SIDED, False
        return TruncationMethod.ONE_SIDED, std_upper < 0.0

    @property
    def params(self) -> NormalTruncatedParams:
        return NormalTruncatedParams(
            mean=self._mean, std_dev=self._std_dev, lower=self._lower, upper=self._upper
        )

    @property
    def method(self) -> TruncationMethod:
        return self._method

    def _draw(self, rng: RandomSource) -> float:
        if self._mirrored:
            return -self._impl.sample(rng)
        return self._impl.sample(rng)
