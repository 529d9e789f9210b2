"""Normal and exponential distributions used as building blocks."""

from __future__ import annotations

import math

from numpy.typing import DTypeLike

from variates.core.exceptions import BadVarianceError, LambdaTooSmallError
from variates.models.params import ExponentialParams, NormalParams
from variates.services.base import BaseDistribution
from variates.services.rng import RandomSource, standard_exponential, standard_normal
from variates.utils import floats


class Exponential(BaseDistribution):
    """Exponential distribution ``Exp(rate)``.

    ``rate == 0`` is accepted and describes a point mass at ``+inf``; the
    Gamma distribution relies on this for its degenerate parameters.
    """

    name = "exponential"
    display_name = "Exponential"
    description = "Exponential distribution for waiting times with rate λ"
    category = "continuous"
    support = "[0, inf]"
    params_model = ExponentialParams

    __slots__ = ("_rate", "_inv_rate")

    def __init__(self, rate: float, dtype: DTypeLike | None = None):
        if not (rate >= 0.0):
            raise LambdaTooSmallError(rate=rate)
        super().__init__(dtype)
        self._rate = float(rate)
        self._inv_rate = math.inf if rate == 0.0 else 1.0 / rate

    @property
    def params(self) -> ExponentialParams:
        return ExponentialParams(rate=self._rate)

    def _draw(self, rng: RandomSource) -> float:
        if self._inv_rate == math.inf:
            return math.inf
        return standard_exponential(rng) * self._inv_rate

    def sample_ln(self, rng: RandomSource) -> float:
        """Natural log of a sample, without rounding tiny values to zero first."""
        if self._inv_rate == math.inf:
            return math.inf
        return floats.ln(standard_exponential(rng)) + math.log(self._inv_rate)


class Normal(BaseDistribution):
    """Normal (Gaussian) distribution with mean and standard deviation."""

    name = "normal"
    display_name = "Normal"
    description = "Normal (Gaussian) distribution with mean μ and standard deviation σ"
    category = "continuous"
    support = "(-inf, inf)"
    params_model = NormalParams

    __slots__ = ("_mean", "_std_dev")

    def __init__(self, mean: float, std_dev: float, dtype: DTypeLike | None = None):
        if not (std_dev >= 0.0):
            raise BadVarianceError(mean=mean, std_dev=std_dev)
        super().__init__(dtype)
        self._mean = float(mean)
        self._std_dev = float(std_dev)

    @property
    def params(self) -> NormalParams:
        return NormalParams(mean=self._mean, std_dev=self._std_dev)

    def _draw(self, rng: RandomSource) -> float:
        return floats.shift_scale(self._mean, self._std_dev, standard_normal(rng))
