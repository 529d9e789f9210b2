"""Inverse Gaussian and normal-inverse Gaussian distributions."""

from __future__ import annotations

import math

from numpy.typing import DTypeLike

from variates.core.exceptions import (
    AbsoluteBetaNotLessThanAlphaError,
    AlphaInfiniteError,
    AlphaNegativeOrNullError,
    MeanNegativeOrNullError,
    ShapeNegativeOrNullError,
)
from variates.models.params import InverseGaussianParams, NormalInverseGaussianParams
from variates.services.base import BaseDistribution
from variates.services.rng import RandomSource, standard_normal, standard_uniform


class InverseGaussian(BaseDistribution):
    """The inverse Gaussian (Wald) distribution ``IG(mean, shape)``.

    Uses the transformation with multiple roots of Michael, Schucany & Haas
    (1976): a chi-squared(1) draw picks the smaller root of a quadratic and
    one uniform draw chooses between it and ``mean² / root``.
    """

    name = "inverse_gaussian"
    display_name = "Inverse Gaussian"
    description = "Inverse Gaussian (Wald) distribution with mean μ and shape λ"
    category = "continuous"
    support = "(0, inf)"
    params_model = InverseGaussianParams

    __slots__ = ("_mean", "_shape", "_four_shape")

    def __init__(self, mean: float, shape: float, dtype: DTypeLike | None = None):
        if not (mean > 0.0):
            raise MeanNegativeOrNullError(mean=mean, shape=shape)
        if not (shape > 0.0):
            raise ShapeNegativeOrNullError(mean=mean, shape=shape)
        super().__init__(dtype)
        self._mean = float(mean)
        self._shape = float(shape)
        self._four_shape = 4.0 * shape

    @property
    def params(self) -> InverseGaussianParams:
        return InverseGaussianParams(mean=self._mean, shape=self._shape)

    def _draw(self, rng: RandomSource) -> float:
        mu = self._mean
        v = standard_normal(rng)
        y = mu * v * v

        # mu + mu/(2λ) (y - sqrt(4 λ y + y^2)), rewritten to avoid cancellation
        sqrt_y = math.sqrt(y)
        x = mu - 2.0 * mu * sqrt_y / (sqrt_y + math.sqrt(self._four_shape + y))

        u = standard_uniform(rng)
        if u <= mu / (mu + x):
            return x
        return mu * mu / x


class NormalInverseGaussian(BaseDistribution):
    """The normal-inverse Gaussian distribution ``NIG(alpha, beta)``.

    ``alpha`` controls tail heaviness and ``beta`` asymmetry, with
    ``|beta| < alpha``. Sampled as ``beta * W + sqrt(W) * Z`` for
    ``W ~ IG(1 / gamma, 1)`` with ``gamma = sqrt(alpha² - beta²)``.
    """

    name = "normal_inverse_gaussian"
    display_name = "Normal-Inverse Gaussian"
    description = "Normal-inverse Gaussian distribution with tail heaviness α and asymmetry β"
    category = "continuous"
    support = "(-inf, inf)"
    params_model = NormalInverseGaussianParams

    __slots__ = ("_alpha", "_beta", "_inverse_gaussian")

    def __init__(self, alpha: float, beta: float, dtype: DTypeLike | None = None):
        if not (alpha > 0.0):
            raise AlphaNegativeOrNullError(alpha=alpha, beta=beta)
        if not (abs(beta) < alpha):
            raise AbsoluteBetaNotLessThanAlphaError(alpha=alpha, beta=beta)

        # gamma <= alpha without squaring alpha, so 1 / gamma only reaches 0 for infinite alpha
        r = beta / alpha
        gamma = alpha * math.sqrt(1.0 - r * r)
        try:
            inverse_gaussian = InverseGaussian(1.0 / gamma, 1.0)
        except MeanNegativeOrNullError:
            raise AlphaInfiniteError(alpha=alpha, beta=beta) from None

        super().__init__(dtype)
        self._alpha = float(alpha)
        self._beta = float(beta)
        self._inverse_gaussian = inverse_gaussian

    @property
    def params(self) -> NormalInverseGaussianParams:
        return NormalInverseGaussianParams(alpha=self._alpha, beta=self._beta)

    def _draw(self, rng: RandomSource) -> float:
        inv_gauss = self._inverse_gaussian.sample(rng)
        return self._beta * inv_gauss + math.sqrt(inv_gauss) * standard_normal(rng)
