"""The Gamma distribution and the distributions derived from it.

Gamma sampling uses the method of Marsaglia & Tsang (2000), "A Simple Method
for Generating Gamma Variables", ACM Trans. Math. Softw. 26(3), 363-372:
a rejection sampler for ``shape > 1``, the boosting transformation from the
same paper for ``shape < 1`` and a direct exponential draw for ``shape == 1``.

Chi-squared, Fisher F, Student t and Beta are compositions over Gamma and
add no rejection loop of their own. Where a ratio of Gamma variates could
underflow to ``0 / 0`` the composition works with log samples instead.
"""

from __future__ import annotations

import logging
import math
from enum import Enum

from numpy.typing import DTypeLike
from scipy.special import expit

from variates.core.exceptions import (
    AlphaTooSmallError,
    BetaTooSmallError,
    DoFTooSmallError,
    GammaError,
    MTooSmallError,
    NTooSmallError,
    ScaleTooLargeError,
    ScaleTooSmallError,
    ShapeTooSmallError,
)
from variates.models.params import (
    BetaParams,
    ChiSquaredParams,
    FisherFParams,
    GammaParams,
    StudentTParams,
)
from variates.services.base import BaseDistribution
from variates.services.primitives import Exponential
from variates.services.rng import RandomSource, open_closed01, standard_normal
from variates.utils import floats

logger = logging.getLogger(__name__)


class GammaMethod(str, Enum):
    """Sampling algorithm selected for a Gamma distribution."""

    LARGE = "large"
    ONE = "one"
    SMALL = "small"


class _GammaLargeShape:
    """Marsaglia-Tsang rejection sampler, valid for shape >= 1."""

    __slots__ = ("d", "c")

    def __init__(self, shape: float):
        self.d = shape - 1.0 / 3.0
        self.c = 1.0 / math.sqrt(9.0 * self.d)

    def sample_unscaled(self, rng: RandomSource) -> float:
        d = self.d
        while True:
            x = standard_normal(rng)
            v_cbrt = 1.0 + self.c * x
            if v_cbrt <= 0.0:  # v <= 0 iff its cube root is
                continue

            v = v_cbrt * v_cbrt * v_cbrt
            u = open_closed01(rng)

            x_sqr = x * x
            if u < 1.0 - 0.0331 * x_sqr * x_sqr or math.log(u) < 0.5 * x_sqr + d * (
                1.0 - v + floats.ln(v)
            ):
                return d * v

    def sample_unscaled_ln(self, rng: RandomSource) -> float:
        # d * v > 0, but may overflow to inf for huge shapes
        return floats.ln(self.sample_unscaled(rng))


def _boost(ln_u: float, inv_shape: float) -> float:
    """ln(U^(1/shape)); saturates to -inf when 1/shape overflows."""
    if ln_u == 0.0:
        return 0.0
    return ln_u * inv_shape


class _GammaSmallShape:
    """Boosting for shape < 1: Gamma(shape) = Gamma(shape + 1) * U^(1/shape)."""

    __slots__ = ("inv_shape", "large_shape")

    def __init__(self, shape: float):
        self.inv_shape = 1.0 / shape
        self.large_shape = _GammaLargeShape(shape + 1.0)

    def sample_unscaled(self, rng: RandomSource) -> float:
        u = open_closed01(rng)
        return self.large_shape.sample_unscaled(rng) * u**self.inv_shape

    def sample_unscaled_ln_parts(self, rng: RandomSource) -> tuple[float, float]:
        ln_u = math.log(open_closed01(rng))
        return ln_u, self.large_shape.sample_unscaled_ln(rng)

    def sample_unscaled_ln(self, rng: RandomSource) -> float:
        ln_u, rest = self.sample_unscaled_ln_parts(rng)
        return rest + _boost(ln_u, self.inv_shape)


class Gamma(BaseDistribution):
    """The Gamma distribution ``Gamma(shape, scale)``.

    The density is ``x^(k-1) exp(-x/θ) / (Γ(k) θ^k)`` for shape ``k`` and
    scale ``θ``, both strictly positive. An infinite shape or scale gives a
    point mass at ``+inf``.

    Example:
        >>> import numpy as np
        >>> gamma = Gamma(2.0, 5.0)
        >>> v = gamma.sample(np.random.default_rng(42))
    """

    name = "gamma"
    display_name = "Gamma"
    description = "Gamma distribution for positive continuous values"
    category = "continuous"
    support = "[0, inf]"
    params_model = GammaParams

    __slots__ = ("_shape", "_scale", "_method", "_impl")

    def __init__(self, shape: float, scale: float, dtype: DTypeLike | None = None):
        if not (shape > 0.0):
            raise ShapeTooSmallError(shape=shape, scale=scale)
        if not (scale > 0.0):
            raise ScaleTooSmallError(shape=shape, scale=scale)
        super().__init__(dtype)
        self._shape = float(shape)
        self._scale = float(scale)

        if shape == math.inf or scale == math.inf:
            self._method = GammaMethod.ONE
            self._impl = Exponential(0.0)
        elif shape == 1.0:
            rate = 1.0 / scale
            if rate == 0.0:
                raise ScaleTooLargeError(shape=shape, scale=scale)
            self._method = GammaMethod.ONE
            self._impl = Exponential(rate)
        elif shape < 1.0:
            self._method = GammaMethod.SMALL
            self._impl = _GammaSmallShape(shape)
        else:
            self._method = GammaMethod.LARGE
            self._impl = _GammaLargeShape(shape)

        logger.debug(
            "Gamma(shape=%r, scale=%r) using %s method", shape, scale, self._method.value
        )

    @property
    def params(self) -> GammaParams:
        return GammaParams(shape=self._shape, scale=self._scale)

    @property
    def method(self) -> GammaMethod:
        return self._method

    def _draw(self, rng: RandomSource) -> float:
        if self._method is GammaMethod.ONE:
            return self._impl.sample(rng)
        # Scale last: an underflowed boost times an infinite scale must stay 0, not NaN
        return self._impl.sample_unscaled(rng) * self._scale

    def sample_ln(self, rng: RandomSource) -> float:
        """Natural log of a Gamma variate, computed without underflow.

        For tiny shapes almost every sample rounds to 0.0, which loses all
        information a ratio of samples needs; the log stays finite until
        ``1 / shape`` itself overflows, see :meth:`sample_ln_parts`.
        """
        if self._method is GammaMethod.ONE:
            return self._impl.sample_ln(rng)
        return self._impl.sample_unscaled_ln(rng) + math.log(self._scale)

    def sample_ln_parts(self, rng: RandomSource) -> tuple[float, float]:
        """Log sample split as ``(ln_u, rest)``, ``ln X = rest + ln_u / shape``.

        Below shape 1, ``ln_u / shape`` overflows to -inf for subnormal
        shapes; two such samples can still be ordered from ``ln_u`` and the
        shape. Other methods return ``ln_u == 0``.
        """
        if self._method is GammaMethod.SMALL:
            ln_u, rest = self._impl.sample_unscaled_ln_parts(rng)
            return ln_u, rest + math.log(self._scale)
        return 0.0, self.sample_ln(rng)


class ChiSquaredMethod(str, Enum):
    DOF_EXACTLY_ONE = "dof_exactly_one"
    DOF_ANYTHING_ELSE = "dof_anything_else"


class ChiSquared(BaseDistribution):
    """The chi-squared distribution ``χ²(k)`` with ``k`` degrees of freedom.

    For integral ``k`` this is the sum of squares of ``k`` standard normals.
    ``k == 1`` squares a single normal (Gamma at shape 1/2 would need the
    slower boosting path); every other ``k`` uses ``Gamma(k/2, 2)``.
    """

    name = "chi_squared"
    display_name = "Chi-Squared"
    description = "Chi-squared distribution with k degrees of freedom"
    category = "continuous"
    support = "[0, inf]"
    params_model = ChiSquaredParams

    __slots__ = ("_k", "_method", "_gamma")

    def __init__(self, k: float, dtype: DTypeLike | None = None):
        if k == 1.0:
            method = ChiSquaredMethod.DOF_EXACTLY_ONE
            gamma = None
        else:
            if not (0.5 * k > 0.0):
                raise DoFTooSmallError(k=k)
            method = ChiSquaredMethod.DOF_ANYTHING_ELSE
            gamma = Gamma(0.5 * k, 2.0)
        super().__init__(dtype)
        self._k = float(k)
        self._method = method
        self._gamma = gamma

    @property
    def params(self) -> ChiSquaredParams:
        return ChiSquaredParams(k=self._k)

    @property
    def method(self) -> ChiSquaredMethod:
        return self._method

    def _draw(self, rng: RandomSource) -> float:
        if self._method is ChiSquaredMethod.DOF_EXACTLY_ONE:
            norm = standard_normal(rng)
            return norm * norm
        return self._gamma.sample(rng)

    def sample_ln(self, rng: RandomSource) -> float:
        """Natural log of a chi-squared variate, computed without underflow."""
        if self._method is ChiSquaredMethod.DOF_EXACTLY_ONE:
            return 2.0 * floats.ln(abs(standard_normal(rng)))
        return self._gamma.sample_ln(rng)

    def sample_ln_parts(self, rng: RandomSource) -> tuple[float, float]:
        """Log sample split as in :meth:`Gamma.sample_ln_parts`, with shape ``k / 2``."""
        if self._method is ChiSquaredMethod.DOF_EXACTLY_ONE:
            return 0.0, self.sample_ln(rng)
        return self._gamma.sample_ln_parts(rng)


def _ln_chi_squared_mean(
    chi: ChiSquared, ln_dof: float, rng: RandomSource
) -> tuple[float, float]:
    """ln(χ²(k) / k) split as ``(ln_u, rest)``.

    The ratio tends to 1 as k grows, so infinite k gives 0 without drawing.
    """
    if ln_dof == math.inf:
        return 0.0, 0.0
    ln_u, rest = chi.sample_ln_parts(rng)
    return ln_u, rest - ln_dof


def _ln_ratio(
    x_parts: tuple[float, float],
    x_shape: float,
    y_parts: tuple[float, float],
    y_shape: float,
) -> float:
    """ln(X / Y) from two log samples split as ``(ln_u, rest)``.

    Equal logs, including equal infinities, give 0. When both boost terms
    overflowed to -inf the difference is rebuilt as
    ``(ln_u_x * y_shape / x_shape - ln_u_y) / y_shape + (rest_x - rest_y)``.
    """
    ln_u_x, rest_x = x_parts
    ln_u_y, rest_y = y_parts
    ln_x = rest_x + _boost(ln_u_x, 1.0 / x_shape)
    ln_y = rest_y + _boost(ln_u_y, 1.0 / y_shape)
    if ln_x != ln_y:
        return ln_x - ln_y
    if ln_x != -math.inf or ln_u_x == 0.0 or ln_u_y == 0.0:
        return 0.0
    if not (math.isfinite(rest_x) and math.isfinite(rest_y)):
        return 0.0
    d = ln_u_x * (y_shape / x_shape) - ln_u_y
    return d / y_shape + (rest_x - rest_y)


class FisherF(BaseDistribution):
    """The Fisher F distribution ``F(m, n)``.

    Equivalent to the ratio of two normalised chi-squared variates,
    ``F(m, n) = (χ²(m)/m) / (χ²(n)/n)``.
    """

    name = "fisher_f"
    display_name = "Fisher F"
    description = "Fisher F distribution, the ratio of two scaled chi-squared variates"
    category = "continuous"
    support = "[0, inf]"
    params_model = FisherFParams

    __slots__ = ("_m", "_n", "_numer", "_denom", "_ln_m", "_ln_n")

    def __init__(self, m: float, n: float, dtype: DTypeLike | None = None):
        if not (m > 0.0):
            raise MTooSmallError(m=m, n=n)
        if not (n > 0.0):
            raise NTooSmallError(m=m, n=n)
        # m / 2 or n / 2 may still underflow to zero
        try:
            numer = ChiSquared(m)
        except DoFTooSmallError:
            raise MTooSmallError(m=m, n=n) from None
        try:
            denom = ChiSquared(n)
        except DoFTooSmallError:
            raise NTooSmallError(m=m, n=n) from None
        super().__init__(dtype)
        self._m = float(m)
        self._n = float(n)
        self._numer = numer
        self._denom = denom
        self._ln_m = math.log(m)
        self._ln_n = math.log(n)

    @property
    def params(self) -> FisherFParams:
        return FisherFParams(m=self._m, n=self._n)

    def _draw(self, rng: RandomSource) -> float:
        x_parts = _ln_chi_squared_mean(self._numer, self._ln_m, rng)
        y_parts = _ln_chi_squared_mean(self._denom, self._ln_n, rng)
        return floats.exp(_ln_ratio(x_parts, 0.5 * self._m, y_parts, 0.5 * self._n))


class StudentT(BaseDistribution):
    """The Student t distribution ``t(n)`` with ``n`` degrees of freedom."""

    name = "student_t"
    display_name = "Student's t"
    description = "Student's t-distribution with heavier tails than normal"
    category = "continuous"
    support = "(-inf, inf)"
    params_model = StudentTParams

    __slots__ = ("_dof", "_ln_dof", "_chi")

    def __init__(self, n: float, dtype: DTypeLike | None = None):
        chi = ChiSquared(n)
        super().__init__(dtype)
        self._chi = chi
        self._dof = float(n)
        self._ln_dof = math.log(n)

    @property
    def params(self) -> StudentTParams:
        return StudentTParams(n=self._dof)

    def _draw(self, rng: RandomSource) -> float:
        norm = standard_normal(rng)
        if self._dof == math.inf:
            return norm
        if norm == 0.0:
            return 0.0
        return norm * floats.exp(0.5 * (self._ln_dof - self._chi.sample_ln(rng)))


class Beta(BaseDistribution):
    """The Beta distribution with shape parameters ``alpha`` and ``beta``.

    Sampled as ``X / (X + Y)`` for independent ``X ~ Gamma(alpha, 1)`` and
    ``Y ~ Gamma(beta, 1)``, evaluated as ``expit(ln X - ln Y)``.
    """

    name = "beta"
    display_name = "Beta"
    description = "Beta distribution for values between 0 and 1 (proportions, probabilities)"
    category = "continuous"
    support = "[0, 1]"
    params_model = BetaParams

    __slots__ = ("_alpha", "_beta", "_gamma_a", "_gamma_b")

    def __init__(self, alpha: float, beta: float, dtype: DTypeLike | None = None):
        try:
            gamma_a = Gamma(alpha, 1.0)
        except GammaError:
            raise AlphaTooSmallError(alpha=alpha, beta=beta) from None
        try:
            gamma_b = Gamma(beta, 1.0)
        except GammaError:
            raise BetaTooSmallError(alpha=alpha, beta=beta) from None
        super().__init__(dtype)
        self._alpha = float(alpha)
        self._beta = float(beta)
        self._gamma_a = gamma_a
        self._gamma_b = gamma_b

    @property
    def params(self) -> BetaParams:
        return BetaParams(alpha=self._alpha, beta=self._beta)

    def _draw(self, rng: RandomSource) -> float:
        x_parts = self._gamma_a.sample_ln_parts(rng)
        y_parts = self._gamma_b.sample_ln_parts(rng)
        return float(expit(_ln_ratio(x_parts, self._alpha, y_parts, self._beta)))
