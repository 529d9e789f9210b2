"""The Zeta distribution."""

from __future__ import annotations

import logging
import math

import numpy as np
from numpy.typing import DTypeLike

from variates.core.exceptions import ATooSmallError
from variates.models.params import ZetaParams
from variates.services.base import BaseDistribution
from variates.services.rng import RandomSource, open_closed01, standard_uniform

logger = logging.getLogger(__name__)


class Zeta(BaseDistribution):
    """Samples floating-point numbers according to the zeta distribution.

    The zeta distribution is the limit of the Zipf distribution as the
    number of elements grows. ``P(X = k) = k^(-a) / ζ(a)`` for integers
    ``k >= 1``; samples are integral values typed as floats.

    The rejection algorithm follows Devroye, "Non-Uniform Random Variate
    Generation" (1986), p. 551, as used by numpy. Each iteration draws ``u``
    on (0, 1] and then ``v`` on [0, 1); that draw order is fixed, since
    changing it changes the output sequence for a given seed.
    """

    name = "zeta"
    display_name = "Zeta"
    description = "Zeta (Zipf limit) distribution over the positive integers"
    category = "discrete"
    support = "{1, 2, 3, ...}"
    params_model = ZetaParams

    __slots__ = ("_a", "_a_minus_1", "_b", "_b_minus_1", "_x_max")

    def __init__(self, a: float, dtype: DTypeLike | None = None):
        if not (a > 1.0):
            raise ATooSmallError(a=a)
        super().__init__(dtype)
        self._a = float(a)
        self._a_minus_1 = a - 1.0
        if self._a_minus_1 < 1024.0:
            self._b = 2.0**self._a_minus_1
            # b - 1 without cancellation for a close to 1
            self._b_minus_1 = math.expm1(self._a_minus_1 * math.log(2.0))
        else:
            # 2^(a-1) overflows; the law is a point mass at 1 in double precision
            self._b = math.inf
            self._b_minus_1 = math.inf
        # Proposals beyond the output precision are rejected rather than rounded to inf
        self._x_max = float(np.finfo(self.dtype).max)
        logger.debug("Zeta(a=%r) with b=%r", a, self._b)

    @property
    def params(self) -> ZetaParams:
        return ZetaParams(a=self._a)

    def _draw(self, rng: RandomSource) -> float:
        a_minus_1 = self._a_minus_1
        b = self._b
        if b == math.inf:
            return 1.0
        while True:
            u = open_closed01(rng)
            v = standard_uniform(rng)
            try:
                x = float(math.floor(u ** (-1.0 / a_minus_1)))
            except OverflowError:
                # u^(-1/(a-1)) beyond the float range is a rejected draw
                continue

            if x < 1.0 or x > self._x_max:
                continue

            t_minus_1 = math.expm1(a_minus_1 * math.log1p(1.0 / x))
            t = 1.0 + t_minus_1
            if v * x * t_minus_1 / self._b_minus_1 <= t / b:
                return x
