"""IEEE-754 style float helpers.

Python's ``math`` module raises where hardware float arithmetic would
saturate (``log(0)``, overflowing ``exp`` and ``pow``). Rejection loops
rely on the saturating behaviour, so these wrappers restore it.
"""

from __future__ import annotations

import math
import sys

FLOAT_MAX = sys.float_info.max
LN_FLOAT_MAX = math.log(FLOAT_MAX)


def ln(x: float) -> float:
    """Natural log that maps 0 to -inf and inf to inf."""
    if x > 0.0:
        return math.log(x)
    if x == 0.0:
        return -math.inf
    return math.nan


def exp(x: float) -> float:
    """Exponential that overflows to inf instead of raising."""
    if x > LN_FLOAT_MAX:
        return math.inf
    return math.exp(x)


def clamp_finite(x: float) -> float:
    """Clamp an overflowed value back into the finite float range."""
    if x > FLOAT_MAX:
        return FLOAT_MAX
    if x < -FLOAT_MAX:
        return -FLOAT_MAX
    return x


def clamp(x: float, lower: float, upper: float) -> float:
    return min(max(x, lower), upper)


def shift_scale(mean: float, scale: float, z: float) -> float:
    """``mean + scale * z`` for finite ``mean``, ``scale`` and ``z``.

    ``scale * z`` alone may overflow while the sum is representable, e.g.
    ``-1e308 + 1e308 * 2.5``; that case is evaluated as
    ``scale * (z + mean / scale)`` instead.
    """
    x = mean + scale * z
    if math.isinf(x) and scale != 0.0:
        return scale * (z + mean / scale)
    return x
