"""Randomness-source capability consumed by every sampler.

Distributions never seed or store a source; it is borrowed for the duration
of one ``sample`` call. ``numpy.random.Generator`` satisfies
:class:`RandomSource` structurally, so callers normally pass
``numpy.random.default_rng(seed)``.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class RandomSource(Protocol):
    """The primitive draws the samplers are built from."""

    def random(self) -> float:
        """Uniform float on [0, 1)."""
        ...

    def standard_normal(self) -> float:
        """Standard normal float."""
        ...

    def standard_exponential(self) -> float:
        """Exponential float with rate 1."""
        ...


def default_rng(seed: int | None = None) -> np.random.Generator:
    """Create the default randomness source."""
    return np.random.default_rng(seed)


def standard_uniform(rng: RandomSource) -> float:
    """Uniform on [0, 1)."""
    return float(rng.random())


def open_closed01(rng: RandomSource) -> float:
    """Uniform on (0, 1]."""
    return 1.0 - float(rng.random())


def uniform_range(rng: RandomSource, low: float, high: float) -> float:
    """Uniform on [low, high) for finite low < high."""
    return low + (high - low) * float(rng.random())


def standard_normal(rng: RandomSource) -> float:
    return float(rng.standard_normal())


def standard_exponential(rng: RandomSource) -> float:
    return float(rng.standard_exponential())
