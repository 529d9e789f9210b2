"""Exact random-variate generators.

Gamma (Marsaglia-Tsang), the Gamma-derived chi-squared, Fisher F, Student t
and Beta distributions, a truncated normal with Robert's one- and two-sided
samplers, the Zeta distribution and the (normal-)inverse Gaussian. Every
distribution validates its parameters once at construction and samples from
any :class:`RandomSource`, such as ``numpy.random.default_rng(seed)``.

Example:
    >>> from variates import Gamma, default_rng
    >>> rng = default_rng(42)
    >>> x = Gamma(2.0, 5.0).sample(rng)
"""

from __future__ import annotations

from variates.core.exceptions import (
    AbsoluteBetaNotLessThanAlphaError,
    AlphaInfiniteError,
    AlphaNegativeOrNullError,
    AlphaTooSmallError,
    ATooSmallError,
    BadVarianceError,
    BetaError,
    BetaTooSmallError,
    ChiSquaredError,
    DistributionError,
    DoFTooSmallError,
    ExponentialError,
    FisherFError,
    GammaError,
    InvalidBoundsError,
    InvalidMeanError,
    InvalidStdDevError,
    InverseGaussianError,
    LambdaTooSmallError,
    LimitError,
    MeanNegativeOrNullError,
    MTooSmallError,
    NormalError,
    NormalInverseGaussianError,
    NormalTruncatedError,
    NTooSmallError,
    ParameterError,
    ScaleTooLargeError,
    ScaleTooSmallError,
    ShapeNegativeOrNullError,
    ShapeTooSmallError,
    ValidationError,
    VariatesError,
    ZetaError,
)
from variates.services.base import BaseDistribution, Distribution
from variates.services.distribution_registry import DistributionRegistry, get_distribution_registry
from variates.services.gamma import (
    Beta,
    ChiSquared,
    ChiSquaredMethod,
    FisherF,
    Gamma,
    GammaMethod,
    StudentT,
)
from variates.services.inverse_gaussian import InverseGaussian, NormalInverseGaussian
from variates.services.normal_truncated import NormalTruncated, TruncationMethod
from variates.services.primitives import Exponential, Normal
from variates.services.rng import RandomSource, default_rng
from variates.services.zeta import Zeta

__version__ = "0.1.0"

__all__ = [
    # Distributions
    "BaseDistribution",
    "Distribution",
    "Gamma",
    "GammaMethod",
    "ChiSquared",
    "ChiSquaredMethod",
    "FisherF",
    "StudentT",
    "Beta",
    "NormalTruncated",
    "TruncationMethod",
    "Zeta",
    "Exponential",
    "Normal",
    "InverseGaussian",
    "NormalInverseGaussian",
    # Randomness
    "RandomSource",
    "default_rng",
    # Registry
    "DistributionRegistry",
    "get_distribution_registry",
    # Errors
    "VariatesError",
    "DistributionError",
    "LimitError",
    "ValidationError",
    "ParameterError",
    "GammaError",
    "ShapeTooSmallError",
    "ScaleTooSmallError",
    "ScaleTooLargeError",
    "ChiSquaredError",
    "DoFTooSmallError",
    "FisherFError",
    "MTooSmallError",
    "NTooSmallError",
    "BetaError",
    "AlphaTooSmallError",
    "BetaTooSmallError",
    "NormalTruncatedError",
    "InvalidStdDevError",
    "InvalidBoundsError",
    "InvalidMeanError",
    "ZetaError",
    "ATooSmallError",
    "ExponentialError",
    "LambdaTooSmallError",
    "NormalError",
    "BadVarianceError",
    "InverseGaussianError",
    "MeanNegativeOrNullError",
    "ShapeNegativeOrNullError",
    "NormalInverseGaussianError",
    "AlphaNegativeOrNullError",
    "AlphaInfiniteError",
    "AbsoluteBetaNotLessThanAlphaError",
]
