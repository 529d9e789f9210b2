"""Custom exceptions for the variates library."""

from __future__ import annotations

from typing import Any


class VariatesError(Exception):
    """Base exception for all variates errors."""

    code: str = "UNKNOWN_ERROR"
    phase: str = "unknown"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to error response dict."""
        error = {
            "code": self.code,
            "message": self.message,
            "phase": self.phase,
        }
        if self.details:
            error["details"] = self.details
        return {"error": error}


class DistributionError(VariatesError):
    """Error resolving a distribution by name or its raw parameter mapping."""

    code = "DISTRIBUTION_ERROR"
    phase = "resolve"

    def __init__(self, distribution_type: str, error_msg: str):
        super().__init__(
            message=f"Distribution '{distribution_type}' error: {error_msg}",
            details={"distribution_type": distribution_type, "error": error_msg},
        )


class ValidationError(VariatesError):
    """Malformed batch sampling request (size, seed or dtype)."""

    code = "VALIDATION_ERROR"
    phase = "validate"


class LimitError(VariatesError):
    """Exceeded configured limits."""

    code = "LIMIT_ERROR"
    phase = "validate"

    def __init__(self, limit_name: str, value: int, max_value: int):
        super().__init__(
            message=f"Exceeded {limit_name} limit: {value} > {max_value}",
            details={"limit": limit_name, "value": value, "max": max_value},
        )


class ParameterError(VariatesError):
    """A distribution parameter failed validation at construction.

    Subclasses form a closed set per distribution family. Each leaf names one
    violated constraint through ``reason``; the offending parameters are kept
    in ``details`` so callers can report them.
    """

    code = "PARAMETER_ERROR"
    phase = "construct"
    distribution: str = "unknown"
    reason: str = "invalid parameter"

    def __init__(self, **params: float):
        self.params = params
        super().__init__(
            message=f"{self.reason} in {self.distribution} distribution",
            details={"distribution": self.distribution, "params": params},
        )


# Gamma


class GammaError(ParameterError):
    """Invalid Gamma parameters."""

    distribution = "Gamma"


class ShapeTooSmallError(GammaError):
    code = "SHAPE_TOO_SMALL"
    reason = "shape <= 0 or is NaN"


class ScaleTooSmallError(GammaError):
    code = "SCALE_TOO_SMALL"
    reason = "scale <= 0 or is NaN"


class ScaleTooLargeError(GammaError):
    code = "SCALE_TOO_LARGE"
    reason = "1 / scale == 0"


# Chi-squared


class ChiSquaredError(ParameterError):
    """Invalid chi-squared parameters."""

    distribution = "chi-squared"


class DoFTooSmallError(ChiSquaredError):
    code = "DOF_TOO_SMALL"
    reason = "0.5 * k <= 0 or is NaN"


# Fisher F


class FisherFError(ParameterError):
    """Invalid Fisher F parameters."""

    distribution = "Fisher F"


class MTooSmallError(FisherFError):
    code = "M_TOO_SMALL"
    reason = "m <= 0 or is NaN"


class NTooSmallError(FisherFError):
    code = "N_TOO_SMALL"
    reason = "n <= 0 or is NaN"


# Beta


class BetaError(ParameterError):
    """Invalid Beta parameters."""

    distribution = "Beta"


class AlphaTooSmallError(BetaError):
    code = "ALPHA_TOO_SMALL"
    reason = "alpha <= 0 or is NaN"


class BetaTooSmallError(BetaError):
    code = "BETA_TOO_SMALL"
    reason = "beta <= 0 or is NaN"


# Truncated normal


class NormalTruncatedError(ParameterError):
    """Invalid truncated normal parameters."""

    distribution = "truncated normal"


class InvalidStdDevError(NormalTruncatedError):
    code = "INVALID_STD_DEV"
    reason = "std_dev <= 0, infinite or NaN"


class InvalidBoundsError(NormalTruncatedError):
    code = "INVALID_BOUNDS"
    reason = "lower >= upper or a bound is NaN"


class InvalidMeanError(NormalTruncatedError):
    code = "INVALID_MEAN"
    reason = "mean is infinite or NaN"


# Zeta


class ZetaError(ParameterError):
    """Invalid Zeta parameters."""

    distribution = "Zeta"


class ATooSmallError(ZetaError):
    code = "A_TOO_SMALL"
    reason = "a <= 1 or is NaN"


# Primitives


class ExponentialError(ParameterError):
    """Invalid exponential parameters."""

    distribution = "exponential"


class LambdaTooSmallError(ExponentialError):
    code = "LAMBDA_TOO_SMALL"
    reason = "rate < 0 or is NaN"


class NormalError(ParameterError):
    """Invalid normal parameters."""

    distribution = "normal"


class BadVarianceError(NormalError):
    code = "BAD_VARIANCE"
    reason = "std_dev < 0 or is NaN"


# Inverse Gaussian family


class InverseGaussianError(ParameterError):
    """Invalid inverse Gaussian parameters."""

    distribution = "inverse Gaussian"


class MeanNegativeOrNullError(InverseGaussianError):
    code = "MEAN_NEGATIVE_OR_NULL"
    reason = "mean <= 0 or is NaN"


class ShapeNegativeOrNullError(InverseGaussianError):
    code = "SHAPE_NEGATIVE_OR_NULL"
    reason = "shape <= 0 or is NaN"


class NormalInverseGaussianError(ParameterError):
    """Invalid normal-inverse Gaussian parameters."""

    distribution = "normal inverse Gaussian"


class AlphaNegativeOrNullError(NormalInverseGaussianError):
    code = "ALPHA_NEGATIVE_OR_NULL"
    reason = "alpha <= 0 or is NaN"


class AlphaInfiniteError(NormalInverseGaussianError):
    code = "ALPHA_INFINITE"
    reason = "alpha is +infinity"


class AbsoluteBetaNotLessThanAlphaError(NormalInverseGaussianError):
    code = "ABSOLUTE_BETA_NOT_LESS_THAN_ALPHA"
    reason = "|beta| >= alpha or is NaN"
