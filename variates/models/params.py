"""Parameter sets for each distribution family.

Parameter sets are frozen so a constructed distribution can hand out its
parameters without exposing mutable state. Range constraints are not
enforced here: the distribution constructors check them and raise the
family's typed error, which keeps NaN handling in one place.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DistributionParams(BaseModel):
    """Base class for distribution parameter sets."""

    model_config = ConfigDict(frozen=True, extra="forbid", strict=True)


def _positive(description: str) -> Any:
    return Field(..., description=description, json_schema_extra={"min_value": 0.0})


class GammaParams(DistributionParams):
    shape: float = _positive("Shape parameter k (must be positive)")
    scale: float = _positive("Scale parameter θ (must be positive)")


class ChiSquaredParams(DistributionParams):
    k: float = _positive("Degrees of freedom (must be positive)")


class FisherFParams(DistributionParams):
    m: float = _positive("Numerator degrees of freedom (must be positive)")
    n: float = _positive("Denominator degrees of freedom (must be positive)")


class StudentTParams(DistributionParams):
    n: float = _positive("Degrees of freedom (must be positive)")


class BetaParams(DistributionParams):
    alpha: float = _positive("Alpha shape parameter (must be positive)")
    beta: float = _positive("Beta shape parameter (must be positive)")


class NormalTruncatedParams(DistributionParams):
    mean: float = Field(..., description="Mean of the untruncated normal")
    std_dev: float = _positive("Standard deviation of the untruncated normal")
    lower: float = Field(..., description="Lower truncation bound (may be -inf)")
    upper: float = Field(..., description="Upper truncation bound (may be inf)")


class ZetaParams(DistributionParams):
    a: float = Field(
        ..., description="Exponent a (must be greater than 1)", json_schema_extra={"min_value": 1.0}
    )


class ExponentialParams(DistributionParams):
    rate: float = Field(
        ..., description="Rate λ (0 gives a point mass at infinity)", json_schema_extra={"min_value": 0.0}
    )


class NormalParams(DistributionParams):
    mean: float = Field(..., description="Mean (center) of the distribution")
    std_dev: float = Field(
        ..., description="Standard deviation (must be non-negative)", json_schema_extra={"min_value": 0.0}
    )


class InverseGaussianParams(DistributionParams):
    mean: float = _positive("Mean μ (must be positive)")
    shape: float = _positive("Shape λ (must be positive)")


class NormalInverseGaussianParams(DistributionParams):
    alpha: float = _positive("Tail heaviness α (must be positive and finite)")
    beta: float = Field(..., description="Asymmetry β (|β| must be less than α)")
