"""Batch sampling request and result models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from variates.core.config import CURRENT_SCHEMA_VERSION


class SampleRequest(BaseModel):
    """A request for a batch of samples from one named distribution."""

    distribution: str = Field(..., description="Registered distribution name")
    params: dict[str, float] = Field(default_factory=dict, description="Distribution parameters")
    size: int = Field(..., ge=0, description="Number of samples to draw")
    seed: int | None = Field(None, ge=0, description="Random seed (None picks a fresh one)")
    dtype: Literal["float64", "float32"] | None = Field(
        None, description="Output precision (None uses the configured default)"
    )


class SampleStats(BaseModel):
    """Summary statistics of a batch of samples.

    Moments and order statistics are computed over the finite values only;
    they are None when there are none.
    """

    count: int = Field(..., description="Number of samples")
    mean: float | None = Field(None, description="Mean of the finite values")
    std: float | None = Field(None, description="Sample standard deviation of the finite values")
    min: float | None = Field(None, description="Minimum finite value")
    max: float | None = Field(None, description="Maximum finite value")
    median: float | None = Field(None, description="Median of the finite values")
    non_finite_count: int = Field(0, description="Number of infinite or NaN values")


class SampleResult(BaseModel):
    """Result of a batch sampling request.

    Non-finite floats serialize to JSON as the strings "Infinity",
    "-Infinity" and "NaN"; samples may be infinite.
    """

    model_config = ConfigDict(ser_json_inf_nan="strings")

    distribution: str = Field(..., description="Distribution name")
    params: dict[str, float] = Field(..., description="Parameters the distribution was built from")
    size: int = Field(..., description="Number of samples drawn")
    seed: int = Field(..., description="Random seed used")
    dtype: str = Field(..., description="Output precision")
    values: list[float] = Field(..., description="The samples")
    stats: SampleStats = Field(..., description="Summary statistics")
    schema_version: str = Field(CURRENT_SCHEMA_VERSION, description="Schema version")
