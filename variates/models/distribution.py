"""Distribution-related models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class ParameterInfo(BaseModel):
    """Information about a distribution parameter."""

    name: str = Field(..., description="Parameter name")
    description: str = Field(..., description="Parameter description")
    type: Literal["float"] = Field("float", description="Parameter type")
    required: bool = Field(True, description="Whether the parameter is required")
    default: float | None = Field(None, description="Default value")
    min_value: float | None = Field(None, description="Minimum value (exclusive, if applicable)")
    max_value: float | None = Field(None, description="Maximum value (if applicable)")


class DistributionInfo(BaseModel):
    """Information about an available distribution."""

    name: str = Field(..., description="Distribution name (e.g., 'gamma')")
    display_name: str = Field(..., description="Display name (e.g., 'Gamma')")
    description: str = Field(..., description="Distribution description")
    category: Literal["continuous", "discrete"] = Field(
        ..., description="Distribution category (of the law, samples are always floats)"
    )
    support: str = Field(..., description="Support of the law, e.g. '[0, inf)'")
    parameters: list[ParameterInfo] = Field(..., description="List of parameters")
