"""Core module - configuration and exceptions."""

from __future__ import annotations

from variates.core.config import CURRENT_SCHEMA_VERSION, SUPPORTED_DTYPES, settings
from variates.core.exceptions import (
    DistributionError,
    LimitError,
    ParameterError,
    ValidationError,
    VariatesError,
)

__all__ = [
    "settings",
    "SUPPORTED_DTYPES",
    "CURRENT_SCHEMA_VERSION",
    "VariatesError",
    "DistributionError",
    "ParameterError",
    "LimitError",
    "ValidationError",
]
