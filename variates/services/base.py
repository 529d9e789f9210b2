"""Common interface of every distribution in the library.

A distribution validates its parameters and chooses its algorithm once, in
the constructor; afterwards it is immutable and ``sample`` never fails. The
output precision is an explicit ``dtype`` argument: arithmetic runs in
double precision and each result is rounded to the requested float type.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Protocol

import numpy as np
from numpy.typing import DTypeLike

from variates.core.config import SUPPORTED_DTYPES, settings
from variates.core.exceptions import DistributionError
from variates.models.distribution import DistributionInfo, ParameterInfo
from variates.models.params import DistributionParams
from variates.services.rng import RandomSource


class Distribution(Protocol):
    """Protocol for scalar distribution implementations."""

    name: str

    def sample(self, rng: RandomSource) -> float:
        """Draw one sample using ``rng`` as the randomness source."""
        ...


def resolve_dtype(name: str, dtype: DTypeLike | None) -> np.dtype:
    """Resolve a requested output precision.

    Args:
        name: Distribution name, used in the error message
        dtype: Anything ``numpy.dtype`` accepts, or None for the configured default

    Returns:
        The numpy dtype (float64 or float32)

    Raises:
        DistributionError: If the dtype is not a supported float type
    """
    if dtype is None:
        dtype = settings.default_dtype
    try:
        resolved = np.dtype(dtype)
    except TypeError as e:
        raise DistributionError(name, f"Invalid dtype {dtype!r}: {e}")
    if resolved.name not in SUPPORTED_DTYPES:
        raise DistributionError(
            name, f"dtype must be one of {list(SUPPORTED_DTYPES)}, got {resolved.name}"
        )
    return resolved


class BaseDistribution(ABC):
    """Base class for distribution implementations.

    Subclasses implement ``_draw`` (one double-precision sample) and
    ``params``; the base class handles precision, batching, metadata and
    value comparison.
    """

    name: str
    display_name: str
    description: str
    category: str
    support: str
    params_model: type[DistributionParams]

    __slots__ = ("_dtype",)

    def __init__(self, dtype: DTypeLike | None = None):
        self._dtype = resolve_dtype(self.name, dtype)

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    @abstractmethod
    def params(self) -> DistributionParams:
        """The validated parameter set this distribution was built from."""

    @abstractmethod
    def _draw(self, rng: RandomSource) -> float:
        """Draw one sample in double precision."""

    def sample(self, rng: RandomSource) -> Any:
        """Draw one sample.

        Returns a Python float for float64 distributions and a
        ``numpy.float32`` for float32 distributions.
        """
        value = self._draw(rng)
        if self._dtype == np.float64:
            return value
        with np.errstate(over="ignore"):
            return self._dtype.type(value)

    def sample_n(self, rng: RandomSource, size: int) -> np.ndarray:
        """Draw ``size`` independent samples into a 1-D array of ``dtype``."""
        if size < 0:
            raise DistributionError(self.name, f"size must be non-negative, got {size}")
        with np.errstate(over="ignore"):
            return np.fromiter(
                (self._draw(rng) for _ in range(size)), dtype=self._dtype, count=size
            )

    @classmethod
    def from_params(cls, params: DistributionParams, dtype: DTypeLike | None = None):
        """Rebuild a distribution from a (possibly deserialized) parameter set."""
        if not isinstance(params, cls.params_model):
            raise DistributionError(
                cls.name,
                f"Expected {cls.params_model.__name__}, got {type(params).__name__}",
            )
        return cls(**params.model_dump(), dtype=dtype)

    @classmethod
    def get_info(cls) -> DistributionInfo:
        """Get distribution metadata as DistributionInfo."""
        parameters = []
        for field_name, field in cls.params_model.model_fields.items():
            extra = field.json_schema_extra if isinstance(field.json_schema_extra, dict) else {}
            parameters.append(
                ParameterInfo(
                    name=field_name,
                    description=field.description or field_name,
                    min_value=extra.get("min_value"),
                    max_value=extra.get("max_value"),
                )
            )
        return DistributionInfo(
            name=cls.name,
            display_name=cls.display_name,
            description=cls.description,
            category=cls.category,  # type: ignore
            support=cls.support,
            parameters=parameters,
        )

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.params == other.params and self._dtype == other._dtype

    def __hash__(self) -> int:
        return hash((type(self), self.params, self._dtype.name))

    def __repr__(self) -> str:
        args = ", ".join(f"{k}={v!r}" for k, v in self.params.model_dump().items())
        if self._dtype != np.float64:
            args += f", dtype={self._dtype.name}"
        return f"{type(self).__name__}({args})"
