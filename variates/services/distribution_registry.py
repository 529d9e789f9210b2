"""Distribution registry for constructing samplers by name.

This module provides a registry of distribution classes that can be looked
up by name and constructed from a plain parameter mapping, e.g. one decoded
from JSON or given on the command line. Every distribution in the library is
registered with the global registry.
"""

from __future__ import annotations

from typing import Any

import pydantic
from numpy.typing import DTypeLike

from variates.core.exceptions import DistributionError
from variates.models.distribution import DistributionInfo
from variates.services.base import BaseDistribution
from variates.services.gamma import Beta, ChiSquared, FisherF, Gamma, StudentT
from variates.services.inverse_gaussian import InverseGaussian, NormalInverseGaussian
from variates.services.normal_truncated import NormalTruncated
from variates.services.primitives import Exponential, Normal
from variates.services.zeta import Zeta


class DistributionRegistry:
    """Registry for managing available distributions.

    Provides methods to register distribution classes, retrieve them by
    name and build instances from raw parameters.
    """

    def __init__(self):
        """Initialize an empty distribution registry."""
        self._distributions: dict[str, type[BaseDistribution]] = {}

    def register_distribution(self, dist: type[BaseDistribution]) -> None:
        """Register a distribution class in the registry.

        Args:
            dist: Distribution class to register

        Raises:
            ValueError: If a distribution with the same name already exists
        """
        if dist.name in self._distributions:
            raise ValueError(f"Distribution '{dist.name}' is already registered")
        self._distributions[dist.name] = dist

    def get_distribution(self, name: str) -> type[BaseDistribution]:
        """Get a distribution class by name.

        Args:
            name: Name of the distribution to retrieve

        Returns:
            The requested distribution class

        Raises:
            DistributionError: If distribution is not found
        """
        if name in self._distributions:
            return self._distributions[name]

        available = list(self._distributions.keys())
        raise DistributionError(name, f"Unknown distribution '{name}'. Available: {available}.")

    def create(
        self, name: str, params: dict[str, Any], dtype: DTypeLike | None = None
    ) -> BaseDistribution:
        """Build a distribution from its name and a raw parameter mapping.

        Args:
            name: Registered distribution name
            params: Parameter values keyed by parameter name
            dtype: Output precision (float64 or float32), None for the configured default

        Returns:
            The constructed distribution

        Raises:
            DistributionError: If the name is unknown or a parameter is missing,
                unexpected or not a number
            ParameterError: If the values violate the distribution's constraints
        """
        dist_cls = self.get_distribution(name)
        try:
            validated = dist_cls.params_model.model_validate(params)
        except pydantic.ValidationError as e:
            problems = [
                f"{'.'.join(str(loc) for loc in err['loc']) or 'params'}: {err['msg']}"
                for err in e.errors()
            ]
            raise DistributionError(name, f"Invalid parameters: {'; '.join(problems)}")
        return dist_cls.from_params(validated, dtype=dtype)

    def get_available_distributions(self) -> list[DistributionInfo]:
        """Get information about all registered distributions.

        Returns:
            List of DistributionInfo objects describing each distribution
        """
        return [dist.get_info() for dist in self._distributions.values()]

    def is_registered(self, name: str) -> bool:
        """Check if a distribution is registered.

        Args:
            name: Distribution name to check

        Returns:
            True if the distribution is registered, False otherwise
        """
        return name in self._distributions


# Global registry instance
_global_registry = DistributionRegistry()


# Register built-in distributions
_global_registry.register_distribution(Gamma)
_global_registry.register_distribution(ChiSquared)
_global_registry.register_distribution(FisherF)
_global_registry.register_distribution(StudentT)
_global_registry.register_distribution(Beta)
_global_registry.register_distribution(NormalTruncated)
_global_registry.register_distribution(Zeta)
_global_registry.register_distribution(Exponential)
_global_registry.register_distribution(Normal)
_global_registry.register_distribution(InverseGaussian)
_global_registry.register_distribution(NormalInverseGaussian)


def get_distribution_registry() -> DistributionRegistry:
    """Get the global distribution registry.

    Returns:
        The global DistributionRegistry instance
    """
    return _global_registry
