"""Sampler service - batch sampling from named distributions.

This module ties the registry and the distributions together:
- Resolves a distribution by name from raw parameters
- Picks a seed when the caller does not provide one
- Draws a batch of samples
- Computes summary statistics of the batch
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from variates.core.config import settings
from variates.core.exceptions import LimitError
from variates.models.generation import SampleRequest, SampleResult, SampleStats
from variates.services.distribution_registry import get_distribution_registry
from variates.services.rng import default_rng

logger = logging.getLogger(__name__)


def generate_samples(request: SampleRequest) -> SampleResult:
    """Draw a batch of samples as described by the request.

    Args:
        request: Distribution name, parameters, size, seed and dtype

    Returns:
        SampleResult with the samples, the seed used and summary statistics

    Raises:
        LimitError: If the requested size exceeds the configured maximum
        DistributionError: If the distribution or its parameter mapping is invalid
        ParameterError: If the parameter values are out of range
    """
    # Step 1: Enforce limits
    if request.size > settings.max_samples:
        raise LimitError("max_samples", request.size, settings.max_samples)

    # Step 2: Build the distribution
    registry = get_distribution_registry()
    dist = registry.create(request.distribution, request.params, dtype=request.dtype)

    # Step 3: Seed handling
    seed = request.seed
    if seed is None:
        seed = int(np.random.randint(0, 2**31 - 1))

    logger.info(
        "Sampling %d values from %r (seed=%d, dtype=%s)", request.size, dist, seed, dist.dtype
    )

    # Step 4: Sample
    rng = default_rng(seed)
    values = dist.sample_n(rng, request.size)

    # Step 5: Compute statistics
    stats = _compute_stats(values)
    if stats.non_finite_count:
        logger.info("%d of %d samples are not finite", stats.non_finite_count, stats.count)

    return SampleResult(
        distribution=dist.name,
        params=dist.params.model_dump(),
        size=request.size,
        seed=seed,
        dtype=dist.dtype.name,
        values=values.astype(np.float64).tolist(),
        stats=stats,
    )


def samples_to_dataframe(result: SampleResult) -> pd.DataFrame:
    """Convert a batch of samples to a single-column DataFrame named after the distribution."""
    return pd.DataFrame({result.distribution: np.asarray(result.values, dtype=result.dtype)})


def _compute_stats(values: np.ndarray) -> SampleStats:
    """Compute summary statistics for a batch of samples.

    Args:
        values: 1-D array of samples

    Returns:
        SampleStats over the finite values, with the count of the others
    """
    series = pd.Series(values, dtype=np.float64)
    finite = series[np.isfinite(series)]
    non_finite_count = len(series) - len(finite)

    if finite.empty:
        return SampleStats(count=len(series), non_finite_count=non_finite_count)

    # Sample std is undefined for a single value
    std = float(finite.std()) if len(finite) > 1 else None

    return SampleStats(
        count=len(series),
        mean=float(finite.mean()),
        std=std,
        min=float(finite.min()),
        max=float(finite.max()),
        median=float(finite.median()),
        non_finite_count=non_finite_count,
    )
