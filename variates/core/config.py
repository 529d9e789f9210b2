"""Library configuration and constants."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    # Truncated normal method selection (standardized units)
    # These only trade speed between strategies; every choice samples the exact law.
    truncnorm_one_sided_threshold: float = 0.5
    truncnorm_rejection_width: float = 1.0
    truncnorm_rejection_reach: float = 1.0
    truncnorm_uniform_efficiency: float = 1.0

    # Batch sampling limits
    max_samples: int = 10_000_000
    default_dtype: str = "float64"  # float64, float32

    # Logging
    log_level: str = "WARNING"

    class Config:
        env_file = ".env"
        env_prefix = "VARIATES_"
        extra = "ignore"


settings = Settings()


# Output precisions accepted by distributions and the batch sampler
SUPPORTED_DTYPES = ("float64", "float32")

# Schema version of serialized parameter sets and sample results
CURRENT_SCHEMA_VERSION = "1.0"
