"""Distribution implementations, the registry and the batch sampler."""
