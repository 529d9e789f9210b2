"""Pydantic models for parameters, distribution metadata and batch results."""
