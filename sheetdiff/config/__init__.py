"""Batch configuration loading and validation."""
