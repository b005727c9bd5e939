"""Intake payload normalization."""

from .normalizer import InputNormalizer, normalize

__all__ = ["InputNormalizer", "normalize"]
