"""Intake-to-CVUF microapp generation service."""

__version__ = "0.1.0"

__all__ = ["__version__"]
