"""Intake validation package."""

from .base import CombinationCheck, IntakeCheck, MissingDetailCheck
from .intake import DEFAULT_CHECKS, ValidationEngine

__all__ = [
    "CombinationCheck",
    "DEFAULT_CHECKS",
    "IntakeCheck",
    "MissingDetailCheck",
    "ValidationEngine",
]
