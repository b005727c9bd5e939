"""Human-readable artifacts derived from an intake request."""

from .dependencies import generate_dependencies
from .estimate import estimate_build_time, estimate_hours
from .pitch import generate_pitch_points
from .setup_guide import generate_setup_guide

__all__ = [
    "estimate_build_time",
    "estimate_hours",
    "generate_dependencies",
    "generate_pitch_points",
    "generate_setup_guide",
]
