"""Rough build-effort estimate for a requested microapp."""

from __future__ import annotations

from typing import Tuple

from ..models import IntakeRequest

BASE_HOURS = 2

# (upper bound in hours, label); anything above the last bound is Enterprise.
EFFORT_TIERS: Tuple[Tuple[int, str], ...] = (
    (3, "2-3 hours (Simple)"),
    (6, "4-6 hours (Moderate)"),
    (10, "1-2 days (Complex)"),
)
ENTERPRISE_TIER = "2-3 days (Enterprise)"


def estimate_hours(request: IntakeRequest) -> int:
    """Sum the base effort and the per-feature complexity increments."""
    hours = BASE_HOURS
    if request.wants_branching:
        hours += 2
    if request.wants_approval:
        hours += 1
    if len(request.submit_actions) > 2:
        hours += 2
    if request.wants_lookup:
        hours += 2
    if request.wants_multi_language:
        hours += len(request.languages) or 2
    if request.compliance_requirements:
        hours += 1
    return hours


def estimate_build_time(request: IntakeRequest) -> str:
    hours = estimate_hours(request)
    for bound, label in EFFORT_TIERS:
        if hours <= bound:
            return label
    return ENTERPRISE_TIER


__all__ = ["EFFORT_TIERS", "ENTERPRISE_TIER", "estimate_build_time", "estimate_hours"]
