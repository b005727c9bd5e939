"""Flat audit record for the request-log spreadsheet."""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Sequence

from ..models import TemplateMatch, ValidationWarning


def build_sheet_record(
    *,
    request_id: str,
    timestamp: str,
    inputs: Mapping[str, Any],
    template_match: TemplateMatch,
    generation_time_ms: int,
    warnings: Sequence[ValidationWarning],
    success: bool,
) -> Dict[str, Any]:
    """Return one spreadsheet row; list-valued columns are JSON strings.

    ``inputs`` is the canonical intake mapping, or empty for failed requests.
    """
    return {
        "requestId": request_id,
        "timestamp": timestamp,
        "userName": inputs.get("userName"),
        "userEmail": inputs.get("userEmail"),
        "microappName": inputs.get("microappName"),
        "department": inputs.get("owningDepartment"),
        "description": inputs.get("microappDescription"),
        "userType": inputs.get("userType"),
        "estimatedVolume": inputs.get("estimatedVolume"),
        "submitActions": json.dumps(list(inputs.get("submitActions") or [])),
        "complianceRequirements": json.dumps(list(inputs.get("complianceRequirements") or [])),
        "templateMatched": template_match.template_id or "none",
        "matchScore": template_match.score,
        "generationTimeMs": generation_time_ms,
        "warningCount": len(warnings),
        "warnings": json.dumps([warning.to_dict() for warning in warnings]),
        "success": success,
        "fullInputs": json.dumps(dict(inputs), default=str),
    }


__all__ = ["build_sheet_record"]
