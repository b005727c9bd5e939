"""Sales pitch notes and talk track for a requested microapp."""

from __future__ import annotations

from typing import Dict, List

from ..models import IntakeRequest

_PROCESS_POINTS: Dict[str, str] = {
    "manual": "⏱️ **Eliminates manual process** - No more emails, phone calls, or paper forms",
    "spreadsheets": "⏱️ **Replaces spreadsheet chaos** - Structured data capture with validation",
    "bad software": "⏱️ **Better user experience** - Modern, mobile-friendly interface",
}

_VOLUME_POINTS: Dict[str, str] = {
    "10000+": "📈 **High-volume ready** - Handles 10,000+ submissions/month efficiently",
    "2000-10000": "📈 **Scales with demand** - Built for thousands of monthly submissions",
}


def generate_pitch_points(request: IntakeRequest) -> str:
    """Return the benefit bullets followed by a one-paragraph talk track."""
    points: List[str] = ["## Why This Microapp Matters\n"]

    process = (request.current_process or "").lower()
    if process in _PROCESS_POINTS:
        points.append(_PROCESS_POINTS[process])
    if request.estimated_volume in _VOLUME_POINTS:
        points.append(_VOLUME_POINTS[request.estimated_volume])
    if len(request.submit_actions) > 1:
        points.append(
            "🔗 **Connected ecosystem** - Automatically syncs to " + ", ".join(request.submit_actions)
        )
    if request.compliance_requirements:
        points.append(
            f"✅ **Compliance-ready** - Built with {', '.join(request.compliance_requirements)} "
            "requirements in mind"
        )
    if request.wants_save_progress:
        points.append("💾 **User-friendly** - Save and return later capability")
    if request.wants_multi_language:
        count = len(request.languages) or "multiple"
        points.append(f"🌐 **Global reach** - Supports {count} languages")

    points.append("\n## Talk Track")
    points.append(_talk_track(request))
    return "\n".join(points)


def _talk_track(request: IntakeRequest) -> str:
    department = request.owning_department or "your team"
    subject = (request.microapp_name or "this process").lower()
    before = "manual processes" if (request.current_process or "").lower() == "manual" else "the current system"
    outcome = (
        "automatically notifies stakeholders"
        if request.has_action("notification")
        else "captures everything needed"
    )
    storage = "syncs directly to your CRM" if request.has_action("crm") else "stores data securely"
    return (
        f'"This microapp transforms how {department} handles {subject}. '
        f"Instead of {before}, users get a streamlined experience that {outcome} "
        f'and {storage}."'
    )


__all__ = ["generate_pitch_points"]
