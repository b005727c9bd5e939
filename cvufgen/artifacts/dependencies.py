"""Dependency checklist for standing up a generated microapp."""

from __future__ import annotations

from typing import List

from ..models import IntakeRequest


def generate_dependencies(request: IntakeRequest) -> str:
    """Return the newline-separated checklist of what the build needs."""
    deps: List[str] = ["✅ CallVu Studio account with import permissions"]

    if request.has_action("notification"):
        deps.append("📧 Email service configuration (SMTP or SendGrid)")
    if request.has_action("slack"):
        deps.append("💬 Slack webhook URL for notifications")
    if request.has_action("crm"):
        deps.append(f"🔗 {request.crm_system or 'CRM'} API credentials and field mapping")
    if request.has_action("ticket"):
        deps.append(f"🎫 {request.ticket_system or 'Ticketing system'} API integration")
    if request.wants_lookup:
        deps.append("🔍 Data lookup API endpoint configuration")
    if request.wants_multi_language:
        languages = ", ".join(request.languages) or "selected languages"
        deps.append(f"🌐 Translation files for: {languages}")
    if request.compliance_requirements:
        deps.append(f"📋 Compliance review for: {', '.join(request.compliance_requirements)}")
    if request.wants_approval:
        deps.append("👥 Approval workflow configuration in CallVu")

    return "\n".join(deps)


__all__ = ["generate_dependencies"]
