"""Chat (Slack block kit) notification payload."""

from __future__ import annotations

from typing import Any, Dict, Sequence

from ..models import IntakeRequest, TemplateMatch, ValidationWarning

DESCRIPTION_LIMIT = 500


def build_chat_payload(
    request: IntakeRequest,
    *,
    request_id: str,
    template_match: TemplateMatch,
    generation_time_ms: int,
    warnings: Sequence[ValidationWarning] = (),
) -> Dict[str, Any]:
    """Return the block payload announcing a new microapp request."""
    description = request.microapp_description or ""
    if len(description) > DESCRIPTION_LIMIT:
        description = description[:DESCRIPTION_LIMIT] + "..."
    integrations = ", ".join(request.submit_actions) or "None specified"
    compliance = ", ".join(request.compliance_requirements) or "None specified"
    if template_match.template_id:
        template_text = f"{template_match.template_id} ({template_match.score}% match)"
    else:
        template_text = "Generated from scratch"
    warning_text = ""
    if warnings:
        bullets = "\n".join(f"• {warning.message}" for warning in warnings)
        warning_text = f"\n\n⚠️ *Warnings:*\n{bullets}"

    return {
        "blocks": [
            {
                "type": "header",
                "text": {"type": "plain_text", "text": "🆕 New Microapp Request", "emoji": True},
            },
            {
                "type": "section",
                "fields": [
                    _field("Microapp", request.microapp_name),
                    _field("Requested by", request.user_name),
                    _field("Department", request.owning_department),
                    _field("Volume", request.estimated_volume),
                ],
            },
            {
                "type": "section",
                "text": {"type": "mrkdwn", "text": f"*Description:*\n{description}"},
            },
            {
                "type": "section",
                "fields": [_field("Integrations", integrations), _field("Compliance", compliance)],
            },
            {
                "type": "section",
                "fields": [
                    _field("Template Match", template_text),
                    _field("Generation Time", f"{generation_time_ms}ms"),
                ],
            },
            {
                "type": "context",
                "elements": [
                    {
                        "type": "mrkdwn",
                        "text": f"Request ID: {request_id} | Email: {request.user_email or 'n/a'}{warning_text}",
                    }
                ],
            },
        ]
    }


def _field(label: str, value: Any) -> Dict[str, str]:
    return {"type": "mrkdwn", "text": f"*{label}:*\n{value if value else 'Not specified'}"}


__all__ = ["build_chat_payload"]
