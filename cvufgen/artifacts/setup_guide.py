"""Step-by-step setup guide for importing and launching a generated microapp."""

from __future__ import annotations

from typing import Any, List, Mapping

from ..models import IntakeRequest


def generate_setup_guide(request: IntakeRequest, document: Mapping[str, Any]) -> str:
    """Return the numbered markdown guide for ``request``.

    Screen names are read from the generated document so the guide matches
    what was actually produced.
    """
    lines: List[str] = ["## Setup Guide\n"]

    lines.append("### Step 1: Import CVUF")
    lines.append("1. Open CallVu Studio")
    lines.append("2. Click 'Create New Form' → 'Import'")
    lines.append("3. Paste the generated JSON")
    lines.append("4. Verify all screens imported correctly\n")

    lines.append("### Step 2: Review Screens")
    screens = step_names(document)
    if screens:
        lines.extend(f"{index}. {name}" for index, name in enumerate(screens, start=1))
    else:
        lines.append("- No screens were found in the generated document")
    lines.append("")

    lines.append("### Step 3: Configure Integrations")
    integrations = _integration_sections(request)
    if integrations:
        lines.extend(integrations)
    else:
        lines.append("- No integrations requested; submissions are stored in CallVu only")

    lines.append("\n### Step 4: Test")
    lines.append("1. Use Preview mode to test all paths")
    lines.append("2. Submit test entries")
    lines.append("3. Verify integrations fire correctly")
    lines.append("4. Check email/Slack notifications arrive")

    lines.append("\n### Step 5: Go Live")
    lines.append("1. Set form to 'Published'")
    lines.append("2. Configure access permissions")
    lines.append("3. Get shareable link or embed code")

    return "\n".join(lines)


def step_names(document: Mapping[str, Any]) -> List[str]:
    """Return the display name of every step, in order."""
    form = document.get("form") if isinstance(document, Mapping) else None
    steps = form.get("steps") if isinstance(form, Mapping) else None
    if not isinstance(steps, list):
        return []
    names: List[str] = []
    for step in steps:
        if not isinstance(step, Mapping):
            continue
        name = step.get("stepName") or step.get("text") or step.get("identifier")
        if name:
            names.append(str(name))
    return names


def _integration_sections(request: IntakeRequest) -> List[str]:
    lines: List[str] = []
    if request.has_action("notification"):
        lines.append("\n**Email Notifications:**")
        lines.append("- Go to Settings → Integrations → Email")
        lines.append("- Configure SMTP or select email provider")
        lines.append(f"- Set recipients: {request.email_recipients or '[configure recipients]'}")
    if request.has_action("slack"):
        lines.append("\n**Slack Notifications:**")
        lines.append("- Go to Settings → Integrations → Webhooks")
        lines.append("- Add the Slack incoming webhook URL")
        lines.append(f"- Post to channel: {request.slack_channel or '[configure channel]'}")
    if request.has_action("crm"):
        lines.append(f"\n**{request.crm_system or 'CRM'} Integration:**")
        lines.append("- Go to Settings → Integrations → CRM")
        lines.append("- Add API credentials")
        lines.append("- Map form fields to CRM fields")
    if request.has_action("ticket"):
        lines.append(f"\n**{request.ticket_system or 'Ticketing'} Integration:**")
        lines.append("- Go to Settings → Integrations → API Actions")
        lines.append("- Add the ticketing API credentials")
        lines.append("- Map form fields to ticket fields")
    if request.wants_lookup:
        lines.append("\n**Data Lookup:**")
        lines.append("- Go to Settings → API Actions")
        lines.append("- Configure lookup endpoint")
        lines.append("- Map trigger field and response fields")
    if request.wants_approval:
        lines.append("\n**Approval Workflow:**")
        lines.append("- Go to Settings → Workflow")
        lines.append(f"- Define approvers: {request.approval_details or '[configure approvers]'}")
    if request.wants_multi_language:
        languages = ", ".join(request.languages) or "[select languages]"
        lines.append("\n**Translations:**")
        lines.append("- Go to Settings → Languages")
        lines.append(f"- Add translations for: {languages}")
    return lines


__all__ = ["generate_setup_guide", "step_names"]
