"""Shared constants for generation prompts."""

from __future__ import annotations

NOT_SPECIFIED = "Not specified"
NONE_LABEL = "None"
STORE_ONLY = "Store only"
DEFAULT_BRANDING = "Use default CallVu theme"

# Minimum match score before the archetype is suggested to the model.
HINT_THRESHOLD = 70

SYSTEM_ROLE = "You are an expert CallVu microapp builder. You generate valid, importable CVUF JSON files."

CRITICAL_INSTRUCTIONS: tuple[str, ...] = (
    "Output ONLY valid minified JSON - no markdown, no explanation, no code blocks",
    'The JSON must start with {"form": and end with }}',
    "Every identifier must be unique",
    "Every dropdown/radio/checkbox MUST have a non-empty items array",
    "Follow the exact field structures from the reference",
    "Include complete theme object",
    "First step: isFirstNode=true, back button hidden",
    "Last step: hideFooter=true",
)

DELIVERABLES: tuple[str, ...] = (
    "Welcome/intro screen",
    "All necessary data collection screens (group logically)",
    "Review/confirmation screen if complex",
    "Thank you/completion screen",
    "Appropriate conditional logic rules",
    "All required integrationIDs for API mapping",
)

__all__ = [
    "CRITICAL_INSTRUCTIONS",
    "DEFAULT_BRANDING",
    "DELIVERABLES",
    "HINT_THRESHOLD",
    "NONE_LABEL",
    "NOT_SPECIFIED",
    "STORE_ONLY",
    "SYSTEM_ROLE",
]
