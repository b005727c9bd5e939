"""Fixed shape of the CVUF document format."""

from __future__ import annotations

from typing import Dict, Tuple

FORM_VERSION = "10.4.40"

ROOT_DEFAULTS: Dict[str, object] = {
    "direction": "ltr",
    "templateType": 3,
    "stepperType": "Progress",
    "formVersion": FORM_VERSION,
}

REQUIRED_ROOT_KEYS: Tuple[str, ...] = (
    "formName",
    "title",
    "direction",
    "templateType",
    "stepperType",
    "formVersion",
    "steps",
    "theme",
    "newRules",
)

# Sixteen color slots plus the font.
DEFAULT_THEME: Dict[str, str] = {
    "primary": "#0891B2",
    "secondary": "#E0F2FE",
    "title": "#0F172A",
    "text": "#334155",
    "background": "#ffffff",
    "blockBackground": "#ffffff",
    "headerText": "#0F172A",
    "headerBackground": "#ffffff",
    "font": "Inter-Regular",
    "warning": "#F59E0B",
    "altBackground": "#F8FAFC",
    "danger": "#EF4444",
    "link": "#0891B2",
    "success": "#10B981",
    "dark": "#1E293B",
    "bright": "#FEF3C7",
    "neutral": "#E2E8F0",
}

THEME_KEYS: Tuple[str, ...] = tuple(DEFAULT_THEME)

CHOICE_FIELD_TYPES = frozenset({"dropdownInput", "radioInput", "checkboxInput"})

UNIVERSAL_FIELD_KEYS: Tuple[str, ...] = (
    "identifier",
    "integrationID",
    "type",
    "name",
    "width",
    "columnID",
)


__all__ = [
    "CHOICE_FIELD_TYPES",
    "DEFAULT_THEME",
    "FORM_VERSION",
    "REQUIRED_ROOT_KEYS",
    "ROOT_DEFAULTS",
    "THEME_KEYS",
    "UNIVERSAL_FIELD_KEYS",
]
