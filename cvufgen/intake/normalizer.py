"""Maps caller-defined intake keys onto the canonical IntakeRequest."""

from __future__ import annotations

import re
from typing import Any, Dict, Mapping, Optional, Tuple

from ..errors import InputShapeError
from ..models import CANONICAL_FIELDS, FLAG_FIELDS, SEQUENCE_FIELDS, IntakeRequest

_KEY_NOISE = re.compile(r"[^a-z0-9]")

# Alternative names seen from older intake forms and direct API callers.
_ALIASES: Dict[str, str] = {
    "name": "userName",
    "requesterName": "userName",
    "requestedBy": "userName",
    "email": "userEmail",
    "requesterEmail": "userEmail",
    "appName": "microappName",
    "formName": "microappName",
    "description": "microappDescription",
    "appDescription": "microappDescription",
    "department": "owningDepartment",
    "dept": "owningDepartment",
    "trigger": "triggerEvent",
    "process": "currentProcess",
    "branching": "hasBranching",
    "approval": "needsApproval",
    "saveProgress": "canSaveProgress",
    "actions": "submitActions",
    "integrations": "submitActions",
    "recipients": "emailRecipients",
    "crm": "crmSystem",
    "ticketing": "ticketSystem",
    "dataLookup": "needsDataLookup",
    "lookup": "needsDataLookup",
    "multiLanguage": "needsMultiLanguage",
    "compliance": "complianceRequirements",
    "branding": "brandingNotes",
    "volume": "estimatedVolume",
    "notes": "additionalNotes",
}


def _fold(key: str) -> str:
    return _KEY_NOISE.sub("", key.lower())


_CANONICAL_BY_FOLDED: Dict[str, str] = {_fold(key): key for key in CANONICAL_FIELDS}
_ALIAS_BY_FOLDED: Dict[str, str] = {_fold(alias): key for alias, key in _ALIASES.items()}


class InputNormalizer:
    """Renames and lightly coerces a raw intake payload.

    Keys are compared case-insensitively with separators ignored, so
    ``owning_department`` and ``Owning-Department`` both land on
    ``owningDepartment``. A canonical key always wins over an alias for the
    same field. Unknown keys are dropped.
    """

    def normalize(self, payload: Mapping[str, Any]) -> IntakeRequest:
        """Return the canonical request for ``payload``."""
        if not isinstance(payload, Mapping):
            raise InputShapeError(
                f"Intake payload must be a key/value mapping, got {type(payload).__name__}"
            )

        canonical: Dict[str, Any] = {}
        aliased: Dict[str, Any] = {}
        for raw_key, value in payload.items():
            if not isinstance(raw_key, str):
                continue
            key, is_alias = self._resolve_key(raw_key)
            if key is None:
                continue
            target = aliased if is_alias else canonical
            target.setdefault(key, value)

        merged = {**aliased, **canonical}
        values: Dict[str, Any] = {}
        for key, raw_value in merged.items():
            coerced = self._coerce(key, raw_value)
            if coerced is None:
                continue
            values[CANONICAL_FIELDS[key]] = coerced
        return IntakeRequest(**values)

    @staticmethod
    def _resolve_key(raw_key: str) -> Tuple[Optional[str], bool]:
        folded = _fold(raw_key)
        if folded in _CANONICAL_BY_FOLDED:
            return _CANONICAL_BY_FOLDED[folded], False
        if folded in _ALIAS_BY_FOLDED:
            return _ALIAS_BY_FOLDED[folded], True
        return None, False

    def _coerce(self, key: str, value: Any) -> Any:
        if key in SEQUENCE_FIELDS:
            items = self._as_sequence(value)
            return items or None
        if key in FLAG_FIELDS:
            if isinstance(value, bool):
                return value
            return self._as_text(value)
        return self._as_text(value)

    @staticmethod
    def _as_text(value: Any) -> Optional[str]:
        if value is None:
            return None
        if isinstance(value, str):
            stripped = value.strip()
            return stripped or None
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        if isinstance(value, bool):
            return "yes" if value else "no"
        if isinstance(value, (list, tuple)):
            joined = ", ".join(str(item).strip() for item in value if str(item).strip())
            return joined or None
        return str(value)

    @staticmethod
    def _as_sequence(value: Any) -> Tuple[str, ...]:
        if value is None:
            return ()
        if isinstance(value, str):
            parts = value.split(",")
        elif isinstance(value, (list, tuple)):
            parts = [str(item) for item in value if item is not None]
        else:
            parts = [str(value)]
        return tuple(part.strip() for part in parts if part.strip())


def normalize(payload: Mapping[str, Any]) -> IntakeRequest:
    """Module-level shortcut for ``InputNormalizer().normalize``."""
    return InputNormalizer().normalize(payload)


__all__ = ["InputNormalizer", "normalize"]
