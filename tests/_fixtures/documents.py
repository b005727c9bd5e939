"""Reusable CVUF documents for document and pipeline tests."""

from __future__ import annotations

import copy
import json
from typing import Any, Dict

from cvufgen.document.schema import DEFAULT_THEME


def _field(kind: str, identifier: str, **extra: Any) -> Dict[str, Any]:
    item: Dict[str, Any] = {
        "type": kind,
        "name": f"editor.fields.{kind.lower()}",
        "identifier": identifier,
        "integrationID": identifier,
        "label": identifier.replace("_", " ").title(),
        "width": "full",
        "columnID": 0,
    }
    item.update(extra)
    return item


def _step(identifier: str, name: str, blocks: list, *, target: str = "", first: bool = False, last: bool = False) -> Dict[str, Any]:
    return {
        "stepName": name,
        "text": name,
        "identifier": identifier,
        "hideFooter": last,
        "buttonsConfig": {
            "back": {"className": "", "isHidden": first, "text": "Back"},
            "next": {"className": "", "isHidden": False, "text": "Continue"},
            "targetStep": target,
            "isFirstNode": first,
        },
        "blocks": blocks,
        "style": {"alignment": ""},
    }


def _block(identifier: str, fields: list, *, hidden: bool = False) -> Dict[str, Any]:
    return {
        "blockName": identifier,
        "identifier": identifier,
        "isHiddenInRuntime": hidden,
        "icon": "",
        "rows": [{"fields": fields}],
        "type": "regular",
        "style": {"alignment": "center", "size": "full"},
    }


_VALID_DOCUMENT: Dict[str, Any] = {
    "form": {
        "formName": "PTO Request",
        "title": "PTO Request",
        "direction": "ltr",
        "templateType": 3,
        "stepperType": "Progress",
        "formVersion": "10.4.40",
        "theme": dict(DEFAULT_THEME),
        "newRules": [
            {
                "id": "rule_show_notes_001",
                "ruleName": "Show notes for long leave",
                "type": "visibility",
                "condition": {"expression": "leaveType == 'extended'", "isRegex": False},
                "action": [
                    {
                        "id": "action_show_notes_001",
                        "visible": True,
                        "resultBlocks": ["block_notes_001"],
                        "resultFields": ["textarea_notes_001"],
                        "navigateTo": "",
                    }
                ],
            }
        ],
        "steps": [
            _step(
                "step_welcome_001",
                "Welcome",
                [
                    _block(
                        "block_welcome_001",
                        [
                            _field("paragraph", "paragraph_welcome_001", editedParagraph="<h2>Request time off</h2>"),
                            _field(
                                "smartButton",
                                "smartbutton_start_001",
                                selectedStep={"text": "Details", "value": 1, "identifier": "step_details_002"},
                            ),
                        ],
                    )
                ],
                target="step_details_002",
                first=True,
            ),
            _step(
                "step_details_002",
                "Details",
                [
                    _block(
                        "block_details_001",
                        [
                            _field("shortText", "shorttext_name_001", required=True),
                            _field("emailInput", "email_contact_001"),
                            _field(
                                "dropdownInput",
                                "dropdown_leave_type_001",
                                items=[
                                    {"label": "Vacation", "value": "vacation"},
                                    {"label": "Extended", "value": "extended"},
                                ],
                            ),
                            _field("dateInput", "date_start_001"),
                        ],
                    ),
                    _block(
                        "block_notes_001",
                        [_field("textarea", "textarea_notes_001", required=False)],
                        hidden=True,
                    ),
                ],
                target="step_thanks_003",
            ),
            _step(
                "step_thanks_003",
                "Thank You",
                [_block("block_thanks_001", [_field("paragraph", "paragraph_thanks_001")])],
                last=True,
            ),
        ],
    }
}


def valid_document() -> Dict[str, Any]:
    """Return a fresh copy of a document satisfying every structural invariant."""
    return copy.deepcopy(_VALID_DOCUMENT)


def valid_document_text() -> str:
    return json.dumps(valid_document(), separators=(",", ":"))
