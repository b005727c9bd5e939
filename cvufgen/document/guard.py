"""Repair and verification of parsed CVUF documents."""

from __future__ import annotations

import copy
from typing import Any, Dict, List, Mapping, MutableMapping, Optional, Tuple

from ..errors import MalformedDocument
from ..logging import get_logger
from ..models import DocumentIssue
from .schema import DEFAULT_THEME, ROOT_DEFAULTS
from .validator import DocumentValidator, iter_fields


class SchemaGuard:
    """Repairs what can be repaired safely, then validates what remains.

    Repairs only fill absent values or enforce the fixed navigation shape of
    the first and last steps and the required-versus-hidden rule. Anything
    else (duplicate identifiers, dangling references, empty choice lists) is
    reported as a ``DocumentIssue``. In strict mode any issue is fatal.
    """

    def __init__(self, validator: DocumentValidator | None = None, *, strict: bool = False) -> None:
        self.validator = validator or DocumentValidator()
        self.strict = strict
        self.logger = get_logger("document.guard")

    def enforce(
        self,
        document: Mapping[str, Any],
        *,
        fallback_name: Optional[str] = None,
    ) -> Tuple[Dict[str, Any], List[DocumentIssue]]:
        """Return the repaired document and the issues left after repair."""
        repaired = self.repair(document, fallback_name=fallback_name)
        issues = self.validate(repaired)
        if issues:
            self.logger.warning(
                "Generated document has %d structural issue(s); first: %s (%s)",
                len(issues),
                issues[0].message,
                issues[0].path,
            )
            if self.strict:
                raise MalformedDocument(
                    f"Generated CVUF violates {len(issues)} structural invariant(s)",
                    issues,
                )
        return repaired, issues

    def validate(self, document: Mapping[str, Any]) -> List[DocumentIssue]:
        return self.validator.validate(document)

    def repair(
        self,
        document: Mapping[str, Any],
        *,
        fallback_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Return a repaired deep copy of ``document``."""
        repaired: Dict[str, Any] = copy.deepcopy(dict(document))
        form = repaired.get("form")
        if not isinstance(form, dict):
            raise MalformedDocument("Generated CVUF is missing the root 'form' object")

        fixes: List[str] = []
        for key, default in ROOT_DEFAULTS.items():
            if key not in form:
                form[key] = default
                fixes.append(key)
        self._repair_names(form, fallback_name, fixes)
        if not isinstance(form.get("newRules"), list):
            form["newRules"] = []
            fixes.append("newRules")
        self._repair_theme(form, fixes)

        steps = form.get("steps")
        if isinstance(steps, list) and steps:
            self._repair_navigation(steps, fixes)
            self._repair_hidden_required(steps, fixes)

        if fixes:
            self.logger.debug("Repaired generated document: %s", ", ".join(fixes))
        return repaired

    @staticmethod
    def _repair_names(form: MutableMapping[str, Any], fallback_name: Optional[str], fixes: List[str]) -> None:
        name = form.get("formName") or form.get("title") or fallback_name
        if not name:
            return
        for key in ("formName", "title"):
            if not form.get(key):
                form[key] = name
                fixes.append(key)

    @staticmethod
    def _repair_theme(form: MutableMapping[str, Any], fixes: List[str]) -> None:
        theme = form.get("theme")
        if not isinstance(theme, dict):
            form["theme"] = dict(DEFAULT_THEME)
            fixes.append("theme")
            return
        for key, value in DEFAULT_THEME.items():
            if key not in theme:
                theme[key] = value
                fixes.append(f"theme.{key}")

    @staticmethod
    def _repair_navigation(steps: List[Any], fixes: List[str]) -> None:
        for position, step in enumerate(steps):
            if not isinstance(step, dict):
                continue
            buttons = step.get("buttonsConfig")
            if not isinstance(buttons, dict):
                buttons = step["buttonsConfig"] = {}
            is_first = position == 0
            if buttons.get("isFirstNode") is not is_first:
                buttons["isFirstNode"] = is_first
                fixes.append(f"steps[{position}].isFirstNode")
            if is_first:
                back = buttons.get("back")
                if not isinstance(back, dict):
                    back = buttons["back"] = {"className": "", "text": ""}
                if back.get("isHidden") is not True:
                    back["isHidden"] = True
                    fixes.append("steps[0].back")

        last = steps[-1]
        if isinstance(last, dict):
            if last.get("hideFooter") is not True:
                last["hideFooter"] = True
                fixes.append(f"steps[{len(steps) - 1}].hideFooter")
            buttons = last["buttonsConfig"]
            if buttons.get("targetStep"):
                buttons["targetStep"] = ""
                fixes.append(f"steps[{len(steps) - 1}].targetStep")

    @staticmethod
    def _repair_hidden_required(steps: List[Any], fixes: List[str]) -> None:
        for step in steps:
            if not isinstance(step, dict) or not isinstance(step.get("blocks"), list):
                continue
            for block in step["blocks"]:
                if not isinstance(block, dict):
                    continue
                block_hidden = block.get("isHiddenInRuntime") is True
                for path, item in iter_fields(block, str(block.get("identifier", "block"))):
                    if not isinstance(item, dict) or item.get("required") is not True:
                        continue
                    if block_hidden or item.get("isHiddenInRuntime") is True:
                        item["required"] = False
                        fixes.append(f"{path}.required")


__all__ = ["SchemaGuard"]
