"""Structural invariant checks for generated CVUF documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Set, Tuple

from ..models import DocumentIssue
from .schema import (
    CHOICE_FIELD_TYPES,
    REQUIRED_ROOT_KEYS,
    ROOT_DEFAULTS,
    THEME_KEYS,
    UNIVERSAL_FIELD_KEYS,
)


@dataclass
class _IdentifierIndex:
    """Identifiers seen while walking the document, grouped by element kind."""

    first_seen: Dict[str, str] = field(default_factory=dict)
    steps: Set[str] = field(default_factory=set)
    blocks: Set[str] = field(default_factory=set)
    fields: Set[str] = field(default_factory=set)


class DocumentValidator:
    """Checks the invariants every importable CVUF document must satisfy."""

    def validate(self, document: Mapping[str, Any]) -> List[DocumentIssue]:
        """Return every invariant violation found in ``document``."""
        form = document.get("form") if isinstance(document, Mapping) else None
        if not isinstance(form, Mapping):
            return [DocumentIssue(path="form", message="Root 'form' object is missing")]

        issues: List[DocumentIssue] = []
        issues.extend(self._check_root(form))
        issues.extend(self._check_theme(form.get("theme")))

        steps = form.get("steps")
        if not isinstance(steps, list) or not steps:
            issues.append(DocumentIssue(path="form.steps", message="Document has no steps"))
            return issues

        index = _IdentifierIndex()
        for step_index, step in enumerate(steps):
            issues.extend(self._check_step(step, f"form.steps[{step_index}]", index))

        issues.extend(self._check_navigation(steps))
        issues.extend(self._check_step_targets(steps, index))
        issues.extend(self._check_rules(form.get("newRules"), index))
        return issues

    @staticmethod
    def _check_root(form: Mapping[str, Any]) -> Iterator[DocumentIssue]:
        for key in REQUIRED_ROOT_KEYS:
            if key not in form:
                yield DocumentIssue(path=f"form.{key}", message=f"Missing required root property '{key}'")
        for key, expected in ROOT_DEFAULTS.items():
            if key == "formVersion" or key not in form:
                continue
            if form[key] != expected:
                yield DocumentIssue(
                    path=f"form.{key}",
                    message=f"Expected {key}={expected!r}, found {form[key]!r}",
                )
        if "newRules" in form and not isinstance(form["newRules"], list):
            yield DocumentIssue(path="form.newRules", message="newRules must be a list")

    @staticmethod
    def _check_theme(theme: Any) -> Iterator[DocumentIssue]:
        if not isinstance(theme, Mapping):
            yield DocumentIssue(path="form.theme", message="Theme object is missing")
            return
        missing = [key for key in THEME_KEYS if key not in theme]
        if missing:
            yield DocumentIssue(
                path="form.theme",
                message=f"Theme is missing slots: {', '.join(missing)}",
            )

    def _check_step(self, step: Any, path: str, index: _IdentifierIndex) -> Iterator[DocumentIssue]:
        if not isinstance(step, Mapping):
            yield DocumentIssue(path=path, message="Step must be an object")
            return
        yield from self._register(step.get("identifier"), path, index, index.steps)

        blocks = step.get("blocks", [])
        if not isinstance(blocks, list):
            yield DocumentIssue(path=f"{path}.blocks", message="blocks must be a list")
            return
        for block_index, block in enumerate(blocks):
            block_path = f"{path}.blocks[{block_index}]"
            if not isinstance(block, Mapping):
                yield DocumentIssue(path=block_path, message="Block must be an object")
                continue
            yield from self._register(block.get("identifier"), block_path, index, index.blocks)
            block_hidden = block.get("isHiddenInRuntime") is True
            for field_path, item in iter_fields(block, block_path):
                yield from self._check_field(item, field_path, block_hidden, index)

    def _check_field(
        self,
        item: Any,
        path: str,
        block_hidden: bool,
        index: _IdentifierIndex,
    ) -> Iterator[DocumentIssue]:
        if not isinstance(item, Mapping):
            yield DocumentIssue(path=path, message="Field must be an object")
            return
        missing = [key for key in UNIVERSAL_FIELD_KEYS if key not in item]
        if missing:
            yield DocumentIssue(path=path, message=f"Field is missing properties: {', '.join(missing)}")
        yield from self._register(item.get("identifier"), path, index, index.fields)

        if item.get("type") in CHOICE_FIELD_TYPES and not _valid_items(item.get("items")):
            yield DocumentIssue(
                path=f"{path}.items",
                message=f"{item.get('type')} requires a non-empty list of label/value items",
            )
        if item.get("required") is True and (block_hidden or item.get("isHiddenInRuntime") is True):
            yield DocumentIssue(path=path, message="Hidden field must not be required")

    @staticmethod
    def _register(
        identifier: Any,
        path: str,
        index: _IdentifierIndex,
        bucket: Set[str],
    ) -> Iterator[DocumentIssue]:
        if not isinstance(identifier, str) or not identifier:
            yield DocumentIssue(path=f"{path}.identifier", message="Missing identifier")
            return
        first = index.first_seen.get(identifier)
        if first is not None:
            yield DocumentIssue(
                path=f"{path}.identifier",
                message=f"Duplicate identifier '{identifier}' (first used at {first})",
            )
            return
        index.first_seen[identifier] = path
        bucket.add(identifier)

    @staticmethod
    def _check_navigation(steps: List[Any]) -> Iterator[DocumentIssue]:
        first, last = steps[0], steps[-1]
        if isinstance(first, Mapping):
            buttons = first.get("buttonsConfig") if isinstance(first.get("buttonsConfig"), Mapping) else {}
            if buttons.get("isFirstNode") is not True:
                yield DocumentIssue(path="form.steps[0].buttonsConfig.isFirstNode", message="First step must set isFirstNode=true")
            back = buttons.get("back") if isinstance(buttons.get("back"), Mapping) else {}
            if back.get("isHidden") is not True:
                yield DocumentIssue(path="form.steps[0].buttonsConfig.back", message="First step must hide the back button")
        if isinstance(last, Mapping):
            last_path = f"form.steps[{len(steps) - 1}]"
            if last.get("hideFooter") is not True:
                yield DocumentIssue(path=f"{last_path}.hideFooter", message="Last step must set hideFooter=true")
            buttons = last.get("buttonsConfig") if isinstance(last.get("buttonsConfig"), Mapping) else {}
            if buttons.get("targetStep"):
                yield DocumentIssue(path=f"{last_path}.buttonsConfig.targetStep", message="Last step must not have a targetStep")

    @staticmethod
    def _check_step_targets(steps: List[Any], index: _IdentifierIndex) -> Iterator[DocumentIssue]:
        for step_index, step in enumerate(steps):
            if not isinstance(step, Mapping):
                continue
            path = f"form.steps[{step_index}]"
            buttons = step.get("buttonsConfig")
            target = buttons.get("targetStep") if isinstance(buttons, Mapping) else None
            if target and not _is_known(target, index.steps):
                yield DocumentIssue(path=f"{path}.buttonsConfig.targetStep", message=f"Unknown step '{target}'")
            blocks = step.get("blocks")
            if not isinstance(blocks, list):
                continue
            for block_index, block in enumerate(blocks):
                if not isinstance(block, Mapping):
                    continue
                for field_path, item in iter_fields(block, f"{path}.blocks[{block_index}]"):
                    if not isinstance(item, Mapping):
                        continue
                    selected = item.get("selectedStep")
                    if isinstance(selected, Mapping) and selected.get("identifier"):
                        if not _is_known(selected["identifier"], index.steps):
                            yield DocumentIssue(
                                path=f"{field_path}.selectedStep",
                                message=f"Unknown step '{selected['identifier']}'",
                            )

    @staticmethod
    def _check_rules(rules: Any, index: _IdentifierIndex) -> Iterator[DocumentIssue]:
        if not isinstance(rules, list):
            return
        for rule_index, rule in enumerate(rules):
            path = f"form.newRules[{rule_index}]"
            if not isinstance(rule, Mapping):
                yield DocumentIssue(path=path, message="Rule must be an object")
                continue
            actions = rule.get("action", [])
            if not isinstance(actions, list):
                yield DocumentIssue(path=f"{path}.action", message="Rule action must be a list")
                continue
            for action_index, action in enumerate(actions):
                action_path = f"{path}.action[{action_index}]"
                if not isinstance(action, Mapping):
                    yield DocumentIssue(path=action_path, message="Rule action must be an object")
                    continue
                checks: Tuple[Tuple[str, Set[str]], ...] = (
                    ("resultBlocks", index.blocks),
                    ("resultFields", index.fields),
                )
                for key, known in checks:
                    references = action.get(key) or []
                    if not isinstance(references, list):
                        yield DocumentIssue(path=f"{action_path}.{key}", message=f"{key} must be a list")
                        continue
                    for reference in references:
                        if not _is_known(reference, known):
                            yield DocumentIssue(path=f"{action_path}.{key}", message=f"Unknown reference '{reference}'")
                navigate_to = action.get("navigateTo")
                if navigate_to and not _is_known(navigate_to, index.steps):
                    yield DocumentIssue(path=f"{action_path}.navigateTo", message=f"Unknown step '{navigate_to}'")


def iter_fields(block: Mapping[str, Any], block_path: str) -> Iterator[Tuple[str, Any]]:
    rows = block.get("rows")
    if not isinstance(rows, list):
        return
    for row_index, row in enumerate(rows):
        fields = row.get("fields") if isinstance(row, Mapping) else None
        if not isinstance(fields, list):
            continue
        for field_index, item in enumerate(fields):
            yield f"{block_path}.rows[{row_index}].fields[{field_index}]", item


def _is_known(reference: Any, known: Set[str]) -> bool:
    return isinstance(reference, str) and reference in known


def _valid_items(items: Any) -> bool:
    if not isinstance(items, list) or not items:
        return False
    return all(isinstance(item, Mapping) and "label" in item and "value" in item for item in items)


__all__ = ["DocumentValidator", "iter_fields"]
