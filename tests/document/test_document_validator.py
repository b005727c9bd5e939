"""Tests for CVUF structural invariant checks."""

from __future__ import annotations

import pytest

from cvufgen.document import DocumentValidator, SchemaGuard
from cvufgen.models import DocumentIssue


def _messages(document) -> list[str]:
    return [issue.message for issue in DocumentValidator().validate(document)]


def _details_fields(document) -> list:
    return document["form"]["steps"][1]["blocks"][0]["rows"][0]["fields"]


def test_valid_document_has_no_issues(document) -> None:
    assert DocumentValidator().validate(document) == []


def test_missing_form_is_reported() -> None:
    issues = DocumentValidator().validate({"steps": []})

    assert [issue.path for issue in issues] == ["form"]


def test_duplicate_identifiers_are_reported(document) -> None:
    _details_fields(document)[1]["identifier"] = "shorttext_name_001"

    messages = _messages(document)

    assert any("Duplicate identifier 'shorttext_name_001'" in message for message in messages)


def test_identifier_uniqueness_spans_element_kinds(document) -> None:
    document["form"]["steps"][2]["blocks"][0]["identifier"] = "step_welcome_001"

    assert any("Duplicate identifier 'step_welcome_001'" in message for message in _messages(document))


def test_dangling_references_are_reported(document) -> None:
    form = document["form"]
    form["steps"][1]["buttonsConfig"]["targetStep"] = "step_missing_999"
    form["newRules"][0]["action"][0]["resultBlocks"] = ["block_missing_001"]
    form["newRules"][0]["action"][0]["resultFields"] = ["step_thanks_003"]
    form["newRules"][0]["action"][0]["navigateTo"] = "block_details_001"
    form["steps"][0]["blocks"][0]["rows"][0]["fields"][1]["selectedStep"]["identifier"] = "nowhere"

    issues = DocumentValidator().validate(document)
    paths = {issue.path for issue in issues}

    assert "form.steps[1].buttonsConfig.targetStep" in paths
    assert "form.newRules[0].action[0].resultBlocks" in paths
    assert "form.newRules[0].action[0].resultFields" in paths
    assert "form.newRules[0].action[0].navigateTo" in paths
    assert "form.steps[0].blocks[0].rows[0].fields[1].selectedStep" in paths


def test_choice_fields_need_items(document) -> None:
    dropdown = _details_fields(document)[2]
    dropdown["items"] = []
    _details_fields(document)[0].update(type="radioInput")

    messages = _messages(document)

    assert "dropdownInput requires a non-empty list of label/value items" in messages
    assert "radioInput requires a non-empty list of label/value items" in messages


def test_navigation_shape_is_checked(document) -> None:
    steps = document["form"]["steps"]
    steps[0]["buttonsConfig"]["isFirstNode"] = False
    steps[0]["buttonsConfig"]["back"]["isHidden"] = False
    steps[-1]["hideFooter"] = False
    steps[-1]["buttonsConfig"]["targetStep"] = "step_welcome_001"

    messages = _messages(document)

    assert "First step must set isFirstNode=true" in messages
    assert "First step must hide the back button" in messages
    assert "Last step must set hideFooter=true" in messages
    assert "Last step must not have a targetStep" in messages


def test_hidden_fields_must_not_be_required(document) -> None:
    hidden_block = document["form"]["steps"][1]["blocks"][1]
    hidden_block["rows"][0]["fields"][0]["required"] = True
    _details_fields(document)[1].update(isHiddenInRuntime=True, required=True)

    messages = _messages(document)

    assert messages.count("Hidden field must not be required") == 2


def test_root_theme_and_field_keys_are_checked(document) -> None:
    form = document["form"]
    del form["formVersion"]
    form["direction"] = "rtl"
    del form["theme"]["neutral"]
    del _details_fields(document)[0]["integrationID"]

    messages = _messages(document)

    assert "Missing required root property 'formVersion'" in messages
    assert "Expected direction='ltr', found 'rtl'" in messages
    assert "Theme is missing slots: neutral" in messages
    assert "Field is missing properties: integrationID" in messages


def test_empty_steps_are_reported(document) -> None:
    document["form"]["steps"] = []

    assert "Document has no steps" in _messages(document)


def test_unhashable_references_do_not_crash(document) -> None:
    document["form"]["newRules"][0]["action"][0]["resultBlocks"] = [["nested"]]
    document["form"]["steps"][1]["buttonsConfig"]["targetStep"] = {"id": "x"}

    paths = {issue.path for issue in DocumentValidator().validate(document)}

    assert "form.newRules[0].action[0].resultBlocks" in paths
    assert "form.steps[1].buttonsConfig.targetStep" in paths


@pytest.mark.parametrize("blocks", [5, True, "blocks", {"identifier": "block_x"}])
def test_scalar_blocks_are_reported_not_raised(document, blocks) -> None:
    document["form"]["steps"][1]["blocks"] = blocks

    issues = DocumentValidator().validate(document)

    assert DocumentIssue(path="form.steps[1].blocks", message="blocks must be a list") in issues


def test_guard_returns_issues_for_scalar_blocks(document) -> None:
    document["form"]["steps"][1]["blocks"] = 5

    repaired, issues = SchemaGuard().enforce(document)

    assert repaired["form"]["steps"][1]["blocks"] == 5
    assert "form.steps[1].blocks" in {issue.path for issue in issues}


@pytest.mark.parametrize("actions", [None, 3, "hide"])
def test_scalar_rule_actions_are_reported(document, actions) -> None:
    document["form"]["newRules"][0]["action"] = actions

    paths = {issue.path for issue in DocumentValidator().validate(document)}

    assert "form.newRules[0].action" in paths
