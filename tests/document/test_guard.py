"""Tests for document repair and strict enforcement."""

from __future__ import annotations

import logging

import pytest

from cvufgen.document import DEFAULT_THEME, FORM_VERSION, SchemaGuard
from cvufgen.errors import MalformedDocument


def test_valid_document_passes_unchanged(document) -> None:
    repaired, issues = SchemaGuard().enforce(document)

    assert issues == []
    assert repaired == document
    assert repaired is not document


def test_repair_fills_root_defaults_and_names(document) -> None:
    form = document["form"]
    for key in ("direction", "templateType", "stepperType", "formVersion", "newRules", "title"):
        del form[key]

    repaired = SchemaGuard().repair(document)["form"]

    assert repaired["direction"] == "ltr"
    assert repaired["templateType"] == 3
    assert repaired["stepperType"] == "Progress"
    assert repaired["formVersion"] == FORM_VERSION
    assert repaired["newRules"] == []
    assert repaired["title"] == "PTO Request"


def test_repair_uses_fallback_name_when_both_missing(document) -> None:
    del document["form"]["formName"]
    del document["form"]["title"]

    repaired = SchemaGuard().repair(document, fallback_name="Expense Report")["form"]

    assert repaired["formName"] == "Expense Report"
    assert repaired["title"] == "Expense Report"


def test_repair_fills_theme_without_overwriting(document) -> None:
    document["form"]["theme"] = {"primary": "#123456"}

    theme = SchemaGuard().repair(document)["form"]["theme"]

    assert theme["primary"] == "#123456"
    assert set(theme) == set(DEFAULT_THEME)


def test_repair_enforces_navigation_shape(document) -> None:
    steps = document["form"]["steps"]
    steps[0]["buttonsConfig"]["isFirstNode"] = False
    steps[0]["buttonsConfig"]["back"]["isHidden"] = False
    steps[1]["buttonsConfig"]["isFirstNode"] = True
    steps[-1]["hideFooter"] = False
    steps[-1]["buttonsConfig"]["targetStep"] = "step_welcome_001"

    repaired, issues = SchemaGuard().enforce(document)
    repaired_steps = repaired["form"]["steps"]

    assert issues == []
    assert repaired_steps[0]["buttonsConfig"]["isFirstNode"] is True
    assert repaired_steps[0]["buttonsConfig"]["back"]["isHidden"] is True
    assert repaired_steps[1]["buttonsConfig"]["isFirstNode"] is False
    assert repaired_steps[-1]["hideFooter"] is True
    assert repaired_steps[-1]["buttonsConfig"]["targetStep"] == ""


def test_repair_clears_required_on_hidden_fields(document) -> None:
    hidden_field = document["form"]["steps"][1]["blocks"][1]["rows"][0]["fields"][0]
    hidden_field["required"] = True

    repaired, issues = SchemaGuard().enforce(document)

    assert issues == []
    assert repaired["form"]["steps"][1]["blocks"][1]["rows"][0]["fields"][0]["required"] is False
    assert hidden_field["required"] is True


def test_repair_leaves_unfixable_issues_for_validation(document, caplog) -> None:
    document["form"]["steps"][1]["blocks"][0]["rows"][0]["fields"][2]["items"] = []

    with caplog.at_level(logging.WARNING, logger="cvufgen"):
        repaired, issues = SchemaGuard().enforce(document)

    assert [issue.path for issue in issues] == ["form.steps[1].blocks[0].rows[0].fields[2].items"]
    assert repaired["form"]["steps"][1]["blocks"][0]["rows"][0]["fields"][2]["items"] == []
    assert "structural issue" in caplog.text


def test_strict_mode_raises_with_issues(document) -> None:
    document["form"]["steps"][2]["blocks"][0]["identifier"] = "block_details_001"

    with pytest.raises(MalformedDocument) as excinfo:
        SchemaGuard(strict=True).enforce(document)

    assert excinfo.value.issues
    assert "Duplicate identifier" in excinfo.value.issues[0].message


def test_repair_requires_form_object() -> None:
    with pytest.raises(MalformedDocument):
        SchemaGuard().repair({"steps": []})
