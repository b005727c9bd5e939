"""Tests for advisory intake validation."""

from __future__ import annotations

import pytest

from cvufgen.intake import normalize
from cvufgen.models import ValidationWarning
from cvufgen.validators import DEFAULT_CHECKS, CombinationCheck, ValidationEngine


def _fields(payload: dict) -> list[str]:
    return [warning.field for warning in ValidationEngine().validate(normalize(payload))]


def test_empty_request_has_no_warnings() -> None:
    assert _fields({}) == []


def test_fully_detailed_request_has_no_warnings() -> None:
    payload = {
        "needsDataLookup": "yes",
        "lookupDetails": "employee directory",
        "needsMultiLanguage": "yes",
        "languages": ["Spanish"],
        "submitActions": ["crm", "notification", "slack", "ticket"],
        "crmSystem": "Salesforce",
        "emailRecipients": "hr@example.com",
        "slackChannel": "#hr",
        "ticketSystem": "Jira",
        "needsApproval": "yes",
        "approvalDetails": "manager",
        "hasBranching": "yes",
        "branchingLogic": "extended leave shows notes",
        "estimatedVolume": "2000-10000",
    }
    assert _fields(payload) == []


def test_missing_approval_details_yields_exactly_one_warning() -> None:
    warnings = ValidationEngine().validate(normalize({"needsApproval": "yes"}))

    assert warnings == [
        ValidationWarning(
            field="approvalDetails",
            message="Approval workflow requested but no details provided",
        )
    ]
    assert warnings[0].severity == "warning"


def test_pto_scenario_has_no_warnings() -> None:
    payload = {
        "microappName": "PTO Request",
        "microappDescription": "time off vacation leave",
        "owningDepartment": "HR",
        "hasBranching": "no",
        "needsApproval": "yes",
        "approvalDetails": "manager",
    }
    assert _fields(payload) == []


def test_every_failing_check_reports_in_order() -> None:
    payload = {
        "needsDataLookup": "yes",
        "needsMultiLanguage": "Yes",
        "submitActions": ["crm", "notification", "slack", "ticket"],
        "needsApproval": "YES",
        "hasBranching": "yes",
        "estimatedVolume": "10000+",
    }
    assert _fields(payload) == [
        "lookupDetails",
        "languages",
        "crmSystem",
        "emailRecipients",
        "slackChannel",
        "ticketSystem",
        "approvalDetails",
        "branchingLogic",
        "estimatedVolume",
    ]


def test_high_volume_warning_needs_notification_action() -> None:
    assert _fields({"estimatedVolume": "10000+", "submitActions": ["crm"], "crmSystem": "HubSpot"}) == []
    assert _fields(
        {"estimatedVolume": "10000+", "submitActions": ["notification"], "emailRecipients": "ops@example.com"}
    ) == ["estimatedVolume"]


@pytest.mark.parametrize("answer", ["no", "", None, "maybe", "true", "y", "1", "on"])
def test_non_affirmative_answers_do_not_warn(answer) -> None:
    assert _fields({"needsApproval": answer, "hasBranching": answer, "needsDataLookup": answer}) == []


@pytest.mark.parametrize("answer", ["yes", "YES", " Yes ", True])
def test_workflow_yes_is_case_insensitive(answer) -> None:
    assert _fields({"needsDataLookup": answer}) == ["lookupDetails"]


def test_custom_checks_are_supported() -> None:
    check = CombinationCheck(
        field="userEmail",
        message="Requester email missing",
        applies=lambda request: not request.user_email,
    )
    engine = ValidationEngine((check, *DEFAULT_CHECKS))

    warnings = engine.validate(normalize({"needsApproval": "yes"}))

    assert [warning.field for warning in warnings] == ["userEmail", "approvalDetails"]
