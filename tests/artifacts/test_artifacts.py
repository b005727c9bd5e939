"""Tests for derived human-readable artifacts."""

from __future__ import annotations

import itertools

import pytest

from cvufgen.artifacts import (
    estimate_build_time,
    estimate_hours,
    generate_dependencies,
    generate_pitch_points,
    generate_setup_guide,
)
from cvufgen.artifacts.estimate import EFFORT_TIERS, ENTERPRISE_TIER
from cvufgen.intake import normalize

_TIER_ORDER = [label for _, label in EFFORT_TIERS] + [ENTERPRISE_TIER]

_FACTORS = {
    "branching": {"hasBranching": "yes"},
    "approval": {"needsApproval": "yes"},
    "integrations": {"submitActions": ["notification", "crm", "slack"]},
    "lookup": {"needsDataLookup": "yes"},
    "languages": {"needsMultiLanguage": "yes"},
    "compliance": {"complianceRequirements": ["HIPAA"]},
}


def test_pto_scenario_is_simple() -> None:
    request = normalize(
        {
            "microappName": "PTO Request",
            "microappDescription": "time off vacation leave",
            "owningDepartment": "HR",
            "hasBranching": "no",
            "needsApproval": "yes",
            "approvalDetails": "manager",
        }
    )

    assert estimate_hours(request) == 3
    assert estimate_build_time(request) == "2-3 hours (Simple)"


@pytest.mark.parametrize(
    ("payload", "hours", "label"),
    [
        ({}, 2, "2-3 hours (Simple)"),
        ({"hasBranching": "yes", "needsApproval": "yes"}, 5, "4-6 hours (Moderate)"),
        ({"needsMultiLanguage": "yes", "languages": "es, fr, de, it, pt"}, 7, "1-2 days (Complex)"),
        (
            {
                "hasBranching": "yes",
                "needsApproval": "yes",
                "submitActions": ["a", "b", "c"],
                "needsDataLookup": "yes",
                "needsMultiLanguage": "yes",
                "complianceRequirements": ["SOC2"],
            },
            12,
            "2-3 days (Enterprise)",
        ),
    ],
)
def test_estimate_tiers(payload, hours, label) -> None:
    request = normalize(payload)

    assert estimate_hours(request) == hours
    assert estimate_build_time(request) == label


def test_unlisted_languages_count_as_two() -> None:
    assert estimate_hours(normalize({"needsMultiLanguage": "yes"})) == 4


def test_estimate_is_monotonic_in_complexity_factors() -> None:
    names = list(_FACTORS)
    for size in range(len(names)):
        for combo in itertools.combinations(names, size):
            base = {}
            for name in combo:
                base.update(_FACTORS[name])
            base_tier = _TIER_ORDER.index(estimate_build_time(normalize(base)))
            for extra in set(names) - set(combo):
                extended = dict(base, **_FACTORS[extra])
                extended_tier = _TIER_ORDER.index(estimate_build_time(normalize(extended)))
                assert extended_tier >= base_tier, (combo, extra)


def test_dependencies_follow_requested_features() -> None:
    request = normalize(
        {
            "submitActions": ["notification", "slack", "crm", "ticket"],
            "crmSystem": "Salesforce",
            "needsDataLookup": "yes",
            "needsMultiLanguage": "yes",
            "languages": ["Spanish"],
            "complianceRequirements": ["GDPR", "HIPAA"],
            "needsApproval": "yes",
        }
    )

    lines = generate_dependencies(request).splitlines()

    assert lines == [
        "✅ CallVu Studio account with import permissions",
        "📧 Email service configuration (SMTP or SendGrid)",
        "💬 Slack webhook URL for notifications",
        "🔗 Salesforce API credentials and field mapping",
        "🎫 Ticketing system API integration",
        "🔍 Data lookup API endpoint configuration",
        "🌐 Translation files for: Spanish",
        "📋 Compliance review for: GDPR, HIPAA",
        "👥 Approval workflow configuration in CallVu",
    ]


def test_dependencies_minimum_is_platform_account() -> None:
    assert generate_dependencies(normalize({})) == "✅ CallVu Studio account with import permissions"


def test_setup_guide_lists_screens_from_document(document) -> None:
    request = normalize({"submitActions": ["notification"], "emailRecipients": "hr@example.com"})

    guide = generate_setup_guide(request, document)

    assert guide.startswith("## Setup Guide")
    assert "### Step 2: Review Screens\n1. Welcome\n2. Details\n3. Thank You" in guide
    assert "**Email Notifications:**" in guide
    assert "- Set recipients: hr@example.com" in guide
    assert "### Step 5: Go Live" in guide


def test_setup_guide_sections_for_each_integration(document) -> None:
    request = normalize(
        {
            "submitActions": ["slack", "crm", "ticket"],
            "crmSystem": "HubSpot",
            "ticketSystem": "Jira",
            "needsDataLookup": "yes",
            "needsApproval": "yes",
            "needsMultiLanguage": "yes",
            "languages": ["French"],
        }
    )

    guide = generate_setup_guide(request, document)

    for heading in (
        "**Slack Notifications:**",
        "**HubSpot Integration:**",
        "**Jira Integration:**",
        "**Data Lookup:**",
        "**Approval Workflow:**",
        "**Translations:**",
    ):
        assert heading in guide
    assert "**Email Notifications:**" not in guide


def test_setup_guide_without_steps_or_integrations() -> None:
    guide = generate_setup_guide(normalize({}), {"form": {"steps": []}})

    assert "No screens were found" in guide
    assert "No integrations requested" in guide


def test_pitch_points_and_talk_track() -> None:
    request = normalize(
        {
            "microappName": "Expense Report",
            "owningDepartment": "Finance",
            "currentProcess": "Manual",
            "estimatedVolume": "10000+",
            "submitActions": ["notification", "crm"],
            "complianceRequirements": ["SOX"],
            "canSaveProgress": "yes",
            "needsMultiLanguage": "yes",
            "languages": ["Spanish", "French"],
        }
    )

    pitch = generate_pitch_points(request)

    assert pitch.startswith("## Why This Microapp Matters")
    assert "**Eliminates manual process**" in pitch
    assert "**High-volume ready**" in pitch
    assert "Automatically syncs to notification, crm" in pitch
    assert "Built with SOX requirements in mind" in pitch
    assert "**User-friendly**" in pitch
    assert "Supports 2 languages" in pitch
    assert (
        '"This microapp transforms how Finance handles expense report. Instead of manual processes, '
        "users get a streamlined experience that automatically notifies stakeholders and syncs "
        'directly to your CRM."'
    ) in pitch


def test_pitch_points_for_minimal_request() -> None:
    pitch = generate_pitch_points(normalize({"currentProcess": "Spreadsheets"}))

    assert "**Replaces spreadsheet chaos**" in pitch
    assert "captures everything needed and stores data securely" in pitch
    assert "Connected ecosystem" not in pitch
