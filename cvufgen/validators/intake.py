"""Advisory consistency checks over the canonical intake request."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from ..logging import get_logger
from ..models import IntakeRequest, ValidationWarning
from .base import CombinationCheck, IntakeCheck, MissingDetailCheck

HIGH_VOLUME_TIER = "10000+"

DEFAULT_CHECKS: Tuple[IntakeCheck, ...] = (
    MissingDetailCheck(
        field="lookupDetails",
        message="Data lookup requested but no details provided",
        requested=lambda r: r.wants_lookup,
        detailed=lambda r: bool(r.lookup_details),
    ),
    MissingDetailCheck(
        field="languages",
        message="Multi-language requested but no languages selected",
        requested=lambda r: r.wants_multi_language,
        detailed=lambda r: bool(r.languages),
    ),
    MissingDetailCheck(
        field="crmSystem",
        message="CRM integration requested but no CRM system specified",
        requested=lambda r: r.has_action("crm"),
        detailed=lambda r: bool(r.crm_system),
    ),
    MissingDetailCheck(
        field="emailRecipients",
        message="Email notifications requested but no recipients specified",
        requested=lambda r: r.has_action("notification"),
        detailed=lambda r: bool(r.email_recipients),
    ),
    MissingDetailCheck(
        field="slackChannel",
        message="Slack notifications requested but no channel specified",
        requested=lambda r: r.has_action("slack"),
        detailed=lambda r: bool(r.slack_channel),
    ),
    MissingDetailCheck(
        field="ticketSystem",
        message="Ticket creation requested but no ticketing system specified",
        requested=lambda r: r.has_action("ticket"),
        detailed=lambda r: bool(r.ticket_system),
    ),
    MissingDetailCheck(
        field="approvalDetails",
        message="Approval workflow requested but no details provided",
        requested=lambda r: r.wants_approval,
        detailed=lambda r: bool(r.approval_details),
    ),
    MissingDetailCheck(
        field="branchingLogic",
        message="Conditional branching requested but no logic described",
        requested=lambda r: r.wants_branching,
        detailed=lambda r: bool(r.branching_logic),
    ),
    CombinationCheck(
        field="estimatedVolume",
        message="High volume with email notifications - consider batching strategy",
        applies=lambda r: r.estimated_volume == HIGH_VOLUME_TIER and r.has_action("notification"),
    ),
)


class ValidationEngine:
    """Runs every intake check in order and collects their warnings.

    Checks are independent: one failing never stops the next from running, and
    nothing here blocks generation.
    """

    def __init__(self, checks: Sequence[IntakeCheck] = DEFAULT_CHECKS) -> None:
        self.checks = tuple(checks)
        self.logger = get_logger("validators.intake")

    def validate(self, request: IntakeRequest) -> List[ValidationWarning]:
        """Return one warning per failing check, in check order."""
        warnings: List[ValidationWarning] = []
        for check in self.checks:
            warning = check.check(request)
            if warning is not None:
                warnings.append(warning)
        if warnings:
            self.logger.debug(
                "Intake produced %d warning(s): %s",
                len(warnings),
                ", ".join(warning.field for warning in warnings),
            )
        return warnings


__all__ = ["DEFAULT_CHECKS", "HIGH_VOLUME_TIER", "ValidationEngine"]
