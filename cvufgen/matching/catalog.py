"""Static catalog of known form archetypes."""

from __future__ import annotations

from typing import Tuple

from ..models import TemplateCatalogEntry

TEMPLATE_CATALOG: Tuple[TemplateCatalogEntry, ...] = (
    TemplateCatalogEntry(
        id="customer_complaint",
        keywords=("complaint", "issue", "problem", "customer service", "support ticket"),
        department="Customer Service",
    ),
    TemplateCatalogEntry(
        id="feedback_survey",
        keywords=("feedback", "survey", "satisfaction", "nps", "rating"),
        department="Customer Service",
    ),
    TemplateCatalogEntry(
        id="pto_request",
        keywords=("pto", "vacation", "time off", "leave", "absence"),
        department="HR",
    ),
    TemplateCatalogEntry(
        id="expense_report",
        keywords=("expense", "reimbursement", "receipt", "travel"),
        department="Finance",
    ),
    TemplateCatalogEntry(
        id="onboarding",
        keywords=("onboarding", "new hire", "new employee", "orientation"),
        department="HR",
    ),
    TemplateCatalogEntry(
        id="incident_report",
        keywords=("incident", "accident", "safety", "injury"),
        department="Operations",
    ),
    TemplateCatalogEntry(
        id="maintenance_request",
        keywords=("maintenance", "repair", "fix", "broken", "facilities"),
        department="Operations",
    ),
    TemplateCatalogEntry(
        id="vendor_registration",
        keywords=("vendor", "supplier", "registration", "onboard"),
        department="Finance",
    ),
    TemplateCatalogEntry(
        id="contact_form",
        keywords=("contact", "inquiry", "general", "question"),
        department="Marketing",
    ),
    TemplateCatalogEntry(
        id="quote_request",
        keywords=("quote", "pricing", "estimate", "proposal"),
        department="Sales",
    ),
)


__all__ = ["TEMPLATE_CATALOG"]
