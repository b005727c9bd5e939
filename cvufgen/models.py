"""Core data models shared across cvufgen components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

FlagValue = Union[str, bool, None]

_AFFIRMATIVE = {"yes", "true", "on"}

# Canonical intake key -> IntakeRequest attribute.
CANONICAL_FIELDS: Dict[str, str] = {
    "userName": "user_name",
    "userEmail": "user_email",
    "microappName": "microapp_name",
    "microappDescription": "microapp_description",
    "userType": "user_type",
    "owningDepartment": "owning_department",
    "triggerEvent": "trigger_event",
    "currentProcess": "current_process",
    "needsContactInfo": "needs_contact_info",
    "needsIdentifiers": "needs_identifiers",
    "needsDates": "needs_dates",
    "needsChoices": "needs_choices",
    "needsRichInput": "needs_rich_input",
    "needsFinancial": "needs_financial",
    "customDropdowns": "custom_dropdowns",
    "otherFields": "other_fields",
    "hasBranching": "has_branching",
    "branchingLogic": "branching_logic",
    "needsApproval": "needs_approval",
    "approvalDetails": "approval_details",
    "canSaveProgress": "can_save_progress",
    "submitActions": "submit_actions",
    "emailRecipients": "email_recipients",
    "slackChannel": "slack_channel",
    "crmSystem": "crm_system",
    "ticketSystem": "ticket_system",
    "otherIntegrations": "other_integrations",
    "needsDataLookup": "needs_data_lookup",
    "lookupDetails": "lookup_details",
    "needsMultiLanguage": "needs_multi_language",
    "languages": "languages",
    "complianceRequirements": "compliance_requirements",
    "brandingNotes": "branding_notes",
    "estimatedVolume": "estimated_volume",
    "additionalNotes": "additional_notes",
}

SEQUENCE_FIELDS = frozenset({"submitActions", "languages", "complianceRequirements"})

FLAG_FIELDS = frozenset(
    {
        "needsContactInfo",
        "needsIdentifiers",
        "needsDates",
        "needsChoices",
        "needsRichInput",
        "needsFinancial",
        "hasBranching",
        "needsApproval",
        "canSaveProgress",
        "needsDataLookup",
        "needsMultiLanguage",
    }
)


def is_affirmative(value: object) -> bool:
    """Return True for data-collection answers that mean "yes"."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in _AFFIRMATIVE
    return False


def is_yes(value: object) -> bool:
    """Return True when a workflow answer is literally "yes" (any case)."""
    if isinstance(value, bool):
        return value
    return isinstance(value, str) and value.strip().lower() == "yes"


@dataclass(frozen=True)
class IntakeRequest:
    """Canonical, typed view of one intake questionnaire submission."""

    user_name: Optional[str] = None
    user_email: Optional[str] = None
    microapp_name: Optional[str] = None
    microapp_description: Optional[str] = None
    user_type: Optional[str] = None
    owning_department: Optional[str] = None
    trigger_event: Optional[str] = None
    current_process: Optional[str] = None

    needs_contact_info: FlagValue = None
    needs_identifiers: FlagValue = None
    needs_dates: FlagValue = None
    needs_choices: FlagValue = None
    needs_rich_input: FlagValue = None
    needs_financial: FlagValue = None
    custom_dropdowns: Optional[str] = None
    other_fields: Optional[str] = None

    has_branching: FlagValue = None
    branching_logic: Optional[str] = None
    needs_approval: FlagValue = None
    approval_details: Optional[str] = None
    can_save_progress: FlagValue = None

    submit_actions: Tuple[str, ...] = ()
    email_recipients: Optional[str] = None
    slack_channel: Optional[str] = None
    crm_system: Optional[str] = None
    ticket_system: Optional[str] = None
    other_integrations: Optional[str] = None

    needs_data_lookup: FlagValue = None
    lookup_details: Optional[str] = None

    needs_multi_language: FlagValue = None
    languages: Tuple[str, ...] = ()
    compliance_requirements: Tuple[str, ...] = ()
    branding_notes: Optional[str] = None
    estimated_volume: Optional[str] = None
    additional_notes: Optional[str] = None

    @property
    def wants_branching(self) -> bool:
        return is_yes(self.has_branching)

    @property
    def wants_approval(self) -> bool:
        return is_yes(self.needs_approval)

    @property
    def wants_lookup(self) -> bool:
        return is_yes(self.needs_data_lookup)

    @property
    def wants_multi_language(self) -> bool:
        return is_yes(self.needs_multi_language)

    @property
    def wants_save_progress(self) -> bool:
        return is_yes(self.can_save_progress)

    def has_action(self, action: str) -> bool:
        """Return True when the post-submit action was requested."""
        wanted = action.lower()
        return any(item.lower() == wanted for item in self.submit_actions)

    def to_payload(self) -> Dict[str, Any]:
        """Return present fields keyed by their canonical intake names."""
        payload: Dict[str, Any] = {}
        for key, attr in CANONICAL_FIELDS.items():
            value = getattr(self, attr)
            if key in SEQUENCE_FIELDS:
                if value:
                    payload[key] = list(value)
            elif value is not None:
                payload[key] = value
        return payload


@dataclass(frozen=True)
class TemplateCatalogEntry:
    """Known form archetype used for heuristic matching."""

    id: str
    keywords: Tuple[str, ...]
    department: str


@dataclass(frozen=True)
class TemplateMatch:
    """Best catalog archetype for a request and its heuristic score."""

    template_id: Optional[str] = None
    score: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"templateId": self.template_id, "score": self.score}


@dataclass(frozen=True)
class ValidationWarning:
    """Advisory note about an inconsistent or incomplete intake answer."""

    field: str
    message: str
    severity: str = "warning"

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message, "severity": self.severity}


@dataclass(frozen=True)
class DocumentIssue:
    """A structural invariant the generated document does not satisfy."""

    path: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"path": self.path, "message": self.message}


@dataclass
class GenerationResult:
    """Everything produced for one successful generation request."""

    request_id: str
    document: Dict[str, Any]
    document_text: str
    dependencies: str
    setup_guide: str
    pitch_points: str
    build_time: str
    generation_time_ms: int
    template_match: TemplateMatch
    warnings: List[ValidationWarning] = field(default_factory=list)
    issues: List[DocumentIssue] = field(default_factory=list)

    def meta(self) -> Dict[str, Any]:
        return {
            "requestId": self.request_id,
            "generationTimeMs": self.generation_time_ms,
            "templateMatch": self.template_match.to_dict(),
            "warnings": [warning.to_dict() for warning in self.warnings],
        }

    def to_response(self) -> Dict[str, Any]:
        """Return the response body keyed by the forms runtime integration IDs."""
        return {
            "generatedCVUF": self.document_text,
            "generatedDependencies": self.dependencies,
            "generatedSetupGuide": self.setup_guide,
            "generatedPitchPoints": self.pitch_points,
            "generatedBuildTime": self.build_time,
            "_meta": self.meta(),
        }


__all__ = [
    "CANONICAL_FIELDS",
    "DocumentIssue",
    "FLAG_FIELDS",
    "GenerationResult",
    "IntakeRequest",
    "SEQUENCE_FIELDS",
    "TemplateCatalogEntry",
    "TemplateMatch",
    "ValidationWarning",
    "is_affirmative",
    "is_yes",
]
