"""Best-effort outbound collaborators (chat, sheet log, email)."""

from .base import (
    BestEffortDispatcher,
    Collaborator,
    CollaboratorError,
    NoOpCollaborator,
    WebhookCollaborator,
)
from .email import EmailCollaborator, build_email_message
from .factory import Collaborators, build_collaborators
from .sheets import build_sheet_record
from .slack import build_chat_payload

__all__ = [
    "BestEffortDispatcher",
    "Collaborator",
    "CollaboratorError",
    "Collaborators",
    "EmailCollaborator",
    "NoOpCollaborator",
    "WebhookCollaborator",
    "build_chat_payload",
    "build_collaborators",
    "build_email_message",
    "build_sheet_record",
]
